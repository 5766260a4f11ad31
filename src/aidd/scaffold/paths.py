"""Artifact path layout and the named-scaffold path guard."""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import unquote, urlparse

from aidd.scaffold.errors import ScaffoldValidationError
from aidd.scaffold.types import ResolvedPaths

SCAFFOLDS_DIRNAME = "scaffolds"

MANIFEST_FILENAME = "SCAFFOLD-MANIFEST.yml"
EXTENSION_RELATIVE_PATH = Path("bin") / "extension.js"
README_FILENAME = "README.md"

WORK_DIRNAME = ".aidd"
DOWNLOAD_DIR = Path(WORK_DIRNAME) / "scaffold"


def scaffold_paths(scaffold_dir: Path, *, downloaded: bool = False) -> ResolvedPaths:
    """Return the artifact paths inside a scaffold directory."""
    return ResolvedPaths(
        extension_js_path=scaffold_dir / EXTENSION_RELATIVE_PATH,
        manifest_path=scaffold_dir / MANIFEST_FILENAME,
        readme_path=scaffold_dir / README_FILENAME,
        downloaded=downloaded,
    )


def scaffolds_root(package_root: Path) -> Path:
    return package_root / SCAFFOLDS_DIRNAME


def download_dir(folder: Path) -> Path:
    """Scoped directory that receives a remote scaffold for ``folder``."""
    return folder / DOWNLOAD_DIR


def resolve_named(name: str, package_root: Path) -> ResolvedPaths:
    """Resolve a bundled scaffold by name, refusing anything outside the root.

    The check is lexical so a rejected name never touches the filesystem.

    Raises:
        ScaffoldValidationError: If ``name`` points at the root or escapes it
    """
    root = Path(os.path.normpath(os.path.abspath(scaffolds_root(package_root))))
    candidate = Path(os.path.normpath(os.path.join(root, name)))
    try:
        relative = os.path.relpath(candidate, root)
    except ValueError:
        # Different drive on Windows.
        relative = str(candidate)

    if relative in ("", "."):
        raise ScaffoldValidationError(
            f"Invalid scaffold type {name!r}: it resolves to the scaffolds root "
            "itself, not to a scaffold. Pass a scaffold name such as 'scaffold-example'."
        )
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise ScaffoldValidationError(
            f"Invalid scaffold type {name!r}: it resolves outside the scaffolds "
            f"directory ({root}). Scaffold names must not contain '..' segments."
        )
    if os.path.isabs(relative):
        raise ScaffoldValidationError(
            f"Invalid scaffold type {name!r}: it resolves to an absolute path "
            f"outside the scaffolds directory ({root})."
        )

    return scaffold_paths(candidate)


def resolve_file_uri(uri: str) -> ResolvedPaths:
    """Resolve a ``file://`` URI to the local scaffold directory it names."""
    parsed = urlparse(uri)
    if parsed.netloc not in ("", "localhost"):
        raise ScaffoldValidationError(
            f"Unsupported file URI host in {uri}: only local paths (file:///path) are allowed."
        )
    local_path = unquote(parsed.path)
    if not local_path:
        raise ScaffoldValidationError(f"File URI {uri} does not contain a path.")
    return scaffold_paths(Path(local_path))
