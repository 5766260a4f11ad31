"""`aidd create` flow: resolve a scaffold and run it in a new folder."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from aidd.scaffold.resolver import resolve_extension
from aidd.scaffold.runner import DEFAULT_AGENT, run_manifest
from aidd.scaffold.types import CreateArgs, CreateResult, ResolvedPaths

# http:// is deliberately absent: it is rejected later as an insecure source.
_SOURCE_URI_RE = re.compile(r"^(https|file)://", re.IGNORECASE)

CLEANUP_COMMAND = "aidd scaffold-cleanup"


def resolve_create_args(
    type_or_folder: str | None,
    folder: str | None = None,
    *,
    cwd: Path | None = None,
) -> CreateArgs | None:
    """Disambiguate ``create [type] <folder>``.

    Examples::

        create scaffold-example my-project  -> type="scaffold-example", folder="my-project"
        create my-project                   -> type=None, folder="my-project"
        create                              -> None

    A single argument that looks like a source URI also yields None: the
    user most likely forgot the folder, and a directory named after a
    mangled URL is never what they want.
    """
    if not type_or_folder:
        return None

    if folder is None and _SOURCE_URI_RE.match(type_or_folder):
        return None

    if folder is None:
        scaffold_type, resolved_folder = None, type_or_folder
    else:
        scaffold_type, resolved_folder = type_or_folder, folder

    folder_path = ((cwd or Path.cwd()) / resolved_folder).resolve()
    return CreateArgs(type=scaffold_type, folder=resolved_folder, folder_path=folder_path)


def run_create(
    *,
    folder: Path,
    type: str | None = None,
    agent: str = DEFAULT_AGENT,
    resolve_fn: Callable[..., ResolvedPaths] = resolve_extension,
    run_manifest_fn: Callable[..., None] = run_manifest,
    **resolve_kwargs,
) -> CreateResult:
    """Create ``folder``, resolve the scaffold and execute its manifest.

    Errors from resolution or step execution propagate unchanged.
    """
    folder_path = folder.resolve()
    folder_path.mkdir(parents=True, exist_ok=True)

    paths = resolve_fn(type, folder=folder_path, **resolve_kwargs)

    run_manifest_fn(
        manifest_path=paths.manifest_path,
        extension_js_path=paths.extension_js_path,
        folder=folder_path,
        agent=agent,
    )

    cleanup_tip = f"{CLEANUP_COMMAND} {folder_path}" if paths.downloaded else None
    return CreateResult(success=True, folder_path=folder_path, cleanup_tip=cleanup_tip)
