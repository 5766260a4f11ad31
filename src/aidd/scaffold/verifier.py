"""Static verification of a resolved scaffold."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from aidd.scaffold.errors import ManifestParseError
from aidd.scaffold.manifest import load_manifest
from aidd.scaffold.paths import EXTENSION_RELATIVE_PATH, MANIFEST_FILENAME
from aidd.scaffold.resolver import resolve_extension
from aidd.scaffold.types import ResolvedPaths, VerifyResult


def verify_scaffold(manifest_path: Path) -> VerifyResult:
    """Check a manifest before any of its steps run.

    A manifest with no steps is only valid when ``bin/extension.js`` sits next
    to it, since the extension then carries all of the behaviour.
    """
    errors: list[str] = []

    if not manifest_path.is_file():
        errors.append(f"{MANIFEST_FILENAME} not found at expected path: {manifest_path}")
        return VerifyResult(valid=False, errors=errors)

    try:
        steps = load_manifest(manifest_path)
    except (ManifestParseError, OSError, UnicodeDecodeError) as exc:
        errors.append(f"Invalid manifest: {exc}")
        return VerifyResult(valid=False, errors=errors)

    if not steps:
        extension_path = manifest_path.parent / EXTENSION_RELATIVE_PATH
        if not extension_path.exists():
            errors.append("Manifest contains no steps; scaffold would do nothing")

    return VerifyResult(valid=not errors, errors=errors)


def run_verify_scaffold(
    type: str | None = None,
    *,
    folder: Path | None = None,
    resolve_fn: Callable[..., ResolvedPaths] = resolve_extension,
    verify_fn: Callable[[Path], VerifyResult] = verify_scaffold,
    **resolve_kwargs,
) -> VerifyResult:
    """Resolve ``type`` and verify its manifest.

    README output is suppressed; only validation feedback matters here.
    Resolution errors propagate to the caller.
    """
    resolve_kwargs["log"] = lambda _message: None
    paths = resolve_fn(type, folder=folder or Path.cwd(), **resolve_kwargs)
    return verify_fn(paths.manifest_path)
