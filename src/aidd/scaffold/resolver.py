"""Resolve a scaffold identifier to its manifest, extension and README."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from rich.console import Console

from aidd.config import AiddEnvironment, read_config
from aidd.scaffold.download import download_and_extract
from aidd.scaffold.errors import (
    ReleaseRateLimitError,
    ScaffoldError,
    ScaffoldNetworkError,
    ScaffoldValidationError,
)
from aidd.scaffold.github import resolve_latest_release
from aidd.scaffold.paths import (
    MANIFEST_FILENAME,
    download_dir,
    resolve_file_uri,
    resolve_named,
    scaffold_paths,
)
from aidd.scaffold.source import classify_source, resolve_effective_type
from aidd.scaffold.trust import ConfirmFn, confirm_remote, default_confirm
from aidd.scaffold.types import ResolvedPaths, ScaffoldSource, SourceKind

logger = logging.getLogger(__name__)
console = Console()

PACKAGE_ROOT = Path(__file__).resolve().parent.parent

DownloadFn = Callable[[str, Path], None]
ResolveReleaseFn = Callable[[str, str], str]
LogFn = Callable[[str], None]
ReadConfigFn = Callable[[], Mapping[str, Any]]


def resolve_extension(
    type: str | None = None,
    *,
    folder: Path,
    package_root: Path = PACKAGE_ROOT,
    confirm: ConfirmFn = default_confirm,
    download: DownloadFn | None = None,
    resolve_release: ResolveReleaseFn | None = None,
    log: LogFn = console.out,
    read_config: ReadConfigFn = read_config,
    env: AiddEnvironment | None = None,
) -> ResolvedPaths:
    """Resolve a scaffold identifier to concrete artifact paths.

    Args:
        type: Scaffold name, file:// URI or https:// URL (None for the default chain)
        folder: Target project folder; remote scaffolds land in <folder>/.aidd/scaffold
        package_root: Directory holding the bundled ``scaffolds/`` tree
        confirm: Trust prompt for remote sources
        download: Fetch-and-extract callable ``(url, dest)``
        resolve_release: ``(owner, repo) -> tarball_url`` for bare GitHub repos
        log: Receives the README text when one exists
        read_config: Loads the project config
        env: Environment snapshot (read from os.environ when omitted)

    Returns:
        ResolvedPaths for the scaffold

    Raises:
        ScaffoldValidationError: Insecure URL, traversal, or missing manifest
        ScaffoldCancelledError: The user declined the remote trust prompt
        ScaffoldNetworkError: Release lookup or download failed
    """
    environment = env if env is not None else AiddEnvironment.from_env()
    if download is None:
        download = _default_download(environment)
    if resolve_release is None:
        resolve_release = _default_resolve_release(environment)

    config = {} if type else read_config()
    effective_type = resolve_effective_type(type, environment, config)
    source = classify_source(effective_type)
    logger.debug("Scaffold source %r classified as %s", effective_type, source.kind.value)

    if source.kind is SourceKind.INSECURE:
        raise ScaffoldValidationError(
            f"Refusing insecure scaffold URL {source.value}: remote scaffolds must use https://."
        )

    if source.is_remote:
        paths = _resolve_remote(
            source,
            folder=folder,
            confirm=confirm,
            download=download,
            resolve_release=resolve_release,
        )
    elif source.kind is SourceKind.FILE_URI:
        paths = resolve_file_uri(source.value)
    else:
        paths = resolve_named(source.value, package_root)

    if not paths.manifest_path.is_file():
        if paths.downloaded:
            _remove_download_dir(folder)
        raise ScaffoldValidationError(
            f"{MANIFEST_FILENAME} not found at {paths.manifest_path}. "
            f"Check that the scaffold source ({effective_type}) contains a {MANIFEST_FILENAME}."
        )

    if paths.readme_path.is_file():
        log("\n" + paths.readme_path.read_text(encoding="utf-8", errors="replace"))

    return paths


def _resolve_remote(
    source: ScaffoldSource,
    *,
    folder: Path,
    confirm: ConfirmFn,
    download: DownloadFn,
    resolve_release: ResolveReleaseFn,
) -> ResolvedPaths:
    confirm_remote(source.value, confirm)

    archive_url = source.value
    if source.kind is SourceKind.BARE_REPO:
        try:
            archive_url = resolve_release(source.owner, source.repo)
        except ReleaseRateLimitError:
            raise
        except Exception as exc:
            raise ScaffoldNetworkError(
                f"Failed to resolve latest release for {source.value}: {exc}"
            ) from exc
        logger.debug("Resolved %s to release tarball %s", source.value, archive_url)

    scaffold_dir = download_dir(folder)
    if scaffold_dir.exists():
        shutil.rmtree(scaffold_dir)
    scaffold_dir.mkdir(parents=True)

    try:
        download(archive_url, scaffold_dir)
    except Exception as exc:
        _remove_download_dir(folder)
        if isinstance(exc, ScaffoldError):
            raise
        raise ScaffoldNetworkError(
            f"Failed to download scaffold from {archive_url}: {exc}"
        ) from exc

    return scaffold_paths(scaffold_dir, downloaded=True)


def _remove_download_dir(folder: Path) -> None:
    scaffold_dir = download_dir(folder)
    if scaffold_dir.exists():
        shutil.rmtree(scaffold_dir)


def _default_download(environment: AiddEnvironment) -> DownloadFn:
    def download(url: str, dest: Path) -> None:
        download_and_extract(url, dest, token=environment.github_token)

    return download


def _default_resolve_release(environment: AiddEnvironment) -> ResolveReleaseFn:
    def resolve_release(owner: str, repo: str) -> str:
        return resolve_latest_release(owner, repo, token=environment.github_token)

    return resolve_release
