"""Download a scaffold tarball and extract it with the system tar."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import httpx

from aidd.scaffold.github import github_auth_headers

logger = logging.getLogger(__name__)

# Release archives wrap everything in one root directory (org-repo-sha/).
TAR_ARGS = ("-xz", "--strip-components=1")


def fetch_archive(
    url: str,
    *,
    token: str | None = None,
    client: httpx.Client | None = None,
) -> bytes:
    """Fetch ``url`` into memory; scaffold archives are small.

    Raises:
        RuntimeError: On a non-success status
        httpx.HTTPError: On transport failure
    """
    headers = github_auth_headers(url, token)
    if client is None:
        with httpx.Client(follow_redirects=True) as owned_client:
            response = owned_client.get(url, headers=headers)
    else:
        response = client.get(url, headers=headers)

    if not response.is_success:
        raise RuntimeError(f"HTTP {response.status_code} downloading scaffold from {url}")

    logger.debug("Downloaded %d bytes from %s", len(response.content), url)
    return response.content


def extract_archive(archive: bytes, dest: Path, *, source: str = "archive") -> None:
    """Pipe ``archive`` into ``tar`` and extract into ``dest``.

    tar's own diagnostics go straight to the caller's terminal.

    Raises:
        RuntimeError: If tar cannot be started, its stdin breaks, or it exits non-zero
    """
    argv = ["tar", *TAR_ARGS, "-C", str(dest)]
    try:
        process = subprocess.Popen(argv, stdin=subprocess.PIPE)
    except OSError as exc:
        raise RuntimeError(f"Could not start tar to extract {source}: {exc}") from exc

    stdin = process.stdin
    write_error: OSError | None = None
    try:
        stdin.write(archive)
        stdin.flush()
    except OSError as exc:
        write_error = exc
    try:
        stdin.close()
    except OSError as exc:
        write_error = write_error or exc
    returncode = process.wait()

    if returncode != 0:
        raise RuntimeError(f"tar exited with code {returncode} extracting {source}")
    if write_error is not None:
        raise RuntimeError(f"Failed writing {source} to tar: {write_error}") from write_error


def download_and_extract(
    url: str,
    dest: Path,
    *,
    token: str | None = None,
    client: httpx.Client | None = None,
) -> None:
    """Download the tarball at ``url`` and extract it into ``dest``.

    ``dest`` must already exist and be empty.
    """
    archive = fetch_archive(url, token=token, client=client)
    extract_archive(archive, dest, source=url)
