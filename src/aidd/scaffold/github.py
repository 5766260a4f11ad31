"""GitHub release lookup and credential scoping."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import httpx

from aidd.config import GITHUB_TOKEN_ENV
from aidd.scaffold.errors import ReleaseRateLimitError, ScaffoldNetworkError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "aidd-scaffold-installer"

# Only these hosts ever see the token; release tarballs may redirect to mirrors.
GITHUB_HOSTNAMES = frozenset({"api.github.com", "github.com", "codeload.github.com"})


def is_github_host(url: str) -> bool:
    hostname = urlparse(url).hostname
    return hostname is not None and hostname.lower() in GITHUB_HOSTNAMES


def github_auth_headers(url: str, token: str | None) -> dict[str, str]:
    """Return an Authorization header only for GitHub hosts and a non-empty token."""
    if token and is_github_host(url):
        return {"Authorization": f"Bearer {token}"}
    return {}


def latest_release_url(owner: str, repo: str) -> str:
    return f"{GITHUB_API_URL}/repos/{owner}/{repo}/releases/latest"


def resolve_latest_release(
    owner: str,
    repo: str,
    *,
    token: str | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Return the tarball URL of the latest release of ``owner/repo``.

    Args:
        owner: Repository owner
        repo: Repository name
        token: Optional GitHub token sent as a bearer credential
        client: Optional httpx client (a short-lived one is created otherwise)

    Returns:
        The release ``tarball_url``

    Raises:
        ReleaseRateLimitError: If the API answers 403
        ScaffoldNetworkError: On any other failure
    """
    api_url = latest_release_url(owner, repo)
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
        **github_auth_headers(api_url, token),
    }

    logger.debug("Looking up latest release: %s", api_url)
    try:
        if client is None:
            with httpx.Client(follow_redirects=True) as owned_client:
                response = owned_client.get(api_url, headers=headers)
        else:
            response = client.get(api_url, headers=headers)
    except httpx.HTTPError as exc:
        raise ScaffoldNetworkError(
            f"Failed to reach GitHub API for {owner}/{repo}: {exc}"
        ) from exc

    if response.status_code == 403:
        raise ReleaseRateLimitError(
            f"GitHub API rate limit exceeded while resolving {owner}/{repo}. "
            f"Set {GITHUB_TOKEN_ENV} to authenticate and raise the limit."
        )
    if not response.is_success:
        raise ScaffoldNetworkError(
            f"GitHub API returned {response.status_code} for {api_url}. "
            f"If {owner}/{repo} is a private repository, set {GITHUB_TOKEN_ENV}."
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise ScaffoldNetworkError(
            f"GitHub API returned invalid JSON for {api_url}: {exc}"
        ) from exc

    tarball_url = payload.get("tarball_url") if isinstance(payload, dict) else None
    if not tarball_url:
        raise ScaffoldNetworkError(
            f"Latest release of {owner}/{repo} has no tarball_url in the GitHub API response."
        )
    return str(tarball_url)
