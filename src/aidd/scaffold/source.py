"""Scaffold identifier classification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aidd.config import CREATE_URI_KEY, AiddEnvironment
from aidd.scaffold.types import ScaffoldSource, SourceKind

DEFAULT_SCAFFOLD_TYPE = "next-shadcn"

GITHUB_URL_PREFIX = "https://github.com/"


def resolve_effective_type(
    type: str | None,
    env: AiddEnvironment,
    config: Mapping[str, Any],
) -> str:
    """Pick the scaffold identifier to use.

    Precedence: explicit argument, AIDD_CUSTOM_CREATE_URI, the project
    config ``create-uri`` value, then the built-in default.
    """
    if type:
        return type
    if env.create_uri:
        return env.create_uri
    configured = config.get(CREATE_URI_KEY)
    if isinstance(configured, str) and configured.strip():
        return configured.strip()
    return DEFAULT_SCAFFOLD_TYPE


def classify_source(identifier: str) -> ScaffoldSource:
    """Classify ``identifier`` into one of the SourceKind shapes."""
    if identifier.startswith("http://"):
        return ScaffoldSource(kind=SourceKind.INSECURE, value=identifier)

    if identifier.startswith("https://"):
        repo_ref = _parse_bare_repo(identifier)
        if repo_ref is not None:
            owner, repo = repo_ref
            return ScaffoldSource(
                kind=SourceKind.BARE_REPO,
                value=identifier,
                owner=owner,
                repo=repo,
            )
        return ScaffoldSource(kind=SourceKind.HTTP_URI, value=identifier)

    if identifier.startswith("file://"):
        return ScaffoldSource(kind=SourceKind.FILE_URI, value=identifier)

    return ScaffoldSource(kind=SourceKind.NAMED, value=identifier)


def _parse_bare_repo(url: str) -> tuple[str, str] | None:
    if not url.startswith(GITHUB_URL_PREFIX):
        return None

    remainder = url[len(GITHUB_URL_PREFIX):]
    if remainder.endswith("/"):
        remainder = remainder[:-1]

    segments = remainder.split("/")
    if len(segments) != 2 or not all(segments):
        return None
    return segments[0], segments[1]
