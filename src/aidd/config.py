"""Environment snapshot and per-project configuration for aidd.

Environment variables are read once, at the CLI entry point, into an
``AiddEnvironment`` that is passed down to the resolver. Project settings are
persisted as a JSON object in ``aidd.config.json`` in the working directory.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "aidd.config.json"

GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
CREATE_URI_ENV = "AIDD_CUSTOM_CREATE_URI"

CREATE_URI_KEY = "create-uri"

# Settings accepted by `aidd set`, mapped to the env var that overrides them.
KNOWN_SETTINGS: dict[str, str] = {
    CREATE_URI_KEY: CREATE_URI_ENV,
}


@dataclass(frozen=True)
class AiddEnvironment:
    """Values sourced from the process environment."""

    github_token: str | None = None
    create_uri: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AiddEnvironment:
        """Build the snapshot from ``environ`` (defaults to ``os.environ``)."""
        source = os.environ if environ is None else environ
        return cls(
            github_token=(source.get(GITHUB_TOKEN_ENV) or "").strip() or None,
            create_uri=(source.get(CREATE_URI_ENV) or "").strip() or None,
        )


def default_config_path(cwd: Path | None = None) -> Path:
    return (cwd or Path.cwd()) / CONFIG_FILENAME


def read_config(config_file: Path | None = None) -> dict[str, Any]:
    """Load the project config.

    A missing, unreadable or malformed file reads as an empty mapping; the
    config is advisory and must never block scaffolding.

    Args:
        config_file: Path to the config file (defaults to ./aidd.config.json)

    Returns:
        Parsed config mapping
    """
    path = config_file or default_config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Ignoring unreadable config at %s: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        logger.debug("Ignoring non-object config at %s", path)
        return {}
    return data


def write_config(
    updates: Mapping[str, Any],
    config_file: Path | None = None,
) -> dict[str, Any]:
    """Merge ``updates`` into the project config and persist it.

    Existing keys are overwritten, untouched keys are preserved. Write
    failures propagate.

    Returns:
        The merged config mapping
    """
    path = config_file or default_config_path()
    merged = {**read_config(path), **updates}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(merged, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return merged
