"""SCAFFOLD-MANIFEST.yml parser.

Manifest format::

    steps:
      - run: npm init -y
      - prompt: Set up a README describing this project

Each step is a mapping with exactly one of ``run`` (a shell command executed
in the target folder) or ``prompt`` (text handed to the agent CLI as a single
argument). The whole document is validated before any step can run. Keys
other than ``run`` and ``prompt`` are rejected, not ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from aidd.scaffold.errors import ManifestParseError
from aidd.scaffold.types import ManifestStep

STEP_KINDS = ("run", "prompt")


def parse_manifest(content: str) -> tuple[ManifestStep, ...]:
    """Parse manifest text into an ordered tuple of steps.

    Raises:
        ManifestParseError: If the YAML is invalid or a step is malformed
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ManifestParseError(f"Invalid YAML: {exc}") from exc

    if data is None:
        return ()
    if not isinstance(data, dict):
        raise ManifestParseError(
            f"Manifest must be a mapping with a 'steps' list, got {type(data).__name__}"
        )

    raw_steps = data.get("steps")
    if raw_steps is None:
        return ()
    if not isinstance(raw_steps, list):
        raise ManifestParseError(
            f"'steps' must be a list, got {type(raw_steps).__name__}"
        )

    return tuple(_parse_step(index, raw) for index, raw in enumerate(raw_steps, start=1))


def load_manifest(manifest_path: Path) -> tuple[ManifestStep, ...]:
    """Read and parse a manifest file."""
    return parse_manifest(manifest_path.read_text(encoding="utf-8"))


def _parse_step(index: int, raw: Any) -> ManifestStep:
    if not isinstance(raw, dict):
        raise ManifestParseError(
            f"Step {index} must be a mapping with 'run' or 'prompt', got {type(raw).__name__}"
        )

    unknown = sorted(str(key) for key in raw if key not in STEP_KINDS)
    if unknown:
        raise ManifestParseError(f"Step {index} has unknown keys: {unknown}")

    kinds = [kind for kind in STEP_KINDS if kind in raw]
    if len(kinds) != 1:
        raise ManifestParseError(
            f"Step {index} must define exactly one of 'run' or 'prompt'"
        )

    kind = kinds[0]
    value = raw[kind]
    if not isinstance(value, str) or not value.strip():
        raise ManifestParseError(f"Step {index} '{kind}' must be a non-empty string")

    return ManifestStep(kind=kind, value=value)
