"""Scaffold resolution and manifest execution."""

from aidd.scaffold.cleanup import scaffold_cleanup
from aidd.scaffold.create import resolve_create_args, run_create
from aidd.scaffold.errors import (
    ManifestParseError,
    ReleaseRateLimitError,
    ScaffoldCancelledError,
    ScaffoldError,
    ScaffoldNetworkError,
    ScaffoldStepError,
    ScaffoldValidationError,
)
from aidd.scaffold.manifest import parse_manifest
from aidd.scaffold.resolver import resolve_extension
from aidd.scaffold.runner import run_manifest
from aidd.scaffold.types import ResolvedPaths, ScaffoldSource, SourceKind
from aidd.scaffold.verifier import run_verify_scaffold, verify_scaffold

__all__ = [
    "ManifestParseError",
    "ReleaseRateLimitError",
    "ResolvedPaths",
    "ScaffoldCancelledError",
    "ScaffoldError",
    "ScaffoldNetworkError",
    "ScaffoldSource",
    "ScaffoldStepError",
    "ScaffoldValidationError",
    "SourceKind",
    "parse_manifest",
    "resolve_create_args",
    "resolve_extension",
    "run_create",
    "run_manifest",
    "run_verify_scaffold",
    "scaffold_cleanup",
    "verify_scaffold",
]
