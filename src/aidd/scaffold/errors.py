"""Typed errors raised by the scaffold pipeline."""

from __future__ import annotations


class ScaffoldError(RuntimeError):
    """Base class for scaffold failures surfaced to the CLI."""

    code = "SCAFFOLD_ERROR"


class ScaffoldValidationError(ScaffoldError):
    """Raised when a source, manifest or argument is structurally invalid."""

    code = "SCAFFOLD_VALIDATION_ERROR"


class ManifestParseError(ScaffoldValidationError):
    """Raised when SCAFFOLD-MANIFEST.yml cannot be parsed into steps."""


class ScaffoldNetworkError(ScaffoldError):
    """Raised when a release lookup or archive download fails."""

    code = "SCAFFOLD_NETWORK_ERROR"


class ReleaseRateLimitError(ScaffoldNetworkError):
    """Raised when the hosting API refuses a release lookup with 403."""


class ScaffoldCancelledError(ScaffoldError):
    """Raised when the user declines (or cannot answer) the remote trust prompt."""

    code = "SCAFFOLD_CANCELLED"


class ScaffoldStepError(ScaffoldError):
    """Raised when a manifest step exits non-zero."""

    code = "SCAFFOLD_STEP_ERROR"
