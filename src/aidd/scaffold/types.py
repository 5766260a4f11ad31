"""Scaffold pipeline types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal


class SourceKind(str, Enum):
    """Shape of a scaffold identifier."""

    NAMED = "named"
    FILE_URI = "file_uri"
    HTTP_URI = "http_uri"
    BARE_REPO = "bare_repo"
    INSECURE = "insecure"


@dataclass(frozen=True)
class ScaffoldSource:
    """Classified scaffold identifier."""

    kind: SourceKind
    value: str
    owner: str | None = None
    repo: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.kind in (SourceKind.HTTP_URI, SourceKind.BARE_REPO)


@dataclass(frozen=True)
class ResolvedPaths:
    """On-disk locations of the three scaffold artifacts."""

    extension_js_path: Path
    manifest_path: Path
    readme_path: Path
    downloaded: bool = False


StepKind = Literal["run", "prompt"]


@dataclass(frozen=True)
class ManifestStep:
    """Single step from SCAFFOLD-MANIFEST.yml."""

    kind: StepKind
    value: str


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of static manifest verification."""

    valid: bool
    errors: list[str]


@dataclass(frozen=True)
class CreateArgs:
    """Positional arguments of `aidd create` after disambiguation."""

    type: str | None
    folder: str
    folder_path: Path


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a successful create flow."""

    success: bool
    folder_path: Path
    cleanup_tip: str | None = None


@dataclass(frozen=True)
class CleanupResult:
    """Outcome of removing the scaffold working directory."""

    action: Literal["removed", "not-found"]
    message: str
