"""Removal of the scaffold working directory."""

from __future__ import annotations

import shutil
from pathlib import Path

from aidd.scaffold.paths import WORK_DIRNAME
from aidd.scaffold.types import CleanupResult


def scaffold_cleanup(folder: Path | None = None) -> CleanupResult:
    """Remove ``<folder>/.aidd`` left behind by a remote scaffold."""
    work_dir = (folder or Path.cwd()) / WORK_DIRNAME

    if not work_dir.exists():
        return CleanupResult(
            action="not-found",
            message=f"Nothing to clean up: {WORK_DIRNAME}/ does not exist.",
        )

    shutil.rmtree(work_dir)
    return CleanupResult(action="removed", message=f"Removed {work_dir}")
