"""Manifest step execution."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from aidd.scaffold.errors import ScaffoldStepError
from aidd.scaffold.manifest import load_manifest

logger = logging.getLogger(__name__)

DEFAULT_AGENT = "claude"
EXTENSION_RUNTIME = "node"

# A string runs through the shell; a sequence runs without one, so untrusted
# text such as prompt content is never shell-interpreted.
Command = str | Sequence[str]
ExecStepFn = Callable[[Command, Path], None]


def default_exec_step(command: Command, cwd: Path) -> None:
    """Run ``command`` in ``cwd`` with inherited stdio.

    Raises:
        ScaffoldStepError: If the command cannot start or exits non-zero
    """
    use_shell = isinstance(command, str)
    display = command if use_shell else " ".join(command)
    print(f"> {display}", flush=True)

    try:
        completed = subprocess.run(
            command if use_shell else list(command),
            cwd=cwd,
            shell=use_shell,
            check=False,
        )
    except OSError as exc:
        raise ScaffoldStepError(f"Command could not be started: {display}: {exc}") from exc

    if completed.returncode != 0:
        raise ScaffoldStepError(
            f"Command failed with exit code {completed.returncode}: {display}"
        )


def run_manifest(
    *,
    manifest_path: Path,
    folder: Path,
    extension_js_path: Path | None = None,
    agent: str = DEFAULT_AGENT,
    exec_step: ExecStepFn = default_exec_step,
) -> None:
    """Execute the manifest steps in order against ``folder``.

    The manifest is fully parsed before the first step runs. Execution stops
    at the first failing step; already-applied steps are not rolled back.

    Args:
        manifest_path: Path to SCAFFOLD-MANIFEST.yml
        folder: Target project folder (cwd for every step)
        extension_js_path: Optional extension script run after the steps
        agent: Agent CLI invoked for prompt steps
        exec_step: Step executor (injectable for tests)

    Raises:
        ManifestParseError: If the manifest is malformed
        ScaffoldStepError: If a step fails
    """
    steps = load_manifest(manifest_path)
    logger.debug("Running %d manifest steps from %s in %s", len(steps), manifest_path, folder)

    for step in steps:
        if step.kind == "run":
            exec_step(step.value, folder)
        else:
            exec_step([agent, step.value], folder)

    if extension_js_path is not None and extension_js_path.exists():
        exec_step([EXTENSION_RUNTIME, str(extension_js_path)], folder)
