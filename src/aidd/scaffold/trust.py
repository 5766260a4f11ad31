"""Interactive confirmation before fetching remote scaffold code."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console

from aidd.scaffold.errors import ScaffoldCancelledError

ConfirmFn = Callable[[str], bool]

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})

_console = Console()


def remote_warning(source: str) -> str:
    return (
        "\nWarning: You are about to download and execute code from a remote URI:\n"
        f"  {source}\n\n"
        "This code will run on your machine. Only proceed if you trust the source.\n"
        "Continue? (y/N): "
    )


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def default_confirm(message: str) -> bool:
    """Ask on the terminal; a closed or failing stdin counts as "no".

    The message is shown verbatim so the user sees the exact source URL.
    """
    try:
        answer = _console.input(message, markup=False, emoji=False)
    except (EOFError, OSError):
        return False
    return is_affirmative(answer)


def confirm_remote(source: str, confirm: ConfirmFn) -> None:
    """Block until the user trusts ``source``.

    Raises:
        ScaffoldCancelledError: If the user declines or the prompt fails
    """
    try:
        confirmed = confirm(remote_warning(source))
    except Exception as exc:
        raise ScaffoldCancelledError(
            f"Remote extension download cancelled: confirmation prompt failed ({exc})."
        ) from exc

    if not confirmed:
        raise ScaffoldCancelledError("Remote extension download cancelled by user.")
