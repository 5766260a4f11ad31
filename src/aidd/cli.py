"""aidd CLI - manifest-driven project scaffolding."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from aidd import __version__
from aidd.config import (
    KNOWN_SETTINGS,
    AiddEnvironment,
    default_config_path,
    read_config,
    write_config,
)
from aidd.scaffold.cleanup import scaffold_cleanup
from aidd.scaffold.create import resolve_create_args, run_create
from aidd.scaffold.errors import (
    ScaffoldCancelledError,
    ScaffoldError,
    ScaffoldNetworkError,
    ScaffoldStepError,
    ScaffoldValidationError,
)
from aidd.scaffold.runner import DEFAULT_AGENT
from aidd.scaffold.verifier import run_verify_scaffold

cli = typer.Typer(
    name="aidd",
    help="aidd - scaffold new projects from manifest-driven templates",
    no_args_is_help=True,
)
console = Console(emoji=False)
err_console = Console(stderr=True, emoji=False)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show aidd version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Configure logging for every invocation."""
    _ = version
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _resolver_options(cwd: Path) -> dict:
    """Collaborators built once per invocation and threaded to the resolver."""
    config_path = default_config_path(cwd)
    return {
        "env": AiddEnvironment.from_env(),
        "read_config": lambda: read_config(config_path),
    }


def _report_scaffold_error(exc: ScaffoldError, *, hints: bool = True) -> None:
    if isinstance(exc, ScaffoldNetworkError):
        err_console.print(f"[bold red]Network Error:[/bold red] {escape(str(exc))}")
        if hints:
            err_console.print("[yellow]Check your internet connection and try again[/yellow]")
        cause = exc.__cause__
        if cause is not None and hints:
            err_console.print(f"[dim]   Caused by: {escape(str(cause))}[/dim]")
    elif isinstance(exc, ScaffoldStepError):
        err_console.print(f"[bold red]Step failed:[/bold red] {escape(str(exc))}")
        if hints:
            err_console.print("[yellow]Check the scaffold manifest steps and try again[/yellow]")
    elif isinstance(exc, ScaffoldValidationError):
        err_console.print(f"[bold red]Invalid scaffold:[/bold red] {escape(str(exc))}")
        if hints:
            err_console.print("[yellow]Run `aidd verify-scaffold` to diagnose the manifest[/yellow]")
    else:
        err_console.print(f"[bold red]Scaffold failed:[/bold red] {escape(str(exc))}")


@cli.command(name="create")
def create_cmd(
    type_or_folder: str | None = typer.Argument(
        None,
        metavar="[TYPE]",
        help="Scaffold name, file:// URI, or https:// URL (defaults to AIDD_CUSTOM_CREATE_URI, "
        "then the configured create-uri, then next-shadcn).",
    ),
    folder: str | None = typer.Argument(
        None,
        metavar="FOLDER",
        help="Directory to create the new project in (required).",
    ),
    agent: str = typer.Option(
        DEFAULT_AGENT,
        "--agent",
        help="Agent CLI to use for prompt steps.",
    ),
) -> None:
    """Scaffold a new project using a manifest-driven extension.

    Examples:
    - aidd create my-project
    - aidd create scaffold-example my-project
    - aidd create https://github.com/org/scaffold my-project
    - aidd create file:///path/to/scaffold my-project
    """
    cwd = Path.cwd()
    args = resolve_create_args(type_or_folder, folder, cwd=cwd)
    if args is None:
        err_console.print("[bold red]Error:[/bold red] missing required argument 'folder'")
        raise typer.Exit(1)

    console.print(f"[blue]Scaffolding new project in {escape(str(args.folder_path))}...[/blue]")

    try:
        result = run_create(
            type=args.type,
            folder=args.folder_path,
            agent=agent,
            log=console.out,
            **_resolver_options(cwd),
        )
    except ScaffoldCancelledError as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        raise typer.Exit(0) from exc
    except ScaffoldError as exc:
        _report_scaffold_error(exc)
        raise typer.Exit(1) from exc

    console.print("[green]✓ Scaffold complete![/green]")
    if result.cleanup_tip:
        console.print(
            f"[yellow]Tip: Run `{escape(result.cleanup_tip)}` to remove the downloaded extension files.[/yellow]"
        )


@cli.command(name="verify-scaffold")
def verify_scaffold_cmd(
    type: str | None = typer.Argument(
        None,
        help="Scaffold name, file:// URI, or https:// URL to verify.",
    ),
) -> None:
    """Validate a scaffold manifest before running it."""
    cwd = Path.cwd()
    try:
        result = run_verify_scaffold(type, folder=cwd, **_resolver_options(cwd))
    except ScaffoldCancelledError as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        raise typer.Exit(0) from exc
    except ScaffoldError as exc:
        _report_scaffold_error(exc, hints=False)
        raise typer.Exit(1) from exc

    if result.valid:
        console.print("[green]✓ Scaffold is valid[/green]")
        return

    err_console.print("[bold red]Scaffold validation failed:[/bold red]")
    for error in result.errors:
        err_console.print(f"[red]   • {escape(error)}[/red]")
    raise typer.Exit(1)


@cli.command(name="scaffold-cleanup")
def scaffold_cleanup_cmd(
    folder: Path | None = typer.Argument(
        None,
        help="Project folder whose .aidd/ directory should be removed (default: cwd).",
    ),
) -> None:
    """Remove the .aidd/ working directory created during scaffolding."""
    folder_path = (Path.cwd() / folder).resolve() if folder else Path.cwd()

    try:
        result = scaffold_cleanup(folder_path)
    except OSError as exc:
        err_console.print(f"[bold red]Cleanup failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if result.action == "removed":
        console.print(f"[green]✓ {escape(result.message)}[/green]")
    else:
        console.print(f"[yellow]{escape(result.message)}[/yellow]")


@cli.command(name="set")
def set_cmd(
    key: str = typer.Argument(..., help="Setting name (create-uri)."),
    value: str = typer.Argument(..., help="Setting value."),
) -> None:
    """Persist a setting in aidd.config.json for this project.

    create-uri is the default scaffold used by `aidd create`; the
    AIDD_CUSTOM_CREATE_URI environment variable still takes precedence.
    """
    if key not in KNOWN_SETTINGS:
        valid = ", ".join(sorted(KNOWN_SETTINGS))
        err_console.print(
            f"[bold red]Unknown setting:[/bold red] {escape(repr(key))}. Valid settings: {valid}"
        )
        raise typer.Exit(1)

    config_path = default_config_path()
    try:
        write_config({key: value}, config_path)
    except OSError as exc:
        err_console.print(
            f"[bold red]Error:[/bold red] Could not write {escape(str(config_path))}: "
            f"{escape(str(exc))}"
        )
        raise typer.Exit(1) from exc

    console.print(f"[green]✓ Set {escape(key)}[/green] in {escape(str(config_path))}")
    console.print(f"[dim]Override per shell with: export {KNOWN_SETTINGS[key]}={escape(value)}[/dim]")


@cli.command(name="config")
def config_cmd() -> None:
    """Print the project configuration as JSON."""
    typer.echo(json.dumps(read_config(default_config_path()), indent=2, sort_keys=True))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
