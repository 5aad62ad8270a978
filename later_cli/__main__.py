"""Entry point for later."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from later_cli import __version__
from later_cli.commands import config as config_commands
from later_cli.commands.capture import batch_command, capture_command
from later_cli.commands.detect import (
    confidence_command,
    detect_command,
    due_date_command,
    items_command,
)
from later_cli.core.config import ConfigError, default_config_path, load_config
from later_cli.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Classify quick-capture text into todo lists, lists and notes",
    invoke_without_command=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.command("detect")(detect_command)
app.command("confidence")(confidence_command)
app.command("due-date")(due_date_command)
app.command("items")(items_command)
app.command("capture")(capture_command)
app.command("batch")(batch_command)
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
