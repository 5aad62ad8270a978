"""Config inspection commands."""

from __future__ import annotations

import typer

from later_cli.commands.common import fail, get_state, print_json_payload, wants_json
from later_cli.core.config import DEFAULT_CONFIG, save_config

app = typer.Typer(help="Inspect or create the config file")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print the effective config (file merged over defaults)."""
    state = get_state(ctx)
    state.debug(f"config path: {state.config_path}")
    print_json_payload(state, {"path": str(state.config_path), "config": state.config})


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write a config file populated with the defaults."""
    state = get_state(ctx)
    if state.config_path.exists() and not force:
        fail(f"Config file already exists: {state.config_path} (use --force to overwrite)")

    path = save_config(DEFAULT_CONFIG, state.config_path)
    if wants_json(state):
        print_json_payload(state, {"status": "written", "path": str(path)})
        return
    typer.echo(f"Wrote {path}")
