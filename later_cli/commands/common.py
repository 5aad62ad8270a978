"""Shared command helpers."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from later_cli.core.models import ContentType
from later_cli.core.state import CLIState
from later_cli.utils.parsing import CaptureInputError, resolve_text


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def wants_json(state: CLIState) -> bool:
    """Global --json wins; otherwise fall back to defaults.output_format."""
    if state.json_output:
        return True
    if state.plain_output:
        return False
    return state.config.get("defaults", {}).get("output_format") == "json"


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def fail(message: str, code: int = 1) -> NoReturn:
    """Print an error line and exit."""
    typer.echo(message)
    raise typer.Exit(code=code)


def read_capture_text(text: Optional[str], file: Optional[Path]) -> str:
    """Resolve the capture text for single-capture commands."""
    stdin_text = sys.stdin.read() if text == "-" else ""
    try:
        return resolve_text(text, file, stdin_text=stdin_text)
    except CaptureInputError as exc:
        raise typer.BadParameter(str(exc))


def parse_type_option(value: Optional[str]) -> Optional[ContentType]:
    """Map a --type option value to a ContentType, or None when unset."""
    if value is None:
        return None
    try:
        return ContentType.parse(value)
    except ValueError:
        choices = "|".join(member.value for member in ContentType)
        raise typer.BadParameter(f"Unknown type '{value}'. Expected one of {choices}")
