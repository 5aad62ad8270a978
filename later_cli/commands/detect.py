"""Single-purpose detection commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from later_cli.commands.common import (
    get_state,
    parse_type_option,
    print_json_payload,
    read_capture_text,
    wants_json,
)
from later_cli.core.detector import (
    detect_type,
    extract_due_date,
    extract_list_items,
    get_confidence,
    score_content,
)
from later_cli.utils.formatting import (
    format_confidence,
    format_due_date,
    format_items,
    format_scores,
)


def detect_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Capture text, or '-' to read stdin"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read capture text from a file"),
) -> None:
    """Detect whether text is a todo list, a list, or a note."""
    state = get_state(ctx)
    content = read_capture_text(text, file)

    detected = detect_type(content)
    confidence = get_confidence(content, detected)
    scores = score_content(content)
    state.debug(f"scores: {format_scores(scores)}")

    if wants_json(state):
        print_json_payload(
            state,
            {
                "type": detected.value,
                "confidence": round(confidence, 4),
                "scores": scores.as_dict(),
            },
        )
        return

    if state.plain_output:
        typer.echo(f"type\t{detected.value}")
        typer.echo(f"confidence\t{confidence:.4f}")
        return

    state.console.print(
        f"[bold]{detected.display_name}[/bold] ({format_confidence(confidence)} confidence)"
    )
    state.console.print(format_scores(scores), style="dim")


def confidence_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Capture text, or '-' to read stdin"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read capture text from a file"),
    content_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Type to score: todo_list|list|note (default: detected type)",
    ),
) -> None:
    """Show how confidently text matches a content type."""
    state = get_state(ctx)
    content = read_capture_text(text, file)
    target = parse_type_option(content_type) or detect_type(content)
    confidence = get_confidence(content, target)

    if wants_json(state):
        print_json_payload(state, {"type": target.value, "confidence": round(confidence, 4)})
        return

    if state.plain_output:
        typer.echo(f"{target.value}\t{confidence:.4f}")
        return

    state.console.print(f"{target.display_name}: {format_confidence(confidence)}")


def due_date_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Capture text, or '-' to read stdin"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read capture text from a file"),
) -> None:
    """Extract a relative due date (today, tomorrow, next week)."""
    state = get_state(ctx)
    content = read_capture_text(text, file)
    due = extract_due_date(content)

    if wants_json(state):
        print_json_payload(state, {"due_date": due.isoformat() if due else None})
        return

    typer.echo(format_due_date(due))


def items_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Capture text, or '-' to read stdin"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read capture text from a file"),
) -> None:
    """Extract list items from bulleted, numbered or line-separated text."""
    state = get_state(ctx)
    content = read_capture_text(text, file)
    items = extract_list_items(content)

    if wants_json(state):
        print_json_payload(state, {"items": items})
        return

    if state.plain_output:
        for item in items:
            typer.echo(item)
        return

    if not items:
        state.console.print("No list items found")
        return
    state.console.print(format_items(items), markup=False)
