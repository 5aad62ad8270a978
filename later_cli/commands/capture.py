"""Quick-capture analysis commands."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from later_cli.commands.common import (
    fail,
    get_state,
    parse_type_option,
    print_json_payload,
    read_capture_text,
    wants_json,
)
from later_cli.core.config import capture_settings, resolve_output_dir
from later_cli.core.detector import analyze_capture
from later_cli.core.models import CaptureAnalysis, ContentType
from later_cli.exporters.json_export import write_json
from later_cli.utils.formatting import (
    format_confidence,
    format_due_date,
    format_items,
    format_scores,
)
from later_cli.utils.parsing import CaptureInputError, load_capture_files


def _analyze(
    config: Dict[str, Any],
    text: str,
    forced_type: Optional[ContentType] = None,
) -> CaptureAnalysis:
    settings = capture_settings(config)
    return analyze_capture(
        text,
        forced_type=forced_type,
        min_confidence=settings["min_confidence"],
        include_due_date=settings["extract_due_date"],
        include_items=settings["extract_items"],
    )


def _summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    by_type = Counter(row["type"] for row in results)
    return {
        "total": len(results),
        "by_type": dict(by_type),
        "needs_confirmation": sum(1 for row in results if row["needs_confirmation"]),
        "with_due_date": sum(1 for row in results if row["due_date"]),
    }


def capture_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Capture text, or '-' to read stdin"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read capture text from a file"),
    content_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Skip detection and use this type: todo_list|list|note",
    ),
) -> None:
    """Analyze a quick capture and describe the item it would create."""
    state = get_state(ctx)
    content = read_capture_text(text, file)
    forced = parse_type_option(content_type)

    analysis = _analyze(state.config, content, forced_type=forced)
    state.debug(f"scores: {format_scores(analysis.scores)}")
    state.debug(f"detected={analysis.detected_type.value} chosen={analysis.type.value}")

    if wants_json(state):
        print_json_payload(state, analysis.as_dict())
        return

    if state.plain_output:
        typer.echo(f"type\t{analysis.type.value}")
        typer.echo(f"confidence\t{analysis.confidence:.4f}")
        typer.echo(f"needs_confirmation\t{str(analysis.needs_confirmation).lower()}")
        typer.echo(f"title\t{analysis.title}")
        typer.echo(f"due_date\t{format_due_date(analysis.due_date)}")
        for item in analysis.items:
            typer.echo(f"item\t{item}")
        return

    console = state.console
    console.print(f"[bold]{analysis.type.display_name}[/bold]: {analysis.title}", highlight=False)
    console.print(f"Confidence: {format_confidence(analysis.confidence)}")
    if analysis.needs_confirmation:
        console.print("[yellow]Low confidence - confirm the type before saving[/yellow]")
    if analysis.due_date:
        console.print(f"Due: {format_due_date(analysis.due_date)}")
    if analysis.items:
        console.print(f"Items ({len(analysis.items)}):")
        console.print(format_items(analysis.items, bullet="  -"), markup=False)


def batch_command(
    ctx: typer.Context,
    paths: List[Path] = typer.Argument(..., help="Text, JSON or YAML files with captures"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the JSON report to this file"
    ),
    export: bool = typer.Option(
        False, "--export", help="Write the JSON report as captures.json in the output directory"
    ),
    output_dir: Optional[Path] = typer.Option(None, help="Output directory for --export"),
) -> None:
    """Analyze many captures at once."""
    state = get_state(ctx)

    try:
        entries = load_capture_files(paths)
    except CaptureInputError as exc:
        fail(f"Input error: {exc}")
    state.debug(f"loaded {len(entries)} capture(s) from {len(paths)} file(s)")

    results: List[Dict[str, Any]] = []
    for label, text in entries:
        row = _analyze(state.config, text).as_dict()
        row["source"] = label
        results.append(row)

    report = {"summary": _summary(results), "captures": results}

    exported: Optional[Path] = None
    if output is not None:
        exported = write_json(output.expanduser(), report)
    elif export:
        target_dir = resolve_output_dir(state.config, explicit=output_dir)
        exported = write_json(target_dir / "captures.json", report)
    if exported:
        state.debug(f"wrote {exported}")

    if wants_json(state):
        print_json_payload(state, report)
        return

    if state.plain_output:
        for row in results:
            typer.echo(
                f"{row['source']}\t{row['type']}\t{row['confidence']:.4f}\t"
                f"{row['due_date'] or ''}\t{len(row['items'])}"
            )
        if exported:
            typer.echo(f"exported\t{exported}")
        return

    table = Table(title=f"Analyzed {len(results)} capture(s)")
    table.add_column("Source")
    table.add_column("Type")
    table.add_column("Confidence", justify="right")
    table.add_column("Due")
    table.add_column("Items", justify="right")
    table.add_column("Title")
    for row in results:
        flag = " ?" if row["needs_confirmation"] else ""
        table.add_row(
            row["source"],
            ContentType(row["type"]).display_name,
            format_confidence(row["confidence"]) + flag,
            (row["due_date"] or "")[:10],
            str(len(row["items"])),
            row["title"],
        )
    state.console.print(table)
    if exported:
        state.console.print(f"Exported to: {exported}")
