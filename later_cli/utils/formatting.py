"""Formatting helpers used by console output."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from later_cli.core.models import ScoreBreakdown


def format_confidence(confidence: float) -> str:
    """Format a 0-1 confidence as a percentage."""
    return f"{confidence * 100:.0f}%"


def format_due_date(due: Optional[datetime]) -> str:
    if due is None:
        return "none"
    return due.date().isoformat()


def format_scores(scores: ScoreBreakdown) -> str:
    return f"task={scores.task:.1f} list={scores.list:.1f} note={scores.note:.1f}"


def format_items(items: Sequence[str], bullet: str = "-") -> str:
    """Render items one per line, or an empty string."""
    return "\n".join(f"{bullet} {item}" for item in items)
