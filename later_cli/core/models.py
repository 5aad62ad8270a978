"""Lightweight data models used across commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from later_cli.core.constants import TYPE_LABELS


class ContentType(str, Enum):
    """Category a piece of captured text is classified into."""

    TODO_LIST = "todo_list"
    LIST = "list"
    NOTE = "note"

    @property
    def display_name(self) -> str:
        return TYPE_LABELS[self.value]

    @classmethod
    def parse(cls, value: str) -> "ContentType":
        """Resolve a CLI-style name (``todo-list``, ``Task``...) to a member."""
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        if key in {"task", "todo", "todolist"}:
            key = "todo_list"
        return cls(key)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Raw heuristic scores for one input."""

    task: float
    list: float
    note: float

    @property
    def total(self) -> float:
        return self.task + self.list + self.note

    @property
    def maximum(self) -> float:
        return max(self.task, self.list, self.note)

    def for_type(self, content_type: ContentType) -> float:
        if content_type is ContentType.TODO_LIST:
            return self.task
        if content_type is ContentType.LIST:
            return self.list
        return self.note

    def as_dict(self) -> Dict[str, float]:
        return {"todo_list": self.task, "list": self.list, "note": self.note}


@dataclass(frozen=True)
class CaptureAnalysis:
    """Everything the capture flow needs to decide what to create."""

    text: str
    title: str
    type: ContentType
    detected_type: ContentType
    confidence: float
    scores: ScoreBreakdown
    due_date: Optional[datetime] = None
    items: Tuple[str, ...] = field(default_factory=tuple)
    needs_confirmation: bool = False

    def entity_draft(self) -> Dict[str, Any]:
        """Describe the entity the application would persist for this capture."""
        if self.type is ContentType.NOTE:
            content = self.text.strip()
            return {
                "kind": "note",
                "title": self.title,
                "content": content if content != self.title else None,
            }

        entries: List[str] = list(self.items) or ([self.title] if self.title else [])
        if self.type is ContentType.TODO_LIST:
            due = self.due_date.isoformat() if self.due_date else None
            return {
                "kind": "todo_list",
                "name": self.title,
                "items": [
                    {"title": entry, "is_completed": False, "due_date": due}
                    for entry in entries
                ],
            }

        return {
            "kind": "list",
            "name": self.title,
            "items": [{"title": entry, "is_checked": False} for entry in entries],
        }

    def as_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "type": self.type.value,
            "detected_type": self.detected_type.value,
            "confidence": round(self.confidence, 4),
            "needs_confirmation": self.needs_confirmation,
            "scores": self.scores.as_dict(),
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "items": list(self.items),
            "entity": self.entity_draft(),
        }
