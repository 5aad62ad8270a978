"""Text helpers."""

from __future__ import annotations

from later_cli.core.constants import (
    BULLET_PATTERN,
    CHECKBOX_PATTERN,
    NUMBERED_PATTERN,
    TITLE_MAX_LENGTH,
)


def derive_title(text: str, max_len: int = TITLE_MAX_LENGTH) -> str:
    """Use the first non-empty line, minus list/checkbox markers, as a title."""
    for line in text.split("\n"):
        candidate = line.strip()
        if not candidate:
            continue
        for pattern in (CHECKBOX_PATTERN, BULLET_PATTERN, NUMBERED_PATTERN):
            candidate = pattern.sub("", candidate, count=1)
        candidate = candidate.strip() or line.strip()
        if len(candidate) > max_len:
            return candidate[: max_len - 3].rstrip() + "..."
        return candidate
    return ""
