"""Heuristic content-type detection for quick-capture text."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from later_cli.core.constants import (
    ACTION_VERB_SCORE,
    ACTION_VERB_START_SCORE,
    ACTION_VERBS,
    BULLET_LIST_BASE_SCORE,
    BULLET_LIST_ITEM_SCORE,
    BULLET_PATTERN,
    CHECKBOX_PATTERN,
    CHECKBOX_SCORE,
    DUE_DATE_RULES,
    EMPTY_NOTE_CONFIDENCE,
    LIST_KEYWORD_SCORE,
    LIST_KEYWORDS,
    LONG_TEXT_SCORE,
    MIN_PATTERN_LINES,
    MIN_SENTENCE_MARKS,
    MIN_SIMPLE_LIST_LINES,
    MULTIPLE_SENTENCES_SCORE,
    NARRATIVE_TEXT_SCORE,
    NON_WORD_PATTERN,
    NOTE_BASELINE_SCORE,
    NOTE_WORD_COUNT_THRESHOLD,
    NUMBERED_PATTERN,
    PARAGRAPH_PATTERN,
    PARAGRAPH_SCORE,
    PRIORITY_INDICATOR_SCORE,
    PRIORITY_INDICATORS,
    SENTENCE_MARKS,
    SHORT_LINE_THRESHOLD,
    SHORT_TASK_BONUS_SCORE,
    SIMPLE_LIST_SCORE,
    TASK_LENGTH_THRESHOLD,
    TIME_INDICATOR_SCORE,
    TIME_INDICATORS,
    WEAK_SIGNAL_CONFIDENCE_MULTIPLIER,
    WEAK_SIGNAL_THRESHOLD,
    WHITESPACE_PATTERN,
)
from later_cli.core.models import CaptureAnalysis, ContentType, ScoreBreakdown
from later_cli.utils.text import derive_title


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _count_matching_lines(lines: Sequence[str], pattern: re.Pattern[str]) -> int:
    return sum(1 for line in lines if pattern.match(line))


def _is_blank(text: str) -> bool:
    return not text.strip()


def _utf16_length(text: str) -> int:
    # Length thresholds count UTF-16 code units, so an emoji counts as two.
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def task_score(text: str) -> float:
    """Score how much ``text`` reads like an actionable task."""
    score = 0.0
    lowered = text.lower()
    words = WHITESPACE_PATTERN.split(lowered)
    strong = False

    if CHECKBOX_PATTERN.match(text):
        score += CHECKBOX_SCORE
        strong = True

    first_word = NON_WORD_PATTERN.sub("", words[0])
    if first_word in ACTION_VERBS:
        score += ACTION_VERB_START_SCORE
        strong = True

    if _contains_any(lowered, ACTION_VERBS):
        score += ACTION_VERB_SCORE

    if _contains_any(lowered, TIME_INDICATORS):
        score += TIME_INDICATOR_SCORE
        strong = True

    if _contains_any(lowered, PRIORITY_INDICATORS):
        score += PRIORITY_INDICATOR_SCORE
        strong = True

    # One-liners only; "Call mom\nASAP" gets no bonus.
    if _utf16_length(text) < TASK_LENGTH_THRESHOLD and "\n" not in text and strong:
        score += SHORT_TASK_BONUS_SCORE

    return score


def list_score(text: str) -> float:
    """Score how much ``text`` reads like a reference list."""
    score = 0.0
    lines = text.split("\n")

    for pattern in (BULLET_PATTERN, NUMBERED_PATTERN):
        count = _count_matching_lines(lines, pattern)
        if count >= MIN_PATTERN_LINES:
            score += BULLET_LIST_BASE_SCORE + count * BULLET_LIST_ITEM_SCORE

    if _contains_any(text.lower(), LIST_KEYWORDS):
        score += LIST_KEYWORD_SCORE

    non_empty = [line.strip() for line in lines if line.strip()]
    if len(non_empty) >= MIN_SIMPLE_LIST_LINES and all(
        _utf16_length(line) < SHORT_LINE_THRESHOLD for line in non_empty
    ):
        score += SIMPLE_LIST_SCORE

    return score


def note_score(text: str) -> float:
    """Score how much ``text`` reads like free-form prose. Never zero."""
    score = 0.0

    if _utf16_length(text) > TASK_LENGTH_THRESHOLD:
        score += LONG_TEXT_SCORE

    # Counted across the whole string, not per sentence.
    marks = sum(text.count(mark) for mark in SENTENCE_MARKS)
    if marks >= MIN_SENTENCE_MARKS:
        score += MULTIPLE_SENTENCES_SCORE

    if PARAGRAPH_PATTERN.search(text):
        score += PARAGRAPH_SCORE

    if len(WHITESPACE_PATTERN.split(text)) > NOTE_WORD_COUNT_THRESHOLD:
        score += NARRATIVE_TEXT_SCORE

    return score + NOTE_BASELINE_SCORE


def score_content(text: str) -> ScoreBreakdown:
    """Compute the task/list/note score triple for ``text``."""
    return ScoreBreakdown(task=task_score(text), list=list_score(text), note=note_score(text))


def _pick_type(scores: ScoreBreakdown) -> ContentType:
    # Comparison order decides ties: list, then task, then note.
    if scores.list > scores.task and scores.list > scores.note:
        return ContentType.LIST
    if scores.task > scores.note:
        return ContentType.TODO_LIST
    return ContentType.NOTE


def detect_type(text: str) -> ContentType:
    """Classify ``text`` as a todo list, list or note. Defaults to note."""
    if _is_blank(text):
        return ContentType.NOTE
    return _pick_type(score_content(text))


def _confidence_from_scores(scores: ScoreBreakdown, content_type: ContentType) -> float:
    total = scores.total
    if total == 0:
        return EMPTY_NOTE_CONFIDENCE if content_type is ContentType.NOTE else 0.0

    confidence = scores.for_type(content_type) / total
    if scores.maximum < WEAK_SIGNAL_THRESHOLD:
        confidence *= WEAK_SIGNAL_CONFIDENCE_MULTIPLIER
    return min(max(confidence, 0.0), 1.0)


def get_confidence(text: str, content_type: ContentType) -> float:
    """Return a 0.0-1.0 estimate of how strongly ``content_type`` dominates."""
    if _is_blank(text):
        return EMPTY_NOTE_CONFIDENCE if content_type is ContentType.NOTE else 0.0
    return _confidence_from_scores(score_content(text), content_type)


def extract_due_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Extract a due date from relative keywords (today, tomorrow, next week).

    The result is midnight of the matched day in the local clock, or ``None``
    when no keyword is present.
    """
    lowered = text.lower()
    current = now or datetime.now()
    for keywords, offset_days in DUE_DATE_RULES:
        if _contains_any(lowered, keywords):
            day = (current + timedelta(days=offset_days)).date()
            return datetime(day.year, day.month, day.day)
    return None


def _strip_marker(line: str) -> Optional[str]:
    for pattern in (BULLET_PATTERN, NUMBERED_PATTERN):
        if pattern.match(line):
            return pattern.sub("", line, count=1).strip()
    return None


def extract_list_items(text: str) -> List[str]:
    """Extract list entries from bulleted, numbered or line-separated text.

    Plain lines are only kept while no bullet/numbered line has been seen, and
    only when at least two of them were found.
    """
    if _is_blank(text):
        return []

    items: List[str] = []
    found_pattern = False

    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        marked = _strip_marker(line)
        if marked is not None:
            if marked:
                items.append(marked)
                found_pattern = True
            continue

        # Header lines like "Shopping list:" before the first item.
        if not items and _contains_any(trimmed.lower(), LIST_KEYWORDS):
            continue

        if found_pattern:
            continue

        if (
            _utf16_length(trimmed) < SHORT_LINE_THRESHOLD
            and "." not in trimmed
            and not trimmed.endswith(":")
        ):
            items.append(trimmed)

    if not found_pattern and len(items) < MIN_PATTERN_LINES:
        return []
    return items


def analyze_capture(
    text: str,
    forced_type: Optional[ContentType] = None,
    min_confidence: float = 0.5,
    include_due_date: bool = True,
    include_items: bool = True,
    now: Optional[datetime] = None,
) -> CaptureAnalysis:
    """Run the whole quick-capture pipeline over ``text``.

    ``forced_type`` mirrors a user picking the type by hand; confirmation is
    then never requested.
    """
    scores = score_content(text)
    detected = ContentType.NOTE if _is_blank(text) else _pick_type(scores)
    chosen = forced_type or detected

    if _is_blank(text):
        confidence = EMPTY_NOTE_CONFIDENCE if chosen is ContentType.NOTE else 0.0
    else:
        confidence = _confidence_from_scores(scores, chosen)

    return CaptureAnalysis(
        text=text,
        title=derive_title(text),
        type=chosen,
        detected_type=detected,
        confidence=confidence,
        scores=scores,
        due_date=extract_due_date(text, now=now) if include_due_date else None,
        items=tuple(extract_list_items(text)) if include_items else (),
        needs_confirmation=forced_type is None and confidence < min_confidence,
    )
