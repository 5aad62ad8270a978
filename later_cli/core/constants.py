"""Static weights, thresholds and keyword tables for content detection."""

from __future__ import annotations

import re

# Task scoring weights
CHECKBOX_SCORE = 3.0
ACTION_VERB_START_SCORE = 2.5
ACTION_VERB_SCORE = 0.5
TIME_INDICATOR_SCORE = 1.0
PRIORITY_INDICATOR_SCORE = 1.5
SHORT_TASK_BONUS_SCORE = 1.0

# List scoring weights
BULLET_LIST_BASE_SCORE = 4.0
BULLET_LIST_ITEM_SCORE = 0.5
LIST_KEYWORD_SCORE = 1.5
SIMPLE_LIST_SCORE = 2.0

# Note scoring weights
LONG_TEXT_SCORE = 2.0
MULTIPLE_SENTENCES_SCORE = 1.5
PARAGRAPH_SCORE = 1.5
NARRATIVE_TEXT_SCORE = 1.0
NOTE_BASELINE_SCORE = 1.0

TASK_LENGTH_THRESHOLD = 100
SHORT_LINE_THRESHOLD = 50
NOTE_WORD_COUNT_THRESHOLD = 20
MIN_PATTERN_LINES = 2
MIN_SIMPLE_LIST_LINES = 3
MIN_SENTENCE_MARKS = 2
WEAK_SIGNAL_THRESHOLD = 2.0
WEAK_SIGNAL_CONFIDENCE_MULTIPLIER = 0.6
EMPTY_NOTE_CONFIDENCE = 0.5

ACTION_VERBS = (
    "buy",
    "call",
    "send",
    "schedule",
    "book",
    "email",
    "write",
    "read",
    "complete",
    "finish",
    "start",
    "create",
    "update",
    "delete",
    "fix",
    "get",
    "make",
    "do",
    "plan",
    "prepare",
    "review",
    "check",
    "verify",
    "test",
    "submit",
    "contact",
    "meet",
    "discuss",
    "confirm",
    "cancel",
    "reschedule",
)

TIME_INDICATORS = (
    "tomorrow",
    "today",
    "tonight",
    "next week",
    "next month",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
    "at",
    "by",
    "pm",
    "am",
)

PRIORITY_INDICATORS = ("urgent", "important", "asap", "critical", "high priority")

LIST_KEYWORDS = ("list", "items", "things to", "todo", "checklist")

SENTENCE_MARKS = (".", "!", "?")

# Due-date keywords, checked in order; the first hit wins.
DUE_DATE_RULES = (
    (("today", "tonight"), 0),
    (("tomorrow",), 1),
    (("next week",), 7),
)

CHECKBOX_PATTERN = re.compile(r"^\s*\[[\sx]?\]\s*")
BULLET_PATTERN = re.compile(r"^\s*[-*•]\s+")
NUMBERED_PATTERN = re.compile(r"^\s*[0-9]+[.)]\s+")
PARAGRAPH_PATTERN = re.compile(r"\n\s*\n")
WHITESPACE_PATTERN = re.compile(r"\s+")
NON_WORD_PATTERN = re.compile(r"[^\w]", re.ASCII)

TYPE_LABELS = {
    "todo_list": "Todo List",
    "list": "List",
    "note": "Note",
}

TITLE_MAX_LENGTH = 80
