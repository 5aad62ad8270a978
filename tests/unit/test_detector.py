from datetime import datetime

import pytest

from later_cli.core.detector import (
    _pick_type,
    analyze_capture,
    detect_type,
    extract_due_date,
    extract_list_items,
    get_confidence,
    list_score,
    note_score,
    score_content,
    task_score,
)
from later_cli.core.models import ContentType, ScoreBreakdown


@pytest.mark.parametrize(
    "text",
    [
        "Buy milk tomorrow",
        "Call mom at 5pm",
        "Send email to team ASAP",
        "Schedule dentist appointment",
        "Call dentist tomorrow at 3pm",
        "Buy milk",
        "Get groceries",
        "Fix bug",
        "Read book",
    ],
)
def test_detect_task_with_leading_action_verb(text: str) -> None:
    assert detect_type(text) == ContentType.TODO_LIST


@pytest.mark.parametrize(
    "text",
    ["[ ] Complete the report", "[x] Finish homework", "[] Buy groceries"],
)
def test_detect_task_with_checkbox(text: str) -> None:
    assert detect_type(text) == ContentType.TODO_LIST


@pytest.mark.parametrize(
    "text",
    [
        "Meeting tomorrow at 3pm",
        "Call next week",
        "Submit by Friday",
        "URGENT: Review document",
        "Important meeting today",
    ],
)
def test_detect_task_with_time_or_priority(text: str) -> None:
    assert detect_type(text) == ContentType.TODO_LIST


@pytest.mark.parametrize(
    "text",
    [
        "- Milk\n- Eggs\n- Bread",
        "- Milk\n- Eggs\n- Bread\n- Butter",
        "* Apples\n* Oranges\n* Bananas",
        "• Item 1\n• Item 2\n• Item 3",
        "1. Wake up\n2. Exercise\n3. Breakfast",
        "1) First item\n2) Second item",
        "Shopping list:\n- Milk\n- Eggs",
        "Things to buy:\napples\noranges",
        "Milk\nEggs\nBread\nButter",
        "Buy these items:\n- Milk\n- Eggs",
    ],
)
def test_detect_list(text: str) -> None:
    assert detect_type(text) == ContentType.LIST


@pytest.mark.parametrize(
    "text",
    [
        "This is a long reflective note about today's meeting. "
        "It covers several topics and includes detailed observations.",
        "Random thought I had about improving the workflow.\n\n"
        "This could really help with productivity.",
        "Just a random thought",
        "Hello",
    ],
)
def test_detect_note(text: str) -> None:
    assert detect_type(text) == ContentType.NOTE


@pytest.mark.parametrize("text", ["", "   ", "   \n  \t  "])
def test_detect_blank_defaults_to_note(text: str) -> None:
    assert detect_type(text) == ContentType.NOTE


def test_task_score_short_one_liner_bonus() -> None:
    # leading verb 2.5 + verb anywhere 0.5 + priority 1.5 + one-liner 1.0
    assert task_score("Call mom ASAP") == pytest.approx(5.5)


def test_task_score_no_bonus_for_multiline() -> None:
    assert task_score("Call mom\nASAP") == pytest.approx(4.5)


def test_task_score_no_bonus_without_strong_indicator() -> None:
    # "do" only matches as a substring; not a strong signal.
    assert task_score("random") == pytest.approx(0.5)


def test_task_score_keywords_match_as_substrings() -> None:
    # "at" inside "data" counts as a time indicator.
    assert task_score("data") == pytest.approx(2.0)


def test_list_score_bullets_and_simple_lines() -> None:
    assert list_score("- Milk\n- Eggs\n- Bread") == pytest.approx(7.5)


def test_list_score_numbered_two_items() -> None:
    assert list_score("1. First\n2. Second") == pytest.approx(5.0)


def test_list_score_numbered_lines_need_ascii_digits() -> None:
    assert list_score("١. one\n٢. two") == pytest.approx(0.0)


def test_list_score_single_bullet_is_not_a_list() -> None:
    assert list_score("- Milk") == pytest.approx(0.0)


def test_list_score_simple_list_requires_all_short_lines() -> None:
    text = "Milk\nEggs\n" + "x" * 60
    assert list_score(text) == pytest.approx(0.0)


def test_note_score_baseline_never_zero() -> None:
    assert note_score("") == pytest.approx(1.0)
    assert note_score("Hello") == pytest.approx(1.0)


def test_note_score_paragraph_break() -> None:
    assert note_score("Idea one\n\nIdea two") == pytest.approx(2.5)


def test_note_score_counts_marks_across_string() -> None:
    assert note_score("Wow!?") == pytest.approx(2.5)


def test_length_thresholds_count_emoji_as_two_units() -> None:
    # 45 emoji are 90 UTF-16 units, pushing the one-liner past 100.
    assert task_score("Call mom ASAP " + "🎉" * 45) == pytest.approx(4.5)
    assert note_score("🎉" * 51) == pytest.approx(3.0)
    assert note_score("🎉" * 50) == pytest.approx(1.0)


def test_simple_list_line_length_counts_emoji_as_two_units() -> None:
    assert list_score("Milk\nEggs\n" + "🍞" * 25) == pytest.approx(0.0)
    assert list_score("Milk\nEggs\n" + "🍞" * 24) == pytest.approx(2.0)


def test_note_score_long_wordy_text() -> None:
    text = " ".join(["word"] * 25)
    # length > 100 (2.0) + > 20 words (1.0) + baseline
    assert note_score(text) == pytest.approx(4.0)


def test_score_content_returns_triple() -> None:
    scores = score_content("- Milk\n- Eggs\n- Bread")
    assert scores == ScoreBreakdown(task=0.5, list=7.5, note=1.0)


def test_pick_type_tie_between_list_and_task_goes_to_task() -> None:
    assert _pick_type(ScoreBreakdown(task=3.0, list=3.0, note=1.0)) == ContentType.TODO_LIST


def test_pick_type_tie_between_list_and_note_goes_to_note() -> None:
    assert _pick_type(ScoreBreakdown(task=1.0, list=2.0, note=2.0)) == ContentType.NOTE


def test_pick_type_full_tie_goes_to_note() -> None:
    assert _pick_type(ScoreBreakdown(task=1.0, list=1.0, note=1.0)) == ContentType.NOTE


def test_confidence_clear_task() -> None:
    assert get_confidence("Buy milk tomorrow", ContentType.TODO_LIST) > 0.7


def test_confidence_clear_list() -> None:
    assert get_confidence("- Milk\n- Eggs\n- Bread", ContentType.LIST) > 0.7


def test_confidence_clear_note() -> None:
    text = (
        "This is a very long piece of narrative text that clearly looks like a note. "
        "It has multiple sentences and a descriptive tone."
    )
    assert get_confidence(text, ContentType.NOTE) > 0.7


def test_confidence_weak_signal_is_dampened() -> None:
    assert get_confidence("Hello world", ContentType.NOTE) == pytest.approx(0.6)


def test_confidence_wrong_type_is_low() -> None:
    assert get_confidence("- Milk\n- Eggs", ContentType.TODO_LIST) < 0.5


def test_confidence_blank_input() -> None:
    assert get_confidence("", ContentType.NOTE) == 0.5
    assert get_confidence("   ", ContentType.LIST) == 0.0
    assert get_confidence("", ContentType.TODO_LIST) == 0.0


@pytest.mark.parametrize(
    "text",
    [
        "Call dentist tomorrow at 3pm",
        "- Milk\n- Eggs\n- Bread\n- Butter",
        "Hello world",
        "Things to buy:\napples\noranges",
        "Random thought I had.\n\nAnother one!",
    ],
)
def test_winner_confidence_is_maximal(text: str) -> None:
    winner = detect_type(text)
    winner_confidence = get_confidence(text, winner)
    for content_type in ContentType:
        confidence = get_confidence(text, content_type)
        assert 0.0 <= confidence <= 1.0
        assert winner_confidence >= confidence


def test_functions_are_idempotent() -> None:
    text = "Shopping list:\n- Milk\n- Eggs"
    assert detect_type(text) == detect_type(text)
    assert get_confidence(text, ContentType.LIST) == get_confidence(text, ContentType.LIST)
    assert extract_list_items(text) == extract_list_items(text)


def test_due_date_tomorrow(fixed_now: datetime) -> None:
    assert extract_due_date("Call mom tomorrow", now=fixed_now) == datetime(2026, 2, 15)


def test_due_date_today_and_tonight(fixed_now: datetime) -> None:
    assert extract_due_date("Meeting today", now=fixed_now) == datetime(2026, 2, 14)
    assert extract_due_date("Dinner TONIGHT", now=fixed_now) == datetime(2026, 2, 14)


def test_due_date_today_wins_over_tomorrow(fixed_now: datetime) -> None:
    assert extract_due_date("Not today, tomorrow", now=fixed_now) == datetime(2026, 2, 14)


def test_due_date_next_week_rolls_over_year() -> None:
    now = datetime(2026, 12, 29, 23, 59)
    assert extract_due_date("Call next week", now=now) == datetime(2027, 1, 5)


def test_due_date_none_without_keyword(fixed_now: datetime) -> None:
    assert extract_due_date("Buy milk", now=fixed_now) is None


def test_due_date_defaults_to_local_clock() -> None:
    due = extract_due_date("Call mom tomorrow")
    assert due is not None
    assert (due.hour, due.minute, due.second, due.microsecond) == (0, 0, 0, 0)
    assert 0 < (due - datetime.now()).total_seconds() <= 86400


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("- Milk\n- Eggs\n- Bread", ["Milk", "Eggs", "Bread"]),
        ("1. First\n2. Second", ["First", "Second"]),
        ("1) First item\n2) Second item\n3) Third item", ["First item", "Second item", "Third item"]),
        ("* Apples\n* Oranges\n* Bananas", ["Apples", "Oranges", "Bananas"]),
        ("• Item 1\n• Item 2\n• Item 3", ["Item 1", "Item 2", "Item 3"]),
        ("- Milk\n* Eggs\n• Bread", ["Milk", "Eggs", "Bread"]),
        ("-  Milk  \n-  Eggs  \n-  Bread  ", ["Milk", "Eggs", "Bread"]),
        ("Shopping list:\n- Milk\n- Eggs", ["Milk", "Eggs"]),
        ("Milk\nEggs\nBread\nButter", ["Milk", "Eggs", "Bread", "Butter"]),
        ("Things to buy:\napples\noranges", ["apples", "oranges"]),
    ],
)
def test_extract_list_items(text: str, expected: list) -> None:
    assert extract_list_items(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "Buy milk", "This is just a paragraph of text", "Only one line\n"],
)
def test_extract_list_items_empty_for_non_lists(text: str) -> None:
    assert extract_list_items(text) == []


def test_extract_list_items_drops_plain_lines_after_bullets() -> None:
    assert extract_list_items("- Milk\nremember the coupon\n- Eggs") == ["Milk", "Eggs"]


def test_extract_list_items_keeps_plain_line_before_first_bullet() -> None:
    assert extract_list_items("Groceries\n- Milk\n- Eggs") == ["Groceries", "Milk", "Eggs"]


def test_extract_list_items_skips_empty_bullets() -> None:
    assert extract_list_items("- \n- Milk\n- Eggs") == ["Milk", "Eggs"]


def test_extract_list_items_ignores_sentences_and_labels() -> None:
    text = "Pack these:\nSocks\nThe charger is in the drawer.\nShoes"
    assert extract_list_items(text) == ["Socks", "Shoes"]


def test_extract_list_items_ignores_non_ascii_numbering() -> None:
    assert extract_list_items("١. one\n٢. two") == []


def test_extract_list_items_single_bullet_still_counts() -> None:
    assert extract_list_items("- Milk") == ["Milk"]


def test_analyze_capture_task(fixed_now: datetime) -> None:
    analysis = analyze_capture("Buy milk tomorrow", now=fixed_now)
    assert analysis.type == ContentType.TODO_LIST
    assert analysis.detected_type == ContentType.TODO_LIST
    assert analysis.due_date == datetime(2026, 2, 15)
    assert analysis.items == ()
    assert analysis.title == "Buy milk tomorrow"
    assert analysis.needs_confirmation is False
    assert analysis.confidence == pytest.approx(5.0 / 6.0)


def test_analyze_capture_flags_low_confidence() -> None:
    assert analyze_capture("Hello world").needs_confirmation is False
    assert analyze_capture("Hello world", min_confidence=0.7).needs_confirmation is True


def test_analyze_capture_forced_type_skips_confirmation() -> None:
    analysis = analyze_capture("Hello world", forced_type=ContentType.LIST, min_confidence=0.9)
    assert analysis.type == ContentType.LIST
    assert analysis.detected_type == ContentType.NOTE
    assert analysis.confidence == 0.0
    assert analysis.needs_confirmation is False


def test_analyze_capture_blank_input() -> None:
    analysis = analyze_capture("   ")
    assert analysis.type == ContentType.NOTE
    assert analysis.confidence == 0.5
    assert analysis.title == ""
    assert analysis.due_date is None


def test_analyze_capture_can_skip_extractors(fixed_now: datetime) -> None:
    analysis = analyze_capture(
        "- Milk tomorrow\n- Eggs",
        include_due_date=False,
        include_items=False,
        now=fixed_now,
    )
    assert analysis.type == ContentType.LIST
    assert analysis.due_date is None
    assert analysis.items == ()
