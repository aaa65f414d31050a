import curses

import pytest

from multail.log_parser import LogEntry, LogLevel
from multail.ui import UIEvent, ViewState, build_log_lines, event_for_key, log_title


def _entry(*lines, level=LogLevel.INFO):
    return LogEntry(timestamp="t", level=level, message=lines[0], lines=list(lines))


def test_toggle_expand_round_trip():
    state = ViewState()
    state.toggle_expand(3)
    assert state.expanded_entries == {3}
    state.toggle_expand(3)
    assert state.expanded_entries == set()


def test_clear_expanded_entries():
    state = ViewState()
    state.toggle_expand(1)
    state.toggle_expand(2)
    state.clear_expanded_entries()
    assert state.expanded_entries == set()


def test_scroll_left_at_start_stays_zero():
    state = ViewState()
    state.scroll_log_left()
    assert state.log_scroll_offset == 0
    assert state.is_at_beginning()


def test_scroll_right_then_left_returns_to_start():
    state = ViewState()
    state.scroll_log_right()
    assert not state.is_at_beginning()
    state.scroll_log_left()
    assert state.is_at_beginning()


def test_scroll_steps_are_four():
    state = ViewState()
    state.scroll_log_right()
    assert state.log_scroll_offset == 4


def test_scroll_right_saturates():
    state = ViewState(log_scroll_offset=65535)
    state.scroll_log_right()
    assert state.log_scroll_offset == 65535


def test_reset_scroll():
    state = ViewState()
    state.scroll_log_right()
    state.scroll_log_right()
    state.reset_scroll()
    assert state.is_at_beginning()


@pytest.mark.parametrize(
    "key, event",
    [
        (ord("q"), UIEvent.QUIT),
        (27, UIEvent.SWITCH_TO_FILE_LIST),
        (10, UIEvent.SWITCH_TO_LOG_VIEW),
        (curses.KEY_ENTER, UIEvent.SWITCH_TO_LOG_VIEW),
        (curses.KEY_UP, UIEvent.UP),
        (curses.KEY_DOWN, UIEvent.DOWN),
        (curses.KEY_LEFT, UIEvent.LEFT),
        (curses.KEY_RIGHT, UIEvent.RIGHT),
        (ord(" "), UIEvent.TOGGLE_EXPAND),
        (ord("t"), UIEvent.TOGGLE_TAIL),
        (ord("h"), UIEvent.SCROLL_LEFT),
        (ord("l"), UIEvent.SCROLL_RIGHT),
        ("q", UIEvent.QUIT),
    ],
)
def test_event_for_key(key, event):
    assert event_for_key(key) is event


@pytest.mark.parametrize("key", [ord("x"), ord("Q"), curses.KEY_HOME, "ab"])
def test_event_for_unknown_key(key):
    assert event_for_key(key) is None


def test_collapsed_multi_line_entry_has_marker():
    rows = build_log_lines([_entry("first", "second")], set(), 0)
    assert [(r.text, r.marker) for r in rows] == [("first", " ▶")]


def test_single_line_entry_has_no_marker():
    rows = build_log_lines([_entry("only", level=LogLevel.ERROR)], set(), 0)
    assert [(r.text, r.level, r.marker) for r in rows] == [("only", LogLevel.ERROR, "")]


def test_expanded_entry_shows_all_lines():
    entries = [_entry("a"), _entry("first", "second", "third")]
    rows = build_log_lines(entries, {1}, 0)
    assert [(r.text, r.marker) for r in rows] == [
        ("a", ""),
        ("first", " ▼"),
        ("second", ""),
        ("third", ""),
    ]


def test_scroll_offset_skips_characters():
    rows = build_log_lines([_entry("abcdefgh", "ijklmnop")], {0}, 4)
    assert [r.text for r in rows] == ["efgh", "mnop"]


def test_scroll_offset_past_end_gives_empty_text():
    rows = build_log_lines([_entry("abc")], set(), 8)
    assert rows[0].text == ""


def test_row_count_matches_expansion():
    entries = [_entry("a", "b"), _entry("c", "d", "e"), _entry("f")]
    rows = build_log_lines(entries, {1}, 0)
    expected = sum(len(e.lines) if i == 1 else 1 for i, e in enumerate(entries))
    assert len(rows) == expected


def test_log_title():
    assert log_title(0) == " Logs"
    assert log_title(8) == " Logs (← 8 →)"