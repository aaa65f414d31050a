import pytest

from multail.log_parser import LogEntry, LogLevel, LogParser


@pytest.fixture
def parser():
    return LogParser()


@pytest.mark.parametrize(
    "name, level",
    [
        ("DEBUG", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("WARN", LogLevel.WARN),
        ("ERROR", LogLevel.ERROR),
    ],
)
def test_from_str_known_levels(name, level):
    assert LogLevel.from_str(name) is level


@pytest.mark.parametrize("name", ["debug", "WARNING", "", "TRACE"])
def test_from_str_unknown_levels(name):
    assert LogLevel.from_str(name) is None


@pytest.mark.parametrize(
    "level, code",
    [
        (LogLevel.DEBUG, "\x1b[90m"),
        (LogLevel.INFO, "\x1b[37m"),
        (LogLevel.WARN, "\x1b[33m"),
        (LogLevel.ERROR, "\x1b[31m"),
    ],
)
def test_colors(level, code):
    assert level.color() == code


def test_parse_empty(parser):
    assert parser.parse("") == []


def test_parse_single_entry(parser):
    line = "[2024-01-01 10:00:00] [INFO] service started"
    entries = parser.parse(line + "\n")
    assert entries == [
        LogEntry(
            timestamp="2024-01-01 10:00:00",
            level=LogLevel.INFO,
            message="service started",
            lines=[line],
        )
    ]


def test_continuation_lines_join_entry(parser):
    content = (
        "[t1] [ERROR] boom\n"
        "  at frame one\n"
        "  at frame two\n"
        "[t2] [WARN] careful\n"
    )
    entries = parser.parse(content)
    assert len(entries) == 2
    assert entries[0].lines == ["[t1] [ERROR] boom", "  at frame one", "  at frame two"]
    assert entries[0].level is LogLevel.ERROR
    assert entries[1].lines == ["[t2] [WARN] careful"]
    assert entries[1].message == "careful"


def test_leading_unmatched_lines_become_debug_entries(parser):
    entries = parser.parse("plain one\nplain two\n[t] [INFO] hi")
    assert [e.lines for e in entries] == [["plain one"], ["plain two"], ["[t] [INFO] hi"]]
    assert entries[0].level is LogLevel.DEBUG
    assert entries[0].timestamp == ""
    assert entries[0].message == "plain one"


def test_unknown_level_is_continuation(parser):
    entries = parser.parse("[t] [DEBUG] a\n[t] [TRACE] b")
    assert len(entries) == 1
    assert entries[0].lines == ["[t] [DEBUG] a", "[t] [TRACE] b"]


def test_crlf_is_stripped(parser):
    entries = parser.parse("[t] [INFO] a\r\nmore\r\n")
    assert entries[0].lines == ["[t] [INFO] a", "more"]
    assert entries[0].message == "a"


def test_blank_lines_are_kept_as_continuations(parser):
    entries = parser.parse("[t] [INFO] a\n\nb")
    assert entries[0].lines == ["[t] [INFO] a", "", "b"]


def test_total_lines_preserved(parser):
    content = "x\n[t] [INFO] a\ny\nz\n[t] [ERROR] b\n"
    entries = parser.parse(content)
    flat = [line for entry in entries for line in entry.lines]
    assert flat == content.splitlines()