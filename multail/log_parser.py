"""Parsing of log text into multi-line entries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class LogLevel(Enum):
    """Severity of a log entry."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @classmethod
    def from_str(cls, s: str) -> LogLevel | None:
        """Return the level named exactly by ``s``, or None."""
        try:
            return cls(s)
        except ValueError:
            return None

    def color(self) -> str:
        """ANSI escape sequence used to colour this level."""
        return _ANSI_COLORS[self.value]


_ANSI_COLORS = {
    "DEBUG": "\x1b[90m",
    "INFO": "\x1b[37m",
    "WARN": "\x1b[33m",
    "ERROR": "\x1b[31m",
}


@dataclass
class LogEntry:
    """One log record, possibly spanning several lines."""

    timestamp: str
    level: LogLevel
    message: str
    lines: list[str] = field(default_factory=list)


_ENTRY_RE = re.compile(r"^\[(.*?)\] \[(DEBUG|INFO|WARN|ERROR)\] (.*)")


def _split_lines(content: str) -> Iterator[str]:
    """Split on newlines, dropping a final empty line and trailing carriage returns."""
    if not content:
        return
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


class LogParser:
    """Groups lines of the form ``[timestamp] [LEVEL] message`` into entries."""

    def __init__(self) -> None:
        self._pattern = _ENTRY_RE

    def parse(self, content: str) -> list[LogEntry]:
        """Parse ``content`` into a list of entries, in order."""
        entries: list[LogEntry] = []
        current: LogEntry | None = None

        for line in _split_lines(content):
            match = self._pattern.match(line)
            if match:
                if current is not None:
                    entries.append(current)
                    current = None
                level = LogLevel.from_str(match.group(2))
                if level is not None:
                    current = LogEntry(
                        timestamp=match.group(1),
                        level=level,
                        message=match.group(3),
                        lines=[line],
                    )
            elif current is not None:
                current.lines.append(line)
            else:
                entries.append(
                    LogEntry(timestamp="", level=LogLevel.DEBUG, message=line, lines=[line])
                )

        if current is not None:
            entries.append(current)
        return entries