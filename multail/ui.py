"""Terminal presentation: view state, key mapping and curses drawing."""

from __future__ import annotations

import curses
from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import islice
from pathlib import Path
from typing import NamedTuple, Sequence

from .log_parser import LogEntry, LogLevel

_SCROLL_STEP = 4
_MAX_SCROLL = 0xFFFF
_ESC = 27


class UIEvent(Enum):
    """An action requested by the user."""

    QUIT = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    TOGGLE_EXPAND = auto()
    TOGGLE_TAIL = auto()
    SCROLL_LEFT = auto()
    SCROLL_RIGHT = auto()
    SWITCH_TO_FILE_LIST = auto()
    SWITCH_TO_LOG_VIEW = auto()


@dataclass
class ViewState:
    """Selection, expansion and scrolling state of the two panels."""

    file_selected: int | None = None
    log_selected: int | None = None
    expanded_entries: set[int] = field(default_factory=set)
    log_scroll_offset: int = 0
    file_offset: int = 0
    log_offset: int = 0

    def toggle_expand(self, index: int) -> None:
        """Expand the entry at ``index`` or collapse it if already expanded."""
        if index in self.expanded_entries:
            self.expanded_entries.remove(index)
        else:
            self.expanded_entries.add(index)

    def clear_expanded_entries(self) -> None:
        self.expanded_entries.clear()

    def scroll_log_left(self) -> None:
        self.log_scroll_offset = max(self.log_scroll_offset - _SCROLL_STEP, 0)

    def scroll_log_right(self) -> None:
        self.log_scroll_offset = min(self.log_scroll_offset + _SCROLL_STEP, _MAX_SCROLL)

    def reset_scroll(self) -> None:
        self.log_scroll_offset = 0

    def is_at_beginning(self) -> bool:
        return self.log_scroll_offset == 0


_CHAR_EVENTS = {
    "q": UIEvent.QUIT,
    " ": UIEvent.TOGGLE_EXPAND,
    "t": UIEvent.TOGGLE_TAIL,
    "h": UIEvent.SCROLL_LEFT,
    "l": UIEvent.SCROLL_RIGHT,
}

_CODE_EVENTS = {
    _ESC: UIEvent.SWITCH_TO_FILE_LIST,
    10: UIEvent.SWITCH_TO_LOG_VIEW,
    13: UIEvent.SWITCH_TO_LOG_VIEW,
    curses.KEY_ENTER: UIEvent.SWITCH_TO_LOG_VIEW,
    curses.KEY_UP: UIEvent.UP,
    curses.KEY_DOWN: UIEvent.DOWN,
    curses.KEY_LEFT: UIEvent.LEFT,
    curses.KEY_RIGHT: UIEvent.RIGHT,
}


def event_for_key(key: int | str) -> UIEvent | None:
    """Map a curses key code (or a one-character string) to an event."""
    if isinstance(key, str):
        if len(key) != 1:
            return None
        key = ord(key)
    if key in _CODE_EVENTS:
        return _CODE_EVENTS[key]
    if 0 <= key < 0x110000:
        return _CHAR_EVENTS.get(chr(key))
    return None


class _RenderedLine(NamedTuple):
    text: str
    level: LogLevel
    marker: str


def build_log_lines(
    entries: Sequence[LogEntry], expanded: set[int], scroll_offset: int
) -> list[_RenderedLine]:
    """Visible rows of the log panel, honouring expansion and horizontal scroll."""
    rows: list[_RenderedLine] = []
    for index, entry in enumerate(entries):
        multi = len(entry.lines) > 1
        if index in expanded:
            for position, line in enumerate(entry.lines):
                marker = " ▼" if position == 0 and multi else ""
                rows.append(_RenderedLine(line[scroll_offset:], entry.level, marker))
        else:
            marker = " ▶" if multi else ""
            rows.append(_RenderedLine(entry.lines[0][scroll_offset:], entry.level, marker))
    return rows


def log_title(scroll_offset: int) -> str:
    """Title of the log panel, showing the horizontal scroll when non-zero."""
    if scroll_offset > 0:
        return f" Logs (← {scroll_offset} →)"
    return " Logs"


def _window_start(selected: int | None, offset: int, count: int, height: int) -> int:
    """First visible row so that the selected row stays on screen."""
    if count == 0 or height <= 0:
        return 0
    offset = min(offset, count - 1)
    target = min(selected or 0, count - 1)
    if target >= offset + height:
        offset = target - height + 1
    if target < offset:
        offset = target
    return offset


_LEVEL_STYLE = {
    LogLevel.DEBUG: "dark_gray",
    LogLevel.INFO: "white",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "red",
}


def _init_colors() -> dict[str, int]:
    try:
        if not curses.has_colors():
            return {}
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        gray = 8 if curses.COLORS >= 16 else curses.COLOR_BLACK
        specs = {
            "dark_gray": (gray, background, curses.A_BOLD if gray == curses.COLOR_BLACK else 0),
            "white": (curses.COLOR_WHITE, background, 0),
            "yellow": (curses.COLOR_YELLOW, background, 0),
            "red": (curses.COLOR_RED, background, 0),
            "cyan": (curses.COLOR_CYAN, background, 0),
            "highlight": (curses.COLOR_WHITE, curses.COLOR_BLUE, 0),
        }
        attrs = {}
        for number, (name, (fg, bg, extra)) in enumerate(specs.items(), start=1):
            curses.init_pair(number, fg, bg)
            attrs[name] = curses.color_pair(number) | extra
        return attrs
    except curses.error:
        return {}


class UI:
    """Draws the file list and log panels on a curses screen and reads keys."""

    def __init__(self, screen) -> None:
        self._screen = screen
        curses.raw()
        curses.noecho()
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            pass
        screen.keypad(True)
        screen.timeout(100)
        self._attrs = _init_colors()

    def _attr(self, name: str) -> int:
        return self._attrs.get(name, 0)

    def _put(self, y: int, x: int, text: str, width: int, attr: int = 0) -> None:
        if width <= 0 or not text:
            return
        try:
            self._screen.addnstr(y, x, text, width, attr)
        except curses.error:
            pass

    def draw(
        self,
        state: ViewState,
        files: Sequence[Path],
        log_entries: Sequence[LogEntry],
        current_file: Path | None,
        is_file_list_focused: bool,
    ) -> None:
        """Render both panels from ``state``."""
        screen = self._screen
        screen.erase()
        height, width = screen.getmaxyx()
        left = round(width * 0.10)

        self._draw_files(state, files, height, max(left - 1, 0), is_file_list_focused)
        if left > 0:
            try:
                screen.vline(0, left - 1, curses.ACS_VLINE, height, self._attr("dark_gray"))
            except curses.error:
                pass
        self._draw_logs(state, log_entries, left, width - left, height)
        screen.refresh()

    def _draw_files(self, state, files, height, list_width, focused) -> None:
        state.file_offset = _window_start(state.file_selected, state.file_offset, len(files), height)
        visible = islice(enumerate(files), state.file_offset, state.file_offset + height)
        for row, (index, path) in enumerate(visible):
            name = Path(path).name
            if index == state.file_selected and focused:
                self._put(row, 0, name.ljust(list_width), list_width, self._attr("highlight"))
            elif index == state.file_selected:
                self._put(row, 0, name, list_width, self._attr("white"))
            else:
                self._put(row, 0, name, list_width)

    def _draw_logs(self, state, log_entries, x, width, height) -> None:
        if width < 2 or height < 2:
            return
        screen = self._screen
        inner_w, inner_h = width - 2, height - 2
        try:
            screen.hline(0, x + 1, curses.ACS_HLINE, inner_w)
            screen.hline(height - 1, x + 1, curses.ACS_HLINE, inner_w)
            screen.vline(1, x, curses.ACS_VLINE, inner_h)
            screen.vline(1, x + width - 1, curses.ACS_VLINE, inner_h)
            screen.addch(0, x, curses.ACS_ULCORNER)
            screen.addch(0, x + width - 1, curses.ACS_URCORNER)
            screen.addch(height - 1, x, curses.ACS_LLCORNER)
            screen.insch(height - 1, x + width - 1, curses.ACS_LRCORNER)
        except curses.error:
            pass
        self._put(0, x + 1, log_title(state.log_scroll_offset), inner_w)

        rows = build_log_lines(log_entries, state.expanded_entries, state.log_scroll_offset)
        state.log_offset = _window_start(state.log_selected, state.log_offset, len(rows), inner_h)
        visible = islice(rows, state.log_offset, state.log_offset + inner_h)
        for row, line in enumerate(visible):
            y = row + 1
            self._put(y, x + 1, line.text, inner_w, self._attr(_LEVEL_STYLE[line.level]))
            used = min(len(line.text), inner_w)
            self._put(y, x + 1 + used, line.marker, inner_w - used, self._attr("cyan"))

    def handle_events(self) -> UIEvent | None:
        """Wait up to 100 ms for a key and return its event, if any."""
        key = self._screen.getch()
        if key == -1:
            return None
        return event_for_key(key)

    def cleanup(self) -> None:
        curses.noraw()
        try:
            curses.curs_set(1)
        except curses.error:
            pass