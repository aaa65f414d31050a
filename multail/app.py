"""The log viewer application: file discovery, navigation and tailing."""

from __future__ import annotations

import curses
import os
import sys
from pathlib import Path
from typing import Iterator, Sequence

from .log_parser import LogEntry, LogParser
from .ui import UI, UIEvent, ViewState


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield regular files under ``root`` depth first, entries sorted by name.

    Symbolic links below the root are neither followed nor listed; unreadable
    entries are skipped.
    """
    if root.is_file():
        yield root
        return
    if not root.is_dir():
        return
    yield from _walk_dir(root)


def _walk_dir(directory: Path | str) -> Iterator[Path]:
    try:
        with os.scandir(directory) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        try:
            if entry.is_file(follow_symlinks=False):
                yield Path(entry.path)
            elif entry.is_dir(follow_symlinks=False):
                yield from _walk_dir(entry.path)
        except OSError:
            continue


class LogViewer:
    """State and behaviour of the two-panel log viewer."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        self.files: list[Path] = []
        self.current_file: Path | None = None
        self.log_entries: list[LogEntry] = []
        self.state = ViewState()
        self.parser = LogParser()
        self.is_tailing = True
        self.is_file_list_focused = True
        self.last_file_size = 0
        self.load_files()

    def load_files(self) -> None:
        """Collect every regular file below the directory."""
        self.files = list(_walk_files(self.directory))

    def load_log_file(self, file: Path | str) -> None:
        """Read and parse ``file``, making it the current file."""
        path = Path(file)
        with open(path, encoding="utf-8", newline="") as handle:
            content = handle.read()
        self.log_entries = self.parser.parse(content)
        self.current_file = path
        self.last_file_size = path.stat().st_size

        self.state.log_selected = None
        self.state.clear_expanded_entries()
        self.state.reset_scroll()
        self.is_tailing = True

        if self.log_entries:
            self.state.log_selected = len(self.log_entries) - 1

    def _visible_line_count(self) -> int:
        expanded = self.state.expanded_entries
        return sum(
            len(entry.lines) if index in expanded else 1
            for index, entry in enumerate(self.log_entries)
        )

    def _navigate_files(self, up: bool) -> None:
        selected = self.state.file_selected
        if selected is None:
            new_selected = 0
        elif up:
            new_selected = selected - 1 if selected > 0 else selected
        else:
            new_selected = selected + 1 if selected < len(self.files) - 1 else selected

        if new_selected != (selected or 0):
            self.state.file_selected = new_selected
            self.load_log_file(self.files[new_selected])

    def _navigate_logs(self, up: bool) -> None:
        selected = self.state.log_selected
        total = self._visible_line_count()
        if selected is None:
            new_selected = 0
        elif up:
            new_selected = selected - 1 if selected > 0 else selected
        else:
            new_selected = selected + 1 if selected < total - 1 else selected

        if new_selected != (selected or 0):
            self.state.log_selected = new_selected
            self.is_tailing = new_selected >= total - 1

    def _entry_at_line(self, line: int) -> int:
        """Index of the entry that contains visible row ``line``."""
        expanded = self.state.expanded_entries
        line_count = 0
        for index, entry in enumerate(self.log_entries):
            lines = len(entry.lines) if index in expanded else 1
            if line < line_count + lines:
                return index
            line_count += lines
        return 0

    def handle_navigation(self, event: UIEvent) -> None:
        """Apply a user event to the viewer state."""
        state = self.state
        match event:
            case UIEvent.UP:
                if self.is_file_list_focused:
                    self._navigate_files(up=True)
                else:
                    self._navigate_logs(up=True)
            case UIEvent.DOWN:
                if self.is_file_list_focused:
                    self._navigate_files(up=False)
                else:
                    self._navigate_logs(up=False)
            case UIEvent.LEFT:
                if self.is_file_list_focused:
                    pass
                elif state.is_at_beginning():
                    self.is_file_list_focused = True
                else:
                    state.scroll_log_left()
            case UIEvent.RIGHT:
                if self.is_file_list_focused:
                    self.is_file_list_focused = False
                else:
                    state.scroll_log_right()
            case UIEvent.SWITCH_TO_FILE_LIST:
                self.is_file_list_focused = True
            case UIEvent.SWITCH_TO_LOG_VIEW:
                self.is_file_list_focused = False
            case UIEvent.TOGGLE_EXPAND:
                if not self.is_file_list_focused and state.log_selected is not None:
                    state.toggle_expand(self._entry_at_line(state.log_selected))
            case UIEvent.TOGGLE_TAIL:
                if not self.is_file_list_focused:
                    self.is_tailing = not self.is_tailing
                    if self.is_tailing and self.log_entries:
                        state.log_selected = len(self.log_entries) - 1
            case UIEvent.SCROLL_LEFT:
                if not self.is_file_list_focused:
                    state.scroll_log_left()
            case UIEvent.SCROLL_RIGHT:
                if not self.is_file_list_focused:
                    state.scroll_log_right()
            case _:
                pass

    def handle_file_update(self) -> None:
        """Parse whatever has been appended to the current file since last read."""
        if self.current_file is None:
            return
        current_size = self.current_file.stat().st_size
        if current_size <= self.last_file_size:
            return
        with open(self.current_file, "rb") as handle:
            handle.seek(self.last_file_size)
            new_content = handle.read().decode("utf-8")

        self.log_entries.extend(self.parser.parse(new_content))
        self.last_file_size = current_size

        if self.is_tailing and self.log_entries:
            self.state.log_selected = len(self.log_entries) - 1

    def run(self, screen) -> None:
        """Main loop on a curses screen until the user quits."""
        ui = UI(screen)
        try:
            if self.files:
                self.state.file_selected = 0
                self.load_log_file(self.files[0])

            while True:
                self.handle_file_update()
                ui.draw(
                    self.state,
                    self.files,
                    self.log_entries,
                    self.current_file,
                    self.is_file_list_focused,
                )
                event = ui.handle_events()
                if event is None:
                    continue
                if event is UIEvent.QUIT:
                    break
                self.handle_navigation(event)
        finally:
            ui.cleanup()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the viewer on the directory given as first argument, or ".""."""
    args = sys.argv[1:] if argv is None else list(argv)
    directory = Path(args[0]) if args else Path(".")
    viewer = LogViewer(directory)
    curses.wrapper(viewer.run)
    return 0