# multail

A curses log viewer. It lists every file under a directory and shows the
chosen file's entries, and it picks up lines as they are added to the file.

## Usage

```
multail [DIRECTORY]
```

`DIRECTORY` defaults to the current directory. If a single file is given
instead, only that file is listed. Every regular file beneath the
directory shows up in the left-hand panel. The directory is searched
recursively and entries are ordered by name. Symbolic links below the
directory are not followed, and unreadable entries are skipped.

The first file is opened when the viewer starts. The open file is checked
about every 100 ms. When it has grown, the appended text is parsed and
added to the view.

## Log format

A line of the form

```
[2024-01-01 12:00:00] [ERROR] something went wrong
```

begins a new entry. Any following lines that do not have this shape are
added to that entry, so stack traces and other multi-line output become
one entry. Levels `DEBUG`, `INFO`, `WARN` and `ERROR` are shown in gray,
white, yellow and red. Lines that come before the first header are each
shown as a separate `DEBUG` entry.

## Keys

| Key     | Action                                                          |
|---------|-----------------------------------------------------------------|
| `q`     | quit                                                            |
| Up/Down | move in the focused panel                                       |
| Right   | focus the log panel, or scroll right when it has focus          |
| Left    | scroll left, or go back to the file list at the start of a line |
| Enter   | focus the log panel                                             |
| Esc     | focus the file list                                             |
| Space   | expand or collapse a multi-line entry (shown by ▶ / ▼)          |
| `t`     | turn following the end of the file on or off                    |
| `h`/`l` | scroll log lines left / right by four columns                   |

In the file list, moving the selection opens the newly selected file.
Moving the cursor in the log panel off the last line stops following the
file. Moving it back to the last line starts following again. While
following, the cursor is placed on the newest entry whenever the file
grows. Opening a file collapses all entries and resets horizontal scroll.

## Library use

The parser can be used on its own:

```python
from multail.log_parser import LogParser, LogLevel

for entry in LogParser().parse(text):
    print(entry.timestamp, entry.level, entry.message, entry.lines)

LogLevel.from_str("WARN")   # LogLevel.WARN
LogLevel.from_str("TRACE")  # None
```

The viewer's state can be driven without a terminal. The screen is only
needed by `run`:

```python
from multail.app import LogViewer
from multail.ui import UIEvent

viewer = LogViewer("logs")
viewer.load_log_file(viewer.files[0])
viewer.handle_navigation(UIEvent.RIGHT)
viewer.handle_file_update()
```

## Limitations

- Files are read as UTF-8. A file that is not valid UTF-8 raises an error.
- The file list is built once, at start-up. Files created later do not appear.
- Only growth of the open file is noticed. A file that is truncated or
  replaced is not reloaded until it is selected again.
- There is no searching or filtering of entries.
- The viewer needs Python's `curses` module. It is not available on
  Windows by default.