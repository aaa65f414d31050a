"""Terminal viewer for tailing log files in a directory, with a parser for multi-line log entries."""

__version__ = "0.1.0"

__all__ = ["__version__"]