"""
Reporting Module
----------------
Diagnostics collaborator handed to the resolution core. Messages are tagged
the same way everywhere (``[Search] ...``, ``[Config] ...``).
"""

import sys
from typing import Optional, TextIO

from rich.console import Console


class Reporter:
    """Receives diagnostics from the core. The base class discards them."""

    def debug(self, tag: str, message: str) -> None:
        pass

    def info(self, tag: str, message: str) -> None:
        pass

    def warning(self, tag: str, message: str) -> None:
        pass

    def error(self, tag: str, message: str) -> None:
        pass


class ConsoleReporter(Reporter):
    """Prints tagged, colored diagnostics to stderr."""

    _STYLES = {
        "debug": "dim",
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
    }

    def __init__(self, verbose: bool = False, file: Optional[TextIO] = None,
                 console: Optional[Console] = None):
        self.verbose = verbose
        self._console = console or Console(file=file or sys.stderr, highlight=False)

    def _emit(self, level: str, tag: str, message: str) -> None:
        # markup=False keeps "[Tag]" and paths with brackets literal
        self._console.print(f"[{tag}] {message}", style=self._STYLES[level],
                            markup=False, soft_wrap=True)

    def debug(self, tag: str, message: str) -> None:
        if self.verbose:
            self._emit("debug", tag, message)

    def info(self, tag: str, message: str) -> None:
        self._emit("info", tag, message)

    def warning(self, tag: str, message: str) -> None:
        self._emit("warning", tag, f"Warning: {message}")

    def error(self, tag: str, message: str) -> None:
        self._emit("error", tag, message)


NULL_REPORTER = Reporter()
