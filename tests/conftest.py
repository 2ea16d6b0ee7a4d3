import io

import pytest
from rich.console import Console

from gibman.reporting import Reporter


class RecordingReporter(Reporter):
    """Keeps diagnostics in memory instead of printing them."""

    def __init__(self):
        self.messages = []

    def debug(self, tag, message):
        self.messages.append(("debug", tag, message))

    def info(self, tag, message):
        self.messages.append(("info", tag, message))

    def warning(self, tag, message):
        self.messages.append(("warning", tag, message))

    def error(self, tag, message):
        self.messages.append(("error", tag, message))

    def of_level(self, level):
        return [m for lvl, _, m in self.messages if lvl == level]


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, highlight=False)


@pytest.fixture
def touch():
    """Create a file (and its parent dirs) and return its path as a string."""
    def _touch(path, content=b""):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)
    return _touch
