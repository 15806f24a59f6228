"""Minimal text spinner for reporting download progress."""

from __future__ import annotations

import sys
from typing import TextIO

_FRAMES = "|/-\\"
_CLEAR = "\r\x1b[2K"


class Spinner:
    """A one-line status display with a prefix and a changing message.

    On a terminal the line is redrawn in place; on other streams only
    printed lines and the final message are written.
    """

    def __init__(self, prefix: str, stream: TextIO | None = None) -> None:
        self.prefix = prefix
        self.stream = stream if stream is not None else sys.stderr
        self.message = ""
        self.finished = False
        self._frame = 0
        isatty = getattr(self.stream, "isatty", None)
        self._interactive = bool(isatty()) if callable(isatty) else False

    def _draw(self) -> None:
        if self._interactive and not self.finished:
            frame = _FRAMES[self._frame]
            self.stream.write(f"{_CLEAR}{self.prefix} {frame} {self.message}")
            self.stream.flush()

    def set_message(self, message: str) -> None:
        self.message = message
        self._frame = (self._frame + 1) % len(_FRAMES)
        self._draw()

    def println(self, message: str) -> None:
        """Print a line above the spinner."""
        if self._interactive:
            self.stream.write(_CLEAR)
        self.stream.write(message + "\n")
        self._draw()
        self.stream.flush()

    def finish(self, message: str) -> None:
        """Show a final message and stop updating."""
        self.message = message
        if self._interactive:
            self.stream.write(_CLEAR)
        self.stream.write(f"{self.prefix} {message}\n")
        self.stream.flush()
        self.finished = True