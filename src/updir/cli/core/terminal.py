"""Low-level terminal operations for the interactive selector.

The selector draws on stderr so that stdout stays free for the selected
path, which a shell function captures.
"""

from __future__ import annotations

import os
import signal
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from updir.core.constants import (
    CLEAR_DOWN,
    DISABLE_MOUSE,
    ENABLE_MOUSE,
    HIDE_CURSOR,
    SHOW_CURSOR,
)
from updir.render.terminal import LineRenderer


class Terminal:
    """Terminal I/O for a single-line TUI: raw input, mouse, cursor."""

    def __init__(self, stream: Optional[TextIO] = None, fd: Optional[int] = None) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.fd = fd if fd is not None else sys.stdin.fileno()
        self.renderer = LineRenderer()
        self._saved_settings: Optional[list] = None

    def write(self, text: str) -> None:
        """Write text to the terminal."""
        self.stream.write(text)
        self.stream.flush()

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    def enable_mouse(self) -> None:
        """Report clicks, wheel and pointer motion as SGR sequences."""
        self.write(ENABLE_MOUSE)

    def disable_mouse(self) -> None:
        self.write(DISABLE_MOUSE)

    def draw(self, segments: list[tuple[str, bool]]) -> None:
        """Redraw the segment row in place."""
        self.write(self.renderer.render(segments))

    def enter_raw_mode(self) -> None:
        """Switch stdin to raw mode (Unix only), remembering the old settings."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios
            return
        self._saved_settings = termios.tcgetattr(self.fd)
        tty.setraw(self.fd)

    def leave_raw_mode(self) -> None:
        if self._saved_settings is None:
            return
        import termios
        termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_settings)
        self._saved_settings = None

    def enter(self) -> None:
        """Put the terminal into interactive mode."""
        self.enter_raw_mode()
        self.hide_cursor()
        self.enable_mouse()

    def restore(self) -> None:
        """Undo ``enter`` and erase the selector line."""
        self.leave_raw_mode()
        self.show_cursor()
        self.disable_mouse()
        self.write(f"\r{CLEAR_DOWN}")

    @contextmanager
    def managed_mode(self) -> Iterator[Terminal]:
        """Interactive mode for the duration of the block, restored on any exit."""
        try:
            self.enter()
            yield self
        finally:
            self.restore()

    def suspend(self) -> None:
        """Stop the process like Ctrl-Z would, resuming interactive mode after."""
        sigtstp = getattr(signal, "SIGTSTP", None)
        if sigtstp is None:
            return
        self.restore()
        signal.raise_signal(sigtstp)
        # Execution continues here after the shell resumes the process
        self.enter()

    def interrupt(self) -> None:
        """End the process as if it received SIGINT.

        Returns only on platforms without job-control signals, where the
        caller treats Ctrl-C as quit.
        """
        if not hasattr(signal, "SIGTSTP"):
            return
        self.restore()
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        signal.raise_signal(signal.SIGINT)
        os._exit(128 + signal.SIGINT)
