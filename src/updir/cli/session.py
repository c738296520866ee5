"""Interactive picker session on the controlling terminal."""

from __future__ import annotations

import errno
import os
import sys
from pathlib import Path
from typing import Optional

from updir.cli.core.input import InputReader
from updir.cli.core.terminal import Terminal
from updir.core.controller import Controller
from updir.core.keymap import Keymap
from updir.core.segments import split_path
from updir.core.selection import SelectionModel


class PickerApp:
    """
    Interactive ancestor picker.

    The segment row is drawn on stderr; keys and mouse reports are read
    from stdin. The terminal is restored on every way out of ``run``.
    """

    def __init__(self, path: Path, keymap: Keymap = Keymap.VIM) -> None:
        self.path = path
        self.keymap = keymap
        self.terminal: Optional[Terminal] = None
        self.input: Optional[InputReader] = None

    def run(self) -> Optional[str]:
        """Return the selected ancestor path, or None if the user quit."""
        fd = stdin_fd()
        self.terminal = Terminal(fd=fd)
        self.input = InputReader(fd=fd)

        model = SelectionModel(split_path(self.path))
        controller = Controller(
            model,
            self.keymap,
            on_suspend=self.terminal.suspend,
            on_interrupt=self.terminal.interrupt,
        )
        with self.terminal.managed_mode():
            return controller.run(self.input, self.terminal)


def stdin_fd() -> int:
    """File descriptor of stdin, which must be a terminal."""
    if sys.stdin is None:
        raise OSError(errno.EBADF, "standard input is closed")
    fd = sys.stdin.fileno()
    if not os.isatty(fd):
        raise OSError(errno.ENOTTY, "standard input is not a terminal")
    return fd


def run_picker(path: Path, keymap: Keymap = Keymap.VIM) -> Optional[str]:
    """Launch the picker on ``path``."""
    app = PickerApp(path, keymap)
    return app.run()
