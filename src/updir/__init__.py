"""
updir: interactively pick a parent directory

Shows the current path as a row of segments, lets you select one with
Vim or Emacs keys or the mouse, and prints the selected ancestor so a
shell function can cd there.

Quick Start:
    $ eval "$(pd --shell-init)"
    $ ud

Library use:
    >>> from updir import SelectionModel, split_path
    >>> model = SelectionModel(split_path("/home/user/project"))
    >>> model.move_by(-2)
    >>> model.selected_path()
    '/home/'
"""

__version__ = "0.1.0"

from updir.core.segments import split_path
from updir.core.selection import JumpDirection, SelectionModel
from updir.core.keymap import Keymap
from updir.core.controller import Controller, render_segments

__all__ = [
    "__version__",
    "split_path",
    "JumpDirection",
    "SelectionModel",
    "Keymap",
    "Controller",
    "render_segments",
]
