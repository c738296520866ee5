"""Selection engine: path segments, selection state, keymaps, event loop."""

from updir.core.segments import split_path
from updir.core.selection import JumpDirection, LastJump, SelectionModel
from updir.core.modes import InputModeMachine
from updir.core.keymap import Keymap, KeymapDispatcher
from updir.core.mouse import MouseMapper
from updir.core.controller import Controller, render_segments

__all__ = [
    "split_path",
    "JumpDirection",
    "LastJump",
    "SelectionModel",
    "InputModeMachine",
    "Keymap",
    "KeymapDispatcher",
    "MouseMapper",
    "Controller",
    "render_segments",
]
