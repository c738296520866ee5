"""Terminal I/O for the interactive picker."""

from updir.cli.core.terminal import Terminal
from updir.cli.core.input import InputClosedError, InputReader

__all__ = [
    "Terminal",
    "InputReader",
    "InputClosedError",
]
