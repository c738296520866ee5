"""Outcomes of handling one input event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Continue:
    """Keep running the event loop."""


@dataclass(frozen=True)
class Confirm:
    """End the session with ``path`` selected."""
    path: str


@dataclass(frozen=True)
class Quit:
    """End the session without a selection."""


@dataclass(frozen=True)
class Suspend:
    """Stop the process until the shell resumes it (Ctrl-z)."""


@dataclass(frozen=True)
class Interrupt:
    """Behave as if the process received an interrupt (Ctrl-c)."""


EventAction = Union[Continue, Confirm, Quit, Suspend, Interrupt]

CONTINUE = Continue()
QUIT = Quit()
SUSPEND = Suspend()
INTERRUPT = Interrupt()
