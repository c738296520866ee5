"""Input mode state machine for two-key commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from updir.core.events import Event, KeyEvent
from updir.core.selection import JumpDirection, SelectionModel


@dataclass(frozen=True)
class Idle:
    """Every event is interpreted on its own."""


@dataclass(frozen=True)
class PendingJump:
    """A character jump waiting for its target character."""
    direction: JumpDirection
    count: str = ""  # Numeric prefix consumed when the jump was armed


@dataclass(frozen=True)
class AwaitingFollowupKey:
    """The next event completes ``pending``."""
    pending: PendingJump


InputMode = Union[Idle, AwaitingFollowupKey]

IDLE = Idle()


class InputModeMachine:
    """
    Two-state machine that lets a binding defer to the next event.

    A binding arms the machine with a pending command; whatever event comes
    next is handed to that command and the machine returns to idle. Only one
    command can be pending at a time.
    """

    def __init__(self) -> None:
        self.mode: InputMode = IDLE

    @property
    def awaiting(self) -> bool:
        return isinstance(self.mode, AwaitingFollowupKey)

    def arm_jump(self, direction: JumpDirection, model: SelectionModel) -> None:
        """Wait for a jump target, capturing the pending count now."""
        count = model.pending_count
        model.pending_count = ""
        self.mode = AwaitingFollowupKey(PendingJump(direction=direction, count=count))

    def take(self) -> InputMode:
        """Return the current mode and reset to idle."""
        mode = self.mode
        self.mode = IDLE
        return mode

    def consume(self, event: Event, model: SelectionModel) -> bool:
        """
        Feed ``event`` to a pending command, if any.

        Returns True when the event was consumed. Events that cannot complete
        the command (Escape, arrows, mouse) cancel it without touching the
        selection.
        """
        mode = self.take()
        if not isinstance(mode, AwaitingFollowupKey):
            return False
        complete_pending(mode.pending, event, model)
        return True


def complete_pending(pending: PendingJump, event: Event, model: SelectionModel) -> None:
    """Run a pending command with its follow-up event."""
    if isinstance(pending, PendingJump):
        if isinstance(event, KeyEvent) and event.char is not None:
            model.pending_count = pending.count
            model.jump(pending.direction, event.char)
