"""Selection state over the segments of a path."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from updir.core.segments import display_text


class JumpDirection(Enum):
    """Scan direction of a character jump."""
    FORWARD = auto()
    BACKWARD = auto()

    @property
    def opposite(self) -> JumpDirection:
        if self is JumpDirection.FORWARD:
            return JumpDirection.BACKWARD
        return JumpDirection.FORWARD


@dataclass(frozen=True)
class LastJump:
    """The most recent character jump, kept for ``;`` and ``,``."""
    char: str
    direction: JumpDirection


class SelectionModel:
    """
    Segments of a path plus the index of the selected one.

    Motions honour a Vim-style numeric prefix accumulated in
    ``pending_count`` and clear it once applied. The index always stays
    within ``[0, len(segments) - 1]``.
    """

    def __init__(self, segments: Iterable[str]) -> None:
        self.segments: tuple[str, ...] = tuple(segments)
        if not self.segments:
            raise ValueError("SelectionModel needs at least one segment")
        self.current_index = len(self.segments) - 1
        self.pending_count = ""
        self.last_jump: Optional[LastJump] = None

    @property
    def last_index(self) -> int:
        return len(self.segments) - 1

    def _take_count(self) -> int:
        """Consume the numeric prefix, defaulting to 1."""
        count = int(self.pending_count) if self.pending_count else 1
        self.pending_count = ""
        return count

    # Motions

    def move_by(self, step: int) -> None:
        """Move by ``step`` segments, multiplied by the pending count."""
        count = max(1, self._take_count())
        target = self.current_index + step * count
        self.current_index = max(0, min(target, self.last_index))

    def move_to_start(self) -> None:
        self.current_index = 0
        self.pending_count = ""

    def move_to_end(self) -> None:
        self.current_index = self.last_index
        self.pending_count = ""

    def move_to_middle(self) -> None:
        self.current_index = len(self.segments) // 2
        self.pending_count = ""

    def push_digit(self, digit: str) -> None:
        """Append one ASCII digit to the pending count."""
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"Not an ASCII digit: {digit!r}")
        self.pending_count += digit

    # Character search

    def find_and_select(self, direction: JumpDirection, target_char: str) -> None:
        """
        Select the n-th segment containing ``target_char``.

        n comes from the pending count. The scan starts next to the current
        segment and moves away from it; with fewer than n matches the
        selection stays where it is.
        """
        count = self._take_count()

        if direction is JumpDirection.FORWARD:
            indices = range(self.current_index + 1, len(self.segments))
        else:
            indices = range(self.current_index - 1, -1, -1)

        found = 0
        for i in indices:
            if target_char in display_text(self.segments[i]):
                found += 1
                if found == count:
                    self.current_index = i
                    return

    def jump(self, direction: JumpDirection, target_char: str) -> None:
        """Character jump (``f``/``F``) that is remembered for repeats."""
        self.find_and_select(direction, target_char)
        self.last_jump = LastJump(char=target_char, direction=direction)

    def repeat_jump(self, reverse: bool) -> None:
        """Repeat the last jump, in the opposite direction if ``reverse``."""
        if self.last_jump is None:
            return
        direction = self.last_jump.direction
        if reverse:
            direction = direction.opposite
        self.find_and_select(direction, self.last_jump.char)

    # Pointer

    def select_at_column(self, column: int) -> None:
        """Select the segment drawn at ``column`` of the rendered row."""
        new_index = 0
        start = 0
        for i, segment in enumerate(self.segments):
            if column >= start:
                new_index = i
            start += len(display_text(segment))
        self.current_index = new_index

    # Result

    def selected_path(self) -> str:
        """Path made of the segments up to and including the selection."""
        return "".join(self.segments[:self.current_index + 1])
