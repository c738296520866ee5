"""Render the segment row as a single terminal line."""

from __future__ import annotations

from typing import Iterable

from updir.core.constants import CLEAR_LINE, RESET, REVERSE


class LineRenderer:
    """
    Render ``(text, is_selected)`` pairs to escape sequences.

    The line starts with a carriage return and clear-line so every redraw
    overwrites the previous one; the selected segment is shown in reverse
    video.
    """

    def render(self, segments: Iterable[tuple[str, bool]]) -> str:
        parts: list[str] = ["\r", CLEAR_LINE]
        for text, selected in segments:
            if selected:
                parts.append(f"{REVERSE}{text}{RESET}")
            else:
                parts.append(text)
        return "".join(parts)
