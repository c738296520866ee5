"""Mouse handling for the segment row."""

from __future__ import annotations

from updir.core.actions import CONTINUE, QUIT, Confirm, EventAction
from updir.core.events import MouseButton, MouseEvent, MouseKind
from updir.core.selection import SelectionModel


class MouseMapper:
    """
    Maps pointer events onto the selection.

    Hovering selects the segment under the pointer, a left click confirms,
    a right click quits, and the wheel moves one segment at a time.
    """

    def handle_mouse(self, event: MouseEvent, model: SelectionModel) -> EventAction:
        kind = event.kind

        if kind == MouseKind.MOVED:
            model.select_at_column(event.column)
        elif kind == MouseKind.DOWN and event.button == MouseButton.LEFT:
            return Confirm(model.selected_path())
        elif kind == MouseKind.DOWN and event.button == MouseButton.RIGHT:
            return QUIT
        elif kind in (MouseKind.SCROLL_UP, MouseKind.SCROLL_LEFT):
            model.move_by(-1)
        elif kind in (MouseKind.SCROLL_DOWN, MouseKind.SCROLL_RIGHT):
            model.move_by(1)

        return CONTINUE
