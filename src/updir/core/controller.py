"""Event loop tying input, selection and rendering together."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from updir.core.actions import (
    CONTINUE,
    Confirm,
    EventAction,
    Interrupt,
    Quit,
    Suspend,
)
from updir.core.events import Event, KeyEvent, MouseEvent
from updir.core.keymap import Keymap, KeymapDispatcher
from updir.core.modes import InputModeMachine
from updir.core.mouse import MouseMapper
from updir.core.segments import display_text
from updir.core.selection import SelectionModel

RenderedSegment = tuple[str, bool]


def render_segments(model: SelectionModel) -> list[RenderedSegment]:
    """Display text of every segment paired with whether it is selected."""
    return [
        (display_text(segment), i == model.current_index)
        for i, segment in enumerate(model.segments)
    ]


@runtime_checkable
class EventSource(Protocol):
    """Blocking source of input events."""

    def read_event(self) -> Event:
        """Return the next event; raise OSError if input is gone."""
        ...


@runtime_checkable
class RenderTarget(Protocol):
    """Receives the rendered segment row."""

    def draw(self, segments: list[RenderedSegment]) -> None:
        ...


class Controller:
    """
    Owns the selection for one interactive session.

    ``handle_event`` turns one event into an action; ``run`` loops
    render -> read -> handle until the user confirms or quits. Suspend and
    interrupt requests are passed to the platform hooks; after a suspend
    the loop goes on with the selection untouched.
    """

    def __init__(
        self,
        model: SelectionModel,
        keymap: Keymap = Keymap.VIM,
        on_suspend: Optional[Callable[[], None]] = None,
        on_interrupt: Optional[Callable[[], None]] = None,
    ) -> None:
        self.model = model
        self.modes = InputModeMachine()
        self.keys = KeymapDispatcher(keymap)
        self.mouse = MouseMapper()
        self._on_suspend = on_suspend
        self._on_interrupt = on_interrupt

    def handle_event(self, event: Event) -> EventAction:
        if isinstance(event, KeyEvent) and not event.is_press:
            return CONTINUE
        if self.modes.consume(event, self.model):
            return CONTINUE
        if isinstance(event, KeyEvent):
            return self.keys.handle_key(event, self.model, self.modes)
        if isinstance(event, MouseEvent):
            return self.mouse.handle_mouse(event, self.model)
        return CONTINUE

    def run(self, source: EventSource, target: RenderTarget) -> Optional[str]:
        """Run until confirm (returns the path) or quit (returns None)."""
        while True:
            target.draw(render_segments(self.model))
            action = self.handle_event(source.read_event())

            if isinstance(action, Confirm):
                return action.path
            if isinstance(action, Quit):
                return None
            if isinstance(action, Suspend):
                if self._on_suspend is not None:
                    self._on_suspend()
            elif isinstance(action, Interrupt):
                # A hook that returns instead of ending the process means quit
                if self._on_interrupt is not None:
                    self._on_interrupt()
                return None
