"""Keymaps: binding tables and the dispatcher that runs them.

Bindings are plain data so the same tables drive dispatch and the
``--keys`` help. Each binding names a handler method on
``KeymapDispatcher``; the active keymap's table runs first, then the
shared table, for every key press.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from updir.core.actions import (
    CONTINUE,
    INTERRUPT,
    QUIT,
    SUSPEND,
    Confirm,
    EventAction,
)
from updir.core.events import Key, KeyEvent
from updir.core.modes import InputModeMachine
from updir.core.selection import JumpDirection, SelectionModel


class Keymap(Enum):
    """Supported keybinding schemes."""
    VIM = "vim"
    EMACS = "emacs"


def parse_keymap(value: Optional[str]) -> Optional[Keymap]:
    """Map a configuration value to a keymap, or None if unrecognized."""
    if value is None:
        return None
    try:
        return Keymap(value)
    except ValueError:
        return None


class BindingContext(Enum):
    """Table a binding belongs to."""
    VIM = auto()
    EMACS = auto()
    SHARED = auto()   # Active under every keymap


CONTEXT_FOR_KEYMAP = {
    Keymap.VIM: BindingContext.VIM,
    Keymap.EMACS: BindingContext.EMACS,
}


@dataclass(frozen=True)
class Chord:
    """A character pressed together with Ctrl and/or Alt."""
    char: str
    ctrl: bool = False
    alt: bool = False

    def matches(self, event: KeyEvent) -> bool:
        if event.char != self.char:
            return False
        return (not self.ctrl or event.ctrl) and (not self.alt or event.alt)

    @property
    def display(self) -> str:
        prefix = ("C-" if self.ctrl else "") + ("M-" if self.alt else "")
        return prefix + self.char


@dataclass
class Binding:
    """Definition of a key binding.

    Attributes:
        id: Unique identifier for the binding
        keys: Named keys, plain characters, or chords that trigger it
        description: Text for the key help
        handler: Name of the ``KeymapDispatcher`` method to call
        context: Tables the binding belongs to
        category: Group in the key help
    """
    id: str
    keys: list[str | Key | Chord]
    description: str
    handler: str
    context: list[BindingContext] = field(default_factory=lambda: [BindingContext.SHARED])
    category: str = "Motion"

    def matches(self, event: KeyEvent) -> bool:
        """Check if a key event triggers this binding.

        Plain characters match whatever modifiers are held; chords require
        theirs.
        """
        for key in self.keys:
            if isinstance(key, Key):
                if event.key == key:
                    return True
            elif isinstance(key, Chord):
                if key.matches(event):
                    return True
            elif event.char == key:
                return True
        return False

    @property
    def key_display(self) -> str:
        displays = []
        for key in self.keys:
            if isinstance(key, Key):
                displays.append(_KEY_DISPLAY.get(key, key.name.title()))
            elif isinstance(key, Chord):
                displays.append(key.display)
            else:
                displays.append(key)
        return " ".join(displays)


_KEY_DISPLAY = {
    Key.LEFT: "←",
    Key.RIGHT: "→",
    Key.HOME: "Home",
    Key.END: "End",
    Key.ENTER: "Enter",
    Key.ESCAPE: "Esc",
}


class BindingRegistry:
    """All bindings, indexed by the table they belong to."""

    CATEGORY_ORDER = ["Motion", "Count", "Search", "Session"]

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}
        self._by_context: dict[BindingContext, list[Binding]] = {
            ctx: [] for ctx in BindingContext
        }

    def register(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        for ctx in binding.context:
            self._by_context[ctx].append(binding)

    def register_many(self, bindings: list[Binding]) -> None:
        for binding in bindings:
            self.register(binding)

    def get(self, binding_id: str) -> Optional[Binding]:
        return self._bindings.get(binding_id)

    def match(self, event: KeyEvent, context: BindingContext) -> Optional[Binding]:
        """First binding of ``context`` triggered by ``event``."""
        for binding in self._by_context[context]:
            if binding.matches(event):
                return binding
        return None

    def get_for_context(self, context: BindingContext, include_shared: bool = True) -> list[Binding]:
        result = list(self._by_context[context])
        if include_shared and context != BindingContext.SHARED:
            result.extend(self._by_context[BindingContext.SHARED])
        return result

    def get_by_category(self, context: BindingContext) -> dict[str, list[Binding]]:
        """Bindings of ``context`` (and shared ones) grouped in help order."""
        by_category: dict[str, list[Binding]] = {}
        for binding in self.get_for_context(context):
            by_category.setdefault(binding.category, []).append(binding)
        order = self.CATEGORY_ORDER
        return dict(sorted(
            by_category.items(),
            key=lambda item: order.index(item[0]) if item[0] in order else len(order),
        ))


DIGITS = [str(d) for d in range(10)]


def create_default_bindings() -> BindingRegistry:
    """Create the registry with the Vim, Emacs and shared tables."""
    registry = BindingRegistry()
    vim = [BindingContext.VIM]
    emacs = [BindingContext.EMACS]

    # Vim
    registry.register_many([
        Binding("vim_jump_forward", ["f"], "Jump to next segment containing a character",
                "arm_jump_forward", vim, "Search"),
        Binding("vim_jump_backward", ["F"], "Jump to previous segment containing a character",
                "arm_jump_backward", vim, "Search"),
        Binding("vim_repeat_jump", [";"], "Repeat last jump",
                "repeat_jump", vim, "Search"),
        Binding("vim_repeat_jump_reverse", [","], "Repeat last jump in the other direction",
                "repeat_jump_reverse", vim, "Search"),
        Binding("vim_left", ["h", "k", "b"], "Select parent segment",
                "move_left", vim),
        Binding("vim_right", ["l", "j", "w"], "Select child segment",
                "move_right", vim),
        Binding("vim_start", ["^", "H"], "Select root",
                "move_to_start", vim),
        Binding("vim_end", ["$", "L"], "Select last segment",
                "move_to_end", vim),
        Binding("vim_middle", ["M"], "Select middle segment",
                "move_to_middle", vim),
        Binding("vim_count", DIGITS, "Repeat count prefix (0 alone selects root)",
                "digit", vim, "Count"),
    ])

    # Emacs
    registry.register_many([
        Binding("emacs_jump_forward", [Chord("]", ctrl=True)], "Jump to next segment containing a character",
                "arm_jump_forward", emacs, "Search"),
        Binding("emacs_left", [Chord("b", ctrl=True), Chord("b", alt=True)], "Select parent segment",
                "move_left", emacs),
        Binding("emacs_right", [Chord("f", ctrl=True), Chord("f", alt=True)], "Select child segment",
                "move_right", emacs),
        Binding("emacs_start", [Chord("a", ctrl=True)], "Select root",
                "move_to_start", emacs),
        Binding("emacs_end", [Chord("e", ctrl=True)], "Select last segment",
                "move_to_end", emacs),
    ])

    # Shared
    registry.register_many([
        Binding("left", [Key.LEFT], "Select parent segment", "move_left"),
        Binding("right", [Key.RIGHT], "Select child segment", "move_right"),
        Binding("start", [Key.HOME], "Select root", "move_to_start"),
        Binding("end", [Key.END], "Select last segment", "move_to_end"),
        Binding("confirm", [Key.ENTER], "Print selected path and exit",
                "confirm", category="Session"),
        Binding("quit", ["q", Key.ESCAPE], "Exit without a selection",
                "quit", category="Session"),
        Binding("interrupt", [Chord("c", ctrl=True)], "Interrupt",
                "interrupt", category="Session"),
        Binding("suspend", [Chord("z", ctrl=True)], "Suspend to the shell",
                "suspend", category="Session"),
    ])

    return registry


Handler = Callable[[KeyEvent, SelectionModel, InputModeMachine], Optional[EventAction]]


class KeymapDispatcher:
    """
    Runs key presses through the active keymap and the shared table.

    Keymap handlers only change the selection or arm the input mode
    machine; the action returned for the press comes from the shared
    table (Continue when nothing there matches).
    """

    def __init__(self, keymap: Keymap, registry: Optional[BindingRegistry] = None) -> None:
        self.keymap = keymap
        self.registry = registry or create_default_bindings()

    @property
    def context(self) -> BindingContext:
        return CONTEXT_FOR_KEYMAP[self.keymap]

    def handle_key(
        self,
        event: KeyEvent,
        model: SelectionModel,
        modes: InputModeMachine,
    ) -> EventAction:
        binding = self.registry.match(event, self.context)
        if binding is not None:
            self._handler(binding)(event, model, modes)

        binding = self.registry.match(event, BindingContext.SHARED)
        if binding is not None:
            action = self._handler(binding)(event, model, modes)
            if action is not None:
                return action
        return CONTINUE

    def _handler(self, binding: Binding) -> Handler:
        return getattr(self, binding.handler)

    # Handlers

    def move_left(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.move_by(-1)

    def move_right(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.move_by(1)

    def move_to_start(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.move_to_start()

    def move_to_end(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.move_to_end()

    def move_to_middle(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.move_to_middle()

    def digit(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        if event.char == "0" and not model.pending_count:
            model.move_to_start()
        else:
            model.push_digit(event.char)

    def arm_jump_forward(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        modes.arm_jump(JumpDirection.FORWARD, model)

    def arm_jump_backward(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        modes.arm_jump(JumpDirection.BACKWARD, model)

    def repeat_jump(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.repeat_jump(reverse=False)

    def repeat_jump_reverse(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> None:
        model.repeat_jump(reverse=True)

    def confirm(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> EventAction:
        return Confirm(model.selected_path())

    def quit(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> EventAction:
        return QUIT

    def interrupt(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> EventAction:
        return INTERRUPT

    def suspend(self, event: KeyEvent, model: SelectionModel, modes: InputModeMachine) -> EventAction:
        return SUSPEND
