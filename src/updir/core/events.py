"""Input events consumed by the selection engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()


class KeyKind(Enum):
    """Whether a key event is a press, an auto-repeat, or a release."""
    PRESS = auto()
    REPEAT = auto()
    RELEASE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character, also set for Ctrl/Alt chords
    ctrl: bool = False
    alt: bool = False
    raw: str = ""  # Raw escape sequence
    kind: KeyKind = KeyKind.PRESS

    @property
    def is_press(self) -> bool:
        return self.kind is KeyKind.PRESS


class MouseKind(Enum):
    """What the pointer did."""
    MOVED = auto()
    DOWN = auto()
    UP = auto()
    DRAG = auto()
    SCROLL_UP = auto()
    SCROLL_DOWN = auto()
    SCROLL_LEFT = auto()
    SCROLL_RIGHT = auto()


class MouseButton(Enum):
    LEFT = auto()
    MIDDLE = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class MouseEvent:
    """Pointer event with 0-based terminal coordinates."""
    kind: MouseKind
    column: int
    row: int
    button: Optional[MouseButton] = None
    raw: str = ""


Event = Union[KeyEvent, MouseEvent]
