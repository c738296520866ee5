"""Keyboard and mouse input decoding."""

from __future__ import annotations

import codecs
import os
import re
import select
import sys
import time
from typing import Optional

from updir.core.events import (
    Event,
    Key,
    KeyEvent,
    MouseButton,
    MouseEvent,
    MouseKind,
)


class InputClosedError(OSError):
    """Standard input reached end of file."""


# Final character of arrow/Home/End sequences, in both CSI and SS3 form
_FINALS: dict[str, Key] = {
    'A': Key.UP,
    'B': Key.DOWN,
    'C': Key.RIGHT,
    'D': Key.LEFT,
    'H': Key.HOME,
    'F': Key.END,
}

# ESC [ n ~  (7 and 8 are rxvt's Home/End)
_TILDE_CODES: dict[int, Key] = {
    1: Key.HOME,
    2: Key.INSERT,
    3: Key.DELETE,
    4: Key.END,
    5: Key.PAGE_UP,
    6: Key.PAGE_DOWN,
    7: Key.HOME,
    8: Key.END,
}

_CONTROL_KEYS: dict[str, Key] = {
    '\r': Key.ENTER,
    '\n': Key.ENTER,
    '\t': Key.TAB,
    '\x7f': Key.BACKSPACE,
    '\x08': Key.BACKSPACE,
}

_CSI = re.compile(r'\[([0-9;<]*)([A-Za-z~])')
_CSI_PREFIX = re.compile(r'\[[0-9;<]*')
_SGR_MOUSE = re.compile(r'(\d+);(\d+);(\d+)')
_MODIFIER = re.compile(r'1;(\d+)')

# How long a partial escape sequence may wait for the rest of its bytes
ESCAPE_TIMEOUT = 0.1


class InputReader:
    """
    Blocking reader of key presses and mouse reports from a tty.

    Bytes come straight from os.read() so nothing sits in Python's buffers
    while select() waits; an escape sequence split across reads is given
    ``ESCAPE_TIMEOUT`` seconds to complete before a bare Escape is reported.
    """

    def __init__(self, fd: Optional[int] = None) -> None:
        self._fd = fd if fd is not None else sys.stdin.fileno()
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')

    def read(self, timeout: float = 0.1) -> Optional[Event]:
        """Next event, or None if nothing arrives within ``timeout``."""
        if not self._buffer:
            if not self._has_input(timeout):
                return None
            self._read_chunk()
        self._complete_escape()
        return self._next_event()

    def read_blocking(self) -> Event:
        """Wait for the next event. Raises InputClosedError at end of input."""
        event = None
        while event is None:
            event = self.read(timeout=1.0)
        return event

    read_event = read_blocking

    def _read_chunk(self) -> None:
        try:
            data = os.read(self._fd, 1024)
        except BlockingIOError:
            return
        if not data:
            raise InputClosedError("end of input")
        self._buffer += self._decoder.decode(data)

    def _complete_escape(self) -> None:
        deadline = time.monotonic() + ESCAPE_TIMEOUT
        while self._partial_escape():
            remaining = deadline - time.monotonic()
            if remaining <= 0 or not self._has_input(remaining):
                return
            self._read_chunk()

    def _partial_escape(self) -> bool:
        """True while the buffer holds only the beginning of an escape sequence."""
        if not self._buffer.startswith('\x1b'):
            return False
        rest = self._buffer[1:]
        if not rest:
            return True
        if rest[0] == 'O':
            return len(rest) == 1
        return _CSI_PREFIX.fullmatch(rest) is not None

    def _next_event(self) -> Optional[Event]:
        if not self._buffer:
            return None

        ch = self._buffer[0]
        if ch == '\x1b':
            return self._take_escape()
        self._buffer = self._buffer[1:]

        if ch in _CONTROL_KEYS:
            return KeyEvent(key=_CONTROL_KEYS[ch], raw=ch)
        if ch < ' ':
            return KeyEvent(char=_control_char(ch), ctrl=True, raw=ch)
        if ch.isprintable():
            return KeyEvent(char=ch, raw=ch)
        return None

    def _take_escape(self) -> Event:
        """Remove one escape sequence from the front of the buffer and decode it."""
        rest = self._buffer[1:]

        if not rest or rest[0] == '\x1b':
            self._buffer = rest
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        if rest[0] == '[':
            match = _CSI.match(rest)
            if match is None:
                # Malformed: skip to the next escape
                end = rest.find('\x1b', 1)
                seq = rest if end == -1 else rest[:end]
                self._buffer = rest[len(seq):]
                return KeyEvent(raw='\x1b' + seq)
            self._buffer = rest[match.end():]
            return _csi_event(match.group(1), match.group(2), '\x1b' + match.group(0))

        if rest[0] == 'O' and len(rest) > 1:
            self._buffer = rest[2:]
            return KeyEvent(key=_FINALS.get(rest[1]), raw='\x1b' + rest[:2])

        # Alt sends ESC before the key
        self._buffer = rest[1:]
        raw = '\x1b' + rest[0]
        if rest[0] < ' ':
            return KeyEvent(char=_control_char(rest[0]), ctrl=True, alt=True, raw=raw)
        return KeyEvent(char=rest[0], alt=True, raw=raw)

    def _has_input(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        return bool(ready)


def _control_char(ch: str) -> str:
    """Character typed with Ctrl to produce control byte ``ch``."""
    code = ord(ch)
    if code == 0:
        return ' '
    if code <= 0x1a:
        return chr(code + 0x60)  # Ctrl-A .. Ctrl-Z
    return chr(code + 0x40)  # Ctrl-[ .. Ctrl-_


def _csi_event(params: str, final: str, raw: str) -> Event:
    if params.startswith('<'):
        mouse = _SGR_MOUSE.fullmatch(params[1:])
        if mouse and final in 'Mm':
            return _mouse_event(mouse, final == 'M', raw)
    elif final == '~':
        if params.isdigit() and int(params) in _TILDE_CODES:
            return KeyEvent(key=_TILDE_CODES[int(params)], raw=raw)
    elif final in _FINALS:
        if not params:
            return KeyEvent(key=_FINALS[final], raw=raw)
        modified = _MODIFIER.fullmatch(params)
        if modified:
            # xterm modifier parameter: 1 + (shift=1 | alt=2 | ctrl=4)
            bits = int(modified.group(1)) - 1
            return KeyEvent(
                key=_FINALS[final],
                alt=bool(bits & 2),
                ctrl=bool(bits & 4),
                raw=raw,
            )
    return KeyEvent(raw=raw)


def _mouse_event(match: re.Match, pressed: bool, raw: str) -> MouseEvent:
    """Decode an SGR mouse report (1-based coordinates)."""
    code = int(match.group(1))
    column = int(match.group(2)) - 1
    row = int(match.group(3)) - 1
    low = code & 0b11

    if code & 64:
        kind = (
            MouseKind.SCROLL_UP,
            MouseKind.SCROLL_DOWN,
            MouseKind.SCROLL_LEFT,
            MouseKind.SCROLL_RIGHT,
        )[low]
        return MouseEvent(kind=kind, column=column, row=row, raw=raw)

    button = (MouseButton.LEFT, MouseButton.MIDDLE, MouseButton.RIGHT, None)[low]
    if code & 32:
        kind = MouseKind.MOVED if button is None else MouseKind.DRAG
    else:
        kind = MouseKind.DOWN if pressed and button is not None else MouseKind.UP
    return MouseEvent(kind=kind, column=column, row=row, button=button, raw=raw)
