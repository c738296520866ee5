"""Path decomposition into selectable display segments."""

from __future__ import annotations

import os
from pathlib import PurePath, PureWindowsPath

from updir.core.constants import CURRENT_DIR


def path_separator(path: PurePath) -> str:
    """Separator used by the flavour of ``path``."""
    return "\\" if isinstance(path, PureWindowsPath) else "/"


def split_path(path: PurePath | str) -> tuple[str, ...]:
    """
    Split a path into segments that keep their trailing separator.

    Joining any prefix of the result gives a valid ancestor path, and joining
    all of it gives back the original path.

    Examples:
        /home/user/project  -> ("/", "home/", "user/", "project")
        C:\\Users\\Admin    -> ("C:\\", "Users\\", "Admin")
        .                   -> (".",)
    """
    if not isinstance(path, PurePath):
        path = PurePath(os.fspath(path))
    sep = path_separator(path)

    segments: list[str] = []
    names = path.parts
    if path.drive or path.root:
        # Drive and root directory share one segment; "//" collapses to one separator
        segments.append(path.drive + (sep if path.root else ""))
        names = names[1:]

    for i, name in enumerate(names):
        if name in (".", ".."):
            continue
        is_last = i == len(names) - 1
        segments.append(name if is_last else name + sep)

    if not segments:
        segments.append(CURRENT_DIR)
    return tuple(segments)


def display_text(segment: str) -> str:
    """Printable form of a segment (undecodable bytes become U+FFFD)."""
    try:
        return segment.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    except UnicodeEncodeError:
        return segment.encode("utf-8", errors="replace").decode("utf-8")
