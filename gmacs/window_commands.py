"""Editor commands that split, select and delete windows.

An editor here is any object with a ``layout`` attribute holding a
:class:`~gmacs.layout.WindowLayout` (or None).
"""

from __future__ import annotations

from typing import Any

from gmacs import log
from gmacs.window import Window


def _buffer_name(window: Window | None) -> str | None:
    if window is None or window.buffer is None:
        return None
    return getattr(window.buffer, "name", None)


def _split(editor: Any, command: str, direction: str) -> Window | None:
    layout = getattr(editor, "layout", None)
    if layout is None:
        log.warn("No layout available for %s", command)
        return None
    if direction == "right":
        new_window = layout.split_window_right()
    else:
        new_window = layout.split_window_below()
    if new_window is None:
        log.warn("Failed to split window %s", direction)
        return None
    name = _buffer_name(new_window)
    if name is not None:
        log.info("Split window %s - sharing buffer: %s", direction, name)
    return new_window


def split_window_right(editor: Any) -> Window | None:
    """C-x 3: split the selected window side by side; return the new window."""
    return _split(editor, "split-window-right", "right")


def split_window_below(editor: Any) -> Window | None:
    """C-x 2: split the selected window top and bottom; return the new window."""
    return _split(editor, "split-window-below", "below")


def other_window(editor: Any) -> Window | None:
    """C-x o: select the next window and return it."""
    layout = getattr(editor, "layout", None)
    if layout is None:
        log.warn("No layout available for other-window")
        return None
    layout.next_window()
    current = layout.current_window
    name = _buffer_name(current)
    if name is not None:
        log.info("Switched to window with buffer: %s", name)
    return current


def delete_window(editor: Any) -> bool:
    """C-x 0: delete the selected window; False if it is the only one."""
    layout = getattr(editor, "layout", None)
    if layout is None:
        log.warn("No layout available for delete-window")
        return False
    deleted = layout.delete_current_window()
    if deleted:
        log.info("Deleted current window")
    else:
        log.warn("Cannot delete the only window")
    return deleted


def delete_other_windows(editor: Any) -> None:
    """C-x 1: keep only the selected window."""
    layout = getattr(editor, "layout", None)
    if layout is None:
        log.warn("No layout available for delete-other-windows")
        return
    layout.delete_other_windows()
    log.info("Deleted all other windows")