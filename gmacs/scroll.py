"""Scrolling commands and keeping the cursor on screen.

An editor here is any object with a ``current_window`` attribute holding a
:class:`~gmacs.window.Window` (or None) and a ``minibuffer`` attribute
holding a :class:`~gmacs.minibuffer.Minibuffer`. The buffer shown is the
current window's buffer.
"""

from __future__ import annotations

from typing import Any

from gmacs import log
from gmacs.window import Window, string_width_up_to


def _window(editor: Any) -> Window | None:
    return getattr(editor, "current_window", None)


def _view(editor: Any) -> tuple[Window, Any] | None:
    window = _window(editor)
    if window is None or window.buffer is None:
        return None
    return window, window.buffer


def _set_message(editor: Any, text: str) -> None:
    minibuffer = getattr(editor, "minibuffer", None)
    if minibuffer is not None:
        minibuffer.set_message(text)


def scroll_up(editor: Any) -> None:
    """Show one line further up."""
    window = _window(editor)
    if window is not None:
        window.scroll_top = window.scroll_top - 1


def scroll_down(editor: Any) -> None:
    """Show one line further down."""
    window = _window(editor)
    if window is not None:
        window.scroll_top = window.scroll_top + 1


def scroll_left_char(editor: Any) -> None:
    """Scroll one column left; does nothing while lines wrap."""
    window = _window(editor)
    if window is None or window.line_wrap:
        return
    window.scroll_left = window.scroll_left - 1


def scroll_right_char(editor: Any) -> None:
    """Scroll one column right; does nothing while lines wrap."""
    window = _window(editor)
    if window is None or window.line_wrap:
        return
    window.scroll_left = window.scroll_left + 1


def toggle_line_wrap(editor: Any) -> None:
    """Switch line wrapping on or off and report the new state."""
    window = _window(editor)
    if window is None:
        return
    wrap = not window.line_wrap
    window.line_wrap = wrap
    if wrap:
        window.scroll_left = 0
    else:
        ensure_cursor_visible(editor)
    status = "enabled" if wrap else "disabled"
    _set_message(editor, "Line wrap " + status)
    log.info("Line wrap toggled: %s", status)


def page_up(editor: Any) -> None:
    """Scroll up by one window height."""
    window = _window(editor)
    if window is None:
        return
    _, height = window.size
    window.scroll_top = max(window.scroll_top - height, 0)


def page_down(editor: Any) -> None:
    """Scroll down by one window height."""
    window = _window(editor)
    if window is None:
        return
    _, height = window.size
    if window.line_wrap:
        if window.buffer is None:
            return
        max_scroll = max(len(window.buffer.content) - 1, 0)
        window.scroll_top = min(window.scroll_top + height, max_scroll)
    else:
        window.scroll_top = window.scroll_top + height


def _ensure_visible_wrapped(window: Window, buffer: Any, screen_row: int) -> None:
    _, height = window.size
    cursor = buffer.cursor
    if screen_row < 0:
        new_top = max(cursor.row, 0)
        log.info(
            "SCROLL_TIMING: EnsureCursorVisible (wrap mode) scrolling UP from %d to %d",
            window.scroll_top,
            new_top,
        )
        window.scroll_top = new_top
    elif screen_row >= height:
        old_top = window.scroll_top
        max_top = max(len(buffer.content) - 1, 0)
        for new_top in range(old_top + 1, min(max_top, cursor.row) + 1):
            window.scroll_top = new_top
            row, _ = window.cursor_position()
            if 0 <= row < height:
                log.info(
                    "SCROLL_TIMING: EnsureCursorVisible (wrap mode) scrolling DOWN "
                    "from %d to %d",
                    old_top,
                    new_top,
                )
                break


def _ensure_visible_unwrapped(window: Window, buffer: Any) -> None:
    cursor = buffer.cursor
    if cursor.row < window.scroll_top:
        log.info(
            "SCROLL_TIMING: EnsureCursorVisible (no wrap) scrolling UP from %d to %d",
            window.scroll_top,
            cursor.row,
        )
        window.scroll_top = cursor.row
    elif cursor.row >= window.scroll_top + window.height:
        # Scroll just one line: enough when the cursor moved down by one.
        log.info(
            "SCROLL_TIMING: EnsureCursorVisible (no wrap) minimal scroll from %d to %d",
            window.scroll_top,
            window.scroll_top + 1,
        )
        window.scroll_top = window.scroll_top + 1

    width, _ = window.size
    cursor = buffer.cursor
    content = buffer.content
    if cursor.row >= len(content):
        return
    line = content[cursor.row]
    if cursor.col > len(line.encode("utf-8", "surrogatepass")):
        return
    display_col = string_width_up_to(line, cursor.col)
    if display_col < window.scroll_left:
        log.info("HORIZONTAL_SCROLL: Scrolling left to %d", max(display_col, 0))
        window.scroll_left = max(display_col, 0)
    elif display_col >= window.scroll_left + width:
        new_left = max(display_col - width + 1, 0)
        log.info("HORIZONTAL_SCROLL: Scrolling right to %d", new_left)
        window.scroll_left = new_left


def ensure_cursor_visible(editor: Any) -> None:
    """Adjust scrolling so the cursor lies inside the window."""
    view = _view(editor)
    if view is None:
        return
    window, buffer = view
    screen_row, screen_col = window.cursor_position()
    log.info(
        "SCROLL_TIMING: EnsureCursorVisible - cursor screen position: (%d,%d)",
        screen_row,
        screen_col,
    )
    if window.line_wrap:
        _ensure_visible_wrapped(window, buffer, screen_row)
    else:
        _ensure_visible_unwrapped(window, buffer)


def show_debug_info(editor: Any) -> str | None:
    """Show window, cursor and scroll state in the minibuffer and return it."""
    view = _view(editor)
    if view is None:
        return None
    window, buffer = view
    width, height = window.size
    cursor = buffer.cursor
    screen_row, screen_col = window.cursor_position()
    wrap = "true" if window.line_wrap else "false"
    message = (
        f"Window: {width}x{height}, "
        f"Cursor: buf({cursor.row},{cursor.col}) scr({screen_row},{screen_col}), "
        f"Scroll: ({window.scroll_top},{window.scroll_left}), "
        f"Lines: {len(buffer.content)}, Wrap: {wrap}"
    )
    _set_message(editor, message)
    log.info("Debug info: %s", message)
    return message