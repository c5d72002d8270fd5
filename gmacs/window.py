"""A view onto a text buffer: scrolling, line wrapping and cursor placement."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from wcwidth import wcwidth


class _Cursor(Protocol):
    row: int
    col: int


class _Buffer(Protocol):
    """What a window needs from a buffer.

    ``cursor.col`` is a byte offset into the UTF-8 encoding of the line.
    """

    content: Sequence[str]
    cursor: Any


def rune_width(ch: str) -> int:
    """Terminal columns taken by one character (0 for non-printing ones)."""
    width = wcwidth(ch)
    return width if width > 0 else 0


def string_width(text: str) -> int:
    """Terminal columns taken by a string."""
    return sum(rune_width(ch) for ch in text)


def _byte_len(ch: str) -> int:
    return len(ch.encode("utf-8", "surrogatepass"))


def string_width_up_to(text: str, byte_col: int) -> int:
    """Terminal columns taken by the characters before UTF-8 offset ``byte_col``."""
    width = 0
    offset = 0
    for ch in text:
        offset += _byte_len(ch)
        if offset > byte_col:
            break
        width += rune_width(ch)
    return width


def _line_byte_len(line: str) -> int:
    return len(line.encode("utf-8", "surrogatepass"))


class Window:
    """Shows part of a buffer in a ``width`` x ``height`` area.

    Line wrapping is on by default; with it off, long lines are scrolled
    horizontally and marked with a backslash where text is cut off.
    """

    def __init__(self, buffer: _Buffer, width: int, height: int) -> None:
        self.buffer = buffer
        self._width = width
        self._height = height
        self._scroll_top = 0
        self._scroll_left = 0
        self._line_wrap = True

    def __repr__(self) -> str:
        return (
            f"Window({self._width}x{self._height}, scroll_top={self._scroll_top}, "
            f"scroll_left={self._scroll_left}, line_wrap={self._line_wrap})"
        )

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the text area."""
        return self._width, self._height

    @property
    def scroll_top(self) -> int:
        """Index of the first buffer line shown."""
        return self._scroll_top

    @scroll_top.setter
    def scroll_top(self, top: int) -> None:
        line_count = len(self.buffer.content)
        if self._line_wrap:
            max_scroll = line_count - 1
        else:
            max_scroll = line_count - self._height
        max_scroll = max(max_scroll, 0)
        self._scroll_top = min(max(top, 0), max_scroll)

    @property
    def scroll_left(self) -> int:
        """Display columns hidden on the left when wrapping is off."""
        return self._scroll_left

    @scroll_left.setter
    def scroll_left(self, left: int) -> None:
        self._scroll_left = max(left, 0)

    @property
    def line_wrap(self) -> bool:
        return self._line_wrap

    @line_wrap.setter
    def line_wrap(self, wrap: bool) -> None:
        self._line_wrap = bool(wrap)

    def visible_lines(self) -> list[str]:
        """The screen lines to draw, at most ``height`` of them."""
        content = self.buffer.content
        start = self._scroll_top
        if start >= len(content):
            return []
        result: list[str] = []
        for line in content[start : start + self._height]:
            if self._line_wrap:
                result.extend(self.wrap_line(line))
            else:
                result.append(self._apply_horizontal_scroll(line))
        return result[: self._height]

    def wrap_line(self, line: str) -> list[str]:
        """Split a line into pieces no wider than the window.

        A character wider than the window still gets a piece of its own.
        """
        if string_width(line) <= self._width:
            return [line]
        pieces: list[str] = []
        piece: list[str] = []
        used = 0
        for ch in line:
            ch_width = rune_width(ch)
            if piece and used + ch_width > self._width:
                pieces.append("".join(piece))
                piece, used = [], 0
            if not piece and ch_width > self._width:
                pieces.append(ch)
                continue
            piece.append(ch)
            used += ch_width
        if piece:
            pieces.append("".join(piece))
        return pieces

    def _apply_horizontal_scroll(self, line: str) -> str:
        if self._scroll_left == 0:
            if string_width(line) <= self._width:
                return line
            return self._truncate_to_width(line, self._width - 1) + "\\"

        skipped = 0
        start = 0
        while start < len(line) and skipped < self._scroll_left:
            skipped += rune_width(line[start])
            start += 1
        if start >= len(line):
            return ""

        rest = line[start:]
        # Reserve a column for the left continuation marker.
        available = self._width - 1
        has_more = string_width(rest) > available
        if has_more:
            available -= 1

        shown: list[str] = []
        used = 0
        for ch in rest:
            if used >= available:
                break
            ch_width = rune_width(ch)
            if used + ch_width > available:
                break
            shown.append(ch)
            used += ch_width

        result = "\\" + "".join(shown)
        if has_more:
            result += "\\"
        return result

    @staticmethod
    def _truncate_to_width(text: str, max_width: int) -> str:
        used = 0
        for index, ch in enumerate(text):
            ch_width = rune_width(ch)
            if used + ch_width > max_width:
                return text[:index]
            used += ch_width
        return text

    def cursor_position(self) -> tuple[int, int]:
        """The cursor's (row, column) on screen; may lie outside the window."""
        cursor = self.buffer.cursor
        content = self.buffer.content
        if cursor.row < len(content):
            line = content[cursor.row]
            if cursor.col <= _line_byte_len(line):
                display_col = string_width_up_to(line, cursor.col)
                if self._line_wrap:
                    return self._wrapped_cursor_position(cursor.row, display_col)
                return cursor.row - self._scroll_top, display_col - self._scroll_left
        return cursor.row - self._scroll_top, cursor.col

    def _wrapped_cursor_position(self, row: int, display_col: int) -> tuple[int, int]:
        content = self.buffer.content
        if row < self._scroll_top:
            return row - self._scroll_top, display_col

        screen_row = sum(
            len(self.wrap_line(line))
            for line in content[max(self._scroll_top, 0) : min(row, len(content))]
        )

        if 0 <= row < len(content):
            pieces = self.wrap_line(content[row])
            consumed = 0
            for index, piece in enumerate(pieces):
                piece_width = string_width(piece)
                if display_col <= consumed + piece_width:
                    return screen_row + index, display_col - consumed
                consumed += piece_width
            if pieces:
                return screen_row + len(pieces) - 1, string_width(pieces[-1])
        return screen_row, 0