"""The one-line minibuffer used for prompts and messages."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto

from gmacs.events import KeyEvent


class MinibufferMode(Enum):
    """What the minibuffer is currently doing."""

    INACTIVE = auto()
    COMMAND = auto()
    MESSAGE = auto()
    FILE = auto()


_EDITABLE = frozenset({MinibufferMode.COMMAND, MinibufferMode.FILE})

COMMAND_PROMPT = "M-x "
FILE_PROMPT = "Find file: "


class Minibuffer:
    """Holds the prompt, typed text, cursor and any message shown."""

    def __init__(self) -> None:
        self._mode = MinibufferMode.INACTIVE
        self._content = ""
        self._prompt = ""
        self._message = ""
        self._cursor = 0

    @property
    def mode(self) -> MinibufferMode:
        return self._mode

    @property
    def content(self) -> str:
        return self._content

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def message(self) -> str:
        return self._message

    @property
    def cursor_position(self) -> int:
        """Cursor offset in characters within the typed text."""
        return self._cursor

    def is_active(self) -> bool:
        return self._mode is not MinibufferMode.INACTIVE

    @property
    def _editable(self) -> bool:
        return self._mode in _EDITABLE

    def _reset(self, mode: MinibufferMode, prompt: str = "", message: str = "") -> None:
        self._mode = mode
        self._content = ""
        self._prompt = prompt
        self._message = message
        self._cursor = 0

    def start_command_input(self) -> None:
        """Begin reading a command name (M-x)."""
        self._reset(MinibufferMode.COMMAND, prompt=COMMAND_PROMPT)

    def start_file_input(self) -> None:
        """Begin reading a file path (C-x C-f)."""
        self._reset(MinibufferMode.FILE, prompt=FILE_PROMPT)

    def set_message(self, message: str) -> None:
        """Show a message, abandoning any input in progress."""
        self._reset(MinibufferMode.MESSAGE, message=message)

    def clear(self) -> None:
        self._reset(MinibufferMode.INACTIVE)

    def insert_char(self, ch: str) -> None:
        if not self._editable:
            return
        text = self._content
        self._content = text[: self._cursor] + ch + text[self._cursor :]
        self._cursor += 1

    def delete_backward(self) -> None:
        if not self._editable or self._cursor == 0:
            return
        text = self._content
        self._content = text[: self._cursor - 1] + text[self._cursor :]
        self._cursor -= 1

    def delete_forward(self) -> None:
        if not self._editable or self._cursor >= len(self._content):
            return
        text = self._content
        self._content = text[: self._cursor] + text[self._cursor + 1 :]

    def move_cursor_forward(self) -> None:
        if self._editable and self._cursor < len(self._content):
            self._cursor += 1

    def move_cursor_backward(self) -> None:
        if self._editable and self._cursor > 0:
            self._cursor -= 1

    def move_cursor_to_beginning(self) -> None:
        if self._editable:
            self._cursor = 0

    def move_cursor_to_end(self) -> None:
        if self._editable:
            self._cursor = len(self._content)

    def display_text(self) -> str:
        """The text the minibuffer line shows."""
        if self._editable:
            return self._prompt + self._content
        if self._mode is MinibufferMode.MESSAGE:
            return self._message
        return ""

    def handle_key(self, event: KeyEvent, on_enter: Callable[[], object]) -> bool:
        """Apply a key to the minibuffer; return True if the key was consumed.

        While a message is shown any key clears it and is passed on.
        Enter calls ``on_enter``; Escape cancels the input.
        """
        if self._mode is MinibufferMode.MESSAGE:
            self.clear()
            return False
        if not self._editable:
            return False

        if event.key in ("Enter", "Return"):
            on_enter()
            return True
        if event.key in ("\x1b", "Escape"):
            self.clear()
            return True
        if event.key in ("Backspace", "\x7f"):
            self.delete_backward()
            return True

        if event.ctrl:
            action = self._ctrl_actions.get(event.key)
            if action is not None:
                action(self)
                return True

        if event.rune and not event.ctrl and not event.meta:
            self.insert_char(event.rune)
            return True
        return False

    _ctrl_actions: dict[str, Callable[[Minibuffer], None]] = {
        "h": delete_backward,
        "d": delete_forward,
        "f": move_cursor_forward,
        "b": move_cursor_backward,
        "a": move_cursor_to_beginning,
        "e": move_cursor_to_end,
    }