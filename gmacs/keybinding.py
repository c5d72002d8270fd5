"""Emacs-style key bindings: multi-key sequences and raw escape sequences."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

Command = Callable[[Any], Any]


@dataclass(frozen=True)
class KeyPress:
    """One key press with its modifiers."""

    key: str
    ctrl: bool = False
    meta: bool = False

    def __str__(self) -> str:
        if self.ctrl and self.meta:
            return "C-M-" + self.key
        if self.ctrl:
            return "C-" + self.key
        if self.meta:
            return "M-" + self.key
        return self.key


@dataclass(frozen=True)
class KeySequenceBinding:
    sequence: tuple[KeyPress, ...]
    command: Command


@dataclass(frozen=True)
class RawSequenceBinding:
    sequence: str
    command: Command


class KeyMatch(NamedTuple):
    """Outcome of feeding one key press into a binding map."""

    command: Command | None
    matched: bool
    continuing: bool


def parse_key_press(key_str: str) -> KeyPress:
    """Parse a key like "C-x" or "C-M-a"."""
    parts = key_str.split("-")
    ctrl = meta = False
    key = ""
    last = len(parts) - 1
    for position, part in enumerate(parts):
        if part == "C":
            ctrl = True
        elif part == "M":
            meta = True
        elif position == last:
            key = part
    return KeyPress(key, ctrl, meta)


def parse_key_sequence(key_sequence: str) -> tuple[KeyPress, ...]:
    """Parse a whitespace-separated sequence like "C-x C-c"."""
    return tuple(parse_key_press(part) for part in key_sequence.split())


def format_sequence(sequence) -> str:
    """Render an in-progress sequence for display, e.g. "C-x -"."""
    if not sequence:
        return ""
    return " ".join(str(press) for press in sequence) + " -"


class KeyBindingMap:
    """Holds key bindings and tracks a partially typed sequence."""

    def __init__(self) -> None:
        self._sequence_bindings: list[KeySequenceBinding] = []
        self._raw_bindings: list[RawSequenceBinding] = []
        self._current: list[KeyPress] = []

    def bind_key_sequence(self, key_sequence: str, command: Command) -> None:
        self._sequence_bindings.append(
            KeySequenceBinding(parse_key_sequence(key_sequence), command)
        )

    def bind_raw_sequence(self, sequence: str, command: Command) -> None:
        self._raw_bindings.append(RawSequenceBinding(sequence, command))

    def lookup_sequence(self, sequence: str) -> Command | None:
        """Find a command by raw escape sequence, then by parsed key sequence."""
        for raw in self._raw_bindings:
            if raw.sequence == sequence:
                return raw.command
        return self.has_key_sequence_binding(sequence)

    def process_key_press(self, key: str, ctrl: bool, meta: bool) -> KeyMatch:
        """Feed a key press; report a completed command or a pending prefix."""
        self._current.append(KeyPress(key, ctrl, meta))
        current = tuple(self._current)
        for binding in self._sequence_bindings:
            if binding.sequence == current:
                self._current.clear()
                return KeyMatch(binding.command, True, False)
            if (
                len(current) < len(binding.sequence)
                and binding.sequence[: len(current)] == current
            ):
                return KeyMatch(None, False, True)
        self._current.clear()
        return KeyMatch(None, False, False)

    def reset_sequence(self) -> None:
        self._current.clear()

    def current_sequence(self) -> tuple[KeyPress, ...]:
        """The key presses typed so far in an unfinished sequence."""
        return tuple(self._current)

    def has_key_sequence_binding(self, key_sequence: str) -> Command | None:
        """The command bound to exactly this key sequence, or None."""
        wanted = parse_key_sequence(key_sequence)
        for binding in self._sequence_bindings:
            if binding.sequence == wanted:
                return binding.command
        return None


_DEFAULT_SEQUENCES = (
    ("C-f", "forward-char"),
    ("C-b", "backward-char"),
    ("C-n", "next-line"),
    ("C-p", "previous-line"),
    ("C-a", "beginning-of-line"),
    ("C-e", "end-of-line"),
    ("C-h", "delete-backward-char"),
    ("C-d", "delete-char"),
    ("C-g", "keyboard-quit"),
    ("C-v", "page-down"),
    ("C-x C-c", "quit"),
    ("C-x C-f", "find-file"),
)

_DEFAULT_RAW = (
    ("\x1b[6~", "page-down"),
    ("\x1b[5~", "page-up"),
    ("\x1b[C", "forward-char"),
    ("\x1b[D", "backward-char"),
    ("\x1b[B", "next-line"),
    ("\x1b[A", "previous-line"),
)


def default_key_bindings(commands: Mapping[str, Command]) -> KeyBindingMap:
    """Build the standard Emacs-style map from named commands.

    Bindings whose command name is absent from ``commands`` are left out.
    """
    bindings = KeyBindingMap()
    for keys, name in _DEFAULT_SEQUENCES:
        command = commands.get(name)
        if command is not None:
            bindings.bind_key_sequence(keys, command)
    for raw, name in _DEFAULT_RAW:
        command = commands.get(name)
        if command is not None:
            bindings.bind_raw_sequence(raw, command)
    return bindings