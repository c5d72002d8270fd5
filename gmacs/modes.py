"""Major and minor editing modes and the manager that applies them."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from gmacs.keybinding import KeyBindingMap

FUNDAMENTAL_MODE = "fundamental-mode"


@dataclass(frozen=True)
class HighlightSegment:
    """A styled span of one line."""

    start: int
    end: int
    style: str


@runtime_checkable
class MajorMode(Protocol):
    """One major mode governs a buffer at a time."""

    name: str
    file_pattern: re.Pattern[str] | None
    key_bindings: KeyBindingMap | None
    commands: dict[str, Callable[..., Any]]
    syntax_highlighter: Any

    def indent(self, buffer: Any, line: int) -> int: ...

    def initialize(self, buffer: Any) -> None: ...

    def on_activate(self, buffer: Any) -> None: ...

    def on_deactivate(self, buffer: Any) -> None: ...


@runtime_checkable
class MinorMode(Protocol):
    """An optional feature layered over the major mode."""

    name: str
    key_bindings: KeyBindingMap | None
    commands: dict[str, Callable[..., Any]]
    priority: int

    def enable(self, buffer: Any) -> None: ...

    def disable(self, buffer: Any) -> None: ...

    def is_enabled(self, buffer: Any) -> bool: ...


class ModeError(Exception):
    """A mode operation failed, e.g. an unknown mode name."""


def _contains(items: list[Any], target: Any) -> bool:
    return any(item is target for item in items)


class TextMode:
    """Plain text editing: no highlighting and no automatic indentation.

    The mode remembers which buffers it has been initialized for and which
    of them it is currently active in.
    """

    def __init__(self) -> None:
        self.name = "text-mode"
        self.key_bindings: KeyBindingMap | None = KeyBindingMap()
        self.commands: dict[str, Callable[..., Any]] = {}
        self.file_pattern: re.Pattern[str] | None = re.compile(
            r"\.(txt|text|md|markdown|org)$"
        )
        self.syntax_highlighter: Any = None
        self._initialized: list[Any] = []
        self._active: list[Any] = []

    @property
    def active_buffers(self) -> list[Any]:
        """Buffers in which this mode is currently active."""
        return list(self._active)

    def is_initialized(self, buffer: Any) -> bool:
        return _contains(self._initialized, buffer)

    def indent(self, buffer: Any, line: int) -> int:
        """Indentation for ``line``: text mode never indents automatically."""
        if line < 0:
            raise ValueError(f"line must not be negative: {line}")
        return 0

    def initialize(self, buffer: Any) -> None:
        if not _contains(self._initialized, buffer):
            self._initialized.append(buffer)

    def on_activate(self, buffer: Any) -> None:
        if not _contains(self._active, buffer):
            self._active.append(buffer)

    def on_deactivate(self, buffer: Any) -> None:
        self._active = [item for item in self._active if item is not buffer]


class ModeManager:
    """Registry of modes; applies them to buffers.

    A buffer is any object with a writable ``major_mode`` attribute.
    """

    def __init__(self) -> None:
        self._major_modes: dict[str, MajorMode] = {}
        self._minor_modes: dict[str, MinorMode] = {}
        self.global_key_bindings = KeyBindingMap()
        self.register_major_mode(TextMode())

    def register_major_mode(self, mode: MajorMode) -> None:
        self._major_modes[mode.name] = mode

    def register_minor_mode(self, mode: MinorMode) -> None:
        self._minor_modes[mode.name] = mode

    def get_major_mode_by_name(self, name: str) -> MajorMode | None:
        return self._major_modes.get(name)

    def get_minor_mode_by_name(self, name: str) -> MinorMode | None:
        return self._minor_modes.get(name)

    def set_major_mode(self, buffer: Any, mode_name: str) -> None:
        """Replace the buffer's major mode, deactivating the old one."""
        mode = self._major_modes.get(mode_name)
        if mode is None:
            raise ModeError("Unknown major mode: " + mode_name)
        current = getattr(buffer, "major_mode", None)
        if current is not None:
            current.on_deactivate(buffer)
        buffer.major_mode = mode
        mode.initialize(buffer)
        mode.on_activate(buffer)

    def toggle_minor_mode(self, buffer: Any, mode_name: str) -> None:
        mode = self._minor_modes.get(mode_name)
        if mode is None:
            raise ModeError("Unknown minor mode: " + mode_name)
        if mode.is_enabled(buffer):
            mode.disable(buffer)
        else:
            mode.enable(buffer)

    def _enabled_minor_modes(self, buffer: Any) -> list[MinorMode]:
        enabled = [m for m in self._minor_modes.values() if m.is_enabled(buffer)]
        return sorted(enabled, key=lambda m: m.priority)

    def effective_key_bindings(self, buffer: Any) -> KeyBindingMap:
        """The bindings in force: global, overridden by major, then minor modes.

        Later layers replace earlier ones wholesale; minor modes are applied
        in ascending priority so the highest priority wins.
        """
        effective = self.global_key_bindings
        major = getattr(buffer, "major_mode", None)
        layers = ([major] if major is not None else []) + self._enabled_minor_modes(buffer)
        for mode in layers:
            if mode.key_bindings is not None:
                effective = mode.key_bindings
        return effective

    def auto_detect_major_mode(self, filepath: str) -> MajorMode | None:
        """Pick the major mode whose file pattern matches, else fundamental mode."""
        if filepath:
            for mode in self._major_modes.values():
                pattern = mode.file_pattern
                if pattern is not None and pattern.search(filepath):
                    return mode
        return self._major_modes.get(FUNDAMENTAL_MODE)