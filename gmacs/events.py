"""Editor input events and a bounded, thread-safe event queue."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class EventType(Enum):
    """Kinds of events the editor reacts to."""

    KEY = auto()
    RESIZE = auto()
    QUIT = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A single key press as read from the terminal."""

    key: str = ""
    rune: str = ""
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False
    raw: bytes = b""

    @property
    def type(self) -> EventType:
        return EventType.KEY


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    width: int
    height: int

    @property
    def type(self) -> EventType:
        return EventType.RESIZE


@dataclass(frozen=True)
class QuitEvent:
    """A request to stop the editor, e.g. from a signal handler."""

    @property
    def type(self) -> EventType:
        return EventType.QUIT


Event = Union[KeyEvent, ResizeEvent, QuitEvent]


class EventQueue:
    """A bounded FIFO of events; pushes to a full queue are dropped."""

    def __init__(self, buffer_size: int) -> None:
        if buffer_size < 0:
            raise ValueError("buffer_size must not be negative")
        self._capacity = buffer_size
        self._events: deque[Event] = deque()
        self._cond = threading.Condition()
        self._closed = False

    def __len__(self) -> int:
        with self._cond:
            return len(self._events)

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: Event) -> bool:
        """Queue an event; return False if it was dropped because the queue is full."""
        with self._cond:
            if self._closed:
                raise RuntimeError("event queue is closed")
            if len(self._events) >= self._capacity:
                return False
            self._events.append(event)
            self._cond.notify()
            return True

    def pop(self) -> Event | None:
        """Take the oldest event without waiting, or None if there is none."""
        with self._cond:
            if self._events:
                return self._events.popleft()
            return None

    def pop_blocking(self) -> Event | None:
        """Wait for an event; return None once the queue is closed and drained."""
        with self._cond:
            while not self._events and not self._closed:
                self._cond.wait()
            if self._events:
                return self._events.popleft()
            return None

    def close(self) -> None:
        """Close the queue, waking every waiting reader."""
        with self._cond:
            if self._closed:
                raise RuntimeError("event queue is already closed")
            self._closed = True
            self._cond.notify_all()