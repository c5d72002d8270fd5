import re

import pytest

from gmacs.keybinding import KeyBindingMap
from gmacs.modes import (
    HighlightSegment,
    MajorMode,
    MinorMode,
    ModeError,
    ModeManager,
    TextMode,
)


class FakeBuffer:
    def __init__(self):
        self.major_mode = None
        self.minor = set()


class RecordingMode:
    def __init__(self, name, pattern=None, bindings=None):
        self.name = name
        self.file_pattern = re.compile(pattern) if pattern else None
        self.key_bindings = bindings
        self.commands = {}
        self.syntax_highlighter = None
        self.calls = []

    def indent(self, buffer, line):
        return 0

    def initialize(self, buffer):
        self.calls.append("initialize")

    def on_activate(self, buffer):
        self.calls.append("activate")

    def on_deactivate(self, buffer):
        self.calls.append("deactivate")


class FakeMinor:
    def __init__(self, name, priority=0, bindings=None):
        self.name = name
        self.priority = priority
        self.key_bindings = bindings
        self.commands = {}

    def enable(self, buffer):
        buffer.minor.add(self.name)

    def disable(self, buffer):
        buffer.minor.discard(self.name)

    def is_enabled(self, buffer):
        return self.name in buffer.minor


def test_text_mode_defaults():
    mode = TextMode()
    assert mode.name == "text-mode"
    assert mode.indent(FakeBuffer(), 3) == 0
    assert mode.syntax_highlighter is None
    assert mode.commands == {}
    assert isinstance(mode, MajorMode)


@pytest.mark.parametrize(
    "path, extension",
    [
        ("a.txt", ".txt"),
        ("b.text", ".text"),
        ("c.md", ".md"),
        ("d.markdown", ".markdown"),
        ("e.org", ".org"),
    ],
)
def test_text_mode_pattern_matches(path, extension):
    match = TextMode().file_pattern.search(path)
    assert match.group(0) == extension


def test_text_mode_pattern_rejects_other():
    assert TextMode().file_pattern.search("main.go") is None


def test_manager_has_text_mode():
    manager = ModeManager()
    assert manager.get_major_mode_by_name("text-mode").name == "text-mode"
    assert manager.get_major_mode_by_name("nope") is None


def test_set_major_mode_runs_lifecycle():
    manager = ModeManager()
    first = RecordingMode("first-mode")
    second = RecordingMode("second-mode")
    manager.register_major_mode(first)
    manager.register_major_mode(second)
    buffer = FakeBuffer()
    manager.set_major_mode(buffer, "first-mode")
    assert buffer.major_mode is first
    assert first.calls == ["initialize", "activate"]
    manager.set_major_mode(buffer, "second-mode")
    assert buffer.major_mode is second
    assert first.calls[-1] == "deactivate"
    assert second.calls == ["initialize", "activate"]


def test_set_unknown_major_mode_raises():
    manager = ModeManager()
    buffer = FakeBuffer()
    with pytest.raises(ModeError, match="Unknown major mode: missing-mode"):
        manager.set_major_mode(buffer, "missing-mode")
    assert buffer.major_mode is None


def test_toggle_minor_mode():
    manager = ModeManager()
    minor = FakeMinor("auto-a-mode")
    manager.register_minor_mode(minor)
    assert isinstance(minor, MinorMode)
    assert manager.get_minor_mode_by_name("auto-a-mode") is minor
    buffer = FakeBuffer()
    manager.toggle_minor_mode(buffer, "auto-a-mode")
    assert minor.is_enabled(buffer) is True
    manager.toggle_minor_mode(buffer, "auto-a-mode")
    assert minor.is_enabled(buffer) is False


def test_toggle_unknown_minor_mode_raises():
    with pytest.raises(ModeError, match="Unknown minor mode: ghost-mode"):
        ModeManager().toggle_minor_mode(FakeBuffer(), "ghost-mode")


def test_effective_bindings_layering():
    manager = ModeManager()
    buffer = FakeBuffer()
    assert manager.effective_key_bindings(buffer) is manager.global_key_bindings

    major_bindings = KeyBindingMap()
    manager.register_major_mode(RecordingMode("m-mode", bindings=major_bindings))
    manager.set_major_mode(buffer, "m-mode")
    assert manager.effective_key_bindings(buffer) is major_bindings

    low_bindings, high_bindings = KeyBindingMap(), KeyBindingMap()
    manager.register_minor_mode(FakeMinor("high", priority=10, bindings=high_bindings))
    manager.register_minor_mode(FakeMinor("low", priority=1, bindings=low_bindings))
    manager.toggle_minor_mode(buffer, "low")
    assert manager.effective_key_bindings(buffer) is low_bindings
    manager.toggle_minor_mode(buffer, "high")
    assert manager.effective_key_bindings(buffer) is high_bindings


def test_mode_without_bindings_keeps_previous_layer():
    manager = ModeManager()
    manager.register_major_mode(RecordingMode("bare-mode"))
    buffer = FakeBuffer()
    manager.set_major_mode(buffer, "bare-mode")
    assert manager.effective_key_bindings(buffer) is manager.global_key_bindings


def test_auto_detect_by_extension():
    manager = ModeManager()
    assert manager.auto_detect_major_mode("notes.md").name == "text-mode"


def test_auto_detect_falls_back_to_fundamental():
    manager = ModeManager()
    assert manager.auto_detect_major_mode("main.go") is None
    fundamental = RecordingMode("fundamental-mode")
    manager.register_major_mode(fundamental)
    assert manager.auto_detect_major_mode("main.go") is fundamental
    assert manager.auto_detect_major_mode("") is fundamental


def test_highlight_segment_fields():
    segment = HighlightSegment(start=1, end=4, style="keyword")
    assert (segment.start, segment.end, segment.style) == (1, 4, "keyword")