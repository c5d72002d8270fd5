from gmacs.keybinding import (
    KeyBindingMap,
    KeyPress,
    default_key_bindings,
    format_sequence,
    parse_key_press,
    parse_key_sequence,
)


def make_recorder():
    calls = []

    def command(editor):
        calls.append(editor)

    return command, calls


def test_key_sequence_binding():
    kbm = KeyBindingMap()
    command, calls = make_recorder()
    kbm.bind_key_sequence("C-x C-f", command)

    cmd, matched, continuing = kbm.process_key_press("x", True, False)
    assert matched is False
    assert continuing is True
    assert cmd is None

    cmd, matched, continuing = kbm.process_key_press("f", True, False)
    assert matched is True
    assert continuing is False
    assert cmd is command

    cmd("editor")
    assert calls == ["editor"]


def test_key_sequence_reset():
    kbm = KeyBindingMap()
    command, calls = make_recorder()
    kbm.bind_key_sequence("C-x C-c", command)

    _, matched, continuing = kbm.process_key_press("x", True, False)
    assert (matched, continuing) == (False, True)

    _, matched, continuing = kbm.process_key_press("z", False, False)
    assert (matched, continuing) == (False, False)

    _, matched, continuing = kbm.process_key_press("c", True, False)
    assert (matched, continuing) == (False, False)
    assert calls == []


def test_multiple_key_sequences():
    kbm = KeyBindingMap()
    quit_command, quit_calls = make_recorder()
    file_command, file_calls = make_recorder()
    kbm.bind_key_sequence("C-x C-c", quit_command)
    kbm.bind_key_sequence("C-x C-f", file_command)

    kbm.process_key_press("x", True, False)
    cmd, matched, _ = kbm.process_key_press("c", True, False)
    assert matched and cmd is quit_command
    cmd("e1")

    kbm.process_key_press("x", True, False)
    cmd, matched, _ = kbm.process_key_press("f", True, False)
    assert matched and cmd is file_command
    cmd("e2")

    assert quit_calls == ["e1"]
    assert file_calls == ["e2"]


def test_default_bindings_quit_sequence():
    quit_command, calls = make_recorder()
    kbm = default_key_bindings({"quit": quit_command})
    first = kbm.process_key_press("x", True, False)
    assert first.continuing is True
    second = kbm.process_key_press("c", True, False)
    assert second.matched is True
    assert second.command is quit_command
    assert kbm.current_sequence() == ()


def test_default_bindings_skip_missing_commands():
    forward, _ = make_recorder()
    kbm = default_key_bindings({"forward-char": forward})
    assert kbm.lookup_sequence("C-f") is forward
    assert kbm.lookup_sequence("\x1b[C") is forward
    assert kbm.lookup_sequence("C-b") is None
    assert kbm.process_key_press("b", True, False).matched is False


def test_default_bindings_page_keys():
    down, _ = make_recorder()
    up, _ = make_recorder()
    kbm = default_key_bindings({"page-down": down, "page-up": up})
    assert kbm.lookup_sequence("\x1b[6~") is down
    assert kbm.lookup_sequence("\x1b[5~") is up
    assert kbm.lookup_sequence("C-v") is down


def test_raw_lookup_takes_precedence():
    raw_cmd, _ = make_recorder()
    seq_cmd, _ = make_recorder()
    kbm = KeyBindingMap()
    kbm.bind_key_sequence("C-a", seq_cmd)
    kbm.bind_raw_sequence("C-a", raw_cmd)
    assert kbm.lookup_sequence("C-a") is raw_cmd
    assert kbm.has_key_sequence_binding("C-a") is seq_cmd


def test_has_key_sequence_binding_missing():
    assert KeyBindingMap().has_key_sequence_binding("C-x C-c") is None


def test_current_sequence_and_reset():
    kbm = KeyBindingMap()
    command, _ = make_recorder()
    kbm.bind_key_sequence("C-x C-c", command)
    kbm.process_key_press("x", True, False)
    assert kbm.current_sequence() == (KeyPress("x", True, False),)
    assert format_sequence(kbm.current_sequence()) == "C-x -"
    kbm.reset_sequence()
    assert kbm.current_sequence() == ()


def test_first_prefix_binding_wins():
    long_cmd, _ = make_recorder()
    short_cmd, _ = make_recorder()
    kbm = KeyBindingMap()
    kbm.bind_key_sequence("C-x C-c", long_cmd)
    kbm.bind_key_sequence("C-x", short_cmd)
    result = kbm.process_key_press("x", True, False)
    assert result.continuing is True
    assert result.command is None


def test_parse_key_press():
    assert parse_key_press("C-x") == KeyPress("x", True, False)
    assert parse_key_press("M-x") == KeyPress("x", False, True)
    assert parse_key_press("C-M-a") == KeyPress("a", True, True)
    assert parse_key_press("a") == KeyPress("a", False, False)


def test_parse_key_sequence():
    assert parse_key_sequence("C-x  C-c") == (
        KeyPress("x", True, False),
        KeyPress("c", True, False),
    )
    assert parse_key_sequence("") == ()


def test_format_sequence():
    assert format_sequence(()) == ""
    assert format_sequence(parse_key_sequence("C-x C-c")) == "C-x C-c -"
    assert format_sequence(parse_key_sequence("C-M-a M-b q")) == "C-M-a M-b q -"