# gmacs

The editing core of a small Emacs-style terminal editor, as a Python
library. It provides the pieces that sit between a terminal and a text
buffer:

- **Events** (`gmacs.events`): `KeyEvent`, `ResizeEvent` and `QuitEvent`,
  and an `EventQueue` with a fixed capacity. `push` returns `False` and
  drops the event when the queue is full; `pop` returns `None` when it is
  empty; `pop_blocking` waits, and returns `None` once the queue has been
  closed and drained.
- **Key bindings** (`gmacs.keybinding`): Emacs notation such as `C-x C-c`,
  `M-x` or `C-M-a`, prefix sequences that wait for more keys, and raw
  escape sequences such as the arrow keys.
- **Minibuffer** (`gmacs.minibuffer`): `M-x ` command input,
  `Find file: ` input, and one-shot messages.
- **Modes** (`gmacs.modes`): `MajorMode` and `MinorMode` protocols, a
  `ModeManager`, and a `TextMode` picked for `.txt`, `.text`, `.md`,
  `.markdown` and `.org` files.
- **Windows** (`gmacs.window`): the visible part of a buffer, with line
  wrapping or horizontal scrolling, and a cursor position measured in
  terminal cells, so wide characters such as Japanese take two columns.
- **Layout** (`gmacs.layout`, `gmacs.window_commands`): windows split side
  by side or one above the other, cycling between them, and deleting them.
- **Scrolling** (`gmacs.scroll`): line and page scrolling, toggling line
  wrap, and keeping the cursor on screen.
- **Logging** (`gmacs.log`): a levelled logger writing to a time-stamped
  file in a log directory.

## Installing

```
pip install gmacs
```

Python 3.10 or later is needed. Display widths come from `wcwidth`.

## Key sequences

```python
from gmacs.keybinding import KeyBindingMap, format_sequence, parse_key_sequence

def quit_editor(editor):
    editor.quit()

bindings = KeyBindingMap()
bindings.bind_key_sequence("C-x C-c", quit_editor)

command, matched, continuing = bindings.process_key_press("x", True, False)
# None, False, True: C-x is a prefix, more keys are awaited

command, matched, continuing = bindings.process_key_press("c", True, False)
# quit_editor, True, False

print(format_sequence(parse_key_sequence("C-x C-c")))   # "C-x C-c -"
```

A key that completes no binding and extends no prefix resets the sequence
in progress, so the next key starts afresh. `bind_raw_sequence` binds an
escape sequence such as `"\x1b[A"`, and `lookup_sequence` finds a command
by raw sequence first and then by key notation.

`default_key_bindings(commands)` builds the usual Emacs map (`C-f`, `C-b`,
`C-n`, `C-p`, `C-a`, `C-e`, `C-h`, `C-d`, `C-g`, `C-v`, `C-x C-c`,
`C-x C-f`, Page Up/Down and the arrow keys) from a mapping of command
names such as `"forward-char"` or `"quit"` to callables. Names missing from
the mapping are simply left unbound.

## Minibuffer

```python
from gmacs.minibuffer import Minibuffer

minibuffer = Minibuffer()
minibuffer.start_command_input()          # display_text() == "M-x "
for ch in "toggle-truncate-lines":
    minibuffer.insert_char(ch)
minibuffer.move_cursor_to_beginning()
minibuffer.clear()                        # back to inactive
```

Editing calls take effect only while the minibuffer is taking command or
file input. `handle_key(event, on_enter)` applies a `KeyEvent`: Enter
calls `on_enter`, Escape cancels, Backspace and `C-h` delete backward,
`C-d`, `C-f`, `C-b`, `C-a` and `C-e` edit and move, and plain characters
are inserted. While a message is shown, any key clears it and is reported
as not consumed.

## Modes

`ModeManager` starts with `TextMode` registered. `set_major_mode(buffer,
name)` deactivates the buffer's current major mode, stores the new one in
`buffer.major_mode`, and initializes and activates it;
`toggle_minor_mode` enables or disables a registered minor mode. Unknown
names raise `ModeError`. `effective_key_bindings(buffer)` returns the
manager's global bindings, replaced wholesale by the major mode's and then
by each enabled minor mode's in ascending priority.

`auto_detect_major_mode(filepath)` returns the first major mode whose file
pattern matches, otherwise a mode registered as `"fundamental-mode"`. No
such mode is registered by default, so without one it returns `None`.

## Windows and layout

A `Window` shows a buffer: any object with a `content` sequence of lines
and a `cursor` with `row` and `col`, where `col` is a byte offset into the
line's UTF-8 encoding. With wrapping off, long lines are scrolled
horizontally and a backslash marks where text is cut off.

A `WindowLayout` holds a tree of windows inside the terminal. One row at
the bottom is kept for the minibuffer and each window keeps one row for its
mode line, so a single window in a 40×10 terminal shows 8 lines of text.
Side-by-side windows are separated by a one-column border.
`split_window_right` and `split_window_below` halve the active window and
make the new half active; `next_window` cycles through the windows in
order; `delete_current_window` returns `False` for the only window;
`delete_other_windows` keeps just the active one.

The functions in `gmacs.window_commands` (`split_window_right`,
`split_window_below`, `other_window`, `delete_window`,
`delete_other_windows`) take any object with a `layout` attribute. Those
in `gmacs.scroll` take any object with a `current_window` attribute and,
for their messages, a `minibuffer` attribute.

## Logging

```python
from gmacs import log

log.init("logs")              # creates logs/gmacs_YYYYMMDD_HHMMSS.log
log.info("opened %s", "notes.md")
log.set_level(log.Level.WARN)
log.close()
```

The module-level functions do nothing until `init` has been called.
`Logger` can also be used on its own, as a context manager.

## What it does not do

This package has no editor object, no text buffer type, no file loading or
saving, no command registry, no terminal input or screen drawing, and no
program to run. It supplies the parts above for an application to combine;
the buffer, the editor and the display come from that application.

## Running the tests

```
pip install "gmacs[test]"
pytest
```