"""Editing core of an Emacs-style terminal editor: events, key bindings,
minibuffer, modes, windows, layouts, scrolling and logging."""

__version__ = "0.1.0"