"""Tiling of the screen into windows as a binary split tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from gmacs.window import Window


class SplitType(Enum):
    """How a node divides its area between its two children."""

    NONE = auto()
    HORIZONTAL = auto()  # one above the other (split-window-below)
    VERTICAL = auto()  # side by side (split-window-right)


@dataclass(eq=False)
class WindowLayoutNode:
    """A node of the layout tree: either a window or a split of two children.

    For a split, ``left`` is the left or top child and ``right`` the right
    or bottom one.
    """

    split_type: SplitType = SplitType.NONE
    split_ratio: float = 0.0
    left: WindowLayoutNode | None = None
    right: WindowLayoutNode | None = None
    window: Window | None = None
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def is_leaf(self) -> bool:
        return self.window is not None

    def is_split(self) -> bool:
        return self.left is not None and self.right is not None

    def leaves(self) -> Iterator[WindowLayoutNode]:
        """The window nodes under this one, left/top first."""
        if self.is_leaf():
            yield self
            return
        for child in (self.left, self.right):
            if child is not None:
                yield from child.leaves()


class WindowLayout:
    """Arranges windows over the terminal, keeping one row for the minibuffer.

    Each window gives up one row of its area to its mode line; side-by-side
    windows are separated by a one-column border.
    """

    def __init__(self, window: Window, width: int, height: int) -> None:
        self._root = WindowLayoutNode(window=window, width=width, height=height - 1)
        self._active = self._root
        self._total_width = width
        self._total_height = height
        self._calculate_layout()

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the whole terminal area."""
        return self._total_width, self._total_height

    @property
    def root(self) -> WindowLayoutNode:
        return self._root

    @property
    def current_window(self) -> Window | None:
        return self._active.window

    def set_active_window(self, window: Window) -> None:
        """Make ``window`` the selected one; it must be part of the layout."""
        for node in self._root.leaves():
            if node.window is window:
                self._active = node
                return
        raise ValueError("window is not part of this layout")

    def resize(self, width: int, height: int) -> None:
        self._total_width = width
        self._total_height = height
        self._calculate_layout()

    def windows(self) -> list[Window]:
        """Every window, in tree order."""
        return [node.window for node in self._root.leaves() if node.window is not None]

    def window_nodes(self) -> list[WindowLayoutNode]:
        """Every leaf node, in tree order, with its position and size."""
        return list(self._root.leaves())

    def _calculate_layout(self) -> None:
        content_area = self._total_height - 1
        self._layout_node(self._root, 0, 0, self._total_width, content_area)

    def _layout_node(
        self, node: WindowLayoutNode, x: int, y: int, width: int, height: int
    ) -> None:
        node.x, node.y, node.width, node.height = x, y, width, height

        if node.is_leaf():
            content_height = max(height - 1, 1)  # one row for the mode line
            node.window.resize(width, content_height)
            return

        if node.split_type is SplitType.VERTICAL:
            available = width - 1  # one column for the border
            left_width = int(available * node.split_ratio)
            right_width = available - left_width
            if node.left is not None:
                self._layout_node(node.left, x, y, left_width, height)
            if node.right is not None:
                self._layout_node(node.right, x + left_width + 1, y, right_width, height)
        elif node.split_type is SplitType.HORIZONTAL:
            top_height = int(height * node.split_ratio)
            bottom_height = height - top_height
            if node.left is not None:
                self._layout_node(node.left, x, y, width, top_height)
            if node.right is not None:
                self._layout_node(node.right, x, y + top_height, width, bottom_height)

    def _split(self, split_type: SplitType) -> Window | None:
        active = self._active
        if not active.is_leaf():
            return None
        old_window = active.window
        new_window = Window(old_window.buffer, 0, 0)
        new_node = WindowLayoutNode(window=new_window)

        active.split_type = split_type
        active.split_ratio = 0.5
        active.left = WindowLayoutNode(window=old_window)
        active.right = new_node
        active.window = None

        self._active = new_node
        self._calculate_layout()
        return new_window

    def split_window_right(self) -> Window | None:
        """Split the selected window side by side; select and return the new one."""
        return self._split(SplitType.VERTICAL)

    def split_window_below(self) -> Window | None:
        """Split the selected window top and bottom; select and return the new one."""
        return self._split(SplitType.HORIZONTAL)

    def next_window(self) -> None:
        """Select the window after the current one, wrapping around."""
        windows = self.windows()
        if len(windows) <= 1:
            return
        current = self.current_window
        index = next((i for i, w in enumerate(windows) if w is current), -1)
        self.set_active_window(windows[(index + 1) % len(windows)])

    def _find_parent(
        self, node: WindowLayoutNode | None, target: WindowLayoutNode
    ) -> WindowLayoutNode | None:
        if node is None or node is target:
            return None
        if node.left is target or node.right is target:
            return node
        return self._find_parent(node.left, target) or self._find_parent(node.right, target)

    def delete_current_window(self) -> bool:
        """Remove the selected window; return False if it is the only one."""
        active = self._active
        if active is self._root:
            return False
        parent = self._find_parent(self._root, active)
        if parent is None:
            return False

        keep = parent.right if parent.left is active else parent.left
        parent.split_type = keep.split_type
        parent.split_ratio = keep.split_ratio
        parent.left = keep.left
        parent.right = keep.right
        parent.window = keep.window

        self._active = parent if keep.is_leaf() else next(parent.leaves())
        self._calculate_layout()
        return True

    def delete_other_windows(self) -> None:
        """Keep only the selected window, filling the whole screen."""
        current = self.current_window
        if current is None:
            return
        self._root = WindowLayoutNode(
            window=current, width=self._total_width, height=self._total_height
        )
        self._active = self._root
        self._calculate_layout()