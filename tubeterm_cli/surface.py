"""Drawing targets for the page renderer.

The renderer only computes rectangles; a ``Surface`` paints blocks, text and
lists into them. ``CursesSurface`` is the terminal implementation.
"""

from __future__ import annotations

import textwrap
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from .layout import Rect

# Box drawing characters (rounded corners)
BOX_H = "─"
BOX_V = "│"
BOX_TL = "╭"
BOX_TR = "╮"
BOX_BL = "╰"
BOX_BR = "╯"


class Style(Enum):
    NORMAL = auto()
    HOVER = auto()      # light red
    SELECTED = auto()   # light blue
    ACTIVE = auto()     # light yellow, the tab/page currently shown
    ERROR = auto()
    DIM = auto()


def item_style(selected: bool, hover: bool) -> Style:
    """Border colour for a widget given its focus state."""
    if selected:
        return Style.SELECTED
    if hover:
        return Style.HOVER
    return Style.NORMAL


def wrap_lines(lines: Sequence[str], width: int) -> List[str]:
    out: List[str] = []
    for line in lines:
        if not line:
            out.append("")
            continue
        out.extend(textwrap.wrap(line, width=max(1, width)) or [""])
    return out


class Surface(ABC):
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Return ``(width, height)`` of the drawable area."""

    @abstractmethod
    def clear(self, rect: Rect) -> None:
        ...

    @abstractmethod
    def draw_block(self, rect: Rect, title: Optional[str] = None, style: Style = Style.NORMAL) -> None:
        ...

    @abstractmethod
    def draw_paragraph(
        self,
        rect: Rect,
        lines: Sequence[str],
        style: Style = Style.NORMAL,
        *,
        center: bool = False,
        wrap: bool = True,
    ) -> None:
        ...

    @abstractmethod
    def draw_list(
        self,
        rect: Rect,
        items: Sequence[str],
        selected: Optional[int] = None,
        offset: int = 0,
        style: Style = Style.NORMAL,
        selected_style: Style = Style.ACTIVE,
    ) -> None:
        ...


class CursesSurface(Surface):
    """Surface backed by a curses window (normally ``stdscr``)."""

    def __init__(self, window, curses_module):
        self.win = window
        self.curses = curses_module
        self.has_colors = False
        self._attrs = {}
        self._init_colors_if_needed()

    def _init_colors_if_needed(self) -> None:
        curses = self.curses
        attrs = {
            Style.NORMAL: 0,
            Style.HOVER: curses.A_BOLD,
            Style.SELECTED: curses.A_REVERSE,
            Style.ACTIVE: curses.A_BOLD,
            Style.ERROR: curses.A_BOLD,
            Style.DIM: curses.A_DIM,
        }
        try:
            if hasattr(curses, "has_colors") and curses.has_colors():
                curses.start_color()
                curses.use_default_colors()
                curses.init_pair(1, curses.COLOR_RED, -1)
                curses.init_pair(2, curses.COLOR_BLUE, -1)
                curses.init_pair(3, curses.COLOR_YELLOW, -1)
                attrs[Style.HOVER] = curses.color_pair(1) | curses.A_BOLD
                attrs[Style.SELECTED] = curses.color_pair(2) | curses.A_BOLD
                attrs[Style.ACTIVE] = curses.color_pair(3)
                attrs[Style.ERROR] = curses.color_pair(1)
                self.has_colors = True
        except curses.error:
            self.has_colors = False
        self._attrs = attrs

    def _put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        h, w = self.win.getmaxyx()
        if y < 0 or y >= h or x < 0 or x >= w or not text:
            return
        try:
            self.win.addnstr(y, x, text, max(0, w - x), attr)
        except self.curses.error:
            # Writing the bottom-right cell moves the cursor off-screen and raises.
            pass

    def size(self) -> Tuple[int, int]:
        h, w = self.win.getmaxyx()
        return w, h

    def clear(self, rect: Rect) -> None:
        blank = " " * max(0, rect.width)
        for y in range(rect.y, rect.bottom):
            self._put(y, rect.x, blank)

    def draw_block(self, rect: Rect, title: Optional[str] = None, style: Style = Style.NORMAL) -> None:
        if rect.width < 2 or rect.height < 2:
            return
        attr = self._attrs.get(style, 0)
        inner_w = rect.width - 2
        self._put(rect.y, rect.x, BOX_TL + BOX_H * inner_w + BOX_TR, attr)
        for y in range(rect.y + 1, rect.bottom - 1):
            self._put(y, rect.x, BOX_V, attr)
            self._put(y, rect.right - 1, BOX_V, attr)
        self._put(rect.bottom - 1, rect.x, BOX_BL + BOX_H * inner_w + BOX_BR, attr)
        if title:
            self._put(rect.y, rect.x + 2, title[: max(0, inner_w - 2)], attr)

    def draw_paragraph(
        self,
        rect: Rect,
        lines: Sequence[str],
        style: Style = Style.NORMAL,
        *,
        center: bool = False,
        wrap: bool = True,
    ) -> None:
        if rect.is_empty():
            return
        attr = self._attrs.get(style, 0)
        shown = wrap_lines(lines, rect.width) if wrap else list(lines)
        for i, line in enumerate(shown[: rect.height]):
            line = line[: rect.width]
            x = rect.x + (max(0, (rect.width - len(line)) // 2) if center else 0)
            self._put(rect.y + i, x, line, attr)

    def draw_list(
        self,
        rect: Rect,
        items: Sequence[str],
        selected: Optional[int] = None,
        offset: int = 0,
        style: Style = Style.NORMAL,
        selected_style: Style = Style.ACTIVE,
    ) -> None:
        if rect.is_empty():
            return
        attr = self._attrs.get(style, 0)
        sel_attr = self._attrs.get(selected_style, 0) | self.curses.A_REVERSE
        visible = items[offset: offset + rect.height]
        for i, label in enumerate(visible):
            idx = offset + i
            text = label[: rect.width].ljust(rect.width) if idx == selected else label[: rect.width]
            self._put(rect.y + i, rect.x, text, sel_attr if idx == selected else attr)
