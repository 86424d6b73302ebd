from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..layout import Rect
from ..surface import Style, Surface


@dataclass
class TextList:
    """Scrollable list of labels with one highlighted entry."""

    items: List[str] = field(default_factory=list)
    selected: int = 0
    scroll: int = 0
    page_size: int = 10

    def _clamp(self) -> None:
        if not self.items:
            self.selected = 0
            self.scroll = 0
            return
        self.selected = min(max(0, self.selected), len(self.items) - 1)

    def up(self) -> None:
        self.selected -= 1
        self._clamp()

    def down(self) -> None:
        self.selected += 1
        self._clamp()

    def page_up(self) -> None:
        self.selected -= max(1, self.page_size)
        self._clamp()

    def page_down(self) -> None:
        self.selected += max(1, self.page_size)
        self._clamp()

    def first(self) -> None:
        self.selected = 0
        self._clamp()

    def last(self) -> None:
        self.selected = len(self.items) - 1
        self._clamp()

    def handle_key(self, key: str) -> bool:
        """Apply a movement key; False when the key is not a movement key."""
        moves = {
            "Up": self.up,
            "Down": self.down,
            "PageUp": self.page_up,
            "PageDown": self.page_down,
            "Home": self.first,
            "End": self.last,
        }
        move = moves.get(key)
        if move is None:
            return False
        move()
        return True

    def current(self) -> Optional[int]:
        return self.selected if self.items else None

    def area(self, rect: Rect) -> None:
        """Keep the highlighted entry inside a viewport of ``rect.height`` rows."""
        height = max(1, rect.height)
        self.page_size = height
        if self.selected < self.scroll:
            self.scroll = self.selected
        elif self.selected >= self.scroll + height:
            self.scroll = self.selected - height + 1
        self.scroll = max(0, min(self.scroll, max(0, len(self.items) - height)))

    def render(self, surface: Surface, rect: Rect, selected_style: Style) -> None:
        self.area(rect)
        surface.draw_list(rect, self.items, self.current(), self.scroll, selected_style=selected_style)
