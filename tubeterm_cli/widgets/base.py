"""Capability interface every grid widget implements.

Widgets are small mutable values. The app hands ``select`` and ``key_input``
a private copy of the slot's widget; changes only reach the grid when the
widget returns ``MutateWidget``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..commands import Command, NoOp
from ..layout import Rect
from ..surface import Surface

if TYPE_CHECKING:  # pragma: no cover
    from ..app import App
    from ..loader import LoadContext


class Widget(ABC):
    #: Widgets with content fetched from the API set this to True.
    loadable = False

    @abstractmethod
    def selectable(self) -> bool:
        """Whether the navigator may put the hover cursor on this widget."""

    def select(self, app: "App") -> Command:
        """Activation attempt; ``enter=True`` makes this the selected widget."""
        return NoOp(enter=True)

    def key_input(self, key: str, app: "App") -> Command:
        """Raw key while selected."""
        return NoOp()

    @abstractmethod
    def render_item(
        self,
        surface: Surface,
        rect: Rect,
        app: "App",
        selected: bool,
        hover: bool,
        popup_focus: bool,
        is_popup_pass: bool,
    ) -> bool:
        """Draw into ``rect``; return True to be drawn again in the popup pass."""

    def load_item(self, ctx: "LoadContext") -> "Widget":
        """Fetch content and return the new widget value; raises ``LoadError``."""
        return self

    def reset(self) -> "Widget":
        """Widget value with any loaded content dropped."""
        return self
