"""Widgets shared by every page: search bar, search settings and message bar."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from ..commands import Command, MutateWidget, NoOp
from ..layout import Length, Min, Percentage, Rect
from ..structs import SETTING_FIELDS, Row, RowItem, SearchPage
from ..surface import Style, item_style
from ..widgets.base import Widget

MAX_SUGGESTIONS = 8
SETTINGS_POPUP_WIDTH = 32

DEFAULT_HINT = "Arrows move  •  Enter select  •  Esc deselect  •  Backspace back  •  q quit"


class GlobalKind(Enum):
    SEARCH_BAR = auto()
    SEARCH_SETTINGS = auto()
    MESSAGE_BAR = auto()


def _popup_rect(anchor: Rect, width: int, height: int, surface_size, *, align_right: bool = False) -> Rect:
    """Box just below ``anchor``, shrunk to fit on screen."""
    screen_w, screen_h = surface_size
    width = min(width, screen_w)
    x = anchor.right - width if align_right else anchor.x
    x = max(0, min(x, screen_w - width))
    y = anchor.bottom
    height = max(0, min(height, screen_h - y))
    return Rect(x, y, width, height)


@dataclass
class GlobalItem(Widget):
    kind: GlobalKind
    suggestions: List[str] = field(default_factory=list)
    field_idx: int = 0

    def selectable(self) -> bool:
        return self.kind is not GlobalKind.MESSAGE_BAR

    def select(self, app) -> Command:
        if self.kind is GlobalKind.MESSAGE_BAR:
            return NoOp()
        app.popup_focus = True
        return NoOp(enter=True)

    def key_input(self, key: str, app) -> Command:
        if self.kind is GlobalKind.SEARCH_BAR:
            return self._search_key(key, app)
        if self.kind is GlobalKind.SEARCH_SETTINGS:
            return self._settings_key(key, app)
        return NoOp()

    # --- search bar --------------------------------------------------------------

    def _search_key(self, key: str, app) -> Command:
        if key == "Enter":
            query = self.suggestions[app.search_index - 1] if 0 < app.search_index <= len(self.suggestions) else app.search_text
            query = query.strip()
            if not query:
                app.message = "Type something to search for"
                return NoOp()
            return app.navigate(SearchPage(), search_text=query)

        if key == "Up":
            app.search_index = max(0, app.search_index - 1)
        elif key == "Down":
            app.search_index = min(len(self.suggestions), app.search_index + 1)
        elif key == "Backspace":
            app.search_text = app.search_text[:-1]
            self._refresh_suggestions(app)
        elif len(key) == 1 and key.isprintable():
            app.search_text += key
            self._refresh_suggestions(app)
        else:
            return NoOp()
        return MutateWidget(self)

    def _refresh_suggestions(self, app) -> None:
        # Fetched in the background; App.apply_suggestions fills them in.
        app.search_index = 0
        if app.search_text.strip():
            app.suggestion_query = app.search_text
        else:
            app.suggestion_query = None
            self.suggestions = []

    # --- search settings ---------------------------------------------------------

    def _settings_key(self, key: str, app) -> Command:
        if key == "Up":
            self.field_idx = (self.field_idx - 1) % len(SETTING_FIELDS)
        elif key == "Down":
            self.field_idx = (self.field_idx + 1) % len(SETTING_FIELDS)
        elif key in ("Left", "Right", "Enter"):
            app.search_settings.cycle(self.field_idx, -1 if key == "Left" else 1)
        else:
            return NoOp()
        return MutateWidget(self)

    # --- rendering ---------------------------------------------------------------

    def render_item(self, surface, rect, app, selected, hover, popup_focus, is_popup_pass) -> bool:
        style = item_style(selected, hover)

        if self.kind is GlobalKind.SEARCH_BAR:
            if is_popup_pass:
                box = _popup_rect(rect, rect.width, len(self.suggestions) + 2, surface.size())
                surface.clear(box)
                surface.draw_block(box, "Suggestions", Style.SELECTED)
                surface.draw_list(box.inner(), self.suggestions, app.search_index - 1 if app.search_index else None)
                return False
            surface.draw_block(rect, "Search", style)
            text = app.search_text + ("_" if selected else "")
            if not text:
                text = "Press Enter here to search"
            # Keep the end of long queries visible.
            inner = rect.inner()
            surface.draw_paragraph(inner, [text[-inner.width:] if inner.width else ""], wrap=False)
            return selected and bool(self.suggestions)

        if self.kind is GlobalKind.SEARCH_SETTINGS:
            if is_popup_pass:
                lines = [
                    ("> " if i == self.field_idx else "  ") + line
                    for i, line in enumerate(app.search_settings.lines())
                ]
                box = _popup_rect(rect, SETTINGS_POPUP_WIDTH, len(lines) + 2, surface.size(), align_right=True)
                surface.clear(box)
                surface.draw_block(box, "Search settings", Style.SELECTED)
                surface.draw_paragraph(box.inner(), lines, wrap=False)
                return False
            surface.draw_block(rect, None, style)
            surface.draw_paragraph(rect.inner(), ["⚙"], center=True, wrap=False)
            return selected

        surface.draw_block(rect, None, style)
        if app.message:
            surface.draw_paragraph(rect.inner(), [app.message], Style.ACTIVE, wrap=False)
        else:
            surface.draw_paragraph(rect.inner(), [DEFAULT_HINT], Style.DIM, wrap=False)
        return False


def search_row() -> Row:
    return Row(
        items=[
            RowItem(GlobalItem(GlobalKind.SEARCH_BAR), Min(16)),
            RowItem(GlobalItem(GlobalKind.SEARCH_SETTINGS), Length(5)),
        ],
        height=Length(3),
    )


def message_row() -> Row:
    return Row(
        items=[RowItem(GlobalItem(GlobalKind.MESSAGE_BAR), Percentage(100))],
        height=Length(3),
    )


# Names usable in the ``layouts`` section of config.yml on every page.
GLOBAL_ITEMS = {
    "search_bar": lambda: GlobalItem(GlobalKind.SEARCH_BAR),
    "search_settings": lambda: GlobalItem(GlobalKind.SEARCH_SETTINGS),
    "message_bar": lambda: GlobalItem(GlobalKind.MESSAGE_BAR),
}
