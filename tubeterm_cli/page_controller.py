"""Per-page defaults: grid, minimum terminal size and loading message."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from .pages import channel, item_info, main_menu, search
from .pages.global_items import GLOBAL_ITEMS
from .structs import Page, Row, RowItem, State

if TYPE_CHECKING:  # pragma: no cover
    from .config import Config, LayoutRow
    from .widgets.base import Widget

_PAGE_MODULES = {
    "search": search,
    "main_menu": main_menu,
    "item_info": item_info,
    "channel": channel,
}


def layout_items(page_key: str) -> Dict[str, Callable[[], "Widget"]]:
    """Widget factories a configured layout may place on ``page_key``."""
    items = dict(GLOBAL_ITEMS)
    items.update(_PAGE_MODULES[page_key].ITEMS)
    return items


def build_rows(page_key: str, layout: Tuple["LayoutRow", ...]):
    factories = layout_items(page_key)
    return [
        Row(
            items=[RowItem(factories[name](), constraint) for name, constraint in row.items],
            height=row.height,
            centered=row.centered,
        )
        for row in layout
    ]


def default_state(page: Page, config: Optional["Config"] = None) -> State:
    """Fresh grid for ``page``; nothing loaded yet.

    A layout from the config wins over the built-in one.
    """
    layout = config.layouts.get(page.key) if config is not None else None
    if layout:
        return State(build_rows(page.key, layout))
    return State(_PAGE_MODULES[page.key].default_rows())


def min_size(page: Page, config: "Config") -> Tuple[int, int]:
    """Smallest ``(width, height)`` the page renders at."""
    return config.min_size(page.key)


def load_message(page: Page) -> str:
    return _PAGE_MODULES[page.key].MESSAGE
