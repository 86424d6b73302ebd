from __future__ import annotations

from typing import Optional, Sequence

from ..layout import Rect, split_percentages
from ..surface import Style, Surface, item_style
from .text_list import TextList

LOADING_TEXT = "Loading..."
EMPTY_TEXT = "Nothing to show here."


def render_list_with_preview(
    surface: Surface,
    rect: Rect,
    textlist: Optional[TextList],
    entries: Optional[Sequence],
    *,
    selected: bool,
    hover: bool,
    popup_focus: bool,
    percentages: Sequence[int] = (60, 40),
    title: Optional[str] = None,
) -> None:
    """List on the left, details of the highlighted entry on the right.

    ``entries`` are model objects with ``display_lines()``; None means the
    content has not been loaded yet. The preview is hidden while a popup has
    focus so the overlay does not fight with it.
    """
    style = item_style(selected, hover)
    left, right = split_percentages(rect, percentages)
    surface.draw_block(left, title, style)
    surface.draw_block(right, None, style)

    if entries is None or textlist is None:
        surface.draw_paragraph(left.inner(), [LOADING_TEXT], Style.DIM)
        return
    if not entries:
        surface.draw_paragraph(left.inner(), [EMPTY_TEXT], Style.DIM)
        return

    textlist.render(surface, left.inner(), Style.HOVER if selected else Style.ACTIVE)
    current = textlist.current()
    if current is not None and current < len(entries) and not popup_focus:
        surface.draw_paragraph(right.inner(), entries[current].display_lines())


def render_tab(surface: Surface, rect: Rect, label: str, *, selected: bool, hover: bool, active: bool) -> None:
    """Bordered, centered label used by tab selectors and buttons."""
    style = item_style(selected, hover)
    if active and not hover and not selected:
        style = Style.ACTIVE
    surface.draw_block(rect, None, style)
    surface.draw_paragraph(rect.inner(), [label], style, center=True, wrap=False)
