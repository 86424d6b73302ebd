from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import List, Optional

from ..commands import Command, MutateWidget, NoOp
from ..handlers.models import MiniChannel, MiniPlaylist, MiniVideo
from ..layout import Length, Min, Percentage
from ..structs import (
    ChannelPage,
    ChannelTab,
    ItemDisplayPage,
    PlaylistItem,
    Row,
    RowItem,
    VideoItem,
)
from ..widgets.base import Widget
from ..widgets.item_display import render_list_with_preview, render_tab
from ..widgets.text_list import TextList
from .global_items import message_row, search_row

MESSAGE = "Searching..."


class SearchKind(Enum):
    RESULTS = auto()
    PREVIOUS_PAGE = auto()
    NEXT_PAGE = auto()


def result_label(entry) -> str:
    if isinstance(entry, MiniPlaylist):
        return f"[playlist] {entry.title}"
    if isinstance(entry, MiniChannel):
        return f"[channel] {entry.name}"
    return entry.title


def result_page(entry):
    """Page that opens when a search result is chosen."""
    if isinstance(entry, MiniVideo):
        return ItemDisplayPage(VideoItem(entry.video_id))
    if isinstance(entry, MiniPlaylist):
        return ItemDisplayPage(PlaylistItem(entry.playlist_id))
    return ChannelPage(ChannelTab.HOME, entry.channel_id)


@dataclass
class SearchItem(Widget):
    kind: SearchKind
    results: Optional[list] = None
    textlist: TextList = field(default_factory=TextList)

    @property
    def loadable(self) -> bool:
        return self.kind is SearchKind.RESULTS

    def selectable(self) -> bool:
        return True

    def select(self, app) -> Command:
        if self.kind is SearchKind.RESULTS:
            return NoOp(enter=True)

        step = -1 if self.kind is SearchKind.PREVIOUS_PAGE else 1
        if app.page_no + step < 1:
            app.message = "Already on the first page"
            app.render = True
            return NoOp()
        app.page_no += step
        app.reload()
        return NoOp()

    def key_input(self, key: str, app) -> Command:
        if self.kind is not SearchKind.RESULTS or not self.results:
            return NoOp()
        if key == "Enter":
            return app.navigate(result_page(self.results[self.textlist.selected]))
        if self.textlist.handle_key(key):
            return MutateWidget(self)
        return NoOp()

    def load_item(self, ctx) -> "SearchItem":
        if self.kind is not SearchKind.RESULTS:
            return self
        results = ctx.client.search(ctx.search_text, ctx.search_settings, ctx.page_no)
        return replace(self, results=results, textlist=TextList(items=[result_label(r) for r in results]))

    def reset(self) -> "SearchItem":
        if self.kind is SearchKind.RESULTS:
            return replace(self, results=None, textlist=TextList())
        return self

    def render_item(self, surface, rect, app, selected, hover, popup_focus, is_popup_pass) -> bool:
        if self.kind is SearchKind.RESULTS:
            render_list_with_preview(
                surface,
                rect,
                self.textlist,
                self.results,
                selected=selected,
                hover=hover,
                popup_focus=popup_focus,
                title=f"{app.search_text} (page {app.page_no})",
            )
            return False

        label = "< Previous" if self.kind is SearchKind.PREVIOUS_PAGE else "Next >"
        render_tab(surface, rect, label, selected=selected, hover=hover, active=False)
        return False


def default_rows() -> List[Row]:
    return [
        search_row(),
        Row(items=[RowItem(SearchItem(SearchKind.RESULTS), Percentage(100))], height=Min(6)),
        Row(
            items=[
                RowItem(SearchItem(SearchKind.PREVIOUS_PAGE), Length(14)),
                RowItem(SearchItem(SearchKind.NEXT_PAGE), Length(14)),
            ],
            height=Length(3),
            centered=True,
        ),
        message_row(),
    ]


ITEMS = {
    "results": lambda: SearchItem(SearchKind.RESULTS),
    "previous_page": lambda: SearchItem(SearchKind.PREVIOUS_PAGE),
    "next_page": lambda: SearchItem(SearchKind.NEXT_PAGE),
}
