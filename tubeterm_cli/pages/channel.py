from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import List, Optional

from ..commands import Command, MutateWidget, NoOp
from ..handlers.models import FullChannel
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
from ..surface import Style, item_style
from ..widgets.base import Widget
from ..widgets.item_display import LOADING_TEXT, render_list_with_preview, render_tab
from ..widgets.text_list import TextList
from .global_items import message_row, search_row

MESSAGE = "Loading channel info..."


class ChannelKind(Enum):
    INFO_DISPLAY = auto()
    SELECT_ITEMS = auto()


class ChannelDisplay(Enum):
    UNKNOWN = auto()
    HOME = auto()
    VIDEOS = auto()
    PLAYLISTS = auto()


@dataclass
class ChannelItem(Widget):
    kind: ChannelKind
    tab: Optional[ChannelTab] = None
    display: ChannelDisplay = ChannelDisplay.UNKNOWN
    channel: Optional[FullChannel] = None
    entries: list = field(default_factory=list)
    textlist: TextList = field(default_factory=TextList)

    @classmethod
    def select_items(cls, tab: ChannelTab) -> "ChannelItem":
        return cls(ChannelKind.SELECT_ITEMS, tab=tab)

    @classmethod
    def info_display(cls) -> "ChannelItem":
        return cls(ChannelKind.INFO_DISPLAY)

    @property
    def loadable(self) -> bool:
        return self.kind is ChannelKind.INFO_DISPLAY

    def selectable(self) -> bool:
        return True

    def select(self, app) -> Command:
        if self.kind is ChannelKind.INFO_DISPLAY:
            return NoOp(enter=True)
        page = app.page
        if not isinstance(page, ChannelPage) or page.tab is self.tab:
            return NoOp()
        return app.navigate(ChannelPage(self.tab, page.channel_id))

    def key_input(self, key: str, app) -> Command:
        if self.display not in (ChannelDisplay.VIDEOS, ChannelDisplay.PLAYLISTS) or not self.entries:
            return NoOp()
        if key == "Enter":
            entry = self.entries[self.textlist.selected]
            if self.display is ChannelDisplay.VIDEOS:
                return app.navigate(ItemDisplayPage(VideoItem(entry.video_id)))
            return app.navigate(ItemDisplayPage(PlaylistItem(entry.playlist_id)))
        if self.textlist.handle_key(key):
            return MutateWidget(self)
        return NoOp()

    def load_item(self, ctx) -> "ChannelItem":
        page = ctx.page
        if self.kind is not ChannelKind.INFO_DISPLAY or not isinstance(page, ChannelPage):
            return self
        client = ctx.client
        if page.tab is ChannelTab.HOME:
            return replace(self, display=ChannelDisplay.HOME, channel=client.fetch_channel(page.channel_id))
        if page.tab is ChannelTab.VIDEOS:
            videos = client.fetch_channel_videos(page.channel_id)
            return replace(
                self,
                display=ChannelDisplay.VIDEOS,
                entries=videos,
                textlist=TextList(items=[v.title for v in videos]),
            )
        playlists = client.fetch_channel_playlists(page.channel_id)
        return replace(
            self,
            display=ChannelDisplay.PLAYLISTS,
            entries=playlists,
            textlist=TextList(items=[p.title for p in playlists]),
        )

    def reset(self) -> "ChannelItem":
        if self.kind is ChannelKind.INFO_DISPLAY:
            return ChannelItem.info_display()
        return self

    def render_item(self, surface, rect, app, selected, hover, popup_focus, is_popup_pass) -> bool:
        if self.kind is ChannelKind.SELECT_ITEMS:
            page = app.page
            active = isinstance(page, ChannelPage) and page.tab is self.tab
            render_tab(surface, rect, self.tab.value, selected=selected, hover=hover, active=active)
            return False

        style = item_style(selected, hover)
        if self.display is ChannelDisplay.UNKNOWN:
            surface.draw_block(rect, None, style)
            surface.draw_paragraph(rect.inner(), [LOADING_TEXT], Style.DIM)
        elif self.display is ChannelDisplay.HOME:
            surface.draw_block(rect, None, style)
            surface.draw_paragraph(rect.inner(), self.channel.display_lines())
        else:
            render_list_with_preview(
                surface,
                rect,
                self.textlist,
                self.entries,
                selected=selected,
                hover=hover,
                popup_focus=popup_focus,
            )
        return False


def default_rows() -> List[Row]:
    return [
        search_row(),
        Row(
            items=[
                RowItem(ChannelItem.select_items(ChannelTab.HOME), Length(15)),
                RowItem(ChannelItem.select_items(ChannelTab.VIDEOS), Length(15)),
                RowItem(ChannelItem.select_items(ChannelTab.PLAYLISTS), Length(15)),
            ],
            height=Length(3),
            centered=True,
        ),
        Row(items=[RowItem(ChannelItem.info_display(), Percentage(100))], height=Min(6)),
        message_row(),
    ]


ITEMS = {
    "home_tab": lambda: ChannelItem.select_items(ChannelTab.HOME),
    "videos_tab": lambda: ChannelItem.select_items(ChannelTab.VIDEOS),
    "playlists_tab": lambda: ChannelItem.select_items(ChannelTab.PLAYLISTS),
    "channel_info": ChannelItem.info_display,
}
