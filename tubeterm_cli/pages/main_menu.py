from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import List, Optional

from ..commands import Command, MutateWidget, NoOp
from ..handlers.models import MiniVideo
from ..layout import Length, Min, Percentage
from ..structs import ItemDisplayPage, MainMenuPage, MainMenuTab, Row, RowItem, VideoItem
from ..widgets.base import Widget
from ..widgets.item_display import render_list_with_preview, render_tab
from ..widgets.text_list import TextList
from .global_items import message_row, search_row

MESSAGE = "Loading main menu..."


class MainMenuKind(Enum):
    SELECTOR_TAB = auto()
    VIDEO_LIST = auto()


@dataclass
class MainMenuItem(Widget):
    kind: MainMenuKind
    tab: Optional[MainMenuTab] = None
    videos: Optional[List[MiniVideo]] = None
    textlist: TextList = field(default_factory=TextList)

    @classmethod
    def selector(cls, tab: MainMenuTab) -> "MainMenuItem":
        return cls(MainMenuKind.SELECTOR_TAB, tab=tab)

    @classmethod
    def video_list(cls) -> "MainMenuItem":
        return cls(MainMenuKind.VIDEO_LIST)

    @property
    def loadable(self) -> bool:
        return self.kind is MainMenuKind.VIDEO_LIST

    def selectable(self) -> bool:
        return True

    def select(self, app) -> Command:
        if self.kind is MainMenuKind.SELECTOR_TAB:
            return app.navigate(MainMenuPage(self.tab))
        return NoOp(enter=True)

    def key_input(self, key: str, app) -> Command:
        if self.kind is not MainMenuKind.VIDEO_LIST or not self.videos:
            return NoOp()
        if key == "Enter":
            video = self.videos[self.textlist.selected]
            return app.navigate(ItemDisplayPage(VideoItem(video.video_id)))
        if self.textlist.handle_key(key):
            return MutateWidget(self)
        return NoOp()

    def load_item(self, ctx) -> "MainMenuItem":
        if self.kind is not MainMenuKind.VIDEO_LIST:
            return self
        tab = ctx.page.tab if isinstance(ctx.page, MainMenuPage) else MainMenuTab.TRENDING
        if tab is MainMenuTab.TRENDING:
            videos = ctx.client.fetch_trending()
        elif tab is MainMenuTab.POPULAR:
            videos = ctx.client.fetch_popular()
        else:
            videos = list(ctx.watch_history)
        return replace(self, videos=videos, textlist=TextList(items=[v.title for v in videos]))

    def reset(self) -> "MainMenuItem":
        if self.kind is MainMenuKind.VIDEO_LIST:
            return replace(self, videos=None, textlist=TextList())
        return self

    def render_item(self, surface, rect, app, selected, hover, popup_focus, is_popup_pass) -> bool:
        if self.kind is MainMenuKind.SELECTOR_TAB:
            render_tab(
                surface,
                rect,
                self.tab.value,
                selected=selected,
                hover=hover,
                active=app.page == MainMenuPage(self.tab),
            )
            return False

        render_list_with_preview(
            surface,
            rect,
            self.textlist,
            self.videos,
            selected=selected,
            hover=hover,
            popup_focus=popup_focus,
            percentages=(40, 60),
        )
        return False


def default_rows() -> List[Row]:
    return [
        search_row(),
        Row(
            items=[RowItem(MainMenuItem.selector(tab), Length(15)) for tab in MainMenuTab],
            height=Length(3),
            centered=True,
        ),
        Row(items=[RowItem(MainMenuItem.video_list(), Percentage(100))], height=Min(6)),
        message_row(),
    ]


ITEMS = {
    "trending_tab": lambda: MainMenuItem.selector(MainMenuTab.TRENDING),
    "popular_tab": lambda: MainMenuItem.selector(MainMenuTab.POPULAR),
    "history_tab": lambda: MainMenuItem.selector(MainMenuTab.HISTORY),
    "video_list": MainMenuItem.video_list,
}
