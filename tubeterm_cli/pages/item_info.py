"""Video and playlist details page."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import List, Optional, Union

from ..commands import Command, MutateWidget, NoOp
from ..handlers.models import FullPlaylist, FullVideo
from ..layout import Length, Min, Percentage, split_percentages
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
from ..utils.logger import _log
from ..widgets.base import Widget
from ..widgets.item_display import LOADING_TEXT, render_tab
from ..widgets.text_list import TextList
from .global_items import message_row, search_row

MESSAGE = "Loading item details..."


class ItemInfoKind(Enum):
    INFO = auto()
    PLAY = auto()
    CHANNEL = auto()


def player_args(command, url: str) -> List[str]:
    """Fill the ``{url}`` placeholder; append the URL when there is none."""
    args = [part.replace("{url}", url) for part in command]
    if not any("{url}" in part for part in command):
        args.append(url)
    return args


@dataclass
class ItemInfoItem(Widget):
    kind: ItemInfoKind
    content: Optional[Union[FullVideo, FullPlaylist]] = None
    textlist: TextList = field(default_factory=TextList)

    @property
    def loadable(self) -> bool:
        return self.kind is ItemInfoKind.INFO

    def selectable(self) -> bool:
        return True

    def select(self, app) -> Command:
        if self.kind is ItemInfoKind.INFO:
            return NoOp(enter=True)

        content = _loaded_content(app)
        if content is None:
            app.message = "Details are still loading"
            app.render = True
            return NoOp()

        if self.kind is ItemInfoKind.CHANNEL:
            if not content.author_id:
                app.message = "No channel for this item"
                return NoOp()
            return app.navigate(ChannelPage(ChannelTab.HOME, content.author_id))

        if isinstance(content, FullPlaylist):
            url = app.client.playlist_url(content.playlist_id)
        else:
            url = app.client.video_url(content.video_id)
        args = player_args(app.config.player_command, url)
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
            app.message = f"Playing {content.title}"
        except FileNotFoundError:
            app.message = f"{args[0]} not found"
        except OSError as exc:
            _log(f"[player] ERROR: failed to launch {args}: {exc}")
            app.message = f"Failed to launch player: {exc}"
        app.render = True
        return NoOp()

    def key_input(self, key: str, app) -> Command:
        if self.kind is not ItemInfoKind.INFO or not isinstance(self.content, FullPlaylist):
            return NoOp()
        videos = self.content.videos
        if key == "Enter" and videos:
            return app.navigate(ItemDisplayPage(VideoItem(videos[self.textlist.selected].video_id)))
        if self.textlist.handle_key(key):
            return MutateWidget(self)
        return NoOp()

    def load_item(self, ctx) -> "ItemInfoItem":
        if self.kind is not ItemInfoKind.INFO or not isinstance(ctx.page, ItemDisplayPage):
            return self
        item = ctx.page.item
        if isinstance(item, PlaylistItem):
            playlist = ctx.client.fetch_playlist(item.playlist_id)
            return replace(self, content=playlist, textlist=TextList(items=[v.title for v in playlist.videos]))
        video = ctx.client.fetch_video(item.video_id)
        ctx.record_watch(video.to_mini())
        return replace(self, content=video, textlist=TextList())

    def reset(self) -> "ItemInfoItem":
        if self.kind is ItemInfoKind.INFO:
            return replace(self, content=None, textlist=TextList())
        return self

    def render_item(self, surface, rect, app, selected, hover, popup_focus, is_popup_pass) -> bool:
        if self.kind is not ItemInfoKind.INFO:
            label = "Play" if self.kind is ItemInfoKind.PLAY else "Channel"
            render_tab(surface, rect, label, selected=selected, hover=hover, active=False)
            return False

        style = item_style(selected, hover)
        if self.content is None:
            surface.draw_block(rect, None, style)
            surface.draw_paragraph(rect.inner(), [LOADING_TEXT], Style.DIM)
        elif isinstance(self.content, FullPlaylist):
            left, right = split_percentages(rect, (50, 50))
            surface.draw_block(left, "Playlist", style)
            surface.draw_block(right, "Videos", style)
            surface.draw_paragraph(left.inner(), self.content.display_lines())
            self.textlist.render(surface, right.inner(), Style.HOVER if selected else Style.ACTIVE)
        else:
            surface.draw_block(rect, "Video", style)
            surface.draw_paragraph(rect.inner(), self.content.display_lines())
        return False


def _loaded_content(app):
    for _, _, widget in app.state.slots():
        if isinstance(widget, ItemInfoItem) and widget.kind is ItemInfoKind.INFO:
            return widget.content
    return None


def default_rows() -> List[Row]:
    return [
        search_row(),
        Row(items=[RowItem(ItemInfoItem(ItemInfoKind.INFO), Percentage(100))], height=Min(6)),
        Row(
            items=[
                RowItem(ItemInfoItem(ItemInfoKind.PLAY), Length(15)),
                RowItem(ItemInfoItem(ItemInfoKind.CHANNEL), Length(15)),
            ],
            height=Length(3),
            centered=True,
        ),
        message_row(),
    ]


ITEMS = {
    "info": lambda: ItemInfoItem(ItemInfoKind.INFO),
    "play": lambda: ItemInfoItem(ItemInfoKind.PLAY),
    "channel": lambda: ItemInfoItem(ItemInfoKind.CHANNEL),
}
