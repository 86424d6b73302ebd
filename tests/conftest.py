from __future__ import annotations

from typing import List, Optional

import pytest

from tubeterm_cli.app import App
from tubeterm_cli.config import Config
from tubeterm_cli.errors import ApiError
from tubeterm_cli.handlers.models import (
    FullChannel,
    FullPlaylist,
    FullVideo,
    MiniChannel,
    MiniPlaylist,
    MiniVideo,
)
from tubeterm_cli.surface import Surface
from tubeterm_cli.utils.watch_history import WatchHistory


def make_videos(n: int, prefix: str = "vid") -> List[MiniVideo]:
    return [
        MiniVideo(video_id=f"{prefix}{i}", title=f"Video {i}", author="Someone", author_id="UC1", length_seconds=60 * i)
        for i in range(n)
    ]


class FakeClient:
    """Stands in for InvidiousClient; records calls and can be told to fail."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.fail: Optional[str] = None
        self.videos = make_videos(6)
        self.suggestions = ["cats", "cat videos"]

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail:
            raise ApiError(self.fail, url=f"https://example.test/api/v1/{name}", status=500)

    def fetch_trending(self):
        self._call("trending")
        return list(self.videos)

    def fetch_popular(self):
        self._call("popular")
        return list(self.videos[:3])

    def fetch_suggestions(self, query):
        self._call("suggestions", query)
        return list(self.suggestions)

    def search(self, query, settings, page_no=1):
        self._call("search", query, page_no)
        return [
            MiniVideo(video_id="s1", title="Search video"),
            MiniPlaylist(playlist_id="PL1", title="Search playlist"),
            MiniChannel(channel_id="UC9", name="Search channel"),
        ]

    def fetch_video(self, video_id):
        self._call("video", video_id)
        return FullVideo(video_id=video_id, title=f"Full {video_id}", author="Someone", author_id="UC1")

    def fetch_playlist(self, playlist_id):
        self._call("playlist", playlist_id)
        return FullPlaylist(playlist_id=playlist_id, title="A playlist", author_id="UC1", videos=make_videos(3, "pl"))

    def fetch_channel(self, channel_id):
        self._call("channel", channel_id)
        return FullChannel(channel_id=channel_id, name="Some channel", sub_count=1200)

    def fetch_channel_videos(self, channel_id):
        self._call("channel_videos", channel_id)
        return make_videos(5, "ch")

    def fetch_channel_playlists(self, channel_id):
        self._call("channel_playlists", channel_id)
        return [MiniPlaylist(playlist_id=f"PL{i}", title=f"Playlist {i}") for i in range(2)]

    def video_url(self, video_id):
        return f"https://www.youtube.com/watch?v={video_id}"

    def playlist_url(self, playlist_id):
        return f"https://www.youtube.com/playlist?list={playlist_id}"


class RecordingSurface(Surface):
    """Surface that only records draw calls."""

    def __init__(self, width: int = 100, height: int = 30):
        self.width = width
        self.height = height
        self.calls: List[tuple] = []

    def size(self):
        return self.width, self.height

    def clear(self, rect):
        self.calls.append(("clear", rect))

    def draw_block(self, rect, title=None, style=None):
        self.calls.append(("block", rect, title, style))

    def draw_paragraph(self, rect, lines, style=None, *, center=False, wrap=True):
        self.calls.append(("paragraph", rect, list(lines), style))

    def draw_list(self, rect, items, selected=None, offset=0, style=None, selected_style=None):
        self.calls.append(("list", rect, list(items), selected))

    def texts(self) -> List[str]:
        out: List[str] = []
        for call in self.calls:
            if call[0] == "paragraph":
                out.extend(call[2])
            elif call[0] == "list":
                out.extend(call[2])
        return out

    def drawn(self) -> List[tuple]:
        return [c for c in self.calls if c[0] != "clear"]


@pytest.fixture(autouse=True)
def tubeterm_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("TUBETERM_HOME", str(home))
    return home


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def watch_history(tmp_path):
    return WatchHistory(path=str(tmp_path / "history.json"))


@pytest.fixture
def make_app(client, watch_history):
    def _make(page=None, config: Optional[Config] = None) -> App:
        return App(config or Config(), client, watch_history, page=page)

    return _make


@pytest.fixture
def surface():
    return RecordingSurface()
