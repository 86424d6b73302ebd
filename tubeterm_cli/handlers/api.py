"""Client for an Invidious-compatible content API.

Every fetch returns model objects from ``handlers.models`` or raises
``ApiError`` (a ``LoadError``), which the page loader turns into a status
message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

import requests

from ..errors import ApiError
from ..structs import SearchSettings
from ..utils.logger import _log
from .models import (
    FullChannel,
    FullPlaylist,
    FullVideo,
    MiniChannel,
    MiniPlaylist,
    MiniVideo,
)

SearchResult = Union[MiniVideo, MiniPlaylist, MiniChannel]

DEFAULT_SERVER = "https://invidious.fdn.fr"


class InvidiousClient:
    def __init__(
        self,
        server_url: str = DEFAULT_SERVER,
        *,
        timeout: Optional[float] = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", "tubeterm")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.server_url}/api/v1/{path.lstrip('/')}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            _log(f"[api] ERROR: request to {url} failed: {exc}")
            raise ApiError(f"Could not reach {self.server_url}: {exc}", url=url) from exc

        if resp.status_code != 200:
            detail = ""
            try:
                detail = resp.json().get("error", "")
            except (ValueError, AttributeError):
                pass
            _log(f"[api] WARN: {url} returned HTTP {resp.status_code} {detail}")
            raise ApiError(detail or f"Request to {path} failed", url=url, status=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            _log(f"[api] ERROR: invalid JSON from {url}")
            raise ApiError(f"Invalid response from {path}", url=url, status=resp.status_code) from exc

    @staticmethod
    def _entries(data: Any, key: str) -> List[Dict[str, Any]]:
        # Older servers return a bare list, newer ones wrap it with a continuation token.
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return list(data.get(key) or [])
        return []

    def fetch_channel(self, channel_id: str) -> FullChannel:
        return FullChannel.from_json(self._get(f"channels/{channel_id}"))

    def fetch_channel_videos(self, channel_id: str) -> List[MiniVideo]:
        data = self._get(f"channels/{channel_id}/videos")
        return [MiniVideo.from_json(v) for v in self._entries(data, "videos")]

    def fetch_channel_playlists(self, channel_id: str) -> List[MiniPlaylist]:
        data = self._get(f"channels/{channel_id}/playlists")
        return [MiniPlaylist.from_json(p) for p in self._entries(data, "playlists")]

    def fetch_video(self, video_id: str) -> FullVideo:
        return FullVideo.from_json(self._get(f"videos/{video_id}"))

    def fetch_playlist(self, playlist_id: str) -> FullPlaylist:
        return FullPlaylist.from_json(self._get(f"playlists/{playlist_id}"))

    def fetch_trending(self) -> List[MiniVideo]:
        return [MiniVideo.from_json(v) for v in self._entries(self._get("trending"), "videos")]

    def fetch_popular(self) -> List[MiniVideo]:
        return [MiniVideo.from_json(v) for v in self._entries(self._get("popular"), "videos")]

    def fetch_suggestions(self, query: str) -> List[str]:
        if not query.strip():
            return []
        data = self._get("search/suggestions", {"q": query})
        return [str(s) for s in self._entries(data, "suggestions")]

    def search(self, query: str, settings: SearchSettings, page_no: int = 1) -> List[SearchResult]:
        params = {"q": query, "page": page_no}
        params.update(settings.params())
        results: List[SearchResult] = []
        for entry in self._entries(self._get("search", params), "results"):
            kind = entry.get("type")
            if kind == "video":
                results.append(MiniVideo.from_json(entry))
            elif kind == "playlist":
                results.append(MiniPlaylist.from_json(entry))
            elif kind == "channel":
                results.append(MiniChannel.from_json(entry))
        return results

    def video_url(self, video_id: str) -> str:
        return f"https://www.youtube.com/watch?v={video_id}"

    def playlist_url(self, playlist_id: str) -> str:
        return f"https://www.youtube.com/playlist?list={playlist_id}"
