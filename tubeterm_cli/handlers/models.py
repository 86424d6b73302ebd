"""Metadata records built from content API responses."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


def _best_thumbnail(thumbs: Any) -> Optional[str]:
    if not isinstance(thumbs, list) or not thumbs:
        return None
    try:
        best = max(thumbs, key=lambda t: int(t.get("width") or 0))
        return best.get("url")
    except (AttributeError, TypeError, ValueError):
        return None


def format_duration(seconds: Optional[int]) -> str:
    """Render a length in seconds as H:MM:SS or M:SS."""
    if not seconds or seconds < 0:
        return "live"
    h, rem = divmod(int(seconds), 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def format_count(n: Optional[int]) -> str:
    """Compact human-readable count: 950, 1.2K, 3.4M, 1.1B."""
    if n is None:
        return "?"
    for threshold, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if n >= threshold:
            val = n / threshold
            return f"{val:.1f}".rstrip("0").rstrip(".") + suffix
    return str(n)


def _int(val: Any) -> Optional[int]:
    try:
        return None if val is None else int(val)
    except (TypeError, ValueError):
        return None


@dataclass
class MiniVideo:
    video_id: str
    title: str
    author: str = ""
    author_id: str = ""
    length_seconds: Optional[int] = None
    view_count: Optional[int] = None
    published_text: str = ""
    thumbnail: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MiniVideo":
        return cls(
            video_id=str(data.get("videoId", "")),
            title=str(data.get("title", "")),
            author=str(data.get("author", "")),
            author_id=str(data.get("authorId", "")),
            length_seconds=_int(data.get("lengthSeconds")),
            view_count=_int(data.get("viewCount")),
            published_text=str(data.get("publishedText", "") or ""),
            thumbnail=_best_thumbnail(data.get("videoThumbnails")),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MiniVideo":
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        known.setdefault("title", "")
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def display_lines(self) -> List[str]:
        return [
            self.title,
            "",
            f"Channel: {self.author}",
            f"Length: {format_duration(self.length_seconds)}",
            f"Views: {format_count(self.view_count)}",
            f"Published: {self.published_text or '?'}",
        ]


@dataclass
class MiniPlaylist:
    playlist_id: str
    title: str
    author: str = ""
    author_id: str = ""
    video_count: Optional[int] = None
    thumbnail: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MiniPlaylist":
        return cls(
            playlist_id=str(data.get("playlistId", "")),
            title=str(data.get("title", "")),
            author=str(data.get("author", "")),
            author_id=str(data.get("authorId", "")),
            video_count=_int(data.get("videoCount")),
            thumbnail=data.get("playlistThumbnail"),
        )

    def display_lines(self) -> List[str]:
        return [
            self.title,
            "",
            f"Channel: {self.author}",
            f"Videos: {self.video_count if self.video_count is not None else '?'}",
        ]


@dataclass
class MiniChannel:
    channel_id: str
    name: str
    sub_count: Optional[int] = None
    video_count: Optional[int] = None
    description: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MiniChannel":
        return cls(
            channel_id=str(data.get("authorId", "")),
            name=str(data.get("author", "")),
            sub_count=_int(data.get("subCount")),
            video_count=_int(data.get("videoCount")),
            description=str(data.get("description", "") or ""),
        )

    def display_lines(self) -> List[str]:
        return [
            self.name,
            "",
            f"Subscribers: {format_count(self.sub_count)}",
            f"Videos: {self.video_count if self.video_count is not None else '?'}",
            "",
            self.description,
        ]


@dataclass
class FullVideo:
    video_id: str
    title: str
    author: str = ""
    author_id: str = ""
    description: str = ""
    length_seconds: Optional[int] = None
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    published_text: str = ""
    genre: str = ""
    sub_count_text: str = ""
    thumbnail: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "FullVideo":
        return cls(
            video_id=str(data.get("videoId", "")),
            title=str(data.get("title", "")),
            author=str(data.get("author", "")),
            author_id=str(data.get("authorId", "")),
            description=str(data.get("description", "") or ""),
            length_seconds=_int(data.get("lengthSeconds")),
            view_count=_int(data.get("viewCount")),
            like_count=_int(data.get("likeCount")),
            published_text=str(data.get("publishedText", "") or ""),
            genre=str(data.get("genre", "") or ""),
            sub_count_text=str(data.get("subCountText", "") or ""),
            thumbnail=_best_thumbnail(data.get("videoThumbnails")),
        )

    def to_mini(self) -> MiniVideo:
        return MiniVideo(
            video_id=self.video_id,
            title=self.title,
            author=self.author,
            author_id=self.author_id,
            length_seconds=self.length_seconds,
            view_count=self.view_count,
            published_text=self.published_text,
            thumbnail=self.thumbnail,
        )

    def display_lines(self) -> List[str]:
        return [
            self.title,
            "",
            f"Channel: {self.author} ({self.sub_count_text or '?'} subscribers)",
            f"Length: {format_duration(self.length_seconds)}",
            f"Views: {format_count(self.view_count)}  Likes: {format_count(self.like_count)}",
            f"Published: {self.published_text or '?'}  Genre: {self.genre or '?'}",
            "",
            self.description,
        ]


@dataclass
class FullPlaylist:
    playlist_id: str
    title: str
    author: str = ""
    author_id: str = ""
    description: str = ""
    video_count: Optional[int] = None
    view_count: Optional[int] = None
    videos: List[MiniVideo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "FullPlaylist":
        return cls(
            playlist_id=str(data.get("playlistId", "")),
            title=str(data.get("title", "")),
            author=str(data.get("author", "")),
            author_id=str(data.get("authorId", "")),
            description=str(data.get("description", "") or ""),
            video_count=_int(data.get("videoCount")),
            view_count=_int(data.get("viewCount")),
            videos=[MiniVideo.from_json(v) for v in data.get("videos") or []],
        )

    def display_lines(self) -> List[str]:
        return [
            self.title,
            "",
            f"Channel: {self.author}",
            f"Videos: {self.video_count if self.video_count is not None else len(self.videos)}",
            f"Views: {format_count(self.view_count)}",
            "",
            self.description,
        ]


@dataclass
class FullChannel:
    channel_id: str
    name: str
    sub_count: Optional[int] = None
    total_views: Optional[int] = None
    description: str = ""
    joined: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "FullChannel":
        return cls(
            channel_id=str(data.get("authorId", "")),
            name=str(data.get("author", "")),
            sub_count=_int(data.get("subCount")),
            total_views=_int(data.get("totalViews")),
            description=str(data.get("description", "") or ""),
            joined=_int(data.get("joined")),
        )

    def display_lines(self) -> List[str]:
        return [
            self.name,
            "",
            f"Subscribers: {format_count(self.sub_count)}",
            f"Total views: {format_count(self.total_views)}",
            "",
            self.description,
        ]
