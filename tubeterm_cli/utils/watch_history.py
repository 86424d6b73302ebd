from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..handlers.models import MiniVideo
from .cache import data_path, read_json, write_json
from .logger import _log, _log_exception

HISTORY_FILE = "watch_history.json"


@dataclass
class WatchHistory:
    """Recently viewed videos, newest first, one entry per video id."""

    videos: List[MiniVideo] = field(default_factory=list)
    limit: int = 50
    path: Optional[str] = None

    @classmethod
    def load(cls, limit: int = 50, path: Optional[str] = None) -> "WatchHistory":
        """Read the store from disk; a missing or unreadable file starts empty."""
        path = path or data_path(HISTORY_FILE)
        data = read_json(path)
        videos: List[MiniVideo] = []
        if isinstance(data, list):
            for entry in data:
                if not isinstance(entry, dict) or not entry.get("video_id"):
                    _log(f"[history] WARN: skipping malformed watch history entry {entry!r}")
                    continue
                try:
                    videos.append(MiniVideo.from_dict(entry))
                except TypeError as exc:
                    _log(f"[history] WARN: skipping watch history entry {entry!r}: {exc}")
        elif data is not None:
            _log(f"[history] WARN: ignoring unexpected watch history format in {path}")
        return cls(videos=videos[:limit] if limit else videos, limit=limit, path=path)

    def save(self) -> None:
        path = self.path or data_path(HISTORY_FILE)
        try:
            write_json(path, [v.to_dict() for v in self.videos])
        except OSError as exc:
            _log_exception(f"[history] Failed to save watch history to {path}", exc)

    def add(self, video: MiniVideo) -> None:
        self.videos = [v for v in self.videos if v.video_id != video.video_id]
        self.videos.insert(0, video)
        if self.limit:
            del self.videos[self.limit:]

    def __len__(self) -> int:
        return len(self.videos)
