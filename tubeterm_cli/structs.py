"""Grid model shared by the pages: page identifiers, rows, and the selectable index."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from .layout import Constraint

if TYPE_CHECKING:  # pragma: no cover
    from .widgets.base import Widget

Coord = Tuple[int, int]  # (x, y)
SelectableIndex = List[List[Coord]]


# --- Pages -------------------------------------------------------------------

class MainMenuTab(Enum):
    TRENDING = "Trending"
    POPULAR = "Popular"
    HISTORY = "History"


class ChannelTab(Enum):
    HOME = "Home"
    VIDEOS = "Videos"
    PLAYLISTS = "Playlists"


@dataclass(frozen=True)
class VideoItem:
    video_id: str


@dataclass(frozen=True)
class PlaylistItem:
    playlist_id: str


DisplayItem = Union[VideoItem, PlaylistItem]


@dataclass(frozen=True)
class SearchPage:
    key = "search"


@dataclass(frozen=True)
class MainMenuPage:
    tab: MainMenuTab = MainMenuTab.TRENDING
    key = "main_menu"


@dataclass(frozen=True)
class ItemDisplayPage:
    item: DisplayItem
    key = "item_info"


@dataclass(frozen=True)
class ChannelPage:
    tab: ChannelTab
    channel_id: str
    key = "channel"


Page = Union[SearchPage, MainMenuPage, ItemDisplayPage, ChannelPage]

PAGE_KEYS = ("search", "main_menu", "item_info", "channel")


# --- Search settings -----------------------------------------------------------

SORT_OPTIONS = ("relevance", "rating", "upload_date", "view_count")
DATE_OPTIONS = ("", "hour", "today", "week", "month", "year")
DURATION_OPTIONS = ("", "short", "long")
TYPE_OPTIONS = ("all", "video", "playlist", "channel")

SETTING_FIELDS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("sort_by", "Sort by", SORT_OPTIONS),
    ("date", "Upload date", DATE_OPTIONS),
    ("duration", "Duration", DURATION_OPTIONS),
    ("type", "Type", TYPE_OPTIONS),
)


@dataclass
class SearchSettings:
    sort_by: str = "relevance"
    date: str = ""
    duration: str = ""
    type: str = "all"

    def cycle(self, field_idx: int, step: int) -> None:
        """Move one setting to the next/previous option, wrapping around."""
        name, _, options = SETTING_FIELDS[field_idx % len(SETTING_FIELDS)]
        current = getattr(self, name)
        pos = options.index(current) if current in options else 0
        setattr(self, name, options[(pos + step) % len(options)])

    def params(self) -> dict:
        """Query parameters understood by the search endpoint; empty values are omitted."""
        out = {"sort_by": self.sort_by, "type": self.type}
        if self.date:
            out["date"] = self.date
        if self.duration:
            out["duration"] = self.duration
        return out

    def lines(self) -> List[str]:
        return [f"{label}: {getattr(self, name) or 'any'}" for name, label, _ in SETTING_FIELDS]


# --- Grid ----------------------------------------------------------------------

@dataclass
class RowItem:
    item: "Widget"
    constraint: Constraint


@dataclass
class Row:
    items: List[RowItem]
    height: Constraint
    centered: bool = False


@dataclass
class State:
    rows: List[Row] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def item_at(self, x: int, y: int) -> "Widget":
        return self.rows[y].items[x].item

    def set_item(self, x: int, y: int, item: "Widget") -> None:
        self.rows[y].items[x].item = item

    def slots(self):
        """Yield ``(x, y, widget)`` for every slot, row by row."""
        for y, row in enumerate(self.rows):
            for x, row_item in enumerate(row.items):
                yield x, y, row_item.item

    def reset(self) -> None:
        """Drop loaded content so the next load starts from scratch."""
        for row in self.rows:
            for row_item in row.items:
                row_item.item = row_item.item.reset()


def selectable_index(state: State) -> SelectableIndex:
    """Coordinates of focusable widgets, one list per row that has any."""
    index: SelectableIndex = []
    for y, row in enumerate(state.rows):
        row_coords = [(x, y) for x, row_item in enumerate(row.items) if row_item.item.selectable()]
        if row_coords:
            index.append(row_coords)
    return index


def clamp_hover(hover: Optional[Coord], index: SelectableIndex) -> Optional[Coord]:
    """Pull a hover position back inside ``index``; None when nothing fits."""
    if hover is None or not index:
        return None
    x, y = hover
    y = min(max(0, y), len(index) - 1)
    x = min(max(0, x), len(index[y]) - 1)
    return x, y
