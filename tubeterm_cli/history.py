"""Snapshots of navigable session state, pushed before every forward page transition."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .structs import Coord, Page, SelectableIndex, State

if TYPE_CHECKING:  # pragma: no cover
    from .app import App

# Fields copied into a snapshot and restored by App.pop(). Config, client,
# watch history and search settings live for the whole session instead.
SNAPSHOT_FIELDS = (
    "page",
    "state",
    "selectable",
    "hover",
    "selected",
    "message",
    "load",
    "render",
    "popup_focus",
    "search_text",
    "search_index",
    "page_no",
)


@dataclass
class AppHistory:
    page: Page
    state: State
    selectable: SelectableIndex
    hover: Optional[Coord]
    selected: Optional[Coord]
    message: Optional[str]
    load: bool
    render: bool
    popup_focus: bool
    search_text: str
    search_index: int
    page_no: int

    @classmethod
    def capture(cls, app: "App") -> "AppHistory":
        snapshot = cls(**{name: copy.deepcopy(getattr(app, name)) for name in SNAPSHOT_FIELDS})
        # A load still running when the page is left never reaches the restored
        # session, so the page has to load again after pop().
        snapshot.load = app.load or app.loading
        return snapshot

    def restore_into(self, app: "App") -> None:
        for name in SNAPSHOT_FIELDS:
            setattr(app, name, getattr(self, name))
