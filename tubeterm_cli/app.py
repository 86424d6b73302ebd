"""Session state: focus navigation, widget dispatch, rendering and history."""

from __future__ import annotations

import copy
import itertools
from dataclasses import replace
from typing import List, Optional, Tuple

from . import page_controller as pages
from .commands import Command, MutateWidget, ReplaceSession
from .config import Action, Config
from .handlers.api import InvidiousClient
from .history import AppHistory
from .layout import Direction, Rect, row_constraints, split
from .loader import (
    LoadContext,
    LoadJob,
    LoadResult,
    SuggestionJob,
    SuggestionResult,
    run_load_job,
    run_suggestion_job,
)
from .pages.global_items import MAX_SUGGESTIONS, GlobalItem, GlobalKind
from .structs import (
    Coord,
    MainMenuPage,
    Page,
    SearchSettings,
    clamp_hover,
    selectable_index,
)
from .surface import Style, Surface
from .utils.logger import _log_exception
from .utils.watch_history import WatchHistory

HISTORY_START_MESSAGE = "This is the beginning of history"

_generations = itertools.count(1)

DIRECTIONS = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


class App:
    """One browsing session.

    ``config``, ``client``, ``watch_history`` and ``search_settings`` live for
    the whole session. Everything else describes the current page and is
    replaced on navigation (see ``history.SNAPSHOT_FIELDS``).
    """

    def __init__(
        self,
        config: Config,
        client: InvidiousClient,
        watch_history: WatchHistory,
        *,
        page: Optional[Page] = None,
        history: Optional[List[AppHistory]] = None,
        search_settings: Optional[SearchSettings] = None,
    ):
        self.config = config
        self.client = client
        self.watch_history = watch_history
        self.search_settings = search_settings if search_settings is not None else SearchSettings()
        self.history: List[AppHistory] = history if history is not None else []
        self.should_quit = False
        self._enter_page(page if page is not None else MainMenuPage())

    def _enter_page(self, page: Page) -> None:
        self.page = page
        self.state = pages.default_state(page, self.config)
        self.selectable = selectable_index(self.state)
        self.hover: Optional[Coord] = clamp_hover(self.config.default_hover.get(page.key), self.selectable)
        self.selected: Optional[Coord] = None
        self.message: Optional[str] = None
        self.load = True
        self.loading = False
        self.render = True
        self.popup_focus = False
        self.search_text = ""
        self.search_index = 0
        self.page_no = 1
        self.suggestion_query: Optional[str] = None
        self.generation = next(_generations)

    # --- navigation ------------------------------------------------------------

    def navigate(self, page: Page, **fields) -> ReplaceSession:
        """Build the session for ``page`` with this one pushed onto the history.

        ``fields`` override the fresh session's transient defaults, e.g. the
        search text a results page should load.
        """
        new = App(
            self.config,
            self.client,
            self.watch_history,
            page=page,
            history=self.history + [AppHistory.capture(self)],
            search_settings=self.search_settings,
        )
        for name, value in fields.items():
            setattr(new, name, value)
        return ReplaceSession(new)

    def pop(self) -> bool:
        """Return to the previous page; False (with a message) when there is none."""
        if not self.history:
            self.message = HISTORY_START_MESSAGE
            return False
        snapshot = self.history.pop()
        snapshot.restore_into(self)
        self.loading = False
        self.generation = next(_generations)
        return True

    def home(self) -> None:
        """Drop the whole history and start over on the main menu."""
        self.history = []
        self.search_settings = SearchSettings()
        self._enter_page(MainMenuPage())

    def reload(self) -> None:
        """Throw away loaded content of the current page and load it again."""
        self.state.reset()
        self.load = True
        self.render = True
        self.generation = next(_generations)

    # --- input -------------------------------------------------------------------

    def handle_key(self, key: str) -> "App":
        """Process one key and return the session that is current afterwards."""
        action = self.config.action_for(key)

        if self.selected is not None and action is not Action.DESELECT:
            x, y = self.selected
            widget = copy.deepcopy(self.state.item_at(x, y))
            try:
                command = widget.key_input(key, self)
            except Exception as exc:
                return self._widget_failed(widget, exc)
            self.render = True
            return self._apply(command, (x, y))

        if action is None:
            return self

        if action is Action.REFRESH:
            self.reload()
        elif action is Action.SELECT:
            return self._select()
        elif action is Action.DESELECT:
            if self.selected is not None:
                self.selected = None
                self.popup_focus = False
                self.render = True
        elif action is Action.BACK:
            self.pop()
            self.render = True
        elif action is Action.HOME:
            self.home()
        elif action is Action.QUIT:
            self.should_quit = True
        elif action in DIRECTIONS:
            self._move(action)
        return self

    def _select(self) -> "App":
        if self.hover is None or self.selected is not None:
            return self
        hx, hy = self.hover
        x, y = self.selectable[hy][hx]
        widget = copy.deepcopy(self.state.item_at(x, y))
        try:
            command = widget.select(self)
        except Exception as exc:
            return self._widget_failed(widget, exc)
        if isinstance(command, ReplaceSession):
            return command.app
        app = self._apply(command, (x, y))
        if command.enter and app.state.item_at(x, y).selectable():
            app.selected = (x, y)
        app.render = True
        return app

    def _apply(self, command: Command, coord: Coord) -> "App":
        """Consume a widget command for the slot at ``coord``."""
        if isinstance(command, ReplaceSession):
            return command.app
        if isinstance(command, MutateWidget):
            x, y = coord
            was_selectable = self.state.item_at(x, y).selectable()
            self.state.set_item(x, y, command.widget)
            if command.widget.selectable() != was_selectable:
                self._rebuild_index()
            self.render = True
        return self

    def _rebuild_index(self) -> None:
        self.selectable = selectable_index(self.state)
        self.hover = clamp_hover(self.hover, self.selectable)
        if self.selected is not None:
            x, y = self.selected
            if not self.state.item_at(x, y).selectable():
                self.selected = None
                self.popup_focus = False

    def _widget_failed(self, widget, exc: Exception) -> "App":
        _log_exception(f"[app] {type(widget).__name__} failed on {self.page}", exc)
        self.message = f"Error: {exc}"
        self.render = True
        return self

    def _move(self, action: Action) -> None:
        if not self.selectable:
            return

        if self.hover is None:
            if action in (Action.UP, Action.LEFT):
                self.hover = (0, 0)
            else:
                self.hover = (0, len(self.selectable) - 1)
            self.render = True
            return

        x, y = self.hover
        if action is Action.UP and y > 0:
            y -= 1
            x = min(x, len(self.selectable[y]) - 1)
        elif action is Action.DOWN and y < len(self.selectable) - 1:
            y += 1
            x = min(x, len(self.selectable[y]) - 1)
        elif action is Action.LEFT and x > 0:
            x -= 1
        elif action is Action.RIGHT and x < len(self.selectable[y]) - 1:
            x += 1
        else:
            return
        self.hover = (x, y)
        self.render = True

    # --- loading -------------------------------------------------------------------

    def begin_load(self) -> Optional[LoadJob]:
        """Clear the load flag and package the loadable widgets into a job."""
        self.load = False
        slots = [(x, y, copy.deepcopy(w)) for x, y, w in self.state.slots() if w.loadable]
        if not slots:
            return None
        self.loading = True
        self.message = pages.load_message(self.page)
        self.render = True
        context = LoadContext(
            page=self.page,
            client=self.client,
            config=self.config,
            search_text=self.search_text,
            search_settings=copy.deepcopy(self.search_settings),
            page_no=self.page_no,
            watch_history=list(self.watch_history.videos),
        )
        return LoadJob(generation=self.generation, context=context, slots=slots)

    def apply_load(self, result: LoadResult) -> bool:
        """Install loaded widgets; stale results (older generation) are ignored."""
        if result.generation != self.generation or result.cancelled:
            return False
        self.loading = False
        for x, y, widget in result.loaded:
            self.state.set_item(x, y, widget)
        self._rebuild_index()
        self.message = "; ".join(result.errors) if result.errors else None
        if result.watched:
            for video in result.watched:
                self.watch_history.add(video)
            self.watch_history.save()
        self.render = True
        return True

    def load_now(self) -> None:
        """Load the current page on the calling thread."""
        job = self.begin_load()
        if job is not None:
            self.apply_load(run_load_job(job))

    def begin_suggestions(self) -> Optional[SuggestionJob]:
        """Take the pending suggestion request, if the search bar made one."""
        query, self.suggestion_query = self.suggestion_query, None
        if query is None:
            return None
        return SuggestionJob(generation=self.generation, client=self.client, query=query)

    def apply_suggestions(self, result: SuggestionResult) -> bool:
        """Show suggestions unless the search text changed since they were requested."""
        if result.generation != self.generation or result.query != self.search_text:
            return False
        suggestions = result.suggestions[:MAX_SUGGESTIONS]
        for x, y, widget in self.state.slots():
            if isinstance(widget, GlobalItem) and widget.kind is GlobalKind.SEARCH_BAR:
                self.state.set_item(x, y, replace(widget, suggestions=suggestions))
        self.search_index = min(self.search_index, len(suggestions))
        self.render = True
        return True

    def suggest_now(self) -> None:
        """Fetch pending suggestions on the calling thread."""
        job = self.begin_suggestions()
        if job is not None:
            self.apply_suggestions(run_suggestion_job(job))

    # --- rendering -------------------------------------------------------------------

    def hovered_slot(self) -> Optional[Coord]:
        if self.hover is None:
            return None
        x, y = self.hover
        return self.selectable[y][x]

    def draw(self, surface: Surface) -> None:
        """Lay out the grid and render every widget, popups last."""
        width, height = surface.size()
        area = Rect(0, 0, width, height)
        min_w, min_h = pages.min_size(self.page, self.config)

        surface.clear(area)
        if width < min_w or height < min_h:
            surface.draw_paragraph(
                area,
                [
                    f"Window too small. Minimum size for this page is {min_w} x {min_h}. "
                    f"Current size is {width} x {height}"
                ],
                Style.ERROR,
            )
            return

        hovered = self.hovered_slot()
        popups: List[Tuple[object, bool, bool, Rect]] = []
        row_rects = split(area, [row.height for row in self.state], Direction.VERTICAL)

        for y, (row, row_rect) in enumerate(zip(self.state, row_rects)):
            constraints = row_constraints([i.constraint for i in row.items], row.centered, width)
            chunks = split(row_rect, constraints, Direction.HORIZONTAL)
            surface.clear(chunks[0])
            for x, (chunk, row_item) in enumerate(zip(chunks[1:], row.items)):
                selected = self.selected == (x, y)
                hover = hovered == (x, y)
                if self._render_widget(row_item.item, surface, chunk, selected, hover, self.popup_focus, False):
                    popups.append((row_item.item, selected, hover, chunk))

        for widget, selected, hover, chunk in popups:
            self._render_widget(widget, surface, chunk, selected, hover, True, True)

    def _render_widget(self, widget, surface, rect, selected, hover, popup_focus, is_popup_pass) -> bool:
        if rect.is_empty():
            return False
        try:
            return bool(widget.render_item(surface, rect, self, selected, hover, popup_focus, is_popup_pass))
        except Exception as exc:
            _log_exception(f"[app] rendering {type(widget).__name__} failed", exc)
            return False
