"""Background page loading.

The event loop submits a ``LoadJob`` (copies of the loadable widgets plus a
read-only ``LoadContext``) and keeps handling input. A worker thread runs the
job and posts a ``LoadResult`` on a queue; the app discards results whose
generation no longer matches the session.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from .errors import LoadError
from .handlers.models import MiniVideo
from .structs import Page, SearchSettings
from .utils.logger import _log, _log_exception

if TYPE_CHECKING:  # pragma: no cover
    from .config import Config
    from .handlers.api import InvidiousClient
    from .widgets.base import Widget


@dataclass
class LoadContext:
    page: Page
    client: "InvidiousClient"
    config: "Config"
    search_text: str = ""
    search_settings: SearchSettings = field(default_factory=SearchSettings)
    page_no: int = 1
    watch_history: List[MiniVideo] = field(default_factory=list)
    watched: List[MiniVideo] = field(default_factory=list)

    def record_watch(self, video: MiniVideo) -> None:
        """Queue a video for the watch history; applied on the main thread."""
        self.watched.append(video)


@dataclass
class LoadJob:
    generation: int
    context: LoadContext
    slots: List[Tuple[int, int, "Widget"]]


@dataclass
class LoadResult:
    generation: int
    loaded: List[Tuple[int, int, "Widget"]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    watched: List[MiniVideo] = field(default_factory=list)
    cancelled: bool = False


@dataclass
class SuggestionJob:
    generation: int
    client: "InvidiousClient"
    query: str


@dataclass
class SuggestionResult:
    generation: int
    query: str
    suggestions: List[str] = field(default_factory=list)


def run_load_job(job: LoadJob, cancel: Optional[threading.Event] = None) -> LoadResult:
    """Load every slot of ``job``; failed slots keep their old value."""
    result = LoadResult(generation=job.generation)
    for x, y, widget in job.slots:
        if cancel is not None and cancel.is_set():
            result.cancelled = True
            break
        try:
            result.loaded.append((x, y, widget.load_item(job.context)))
        except LoadError as exc:
            _log(f"[loader] WARN: loading {type(widget).__name__} at ({x}, {y}) failed: {exc}")
            result.errors.append(str(exc))
        except Exception as exc:
            _log_exception(f"[loader] unexpected failure loading {type(widget).__name__}", exc)
            result.errors.append(f"Error: {exc}")
    result.watched = list(job.context.watched)
    return result


def run_suggestion_job(job: SuggestionJob, cancel: Optional[threading.Event] = None) -> SuggestionResult:
    """Fetch search suggestions; an unreachable server just means no suggestions."""
    result = SuggestionResult(generation=job.generation, query=job.query)
    try:
        result.suggestions = job.client.fetch_suggestions(job.query)
    except LoadError as exc:
        _log(f"[search] WARN: suggestions unavailable: {exc}")
    return result


class ContentLoader:
    """Runs one job at a time on a daemon thread.

    ``runner`` turns a job into a result; page loads use ``run_load_job``,
    search suggestions use ``run_suggestion_job``.
    """

    def __init__(self, runner: Callable = run_load_job):
        self._runner = runner
        self._results: "queue.Queue" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._cancel = threading.Event()

    @property
    def busy(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def submit(self, job) -> None:
        """Start ``job``, cancelling whatever job is still running."""
        self.cancel()
        self._cancel = threading.Event()
        self._thread = threading.Thread(target=self._worker, args=(job, self._cancel), daemon=True)
        self._thread.start()

    def _worker(self, job, cancel: threading.Event) -> None:
        result = self._runner(job, cancel)
        if not cancel.is_set():
            self._results.put(result)

    def cancel(self) -> None:
        self._cancel.set()

    def poll(self) -> list:
        """Drain finished results without blocking."""
        out: list = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except queue.Empty:
                return out

    def wait(self, timeout: Optional[float] = None) -> list:
        """Block until the running job finishes, then drain results."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.poll()
