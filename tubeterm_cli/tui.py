from __future__ import annotations

import platform
from typing import Optional

from .app import App
from .config import Config
from .handlers.api import InvidiousClient
from .loader import ContentLoader, run_suggestion_job
from .surface import CursesSurface
from .utils.logger import _log, _suppress_http_logs
from .utils.watch_history import WatchHistory

# getch timeout; keeps the loop polling for finished loads while idle
POLL_MS = 100


def _key_name(ch, curses) -> Optional[str]:
    """Translate a ``get_wch`` result into the key names used by keybindings."""
    if isinstance(ch, str):
        if ch in ("\n", "\r"):
            return "Enter"
        if ch == "\x1b":
            return "Esc"
        if ch in ("\x7f", "\b"):
            return "Backspace"
        if ch == "\t":
            return "Tab"
        if ord(ch) < 32:
            return f"C-{chr(ord(ch) + 96)}"
        return ch

    names = {
        curses.KEY_UP: "Up",
        curses.KEY_DOWN: "Down",
        curses.KEY_LEFT: "Left",
        curses.KEY_RIGHT: "Right",
        curses.KEY_ENTER: "Enter",
        curses.KEY_BACKSPACE: "Backspace",
        curses.KEY_DC: "Delete",
        curses.KEY_HOME: "Home",
        curses.KEY_END: "End",
        curses.KEY_PPAGE: "PageUp",
        curses.KEY_NPAGE: "PageDown",
        curses.KEY_BTAB: "BackTab",
    }
    for n in range(1, 13):
        names[curses.KEY_F(n)] = f"F{n}"
    return names.get(ch)


def run_tui(config: Config) -> None:
    """Run the curses-based TUI until the user quits.

    On Windows, you may need to: pip install windows-curses
    """
    # Import curses lazily to allow the CLI to be importable even if curses is missing.
    try:
        import curses
    except ImportError as exc:  # pragma: no cover - environment dependent
        system = platform.system()
        if system == "Windows":
            hint = "Install with: pip install windows-curses"
        elif system == "Darwin":
            hint = (
                "Ensure your Python includes ncurses (e.g., from python.org or Homebrew). "
                "If needed: brew install python"
            )
        else:  # Linux/other
            hint = "Ensure ncurses is installed (e.g., apt/yum/pacman install libncurses/terminfo)"
        print("Curses is not available. " f"{hint}.\n" f"Original error: {exc}")
        return

    _suppress_http_logs()
    client = InvidiousClient(config.server_url, timeout=config.request_timeout)
    watch_history = WatchHistory.load(limit=config.max_watch_history)

    def main(stdscr):
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        stdscr.timeout(POLL_MS)

        # Reduce ESC key delay on some terminals/platforms (best-effort)
        if hasattr(curses, "set_escdelay"):
            try:
                curses.set_escdelay(25)
            except curses.error:
                pass

        surface = CursesSurface(stdscr, curses)
        loader = ContentLoader()
        suggester = ContentLoader(run_suggestion_job)
        app = App(config, client, watch_history)

        try:
            while not app.should_quit:
                if app.load:
                    job = app.begin_load()
                    if job is not None:
                        loader.submit(job)

                for result in loader.poll():
                    app.apply_load(result)

                suggestion_job = app.begin_suggestions()
                if suggestion_job is not None:
                    suggester.submit(suggestion_job)

                for result in suggester.poll():
                    app.apply_suggestions(result)

                if app.render:
                    app.render = False
                    stdscr.erase()
                    app.draw(surface)
                    stdscr.refresh()

                try:
                    ch = stdscr.get_wch()
                except curses.error:
                    continue  # timeout, nothing pressed

                if ch == curses.KEY_RESIZE:
                    app.render = True
                    continue

                key = _key_name(ch, curses)
                if key is not None:
                    app = app.handle_key(key)
        finally:
            loader.cancel()
            suggester.cancel()

    try:
        curses.wrapper(main)
    except KeyboardInterrupt:
        _log("[tui] WARN: interrupted by user")
