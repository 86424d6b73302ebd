"""Configuration loaded once at startup from ``config.yml`` in the data directory.

Example::

    server_url: https://invidious.example.org
    request_timeout: 10
    max_watch_history: 50
    player_command: [mpv, "{url}"]
    keybindings:
      Up: up
      k: up
      Enter: select
      Esc: deselect
    min_sizes:
      channel: [45, 15]
    default_hover:
      main_menu: [0, 1]
    layouts:
      item_info:
        - height: length 3
          items:
            - {item: search_bar, constraint: min 16}
            - {item: search_settings, constraint: length 5}
        - height: min 6
          items:
            - {item: info, constraint: percentage 100}
        - height: length 3
          centered: true
          items:
            - {item: play, constraint: length 15}
            - {item: channel, constraint: length 15}

Any key left out keeps its default. ``keybindings`` entries are merged into
the default table; bind a key to ``none`` to remove it. A page listed under
``layouts`` replaces its built-in grid; constraints are written as
``length N``, ``min N``, ``max N`` or ``percentage N``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .handlers.api import DEFAULT_SERVER
from .layout import Constraint, Length, Max, Min, Percentage
from .page_controller import layout_items
from .structs import PAGE_KEYS
from .utils.cache import data_path

CONFIG_FILE = "config.yml"


class Action(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    DESELECT = "deselect"
    REFRESH = "refresh"
    BACK = "back"
    HOME = "home"
    QUIT = "quit"


DEFAULT_KEYBINDINGS: Dict[str, Action] = {
    "Up": Action.UP,
    "Down": Action.DOWN,
    "Left": Action.LEFT,
    "Right": Action.RIGHT,
    "k": Action.UP,
    "j": Action.DOWN,
    "h": Action.LEFT,
    "l": Action.RIGHT,
    "Enter": Action.SELECT,
    "Esc": Action.DESELECT,
    "F5": Action.REFRESH,
    "r": Action.REFRESH,
    "Backspace": Action.BACK,
    "Home": Action.HOME,
    "q": Action.QUIT,
}

DEFAULT_MIN_SIZES: Dict[str, Tuple[int, int]] = {
    "search": (45, 12),
    "main_menu": (45, 15),
    "item_info": (45, 12),
    "channel": (45, 15),
}

DEFAULT_PLAYER = ("mpv", "{url}")

_CONSTRAINTS = {"length": Length, "min": Min, "max": Max, "percentage": Percentage}


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class LayoutRow:
    """One configured grid row: ``(item name, width constraint)`` pairs."""

    items: Tuple[Tuple[str, Constraint], ...]
    height: Constraint
    centered: bool = False


@dataclass(frozen=True)
class Config:
    server_url: str = DEFAULT_SERVER
    request_timeout: Optional[float] = 10.0
    max_watch_history: int = 50
    player_command: Tuple[str, ...] = DEFAULT_PLAYER
    keybindings: Mapping[str, Action] = field(default_factory=lambda: _frozen(DEFAULT_KEYBINDINGS))
    min_sizes: Mapping[str, Tuple[int, int]] = field(default_factory=lambda: _frozen(DEFAULT_MIN_SIZES))
    default_hover: Mapping[str, Tuple[int, int]] = field(default_factory=lambda: _frozen({}))
    layouts: Mapping[str, Tuple[LayoutRow, ...]] = field(default_factory=lambda: _frozen({}))

    def action_for(self, key: str) -> Optional[Action]:
        return self.keybindings.get(key)

    def min_size(self, page_key: str) -> Tuple[int, int]:
        return self.min_sizes.get(page_key, (0, 0))


def _pair(value: Any, what: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{what} must be a list of two integers, got {value!r}")
    try:
        return int(value[0]), int(value[1])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{what} must be a list of two integers, got {value!r}") from exc


def _page_pairs(raw: Any, what: str, defaults: Mapping[str, Tuple[int, int]]) -> Dict[str, Tuple[int, int]]:
    out = dict(defaults)
    if raw is None:
        return out
    if not isinstance(raw, dict):
        raise ConfigError(f"'{what}' must be a mapping of page name to [x, y]")
    for page_key, value in raw.items():
        if page_key not in PAGE_KEYS:
            raise ConfigError(f"Unknown page '{page_key}' in '{what}' (expected one of {', '.join(PAGE_KEYS)})")
        out[page_key] = _pair(value, f"{what}.{page_key}")
    return out


def _keybindings(raw: Any) -> Dict[str, Action]:
    table = dict(DEFAULT_KEYBINDINGS)
    if raw is None:
        return table
    if not isinstance(raw, dict):
        raise ConfigError("'keybindings' must be a mapping of key name to action")
    for key, action_name in raw.items():
        key = str(key)
        if action_name is None or str(action_name).lower() == "none":
            table.pop(key, None)
            continue
        try:
            table[key] = Action(str(action_name).lower())
        except ValueError as exc:
            valid = ", ".join(a.value for a in Action)
            raise ConfigError(f"Unknown action '{action_name}' for key '{key}' (expected one of {valid})") from exc
    return table


def _constraint(value: Any, what: str) -> Constraint:
    """Parse ``"min 6"``-style text; a bare integer is a ``Length``."""
    if isinstance(value, int) and not isinstance(value, bool):
        kind, amount = "length", value
    else:
        parts = str(value).split()
        if len(parts) != 2 or parts[0].lower() not in _CONSTRAINTS:
            raise ConfigError(
                f"{what} must look like 'length N', 'min N', 'max N' or 'percentage N', got {value!r}"
            )
        kind = parts[0].lower()
        try:
            amount = int(parts[1])
        except ValueError as exc:
            raise ConfigError(f"{what} needs an integer size, got {value!r}") from exc
    if amount < 0:
        raise ConfigError(f"{what} cannot be negative, got {value!r}")
    return _CONSTRAINTS[kind](amount)


def _layout_row(page_key: str, raw: Any, what: str, names) -> LayoutRow:
    if not isinstance(raw, dict):
        raise ConfigError(f"{what} must be a mapping with 'height' and 'items'")
    items_raw = raw.get("items")
    if not isinstance(items_raw, list) or not items_raw:
        raise ConfigError(f"{what}.items must be a non-empty list")

    items: List[Tuple[str, Constraint]] = []
    for i, entry in enumerate(items_raw):
        if not isinstance(entry, dict) or "item" not in entry:
            raise ConfigError(f"{what}.items[{i}] must be a mapping with 'item' and 'constraint'")
        name = str(entry["item"])
        if name not in names:
            raise ConfigError(
                f"Unknown item '{name}' in layouts.{page_key} (expected one of {', '.join(sorted(names))})"
            )
        items.append((name, _constraint(entry.get("constraint"), f"{what}.items[{i}].constraint")))

    centered = raw.get("centered", False)
    if not isinstance(centered, bool):
        raise ConfigError(f"{what}.centered must be true or false, got {centered!r}")
    return LayoutRow(tuple(items), _constraint(raw.get("height"), f"{what}.height"), centered)


def _layouts(raw: Any) -> Dict[str, Tuple[LayoutRow, ...]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("'layouts' must be a mapping of page name to a list of rows")
    out: Dict[str, Tuple[LayoutRow, ...]] = {}
    for page_key, rows in raw.items():
        if page_key not in PAGE_KEYS:
            raise ConfigError(f"Unknown page '{page_key}' in 'layouts' (expected one of {', '.join(PAGE_KEYS)})")
        if not isinstance(rows, list) or not rows:
            raise ConfigError(f"layouts.{page_key} must be a non-empty list of rows")
        names = layout_items(page_key)
        out[page_key] = tuple(
            _layout_row(page_key, row, f"layouts.{page_key}[{y}]", names) for y, row in enumerate(rows)
        )
    return out


def config_from_dict(raw: Mapping[str, Any]) -> Config:
    """Validate a parsed YAML document and build an immutable ``Config``."""
    if not isinstance(raw, Mapping):
        raise ConfigError("Configuration must be a YAML mapping")

    server_url = raw.get("server_url", DEFAULT_SERVER)
    if not isinstance(server_url, str) or not server_url.startswith(("http://", "https://")):
        raise ConfigError(f"'server_url' must be an http(s) URL, got {server_url!r}")

    timeout = raw.get("request_timeout", 10.0)
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'request_timeout' must be a number, got {timeout!r}") from exc

    max_history = raw.get("max_watch_history", 50)
    if not isinstance(max_history, int) or max_history < 0:
        raise ConfigError(f"'max_watch_history' must be a non-negative integer, got {max_history!r}")

    player = raw.get("player_command", list(DEFAULT_PLAYER))
    if isinstance(player, str):
        player = player.split()
    if not isinstance(player, (list, tuple)) or not player:
        raise ConfigError("'player_command' must be a non-empty list of arguments")

    return Config(
        server_url=server_url,
        request_timeout=timeout,
        max_watch_history=max_history,
        player_command=tuple(str(p) for p in player),
        keybindings=_frozen(_keybindings(raw.get("keybindings"))),
        min_sizes=_frozen(_page_pairs(raw.get("min_sizes"), "min_sizes", DEFAULT_MIN_SIZES)),
        default_hover=_frozen(_page_pairs(raw.get("default_hover"), "default_hover", {})),
        layouts=_frozen(_layouts(raw.get("layouts"))),
    )


def config_path(path: Optional[str] = None) -> str:
    return os.path.abspath(os.path.expanduser(path)) if path else data_path(CONFIG_FILE)


def load_config(path: Optional[str] = None) -> Config:
    """Read the configuration file; a missing file yields the defaults."""
    path = config_path(path)
    if not os.path.exists(path):
        return Config()
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
    if raw is None:
        return Config()
    return config_from_dict(raw)


def write_default_config(path: Optional[str] = None, *, overwrite: bool = False) -> str:
    """Write the default configuration and return its path."""
    path = config_path(path)
    if os.path.exists(path) and not overwrite:
        raise ConfigError(f"{path} already exists")
    doc = {
        "server_url": DEFAULT_SERVER,
        "request_timeout": 10,
        "max_watch_history": 50,
        "player_command": list(DEFAULT_PLAYER),
        "keybindings": {key: action.value for key, action in DEFAULT_KEYBINDINGS.items()},
        "min_sizes": {key: list(size) for key, size in DEFAULT_MIN_SIZES.items()},
        "default_hover": {},
        "layouts": {},
    }
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# TubeTerm configuration\n")
        yaml.safe_dump(doc, f, sort_keys=False, allow_unicode=True)
    return path
