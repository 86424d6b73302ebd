import json
import os
from typing import Any, Optional

_DEFAULT_HOME = os.path.join("~", ".config", "tubeterm")


def data_dir() -> str:
    """Directory holding config, watch history and logs.

    Honors the TUBETERM_HOME env var; defaults to ~/.config/tubeterm.
    """
    base = os.getenv("TUBETERM_HOME") or _DEFAULT_HOME
    path = os.path.abspath(os.path.expanduser(base))
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        # Let the caller fail on the actual read/write instead.
        pass
    return path


def data_path(name: str) -> str:
    return os.path.join(data_dir(), name)


def read_json(path: str) -> Optional[Any]:
    """Load a JSON file, discarding it when it is empty or corrupt.

    Returns None when there is nothing usable on disk.
    """
    if not os.path.exists(path):
        return None
    if os.path.getsize(path) == 0:
        _discard(path)
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        _discard(path)
        return None


def write_json(path: str, data: Any) -> None:
    """Write ``data`` atomically so a crash never leaves a half-written file."""
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass
