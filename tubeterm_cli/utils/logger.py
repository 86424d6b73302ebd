from __future__ import annotations

import os
import logging
import traceback
from datetime import datetime as _dt
from typing import Optional

from .cache import data_dir

_LOG_FILE_PATH: Optional[str] = None

# Loggers of the HTTP stack; anything they print to the console corrupts the curses screen.
_HTTP_LOGGERS = ("urllib3", "requests", "charset_normalizer")


def _ensure_logs_dir() -> str:
    """Ensure the 'logs' directory exists and return its path."""
    logs_dir = os.path.join(data_dir(), "logs")
    try:
        os.makedirs(logs_dir, exist_ok=True)
    except OSError:
        pass
    return logs_dir


def _open_log_file() -> str:
    """Get the current day's log file path."""
    global _LOG_FILE_PATH

    logs_dir = _ensure_logs_dir()
    date_str = _dt.now().strftime("%Y%m%d")
    expected_path = os.path.join(logs_dir, f"{date_str}.txt")

    # Refresh path if day changed
    if _LOG_FILE_PATH != expected_path:
        _LOG_FILE_PATH = expected_path

    return _LOG_FILE_PATH


def _log(line: str) -> None:
    """Write to logfile only for warnings/errors."""
    try:
        u = str(line).upper()
        if ("ERROR" not in u) and ("WARN" not in u):
            return
        path = _open_log_file()
        with open(path, "a", encoding="utf-8") as f:
            ts = _dt.now().strftime("%Y-%m-%d %H:%M:%S")
            text = str(line).rstrip("\n")
            f.write(f"[{ts}] {text}\n")
    except OSError:
        pass


def _log_exception(msg: str, exc: BaseException) -> None:
    """Log an exception with its full stacktrace."""
    try:
        path = _open_log_file()
        with open(path, "a", encoding="utf-8") as f:
            ts = _dt.now().strftime("%Y-%m-%d %H:%M:%S")
            f.write(f"[{ts}] ERROR: {msg}: {exc}\n")
            f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            f.write("\n" + "-" * 40 + "\n")
    except OSError:
        pass


def _suppress_http_logs() -> None:
    """Keep HTTP library loggers off the console and redirect them to the log file."""
    log_file = _open_log_file()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    for name in _HTTP_LOGGERS:
        lib_logger = logging.getLogger(name)
        lib_logger.setLevel(logging.WARNING)
        lib_logger.propagate = False

        has_file_handler = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
            for h in lib_logger.handlers
        )
        if not has_file_handler:
            try:
                fh = logging.FileHandler(log_file, encoding="utf-8")
            except OSError:
                continue
            fh.setLevel(logging.WARNING)
            fh.setFormatter(formatter)
            lib_logger.addHandler(fh)

        for h in lib_logger.handlers[:]:
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
                h.setLevel(100)
