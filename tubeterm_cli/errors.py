"""Exception types shared across TubeTerm."""

from __future__ import annotations

from typing import Optional


class TubeTermError(Exception):
    """Base class for every error raised by TubeTerm itself."""


class LoadError(TubeTermError):
    """Loading page content failed; the previous widget value stays in place."""


class ApiError(LoadError):
    """The content API answered with an error or could not be reached."""

    def __init__(self, message: str, *, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is not None:
            return f"{base} (HTTP {self.status})"
        return base


class ConfigError(TubeTermError):
    """The configuration file is malformed. Fatal at startup."""
