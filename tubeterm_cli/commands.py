"""Results returned by widget ``select``/``key_input`` calls.

The app consumes them centrally:

- ``NoOp``: nothing to write back; ``enter`` asks to become the selected widget
- ``MutateWidget``: write ``widget`` back into the slot it came from
- ``ReplaceSession``: a page transition happened; install ``app`` as the new
  session and never write the old slot back over the new grid
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:  # pragma: no cover
    from .app import App


@dataclass
class NoOp:
    enter: bool = False


@dataclass
class MutateWidget:
    widget: Any
    enter: bool = False


@dataclass
class ReplaceSession:
    app: "App"


Command = Union[NoOp, MutateWidget, ReplaceSession]
