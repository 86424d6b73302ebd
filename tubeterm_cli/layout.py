"""Size constraints, rectangles and the split solver used by the page renderer.

A row or column is divided by a list of constraints:

- ``Length(n)``: exactly ``n`` cells
- ``Min(n)``: at least ``n`` cells, absorbs spare space
- ``Max(n)``: at most ``n`` cells
- ``Percentage(p)``: ``p`` percent of the split area, rounded down

The solver hands every constraint its base size, gives any spare cells to the
``Min`` constraints (or to the last chunk when there are none), and truncates
from the end when the area is too small. The chunk sizes always add up to the
size of the area.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Sequence, Union


@dataclass(frozen=True)
class Length:
    value: int


@dataclass(frozen=True)
class Min:
    value: int


@dataclass(frozen=True)
class Max:
    value: int


@dataclass(frozen=True)
class Percentage:
    value: int


Constraint = Union[Length, Min, Max, Percentage]


class Direction(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self, margin: int = 1) -> "Rect":
        """Area left inside a border of ``margin`` cells."""
        width = max(0, self.width - 2 * margin)
        height = max(0, self.height - 2 * margin)
        return Rect(self.x + margin, self.y + margin, width, height)


def fixed_size(constraint: Constraint, total: int) -> int:
    """Base size of a constraint inside an area of ``total`` cells."""
    if isinstance(constraint, Percentage):
        return total * constraint.value // 100
    return constraint.value


def split(area: Rect, constraints: Sequence[Constraint], direction: Direction) -> List[Rect]:
    """Divide ``area`` into one rectangle per constraint, in order."""
    if not constraints:
        return []

    total = area.width if direction is Direction.HORIZONTAL else area.height
    sizes = [max(0, fixed_size(c, total)) for c in constraints]

    # Overflow: hand out cells front to back until the area runs out.
    remaining = total
    for i, size in enumerate(sizes):
        sizes[i] = min(size, remaining)
        remaining -= sizes[i]

    if remaining > 0:
        growable = [i for i, c in enumerate(constraints) if isinstance(c, Min)]
        if growable:
            share, extra = divmod(remaining, len(growable))
            for n, i in enumerate(growable):
                sizes[i] += share + (1 if n < extra else 0)
        else:
            sizes[-1] += remaining

    rects: List[Rect] = []
    offset = area.x if direction is Direction.HORIZONTAL else area.y
    for size in sizes:
        if direction is Direction.HORIZONTAL:
            rects.append(Rect(offset, area.y, size, area.height))
        else:
            rects.append(Rect(area.x, offset, area.width, size))
        offset += size
    return rects


def centering_filler(constraints: Iterable[Constraint], width: int) -> Length:
    """Leading filler that pushes a row of fixed-ish items to the middle.

    Integer division means a row can sit one column left of true center.
    """
    used = sum(fixed_size(c, width) for c in constraints)
    return Length(max(0, width - used) // 2)


def row_constraints(items: Sequence[Constraint], centered: bool, width: int) -> List[Constraint]:
    """Horizontal constraints for a grid row: filler, items, trailing filler."""
    out: deque = deque(items)
    if centered:
        out.appendleft(centering_filler(items, width))
    else:
        out.appendleft(Length(0))
    out.append(Length(0))
    return list(out)


def split_percentages(area: Rect, percentages: Sequence[int]) -> List[Rect]:
    """Side-by-side panes sized by percentage, used by list + preview widgets."""
    return split(area, [Percentage(p) for p in percentages], Direction.HORIZONTAL)
