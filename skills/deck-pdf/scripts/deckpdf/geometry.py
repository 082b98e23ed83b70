"""Page, grid and quadrant geometry.

All coordinates are page units with the origin at the bottom-left corner and
y growing upward, the same convention the PDF canvas uses. Text positions
derived from these helpers are baselines.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

PAGE_WIDTH = 1920
PAGE_HEIGHT = 1080
PAGE_MARGIN = 80
GRID_SIZE = 40

# 2x2 inside the margined area: (1920 - 160) / 2 by (1080 - 160) / 2
QUADRANT_WIDTH = 880
QUADRANT_HEIGHT = 460

# Title glyphs carry side bearing; shift left so the stem sits on the grid.
TITLE_NUDGE = 8
PAGE_CENTER_Y = PAGE_HEIGHT / 2
QUADRANT_PADDING = 40


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: "Rect") -> bool:
        """True when the two rectangles share interior area (touching edges do not count)."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.bottom < other.top
            and other.bottom < self.top
        )

    def contains(self, other: "Rect") -> bool:
        return (
            self.left <= other.left
            and other.right <= self.right
            and self.bottom <= other.bottom
            and other.top <= self.top
        )


def snap_to_grid(value: float) -> int:
    """Round to the nearest multiple of the grid pitch, halves rounding up."""
    return int(math.floor(value / GRID_SIZE + 0.5)) * GRID_SIZE


def page_interior() -> Rect:
    return Rect(
        PAGE_MARGIN,
        PAGE_MARGIN,
        PAGE_WIDTH - 2 * PAGE_MARGIN,
        PAGE_HEIGHT - 2 * PAGE_MARGIN,
    )


def quadrant_bounds(index: int) -> Rect:
    """Return the rectangle of quadrant 1 (top-left) .. 4 (bottom-right)."""
    if index not in (1, 2, 3, 4):
        raise ValueError(f"quadrant index must be 1..4, got {index!r}")
    column = (index - 1) % 2
    top_row = index <= 2
    x = PAGE_MARGIN + column * QUADRANT_WIDTH
    y = PAGE_MARGIN + (QUADRANT_HEIGHT if top_row else 0)
    return Rect(x, y, QUADRANT_WIDTH, QUADRANT_HEIGHT)
