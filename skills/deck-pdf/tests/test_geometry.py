from __future__ import annotations

import sys
from itertools import combinations
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckpdf import Rect, page_interior, quadrant_bounds, snap_to_grid  # noqa: E402


@pytest.mark.parametrize(
    "index, origin",
    [(1, (80, 540)), (2, (960, 540)), (3, (80, 80)), (4, (960, 80))],
)
def test_quadrant_origins(index: int, origin: tuple[int, int]) -> None:
    rect = quadrant_bounds(index)
    assert (rect.x, rect.y) == origin
    assert (rect.width, rect.height) == (880, 460)


def test_quadrants_tile_the_page_interior() -> None:
    interior = page_interior()
    quads = [quadrant_bounds(i) for i in (1, 2, 3, 4)]

    assert all(interior.contains(q) for q in quads)
    assert sum(q.area for q in quads) == interior.area
    for a, b in combinations(quads, 2):
        assert not a.overlaps(b)


@pytest.mark.parametrize("index", [0, 5, -1])
def test_quadrant_index_out_of_range(index: int) -> None:
    with pytest.raises(ValueError):
        quadrant_bounds(index)


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (19, 0), (20, 40), (59.9, 40), (60, 80), (80, 80), (1000, 1000), (1019, 1000)],
)
def test_snap_to_grid(value: float, expected: int) -> None:
    assert snap_to_grid(value) == expected


def test_touching_rectangles_do_not_overlap() -> None:
    left = Rect(0, 0, 10, 10)
    right = Rect(10, 0, 10, 10)
    assert not left.overlaps(right)
    assert left.overlaps(Rect(9, 9, 5, 5))
