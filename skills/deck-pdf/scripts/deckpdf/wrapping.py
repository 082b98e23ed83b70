"""Greedy word wrapping under letter-spacing-adjusted widths."""

from __future__ import annotations

from typing import List

from .metrics import CharWidthFn
from .model import split_paragraphs


def measure(line: str, char_width: CharWidthFn, letter_spacing: float = 0.0) -> float:
    """Width of ``line``: glyph advances plus one spacing step between each pair of glyphs."""
    if not line:
        return 0.0
    return sum(char_width(c) for c in line) + (len(line) - 1) * letter_spacing


def wrap(
    text: str,
    max_width: float,
    char_width: CharWidthFn,
    letter_spacing: float = 0.0,
) -> List[str]:
    """Break one paragraph into lines no wider than ``max_width``.

    Words are never split: a word that is wider than ``max_width`` on its own
    is emitted as a single overflowing line.
    """
    lines: List[str] = []
    current = ""
    for word in (text or "").split(" "):
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if measure(candidate, char_width, letter_spacing) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = word
    if current:
        lines.append(current)
    return lines


def wrap_paragraphs(
    text: str,
    max_width: float,
    char_width: CharWidthFn,
    letter_spacing: float = 0.0,
) -> List[List[str]]:
    """Wrap each explicit paragraph of ``text`` separately."""
    return [wrap(p, max_width, char_width, letter_spacing) for p in split_paragraphs(text)]
