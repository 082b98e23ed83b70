"""Layout resolver: slide content in, positioned lines out.

:func:`resolve_layout` is the single place that knows where text goes. Every
renderer (markup, PDF, thumbnail, PPTX) draws a :class:`LayoutResult` as-is and
never wraps or anchors text on its own, which is what keeps their line breaks
identical.

Positions use the page convention from :mod:`deckpdf.geometry`: origin at the
bottom-left, y upward, one baseline per line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .geometry import (
    PAGE_CENTER_Y,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    PAGE_WIDTH,
    QUADRANT_PADDING,
    QUADRANT_WIDTH,
    TITLE_NUDGE,
    Rect,
    quadrant_bounds,
    snap_to_grid,
)
from .metrics import FontMetrics, FontRole
from .model import LayoutKind, SlideContent, split_paragraphs
from .wrapping import measure, wrap


@dataclass(frozen=True)
class TextStyle:
    role: FontRole
    size: float
    line_height: float
    letter_spacing: float
    css_class: str


HEADER_STYLE = TextStyle(FontRole.MONO, 16, 16, 0.0, "slide-header")
TITLE_STYLE = TextStyle(FontRole.BOLD, 125, 125, -5.0, "slide-title")
# letter-spacing is -3% of the font size for body and -2% for body-large
BODY_STYLE = TextStyle(FontRole.REGULAR, 22, 27, -0.66, "slide-body")
BODY_LARGE_STYLE = TextStyle(FontRole.REGULAR, 30, 42, -0.6, "slide-body-large")

WIDE_MAX_WIDTH = PAGE_WIDTH / 2
QUADRANT_MAX_WIDTH = QUADRANT_WIDTH - 2 * QUADRANT_PADDING
TITLE_TOP_OFFSET = 320
CENTERED_GAP = 80

BULLET_SIZE = 14
BULLET_INDENT = 30
# Vertical centre of a line relative to its baseline, as a fraction of the font size.
LINE_CENTER_RATIO = 0.35
ASCENT_RATIO = 0.8
DESCENT_RATIO = 0.2


class Flow(str, Enum):
    DOWN = "down"
    UP = "up"


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class PlacedLine:
    text: str
    x: float
    y: float
    width: float
    paragraph: int


@dataclass(frozen=True)
class BulletMarker:
    x: float
    center_y: float
    size: float
    paragraph: int


@dataclass(frozen=True)
class TextBlock:
    name: str
    style: TextStyle
    x: float
    y: float
    flow: Flow
    align: Align
    max_width: float
    paragraphs: Tuple[Tuple[str, ...], ...]
    lines: Tuple[PlacedLine, ...]
    bullets: Tuple[BulletMarker, ...] = ()
    indent: float = 0.0

    @property
    def text_lines(self) -> List[str]:
        return [line.text for line in self.lines]

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def height(self) -> float:
        return len(self.lines) * self.style.line_height

    @property
    def text_width(self) -> float:
        """Width available to the text itself once the bullet indent is taken out."""
        return self.max_width - self.indent

    @property
    def top(self) -> float:
        """Highest ink edge; the anchor baseline for an empty block."""
        box = self.extent()
        return box.top if box else self.y

    @property
    def bottom(self) -> float:
        box = self.extent()
        return box.bottom if box else self.y

    def extent(self) -> Optional[Rect]:
        """Approximate ink box of the block, or None when it has no lines."""
        if not self.lines:
            return None
        left = min(line.x for line in self.lines)
        right = max(line.x + line.width for line in self.lines)
        if self.bullets:
            left = min(left, min(b.x for b in self.bullets))
        bottom = min(line.y for line in self.lines) - self.style.size * DESCENT_RATIO
        top = max(line.y for line in self.lines) + self.style.size * ASCENT_RATIO
        return Rect(left, bottom, right - left, top - bottom)


@dataclass(frozen=True)
class LayoutResult:
    kind: LayoutKind
    header: TextBlock
    title: TextBlock
    body: TextBlock
    bulleted: bool
    exact: bool

    @property
    def blocks(self) -> Tuple[TextBlock, TextBlock, TextBlock]:
        return (self.header, self.title, self.body)

    @property
    def body_style(self) -> TextStyle:
        return self.body.style

    def line_breaks(self) -> Dict[str, List[List[str]]]:
        """Title and body lines grouped by paragraph."""
        return {
            "title": [list(p) for p in self.title.paragraphs],
            "body": [list(p) for p in self.body.paragraphs],
        }


def _wrap_text(text: str, style: TextStyle, max_width: float, metrics: FontMetrics) -> Tuple[Tuple[str, ...], ...]:
    width = metrics.measurer(style.role, style.size)
    wrapped = (wrap(p, max_width, width, style.letter_spacing) for p in split_paragraphs(text))
    return tuple(tuple(lines) for lines in wrapped if lines)


def _text_width(max_width: float, bulleted: bool) -> float:
    return max_width - BULLET_INDENT if bulleted else max_width


def _place(
    name: str,
    style: TextStyle,
    paragraphs: Tuple[Tuple[str, ...], ...],
    metrics: FontMetrics,
    *,
    x: float,
    y: float,
    flow: Flow,
    align: Align = Align.LEFT,
    max_width: float,
    bulleted: bool = False,
) -> TextBlock:
    """Position wrapped paragraphs.

    ``y`` is the first baseline for a downward flow and the last baseline for
    an upward one, so an upward block keeps its bottom edge fixed as it grows.
    """
    width_of = metrics.measurer(style.role, style.size)
    indent = BULLET_INDENT if bulleted else 0
    flat = [(index, text) for index, lines in enumerate(paragraphs) for text in lines]
    count = len(flat)

    placed: List[PlacedLine] = []
    for i, (paragraph, text) in enumerate(flat):
        if flow == Flow.DOWN:
            baseline = y - i * style.line_height
        else:
            baseline = y + (count - 1 - i) * style.line_height
        width = measure(text, width_of, style.letter_spacing)
        if align == Align.CENTER:
            line_x = (PAGE_WIDTH - width) / 2
        else:
            line_x = x + indent
        placed.append(PlacedLine(text=text, x=line_x, y=baseline, width=width, paragraph=paragraph))

    bullets: List[BulletMarker] = []
    if bulleted:
        for index in range(len(paragraphs)):
            group = [line for line in placed if line.paragraph == index]
            if not group:
                continue
            # centre of the paragraph's line block, not of its first line only
            center = (group[0].y + group[-1].y) / 2 + style.size * LINE_CENTER_RATIO
            bullets.append(BulletMarker(x=group[0].x - indent, center_y=center, size=BULLET_SIZE, paragraph=index))

    return TextBlock(
        name=name,
        style=style,
        x=x,
        y=y,
        flow=flow,
        align=align,
        max_width=max_width,
        paragraphs=paragraphs,
        lines=tuple(placed),
        bullets=tuple(bullets),
        indent=indent,
    )


def _header_block(content: SlideContent, metrics: FontMetrics) -> TextBlock:
    text = " ".join((content.header or "").split("\n")).strip()
    paragraphs = ((text,),) if text else ()
    return _place(
        "header",
        HEADER_STYLE,
        paragraphs,
        metrics,
        x=snap_to_grid(PAGE_MARGIN),
        y=snap_to_grid(PAGE_HEIGHT - PAGE_MARGIN),
        flow=Flow.DOWN,
        max_width=PAGE_WIDTH - 2 * PAGE_MARGIN,
    )


Strategy = Callable[[SlideContent, FontMetrics, bool], Tuple[TextBlock, TextBlock]]


def _title_default(content: SlideContent, metrics: FontMetrics, bulleted: bool) -> Tuple[TextBlock, TextBlock]:
    title = _place(
        "title",
        TITLE_STYLE,
        _wrap_text(content.title, TITLE_STYLE, WIDE_MAX_WIDTH, metrics),
        metrics,
        x=snap_to_grid(PAGE_MARGIN) - TITLE_NUDGE,
        y=snap_to_grid(PAGE_HEIGHT - TITLE_TOP_OFFSET),
        flow=Flow.DOWN,
        max_width=WIDE_MAX_WIDTH,
    )
    body = _place(
        "body",
        BODY_STYLE,
        _wrap_text(content.body_text, BODY_STYLE, _text_width(WIDE_MAX_WIDTH, bulleted), metrics),
        metrics,
        x=snap_to_grid(PAGE_MARGIN),
        y=snap_to_grid(PAGE_MARGIN),
        flow=Flow.UP,
        max_width=WIDE_MAX_WIDTH,
        bulleted=bulleted,
    )
    return title, body


def _quadrant_strategy(title_quadrant: int, body_quadrant: int, body_style: TextStyle) -> Strategy:
    def strategy(content: SlideContent, metrics: FontMetrics, bulleted: bool) -> Tuple[TextBlock, TextBlock]:
        title_area = quadrant_bounds(title_quadrant)
        body_area = quadrant_bounds(body_quadrant)
        title = _place(
            "title",
            TITLE_STYLE,
            _wrap_text(content.title, TITLE_STYLE, QUADRANT_MAX_WIDTH, metrics),
            metrics,
            x=snap_to_grid(PAGE_MARGIN) - TITLE_NUDGE,
            y=title_area.bottom,
            flow=Flow.UP,
            max_width=QUADRANT_MAX_WIDTH,
        )
        body = _place(
            "body",
            body_style,
            _wrap_text(content.body_text, body_style, _text_width(QUADRANT_MAX_WIDTH, bulleted), metrics),
            metrics,
            x=body_area.left + QUADRANT_PADDING,
            y=body_area.bottom,
            flow=Flow.UP,
            max_width=QUADRANT_MAX_WIDTH,
            bulleted=bulleted,
        )
        return title, body

    return strategy


def _centered(content: SlideContent, metrics: FontMetrics, bulleted: bool) -> Tuple[TextBlock, TextBlock]:
    title_paragraphs = _wrap_text(content.title, TITLE_STYLE, WIDE_MAX_WIDTH, metrics)
    body_paragraphs = _wrap_text(content.body_text, BODY_STYLE, _text_width(WIDE_MAX_WIDTH, bulleted), metrics)

    title_height = sum(len(p) for p in title_paragraphs) * TITLE_STYLE.line_height
    body_height = sum(len(p) for p in body_paragraphs) * BODY_STYLE.line_height
    total_height = title_height + CENTERED_GAP + body_height

    # title and body are centred as one unit around the page midline
    title_bottom = PAGE_CENTER_Y + total_height / 2 - title_height
    body_top = title_bottom - CENTERED_GAP

    title = _place(
        "title",
        TITLE_STYLE,
        title_paragraphs,
        metrics,
        x=PAGE_WIDTH / 2,
        y=title_bottom,
        flow=Flow.UP,
        align=Align.CENTER,
        max_width=WIDE_MAX_WIDTH,
    )
    body = _place(
        "body",
        BODY_STYLE,
        body_paragraphs,
        metrics,
        x=PAGE_WIDTH / 2,
        y=body_top,
        flow=Flow.DOWN,
        align=Align.CENTER,
        max_width=WIDE_MAX_WIDTH,
        bulleted=bulleted,
    )
    return title, body


_STRATEGIES: Dict[LayoutKind, Strategy] = {
    LayoutKind.TITLE_DEFAULT: _title_default,
    LayoutKind.CENTERED: _centered,
    LayoutKind.QUADRANT_BOTTOM: _quadrant_strategy(3, 4, BODY_STYLE),
    LayoutKind.QUADRANT_TOP: _quadrant_strategy(1, 2, BODY_STYLE),
    LayoutKind.QUADRANT_LARGE_BULLETED: _quadrant_strategy(3, 4, BODY_LARGE_STYLE),
}

_ALWAYS_BULLETED = {LayoutKind.QUADRANT_LARGE_BULLETED}


def resolve_layout(content: SlideContent, metrics: FontMetrics) -> LayoutResult:
    """Resolve ``content`` into positioned header, title and body blocks.

    Total over its input: unknown layouts resolve as TITLE_DEFAULT and empty
    fields produce blocks with no lines.
    """
    kind = LayoutKind.parse(content.layout)
    bulleted = bool(content.use_bullets) or kind in _ALWAYS_BULLETED
    title, body = _STRATEGIES[kind](content, metrics, bulleted)
    return LayoutResult(
        kind=kind,
        header=_header_block(content, metrics),
        title=title,
        body=body,
        bulleted=bulleted,
        exact=metrics.exact,
    )


def resolve_deck(contents: Sequence[SlideContent], metrics: FontMetrics) -> List[LayoutResult]:
    return [resolve_layout(content, metrics) for content in contents]
