"""Layout QA: overflow checks and automatic splitting of overfull slides."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List, NamedTuple, Sequence, Tuple

from .geometry import PAGE_HEIGHT, quadrant_bounds
from .layout import LayoutResult, resolve_layout
from .metrics import FontMetrics
from .model import LayoutKind, SlideContent, split_paragraphs

logger = logging.getLogger(__name__)

# block name -> quadrant it must stay inside
_QUADRANTS = {
    LayoutKind.QUADRANT_BOTTOM: {"title": 3, "body": 4},
    LayoutKind.QUADRANT_LARGE_BULLETED: {"title": 3, "body": 4},
    LayoutKind.QUADRANT_TOP: {"title": 1, "body": 2},
}


class LayoutIssue(NamedTuple):
    block: str
    kind: str  # word | page | header | quadrant | overlap
    message: str


def find_issues(layout: LayoutResult) -> List[LayoutIssue]:
    issues: List[LayoutIssue] = []
    header_box = layout.header.extent()
    ceiling = header_box.bottom if header_box else PAGE_HEIGHT

    for block in (layout.title, layout.body):
        for line in block.lines:
            if line.width > block.text_width:
                issues.append(
                    LayoutIssue(
                        block.name,
                        "word",
                        f"{block.name} word '{line.text}' is wider than {block.text_width:g} ({line.width:.0f})",
                    )
                )
        box = block.extent()
        if box is None:
            continue
        if box.top > PAGE_HEIGHT or box.bottom < 0:
            issues.append(LayoutIssue(block.name, "page", f"{block.name} runs off the page"))
        elif box.top > ceiling:
            issues.append(LayoutIssue(block.name, "header", f"{block.name} runs into the header"))
        quadrant = _QUADRANTS.get(layout.kind, {}).get(block.name)
        if quadrant and box.top > quadrant_bounds(quadrant).top:
            issues.append(LayoutIssue(block.name, "quadrant", f"{block.name} grows out of quadrant {quadrant}"))

    title_box = layout.title.extent()
    body_box = layout.body.extent()
    if title_box and body_box and title_box.overlaps(body_box):
        issues.append(LayoutIssue("body", "overlap", "title and body overlap"))
    return issues


def check_layout(layout: LayoutResult) -> List[str]:
    """Human-readable overflow issues for one resolved slide (empty when it fits)."""
    return [issue.message for issue in find_issues(layout)]


def _body_overflows(layout: LayoutResult) -> bool:
    # an overlong single word cannot be fixed by moving paragraphs around
    return any(issue.block == "body" and issue.kind != "word" for issue in find_issues(layout))


def _split_body(content: SlideContent, paragraphs: List[str], parts: int) -> List[SlideContent]:
    size = math.ceil(len(paragraphs) / parts)
    chunks = [paragraphs[i : i + size] for i in range(0, len(paragraphs), size)]
    total = len(chunks)
    slides: List[SlideContent] = []
    for idx, chunk in enumerate(chunks, start=1):
        title = content.title
        if idx > 1 and title:
            title = f"{title} ({idx}/{total})"
        slides.append(replace(content, title=title, body_text="\n".join(chunk)))
    return slides


def split_overflowing_slides(
    contents: Sequence[SlideContent], metrics: FontMetrics
) -> Tuple[List[SlideContent], List[str]]:
    """Split slides whose body does not fit into continuation slides, by paragraph.

    Uses the fewest parts that make every continuation fit; a slide that cannot
    be fixed that way is kept unchanged.
    """
    result: List[SlideContent] = []
    changes: List[str] = []

    for content in contents:
        if not _body_overflows(resolve_layout(content, metrics)):
            result.append(content)
            continue

        paragraphs = split_paragraphs(content.body_text)
        replacement = None
        for parts in range(2, len(paragraphs) + 1):
            candidate = _split_body(content, paragraphs, parts)
            if not any(_body_overflows(resolve_layout(c, metrics)) for c in candidate):
                replacement = candidate
                break

        if replacement is None:
            logger.warning("Slide '%s' overflows and cannot be split by paragraph", content.title)
            result.append(content)
            continue

        changes.append(f"Split slide '{content.title}' into {len(replacement)} slides")
        result.extend(replacement)

    return result, changes
