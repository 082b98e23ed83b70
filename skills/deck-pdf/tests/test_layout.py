from __future__ import annotations

import sys
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckpdf import LayoutKind, SlideContent, measure, resolve_layout  # noqa: E402
from deckpdf.layout import BODY_LARGE_STYLE, BODY_STYLE  # noqa: E402

BODY = "Editor with grid snapping\nPDF export with real font metrics\nThumbnails in the slide list"


@pytest.mark.parametrize("kind", list(LayoutKind))
def test_header_is_anchored_top_left(kind: LayoutKind, approx_metrics) -> None:
    result = resolve_layout(SlideContent(header="Q3 REVIEW", title="T", layout=kind), approx_metrics)
    line = result.header.lines[0]
    assert (line.x, line.y) == (80, 1000)
    assert line.text == "Q3 REVIEW"


def test_title_default_positions(approx_metrics) -> None:
    content = SlideContent(title="Roadmap Overview", body_text="one\ntwo\nthree")
    result = resolve_layout(content, approx_metrics)

    assert result.kind == LayoutKind.TITLE_DEFAULT
    assert result.title.text_lines == ["Roadmap", "Overview"]
    assert [(line.x, line.y) for line in result.title.lines] == [(72, 760), (72, 635)]

    # body grows upward from a fixed last baseline
    assert [line.y for line in result.body.lines] == [80 + 2 * 27, 80 + 27, 80]
    assert all(line.x == 80 for line in result.body.lines)


def test_quadrant_bottom_anchors(approx_metrics) -> None:
    content = SlideContent(title="Roadmap Overview", body_text=BODY, layout=LayoutKind.QUADRANT_BOTTOM)
    result = resolve_layout(content, approx_metrics)

    assert result.title.lines[-1].y == 80
    assert result.title.lines[0].y == 80 + 125
    assert all(line.x == 72 for line in result.title.lines)
    assert result.body.lines[-1].y == 80
    assert all(line.x == 1000 for line in result.body.lines)
    assert result.body.max_width == 800


def test_quadrant_top_anchors(approx_metrics) -> None:
    content = SlideContent(title="Status", body_text=BODY, layout=LayoutKind.QUADRANT_TOP)
    result = resolve_layout(content, approx_metrics)

    assert result.title.lines[-1].y == 540
    assert result.body.lines[-1].y == 540
    assert all(line.x == 1000 for line in result.body.lines)


def test_large_bulleted_always_has_bullets(approx_metrics) -> None:
    content = SlideContent(title="Priorities", body_text=BODY, layout=LayoutKind.QUADRANT_LARGE_BULLETED)
    result = resolve_layout(content, approx_metrics)

    assert result.bulleted is True
    assert result.body.style == BODY_LARGE_STYLE
    assert len(result.body.bullets) == 3
    assert all(bullet.x == 1000 for bullet in result.body.bullets)
    assert all(line.x == 1030 for line in result.body.lines)


def test_one_bullet_per_paragraph_centred_on_its_lines(approx_metrics) -> None:
    long_paragraph = " ".join(["alignment"] * 40)
    content = SlideContent(title="T", body_text=f"short\n{long_paragraph}\nlast", use_bullets=True)
    result = resolve_layout(content, approx_metrics)

    assert len(result.body.paragraphs[1]) > 1
    assert len(result.body.bullets) == 3
    for bullet in result.body.bullets:
        group = [line for line in result.body.lines if line.paragraph == bullet.paragraph]
        expected = (group[0].y + group[-1].y) / 2 + BODY_STYLE.size * 0.35
        assert bullet.center_y == pytest.approx(expected)
        assert bullet.size == 14


def test_centered_block_is_centred_on_page(approx_metrics) -> None:
    content = SlideContent(title="Hello", body_text="World", layout=LayoutKind.CENTERED)
    result = resolve_layout(content, approx_metrics)

    # total = 125 + 80 + 27; title_bottom = 540 + 232 / 2 - 125
    assert result.title.lines[0].y == 531
    assert result.body.lines[0].y == 531 - 80
    for line in result.title.lines + result.body.lines:
        assert line.x == pytest.approx((1920 - line.width) / 2)


def test_quadrant_lines_fit_their_width(approx_metrics) -> None:
    text = " ".join(["measured"] * 80)
    content = SlideContent(title="Fit", body_text=text, layout=LayoutKind.QUADRANT_BOTTOM)
    result = resolve_layout(content, approx_metrics)
    width = approx_metrics.measurer(BODY_STYLE.role, BODY_STYLE.size)
    for line in result.body.lines:
        assert measure(line.text, width, BODY_STYLE.letter_spacing) <= 800


def test_unknown_and_legacy_layout_names() -> None:
    assert SlideContent.from_dict({"layout": "mystery"}).layout == LayoutKind.TITLE_DEFAULT
    assert SlideContent.from_dict({"layout": "quadrant-1-2-top"}).layout == LayoutKind.QUADRANT_TOP
    assert SlideContent.from_dict({"layout": "avdelare"}).layout == LayoutKind.TITLE_DEFAULT
    assert SlideContent.from_dict({}).layout == LayoutKind.TITLE_DEFAULT


def test_unknown_layout_resolves_like_default(approx_metrics) -> None:
    unknown = resolve_layout(SlideContent.from_dict({"layout": "mystery", "title": "X"}), approx_metrics)
    default = resolve_layout(SlideContent(title="X"), approx_metrics)
    assert unknown == default


def test_empty_content_produces_empty_blocks(approx_metrics) -> None:
    result = resolve_layout(SlideContent(), approx_metrics)
    assert all(block.is_empty for block in result.blocks)
    assert result.title.extent() is None
    assert result.line_breaks() == {"title": [], "body": []}


def test_resolution_is_deterministic(exact_metrics) -> None:
    content = SlideContent(title="Roadmap Overview", body_text=BODY, use_bullets=True)
    assert resolve_layout(content, exact_metrics) == resolve_layout(content, exact_metrics)
    assert resolve_layout(content, exact_metrics).exact is True


def test_bulleted_lines_end_inside_their_quadrant(approx_metrics) -> None:
    # 771.3 px at body-large: fits 800 but not 800 minus the bullet indent.
    content = SlideContent(
        title="Priorities", body_text="a" * 20 + " " + "b" * 24, layout=LayoutKind.QUADRANT_LARGE_BULLETED
    )
    result = resolve_layout(content, approx_metrics)

    assert result.body.text_width == 770
    assert result.body.text_lines == ["a" * 20, "b" * 24]
    for line in result.body.lines:
        assert line.x == 1030
        assert line.x + line.width <= 1000 + 800


def test_bulleted_default_body_wraps_inside_the_indent(approx_metrics) -> None:
    text = " ".join(["alignment"] * 60)
    result = resolve_layout(SlideContent(title="T", body_text=text, use_bullets=True), approx_metrics)
    assert result.body.text_width == result.body.max_width - 30
    for line in result.body.lines:
        assert line.x + line.width <= 80 + result.body.max_width


def test_unbulleted_body_keeps_full_width(approx_metrics) -> None:
    result = resolve_layout(SlideContent(title="T", body_text="x"), approx_metrics)
    assert result.body.indent == 0
    assert result.body.text_width == result.body.max_width


def test_block_top_and_bottom_follow_extent(approx_metrics) -> None:
    content = SlideContent(title="Roadmap", body_text=BODY, layout=LayoutKind.QUADRANT_BOTTOM)
    result = resolve_layout(content, approx_metrics)
    for block in result.blocks:
        extent = block.extent()
        assert block.top == extent.top
        assert block.bottom == extent.bottom
    assert result.body.top > result.body.bottom


def test_empty_block_top_and_bottom_are_its_anchor(approx_metrics) -> None:
    result = resolve_layout(SlideContent(), approx_metrics)
    assert result.title.top == result.title.y
    assert result.title.bottom == result.title.y
