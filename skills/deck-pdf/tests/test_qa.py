from __future__ import annotations

import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckpdf import LayoutKind, SlideContent, check_layout, resolve_layout, split_overflowing_slides  # noqa: E402


def _points(count: int) -> str:
    return "\n".join(f"Point {i}" for i in range(1, count + 1))


def test_fitting_slide_has_no_issues(approx_metrics) -> None:
    layout = resolve_layout(SlideContent(header="Q3", title="Agenda", body_text=_points(5)), approx_metrics)
    assert check_layout(layout) == []


def test_tall_body_runs_into_title(approx_metrics) -> None:
    layout = resolve_layout(SlideContent(title="Agenda", body_text=_points(30)), approx_metrics)
    assert "title and body overlap" in check_layout(layout)


def test_quadrant_body_must_stay_in_its_quadrant(approx_metrics) -> None:
    content = SlideContent(title="Agenda", body_text=_points(20), layout=LayoutKind.QUADRANT_BOTTOM)
    assert "body grows out of quadrant 4" in check_layout(resolve_layout(content, approx_metrics))


def test_overlong_word_is_reported(approx_metrics) -> None:
    layout = resolve_layout(SlideContent(title="T", body_text="x" * 100), approx_metrics)
    issues = check_layout(layout)
    assert len(issues) == 1
    assert issues[0].startswith("body word 'xxx")


def test_split_overflowing_slide_by_paragraph(approx_metrics) -> None:
    slides = [SlideContent(title="Intro"), SlideContent(title="Agenda", body_text=_points(30))]
    fixed, changes = split_overflowing_slides(slides, approx_metrics)

    assert changes == ["Split slide 'Agenda' into 2 slides"]
    assert [s.title for s in fixed] == ["Intro", "Agenda", "Agenda (2/2)"]
    assert fixed[1].body_text == _points(15)
    assert all(check_layout(resolve_layout(s, approx_metrics)) == [] for s in fixed)


def test_unsplittable_slides_are_kept(approx_metrics) -> None:
    one_paragraph = " ".join(["overflowing"] * 400)
    slides = [
        SlideContent(title="Word", body_text="x" * 100),
        SlideContent(title="Wall", body_text=one_paragraph, layout=LayoutKind.QUADRANT_BOTTOM),
    ]
    fixed, changes = split_overflowing_slides(slides, approx_metrics)
    assert fixed == slides
    assert changes == []


def test_bulleted_word_is_measured_against_indented_width(approx_metrics) -> None:
    # 788 px: inside the 800 px quadrant column but past the bullet indent.
    content = SlideContent(title="T", body_text="a" * 46, layout=LayoutKind.QUADRANT_LARGE_BULLETED)
    issues = check_layout(resolve_layout(content, approx_metrics))
    assert any(issue.startswith("body word 'aaa") and "wider than 770 (788)" in issue for issue in issues)
