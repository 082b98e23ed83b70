from __future__ import annotations

import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckpdf import LayoutKind, SlideContent, render_thumbnail, write_thumbnails  # noqa: E402
from deckpdf.render_thumbnail import thumbnail_layout  # noqa: E402


def test_thumbnail_size_follows_page_ratio() -> None:
    img = render_thumbnail(SlideContent(title="Hello"), width=200)
    assert img.size == (200, round(1080 * 200 / 1920))

    img = render_thumbnail(SlideContent(title="Hello"), width=480)
    assert img.size == (480, 270)


def test_thumbnail_draws_content() -> None:
    blank = render_thumbnail(SlideContent(), width=200)
    filled = render_thumbnail(
        SlideContent(header="Q3", title="Roadmap", body_text="one\ntwo", layout=LayoutKind.QUADRANT_LARGE_BULLETED),
        width=200,
    )
    assert blank.convert("L").getextrema() == (255, 255)
    assert filled.convert("L").getextrema()[0] < 255


def test_thumbnails_use_approximate_metrics() -> None:
    assert thumbnail_layout(SlideContent(title="Roadmap Overview")).exact is False


def test_write_thumbnails_replaces_previous_run(tmp_path: Path) -> None:
    stale = tmp_path / "Slide9.png"
    stale.write_bytes(b"old")
    keep = tmp_path / "notes.txt"
    keep.write_text("keep me", encoding="utf-8")

    written = write_thumbnails(
        [SlideContent(title="One"), SlideContent(title="Two")],
        tmp_path,
        width=160,
        gallery=True,
    )

    assert [p.name for p in written] == ["Slide1.png", "Slide2.png"]
    assert not stale.exists()
    assert keep.exists()
    gallery = (tmp_path / "index.html").read_text(encoding="utf-8")
    assert "Slide1.png" in gallery and "Slide2.png" in gallery


def test_gallery_labels_slides_with_their_titles(tmp_path: Path) -> None:
    write_thumbnails(
        [SlideContent(title="Road & map"), SlideContent(), SlideContent(title="Two\nlines", layout=LayoutKind.CENTERED)],
        tmp_path,
        width=160,
        gallery=True,
    )
    gallery = (tmp_path / "index.html").read_text(encoding="utf-8")
    assert "<figcaption>1. Road &amp; map</figcaption>" in gallery
    assert "<figcaption>2. (untitled)</figcaption>" in gallery
    assert '<figure data-slide="3" data-layout="centered">' in gallery
    assert "<figcaption>3. Two lines</figcaption>" in gallery
