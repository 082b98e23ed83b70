"""Thumbnail renderer on Pillow.

Thumbnails are display-only, so they are laid out with
:class:`~deckpdf.metrics.ApproximateMetrics` and drawn as greeked bars: one
bar per resolved line, one dot per bullet. They may break lines differently
from an export and are never written into one.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, ImageDraw

from .geometry import PAGE_HEIGHT, PAGE_WIDTH
from .layout import ASCENT_RATIO, LayoutResult, resolve_layout
from .logo import Logo
from .metrics import ApproximateMetrics, FontRole
from .model import SlideContent

DEFAULT_WIDTH = 200

_BAR_COLORS = {
    FontRole.MONO: (90, 90, 90),
    FontRole.BOLD: (0, 0, 0),
    FontRole.REGULAR: (110, 110, 110),
}
_LOGO_COLOR = (60, 60, 60)


def thumbnail_layout(content: SlideContent) -> LayoutResult:
    return resolve_layout(content, ApproximateMetrics())


def _paste_logo(img: Image.Image, draw: ImageDraw.ImageDraw, logo: Logo, scale: float) -> None:
    box = logo.rect()
    left = round(box.x * scale)
    top = round((PAGE_HEIGHT - box.top) * scale)
    width = max(1, round(box.width * scale))
    height = max(1, round(box.height * scale))
    if logo.is_svg:
        # vector logos are greeked like text
        draw.rectangle([left, top, left + width - 1, top + height - 1], fill=_LOGO_COLOR)
        return
    mark = logo.raster().resize((width, height), Image.Resampling.LANCZOS)
    img.paste(mark, (left, top), mark)


def draw_thumbnail(layout: LayoutResult, width: int = DEFAULT_WIDTH, logo: Optional[Logo] = None) -> Image.Image:
    """Draw an already resolved layout at ``width`` pixels wide."""
    scale = width / PAGE_WIDTH
    height = max(1, round(PAGE_HEIGHT * scale))
    img = Image.new("RGB", (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(img)

    for block in layout.blocks:
        style = block.style
        bar_height = max(1.0, style.size * ASCENT_RATIO * 0.75 * scale)
        fill = _BAR_COLORS[style.role]
        for line in block.lines:
            x0 = line.x * scale
            y1 = (PAGE_HEIGHT - line.y) * scale
            x1 = x0 + max(1.0, line.width * scale)
            draw.rectangle([x0, y1 - bar_height, x1, y1], fill=fill)
        for bullet in block.bullets:
            r = max(1.0, bullet.size * scale / 2)
            cx = (bullet.x + bullet.size / 2) * scale
            cy = (PAGE_HEIGHT - bullet.center_y) * scale
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=(0, 0, 0))

    if logo:
        _paste_logo(img, draw, logo, scale)
    return img


def render_thumbnail(content: SlideContent, width: int = DEFAULT_WIDTH, logo: Optional[Logo] = None) -> Image.Image:
    return draw_thumbnail(thumbnail_layout(content), width=width, logo=logo)


def write_gallery(outdir: Path, images: Sequence[Path], contents: Sequence[SlideContent]) -> Path:
    """Contact sheet of the thumbnails, labelled with slide number and title."""
    cards = []
    for index, (image, content) in enumerate(zip(images, contents), start=1):
        label = html.escape(content.title.replace("\n", " ").strip() or "(untitled)")
        cards.append(
            f'<figure data-slide="{index}" data-layout="{content.layout.value}">'
            f'<img src="{image.name}" alt="" /><figcaption>{index}. {label}</figcaption></figure>'
        )
    gallery_path = outdir / "index.html"
    gallery_path.write_text(
        "\n".join(
            [
                "<!doctype html>",
                '<meta charset="utf-8" />',
                "<title>Deck overview</title>",
                "<style>",
                "  body { margin: 32px; font-family: sans-serif; background: #f4f4f4; }",
                "  main { display: flex; flex-wrap: wrap; gap: 16px; }",
                "  figure { margin: 0; background: #fff; box-shadow: 0 1px 3px rgba(0, 0, 0, 0.15); }",
                "  figure img { display: block; }",
                "  figcaption { padding: 6px 8px; font-size: 12px; }",
                "</style>",
                "<main>",
                *cards,
                "</main>",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return gallery_path


def write_thumbnails(
    contents: Sequence[SlideContent],
    outdir: Path,
    *,
    width: int = DEFAULT_WIDTH,
    gallery: bool = False,
    logo: Optional[Logo] = None,
) -> List[Path]:
    """Write ``Slide<N>.png`` for every slide, replacing thumbnails from earlier runs only."""
    outdir.mkdir(parents=True, exist_ok=True)
    for existing in outdir.glob("Slide*.png"):
        if existing.is_file():
            existing.unlink()
    gallery_file = outdir / "index.html"
    if gallery_file.exists():
        gallery_file.unlink()

    written: List[Path] = []
    for index, content in enumerate(contents, start=1):
        path = outdir / f"Slide{index}.png"
        render_thumbnail(content, width=width, logo=logo).save(path, format="PNG")
        written.append(path)

    if gallery and written:
        write_gallery(outdir, written, contents)
    return written
