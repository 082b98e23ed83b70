"""Exact PDF renderer built on the ReportLab canvas.

The canvas has no letter-spacing primitive that matches CSS, so every glyph is
drawn on its own and the cursor advanced by the measured width plus the
letter-spacing. That loop lives in :func:`draw_run` and nowhere else.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from reportlab.graphics import renderPDF
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdf_canvas

from .geometry import PAGE_HEIGHT, PAGE_WIDTH
from .layout import LayoutResult, TextBlock, resolve_layout
from .logo import Logo, load_logo
from .metrics import CharWidthFn, ExactMetrics, FontSet, LoadedFonts, load_fonts
from .model import SlideContent

logger = logging.getLogger(__name__)


def draw_run(
    canv: pdf_canvas.Canvas,
    text: str,
    x: float,
    y: float,
    *,
    font_name: str,
    size: float,
    letter_spacing: float,
    char_width: CharWidthFn,
) -> float:
    """Draw ``text`` glyph by glyph from ``(x, y)`` and return the cursor position after it."""
    canv.setFont(font_name, size)
    for char in text:
        canv.drawString(x, y, char)
        x += char_width(char) + letter_spacing
    return x


class PdfDeckRenderer:
    """Draw resolved slides onto 1920x1080 PDF pages with exact font metrics."""

    def __init__(self, fonts: LoadedFonts, *, title: Optional[str] = None, logo: Optional[Logo] = None):
        self.fonts = fonts
        self.metrics = ExactMetrics(fonts)
        self.title = title
        self.logo = logo
        self._logo_drawing = logo.drawing() if logo and logo.is_svg else None
        # per page: block name -> lines actually drawn
        self.drawn_pages: List[Dict[str, List[str]]] = []

    def layout(self, content: SlideContent) -> LayoutResult:
        return resolve_layout(content, self.metrics)

    def render(self, contents: Sequence[SlideContent]) -> bytes:
        return self.render_layouts([self.layout(content) for content in contents])

    def render_layouts(self, layouts: Sequence[LayoutResult]) -> bytes:
        """Draw layouts that were already resolved with this renderer's fonts."""
        if not layouts:
            raise ValueError("At least one slide is required to render a PDF")

        buffer = BytesIO()
        canv = pdf_canvas.Canvas(buffer, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
        if self.title:
            canv.setTitle(self.title)

        self.drawn_pages = []
        for index, result in enumerate(layouts, start=1):
            self.draw_page(canv, result)
            canv.showPage()
            logger.debug("Drew slide %d (%s)", index, result.kind.value)
        canv.save()
        return buffer.getvalue()

    def draw_page(self, canv: pdf_canvas.Canvas, result: LayoutResult) -> None:
        if not result.exact:
            raise ValueError("Refusing to draw a layout resolved with approximate metrics")
        record: Dict[str, List[str]] = {}
        for block in result.blocks:
            record[block.name] = self._draw_block(canv, block)
        if self.logo:
            self._draw_logo(canv)
        self.drawn_pages.append(record)

    def _draw_logo(self, canv: pdf_canvas.Canvas) -> None:
        box = self.logo.rect()
        if self._logo_drawing is not None:
            renderPDF.draw(self._logo_drawing, canv, box.x, box.y)
        else:
            canv.drawImage(
                ImageReader(BytesIO(self.logo.data)),
                box.x,
                box.y,
                width=box.width,
                height=box.height,
                mask="auto",
            )

    def _draw_block(self, canv: pdf_canvas.Canvas, block: TextBlock) -> List[str]:
        style = block.style
        font_name = self.fonts.name_for(style.role)
        width_of = self.metrics.measurer(style.role, style.size)

        canv.setFillColorRGB(0, 0, 0)
        drawn: List[str] = []
        for line in block.lines:
            draw_run(
                canv,
                line.text,
                line.x,
                line.y,
                font_name=font_name,
                size=style.size,
                letter_spacing=style.letter_spacing,
                char_width=width_of,
            )
            drawn.append(line.text)

        for bullet in block.bullets:
            radius = bullet.size / 2
            canv.circle(bullet.x + radius, bullet.center_y, radius, stroke=0, fill=1)
        return drawn


def export_pdf(
    contents: Sequence[SlideContent],
    font_set: FontSet,
    output_path: Path,
    *,
    title: Optional[str] = None,
    logo_path: Optional[Path] = None,
) -> Path:
    """Load fonts and the logo, then lay out and draw every slide into one PDF file."""
    fonts = load_fonts(font_set)
    renderer = PdfDeckRenderer(fonts, title=title, logo=load_logo(logo_path))
    data = renderer.render(contents)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    logger.info("Wrote %d page(s) to %s", len(contents), output)
    return output
