"""PowerPoint export adapter on python-pptx.

One page unit maps to one pixel at 96 dpi, so the 1920x1080 page becomes a
20 x 11.25 inch slide. Every resolved line gets its own non-wrapping text box,
which keeps PowerPoint from re-flowing text the resolver already broke.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE
from pptx.util import Emu, Pt

from .geometry import PAGE_HEIGHT, PAGE_WIDTH
from .layout import ASCENT_RATIO, LayoutResult, TextBlock
from .logo import Logo
from .metrics import FontRole, FontSet

logger = logging.getLogger(__name__)

EMU_PER_UNIT = 9525
POINTS_PER_UNIT = 0.75
BLACK = RGBColor(0, 0, 0)


def _emu(value: float) -> Emu:
    return Emu(int(round(value * EMU_PER_UNIT)))


class PptxDeckWriter:
    """Write resolved slides into a blank presentation."""

    def __init__(self, fonts: Optional[FontSet] = None, logo: Optional[Logo] = None):
        self.fonts = fonts
        self.logo = logo
        if logo and logo.is_svg:
            logger.warning("PPTX output cannot embed SVG logo %s; slides are written without it", logo.path)
        self.prs = Presentation()
        self.prs.slide_width = _emu(PAGE_WIDTH)
        self.prs.slide_height = _emu(PAGE_HEIGHT)

    def _get_blank_layout(self):
        try:
            return self.prs.slide_layouts[6]
        except IndexError:
            return self.prs.slide_layouts[-1]

    def _family(self, role: FontRole) -> str:
        if self.fonts:
            return self.fonts.family_for(role)
        return "Martian Mono" if role == FontRole.MONO else "TT Norms"

    def add_slide(self, layout: LayoutResult):
        slide = self.prs.slides.add_slide(self._get_blank_layout())
        for block in layout.blocks:
            self._add_block(slide, block)
        if self.logo and not self.logo.is_svg:
            self._add_logo(slide, self.logo)
        return slide

    def _add_logo(self, slide, logo: Logo) -> None:
        box = logo.rect()
        picture = slide.shapes.add_picture(
            BytesIO(logo.data),
            _emu(box.x),
            _emu(PAGE_HEIGHT - box.top),
            _emu(box.width),
            _emu(box.height),
        )
        picture.name = "logo"

    def _add_block(self, slide, block: TextBlock) -> None:
        style = block.style
        spacing = str(int(round(style.letter_spacing * POINTS_PER_UNIT * 100)))
        for line in block.lines:
            top = PAGE_HEIGHT - (line.y + style.size * ASCENT_RATIO)
            box = slide.shapes.add_textbox(
                _emu(line.x),
                _emu(top),
                _emu(line.width + style.size),
                _emu(style.line_height),
            )
            box.name = f"{block.name}-{line.paragraph}"
            frame = box.text_frame
            frame.word_wrap = False
            frame.auto_size = MSO_AUTO_SIZE.NONE
            frame.vertical_anchor = MSO_ANCHOR.TOP
            frame.margin_left = frame.margin_right = frame.margin_top = frame.margin_bottom = 0

            run = frame.paragraphs[0].add_run()
            run.text = line.text
            run.font.name = self._family(style.role)
            run.font.size = Pt(style.size * POINTS_PER_UNIT)
            run.font.bold = style.role == FontRole.BOLD
            run.font.color.rgb = BLACK
            # python-pptx has no letter-spacing API; spc is in hundredths of a point
            run._r.get_or_add_rPr().set("spc", spacing)

        for bullet in block.bullets:
            dot = slide.shapes.add_shape(
                MSO_AUTO_SHAPE_TYPE.OVAL,
                _emu(bullet.x),
                _emu(PAGE_HEIGHT - bullet.center_y - bullet.size / 2),
                _emu(bullet.size),
                _emu(bullet.size),
            )
            dot.name = f"{block.name}-bullet-{bullet.paragraph}"
            dot.fill.solid()
            dot.fill.fore_color.rgb = BLACK
            dot.line.fill.background()

    def save(self, output_path: Path) -> Path:
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        self.prs.save(str(output))
        return output


def export_pptx(
    layouts: Sequence[LayoutResult],
    output_path: Path,
    *,
    fonts: Optional[FontSet] = None,
    logo: Optional[Logo] = None,
) -> Path:
    writer = PptxDeckWriter(fonts, logo=logo)
    for layout in layouts:
        writer.add_slide(layout)
    return writer.save(output_path)
