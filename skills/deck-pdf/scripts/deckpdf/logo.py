"""Slide logo: one image pinned to the bottom-right corner of every page.

SVG files are read with svglib so the PDF keeps them as vector drawings;
PNG and JPEG files go through Pillow.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError
from reportlab.graphics.shapes import Drawing
from svglib.svglib import svg2rlg

from .errors import LogoResourceError
from .geometry import PAGE_WIDTH, Rect

logger = logging.getLogger(__name__)

LOGO_HEIGHT = 40
LOGO_INSET = 40


@dataclass(frozen=True)
class Logo:
    path: Path
    data: bytes
    mime: str
    aspect: float  # width / height

    @property
    def is_svg(self) -> bool:
        return self.mime == "image/svg+xml"

    def rect(self) -> Rect:
        width = LOGO_HEIGHT * self.aspect
        return Rect(PAGE_WIDTH - LOGO_INSET - width, LOGO_INSET, width, LOGO_HEIGHT)

    def data_url(self) -> str:
        return f"data:{self.mime};base64,{base64.b64encode(self.data).decode('ascii')}"

    def drawing(self) -> Drawing:
        """The SVG as a ReportLab drawing scaled to the logo box."""
        drawing = _read_svg(self.path)
        scale = LOGO_HEIGHT / drawing.height
        drawing.width = drawing.width * scale
        drawing.height = drawing.height * scale
        drawing.scale(scale, scale)
        return drawing

    def raster(self) -> Image.Image:
        with Image.open(BytesIO(self.data)) as im:
            return im.convert("RGBA")


def _read_svg(path: Path) -> Drawing:
    try:
        drawing = svg2rlg(str(path))
    except (OSError, ValueError, SyntaxError) as exc:
        raise LogoResourceError(path, str(exc)) from exc
    if drawing is None or not drawing.width or not drawing.height:
        raise LogoResourceError(path, "SVG has no drawable size")
    return drawing


def load_logo(path: Optional[Path]) -> Optional[Logo]:
    """Read the logo once, before rendering. ``None`` means no logo."""
    if path is None:
        return None
    path = Path(path)
    if not path.is_file():
        raise LogoResourceError(path, "file not found")
    data = path.read_bytes()

    if path.suffix.lower() == ".svg":
        drawing = _read_svg(path)
        logo = Logo(path=path, data=data, mime="image/svg+xml", aspect=drawing.width / drawing.height)
    else:
        try:
            with Image.open(BytesIO(data)) as im:
                width, height = im.size
                mime = Image.MIME.get(im.format or "", "image/png")
        except (UnidentifiedImageError, OSError) as exc:
            raise LogoResourceError(path, "not a readable image") from exc
        logo = Logo(path=path, data=data, mime=mime, aspect=width / height)

    logger.debug("Loaded logo %s (%s, aspect %.3f)", path, logo.mime, logo.aspect)
    return logo
