"""Character measurement strategies.

Two strategies sit behind :class:`FontMetrics`:

* :class:`ExactMetrics` reads real advance widths from TrueType fonts that
  have been loaded and registered with ReportLab. This is the only strategy
  allowed on an export path.
* :class:`ApproximateMetrics` uses a constant average width per font role.
  It is cheap and needs no font files, which makes it suitable for thumbnails
  and nothing else.

Loading fonts is a separate, explicit step (:func:`load_fonts`) so callers
finish all file I/O before any layout work starts.
"""

from __future__ import annotations

import logging
import re
import zlib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from .errors import FontResourceError

logger = logging.getLogger(__name__)

CharWidthFn = Callable[[str], float]


class FontRole(str, Enum):
    MONO = "mono"
    REGULAR = "regular"
    BOLD = "bold"


DEFAULT_FONT_FILES = {
    FontRole.MONO: "MartianMono-Regular.ttf",
    FontRole.REGULAR: "TTNorms-Regular.ttf",
    FontRole.BOLD: "TTNorms-Bold.ttf",
}


class FontMetrics:
    """Interface shared by both measurement strategies."""

    exact = False

    def char_width(self, char: str, role: FontRole, size: float) -> float:
        raise NotImplementedError

    def measurer(self, role: FontRole, size: float) -> CharWidthFn:
        """Bind role and size, returning the per-character width function the wrapper expects."""

        def width(char: str) -> float:
            return self.char_width(char, role, size)

        return width


class ApproximateMetrics(FontMetrics):
    """Constant-width estimate, scaled linearly from a reference size per role."""

    # role -> (reference font size, average char width at that size)
    REFERENCE_WIDTHS: Dict[FontRole, Tuple[float, float]] = {
        FontRole.BOLD: (125.0, 70.0),
        FontRole.REGULAR: (22.0, 13.0),
        FontRole.MONO: (16.0, 9.6),
    }

    def __init__(self, reference_widths: Optional[Dict[FontRole, Tuple[float, float]]] = None):
        self.reference_widths = dict(self.REFERENCE_WIDTHS)
        if reference_widths:
            self.reference_widths.update(reference_widths)

    def char_width(self, char: str, role: FontRole, size: float) -> float:
        ref_size, ref_width = self.reference_widths[role]
        return ref_width * size / ref_size


@dataclass(frozen=True)
class FontSet:
    """Locations of the three TrueType files plus the CSS family names they represent."""

    mono: Optional[Path]
    regular: Optional[Path]
    bold: Optional[Path]
    mono_family: str = "Martian Mono"
    text_family: str = "TT Norms"

    @classmethod
    def from_dir(cls, fonts_dir: Path, **overrides: Optional[Path]) -> "FontSet":
        fonts_dir = Path(fonts_dir)
        paths = {role.value: fonts_dir / name for role, name in DEFAULT_FONT_FILES.items()}
        for key, value in overrides.items():
            if value is not None:
                paths[key] = Path(value)
        return cls(mono=paths["mono"], regular=paths["regular"], bold=paths["bold"])

    def path_for(self, role: FontRole) -> Optional[Path]:
        return getattr(self, role.value)

    def family_for(self, role: FontRole) -> str:
        return self.mono_family if role == FontRole.MONO else self.text_family


@dataclass(frozen=True)
class LoadedFonts:
    font_set: FontSet
    names: Dict[FontRole, str]

    def name_for(self, role: FontRole) -> str:
        return self.names[role]


def _registered_name(role: FontRole, path: Path) -> str:
    stem = re.sub(r"[^A-Za-z0-9]+", "", path.stem) or "Font"
    digest = zlib.crc32(str(path.resolve()).encode("utf-8")) & 0xFFFF
    return f"DeckPdf-{role.value}-{stem}-{digest:04x}"


def load_fonts(font_set: FontSet) -> LoadedFonts:
    """Read and register every font in ``font_set`` with ReportLab.

    Raises :class:`FontResourceError` on the first missing or unreadable file.
    There is no fallback to built-in fonts or approximate widths.
    """
    names: Dict[FontRole, str] = {}
    for role in FontRole:
        path = font_set.path_for(role)
        if path is None:
            raise FontResourceError(role.value, None, "no font file configured")
        path = Path(path)
        if not path.is_file():
            raise FontResourceError(role.value, path, "file not found")

        name = _registered_name(role, path)
        if name not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(name, str(path)))
            except (TTFError, OSError, ValueError) as exc:
                raise FontResourceError(role.value, path, str(exc)) from exc
            logger.debug("Registered %s font %s as %s", role.value, path, name)
        names[role] = name
    return LoadedFonts(font_set=font_set, names=names)


class ExactMetrics(FontMetrics):
    """Real glyph advance widths from fonts registered by :func:`load_fonts`."""

    exact = True

    def __init__(self, fonts: LoadedFonts):
        self.fonts = fonts

    def char_width(self, char: str, role: FontRole, size: float) -> float:
        return pdfmetrics.stringWidth(char, self.fonts.name_for(role), size)
