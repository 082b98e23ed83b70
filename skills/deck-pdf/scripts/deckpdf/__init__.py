"""Layout engine and renderers for the deck PDF exporter skill."""

from .api import Deck, deck_from_config, export_deck, load_deck, write_config
from .cli import run_cli
from .errors import ConfigValidationError, FontResourceError, LogoResourceError
from .geometry import Rect, page_interior, quadrant_bounds, snap_to_grid
from .layout import LayoutResult, TextBlock, resolve_deck, resolve_layout
from .legacy_adapter import adapt_legacy_deck, normalize_legacy_layout
from .logo import Logo, load_logo
from .metrics import ApproximateMetrics, ExactMetrics, FontMetrics, FontRole, FontSet, LoadedFonts, load_fonts
from .model import LayoutKind, SlideContent, split_paragraphs
from .qa import check_layout, split_overflowing_slides
from .render_html import extract_line_breaks, render_deck_html, render_slide_html
from .render_pdf import PdfDeckRenderer, draw_run, export_pdf
from .render_pptx import PptxDeckWriter, export_pptx
from .render_thumbnail import render_thumbnail, write_thumbnails
from .validation import validate_config, validate_config_file
from .wrapping import measure, wrap, wrap_paragraphs

__all__ = [
    "ApproximateMetrics",
    "ConfigValidationError",
    "Deck",
    "ExactMetrics",
    "FontMetrics",
    "FontResourceError",
    "FontRole",
    "FontSet",
    "LayoutKind",
    "LayoutResult",
    "LoadedFonts",
    "Logo",
    "LogoResourceError",
    "PdfDeckRenderer",
    "PptxDeckWriter",
    "Rect",
    "SlideContent",
    "TextBlock",
    "adapt_legacy_deck",
    "check_layout",
    "deck_from_config",
    "draw_run",
    "export_deck",
    "export_pdf",
    "export_pptx",
    "extract_line_breaks",
    "load_deck",
    "load_fonts",
    "load_logo",
    "measure",
    "normalize_legacy_layout",
    "page_interior",
    "quadrant_bounds",
    "render_deck_html",
    "render_slide_html",
    "render_thumbnail",
    "resolve_deck",
    "resolve_layout",
    "run_cli",
    "snap_to_grid",
    "split_overflowing_slides",
    "split_paragraphs",
    "validate_config",
    "validate_config_file",
    "wrap",
    "wrap_paragraphs",
    "write_config",
    "write_thumbnails",
]
