"""Public API helpers for programmatic deck export."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .layout import resolve_deck
from .legacy_adapter import adapt_legacy_deck
from .logo import load_logo
from .metrics import ExactMetrics, FontSet, load_fonts
from .model import SlideContent
from .qa import check_layout, split_overflowing_slides
from .render_html import render_deck_html
from .render_pdf import PdfDeckRenderer
from .render_pptx import export_pptx
from .render_thumbnail import write_thumbnails
from .validation import validate_config, validate_config_file

# keys only the browser editor writes into a saved deck
_EDITOR_KEYS = ("id", "name", "state")


@dataclass
class Deck:
    title: str = ""
    slides: List[SlideContent] = field(default_factory=list)
    show_grid: bool = False
    logo: Optional[str] = None

    def to_config(self) -> Dict[str, Any]:
        deck: Dict[str, Any] = {
            "title": self.title,
            "show_grid": self.show_grid,
            "slides": [slide.to_dict() for slide in self.slides],
        }
        if self.logo:
            deck["logo"] = self.logo
        return {"deck": deck}


def _is_editor_save(config: Any) -> bool:
    return isinstance(config, dict) and "deck" not in config and any(key in config for key in _EDITOR_KEYS)


def deck_from_config(config: Dict[str, Any]) -> Deck:
    """Build a Deck from a config dict (deck schema or a deck saved by the editor)."""
    if _is_editor_save(config):
        config = adapt_legacy_deck(config)
    validated, wrapped = validate_config(config)
    deck = validated["deck"] if wrapped else validated
    return Deck(
        title=str(deck.get("title") or ""),
        slides=[SlideContent.from_dict(slide) for slide in deck["slides"]],
        show_grid=bool(deck.get("show_grid", False)),
        logo=deck.get("logo") or None,
    )


def load_deck(config_path: Path) -> Deck:
    """Load a deck file; a relative ``logo`` path is taken from the file's folder."""
    config_path = Path(config_path)
    config, _ = validate_config_file(config_path)
    deck = deck_from_config(config)
    if deck.logo and not Path(deck.logo).is_absolute():
        deck.logo = str((config_path.parent / deck.logo).resolve())
    return deck


def export_deck(
    deck: Deck,
    *,
    font_set: FontSet,
    output_path: Path,
    html_path: Optional[Path] = None,
    pptx_path: Optional[Path] = None,
    thumbnails_dir: Optional[Path] = None,
    thumbnails_width: int = 200,
    thumbnails_gallery: bool = False,
    show_grid: Optional[bool] = None,
    logo_path: Optional[Path] = None,
    qa: bool = False,
    qa_config_out: Optional[Path] = None,
) -> Path:
    """Export a deck to PDF and, optionally, HTML, PPTX and thumbnails.

    Fonts and the logo are loaded before anything is laid out; a missing font
    stops the whole export with FontResourceError. Every slide is resolved once
    and the same layouts feed the PDF, HTML and PPTX outputs.
    """
    fonts = load_fonts(font_set)
    metrics = ExactMetrics(fonts)
    logo_source = logo_path or deck.logo
    logo = load_logo(Path(logo_source)) if logo_source else None

    slides = list(deck.slides)
    if qa:
        slides, changes = split_overflowing_slides(slides, metrics)
        if not changes:
            print("✅ QA: no layout fixes needed")
        else:
            print(f"🛠️  QA: applied {len(changes)} fix(es)")
            for change in changes[:12]:
                print(f"  - {change}")
            if qa_config_out:
                fixed = Deck(title=deck.title, slides=slides, show_grid=deck.show_grid, logo=deck.logo)
                write_config(fixed.to_config(), qa_config_out)
                print(f"📝 QA config written to {qa_config_out}")

    layouts = resolve_deck(slides, metrics)
    if qa:
        for index, layout in enumerate(layouts, start=1):
            for issue in check_layout(layout):
                print(f"⚠️  Slide {index}: {issue}")

    renderer = PdfDeckRenderer(fonts, title=deck.title or None, logo=logo)
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(renderer.render_layouts(layouts))
    print(f"✅ PDF saved to {output}")

    grid = deck.show_grid if show_grid is None else show_grid
    if html_path:
        html_out = Path(html_path)
        html_out.parent.mkdir(parents=True, exist_ok=True)
        html_out.write_text(
            render_deck_html(layouts, title=deck.title or "Slides", show_grid=grid, fonts=font_set, logo=logo),
            encoding="utf-8",
        )
        print(f"✅ HTML saved to {html_out}")

    if pptx_path:
        saved = export_pptx(layouts, Path(pptx_path), fonts=font_set, logo=logo)
        print(f"✅ PPTX saved to {saved}")

    if thumbnails_dir:
        written = write_thumbnails(
            slides, Path(thumbnails_dir), width=thumbnails_width, gallery=thumbnails_gallery, logo=logo
        )
        print(f"✅ {len(written)} thumbnail(s) written to {thumbnails_dir}")

    return output


def write_config(config: Dict[str, Any], path: Path) -> Path:
    """Write a JSON config to disk and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
