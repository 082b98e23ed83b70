"""CLI orchestration for deck export."""

from __future__ import annotations

import argparse
import traceback
from pathlib import Path
from typing import Optional, Sequence

from .api import export_deck, load_deck
from .errors import ConfigValidationError, FontResourceError, LogoResourceError
from .metrics import FontSet

DEFAULT_FONTS_DIR = Path(__file__).resolve().parents[2] / "assets" / "fonts"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export 1920x1080 slide decks to PDF from JSON deck files")
    parser.add_argument("--config", required=True, help="Path to JSON deck file")
    parser.add_argument("--output", required=True, help="Output PDF file path")
    parser.add_argument("--html", default=None, help="Optional path for a self-contained HTML rendering")
    parser.add_argument("--pptx", default=None, help="Optional path for a PPTX rendering")
    parser.add_argument("--thumbnails-dir", default=None, help="Optional output directory for PNG thumbnails")
    parser.add_argument("--thumbnails-width", type=int, default=200, help="Thumbnail width in pixels (default: 200)")
    parser.add_argument("--thumbnails-gallery", action="store_true", help="Also write an index.html gallery")
    parser.add_argument(
        "--fonts-dir",
        default=None,
        help="Directory holding MartianMono-Regular.ttf, TTNorms-Regular.ttf and TTNorms-Bold.ttf "
        "(default: assets/fonts next to the scripts)",
    )
    parser.add_argument("--header-font", default=None, help="Monospace TrueType file for the header")
    parser.add_argument("--regular-font", default=None, help="Regular TrueType file for body text")
    parser.add_argument("--bold-font", default=None, help="Bold TrueType file for titles")
    parser.add_argument("--logo", default=None, help="Logo image (SVG, PNG or JPEG) for the bottom-right corner")
    parser.add_argument("--show-grid", action="store_true", help="Show the 40px grid overlay in HTML output")
    parser.add_argument("--qa", action="store_true", help="Split slides whose body overflows and report layout issues")
    parser.add_argument(
        "--qa-config-out",
        default=None,
        help="Optional path to write the QA-adjusted config JSON (default: next to output PDF when --qa)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show full traceback for unexpected errors",
    )
    return parser


def _font_set(args: argparse.Namespace) -> FontSet:
    fonts_dir = Path(args.fonts_dir).resolve() if args.fonts_dir else DEFAULT_FONTS_DIR
    return FontSet.from_dir(
        fonts_dir,
        mono=Path(args.header_font).resolve() if args.header_font else None,
        regular=Path(args.regular_font).resolve() if args.regular_font else None,
        bold=Path(args.bold_font).resolve() if args.bold_font else None,
    )


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        output_path = Path(args.output).resolve()
        deck = load_deck(Path(args.config).resolve())

        qa_config_out = None
        if args.qa:
            qa_config_out = (
                Path(args.qa_config_out).resolve()
                if args.qa_config_out
                else output_path.parent / f"{output_path.stem}.qa.json"
            )

        export_deck(
            deck,
            font_set=_font_set(args),
            output_path=output_path,
            html_path=Path(args.html).resolve() if args.html else None,
            pptx_path=Path(args.pptx).resolve() if args.pptx else None,
            thumbnails_dir=Path(args.thumbnails_dir).resolve() if args.thumbnails_dir else None,
            thumbnails_width=args.thumbnails_width,
            thumbnails_gallery=args.thumbnails_gallery,
            show_grid=True if args.show_grid else None,
            logo_path=Path(args.logo).resolve() if args.logo else None,
            qa=args.qa,
            qa_config_out=qa_config_out,
        )
    except (ConfigValidationError, FontResourceError, LogoResourceError) as e:
        raise SystemExit(str(e)) from e
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Deck export failed: {e}") from e
