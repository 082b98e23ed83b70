"""Deck PDF exporter - lays out 1920x1080 slides and writes them to PDF.

Slides are described in a JSON file (header, title, body text and a layout
name). Every line break is computed once from the real font metrics and the
same placement is used for the PDF and the optional HTML and PPTX renderings,
so all outputs wrap identically. Thumbnails use approximate metrics.
"""

from __future__ import annotations

from deckpdf.cli import run_cli


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
