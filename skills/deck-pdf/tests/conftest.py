from __future__ import annotations

import sys
from pathlib import Path

import pytest
import reportlab

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckpdf import ApproximateMetrics, ExactMetrics, FontSet, load_fonts  # noqa: E402

# Bitstream Vera ships inside the reportlab package, so exact-metric tests need no extra assets.
REPORTLAB_FONTS = Path(reportlab.__file__).resolve().parent / "fonts"
SAMPLE_DECK = Path(__file__).resolve().parents[1] / "assets" / "sample_deck.json"


@pytest.fixture
def font_set() -> FontSet:
    return FontSet(
        mono=REPORTLAB_FONTS / "Vera.ttf",
        regular=REPORTLAB_FONTS / "Vera.ttf",
        bold=REPORTLAB_FONTS / "VeraBd.ttf",
        mono_family="Bitstream Vera Sans",
        text_family="Bitstream Vera Sans",
    )


@pytest.fixture
def loaded_fonts(font_set):
    return load_fonts(font_set)


@pytest.fixture
def exact_metrics(loaded_fonts) -> ExactMetrics:
    return ExactMetrics(loaded_fonts)


@pytest.fixture
def approx_metrics() -> ApproximateMetrics:
    return ApproximateMetrics()


@pytest.fixture
def sample_deck_path() -> Path:
    return SAMPLE_DECK
