from __future__ import annotations

import sys
from pathlib import Path

import pytest

SCRIPT_DIR = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from deckpdf import ApproximateMetrics, FontResourceError, FontRole, FontSet, load_fonts  # noqa: E402


def test_approximate_widths_scale_with_size() -> None:
    metrics = ApproximateMetrics()
    assert metrics.char_width("W", FontRole.BOLD, 125) == 70
    assert metrics.char_width("i", FontRole.BOLD, 62.5) == 35
    assert metrics.char_width("x", FontRole.REGULAR, 22) == 13
    assert metrics.exact is False


def test_font_set_from_dir_uses_default_names(tmp_path: Path) -> None:
    fonts = FontSet.from_dir(tmp_path, bold=tmp_path / "custom" / "Heavy.ttf")
    assert fonts.mono == tmp_path / "MartianMono-Regular.ttf"
    assert fonts.regular == tmp_path / "TTNorms-Regular.ttf"
    assert fonts.bold == tmp_path / "custom" / "Heavy.ttf"


def test_missing_font_file_is_reported(tmp_path: Path, font_set: FontSet) -> None:
    missing = tmp_path / "Nope.ttf"
    broken = FontSet(mono=font_set.mono, regular=missing, bold=font_set.bold)
    with pytest.raises(FontResourceError) as exc:
        load_fonts(broken)
    assert exc.value.role == "regular"
    assert str(missing) in str(exc.value)
    assert "file not found" in str(exc.value)


def test_unconfigured_font_is_reported(font_set: FontSet) -> None:
    with pytest.raises(FontResourceError) as exc:
        load_fonts(FontSet(mono=None, regular=font_set.regular, bold=font_set.bold))
    assert exc.value.role == "mono"


def test_unreadable_font_file_is_reported(tmp_path: Path, font_set: FontSet) -> None:
    garbage = tmp_path / "Garbage.ttf"
    garbage.write_bytes(b"this is not a font")
    with pytest.raises(FontResourceError) as exc:
        load_fonts(FontSet(mono=font_set.mono, regular=font_set.regular, bold=garbage))
    assert exc.value.role == "bold"
    assert exc.value.path == garbage


def test_load_fonts_is_repeatable(font_set: FontSet) -> None:
    first = load_fonts(font_set)
    second = load_fonts(font_set)
    assert first.names == second.names
    assert first.name_for(FontRole.BOLD) != first.name_for(FontRole.REGULAR)


def test_exact_metrics_differ_per_glyph(exact_metrics) -> None:
    assert exact_metrics.exact is True
    assert exact_metrics.char_width("W", FontRole.REGULAR, 22) > exact_metrics.char_width("i", FontRole.REGULAR, 22)
