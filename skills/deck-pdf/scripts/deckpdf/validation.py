"""Config validation for the deck JSON input."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigValidationError

_TEXT_FIELDS = ("header", "overline", "title", "body_text", "bodyText")
_BOOL_FIELDS = ("use_bullets", "useBullets")


def _check_slide(slide: Dict[str, Any], idx: int, issues: list[str], prefix: str) -> None:
    slide_prefix = f"{prefix}.slides[{idx}]"

    for field in _TEXT_FIELDS:
        if field in slide and slide[field] is not None and not isinstance(slide[field], str):
            issues.append(f"{slide_prefix}.{field} must be a string when provided")

    for field in _BOOL_FIELDS:
        if field in slide and not isinstance(slide[field], bool):
            issues.append(f"{slide_prefix}.{field} must be a boolean when provided")

    # Unknown layout names are accepted and rendered with the default layout.
    layout = slide.get("layout")
    if layout is not None and not isinstance(layout, str):
        issues.append(f"{slide_prefix}.layout must be a string when provided")


def _check_deck(deck: Dict[str, Any], issues: list[str], prefix: str) -> None:
    for field in ("title", "author", "logo"):
        value = deck.get(field)
        if value is not None and not isinstance(value, str):
            issues.append(f"{prefix}.{field} must be a string when provided")

    show_grid = deck.get("show_grid")
    if show_grid is not None and not isinstance(show_grid, bool):
        issues.append(f"{prefix}.show_grid must be a boolean when provided")

    slides = deck.get("slides")
    if not isinstance(slides, list):
        issues.append(f"{prefix}.slides is required and must be a list")
        return
    if not slides:
        issues.append(f"{prefix}.slides must contain at least one slide")
        return

    for idx, slide in enumerate(slides):
        if not isinstance(slide, dict):
            issues.append(f"{prefix}.slides[{idx}] must be an object")
            continue
        _check_slide(slide, idx, issues, prefix)


def validate_config(config: Dict[str, Any], source: Optional[Path] = None) -> tuple[Dict[str, Any], bool]:
    """Validate a config dict and return (config, wrapped).

    ``wrapped`` is True for ``{"deck": {...}}`` and False for a bare deck object.
    """
    if not isinstance(config, dict):
        raise ConfigValidationError(["Root JSON value must be an object"], source)

    wrapped = "deck" in config
    deck = config.get("deck") if wrapped else config

    if not isinstance(deck, dict):
        raise ConfigValidationError(["'deck' must be an object"], source)

    issues: list[str] = []
    _check_deck(deck, issues, "deck" if wrapped else "root")

    if issues:
        raise ConfigValidationError(issues, source)

    return config, wrapped


def validate_config_file(config_path: Path) -> tuple[Dict[str, Any], bool]:
    """Read a deck JSON file and validate it, naming the file in any error."""
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigValidationError([f"Config file not found: {config_path}"]) from exc

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigValidationError(
            [f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"], config_path
        ) from exc

    return validate_config(data, config_path)
