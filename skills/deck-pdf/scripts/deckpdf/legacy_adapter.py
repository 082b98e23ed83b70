"""Compatibility adapters for decks saved by the browser editor."""

from __future__ import annotations

from typing import Any, Dict, List


def normalize_legacy_layout(layout: str) -> str:
    """Map editor layout names to canonical layout names."""
    normalized = str(layout or "").strip().lower().replace("_", "-")
    if normalized in {"title", "avdelare", "intro", "default", "title-default"}:
        return "title-default"
    if normalized in {"quadrant-1-2", "quadrant", "quadrant-bottom"}:
        return "quadrant-bottom"
    if normalized in {"quadrant-1-2-top", "quadrant-top"}:
        return "quadrant-top"
    if normalized in {"quadrant-1-2-large", "quadrant-large", "quadrant-large-bulleted"}:
        return "quadrant-large-bulleted"
    if normalized in {"centered", "centred", "center"}:
        return "centered"
    return normalized


def _adapt_slide(slide: Dict[str, Any]) -> Dict[str, Any]:
    header = slide.get("header")
    if header is None:
        header = slide.get("overline")
    return {
        "header": str(header or ""),
        "title": str(slide.get("title") or ""),
        "body_text": str(slide.get("bodyText") or slide.get("body_text") or ""),
        "layout": normalize_legacy_layout(str(slide.get("layout") or "title")),
        "use_bullets": bool(slide.get("useBullets") or slide.get("use_bullets") or False),
    }


def adapt_legacy_deck(saved: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a saved editor deck payload to the deck config schema.

    Older saves kept a single slide under ``state`` instead of a ``slides`` list.
    """
    slides_in = saved.get("slides")
    if not isinstance(slides_in, list):
        legacy_state = saved.get("state")
        slides_in = [legacy_state] if isinstance(legacy_state, dict) else []

    slides_out: List[Dict[str, Any]] = [_adapt_slide(s) for s in slides_in if isinstance(s, dict)]

    if not slides_out:
        slides_out = [_adapt_slide({"title": str(saved.get("name") or "")})]

    return {
        "deck": {
            "title": str(saved.get("name") or slides_out[0]["title"] or ""),
            "slides": slides_out,
        }
    }
