"""Slide content model shared by the resolver and every renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .legacy_adapter import normalize_legacy_layout


class LayoutKind(str, Enum):
    TITLE_DEFAULT = "title-default"
    CENTERED = "centered"
    QUADRANT_BOTTOM = "quadrant-bottom"
    QUADRANT_TOP = "quadrant-top"
    QUADRANT_LARGE_BULLETED = "quadrant-large-bulleted"

    @classmethod
    def parse(cls, value: Any) -> "LayoutKind":
        """Map any value onto a layout. Unknown values fall back to TITLE_DEFAULT."""
        if isinstance(value, cls):
            return value
        normalized = normalize_legacy_layout(str(value or ""))
        for kind in cls:
            if kind.value == normalized:
                return kind
        return cls.TITLE_DEFAULT


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class SlideContent:
    header: str = ""
    title: str = ""
    body_text: str = ""
    layout: LayoutKind = LayoutKind.TITLE_DEFAULT
    use_bullets: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideContent":
        """Build from a slide config object (snake_case or the editor's camelCase keys)."""
        header = data.get("header")
        if header is None:
            header = data.get("overline")
        body = data.get("body_text")
        if body is None:
            body = data.get("bodyText", data.get("body"))
        bullets = data.get("use_bullets")
        if bullets is None:
            bullets = data.get("useBullets", False)
        return cls(
            header=_as_text(header),
            title=_as_text(data.get("title")),
            body_text=_as_text(body),
            layout=LayoutKind.parse(data.get("layout")),
            use_bullets=bool(bullets),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header,
            "title": self.title,
            "body_text": self.body_text,
            "layout": self.layout.value,
            "use_bullets": self.use_bullets,
        }


def split_paragraphs(text: str) -> List[str]:
    """Explicit line breaks delimit paragraphs; blank paragraphs are dropped."""
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    return [line.strip() for line in normalized.split("\n") if line.strip()]
