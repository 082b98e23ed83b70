"""Styled-markup renderer.

Each resolved line becomes an absolutely positioned element whose ``left`` and
``bottom`` offsets are the resolver's page coordinates (CSS ``bottom`` grows
upward, like the page convention). ``white-space: pre`` keeps the browser from
re-wrapping, so the markup shows exactly the resolver's line breaks.
"""

from __future__ import annotations

import base64
import html
from html.parser import HTMLParser
from typing import Dict, List, Optional, Sequence

from .geometry import GRID_SIZE, PAGE_HEIGHT, PAGE_WIDTH
from .layout import BODY_LARGE_STYLE, BODY_STYLE, HEADER_STYLE, TITLE_STYLE, LayoutResult, TextBlock, TextStyle
from .logo import Logo
from .metrics import FontRole, FontSet

# Zero-height inline-block at the text baseline. With line-height 0 the glyph
# boxes sit above the baseline, so this anchor is the lowest box on the line and
# the element's bottom edge (its CSS `bottom`) is exactly the baseline.
BASELINE_ANCHOR = '<span class="slide-baseline"></span>'


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text


def _px(value: float) -> str:
    return f"{_num(value)}px"


def _font_face_rules(fonts: FontSet) -> str:
    rules: List[str] = []
    for role, weight in ((FontRole.MONO, 400), (FontRole.REGULAR, 400), (FontRole.BOLD, 700)):
        path = fonts.path_for(role)
        if path is None or not path.is_file():
            continue
        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        rules.append(
            "@font-face {{ font-family: '{family}'; src: url('data:font/ttf;base64,{data}') format('truetype'); "
            "font-weight: {weight}; font-style: normal; }}".format(
                family=fonts.family_for(role), data=encoded, weight=weight
            )
        )
    return "\n".join(rules)


def _style_rule(style: TextStyle, fonts: Optional[FontSet]) -> str:
    if style.role == FontRole.MONO:
        family = f"'{fonts.mono_family if fonts else 'Martian Mono'}', monospace"
    else:
        family = f"'{fonts.text_family if fonts else 'TT Norms'}', sans-serif"
    weight = 700 if style.role == FontRole.BOLD else 400
    return (
        f".{style.css_class} {{ font-family: {family}; font-weight: {weight}; "
        f"font-size: {_px(style.size)}; line-height: 0; "
        f"letter-spacing: {_px(style.letter_spacing)}; color: #000; }}"
    )


def _stylesheet(fonts: Optional[FontSet]) -> str:
    text_rules = "\n".join(
        _style_rule(style, fonts) for style in (HEADER_STYLE, TITLE_STYLE, BODY_STYLE, BODY_LARGE_STYLE)
    )
    faces = _font_face_rules(fonts) if fonts else ""
    return f"""{faces}
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{ background: #fff; }}
.slide-page {{ position: relative; overflow: hidden; page-break-after: always; }}
.slide-frame {{ position: absolute; top: 0; left: 0; width: {PAGE_WIDTH}px; height: {PAGE_HEIGHT}px;
  background: #fff; transform-origin: top left; }}
.slide-line {{ position: absolute; white-space: pre; line-height: 0; }}
.slide-baseline {{ display: inline-block; width: 0; height: 0; vertical-align: baseline; }}
.slide-logo {{ position: absolute; z-index: 3; pointer-events: none; }}
.slide-bullet {{ position: absolute; border-radius: 50%; background: #000; }}
.grid-overlay {{ position: absolute; inset: 0; pointer-events: none; z-index: 1;
  background-image: linear-gradient(to right, rgba(0, 0, 0, 0.1) 1px, transparent 1px),
    linear-gradient(to bottom, rgba(0, 0, 0, 0.1) 1px, transparent 1px);
  background-size: {GRID_SIZE}px {GRID_SIZE}px; }}
.grid-overlay::before, .grid-overlay::after {{ content: ''; position: absolute; background: rgba(0, 0, 255, 0.3); }}
.grid-overlay::before {{ left: 50%; top: 0; width: 1px; height: 100%; }}
.grid-overlay::after {{ top: 50%; left: 0; width: 100%; height: 1px; }}
.grid-overlay.hidden {{ display: none; }}
{text_rules}
@page {{ size: {PAGE_WIDTH}px {PAGE_HEIGHT}px; margin: 0; }}"""


def _render_block(block: TextBlock) -> str:
    parts: List[str] = []
    for line in block.lines:
        parts.append(
            f'<div class="slide-line {block.style.css_class}" data-block="{block.name}" '
            f'data-paragraph="{line.paragraph}" style="left: {_px(line.x)}; bottom: {_px(line.y)};">'
            f"{html.escape(line.text)}{BASELINE_ANCHOR}</div>"
        )
    for bullet in block.bullets:
        parts.append(
            f'<span class="slide-bullet" data-block="{block.name}" data-paragraph="{bullet.paragraph}" '
            f'style="left: {_px(bullet.x)}; bottom: {_px(bullet.center_y - bullet.size / 2)}; '
            f'width: {_px(bullet.size)}; height: {_px(bullet.size)};"></span>'
        )
    return "\n".join(parts)


def _logo_markup(logo: Logo) -> str:
    box = logo.rect()
    return (
        f'<img class="slide-logo" alt="" src="{logo.data_url()}" '
        f'style="left: {_px(box.x)}; bottom: {_px(box.y)}; width: {_px(box.width)}; height: {_px(box.height)};" />'
    )


def _render_page(
    index: int, layout: LayoutResult, *, show_grid: bool, scale: Optional[float], logo_markup: str = ""
) -> str:
    factor = scale if scale else 1.0
    page_style = f"width: {_px(PAGE_WIDTH * factor)}; height: {_px(PAGE_HEIGHT * factor)};"
    frame_style = f' style="transform: scale({factor:.6g});"' if scale else ""
    grid_class = "" if show_grid else " hidden"
    parts = [_render_block(block) for block in layout.blocks if not block.is_empty]
    if logo_markup:
        parts.append(logo_markup)
    blocks = "\n".join(parts)
    return f"""<section class="slide-page" data-slide="{index}" data-layout="{layout.kind.value}" style="{page_style}">
<div class="slide-frame"{frame_style}>
<div class="grid-overlay{grid_class}"></div>
{blocks}
</div>
</section>"""


def render_deck_html(
    layouts: Sequence[LayoutResult],
    *,
    title: str = "Slides",
    show_grid: bool = False,
    scale: Optional[float] = None,
    fonts: Optional[FontSet] = None,
    logo: Optional[Logo] = None,
) -> str:
    """Render resolved slides into one HTML document, one page per slide."""
    logo_markup = _logo_markup(logo) if logo else ""
    pages = "\n".join(
        _render_page(i, layout, show_grid=show_grid, scale=scale, logo_markup=logo_markup)
        for i, layout in enumerate(layouts, start=1)
    )
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>{html.escape(title)}</title>
<style>
{_stylesheet(fonts)}
</style>
</head>
<body>
{pages}
</body>
</html>
"""


def render_slide_html(
    layout: LayoutResult,
    *,
    show_grid: bool = False,
    scale: Optional[float] = None,
    fonts: Optional[FontSet] = None,
    logo: Optional[Logo] = None,
) -> str:
    return render_deck_html([layout], show_grid=show_grid, scale=scale, fonts=fonts, logo=logo)


class _LineCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.pages: List[Dict[str, List[List[str]]]] = []
        self._current: Optional[tuple[str, int]] = None
        self._buffer: List[str] = []

    def handle_starttag(self, tag, attrs):
        attributes = dict(attrs)
        classes = (attributes.get("class") or "").split()
        if tag == "section" and "slide-page" in classes:
            self.pages.append({})
        elif tag == "div" and "slide-line" in classes and self.pages:
            self._current = (attributes.get("data-block") or "", int(attributes.get("data-paragraph") or 0))
            self._buffer = []

    def handle_data(self, data):
        if self._current is not None:
            self._buffer.append(data)

    def handle_endtag(self, tag):
        if tag != "div" or self._current is None:
            return
        name, paragraph = self._current
        groups = self.pages[-1].setdefault(name, [])
        while len(groups) <= paragraph:
            groups.append([])
        groups[paragraph].append("".join(self._buffer))
        self._current = None


def extract_line_breaks(document: str) -> List[Dict[str, List[List[str]]]]:
    """Read rendered markup back into per-page lines grouped by block and paragraph."""
    collector = _LineCollector()
    collector.feed(document)
    collector.close()
    return collector.pages
