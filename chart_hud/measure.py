from __future__ import annotations

from functools import lru_cache
import html
from pathlib import Path
import re
from typing import Callable

from PIL import ImageFont


TextMeasure = Callable[[str], float]

DEFAULT_FONT_FAMILY = "DejaVu Sans Mono"
REFERENCE_FONT_PX = 100.0
# average advance of one glyph as a fraction of the font size
NOMINAL_GLYPH_RATIO = 0.5
FONT_FALLBACK_PATTERNS = (
    "dejavusansmono",
    "dejavu sans mono",
    "menlo",
    "monaco",
    "courier new",
    "courier",
)

_TAG_RE = re.compile(r"<[^>]*>")


def strip_markup(text: str) -> str:
    return html.unescape(_TAG_RE.sub("", text))


def glyph_count(text: str) -> float:
    """Number of visible glyphs, ignoring markup tags."""

    return float(len(strip_markup(text)))


def pillow_measure(font_family: str = DEFAULT_FONT_FAMILY) -> TextMeasure:
    """Measure text with real font metrics, in nominal glyph units.

    One unit is the advance of an average glyph (half the font size), so the
    result can stand in for `glyph_count` in text style boxes.
    """

    font = _load_font(font_family, REFERENCE_FONT_PX)

    def measure(text: str) -> float:
        plain = strip_markup(text)
        if not plain:
            return 0.0
        left, _, right, _ = font.getbbox(plain)
        return max(0.0, float(right - left)) / (REFERENCE_FONT_PX * NOMINAL_GLYPH_RATIO)

    return measure


@lru_cache(maxsize=16)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            if p in path.name.lower().replace(" ", ""):
                return path
    return None
