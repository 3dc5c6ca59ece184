"""
Module: writer.fonts

Purpose:
    Resolve a style's font family to a Pillow font at a given size.
    Handwriting fonts are often not installed; lookup walks a candidate
    list and falls back to Pillow's bundled font so rendering never fails.

Key Functions:
    - load_font(): Cached (family, size) -> font lookup
    - font_metrics(): Ascent/descent for baseline placement
    - text_width(): Advance width of a string

Dependencies:
    - PIL: ImageFont
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Tuple, Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Bundled with the package when present, searched before system fonts
ASSETS_FONT_DIR = Path(__file__).resolve().parent.parent / "assets" / "fonts"

FALLBACK_FONTS = (
    "Caveat-Regular.ttf",
    "DejaVuSans.ttf",
    "arial.ttf",
    "Arial.ttf",
)


def _candidates(family: str) -> list[str]:
    names = [family, f"{family}.ttf", f"{family}-Regular.ttf", f"{family}.otf"]
    local = [str(ASSETS_FONT_DIR / name) for name in names[1:]]
    return names + local + list(FALLBACK_FONTS)


@lru_cache(maxsize=64)
def load_font(family: str, size: int) -> Font:
    """
    Load a font for the family at an integer pixel size.

    Args:
        family: Family name, file name or path
        size: Pixel size (clamped to at least 1)

    Returns:
        Font object (Pillow's default font if nothing else is available)
    """
    size = max(1, int(round(size)))
    for name in _candidates(family):
        try:
            return ImageFont.truetype(name, size)
        except (IOError, OSError):
            continue

    logger.warning(f"Could not load TrueType font for {family!r}, using default")
    return ImageFont.load_default(size=size)


def font_metrics(font: Font) -> Tuple[int, int]:
    """Return (ascent, descent) in pixels."""
    if isinstance(font, ImageFont.FreeTypeFont):
        return font.getmetrics()
    # Bitmap fonts have no metrics; treat the full box as ascent
    _, top, _, bottom = font.getbbox("Ag")
    return (bottom - top, 0)


def text_width(font: Font, text: str) -> float:
    """Advance width of text in pixels."""
    if not text:
        return 0.0
    return float(font.getlength(text))
