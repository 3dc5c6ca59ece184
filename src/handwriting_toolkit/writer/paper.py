"""
Module: writer.paper

Purpose:
    Draw the paper surface a page is written on: base colour, grain noise,
    rule or grid lines and a hand-drawn margin rule.

Key Functions:
    - draw_paper(): Paint the background onto an existing surface (in place)
    - new_page_surface(): Create a surface and paint its background

Ordering:
    draw_paper() rewrites the whole pixel buffer, so it must run before any
    glyph is drawn on the same surface.

Dependencies:
    - PIL: Image drawing
    - numpy: Per-pixel grain noise
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from handwriting_toolkit.common.thresholds import PAPER_THRESHOLDS, PaperThresholds
from handwriting_toolkit.core.models.page import PageConfig, PaperType
from handwriting_toolkit.core.utils.random_source import (
    HotRandom,
    RandomSource,
    numpy_generator,
    symmetric,
)

logger = logging.getLogger(__name__)


def paper_color(config: PageConfig, thresholds: PaperThresholds = PAPER_THRESHOLDS) -> str:
    """Base colour for the page: explicit override, else by paper type."""
    if config.paper_color:
        return config.paper_color
    if config.paper_type is PaperType.VINTAGE:
        return thresholds.vintage_paper_color
    return thresholds.default_paper_color


def draw_paper(
    surface: Image.Image,
    config: PageConfig,
    *,
    random_source: Optional[RandomSource] = None,
    thresholds: PaperThresholds = PAPER_THRESHOLDS,
) -> None:
    """
    Paint the paper background onto surface (mutates surface).

    Steps:
    1. Fill with the paper colour
    2. Add ±noise_amplitude grain to every pixel (same offset per channel)
    3. Ruled: wobbly horizontal rules; Grid: straight orthogonal grid
    4. Wobbly vertical margin rule at config.margin_left

    Args:
        surface: RGB image to paint on
        config: Page geometry and paper type
        random_source: Source for grain and wobble (default: unseeded)
        thresholds: Colours and pitches
    """
    rng = random_source or HotRandom()

    base = ImageColor.getrgb(paper_color(config, thresholds))[:3]
    surface.paste(base, (0, 0, surface.width, surface.height))
    _add_texture(surface, rng, thresholds.noise_amplitude)

    draw = ImageDraw.Draw(surface)
    if config.paper_type is PaperType.RULED:
        _draw_ruled_lines(draw, surface.size, rng, thresholds)
    elif config.paper_type is PaperType.GRID:
        _draw_grid_lines(draw, surface.size, thresholds)

    _draw_margin_line(draw, surface.height, config.margin_left, config.margin_color, rng, thresholds)

    logger.debug(f"Drew {config.paper_type} paper {surface.width}x{surface.height}")


def new_page_surface(
    config: PageConfig,
    *,
    random_source: Optional[RandomSource] = None,
    thresholds: PaperThresholds = PAPER_THRESHOLDS,
) -> Image.Image:
    """Create an RGB surface of the page size with its paper drawn."""
    surface = Image.new("RGB", config.size)
    draw_paper(surface, config, random_source=random_source, thresholds=thresholds)
    return surface


def _add_texture(surface: Image.Image, rng: RandomSource, amplitude: float) -> None:
    """Add uniform luminance grain in [-amplitude, amplitude)."""
    if amplitude <= 0:
        return
    generator = numpy_generator(rng)
    pixels = np.asarray(surface, dtype=np.float32)
    noise = generator.uniform(-amplitude, amplitude, size=pixels.shape[:2] + (1,))
    textured = np.clip(pixels + noise, 0, 255).astype(np.uint8)
    surface.paste(Image.fromarray(textured))


def _draw_ruled_lines(
    draw: ImageDraw.ImageDraw,
    size: tuple[int, int],
    rng: RandomSource,
    thresholds: PaperThresholds,
) -> None:
    width, height = size
    for y in range(thresholds.ruled_start_y, height, thresholds.ruled_pitch_px):
        points = [
            (x, y + symmetric(rng, thresholds.ruled_wobble_px))
            for x in range(0, width + thresholds.ruled_segment_px, thresholds.ruled_segment_px)
        ]
        draw.line(points, fill=thresholds.ruled_line_color, width=1)


def _draw_grid_lines(
    draw: ImageDraw.ImageDraw,
    size: tuple[int, int],
    thresholds: PaperThresholds,
) -> None:
    width, height = size
    step = thresholds.grid_size_px
    for y in range(0, height, step):
        draw.line([(0, y), (width, y)], fill=thresholds.grid_line_color, width=1)
    for x in range(0, width, step):
        draw.line([(x, 0), (x, height)], fill=thresholds.grid_line_color, width=1)


def _draw_margin_line(
    draw: ImageDraw.ImageDraw,
    height: int,
    margin_left: int,
    color: Optional[str],
    rng: RandomSource,
    thresholds: PaperThresholds,
) -> None:
    points = [
        (margin_left + symmetric(rng, thresholds.margin_wobble_px), y)
        for y in range(0, height + thresholds.margin_segment_px, thresholds.margin_segment_px)
    ]
    draw.line(points, fill=color or thresholds.margin_line_color, width=thresholds.margin_line_width)
