"""
Module: builder.ink

Purpose:
    Ink-flow variation: every pixel dark enough to be ink is lightened by a
    random amount so strokes look like they were written with uneven
    pressure. Runs last on a page, after all glyphs are drawn.

Key Functions:
    - apply_ink_flow(): In-place ink variation on an RGB surface
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from handwriting_toolkit.common.thresholds import PIPELINE_THRESHOLDS, PipelineThresholds
from handwriting_toolkit.core.utils.random_source import RandomSource, numpy_generator

logger = logging.getLogger(__name__)


def apply_ink_flow(
    surface: Image.Image,
    random_source: RandomSource,
    thresholds: PipelineThresholds = PIPELINE_THRESHOLDS,
) -> int:
    """
    Lighten ink pixels by a uniform amount in [0, ink_flow_max).

    A pixel counts as ink when its red channel is below ink_flow_threshold;
    the same amount is added to all three channels.

    Returns:
        Number of pixels adjusted
    """
    pixels = np.array(surface.convert("RGB"), dtype=np.float32)
    ink = pixels[..., 0] < thresholds.ink_flow_threshold
    count = int(ink.sum())
    if count == 0:
        return 0

    generator = numpy_generator(random_source)
    pressure = generator.uniform(0.0, thresholds.ink_flow_max, size=count)
    pixels[ink] += pressure[:, None]
    flowed = Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8))
    surface.paste(flowed.convert(surface.mode))
    logger.debug(f"Ink flow adjusted {count} pixels")
    return count
