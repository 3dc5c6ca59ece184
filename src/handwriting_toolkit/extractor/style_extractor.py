"""
Module: extractor.style_extractor

Purpose:
    One-shot analysis of a photographed handwriting sample. Estimates slant,
    stroke width, spacing and a messiness score with small deterministic
    image heuristics (no trained model).

Key Functions:
    - extract_style(): Image -> StyleExtractionResult
    - style_from_extraction(): Map a result onto a HandwritingStyle
    - profile_from_extraction(): Wrap a result as a storable StyleProfile

Algorithm:
    1. Resize to a fixed analysis square and binarise at grey < 128
    2. For shear angles -20..20 step 5, shear ink x by -y*tan(angle) and
       take the variance of the column histogram; the angle with the
       highest variance is the deskew angle
    3. Stroke width from ink coverage, clamped to [1, 5]
    4. Average spacing from blank-column runs of the deskewed histogram
    5. Messiness from slant magnitude

Degenerate input:
    Blank or undecodable images give a neutral default result with
    is_default set; nothing is raised.

Dependencies:
    - PIL: Decoding and resizing
    - numpy: Vectorised histogram analysis
"""

from __future__ import annotations

import io
import logging
import math
import uuid
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from handwriting_toolkit.common.thresholds import EXTRACTION_THRESHOLDS, ExtractionThresholds
from handwriting_toolkit.core.models.extraction import StyleExtractionResult
from handwriting_toolkit.core.models.style import HandwritingStyle, StyleProfile

logger = logging.getLogger(__name__)

ImageInput = Union[Image.Image, str, Path, bytes, np.ndarray]

# Mapped style fields that do not come from the analysis
EXTRACTED_STYLE_SIZE = 24.0
EXTRACTED_STYLE_COLOR = "#000000"
EXTRACTED_LINE_HEIGHT = 1.5


def default_result(thresholds: ExtractionThresholds = EXTRACTION_THRESHOLDS) -> StyleExtractionResult:
    """Neutral result used when a sample cannot be analysed."""
    return StyleExtractionResult(
        slant=0.0,
        stroke_width=thresholds.default_stroke_width,
        avg_spacing=thresholds.default_spacing,
        messiness=thresholds.default_messiness,
        is_default=True,
    )


def extract_style(
    image: ImageInput,
    *,
    thresholds: ExtractionThresholds = EXTRACTION_THRESHOLDS,
) -> StyleExtractionResult:
    """
    Analyse a handwriting sample.

    Args:
        image: PIL image, file path, encoded image bytes or pixel array
        thresholds: Analysis parameters

    Returns:
        StyleExtractionResult (the neutral default if the image has no ink
        or cannot be decoded)
    """
    try:
        rgb = _load_rgb(image)
    except (OSError, ValueError, TypeError) as e:
        logger.warning(f"Could not decode handwriting sample, using default style: {e}")
        return default_result(thresholds)

    size = thresholds.analysis_size
    resized = rgb.resize((size, size), Image.Resampling.BILINEAR)
    grey = np.asarray(resized, dtype=np.float32).mean(axis=2)
    ys, xs = np.where(grey < thresholds.ink_threshold)

    if xs.size == 0:
        logger.warning("Handwriting sample contains no ink, using default style")
        return default_result(thresholds)

    slant = _estimate_slant(xs, ys, size, thresholds)
    coverage = xs.size / float(size * size)
    stroke_width = min(thresholds.stroke_max, max(thresholds.stroke_min, coverage * thresholds.stroke_scale))
    avg_spacing = _estimate_spacing(_column_histogram(xs, ys, slant, size), thresholds)
    messiness = min(1.0, abs(slant) / thresholds.messiness_slant_divisor + thresholds.messiness_floor)

    result = StyleExtractionResult(
        slant=float(slant),
        stroke_width=float(stroke_width),
        avg_spacing=float(avg_spacing),
        messiness=float(messiness),
    )
    logger.info(
        f"Extracted style: slant={result.slant:+.0f} stroke={result.stroke_width:.2f} "
        f"spacing={result.avg_spacing:.1f} messiness={result.messiness:.2f}"
    )
    return result


def _load_rgb(image: ImageInput) -> Image.Image:
    if isinstance(image, Image.Image):
        return image.convert("RGB")
    if isinstance(image, np.ndarray):
        return Image.fromarray(np.asarray(image, dtype=np.uint8)).convert("RGB")
    if isinstance(image, (bytes, bytearray)):
        return Image.open(io.BytesIO(image)).convert("RGB")
    with Image.open(image) as opened:
        return opened.convert("RGB")


def _column_histogram(xs: np.ndarray, ys: np.ndarray, angle_deg: float, size: int) -> np.ndarray:
    """Ink count per column after shearing x by -y * tan(angle)."""
    skewed = np.floor(xs - ys * math.tan(math.radians(angle_deg)) + 0.5).astype(np.int64)
    in_range = (skewed >= 0) & (skewed < size)
    return np.bincount(skewed[in_range], minlength=size)


def _estimate_slant(
    xs: np.ndarray,
    ys: np.ndarray,
    size: int,
    thresholds: ExtractionThresholds,
) -> int:
    """Deskew angle maximising column-histogram variance (ties keep the first)."""
    best_angle = 0
    best_variance = 0.0
    for angle in range(thresholds.slant_min_deg, thresholds.slant_max_deg + 1, thresholds.slant_step_deg):
        variance = float(_column_histogram(xs, ys, angle, size).var())
        logger.debug(f"Slant candidate {angle:+d}: variance={variance:.2f}")
        if variance > best_variance:
            best_variance = variance
            best_angle = angle
    return best_angle


def _estimate_spacing(columns: np.ndarray, thresholds: ExtractionThresholds) -> float:
    """Mean length of blank-column runs between the first and last inked column."""
    inked = np.flatnonzero(columns)
    if inked.size < 2:
        return thresholds.fallback_spacing
    gaps = np.diff(inked) - 1
    gaps = gaps[gaps > 0]
    if gaps.size == 0:
        return thresholds.fallback_spacing
    return float(gaps.mean())


def style_from_extraction(
    result: StyleExtractionResult,
    base: Optional[HandwritingStyle] = None,
) -> HandwritingStyle:
    """
    Map an extraction result onto a handwriting style.

    Spacing and messiness are scaled into engine units; the detected lean
    becomes the constant slant. Font comes from base (or the default).
    """
    base = base or HandwritingStyle()
    return base.evolve(
        size=EXTRACTED_STYLE_SIZE,
        color=EXTRACTED_STYLE_COLOR,
        line_height=EXTRACTED_LINE_HEIGHT,
        word_spacing=result.avg_spacing * 0.5,
        letter_spacing=result.avg_spacing * 0.1,
        perturbation=result.messiness * 5,
        rotation=result.messiness * 5,
        slant=result.handwriting_slant,
        baseline_shift=result.messiness * 2,
    )


def profile_from_extraction(
    result: StyleExtractionResult,
    name: str,
    base: Optional[HandwritingStyle] = None,
) -> StyleProfile:
    """Build a storable profile (fresh uuid id) from an extraction result."""
    return StyleProfile(
        id=str(uuid.uuid4()),
        name=Path(name).stem or "Custom Style",
        style=style_from_extraction(result, base),
        detected_slant=result.slant,
        detected_stroke_width=result.stroke_width,
        messiness_score=result.messiness,
    )
