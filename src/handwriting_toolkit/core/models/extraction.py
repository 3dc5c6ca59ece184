"""
Module: extraction

Purpose:
    Result of analysing a handwriting sample image.

Key Classes:
    - StyleExtractionResult: Measured slant, stroke width, spacing, messiness

Sign convention:
    ``slant`` is the deskew angle - the shear that makes the sample's strokes
    most vertical. Writing that leans right needs a negative deskew, so the
    handwriting's own lean is ``handwriting_slant == -slant``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StyleExtractionResult:
    """
    Measurements derived once from an uploaded sample (read-only).

    Attributes:
        slant: Deskew angle in degrees
        stroke_width: Approximate stroke width in pixels (1-5)
        avg_spacing: Approximate gap between strokes in pixels
        messiness: Messiness score (0-1)
        is_default: True when the neutral fallback was returned
    """

    slant: float
    stroke_width: float
    avg_spacing: float
    messiness: float
    is_default: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.messiness <= 1.0:
            raise ValueError(f"messiness must be within [0, 1]: {self.messiness}")
        if self.stroke_width <= 0:
            raise ValueError(f"stroke_width must be positive: {self.stroke_width}")

    @property
    def handwriting_slant(self) -> float:
        """Lean of the handwriting itself (degrees, positive leans right)."""
        return -self.slant

    def to_dict(self) -> dict[str, Any]:
        return {
            "slant": self.slant,
            "stroke_width": self.stroke_width,
            "avg_spacing": self.avg_spacing,
            "messiness": self.messiness,
            "is_default": self.is_default,
        }
