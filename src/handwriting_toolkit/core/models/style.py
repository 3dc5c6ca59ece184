"""
Module: style

Purpose:
    Provides HandwritingStyle - the immutable description of how text is
    written (font, size, ink, spacing, messiness) - and StyleProfile, the
    persisted record pairing a style with the measurements it came from.

Key Classes:
    - HandwritingStyle: Style value object consumed by the layout engine
    - StyleProfile: Named, identified style with extraction metadata

Dependencies:
    - dataclasses (std)

Used By:
    - writer.layout: Glyph placement
    - writer.exam: Exam question rendering
    - extractor.style_extractor: Builds styles from samples
    - storage.style_store: Persists profiles
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


DEFAULT_FONT = "Caveat"
DEFAULT_SIZE = 24.0
DEFAULT_COLOR = "#1e293b"


@dataclass(frozen=True)
class HandwritingStyle:
    """
    Handwriting style parameters (immutable).

    A style is fixed for the duration of a render pass. Derived styles
    (e.g. a larger question number, a darker step line) are created with
    evolve(); nothing mutates a style mid-render.

    Attributes:
        font: Font family name or font file path
        size: Base glyph size in pixels
        color: Ink colour (any Pillow colour string)
        line_height: Line pitch as a multiple of size
        word_spacing: Extra pixels after each word (may be negative)
        letter_spacing: Extra pixels after each glyph (may be negative)
        perturbation: Messiness - magnitude of positional jitter
        rotation: Full range of random per-glyph rotation (degrees)
        slant: Constant lean added to every glyph (degrees, positive leans right)
        baseline_shift: Full range of random baseline noise (pixels)

    Invariants:
        - size > 0
        - perturbation >= 0
        - rotation >= 0

    Example:
        >>> style = HandwritingStyle(perturbation=1.5)
        >>> style.evolve(size=30).line_pitch
        45.0
    """

    font: str = DEFAULT_FONT
    size: float = DEFAULT_SIZE
    color: str = DEFAULT_COLOR

    # Spacing
    line_height: float = 1.5
    word_spacing: float = 10.0
    letter_spacing: float = 0.0

    # Effects
    perturbation: float = 0.5
    rotation: float = 2.0
    slant: float = 0.0
    baseline_shift: float = 1.0

    def __post_init__(self) -> None:
        """Validate style on construction."""
        if self.size <= 0:
            raise ValueError(f"size must be positive: {self.size}")
        if self.perturbation < 0:
            raise ValueError(f"perturbation must be non-negative: {self.perturbation}")
        if self.rotation < 0:
            raise ValueError(f"rotation must be non-negative: {self.rotation}")
        if self.line_height <= 0:
            raise ValueError(f"line_height must be positive: {self.line_height}")

    @property
    def line_pitch(self) -> float:
        """Vertical distance between consecutive baselines."""
        return self.size * self.line_height

    def evolve(self, **changes: Any) -> HandwritingStyle:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "font": self.font,
            "size": self.size,
            "color": self.color,
            "line_height": self.line_height,
            "word_spacing": self.word_spacing,
            "letter_spacing": self.letter_spacing,
            "perturbation": self.perturbation,
            "rotation": self.rotation,
            "slant": self.slant,
            "baseline_shift": self.baseline_shift,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HandwritingStyle:
        """Deserialize from a dictionary; missing keys take defaults."""
        defaults = cls()
        return cls(
            font=str(data.get("font", defaults.font)),
            size=float(data.get("size", defaults.size)),
            color=str(data.get("color", defaults.color)),
            line_height=float(data.get("line_height", defaults.line_height)),
            word_spacing=float(data.get("word_spacing", defaults.word_spacing)),
            letter_spacing=float(data.get("letter_spacing", defaults.letter_spacing)),
            perturbation=float(data.get("perturbation", defaults.perturbation)),
            rotation=float(data.get("rotation", defaults.rotation)),
            slant=float(data.get("slant", defaults.slant)),
            baseline_shift=float(data.get("baseline_shift", defaults.baseline_shift)),
        )


@dataclass(frozen=True)
class StyleProfile:
    """
    A named handwriting style as stored by a style store.

    Attributes:
        id: Opaque identifier (unique within a store)
        name: Display name, usually the sample's file stem
        style: The handwriting style
        detected_slant: Deskew angle measured from the sample (degrees)
        detected_stroke_width: Stroke width measured from the sample (pixels)
        messiness_score: Messiness measured from the sample (0-1)
    """

    id: str
    name: str
    style: HandwritingStyle
    detected_slant: float = 0.0
    detected_stroke_width: float = 2.0
    messiness_score: float = 0.1

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must be a non-empty string")
        if not 0.0 <= self.messiness_score <= 1.0:
            raise ValueError(f"messiness_score must be within [0, 1]: {self.messiness_score}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "style": self.style.to_dict(),
            "detected_slant": self.detected_slant,
            "detected_stroke_width": self.detected_stroke_width,
            "messiness_score": self.messiness_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StyleProfile:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            style=HandwritingStyle.from_dict(data.get("style", {})),
            detected_slant=float(data.get("detected_slant", 0.0)),
            detected_stroke_width=float(data.get("detected_stroke_width", 2.0)),
            messiness_score=float(data.get("messiness_score", 0.1)),
        )
