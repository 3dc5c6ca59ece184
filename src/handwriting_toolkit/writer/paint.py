"""
Module: writer.paint

Purpose:
    Explicit drawing state for glyph painting. Instead of a mutable
    save()/transform()/restore() stack, every glyph carries an immutable
    PaintState whose transform is a composed affine matrix.

Key Classes:
    - Affine: 2D affine matrix (Pillow coefficient order)
    - PaintState: Transform, ink and weight for one glyph

Key Functions:
    - glyph_transform(): Translate . rotate . shear for a glyph

Coordinates:
    Page space, y grows downwards. A positive rotation turns the top of a
    glyph to the right, matching a browser canvas rotate().
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Affine:
    """
    Affine matrix mapping (x, y) -> (a*x + b*y + c, d*x + e*y + f).

    ``m1 @ m2`` composes so that m2 is applied first.

    Example:
        >>> (Affine.translation(10, 0) @ Affine.scale(2)).apply(1, 1)
        (12.0, 2.0)
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 1.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Affine:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> Affine:
        return cls(1.0, 0.0, tx, 0.0, 1.0, ty)

    @classmethod
    def rotation(cls, radians: float) -> Affine:
        cos_t = math.cos(radians)
        sin_t = math.sin(radians)
        return cls(cos_t, -sin_t, 0.0, sin_t, cos_t, 0.0)

    @classmethod
    def shear(cls, kx: float) -> Affine:
        """Horizontal shear: x' = x + kx * y."""
        return cls(1.0, kx, 0.0, 0.0, 1.0, 0.0)

    @classmethod
    def scale(cls, sx: float, sy: float | None = None) -> Affine:
        return cls(sx, 0.0, 0.0, 0.0, sx if sy is None else sy, 0.0)

    def __matmul__(self, other: Affine) -> Affine:
        return Affine(
            self.a * other.a + self.b * other.d,
            self.a * other.b + self.b * other.e,
            self.a * other.c + self.b * other.f + self.c,
            self.d * other.a + self.e * other.d,
            self.d * other.b + self.e * other.e,
            self.d * other.c + self.e * other.f + self.f,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.e - self.b * self.d

    def inverse(self) -> Affine:
        det = self.determinant
        if det == 0:
            raise ValueError("Affine matrix is not invertible")
        a = self.e / det
        b = -self.b / det
        d = -self.d / det
        e = self.a / det
        return Affine(
            a, b, -(a * self.c + b * self.f),
            d, e, -(d * self.c + e * self.f),
        )

    def apply(self, x: float, y: float) -> Point:
        return (self.a * x + self.b * y + self.c, self.d * x + self.e * y + self.f)

    def bounds(self, points: Iterable[Point]) -> tuple[float, float, float, float]:
        """Bounding box (min_x, min_y, max_x, max_y) of transformed points."""
        mapped = [self.apply(x, y) for x, y in points]
        xs = [p[0] for p in mapped]
        ys = [p[1] for p in mapped]
        return (min(xs), min(ys), max(xs), max(ys))

    @property
    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        """Coefficients in the order Image.transform(AFFINE) expects."""
        return (self.a, self.b, self.c, self.d, self.e, self.f)


def glyph_transform(x: float, y: float, angle_deg: float, shear: float = 0.0) -> Affine:
    """
    Transform from glyph-local space (origin on the baseline) to page space.

    Args:
        x, y: Glyph origin on the page
        angle_deg: Rotation in degrees (slant + random jitter)
        shear: Horizontal shear applied before rotation (italics)
    """
    matrix = Affine.translation(x, y) @ Affine.rotation(math.radians(angle_deg))
    if shear:
        matrix = matrix @ Affine.shear(shear)
    return matrix


@dataclass(frozen=True, slots=True)
class PaintState:
    """
    Everything needed to paint one glyph.

    Attributes:
        transform: Glyph-local to page transform
        color: Ink colour
        bold: Stroke the glyph outline after filling it
    """

    transform: Affine = Affine()
    color: str = "#000000"
    bold: bool = False

    def with_transform(self, matrix: Affine) -> PaintState:
        """New state with matrix applied after the current transform."""
        return replace(self, transform=self.transform @ matrix)

    def with_color(self, color: str) -> PaintState:
        return replace(self, color=color)
