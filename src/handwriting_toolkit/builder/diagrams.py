"""
Module: builder.diagrams

Purpose:
    Diagram overlay support. The pipeline only decides where the diagram
    goes (anchor and bounding box); drawing it is delegated to a
    DiagramProvider.

Key Classes:
    - DiagramProvider: Protocol for diagram drawing backends
    - DiagramAnchor: Placement of the diagram box on a page
    - PencilDiagramProvider: Simple pencil sketches per diagram kind

Key Functions:
    - diagram_anchor(): Box position for a page geometry
    - diagram_caption(): Caption text under the diagram
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from PIL import Image, ImageDraw

from handwriting_toolkit.common.thresholds import PIPELINE_THRESHOLDS, PipelineThresholds
from handwriting_toolkit.core.models.page import PageConfig
from handwriting_toolkit.core.models.plan import DiagramKind
from handwriting_toolkit.core.utils.random_source import HotRandom, RandomSource, symmetric

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

PENCIL_COLOR = "#444444"
# Sketches are authored on this canvas and scaled to the requested size
_SKETCH_SIZE = (400.0, 300.0)


@runtime_checkable
class DiagramProvider(Protocol):
    """Draws a diagram of a given kind into an image of the given size."""

    def draw(self, kind: DiagramKind, size: Tuple[int, int]) -> Image.Image:
        ...


@dataclass(frozen=True)
class DiagramAnchor:
    """Top-left corner and size of the diagram box in page pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def diagram_anchor(page: PageConfig, thresholds: PipelineThresholds = PIPELINE_THRESHOLDS) -> DiagramAnchor:
    """
    Diagram box inset from the right edge, a fixed fraction down the page.

    Example:
        >>> diagram_anchor(PageConfig(width=1000, height=1000))
        DiagramAnchor(x=600, y=300, width=300, height=200)
    """
    x = page.width * (1 - thresholds.diagram_right_ratio) - thresholds.diagram_width
    y = page.height * thresholds.diagram_top_ratio
    return DiagramAnchor(
        x=int(round(x)),
        y=int(round(y)),
        width=thresholds.diagram_width,
        height=thresholds.diagram_height,
    )


def diagram_caption(kind: DiagramKind) -> str:
    return f"Fig 1.1: {kind.value} diagram"


class PencilDiagramProvider:
    """
    Wobbly pencil sketches: a loop circuit with a cell and resistor, axes
    with a curve, an oblique box projection, linked gears and a free stroke.
    """

    def __init__(self, random_source: Optional[RandomSource] = None, wobble: float = 1.0):
        self.rng = random_source or HotRandom()
        self.wobble = wobble

    def draw(self, kind: DiagramKind, size: Tuple[int, int]) -> Image.Image:
        image = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        sx = size[0] / _SKETCH_SIZE[0]
        sy = size[1] / _SKETCH_SIZE[1]

        def line(x1: float, y1: float, x2: float, y2: float) -> None:
            self._pencil_line(draw, (x1 * sx, y1 * sy), (x2 * sx, y2 * sy))

        def circle(cx: float, cy: float, r: float) -> None:
            self._pencil_circle(draw, (cx * sx, cy * sy), r * min(sx, sy))

        if kind is DiagramKind.CIRCUIT:
            for (x1, y1, x2, y2) in ((50, 50, 350, 50), (350, 50, 350, 250), (350, 250, 50, 250), (50, 250, 50, 50)):
                line(x1, y1, x2, y2)
            line(40, 140, 60, 140)
            line(30, 160, 70, 160)
            zigzag = [(150, 50), (160, 40), (180, 60), (200, 40), (220, 60), (240, 40), (250, 50)]
            for a, b in zip(zigzag, zigzag[1:]):
                line(a[0], a[1], b[0], b[1])
        elif kind is DiagramKind.GRAPH:
            line(50, 250, 350, 250)
            line(50, 250, 50, 50)
            curve = [(x, 150 + math.sin((x - 50) / 50) * 50) for x in range(50, 351, 30)]
            for a, b in zip(curve, curve[1:]):
                line(a[0], a[1], b[0], b[1])
        elif kind is DiagramKind.PROJECTION:
            for (x, y) in ((100, 100), (130, 70)):
                line(x, y, x + 150, y)
                line(x + 150, y, x + 150, y + 100)
                line(x + 150, y + 100, x, y + 100)
                line(x, y + 100, x, y)
            for (x, y) in ((100, 100), (250, 100), (100, 200), (250, 200)):
                line(x, y, x + 30, y - 30)
        elif kind is DiagramKind.MECHANISM:
            circle(140, 150, 60)
            circle(270, 150, 45)
            line(140, 150, 270, 150)
        else:
            points = [(50 + i * 30, 150 + math.sin(i) * 40) for i in range(11)]
            for a, b in zip(points, points[1:]):
                line(a[0], a[1], b[0], b[1])

        logger.debug(f"Sketched {kind.value} diagram at {size[0]}x{size[1]}")
        return image

    def _pencil_line(self, draw: ImageDraw.ImageDraw, start: Point, end: Point, steps: int = 10) -> None:
        """Two overlapping wobbly strokes from start to end."""
        for _ in range(2):
            points: List[Point] = [(
                start[0] + symmetric(self.rng, self.wobble),
                start[1] + symmetric(self.rng, self.wobble),
            )]
            for j in range(1, steps + 1):
                t = j / steps
                points.append((
                    start[0] + (end[0] - start[0]) * t + symmetric(self.rng, self.wobble),
                    start[1] + (end[1] - start[1]) * t + symmetric(self.rng, self.wobble),
                ))
            draw.line(points, fill=PENCIL_COLOR, width=1)

    def _pencil_circle(self, draw: ImageDraw.ImageDraw, center: Point, radius: float) -> None:
        points: List[Point] = []
        angle = 0.0
        while angle <= math.pi * 2:
            r = radius + symmetric(self.rng, self.wobble * 1.5)
            points.append((center[0] + r * math.cos(angle), center[1] + r * math.sin(angle)))
            angle += 0.1
        points.append(points[0])
        draw.line(points, fill=PENCIL_COLOR, width=1)
