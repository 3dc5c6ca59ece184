"""
Unit Tests for Diagram Support

Tests for diagram anchoring, captions and the pencil sketch provider.
"""

import numpy as np
import pytest

from handwriting_toolkit.builder.diagrams import (
    DiagramAnchor,
    DiagramProvider,
    PencilDiagramProvider,
    diagram_anchor,
    diagram_caption,
)
from handwriting_toolkit.core.models import DiagramKind, PageConfig
from handwriting_toolkit.core.utils.random_source import SeededRandom


class TestDiagramAnchor:
    """Tests for diagram_anchor function."""

    def test_anchor_when_default_page_then_right_of_text_column(self, page_config):
        anchor = diagram_anchor(page_config)

        # 794 * 0.9 - 300 = 414.6, 1123 * 0.3 = 336.9
        assert anchor == DiagramAnchor(x=415, y=337, width=300, height=200)

    def test_anchor_when_square_page_then_scaled_position(self):
        anchor = diagram_anchor(PageConfig(width=1000, height=1000))

        assert anchor.box == (600, 300, 900, 500)


class TestDiagramCaption:
    def test_caption_when_kind_then_figure_label(self):
        assert diagram_caption(DiagramKind.CIRCUIT) == "Fig 1.1: circuit diagram"


class TestPencilDiagramProvider:
    """Tests for PencilDiagramProvider."""

    @pytest.mark.parametrize("kind", list(DiagramKind))
    def test_draw_when_kind_then_transparent_sketch_of_size(self, kind):
        provider = PencilDiagramProvider(random_source=SeededRandom(1))

        image = provider.draw(kind, (300, 200))

        alpha = np.asarray(image)[..., 3]
        assert image.mode == "RGBA"
        assert image.size == (300, 200)
        assert alpha.max() == 255
        assert alpha.min() == 0

    def test_draw_when_same_seed_then_same_sketch(self):
        a = PencilDiagramProvider(random_source=SeededRandom(3)).draw(DiagramKind.GRAPH, (300, 200))
        b = PencilDiagramProvider(random_source=SeededRandom(3)).draw(DiagramKind.GRAPH, (300, 200))

        assert a.tobytes() == b.tobytes()

    def test_provider_when_checked_then_satisfies_protocol(self):
        assert isinstance(PencilDiagramProvider(), DiagramProvider)
