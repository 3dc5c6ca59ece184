"""
Unit Tests for Ink Flow

Tests for apply_ink_flow().
"""

import numpy as np
from PIL import Image

from handwriting_toolkit.builder.ink import apply_ink_flow
from handwriting_toolkit.common.thresholds import PipelineThresholds
from handwriting_toolkit.core.utils.random_source import SeededRandom


def _square_on_white(color=(0, 0, 0)):
    surface = Image.new("RGB", (50, 50), "white")
    surface.paste(color, (10, 10, 20, 20))
    return surface


class TestApplyInkFlow:
    """Tests for apply_ink_flow function."""

    def test_flow_when_ink_present_then_only_ink_lightened(self):
        # Arrange
        surface = _square_on_white()

        # Act
        count = apply_ink_flow(surface, SeededRandom(1))

        # Assert
        pixels = np.asarray(surface).astype(int)
        assert count == 100
        assert pixels[10:20, 10:20].max() < 20
        assert pixels[10:20, 10:20].sum() > 0
        assert (pixels[30:, 30:] == 255).all()

    def test_flow_when_applied_then_channels_shifted_equally(self):
        surface = _square_on_white()

        apply_ink_flow(surface, SeededRandom(2))

        square = np.asarray(surface)[10:20, 10:20]
        assert (square[..., 0] == square[..., 1]).all()
        assert (square[..., 1] == square[..., 2]).all()

    def test_flow_when_no_ink_then_unchanged(self):
        surface = Image.new("RGB", (20, 20), "white")
        before = surface.tobytes()

        count = apply_ink_flow(surface, SeededRandom(1))

        assert count == 0
        assert surface.tobytes() == before

    def test_flow_when_red_above_threshold_then_not_ink(self):
        """Ink is judged on the red channel only."""
        surface = _square_on_white(color=(230, 0, 0))

        assert apply_ink_flow(surface, SeededRandom(1)) == 0

    def test_flow_when_threshold_raised_then_more_pixels_count(self):
        surface = _square_on_white(color=(230, 0, 0))

        count = apply_ink_flow(surface, SeededRandom(1), PipelineThresholds(ink_flow_threshold=240))

        assert count == 100

    def test_flow_when_same_seed_then_same_result(self):
        a, b = _square_on_white(), _square_on_white()

        apply_ink_flow(a, SeededRandom(4))
        apply_ink_flow(b, SeededRandom(4))

        assert a.tobytes() == b.tobytes()
