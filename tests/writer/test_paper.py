"""
Unit Tests for Paper Backgrounds

Tests for draw_paper() and new_page_surface().
"""

import numpy as np
import pytest
from PIL import Image, ImageColor

from handwriting_toolkit.common.thresholds import PaperThresholds
from handwriting_toolkit.core.models import PageConfig, PaperType
from handwriting_toolkit.core.utils.random_source import ConstantRandom, SeededRandom
from handwriting_toolkit.writer.paper import draw_paper, new_page_surface, paper_color


@pytest.fixture
def quiet_paper():
    """Paper thresholds without grain so colours can be compared exactly."""
    return PaperThresholds(noise_amplitude=0.0)


def _rgb(color):
    return tuple(ImageColor.getrgb(color)[:3])


class TestPaperColor:
    def test_color_when_vintage_then_parchment(self):
        assert paper_color(PageConfig(paper_type=PaperType.VINTAGE)) == "#f0e6d2"

    def test_color_when_override_then_override(self):
        assert paper_color(PageConfig(paper_color="#ffffff")) == "#ffffff"


class TestDrawPaper:
    """Tests for draw_paper function."""

    def test_draw_when_plain_then_base_colour_away_from_margin(self, quiet_paper):
        # Arrange
        config = PageConfig(paper_type=PaperType.PLAIN)
        surface = Image.new("RGB", config.size, "black")

        # Act
        draw_paper(surface, config, random_source=ConstantRandom(), thresholds=quiet_paper)

        # Assert
        assert surface.getpixel((400, 55)) == _rgb("#FFFEF5")

    def test_draw_when_ruled_then_rule_near_first_line(self, quiet_paper):
        config = PageConfig(paper_type=PaperType.RULED)
        surface = Image.new("RGB", config.size)

        draw_paper(surface, config, random_source=ConstantRandom(), thresholds=quiet_paper)

        column = [surface.getpixel((400, y)) for y in range(98, 103)]
        assert _rgb(quiet_paper.ruled_line_color) in column

    def test_draw_when_grid_then_grid_colour_on_grid_row(self, quiet_paper):
        config = PageConfig(paper_type=PaperType.GRID)
        surface = Image.new("RGB", config.size)

        draw_paper(surface, config, random_source=ConstantRandom(), thresholds=quiet_paper)

        assert surface.getpixel((310, 200)) == _rgb(quiet_paper.grid_line_color)
        assert surface.getpixel((310, 210)) == _rgb(quiet_paper.default_paper_color)

    def test_draw_when_margin_colour_given_then_margin_drawn_in_it(self, quiet_paper):
        config = PageConfig(paper_type=PaperType.PLAIN, margin_left=80, margin_color="#0000ff")
        surface = Image.new("RGB", config.size)

        draw_paper(surface, config, random_source=ConstantRandom(), thresholds=quiet_paper)

        row = [surface.getpixel((x, 500)) for x in range(76, 85)]
        assert (0, 0, 255) in row

    def test_draw_when_grain_enabled_then_pixels_vary_within_amplitude(self):
        config = PageConfig(paper_type=PaperType.PLAIN)
        surface = Image.new("RGB", config.size)

        draw_paper(surface, config, random_source=SeededRandom(1))

        block = np.asarray(surface)[200:260, 300:360].astype(int)
        base = np.array(_rgb("#FFFEF5"))
        assert block.std() > 0
        assert np.abs(block - base).max() <= 4


class TestNewPageSurface:
    def test_new_surface_when_created_then_rgb_page_size(self, page_config):
        surface = new_page_surface(page_config, random_source=ConstantRandom())

        assert surface.mode == "RGB"
        assert surface.size == page_config.size

    def test_new_surface_when_same_seed_then_identical(self, small_page):
        a = new_page_surface(small_page, random_source=SeededRandom(3))
        b = new_page_surface(small_page, random_source=SeededRandom(3))

        assert a.tobytes() == b.tobytes()
