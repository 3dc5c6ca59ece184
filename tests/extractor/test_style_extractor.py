"""
Unit Tests for the Style Extractor

Tests for slant, stroke and spacing heuristics on synthetic samples, the
neutral fallback and the mapping onto styles and profiles.
"""

import io
import math
import numpy as np
import pytest
from pathlib import Path
from PIL import Image

from handwriting_toolkit.core.models import HandwritingStyle, StyleExtractionResult
from handwriting_toolkit.extractor import (
    default_result,
    extract_style,
    profile_from_extraction,
    style_from_extraction,
)


SIZE = 512


def _bars(pitch: int = 40, lean_deg: float = 0.0, thickness: int = 3) -> np.ndarray:
    """
    White canvas with dark vertical strokes.

    A positive lean tilts the stroke tops to the right, like right-leaning
    handwriting.
    """
    pixels = np.full((SIZE, SIZE, 3), 255, dtype=np.uint8)
    tan = math.tan(math.radians(lean_deg))
    for y in range(60, 460):
        shift = int(round((SIZE - 1 - y) * tan))
        for x0 in range(150, 360, pitch):
            x = x0 + shift
            pixels[y, x:x + thickness] = 0
    return pixels


class TestExtractStyle:
    """Tests for extract_style function."""

    def test_extract_when_vertical_strokes_then_no_slant(self):
        result = extract_style(Image.fromarray(_bars()))

        assert result.slant == 0
        assert not result.is_default

    def test_extract_when_right_leaning_then_negative_deskew(self):
        # Act
        result = extract_style(Image.fromarray(_bars(lean_deg=10)))

        # Assert
        assert abs(result.slant - (-10)) <= 5
        assert result.handwriting_slant > 0

    def test_extract_when_left_leaning_then_positive_deskew(self):
        result = extract_style(Image.fromarray(_bars(lean_deg=-15)))

        assert abs(result.slant - 15) <= 5

    def test_extract_when_regular_gaps_then_spacing_is_gap_width(self):
        result = extract_style(Image.fromarray(_bars(pitch=40, thickness=3)))

        assert result.avg_spacing == pytest.approx(37, abs=1)

    def test_extract_when_strokes_then_width_clamped_to_range(self):
        result = extract_style(Image.fromarray(_bars(thickness=30, pitch=40)))

        assert 1.0 <= result.stroke_width <= 5.0
        assert result.stroke_width == 5.0

    def test_extract_when_slanted_then_messier(self):
        upright = extract_style(Image.fromarray(_bars()))
        slanted = extract_style(Image.fromarray(_bars(lean_deg=15)))

        assert upright.messiness == pytest.approx(0.1)
        assert slanted.messiness > upright.messiness

    def test_extract_when_blank_image_then_default(self):
        result = extract_style(Image.new("RGB", (200, 100), "white"))

        assert result == default_result()
        assert result.is_default

    def test_extract_when_bytes_not_an_image_then_default(self):
        assert extract_style(b"definitely not a png").is_default

    def test_extract_when_missing_file_then_default(self, tmp_path: Path):
        assert extract_style(tmp_path / "missing.png").is_default

    def test_extract_when_path_then_same_as_image(self, tmp_path: Path):
        # Arrange
        pixels = _bars(lean_deg=10)
        path = tmp_path / "sample.png"
        Image.fromarray(pixels).save(path)

        # Act / Assert
        assert extract_style(path) == extract_style(Image.fromarray(pixels))

    def test_extract_when_encoded_bytes_then_same_as_image(self):
        pixels = _bars()
        buf = io.BytesIO()
        Image.fromarray(pixels).save(buf, format="PNG")

        assert extract_style(buf.getvalue()) == extract_style(Image.fromarray(pixels))

    def test_extract_when_ndarray_then_accepted(self):
        assert not extract_style(_bars()).is_default

    def test_extract_when_small_sample_then_resized_for_analysis(self, sample_image):
        """A blank on-disk sample resizes fine and falls back to default."""
        assert extract_style(sample_image).is_default


class TestStyleMapping:
    """Tests for style_from_extraction / profile_from_extraction."""

    @pytest.fixture
    def result(self) -> StyleExtractionResult:
        return StyleExtractionResult(slant=-10, stroke_width=2.5, avg_spacing=20, messiness=0.4)

    def test_style_when_mapped_then_scaled_fields(self, result):
        style = style_from_extraction(result)

        assert style.size == 24
        assert style.color == "#000000"
        assert style.word_spacing == pytest.approx(10)
        assert style.letter_spacing == pytest.approx(2)
        assert style.perturbation == pytest.approx(2)
        assert style.rotation == pytest.approx(2)
        assert style.baseline_shift == pytest.approx(0.8)
        assert style.slant == 10

    def test_style_when_base_given_then_font_kept(self, result):
        style = style_from_extraction(result, HandwritingStyle(font="MyHand"))

        assert style.font == "MyHand"

    def test_profile_when_named_from_file_then_stem_used(self, result):
        profile = profile_from_extraction(result, "uploads/my_sample.jpg")

        assert profile.name == "my_sample"
        assert profile.detected_slant == -10
        assert profile.messiness_score == 0.4

    def test_profile_when_name_empty_then_placeholder(self, result):
        assert profile_from_extraction(result, "").name == "Custom Style"

    def test_profile_when_created_twice_then_distinct_ids(self, result):
        assert profile_from_extraction(result, "a").id != profile_from_extraction(result, "a").id
