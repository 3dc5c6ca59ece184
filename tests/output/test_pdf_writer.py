"""
Unit Tests for Page Export

Tests for write_pdf() and write_png().
"""

import re
import pytest
from pathlib import Path
from PIL import Image

from handwriting_toolkit.builder import PageSurface
from handwriting_toolkit.output import write_pdf, write_png
from handwriting_toolkit.output.pdf_writer import _px_to_pt


def _pages(count: int, size=(200, 100)):
    return [PageSurface(page_number=i + 1, image=Image.new("RGB", size, "white")) for i in range(count)]


class TestWritePdf:
    """Tests for write_pdf function."""

    def test_write_when_pages_then_one_pdf_page_each(self, tmp_path: Path):
        # Arrange
        output = tmp_path / "out" / "answer.pdf"

        # Act
        written = write_pdf(_pages(3), output)

        # Assert
        data = written.read_bytes()
        assert written == output
        assert data.startswith(b"%PDF")
        assert len(re.findall(rb"/Type /Page\b", data)) == 3

    def test_write_when_no_pages_then_raises(self, tmp_path: Path):
        with pytest.raises(ValueError, match="No pages"):
            write_pdf([], tmp_path / "empty.pdf")

    def test_px_to_pt_when_96_dpi_then_three_quarters(self):
        assert _px_to_pt(96) == 72.0
        assert _px_to_pt(794) == pytest.approx(595.5)


class TestWritePng:
    """Tests for write_png function."""

    def test_write_when_single_page_then_exact_path(self, tmp_path: Path):
        output = tmp_path / "page.png"

        written = write_png(_pages(1), output)

        assert written == [output]
        with Image.open(output) as img:
            assert img.size == (200, 100)

    def test_write_when_several_pages_then_numbered_suffixes(self, tmp_path: Path):
        written = write_png(_pages(2), tmp_path / "answer.png")

        assert [p.name for p in written] == ["answer_p1.png", "answer_p2.png"]
        assert all(p.exists() for p in written)

    def test_write_when_no_pages_then_raises(self, tmp_path: Path):
        with pytest.raises(ValueError):
            write_png([], tmp_path / "x.png")
