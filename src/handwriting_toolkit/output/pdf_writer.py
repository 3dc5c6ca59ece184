"""
Module: output.pdf_writer

Purpose:
    Export rendered page surfaces. Each page becomes one full-bleed PDF page
    (or one PNG file) at the page's pixel size.

Key Functions:
    - write_pdf(): Multi-page PDF via ReportLab
    - write_png(): One PNG per page

Dependencies:
    - reportlab: PDF generation
    - PIL: Image encoding

Used By:
    - __main__: CLI export
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Sequence

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from handwriting_toolkit.builder.controller import PageSurface

logger = logging.getLogger(__name__)

# Page surfaces are laid out at CSS pixel density (A4 = 794 x 1123)
DEFAULT_DPI = 96


def write_pdf(pages: Sequence[PageSurface], output_path: Path, *, dpi: int = DEFAULT_DPI) -> Path:
    """
    Write pages to a PDF file.

    The PDF page size is taken from each surface, so a page keeps its
    physical size at the given DPI.

    Args:
        pages: Rendered pages in order
        output_path: Path to write
        dpi: Pixel density of the surfaces

    Returns:
        The output path

    Raises:
        ValueError: If there are no pages
        OSError: If the PDF cannot be written
    """
    if not pages:
        raise ValueError("No pages to write")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    first_w, first_h = pages[0].size
    c = canvas.Canvas(str(output_path), pagesize=(_px_to_pt(first_w, dpi), _px_to_pt(first_h, dpi)))
    for page in pages:
        width_pt = _px_to_pt(page.size[0], dpi)
        height_pt = _px_to_pt(page.size[1], dpi)
        c.setPageSize((width_pt, height_pt))
        c.drawImage(_pil_to_reader(page.image), 0, 0, width=width_pt, height=height_pt)
        c.showPage()
    c.save()

    logger.info(f"Wrote {len(pages)} page(s) to {output_path}")
    return output_path


def write_png(pages: Sequence[PageSurface], output_path: Path) -> List[Path]:
    """
    Write pages as PNG files.

    A single page is written to output_path; several pages get a
    "_p<n>" suffix before the extension.

    Returns:
        Paths written, in page order
    """
    if not pages:
        raise ValueError("No pages to write")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for page in pages:
        if len(pages) == 1:
            target = output_path
        else:
            target = output_path.with_name(f"{output_path.stem}_p{page.page_number}{output_path.suffix}")
        page.image.save(target, format="PNG")
        written.append(target)

    logger.info(f"Wrote {len(written)} PNG file(s) next to {output_path}")
    return written


def _pil_to_reader(img: Image.Image) -> ImageReader:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _px_to_pt(px: int, dpi: int = DEFAULT_DPI) -> float:
    """Convert pixels to PDF points (1/72 inch)."""
    return px * 72.0 / dpi
