"""Export of rendered pages."""

from .pdf_writer import write_pdf, write_png

__all__ = ["write_pdf", "write_png"]
