"""Handwriting style extraction from sample images."""

from .style_extractor import (
    default_result,
    extract_style,
    profile_from_extraction,
    style_from_extraction,
)

__all__ = [
    "default_result",
    "extract_style",
    "profile_from_extraction",
    "style_from_extraction",
]
