"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .thresholds import (
    PaperThresholds,
    GlyphLayoutThresholds,
    ExamThresholds,
    PaginationThresholds,
    ExtractionThresholds,
    PipelineThresholds,
    PAPER_THRESHOLDS,
    LAYOUT_THRESHOLDS,
    EXAM_THRESHOLDS,
    PAGINATION_THRESHOLDS,
    EXTRACTION_THRESHOLDS,
    PIPELINE_THRESHOLDS,
)

__all__ = [
    "PaperThresholds",
    "GlyphLayoutThresholds",
    "ExamThresholds",
    "PaginationThresholds",
    "ExtractionThresholds",
    "PipelineThresholds",
    "PAPER_THRESHOLDS",
    "LAYOUT_THRESHOLDS",
    "EXAM_THRESHOLDS",
    "PAGINATION_THRESHOLDS",
    "EXTRACTION_THRESHOLDS",
    "PIPELINE_THRESHOLDS",
]
