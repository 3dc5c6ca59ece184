"""Centralized threshold and magic number configuration.

This module contains the hardcoded heuristics used by the paper compositor,
glyph layout engine, exam renderer, paginator and style extractor. Having them
in one place makes tuning easier; every consumer accepts an override instance
so tests and callers can change a value without touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PaperThresholds:
    """Colours and geometry for paper backgrounds."""

    default_paper_color: str = "#FFFEF5"  # Off-white
    vintage_paper_color: str = "#f0e6d2"  # Parchment
    noise_amplitude: float = 4.0  # ± luminance on an 8-bit channel

    ruled_line_color: str = "#d4e5f7"
    ruled_start_y: int = 100
    ruled_pitch_px: int = 30
    ruled_segment_px: int = 20
    ruled_wobble_px: float = 0.25  # ± per segment

    grid_line_color: str = "#e0e0e0"
    grid_size_px: int = 20

    margin_line_color: str = "#f87171"
    margin_line_width: int = 2
    margin_segment_px: int = 10
    margin_wobble_px: float = 1.0  # ± per segment


@dataclass
class GlyphLayoutThresholds:
    """Spacing constants for the glyph layout engine."""

    right_gutter_px: int = 40  # Distance kept clear of the right page edge
    list_indent_px: int = 30
    bullet_offset_px: int = 10
    italic_shear: float = -0.2  # x' = x + shear * y
    bold_stroke_px: int = 1
    blank_line_factor: float = 0.5  # Fraction of a line for blank paragraphs
    wave_period_px: float = 100.0  # sin(x / period) baseline drift
    inline_math_gap_px: int = 10
    math_baseline_ratio: float = 0.8  # Portion of a math run above the baseline


@dataclass
class ExamThresholds:
    """Formatting constants for exam question rendering."""

    question_number_offset_px: int = 45  # Left of the margin rule
    question_number_scale: float = 1.1
    question_number_color: str = "#ef4444"
    content_offset_px: int = 20  # Right of the margin rule
    question_text_color: str = "#334155"
    emphasis_color: str = "#000000"
    underline_color: str = "#1a1a1a"
    underline_drop_ratio: float = 0.25  # Below baseline, as a fraction of size
    underline_arch_px: float = 2.0
    question_gap_ratio: float = 0.5
    question_spacing_px: int = 40  # Gap returned after each question

    correction_probability: float = 0.01
    correction_phrase: str = "wronng value"
    correction_advance_ratio: float = 1.2
    strike_step_px: int = 5
    strike_wobble_px: float = 5.0  # ± per step
    strike_raise_px: int = 10  # Above baseline
    strike_width: int = 2


@dataclass
class PaginationThresholds:
    """Page budget for the document paginator."""

    chars_per_page: int = 1200  # Heuristic: A4 at 24px
    preferred_diagram_page: int = 1


@dataclass
class ExtractionThresholds:
    """Parameters for the handwriting style extractor."""

    analysis_size: int = 512
    ink_threshold: int = 128
    slant_min_deg: int = -20
    slant_max_deg: int = 20
    slant_step_deg: int = 5
    stroke_scale: float = 100.0
    stroke_min: float = 1.0
    stroke_max: float = 5.0
    messiness_slant_divisor: float = 30.0
    messiness_floor: float = 0.1
    fallback_spacing: float = 10.0

    # Neutral result for blank or undecodable samples
    default_stroke_width: float = 2.0
    default_spacing: float = 5.0
    default_messiness: float = 0.1


@dataclass
class PipelineThresholds:
    """Per-page effects applied by the page rendering pipeline."""

    fatigue_messiness_step: float = 0.15  # Per-page perturbation multiplier step
    fatigue_slant_step: float = 0.5  # Degrees added per page
    fatigue_spacing_step: float = 0.05  # Per-page word spacing multiplier step

    header_scale: float = 0.8
    header_color: str = "#64748b"
    header_raise_px: int = 40  # Above the top margin

    ink_flow_threshold: int = 200  # Red channel below this counts as ink
    ink_flow_max: float = 20.0

    diagram_width: int = 300
    diagram_height: int = 200
    diagram_right_ratio: float = 0.10
    diagram_top_ratio: float = 0.30
    caption_color: str = "#94a3b8"
    caption_size: int = 12


# Global instances for easy import
PAPER_THRESHOLDS = PaperThresholds()
LAYOUT_THRESHOLDS = GlyphLayoutThresholds()
EXAM_THRESHOLDS = ExamThresholds()
PAGINATION_THRESHOLDS = PaginationThresholds()
EXTRACTION_THRESHOLDS = ExtractionThresholds()
PIPELINE_THRESHOLDS = PipelineThresholds()
