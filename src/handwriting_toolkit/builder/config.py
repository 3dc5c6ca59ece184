"""
Module: builder.config

Purpose:
    Configuration dataclass for the page rendering pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - RenderConfig: Pipeline switches, concurrency and thresholds

Used By:
    - builder.controller: render_page() / render_exam()
    - __main__: CLI
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from handwriting_toolkit.common.thresholds import (
    LAYOUT_THRESHOLDS,
    PAPER_THRESHOLDS,
    PIPELINE_THRESHOLDS,
    GlyphLayoutThresholds,
    PaperThresholds,
    PipelineThresholds,
)
from handwriting_toolkit.core.utils.random_source import HotRandom, RandomSource, SeededRandom


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for rendering pages (immutable).

    Attributes:
        apply_fatigue: Increase messiness, slant and spacing on later pages
        draw_header: Write the subject above the first line of each page
        apply_ink_flow: Lighten ink pixels randomly to mimic pen pressure
        draw_diagrams: Overlay the planned diagram on its page
        max_workers: Pages rendered in parallel (1 = sequential)
        seed: Seed for reproducible output (None = different every run)
        pipeline: Per-page effect constants
        paper: Paper background constants
        layout: Glyph layout constants

    Example:
        >>> config = RenderConfig(seed=7, max_workers=4)
        >>> config.make_random_source().next() == RenderConfig(seed=7).make_random_source().next()
        True
    """

    apply_fatigue: bool = True
    draw_header: bool = True
    apply_ink_flow: bool = True
    draw_diagrams: bool = True

    max_workers: int = 1
    seed: Optional[int] = None

    pipeline: PipelineThresholds = field(default_factory=lambda: PIPELINE_THRESHOLDS)
    paper: PaperThresholds = field(default_factory=lambda: PAPER_THRESHOLDS)
    layout: GlyphLayoutThresholds = field(default_factory=lambda: LAYOUT_THRESHOLDS)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1: {self.max_workers}")

    def make_random_source(self) -> RandomSource:
        """Seeded source when a seed is set, otherwise an unseeded one."""
        if self.seed is None:
            return HotRandom()
        return SeededRandom(self.seed)
