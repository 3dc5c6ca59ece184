"""
Handwriting Toolkit Core Package

Shared data models and utilities used by every other subpackage.

1. **Immutable Data Models**
   - Styles, page geometry, tokens and plans are frozen dataclasses
   - Changes produce new instances, never in-place mutation

2. **Pluggable Randomness**
   - All stochastic code draws from a RandomSource
   - Hot (unseeded) by default, seeded or pooled for reproducible output
"""

from .models import (
    HandwritingStyle,
    StyleProfile,
    PageConfig,
    PaperType,
    Token,
    TokenKind,
    DiagramKind,
    PageContent,
    ExamPlan,
    StyleExtractionResult,
)
from .utils.random_source import RandomSource, HotRandom, SeededRandom

__all__ = [
    "HandwritingStyle",
    "StyleProfile",
    "PageConfig",
    "PaperType",
    "Token",
    "TokenKind",
    "DiagramKind",
    "PageContent",
    "ExamPlan",
    "StyleExtractionResult",
    "RandomSource",
    "HotRandom",
    "SeededRandom",
]
