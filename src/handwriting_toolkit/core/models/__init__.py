"""
Core Models Package

Immutable, validated data models that serve as the single source of truth.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation during a render pass
2. Safe to pass between page-rendering threads
3. Derived values (e.g. a page's fatigued style) are new instances
"""

from .style import HandwritingStyle, StyleProfile
from .page import PageConfig, PaperType
from .tokens import Token, TokenKind, ListItem
from .plan import DiagramKind, PageContent, ExamPlan
from .extraction import StyleExtractionResult

__all__ = [
    "HandwritingStyle",
    "StyleProfile",
    "PageConfig",
    "PaperType",
    "Token",
    "TokenKind",
    "ListItem",
    "DiagramKind",
    "PageContent",
    "ExamPlan",
    "StyleExtractionResult",
]
