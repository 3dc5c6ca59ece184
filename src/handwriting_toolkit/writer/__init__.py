"""Handwriting rendering: tokenizer, paper, glyph layout and exam answers."""

from .exam import ExamQuestion, ExamQuestionRenderer
from .layout import (
    BulletPlacement,
    GlyphLayoutEngine,
    GlyphPlacement,
    MathPlacement,
    TextLayout,
)
from .math_typesetting import (
    MathRender,
    MathTypesetter,
    MathTypesettingError,
    MathtextTypesetter,
    TextMathTypesetter,
)
from .paint import Affine, PaintState, glyph_transform
from .paper import draw_paper, new_page_surface
from .session import RenderCancelled, RenderSession, RenderTicket
from .tokenizer import parse_list_item, tokenize_line

__all__ = [
    "Affine",
    "BulletPlacement",
    "ExamQuestion",
    "ExamQuestionRenderer",
    "GlyphLayoutEngine",
    "GlyphPlacement",
    "MathPlacement",
    "MathRender",
    "MathTypesetter",
    "MathTypesettingError",
    "MathtextTypesetter",
    "PaintState",
    "RenderCancelled",
    "RenderSession",
    "RenderTicket",
    "TextLayout",
    "TextMathTypesetter",
    "draw_paper",
    "glyph_transform",
    "new_page_surface",
    "parse_list_item",
    "tokenize_line",
]
