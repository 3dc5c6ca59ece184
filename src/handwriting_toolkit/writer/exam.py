"""
Module: writer.exam

Purpose:
    Exam-style answer rendering layered on the glyph layout engine:
    question number left of the margin rule, "Ans:" line, step-by-step
    answer lines with prefix-based formatting, occasional struck-out
    self-corrections and an underlined final answer.

Key Classes:
    - ExamQuestion: One question/answer pair
    - ExamQuestionRenderer: Draws questions and returns the next free y

Line formatting (by prefix):
    - "Step", "Given", "Therefore": darker ink
    - "Final Answer": normal ink + hand-drawn arched underline
    - anything else: normal ink

Dependencies:
    - PIL: Strike and underline strokes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from PIL import Image, ImageDraw

from handwriting_toolkit.common.thresholds import EXAM_THRESHOLDS, ExamThresholds
from handwriting_toolkit.core.models.style import HandwritingStyle
from handwriting_toolkit.core.utils.random_source import RandomSource, symmetric

from .fonts import load_font, text_width
from .layout import GlyphLayoutEngine

logger = logging.getLogger(__name__)

EMPHASIS_PREFIXES = ("Step", "Given", "Therefore")
FINAL_ANSWER_PREFIX = "Final Answer"

# Samples along the underline's quadratic curve
_UNDERLINE_SEGMENTS = 24


@dataclass(frozen=True)
class ExamQuestion:
    """A question label, its text and a newline-separated answer."""

    number: str
    question: str
    answer: str


class ExamQuestionRenderer:
    """
    Renders exam answers onto a page surface.

    Args:
        engine: Layout engine for the page (its page geometry and random
            source are used)
        thresholds: Formatting constants, including correction probability
        random_source: Source for correction injection and stroke wobble
            (default: the engine's source)
    """

    def __init__(
        self,
        engine: GlyphLayoutEngine,
        thresholds: ExamThresholds = EXAM_THRESHOLDS,
        random_source: Optional[RandomSource] = None,
    ):
        self.engine = engine
        self.thresholds = thresholds
        self.rng = random_source or engine.rng

    def render_question(
        self,
        surface: Image.Image,
        q_num: str,
        question_text: str,
        answer_text: str,
        style: HandwritingStyle,
        start_y: float,
    ) -> float:
        """
        Draw one question and its answer.

        Args:
            surface: Page surface (paper already drawn)
            q_num: Question label, e.g. "1" or "Q2(a)"
            question_text: Question text (rich markup allowed)
            answer_text: Answer, one step per line
            style: Base handwriting style
            start_y: Baseline of the question line

        Returns:
            Next free y, including the gap between questions
        """
        t = self.thresholds
        margin_x = self.engine.page.margin_left
        content_x = margin_x + t.content_offset_px

        number_style = style.evolve(size=style.size * t.question_number_scale, color=t.question_number_color)
        self.engine.render_text(surface, q_num, number_style, margin_x - t.question_number_offset_px, start_y)

        current_y = self.engine.render_rich_text(
            surface, f"Ans: {question_text}", style.evolve(color=t.question_text_color), content_x, start_y
        )
        current_y += style.size * t.question_gap_ratio

        for step in answer_text.split("\n"):
            if self.rng.next() > 1.0 - t.correction_probability:
                self._simulate_correction(surface, content_x, current_y, style)
                current_y += style.size * t.correction_advance_ratio

            if step.startswith(EMPHASIS_PREFIXES):
                current_y = self.engine.render_rich_text(
                    surface, step, style.evolve(color=t.emphasis_color), content_x, current_y
                )
            elif step.startswith(FINAL_ANSWER_PREFIX):
                current_y = self._render_final_answer(surface, step, style, content_x, current_y)
            else:
                current_y = self.engine.render_rich_text(surface, step, style, content_x, current_y)

        logger.debug(f"Rendered question {q_num} ending at y={current_y:.1f}")
        return current_y + t.question_spacing_px

    def render_questions(
        self,
        surface: Image.Image,
        questions: Iterable[ExamQuestion],
        style: HandwritingStyle,
        start_y: float,
    ) -> float:
        """Stack several questions on one surface; returns the next free y."""
        y = start_y
        for question in questions:
            y = self.render_question(surface, question.number, question.question, question.answer, style, y)
        return y

    def _render_final_answer(
        self,
        surface: Image.Image,
        step: str,
        style: HandwritingStyle,
        content_x: float,
        y: float,
    ) -> float:
        layout = self.engine.render_rich_layout(surface, step, style, content_x, y)

        last_line = layout.last_line_index
        extent = layout.line_extent(last_line) if last_line is not None else None
        if extent is not None:
            width = extent[1] - content_x
            underline_y = layout.last_baseline + style.size * self.thresholds.underline_drop_ratio
            self._draw_underline(surface, content_x, underline_y, width)
        return layout.end_y

    def _simulate_correction(
        self,
        surface: Image.Image,
        x: float,
        y: float,
        style: HandwritingStyle,
    ) -> None:
        """Write the mistake phrase and scratch it out with a wobbly stroke."""
        t = self.thresholds
        phrase = t.correction_phrase
        self.engine.render_text(surface, phrase, style, x, y)

        width = text_width(load_font(style.font, int(round(style.size))), phrase)
        points = [
            (x + i, y - t.strike_raise_px + symmetric(self.rng, t.strike_wobble_px))
            for i in range(0, int(width), t.strike_step_px)
        ]
        if len(points) > 1:
            ImageDraw.Draw(surface).line(points, fill=style.color, width=t.strike_width)
        logger.debug(f"Injected correction at y={y:.1f}")

    def _draw_underline(self, surface: Image.Image, x: float, y: float, width: float) -> None:
        """Quadratic arc from (x, y) to (x + width, y), sagging by the arch."""
        if width <= 0:
            return
        ImageDraw.Draw(surface).line(
            _quadratic_points((x, y), (x + width / 2, y + self.thresholds.underline_arch_px), (x + width, y)),
            fill=self.thresholds.underline_color,
            width=1,
        )


def _quadratic_points(
    start: Tuple[float, float],
    control: Tuple[float, float],
    end: Tuple[float, float],
) -> List[Tuple[float, float]]:
    points = []
    for i in range(_UNDERLINE_SEGMENTS + 1):
        s = i / _UNDERLINE_SEGMENTS
        u = 1 - s
        points.append((
            u * u * start[0] + 2 * u * s * control[0] + s * s * end[0],
            u * u * start[1] + 2 * u * s * control[1] + s * s * end[1],
        ))
    return points
