"""
Module: planner.paginator

Purpose:
    Split an answer into page-sized chunks under a character budget and
    decide which page carries the supplementary diagram.

Key Functions:
    - plan_pages(): Answer text -> ExamPlan

Algorithm:
    1. Split the answer into paragraphs on newlines
    2. Accumulate paragraphs into a buffer, counting characters (the
       newline itself is not counted)
    3. Before adding a paragraph that would take the count past the budget,
       seal the buffer as a page, unless the buffer is still blank
    4. Seal whatever remains; an empty answer still yields one page
    5. Flag exactly one page for the diagram: the preferred page, or the
       last page when the plan is shorter than that

Dependencies:
    - core.models.plan: PageContent, ExamPlan, DiagramKind
    - common.thresholds: Page budget

Used By:
    - builder.controller: Exam rendering
    - __main__: CLI
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from handwriting_toolkit.common.thresholds import PAGINATION_THRESHOLDS, PaginationThresholds
from handwriting_toolkit.core.models.plan import DiagramKind, ExamPlan, PageContent

logger = logging.getLogger(__name__)


def plan_pages(
    answer_text: str,
    subject: str,
    requires_diagram: bool = False,
    diagram_type: Optional[Union[DiagramKind, str]] = None,
    *,
    thresholds: PaginationThresholds = PAGINATION_THRESHOLDS,
) -> ExamPlan:
    """
    Plan pages for an answer.

    A page holds at most chars_per_page characters, except that a single
    paragraph is never split: a page may overflow by one paragraph when
    that paragraph alone exceeds the budget.

    Args:
        answer_text: Full answer (paragraphs separated by newlines)
        subject: Subject label for the plan
        requires_diagram: Whether one page must carry a diagram
        diagram_type: Diagram kind (DiagramKind or its string value); ignored
            unless requires_diagram, unknown values fall back to freehand
        thresholds: Page budget and preferred diagram page

    Returns:
        ExamPlan with at least one page

    Example:
        >>> plan = plan_pages("Given: x = 2\\nTherefore x^2 = 4", "Maths")
        >>> plan.total_pages
        1
    """
    kind = _diagram_kind(diagram_type) if requires_diagram else None
    budget = thresholds.chars_per_page

    chunks: List[str] = []
    buffer = ""
    chars = 0

    for paragraph in answer_text.split("\n"):
        if chars + len(paragraph) > budget and buffer.strip() != "":
            chunks.append(buffer.strip())
            buffer = ""
            chars = 0
        buffer += paragraph + "\n"
        chars += len(paragraph)

    if buffer.strip() != "" or not chunks:
        chunks.append(buffer.strip())

    diagram_page = _diagram_page_number(len(chunks), requires_diagram, thresholds)
    pages = tuple(
        PageContent(
            page_number=number,
            content=content,
            has_diagram=number == diagram_page,
            diagram_type=kind if number == diagram_page else None,
        )
        for number, content in enumerate(chunks, start=1)
    )

    plan = ExamPlan(subject=subject, pages=pages)
    logger.info(
        f"Planned {plan.total_pages} page(s) for {subject!r} "
        f"({len(answer_text)} chars, diagram page: {diagram_page or 'none'})"
    )
    return plan


def _diagram_kind(diagram_type: Optional[Union[DiagramKind, str]]) -> Optional[DiagramKind]:
    """Resolve the requested kind; unknown values fall back to a freehand sketch."""
    if diagram_type is None:
        return None
    try:
        return DiagramKind(diagram_type)
    except ValueError:
        logger.warning(f"Unknown diagram type {diagram_type!r}, using {DiagramKind.FREEHAND.value!r}")
        return DiagramKind.FREEHAND


def _diagram_page_number(
    total_pages: int,
    requires_diagram: bool,
    thresholds: PaginationThresholds,
) -> Optional[int]:
    """Pick the single page that carries the diagram (None if not required)."""
    if not requires_diagram:
        return None
    preferred = max(1, thresholds.preferred_diagram_page)
    return preferred if preferred <= total_pages else total_pages
