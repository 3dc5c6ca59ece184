"""
Module: plan

Purpose:
    Data models for page planning. An ExamPlan is the authoritative
    description of how an answer is split into pages; PageContent entries
    are created once by the paginator and never mutated afterwards.

Key Classes:
    - DiagramKind: Diagram tag understood by diagram providers
    - PageContent: Text and diagram flag for one page
    - ExamPlan: Ordered pages for a subject

Dependencies:
    - dataclasses (std)

Used By:
    - planner.paginator: Creates plans
    - builder.controller: Renders plans
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class DiagramKind(str, Enum):
    """Kinds of supplementary diagram a page may carry."""
    CIRCUIT = "circuit"
    GRAPH = "graph"
    PROJECTION = "projection"
    MECHANISM = "mechanism"
    FREEHAND = "freehand"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PageContent:
    """
    Content planned for a single page.

    Attributes:
        page_number: 1-based page number
        content: Text for the page (paragraphs joined by newlines)
        has_diagram: Whether the diagram is anchored on this page
        diagram_type: Diagram kind when has_diagram is set

    Example:
        >>> page = PageContent(1, "Given: x = 2", has_diagram=False)
        >>> page.char_count
        12
    """

    page_number: int
    content: str
    has_diagram: bool = False
    diagram_type: Optional[DiagramKind] = None

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1: {self.page_number}")
        if self.diagram_type is not None and not self.has_diagram:
            raise ValueError("diagram_type set on a page without a diagram")

    @property
    def char_count(self) -> int:
        """Number of characters planned for this page."""
        return len(self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "page_number": self.page_number,
            "content": self.content,
            "has_diagram": self.has_diagram,
            "diagram_type": self.diagram_type.value if self.diagram_type else None,
        }


@dataclass(frozen=True)
class ExamPlan:
    """
    Complete page plan for an answer.

    Attributes:
        subject: Subject label drawn in the page header
        pages: Pages in order; page numbers are 1..n

    Invariants:
        - At least one page
        - Page numbers are contiguous and start at 1
    """

    subject: str
    pages: tuple[PageContent, ...]

    def __post_init__(self) -> None:
        if not self.pages:
            raise ValueError("ExamPlan must contain at least one page")
        for expected, page in enumerate(self.pages, start=1):
            if page.page_number != expected:
                raise ValueError(
                    f"Page numbers must be contiguous from 1: got {page.page_number} at position {expected}"
                )

    @property
    def total_pages(self) -> int:
        """Number of pages in the plan."""
        return len(self.pages)

    @property
    def diagram_page(self) -> Optional[PageContent]:
        """The page carrying the diagram, if any."""
        for page in self.pages:
            if page.has_diagram:
                return page
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "total_pages": self.total_pages,
            "pages": [page.to_dict() for page in self.pages],
        }
