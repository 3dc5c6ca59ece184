"""
Unit Tests for the Document Paginator

Tests for character-budget pagination and diagram page selection.
"""

import logging
import pytest

from handwriting_toolkit.common.thresholds import PaginationThresholds
from handwriting_toolkit.core.models import DiagramKind
from handwriting_toolkit.planner import plan_pages


def _paragraphs(count: int, length: int = 100) -> str:
    return "\n".join(chr(ord("a") + i % 26) * length for i in range(count))


class TestPlanPages:
    """Tests for plan_pages function."""

    def test_plan_when_short_answer_then_single_page(self):
        plan = plan_pages("Given: x = 2\nTherefore x^2 = 4", "Maths")

        assert plan.total_pages == 1
        assert plan.pages[0].content == "Given: x = 2\nTherefore x^2 = 4"
        assert plan.subject == "Maths"

    def test_plan_when_over_budget_then_split_on_paragraphs(self):
        # Arrange
        text = _paragraphs(30)

        # Act
        plan = plan_pages(text, "Physics")

        # Assert
        assert plan.total_pages == 3
        assert [p.content.count("\n") + 1 for p in plan.pages] == [12, 12, 6]
        assert "\n".join(p.content for p in plan.pages) == text

    def test_plan_when_paged_then_each_page_within_budget(self):
        plan = plan_pages(_paragraphs(40, 70), "Physics")

        for page in plan.pages:
            assert sum(len(line) for line in page.content.split("\n")) <= 1200

    def test_plan_when_custom_budget_then_used(self):
        thresholds = PaginationThresholds(chars_per_page=10)

        plan = plan_pages("aaaaa\nbbbbb\nccccc", "Maths", thresholds=thresholds)

        assert [p.content for p in plan.pages] == ["aaaaa\nbbbbb", "ccccc"]

    def test_plan_when_paragraph_exceeds_budget_then_kept_whole(self):
        thresholds = PaginationThresholds(chars_per_page=10)

        plan = plan_pages("short\n" + "x" * 25 + "\nend", "Maths", thresholds=thresholds)

        assert [p.content for p in plan.pages] == ["short", "x" * 25, "end"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n  \n"])
    def test_plan_when_blank_then_one_empty_page(self, text):
        plan = plan_pages(text, "Maths")

        assert plan.total_pages == 1
        assert plan.pages[0].content == ""

    def test_plan_when_leading_blank_lines_then_not_sealed_as_page(self):
        thresholds = PaginationThresholds(chars_per_page=5)

        plan = plan_pages("\n\nabcdef", "Maths", thresholds=thresholds)

        assert [p.content for p in plan.pages] == ["abcdef"]

    def test_plan_when_pages_numbered_then_contiguous_from_one(self):
        plan = plan_pages(_paragraphs(30), "Physics")

        assert [p.page_number for p in plan.pages] == [1, 2, 3]


class TestDiagramPage:
    """Tests for diagram page selection."""

    def test_plan_when_no_diagram_then_no_page_flagged(self):
        plan = plan_pages(_paragraphs(30), "Physics")

        assert plan.diagram_page is None
        assert all(p.diagram_type is None for p in plan.pages)

    def test_plan_when_diagram_required_then_exactly_one_page(self):
        plan = plan_pages(_paragraphs(30), "Physics", requires_diagram=True, diagram_type="circuit")

        flagged = [p for p in plan.pages if p.has_diagram]
        assert len(flagged) == 1
        assert flagged[0].page_number == 1
        assert flagged[0].diagram_type is DiagramKind.CIRCUIT

    def test_plan_when_preferred_page_beyond_plan_then_last_page(self):
        thresholds = PaginationThresholds(preferred_diagram_page=5)

        plan = plan_pages(_paragraphs(30), "Physics", requires_diagram=True,
                          diagram_type=DiagramKind.GRAPH, thresholds=thresholds)

        assert plan.diagram_page.page_number == 3

    def test_plan_when_preferred_page_in_range_then_used(self):
        thresholds = PaginationThresholds(preferred_diagram_page=2)

        plan = plan_pages(_paragraphs(30), "Physics", requires_diagram=True, thresholds=thresholds)

        assert plan.diagram_page.page_number == 2
        assert plan.diagram_page.diagram_type is None

    def test_plan_when_diagram_type_unknown_then_freehand_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="handwriting_toolkit.planner.paginator"):
            plan = plan_pages("text", "Physics", requires_diagram=True, diagram_type="sonnet")

        assert plan.diagram_page.diagram_type is DiagramKind.FREEHAND
        assert "sonnet" in caplog.text

    def test_plan_when_diagram_not_required_then_unknown_type_ignored(self):
        plan = plan_pages("text", "Physics", requires_diagram=False, diagram_type="sonnet")

        assert plan.diagram_page is None
        assert plan.pages[0].diagram_type is None

    def test_plan_when_empty_and_diagram_required_then_single_flagged_page(self):
        plan = plan_pages("", "Physics", requires_diagram=True, diagram_type="freehand")

        assert plan.pages[0].has_diagram
