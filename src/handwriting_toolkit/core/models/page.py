"""
Module: page

Purpose:
    Page geometry and paper type for a single rendered surface.

Key Classes:
    - PaperType: Background style of the page
    - PageConfig: Immutable page geometry

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - writer.paper: Paper background
    - writer.layout: Wrap boundary
    - builder.controller: Page pipeline
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


# A4 at 96 DPI, as used by the browser canvas the styles were tuned on
DEFAULT_PAGE_WIDTH_PX = 794
DEFAULT_PAGE_HEIGHT_PX = 1123


class PaperType(str, Enum):
    """Kind of paper drawn behind the handwriting."""
    PLAIN = "plain"
    RULED = "ruled"
    GRID = "grid"
    VINTAGE = "vintage"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PageConfig:
    """
    Page geometry (immutable).

    Attributes:
        paper_type: Background kind
        width: Page width in pixels
        height: Page height in pixels
        margin_left: X position of the margin rule
        margin_top: Y position of the first baseline
        paper_color: Override for the paper colour (None = paper type default)
        margin_color: Override for the margin rule colour (None = red)

    Invariants:
        - width > 0 and height > 0
        - 0 <= margin_left < width
        - 0 <= margin_top < height

    Example:
        >>> config = PageConfig(paper_type=PaperType.RULED)
        >>> config.size
        (794, 1123)
    """

    paper_type: PaperType = PaperType.RULED
    width: int = DEFAULT_PAGE_WIDTH_PX
    height: int = DEFAULT_PAGE_HEIGHT_PX
    margin_left: int = 80
    margin_top: int = 120
    paper_color: Optional[str] = None
    margin_color: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        # Accept plain strings for the paper type
        if not isinstance(self.paper_type, PaperType):
            object.__setattr__(self, "paper_type", PaperType(self.paper_type))
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if not 0 <= self.margin_left < self.width:
            raise ValueError(f"margin_left must be within [0, {self.width}): {self.margin_left}")
        if not 0 <= self.margin_top < self.height:
            raise ValueError(f"margin_top must be within [0, {self.height}): {self.margin_top}")

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple for Pillow."""
        return (self.width, self.height)

    def to_dict(self) -> dict[str, Any]:
        return {
            "paper_type": self.paper_type.value,
            "width": self.width,
            "height": self.height,
            "margin_left": self.margin_left,
            "margin_top": self.margin_top,
            "paper_color": self.paper_color,
            "margin_color": self.margin_color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageConfig:
        defaults = cls()
        return cls(
            paper_type=PaperType(data.get("paper_type", defaults.paper_type.value)),
            width=int(data.get("width", defaults.width)),
            height=int(data.get("height", defaults.height)),
            margin_left=int(data.get("margin_left", defaults.margin_left)),
            margin_top=int(data.get("margin_top", defaults.margin_top)),
            paper_color=data.get("paper_color"),
            margin_color=data.get("margin_color"),
        )
