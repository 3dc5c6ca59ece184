"""Page rendering pipeline: plan in, page surfaces out."""

from .config import RenderConfig
from .controller import (
    PageSurface,
    RenderError,
    RenderResult,
    fatigue_style,
    render_exam,
    render_page,
)
from .diagrams import DiagramAnchor, DiagramProvider, PencilDiagramProvider, diagram_anchor
from .ink import apply_ink_flow

__all__ = [
    "DiagramAnchor",
    "DiagramProvider",
    "PageSurface",
    "PencilDiagramProvider",
    "RenderConfig",
    "RenderError",
    "RenderResult",
    "apply_ink_flow",
    "diagram_anchor",
    "fatigue_style",
    "render_exam",
    "render_page",
]
