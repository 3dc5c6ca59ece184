"""
Module: builder.controller

Purpose:
    Orchestrate rendering of a planned answer into page surfaces.
    Plan -> (per page) Paper -> Header -> Content -> Diagram -> Ink flow

Key Functions:
    - render_exam(): Render every page of an ExamPlan
    - render_page(): Render a single planned page
    - fatigue_style(): Per-page style drift

Key Classes:
    - PageSurface: A rendered page exposed as a read-only pixel buffer
    - RenderResult: Complete render result
    - RenderError: Exception for render failures

Concurrency:
    Every page has its own surface and its own random source (spawned from
    the parent source before any page starts), so pages can render in a
    thread pool. A RenderSession drops results of superseded renders.

Dependencies:
    - writer: Paper, glyph layout
    - builder.diagrams: Diagram anchor and provider
    - builder.ink: Ink flow pass
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from handwriting_toolkit.core.models.page import PageConfig
from handwriting_toolkit.core.models.plan import DiagramKind, ExamPlan, PageContent
from handwriting_toolkit.core.models.style import HandwritingStyle
from handwriting_toolkit.core.utils.random_source import RandomSource, spawn_source
from handwriting_toolkit.common.thresholds import PipelineThresholds
from handwriting_toolkit.writer.fonts import load_font, text_width
from handwriting_toolkit.writer.layout import GlyphLayoutEngine
from handwriting_toolkit.writer.math_typesetting import MathTypesetter
from handwriting_toolkit.writer.paper import new_page_surface
from handwriting_toolkit.writer.session import RenderCancelled, RenderSession, RenderTicket

from .config import RenderConfig
from .diagrams import DiagramProvider, PencilDiagramProvider, diagram_anchor, diagram_caption
from .ink import apply_ink_flow

logger = logging.getLogger(__name__)

CAPTION_FONT = "DejaVuSans"
CAPTION_GAP_PX = 4
CONTENT_OFFSET_PX = 20  # Right of the margin rule


class RenderError(Exception):
    """Error during the render pipeline."""
    pass


@dataclass(frozen=True)
class PageSurface:
    """
    A fully rendered page.

    Attributes:
        page_number: 1-based page number from the plan
        image: RGB page image
    """

    page_number: int
    image: Image.Image

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def to_array(self) -> np.ndarray:
        """Pixel buffer (height, width, 3) that cannot be written to."""
        pixels = np.array(self.image.convert("RGB"))
        pixels.setflags(write=False)
        return pixels


@dataclass(frozen=True)
class RenderResult:
    """
    Complete render result (immutable).

    Attributes:
        pages: Rendered pages in plan order
        plan: The plan that was rendered
        warnings: Recovered problems (e.g. a diagram that failed to draw)
    """

    pages: Tuple[PageSurface, ...]
    plan: ExamPlan
    warnings: Tuple[str, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)


def fatigue_style(
    style: HandwritingStyle,
    page_index: int,
    thresholds: PipelineThresholds,
) -> HandwritingStyle:
    """
    Style for a later page: messier, more slanted, wider word gaps.

    Page 0 is returned unchanged.
    """
    if page_index <= 0:
        return style
    multiplier = 1 + page_index * thresholds.fatigue_messiness_step
    return style.evolve(
        perturbation=style.perturbation * multiplier,
        baseline_shift=style.baseline_shift * multiplier,
        slant=style.slant + page_index * thresholds.fatigue_slant_step,
        word_spacing=style.word_spacing * (1 + page_index * thresholds.fatigue_spacing_step),
    )


def render_page(
    content: PageContent,
    subject: str,
    style: HandwritingStyle,
    page: PageConfig,
    *,
    page_index: int = 0,
    config: Optional[RenderConfig] = None,
    random_source: Optional[RandomSource] = None,
    math_typesetter: Optional[MathTypesetter] = None,
    diagram_provider: Optional[DiagramProvider] = None,
    ticket: Optional[RenderTicket] = None,
) -> PageSurface:
    """
    Render one planned page.

    Args:
        content: Planned page
        subject: Subject label for the header
        style: Base handwriting style (fatigue is applied from page_index)
        page: Page geometry
        page_index: 0-based position of the page in its plan
        config: Pipeline configuration
        random_source: Source for every random draw on this page
        math_typesetter: Math collaborator for the layout engine
        diagram_provider: Diagram collaborator (default: pencil sketches)
        ticket: Render ticket; a stale ticket raises RenderCancelled

    Returns:
        PageSurface for the page
    """
    surface, _ = _render_page(
        content, subject, style, page, page_index,
        config or RenderConfig(),
        random_source,
        math_typesetter,
        diagram_provider,
        ticket,
    )
    return surface


def render_exam(
    plan: ExamPlan,
    style: HandwritingStyle,
    page: PageConfig,
    *,
    config: Optional[RenderConfig] = None,
    random_source: Optional[RandomSource] = None,
    math_typesetter: Optional[MathTypesetter] = None,
    diagram_provider: Optional[DiagramProvider] = None,
    session: Optional[RenderSession] = None,
) -> RenderResult:
    """
    Render every page of a plan.

    Pipeline (per page):
    1. Draw paper
    2. Write the subject header
    3. Write the page content as rich text
    4. Overlay the diagram on the flagged page
    5. Apply ink flow

    Args:
        plan: Page plan from planner.plan_pages()
        style: Base handwriting style
        page: Page geometry
        config: Pipeline configuration (default: RenderConfig())
        random_source: Parent random source (default: from config.seed)
        math_typesetter: Math collaborator
        diagram_provider: Diagram collaborator
        session: Render session; when given, the result is committed to it
            and a superseded render raises RenderCancelled

    Returns:
        RenderResult with one PageSurface per planned page

    Raises:
        RenderCancelled: If the session started a newer render meanwhile
        RenderError: If a page fails to render
    """
    config = config or RenderConfig()
    rng = random_source or config.make_random_source()
    ticket = session.begin() if session is not None else None
    start_time = time.perf_counter()

    logger.info(f"Rendering {plan.total_pages} page(s) for {plan.subject!r}")

    # Spawned up front so page streams do not depend on scheduling
    sources = [spawn_source(rng, index) for index in range(plan.total_pages)]

    def render_one(index: int) -> Tuple[PageSurface, List[str]]:
        return _render_page(
            plan.pages[index], plan.subject, style, page, index,
            config, sources[index], math_typesetter, diagram_provider, ticket,
        )

    indices = range(plan.total_pages)
    try:
        if config.max_workers > 1 and plan.total_pages > 1:
            workers = min(config.max_workers, plan.total_pages)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                rendered = list(pool.map(render_one, indices))
        else:
            rendered = [render_one(index) for index in indices]
    except RenderCancelled:
        logger.info(f"Render of {plan.subject!r} superseded, discarding pages")
        raise
    except Exception as e:
        raise RenderError(f"Failed to render {plan.subject!r}: {e}") from e

    warnings: List[str] = []
    for _, page_warnings in rendered:
        warnings.extend(page_warnings)

    result = RenderResult(
        pages=tuple(surface for surface, _ in rendered),
        plan=plan,
        warnings=tuple(warnings),
    )

    if session is not None and ticket is not None and not session.commit(ticket, result):
        raise RenderCancelled(ticket.generation, session.current_generation)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Rendered {result.page_count} page(s) in {elapsed:.2f}s")
    return result


def _render_page(
    content: PageContent,
    subject: str,
    style: HandwritingStyle,
    page: PageConfig,
    page_index: int,
    config: RenderConfig,
    random_source: Optional[RandomSource],
    math_typesetter: Optional[MathTypesetter],
    diagram_provider: Optional[DiagramProvider],
    ticket: Optional[RenderTicket],
) -> Tuple[PageSurface, List[str]]:
    rng = random_source or config.make_random_source()
    thresholds = config.pipeline
    warnings: List[str] = []

    page_style = fatigue_style(style, page_index, thresholds) if config.apply_fatigue else style
    engine = GlyphLayoutEngine(
        page,
        random_source=rng,
        math_typesetter=math_typesetter,
        thresholds=config.layout,
        ticket=ticket,
    )

    # 1. Paper (must precede every glyph)
    surface = new_page_surface(page, random_source=rng, thresholds=config.paper)

    # 2. Header
    if config.draw_header and subject:
        header_style = page_style.evolve(
            size=page_style.size * thresholds.header_scale,
            color=thresholds.header_color,
        )
        engine.render_text(
            surface, subject.upper(), header_style,
            page.margin_left, page.margin_top - thresholds.header_raise_px,
        )

    # 3. Content
    engine.render_rich_text(surface, content.content, page_style, page.margin_left + CONTENT_OFFSET_PX, page.margin_top)

    # 4. Diagram
    if config.draw_diagrams and content.has_diagram:
        provider = diagram_provider or PencilDiagramProvider(random_source=rng)
        warning = _overlay_diagram(surface, content, page, provider, thresholds)
        if warning:
            warnings.append(warning)

    # 5. Ink flow
    if config.apply_ink_flow:
        apply_ink_flow(surface, rng, thresholds)

    logger.debug(f"Rendered page {content.page_number} ({len(content.content)} chars)")
    return PageSurface(page_number=content.page_number, image=surface), warnings


def _overlay_diagram(
    surface: Image.Image,
    content: PageContent,
    page: PageConfig,
    provider: DiagramProvider,
    thresholds: PipelineThresholds,
) -> Optional[str]:
    """Paste the diagram and its caption; returns a warning on failure."""
    kind = content.diagram_type or DiagramKind.FREEHAND
    anchor = diagram_anchor(page, thresholds)

    try:
        diagram = provider.draw(kind, (anchor.width, anchor.height))
    except Exception as e:
        message = f"Diagram for page {content.page_number} failed: {e}"
        logger.warning(message)
        return message

    if diagram.size != (anchor.width, anchor.height):
        diagram = diagram.resize((anchor.width, anchor.height))
    diagram = diagram.convert("RGBA")
    surface.paste(diagram, (anchor.x, anchor.y), diagram)

    caption = diagram_caption(kind)
    font = load_font(CAPTION_FONT, thresholds.caption_size)
    caption_x = anchor.x + (anchor.width - text_width(font, caption)) / 2
    ImageDraw.Draw(surface).text(
        (caption_x, anchor.y + anchor.height + CAPTION_GAP_PX),
        caption,
        fill=thresholds.caption_color,
        font=font,
    )
    return None
