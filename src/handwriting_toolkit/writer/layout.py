"""
Module: writer.layout

Purpose:
    Stochastic glyph layout. Text is wrapped word by word inside the page
    geometry and every character is placed individually with random jitter,
    rotation, baseline noise and a slow baseline wave.

    Layout and painting are separate phases. layout_text()/layout_rich_text()
    make every random draw and every math-typesetter call and return a
    TextLayout; paint() only draws it. render_text()/render_rich_text() do
    both and return the cursor's final vertical position so callers can
    chain passes on one page.

Key Classes:
    - GlyphLayoutEngine: Layout + paint for one page geometry
    - TextLayout: Ordered placements and final cursor position
    - GlyphPlacement / BulletPlacement / MathPlacement: Layout records

Algorithm (per paragraph):
    1. Blank paragraphs advance half a line
    2. Rich mode: detect list prefix, then tokenize into typed runs
    3. Words are split at single spaces and wrapped whole; a word that is
       first on its line is never wrapped (it may overflow the right edge)
    4. Each glyph gets x/y jitter, rotation (slant + jitter), baseline noise
       and sin(x / 100) * perturbation drift
    5. Cursor advances by glyph width + letter spacing + random increment
    6. Each space adds word spacing + a random increment up to 2 * perturbation

Dependencies:
    - PIL: Glyph rasterisation and affine resampling
    - writer.math_typesetting: Math runs (matplotlib mathtext by default)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple, Union

from PIL import Image, ImageColor, ImageDraw

from handwriting_toolkit.common.thresholds import LAYOUT_THRESHOLDS, GlyphLayoutThresholds
from handwriting_toolkit.core.models.page import PageConfig
from handwriting_toolkit.core.models.style import HandwritingStyle
from handwriting_toolkit.core.models.tokens import TokenKind
from handwriting_toolkit.core.utils.random_source import HotRandom, RandomSource, symmetric

from .fonts import Font, font_metrics, load_font, text_width
from .math_typesetting import MathRender, MathTypesetter, MathtextTypesetter
from .paint import Affine, PaintState, glyph_transform
from .session import RenderTicket
from .tokenizer import parse_list_item, tokenize_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlyphPlacement:
    """
    One character positioned on the page.

    Attributes:
        char: The character
        x, y: Glyph origin (baseline) after jitter
        angle: Total rotation in degrees (slant + jitter)
        advance: Horizontal advance of the glyph (font width)
        kind: Run kind the glyph came from
        line_index: Visual line within the layout (0-based)
        word_index: Word within the layout (0-based)
        state: Transform, ink and weight used to paint the glyph
        font_family, font_size: Font to rasterise with
    """

    char: str
    x: float
    y: float
    angle: float
    advance: float
    kind: TokenKind
    line_index: int
    word_index: int
    state: PaintState
    font_family: str
    font_size: int


@dataclass(frozen=True)
class BulletPlacement:
    """Filled list bullet centred on (x, y)."""

    x: float
    y: float
    radius: float
    color: str
    line_index: int


@dataclass(frozen=True)
class MathPlacement:
    """A typeset math region with its top-left corner at (x, y)."""

    render: MathRender
    x: float
    y: float
    display: bool
    line_index: int

    @property
    def width(self) -> int:
        return self.render.width

    @property
    def height(self) -> int:
        return self.render.height


Placement = Union[GlyphPlacement, BulletPlacement, MathPlacement]


@dataclass(frozen=True)
class TextLayout:
    """
    Result of a layout pass.

    Attributes:
        placements: Everything to paint, in drawing order
        end_y: Cursor y after the last paragraph
        last_baseline: Baseline of the last line that held content
    """

    placements: Tuple[Placement, ...]
    end_y: float
    last_baseline: float

    @property
    def glyphs(self) -> List[GlyphPlacement]:
        return [p for p in self.placements if isinstance(p, GlyphPlacement)]

    @property
    def text(self) -> str:
        """Placed characters in order (spaces are not placed)."""
        return "".join(g.char for g in self.glyphs)

    def word_lines(self) -> Dict[int, Set[int]]:
        """Map each word index to the set of lines its glyphs landed on."""
        lines: Dict[int, Set[int]] = {}
        for glyph in self.glyphs:
            lines.setdefault(glyph.word_index, set()).add(glyph.line_index)
        return lines

    def line_extent(self, line_index: int) -> Optional[Tuple[float, float]]:
        """(left, right) of the glyphs on one line, or None if it has none."""
        spans = [
            (g.x, g.x + g.advance) for g in self.glyphs if g.line_index == line_index
        ]
        if not spans:
            return None
        return (min(s[0] for s in spans), max(s[1] for s in spans))

    @property
    def last_line_index(self) -> Optional[int]:
        glyphs = self.glyphs
        return glyphs[-1].line_index if glyphs else None


@dataclass
class _Cursor:
    """Mutable pen position for one layout pass."""

    x: float
    y: float
    line_start: float
    line_index: int = 0
    word_index: int = 0
    has_content: bool = False
    last_baseline: float = 0.0

    def wrap(self, pitch: float) -> None:
        """Continue on the next visual line at the current line start."""
        self.x = self.line_start
        self.y += pitch
        self.line_index += 1
        self.has_content = False

    def end_paragraph(self, start_x: float, pitch: float) -> None:
        self.line_start = start_x
        self.wrap(pitch)


class GlyphLayoutEngine:
    """
    Places handwriting glyphs for one page geometry.

    Args:
        page: Page geometry (width sets the right wrap boundary)
        random_source: Source for all jitter (default: unseeded)
        math_typesetter: Collaborator for math runs (default: MathtextTypesetter)
        thresholds: Spacing constants
        ticket: Optional render ticket; checked after each math call and at
            each paragraph start, raising RenderCancelled when stale

    Example:
        >>> engine = GlyphLayoutEngine(PageConfig(), random_source=ConstantRandom())
        >>> layout = engine.layout_text("Hello", HandwritingStyle(), 100, 150)
        >>> layout.text
        'Hello'
    """

    def __init__(
        self,
        page: PageConfig,
        *,
        random_source: Optional[RandomSource] = None,
        math_typesetter: Optional[MathTypesetter] = None,
        thresholds: GlyphLayoutThresholds = LAYOUT_THRESHOLDS,
        ticket: Optional[RenderTicket] = None,
    ):
        self.page = page
        self.rng = random_source or HotRandom()
        self.math_typesetter = math_typesetter or MathtextTypesetter()
        self.thresholds = thresholds
        self.ticket = ticket

    @property
    def right_edge(self) -> float:
        """Words whose right edge would pass this x are wrapped."""
        return self.page.width - self.thresholds.right_gutter_px

    # ─────────────────────────────────────────────────────────────────────
    # Layout
    # ─────────────────────────────────────────────────────────────────────

    def layout_text(
        self,
        text: str,
        style: HandwritingStyle,
        start_x: float,
        start_y: float,
    ) -> TextLayout:
        """Lay out plain text; markup characters are written literally."""
        placements: List[Placement] = []
        cursor = _Cursor(x=start_x, y=start_y, line_start=start_x, last_baseline=start_y)
        pitch = style.line_pitch

        for paragraph in text.split("\n"):
            self._check_ticket()
            if not paragraph.strip():
                cursor.y += pitch * self.thresholds.blank_line_factor
                continue
            self._place_words(paragraph, TokenKind.PLAIN, style, cursor, placements)
            cursor.end_paragraph(start_x, pitch)

        return TextLayout(tuple(placements), cursor.y, cursor.last_baseline)

    def layout_rich_text(
        self,
        text: str,
        style: HandwritingStyle,
        start_x: float,
        start_y: float,
    ) -> TextLayout:
        """
        Lay out text with list prefixes, **bold**, *italic* and math runs.

        List items draw a bullet (or their number) at start_x and indent the
        rest of that line, including its wrapped continuation lines.
        """
        placements: List[Placement] = []
        cursor = _Cursor(x=start_x, y=start_y, line_start=start_x, last_baseline=start_y)
        pitch = style.line_pitch

        for line in text.split("\n"):
            self._check_ticket()
            if not line.strip():
                cursor.y += pitch * self.thresholds.blank_line_factor
                continue

            body = line
            item = parse_list_item(line)
            if item is not None:
                self._place_list_marker(item.number, style, start_x, cursor, placements)
                cursor.line_start = start_x + self.thresholds.list_indent_px
                cursor.x = cursor.line_start
                body = item.body

            for token in tokenize_line(body):
                if token.is_math:
                    self._place_math(token.text, token.kind is TokenKind.BLOCK_MATH, style, cursor, placements)
                else:
                    self._place_words(token.text, token.kind, style, cursor, placements)

            cursor.end_paragraph(start_x, pitch)

        return TextLayout(tuple(placements), cursor.y, cursor.last_baseline)

    def _check_ticket(self) -> None:
        if self.ticket is not None:
            self.ticket.raise_if_stale()

    def _place_words(
        self,
        text: str,
        kind: TokenKind,
        style: HandwritingStyle,
        cursor: _Cursor,
        out: List[Placement],
    ) -> None:
        font = load_font(style.font, int(round(style.size)))
        for index, word in enumerate(text.split(" ")):
            if index > 0:
                cursor.x += style.word_spacing + self.rng.next() * style.perturbation * 2
            if not word:
                continue

            width = text_width(font, word) + len(word) * style.letter_spacing
            if cursor.x + width > self.right_edge:
                if cursor.has_content:
                    cursor.wrap(style.line_pitch)
                else:
                    logger.debug(f"Word {word[:20]!r} overflows the right margin by "
                                 f"{cursor.x + width - self.right_edge:.1f}px")

            for char in word:
                out.append(self._place_glyph(char, kind, style, font, cursor))
            cursor.has_content = True
            cursor.last_baseline = cursor.y
            cursor.word_index += 1

    def _place_glyph(
        self,
        char: str,
        kind: TokenKind,
        style: HandwritingStyle,
        font: Font,
        cursor: _Cursor,
    ) -> GlyphPlacement:
        p = style.perturbation
        jitter_x = symmetric(self.rng, p)
        jitter_y = symmetric(self.rng, p)
        angle = style.slant + symmetric(self.rng, style.rotation / 2)
        baseline_noise = symmetric(self.rng, style.baseline_shift / 2)
        wave = math.sin(cursor.x / self.thresholds.wave_period_px) * p

        x = cursor.x + jitter_x
        y = cursor.y + jitter_y + baseline_noise + wave
        shear = self.thresholds.italic_shear if kind is TokenKind.ITALIC else 0.0
        state = PaintState(
            transform=glyph_transform(x, y, angle, shear),
            color=style.color,
            bold=kind is TokenKind.BOLD,
        )
        advance = text_width(font, char)
        placement = GlyphPlacement(
            char=char,
            x=x,
            y=y,
            angle=angle,
            advance=advance,
            kind=kind,
            line_index=cursor.line_index,
            word_index=cursor.word_index,
            state=state,
            font_family=style.font,
            font_size=int(round(style.size)),
        )
        cursor.x += advance + style.letter_spacing + self.rng.next() * p
        return placement

    def _place_list_marker(
        self,
        number: Optional[int],
        style: HandwritingStyle,
        start_x: float,
        cursor: _Cursor,
        out: List[Placement],
    ) -> None:
        if number is None:
            out.append(BulletPlacement(
                x=start_x + self.thresholds.bullet_offset_px,
                y=cursor.y - style.size / 3,
                radius=style.size / 5,
                color=style.color,
                line_index=cursor.line_index,
            ))
            return

        # Numbers are handwritten too but do not move the main cursor
        font = load_font(style.font, int(round(style.size)))
        marker = _Cursor(x=start_x, y=cursor.y, line_start=start_x,
                         line_index=cursor.line_index, word_index=cursor.word_index)
        for char in f"{number}.":
            out.append(self._place_glyph(char, TokenKind.PLAIN, style, font, marker))
        cursor.word_index += 1

    def _place_math(
        self,
        expression: str,
        display: bool,
        style: HandwritingStyle,
        cursor: _Cursor,
        out: List[Placement],
    ) -> None:
        render = self._typeset(expression, display, style)
        self._check_ticket()
        if render is None:
            return

        gap = self.thresholds.inline_math_gap_px
        if display:
            if cursor.has_content:
                cursor.wrap(style.line_pitch)
            top = cursor.y - render.height * self.thresholds.math_baseline_ratio
            out.append(MathPlacement(render, cursor.line_start, top, True, cursor.line_index))
            cursor.last_baseline = cursor.y
            cursor.y += render.height + gap
            cursor.x = cursor.line_start
            cursor.has_content = False
            return

        if cursor.x + render.width > self.right_edge and cursor.has_content:
            cursor.wrap(style.line_pitch)
        top = cursor.y - render.height * self.thresholds.math_baseline_ratio
        out.append(MathPlacement(render, cursor.x, top, False, cursor.line_index))
        cursor.x += render.width + gap
        cursor.has_content = True
        cursor.last_baseline = cursor.y

    def _typeset(self, expression: str, display: bool, style: HandwritingStyle) -> Optional[MathRender]:
        """Call the math collaborator; failures are logged and give None."""
        try:
            render = self.math_typesetter.typeset(
                expression, display=display, size=style.size, color=style.color
            )
        except Exception as e:
            logger.warning(f"Skipping math {expression!r}: {e}")
            return None
        if render is None or render.width <= 0 or render.height <= 0:
            logger.warning(f"Skipping math {expression!r}: typesetter returned nothing")
            return None
        return render

    # ─────────────────────────────────────────────────────────────────────
    # Painting
    # ─────────────────────────────────────────────────────────────────────

    def paint(self, surface: Image.Image, layout: TextLayout) -> None:
        """Draw a layout onto surface in placement order."""
        draw = ImageDraw.Draw(surface)
        for placement in layout.placements:
            if isinstance(placement, GlyphPlacement):
                self._paint_glyph(surface, placement)
            elif isinstance(placement, BulletPlacement):
                r = placement.radius
                draw.ellipse(
                    [placement.x - r, placement.y - r, placement.x + r, placement.y + r],
                    fill=placement.color,
                )
            else:
                image = placement.render.image.convert("RGBA")
                surface.paste(image, (int(round(placement.x)), int(round(placement.y))), image)

    def _paint_glyph(self, surface: Image.Image, glyph: GlyphPlacement) -> None:
        """
        Rasterise one glyph into a mask tile and resample it onto the page.

        The tile has the glyph's baseline origin at (pad, pad + ascent); the
        tile-to-page transform is state.transform composed with that offset.
        """
        if glyph.char.isspace():
            return
        font = load_font(glyph.font_family, glyph.font_size)
        ascent, descent = font_metrics(font)
        stroke = self.thresholds.bold_stroke_px if glyph.state.bold else 0
        pad = stroke + 2

        tile_w = int(math.ceil(glyph.advance)) + 2 * pad + glyph.font_size // 2
        tile_h = ascent + descent + 2 * pad
        tile = Image.new("L", (tile_w, tile_h), 0)
        ImageDraw.Draw(tile).text(
            (pad, pad), glyph.char, fill=255, font=font,
            stroke_width=stroke, stroke_fill=255,
        )

        to_page = glyph.state.transform @ Affine.translation(-pad, -(pad + ascent))
        corners = [(0, 0), (tile_w, 0), (0, tile_h), (tile_w, tile_h)]
        min_x, min_y, max_x, max_y = to_page.bounds(corners)
        x0, y0 = int(math.floor(min_x)), int(math.floor(min_y))
        width = int(math.ceil(max_x)) - x0
        height = int(math.ceil(max_y)) - y0
        if width <= 0 or height <= 0:
            return

        # Output pixel (u, v) is page (x0 + u, y0 + v); map it back into the tile
        to_tile = to_page.inverse() @ Affine.translation(x0, y0)
        mask = tile.transform(
            (width, height),
            Image.Transform.AFFINE,
            to_tile.coefficients,
            resample=Image.Resampling.BICUBIC,
        )
        ink = Image.new("RGB", (width, height), ImageColor.getrgb(glyph.state.color)[:3])
        surface.paste(ink, (x0, y0), mask)

    # ─────────────────────────────────────────────────────────────────────
    # Layout + paint
    # ─────────────────────────────────────────────────────────────────────

    def render_text(
        self,
        surface: Image.Image,
        text: str,
        style: HandwritingStyle,
        start_x: float,
        start_y: float,
    ) -> float:
        """Lay out and paint plain text; returns the final cursor y."""
        layout = self.layout_text(text, style, start_x, start_y)
        self._check_ticket()
        self.paint(surface, layout)
        return layout.end_y

    def render_rich_text(
        self,
        surface: Image.Image,
        text: str,
        style: HandwritingStyle,
        start_x: float,
        start_y: float,
    ) -> float:
        """Lay out and paint rich text; returns the final cursor y."""
        return self.render_rich_layout(surface, text, style, start_x, start_y).end_y

    def render_rich_layout(
        self,
        surface: Image.Image,
        text: str,
        style: HandwritingStyle,
        start_x: float,
        start_y: float,
    ) -> TextLayout:
        """
        Lay out and paint rich text, returning the painted layout.

        Nothing is painted when the ticket went stale during layout.
        """
        layout = self.layout_rich_text(text, style, start_x, start_y)
        self._check_ticket()
        self.paint(surface, layout)
        return layout
