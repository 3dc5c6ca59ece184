"""
Module: writer.math_typesetting

Purpose:
    Interface to the math-typesetting collaborator and its default
    implementations. The layout engine treats a typeset expression as an
    opaque image with a measured width and height.

Key Classes:
    - MathRender: Rendered expression (RGBA image + size)
    - MathTypesetter: Protocol implemented by typesetting backends
    - MathtextTypesetter: Default; matplotlib mathtext lays out fractions,
      roots and scripts, handing anything it cannot parse to a fallback
    - TextMathTypesetter: Pillow-only fallback; LaTeX commands are mapped to
      Unicode and drawn in the handwriting font
    - MathTypesettingError: Raised by backends that cannot render an expression

Dependencies:
    - matplotlib: mathtext rasterisation
    - PIL: Text drawing, alpha tiles
"""

from __future__ import annotations

import io
import logging
import re
import threading
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from matplotlib import mathtext
from matplotlib.font_manager import FontProperties
from PIL import Image, ImageColor, ImageDraw, ImageOps

from .fonts import font_metrics, load_font, text_width

logger = logging.getLogger(__name__)

DISPLAY_SCALE = 1.2


class MathTypesettingError(Exception):
    """Raised when an expression cannot be typeset."""
    pass


@dataclass(frozen=True)
class MathRender:
    """
    A typeset expression.

    Attributes:
        image: RGBA image with transparent background
        width: Advance width in pixels
        height: Height in pixels
    """

    image: Image.Image
    width: int
    height: int


@runtime_checkable
class MathTypesetter(Protocol):
    """Renders a math expression to an image region."""

    def typeset(self, expression: str, *, display: bool, size: float, color: str) -> MathRender:
        ...


_SYMBOLS = {
    r"\alpha": "α", r"\beta": "β", r"\gamma": "γ", r"\delta": "δ",
    r"\epsilon": "ε", r"\theta": "θ", r"\lambda": "λ", r"\mu": "μ",
    r"\pi": "π", r"\rho": "ρ", r"\sigma": "σ", r"\tau": "τ",
    r"\phi": "φ", r"\omega": "ω", r"\Delta": "Δ", r"\Sigma": "Σ",
    r"\Omega": "Ω", r"\times": "×", r"\cdot": "·", r"\div": "÷",
    r"\pm": "±", r"\leq": "≤", r"\geq": "≥", r"\neq": "≠",
    r"\approx": "≈", r"\infty": "∞", r"\rightarrow": "→", r"\to": "→",
    r"\degree": "°", r"\circ": "°", r"\sum": "Σ", r"\int": "∫",
    r"\partial": "∂", r"\nabla": "∇", r"\,": " ", r"\;": " ", r"\quad": "  ",
}
# Unicode has no superscript q and only some subscript letters
_SUPERSCRIPTS = str.maketrans(
    "0123456789+-=()abcdefghijklmnoprstuvwxyz",
    "⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ᵃᵇᶜᵈᵉᶠᵍʰⁱʲᵏˡᵐⁿᵒᵖʳˢᵗᵘᵛʷˣʸᶻ",
)
_SUBSCRIPTS = str.maketrans(
    "0123456789+-=()aehijklmnoprstuvx",
    "₀₁₂₃₄₅₆₇₈₉₊₋₌₍₎ₐₑₕᵢⱼₖₗₘₙₒₚᵣₛₜᵤᵥₓ",
)

_FRAC_RE = re.compile(r"\\frac\{([^{}]*)\}\{([^{}]*)\}")
_SQRT_RE = re.compile(r"\\sqrt\{([^{}]*)\}")
_WRAPPER_RE = re.compile(r"\\(?:mathrm|text|mathbf|mathit|operatorname)\{([^{}]*)\}")
_SUP_RE = re.compile(r"\^\{([^{}]*)\}|\^(\S)")
_SUB_RE = re.compile(r"_\{([^{}]*)\}|_(\S)")
_COMMAND_RE = re.compile(r"\\([A-Za-z]+)")


def latex_to_text(expression: str) -> str:
    """
    Approximate a LaTeX expression with plain Unicode text.

    Example:
        >>> latex_to_text(r"\\frac{a}{b} \\times x^2")
        'a/b × x²'
    """
    text = expression.strip()
    # Innermost-first so nested fractions collapse
    while True:
        replaced = _FRAC_RE.sub(lambda m: f"{_group(m.group(1))}/{_group(m.group(2))}", text)
        replaced = _SQRT_RE.sub(lambda m: f"√{_group(m.group(1))}", replaced)
        replaced = _WRAPPER_RE.sub(lambda m: m.group(1), replaced)
        if replaced == text:
            break
        text = replaced

    for command in sorted(_SYMBOLS, key=len, reverse=True):
        text = text.replace(command, _SYMBOLS[command])

    text = _SUP_RE.sub(lambda m: _script(m.group(1) or m.group(2), _SUPERSCRIPTS, "^"), text)
    text = _SUB_RE.sub(lambda m: _script(m.group(1) or m.group(2), _SUBSCRIPTS, "_"), text)
    text = _COMMAND_RE.sub(lambda m: m.group(1), text)
    return text.replace("{", "").replace("}", "")


def _group(content: str) -> str:
    """Parenthesise multi-character operands of / and √."""
    content = content.strip()
    return content if len(content) <= 1 else f"({content})"


def _script(content: str, table: dict[int, int], marker: str) -> str:
    """
    Raise or lower a script group with Unicode forms.

    A group with any character lacking a form keeps its marker, so
    e^{iπ} becomes e^(iπ) rather than a product on the baseline.
    """
    if content and all(ord(ch) in table for ch in content):
        return content.translate(table)
    return f"{marker}{_group(content)}"


class TextMathTypesetter:
    """
    Typesets math as Unicode text in the handwriting font.

    Display expressions are drawn 1.2x larger. Width and height are the
    measured extent of the drawn text.
    """

    def __init__(self, font_family: str = "DejaVuSans") -> None:
        self.font_family = font_family

    def typeset(self, expression: str, *, display: bool, size: float, color: str) -> MathRender:
        text = latex_to_text(expression)
        if not text:
            raise MathTypesettingError(f"Nothing to typeset for {expression!r}")

        font = load_font(self.font_family, int(round(size * (DISPLAY_SCALE if display else 1.0))))
        ascent, descent = font_metrics(font)
        width = max(1, int(round(text_width(font, text))))
        height = max(1, ascent + descent)

        image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        ImageDraw.Draw(image).text((0, 0), text, fill=color, font=font)
        logger.debug(f"Typeset {expression!r} as {text!r} ({width}x{height})")
        return MathRender(image=image, width=width, height=height)


# mathtext keeps module-level parser caches
_MATHTEXT_LOCK = threading.Lock()


class MathtextTypesetter:
    """
    Typesets math with matplotlib's mathtext engine.

    Fractions stack, roots get a radical bar and scripts are raised or
    lowered. The expression is rendered black on white, the inverted
    luminance becomes the alpha of a tile in the requested ink colour.
    Expressions mathtext cannot parse are passed to the fallback.

    Args:
        fallback: Typesetter for unparseable input (default: TextMathTypesetter)
        dpi: Render resolution; at 72 one point of font size is one pixel
    """

    def __init__(self, fallback: Optional[MathTypesetter] = None, dpi: int = 72) -> None:
        self.fallback = fallback or TextMathTypesetter()
        self.dpi = dpi

    def typeset(self, expression: str, *, display: bool, size: float, color: str) -> MathRender:
        source = expression.strip()
        if not source:
            raise MathTypesettingError("Nothing to typeset for an empty expression")

        font_size = size * (DISPLAY_SCALE if display else 1.0)
        try:
            coverage = self._render_coverage(source, font_size)
        except ValueError as e:
            logger.debug(f"mathtext cannot parse {expression!r}, using fallback: {e}")
            return self.fallback.typeset(expression, display=display, size=size, color=color)

        if coverage.getbbox() is None:
            raise MathTypesettingError(f"Nothing to typeset for {expression!r}")

        tile = Image.new("RGBA", coverage.size, ImageColor.getrgb(color)[:3] + (0,))
        tile.putalpha(coverage)
        width, height = tile.size
        logger.debug(f"Typeset {expression!r} with mathtext ({width}x{height})")
        return MathRender(image=tile, width=width, height=height)

    def _render_coverage(self, source: str, font_size: float) -> Image.Image:
        """Ink coverage (0 = paper, 255 = full ink) of the rendered expression."""
        buffer = io.BytesIO()
        with _MATHTEXT_LOCK:
            mathtext.math_to_image(
                f"${source}$", buffer, prop=FontProperties(size=font_size), dpi=self.dpi, format="png"
            )
        buffer.seek(0)
        with Image.open(buffer) as rendered:
            rgba = rendered.convert("RGBA")
        paper = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        return ImageOps.invert(Image.alpha_composite(paper, rgba).convert("L"))
