"""
Module: tokens

Purpose:
    Typed runs of text produced by the rich-text tokenizer.

Key Classes:
    - TokenKind: Markup classification of a run
    - Token: A single typed run
    - ListItem: A detected list prefix and the remaining line body
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
    """Markup classification of a run of text."""
    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    INLINE_MATH = "inline_math"
    BLOCK_MATH = "block_math"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Token:
    """
    A contiguous run of text with one markup classification.

    The text is the payload with delimiters removed; whitespace inside the
    run is kept verbatim.

    Example:
        >>> Token(TokenKind.BOLD, "important").is_math
        False
    """

    kind: TokenKind
    text: str

    @property
    def is_math(self) -> bool:
        """True for inline and block math runs."""
        return self.kind in (TokenKind.INLINE_MATH, TokenKind.BLOCK_MATH)


@dataclass(frozen=True, slots=True)
class ListItem:
    """
    List prefix detected at the start of a line.

    Attributes:
        marker: "-" or "*" for bullets, "." for numbered items
        number: Item number for numbered items, None for bullets
        body: Remaining line content after the prefix
    """

    marker: str
    number: Optional[int]
    body: str

    @property
    def is_numbered(self) -> bool:
        return self.number is not None
