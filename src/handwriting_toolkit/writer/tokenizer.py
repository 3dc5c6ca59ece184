"""
Module: writer.tokenizer

Purpose:
    Split a single line of lightly marked-up text into typed runs.
    A small explicit lexer: a cursor walks the line and, at every position,
    tries the delimiter rules in precedence order. The tokenizer never fails.

Key Functions:
    - tokenize_line(): Line -> ordered Tokens covering the whole line
    - parse_list_item(): Detect "- ", "* " and "<n>. " prefixes

Precedence (first match wins at a position):
    1. $$...$$      block math
    2. \\[...\\]     block math
    3. \\(...\\)     inline math
    4. $...$        inline math
    5. **...**      bold
    6. *...*        italic

Malformed markup:
    If an opening marker has no terminator, the marker and the rest of the
    line are emitted as plain text.

Used By:
    - writer.layout: Rich-text layout
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from handwriting_toolkit.core.models.tokens import ListItem, Token, TokenKind

__all__ = ["tokenize_line", "parse_list_item", "detokenize"]


@dataclass(frozen=True)
class _Rule:
    opener: str
    closer: str
    kind: TokenKind
    forbidden: str = ""  # Characters not allowed inside the run


# Ordered by precedence
_RULES: tuple[_Rule, ...] = (
    _Rule("$$", "$$", TokenKind.BLOCK_MATH),
    _Rule("\\[", "\\]", TokenKind.BLOCK_MATH),
    _Rule("\\(", "\\)", TokenKind.INLINE_MATH),
    _Rule("$", "$", TokenKind.INLINE_MATH, forbidden="$"),
    _Rule("**", "**", TokenKind.BOLD, forbidden="*"),
    _Rule("*", "*", TokenKind.ITALIC, forbidden="*"),
)

_NUMBERED_RE = re.compile(r"^(\d+)\.\s")


def _match_rule(line: str, pos: int, rule: _Rule) -> Optional[int]:
    """
    Try a rule at pos.

    Returns:
        Index just past the closing delimiter, or None if the run is not
        terminated (or is empty / contains a forbidden character).
    """
    start = pos + len(rule.opener)
    close = line.find(rule.closer, start + 1)  # Content must be non-empty
    if close == -1:
        return None
    content = line[start:close]
    if rule.forbidden and any(ch in content for ch in rule.forbidden):
        return None
    return close + len(rule.closer)


def tokenize_line(line: str) -> List[Token]:
    """
    Tokenize one line into typed runs.

    Concatenating the token texts reproduces the line with each balanced
    delimiter pair removed exactly once.

    Args:
        line: A single line (no newline characters expected)

    Returns:
        Ordered tokens; adjacent plain runs are merged. Empty input gives [].

    Example:
        >>> [(t.kind.value, t.text) for t in tokenize_line("a **b** $c$")]
        [('plain', 'a '), ('bold', 'b'), ('plain', ' '), ('inline_math', 'c')]
    """
    tokens: List[Token] = []
    plain: List[str] = []

    def flush_plain() -> None:
        if plain:
            tokens.append(Token(TokenKind.PLAIN, "".join(plain)))
            plain.clear()

    pos = 0
    length = len(line)
    while pos < length:
        opened = False
        for rule in _RULES:
            if not line.startswith(rule.opener, pos):
                continue
            opened = True
            end = _match_rule(line, pos, rule)
            if end is None:
                continue  # A lower-precedence rule may still match here
            flush_plain()
            content = line[pos + len(rule.opener):end - len(rule.closer)]
            tokens.append(Token(rule.kind, content))
            pos = end
            break
        else:
            if opened:
                # Unterminated marker: rest of line is literal
                plain.append(line[pos:])
                pos = length
            else:
                plain.append(line[pos])
                pos += 1

    flush_plain()
    return tokens


def detokenize(tokens: List[Token]) -> str:
    """Concatenate token payloads (delimiters are not restored)."""
    return "".join(token.text for token in tokens)


def parse_list_item(line: str) -> Optional[ListItem]:
    """
    Detect a list prefix on a line.

    Leading whitespace is ignored. Bullets are "- " and "* "; numbered
    items are "<digits>. ".

    Returns:
        ListItem with the remaining body, or None for ordinary lines.
    """
    stripped = line.strip()
    if stripped.startswith("- ") or stripped.startswith("* "):
        return ListItem(marker=stripped[0], number=None, body=stripped[2:])

    match = _NUMBERED_RE.match(stripped)
    if match:
        return ListItem(marker=".", number=int(match.group(1)), body=stripped[match.end():])
    return None
