"""
Unit Tests for the Rich-Text Tokenizer

Tests for tokenize_line() precedence, malformed markup and list detection.
"""

import pytest

from handwriting_toolkit.core.models import TokenKind
from handwriting_toolkit.writer.tokenizer import detokenize, parse_list_item, tokenize_line


def _pairs(line):
    return [(t.kind, t.text) for t in tokenize_line(line)]


class TestTokenizeLine:
    """Tests for tokenize_line function."""

    def test_tokenize_when_empty_then_no_tokens(self):
        assert tokenize_line("") == []

    def test_tokenize_when_plain_then_single_run(self):
        assert _pairs("just words") == [(TokenKind.PLAIN, "just words")]

    def test_tokenize_when_mixed_markup_then_runs_in_order(self):
        assert _pairs("a **b** *c* $d$") == [
            (TokenKind.PLAIN, "a "),
            (TokenKind.BOLD, "b"),
            (TokenKind.PLAIN, " "),
            (TokenKind.ITALIC, "c"),
            (TokenKind.PLAIN, " "),
            (TokenKind.INLINE_MATH, "d"),
        ]

    @pytest.mark.parametrize("line, kind, text", [
        ("$$E=mc^2$$", TokenKind.BLOCK_MATH, "E=mc^2"),
        ("\\[x+1\\]", TokenKind.BLOCK_MATH, "x+1"),
        ("\\(y\\)", TokenKind.INLINE_MATH, "y"),
        ("$z$", TokenKind.INLINE_MATH, "z"),
    ])
    def test_tokenize_when_math_delimiters_then_math_kind(self, line, kind, text):
        assert _pairs(line) == [(kind, text)]

    def test_tokenize_when_double_dollar_then_block_beats_inline(self):
        """$$ is tried before $."""
        tokens = tokenize_line("see $$a$$ now")

        assert tokens[1].kind is TokenKind.BLOCK_MATH
        assert tokens[1].text == "a"

    def test_tokenize_when_double_star_then_bold_beats_italic(self):
        assert _pairs("**x**") == [(TokenKind.BOLD, "x")]

    def test_tokenize_when_unterminated_bold_then_rest_is_plain(self):
        """An opener without a terminator makes the rest of the line literal."""
        assert _pairs("start **never closed") == [(TokenKind.PLAIN, "start **never closed")]

    def test_tokenize_when_unterminated_dollar_then_rest_is_plain(self):
        assert _pairs("cost $5 only") == [(TokenKind.PLAIN, "cost $5 only")]

    def test_tokenize_when_plain_runs_adjacent_then_merged(self):
        tokens = tokenize_line("a * b")

        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.PLAIN

    def test_tokenize_when_whitespace_inside_run_then_kept(self):
        assert _pairs("**two  words**") == [(TokenKind.BOLD, "two  words")]

    def test_detokenize_when_balanced_then_delimiters_removed_once(self):
        assert detokenize(tokenize_line("x **y** $z$")) == "x y z"


class TestParseListItem:
    """Tests for parse_list_item function."""

    @pytest.mark.parametrize("line, marker", [("- milk", "-"), ("* eggs", "*"), ("   - indented", "-")])
    def test_parse_when_bullet_then_marker_and_body(self, line, marker):
        item = parse_list_item(line)

        assert item is not None
        assert item.marker == marker
        assert item.number is None
        assert not item.is_numbered

    def test_parse_when_numbered_then_number_and_body(self):
        item = parse_list_item("12. twelfth point")

        assert item.number == 12
        assert item.body == "twelfth point"
        assert item.is_numbered

    @pytest.mark.parametrize("line", ["-no space", "3.5 metres", "plain", "", "**bold**"])
    def test_parse_when_not_list_then_none(self, line):
        assert parse_list_item(line) is None
