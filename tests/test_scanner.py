# =============================================================================
# test_scanner.py - Scanner Unit Tests
# =============================================================================
# Tests for the two-mode shell scanner.
#
# Test coverage includes:
#   - Text mode: literal coalescing, punctuation, sigils, newlines
#   - Expr mode: integers, identifiers, keyword classification
#   - Spans, line/column tracking and the repeated EOF token
#   - Error conditions and failing character sources
# =============================================================================

import pytest

from shellfront.errors import Span, UnexpectedStringError
from shellfront.scanner import KEYWORDS, Scanner, ScanMode, Token, TokenType


# =============================================================================
# Helper Functions
# =============================================================================

def scan_all(source: str, mode: ScanMode = ScanMode.TEXT) -> list[tuple]:
    """Scan to EOF inclusive and return (type, value) pairs."""
    return [(t.type, t.value) for t in Scanner(source).tokenize(mode)]


EOF = (TokenType.EOF, None)


# =============================================================================
# Text Mode Tests
# =============================================================================

class TestTextCoalescing:
    """Literal characters are gathered into a single TEXT token."""

    def test_plain_text_is_one_token(self):
        assert scan_all("foo bar baz") == [(TokenType.TEXT, "foo bar baz"), EOF]

    def test_unicode_text(self):
        assert scan_all("héllo wörld") == [(TokenType.TEXT, "héllo wörld"), EOF]

    def test_empty_input(self):
        """No empty TEXT token is ever produced."""
        assert scan_all("") == [EOF]

    def test_text_before_special_returned_first(self):
        scanner = Scanner("ab(")
        first = scanner.scan_text()
        assert first.type is TokenType.TEXT
        assert first.value == "ab"
        assert scanner.scan_text().type is TokenType.LPAREN

    def test_whitespace_is_literal(self):
        assert scan_all("  \t ") == [(TokenType.TEXT, "  \t "), EOF]

    def test_digits_are_literal_in_text_mode(self):
        assert scan_all("123") == [(TokenType.TEXT, "123"), EOF]


class TestTextPunctuation:
    """Special characters in text mode."""

    def test_semicolon(self):
        assert scan_all("a;b") == [
            (TokenType.TEXT, "a"),
            (TokenType.SEMI, None),
            (TokenType.TEXT, "b"),
            EOF,
        ]

    def test_double_semicolon(self):
        assert scan_all("a;;b") == [
            (TokenType.TEXT, "a"),
            (TokenType.SEMI_SEMI, None),
            (TokenType.TEXT, "b"),
            EOF,
        ]

    def test_triple_semicolon(self):
        """';;' is taken greedily, leaving a lone ';'."""
        assert scan_all(";;;") == [(TokenType.SEMI_SEMI, None), (TokenType.SEMI, None), EOF]

    def test_brackets_and_parens(self):
        types = [t for t, _ in scan_all("([])")]
        assert types == [
            TokenType.LPAREN,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.RPAREN,
            TokenType.EOF,
        ]

    def test_newline_token(self):
        assert scan_all("ls\npwd") == [
            (TokenType.TEXT, "ls"),
            (TokenType.NEWLINE, None),
            (TokenType.TEXT, "pwd"),
            EOF,
        ]


class TestTextSigils:
    """Dollar handling: $, $$ and $name."""

    def test_dollar_identifiers(self):
        assert scan_all("$foo baz $bar") == [
            (TokenType.DOLLAR_IDENT, "foo"),
            (TokenType.TEXT, " baz "),
            (TokenType.DOLLAR_IDENT, "bar"),
            EOF,
        ]

    def test_double_dollar(self):
        assert scan_all("$$") == [(TokenType.DOLLAR_DOLLAR, None), EOF]

    def test_lone_dollar(self):
        assert scan_all("$ ") == [(TokenType.DOLLAR, None), (TokenType.TEXT, " "), EOF]

    def test_dollar_at_end(self):
        assert scan_all("$") == [(TokenType.DOLLAR, None), EOF]

    def test_dollar_identifier_stops_at_non_identifier(self):
        assert scan_all("$a_1-x") == [
            (TokenType.DOLLAR_IDENT, "a_1"),
            (TokenType.TEXT, "-x"),
            EOF,
        ]

    def test_dollar_before_digit_is_bare(self):
        """Digits cannot start a variable name."""
        assert scan_all("$1") == [(TokenType.DOLLAR, None), (TokenType.TEXT, "1"), EOF]

    def test_dollar_underscore(self):
        assert scan_all("$_") == [(TokenType.DOLLAR_IDENT, "_"), EOF]


# =============================================================================
# Expr Mode Tests
# =============================================================================

class TestExprMode:
    """Structured tokens for control-structure headers."""

    @pytest.mark.parametrize("word", ["if", "fi", "for", "while", "do", "done", "case", "esac"])
    def test_core_keywords(self, word):
        token = Scanner(word).scan_expr()
        assert token.type is KEYWORDS[word]
        assert token.type.name == word.upper()

    @pytest.mark.parametrize("word", ["elif", "else", "until", "function"])
    def test_extended_keywords(self, word):
        assert Scanner(word).scan_expr().type is KEYWORDS[word]

    @pytest.mark.parametrize("word", ["foo", "iff", "If", "done2", "_x", "fi_"])
    def test_identifier(self, word):
        token = Scanner(word).scan_expr()
        assert token.type is TokenType.IDENT
        assert token.value == word

    def test_integer(self):
        scanner = Scanner("123")
        token = scanner.scan_expr()
        assert token.type is TokenType.INTEGER
        assert token.value == 123
        assert token.span == Span(0, 3)
        assert scanner.scan_expr().type is TokenType.EOF

    def test_large_integer(self):
        token = Scanner("98765432109876543210").scan_expr()
        assert token.value == 98765432109876543210

    def test_integer_then_identifier(self):
        assert scan_all("42abc", ScanMode.EXPR) == [
            (TokenType.INTEGER, 42),
            (TokenType.IDENT, "abc"),
            EOF,
        ]

    def test_scan_with_explicit_mode(self):
        scanner = Scanner("if")
        assert scanner.scan(ScanMode.EXPR).type is TokenType.IF

    def test_same_input_differs_by_mode(self):
        assert Scanner("while").scan(ScanMode.TEXT).type is TokenType.TEXT
        assert Scanner("while").scan(ScanMode.EXPR).type is TokenType.WHILE

    def test_mode_can_change_between_calls(self):
        scanner = Scanner("for(x")
        assert scanner.scan_expr().type is TokenType.FOR
        assert scanner.scan_text().type is TokenType.LPAREN
        assert scanner.scan_expr().value == "x"


class TestExprErrors:
    """Characters that match no expr-mode rule."""

    def test_space_is_rejected(self):
        with pytest.raises(UnexpectedStringError) as exc_info:
            Scanner(" if").scan_expr()
        assert exc_info.value.actual == " "
        assert exc_info.value.span == Span(0, 1)

    def test_error_after_valid_tokens(self):
        scanner = Scanner("ab+")
        scanner.scan_expr()
        with pytest.raises(UnexpectedStringError) as exc_info:
            scanner.scan_expr()
        assert exc_info.value.actual == "+"
        assert exc_info.value.span == Span(2, 3)

    def test_error_location(self):
        scanner = Scanner("x\n", filename="hdr.sh")
        scanner.scan_expr()
        with pytest.raises(UnexpectedStringError) as exc_info:
            scanner.scan_expr()
        assert str(exc_info.value.location) == "hdr.sh:1:2"
        assert "hdr.sh:1:2: error: unexpected character '\\n'" in str(exc_info.value)

    def test_error_does_not_consume(self):
        scanner = Scanner("+")
        with pytest.raises(UnexpectedStringError):
            scanner.scan_expr()
        assert scanner.offset == 0
        assert scanner.scan_text().value == "+"


# =============================================================================
# Positions and End of Input
# =============================================================================

class TestSpans:
    """Offsets, spans and line/column tracking."""

    def test_token_spans(self):
        tokens = list(Scanner("ab;;$x").tokenize())
        assert [t.span for t in tokens] == [
            Span(0, 2),
            Span(2, 4),
            Span(4, 6),
            Span(6, 6),
        ]

    def test_spans_never_decrease(self):
        tokens = list(Scanner("a (b) [c] $d $$ ; ;;\n e").tokenize())
        starts = [t.span.start for t in tokens]
        assert starts == sorted(starts)
        for before, after in zip(tokens, tokens[1:]):
            assert before.span.end <= after.span.start

    def test_spans_count_code_points(self):
        tokens = list(Scanner("日本;").tokenize())
        assert tokens[0].span == Span(0, 2)
        assert tokens[1].span == Span(2, 3)

    def test_line_and_column(self):
        tokens = list(Scanner("ab\n  (x", filename="t.sh").tokenize())
        lparen = tokens[3]
        assert lparen.type is TokenType.LPAREN
        assert (lparen.line, lparen.column) == (2, 3)
        assert str(lparen.location) == "t.sh:2:3"


class TestEndOfInput:
    """EOF is a terminal state repeated on every later request."""

    def test_eof_repeats(self):
        scanner = Scanner("a")
        scanner.scan_text()
        tokens = [scanner.scan_text() for _ in range(5)]
        assert all(t.type is TokenType.EOF for t in tokens)
        assert all(t.span == Span(1, 1) for t in tokens)
        assert scanner.offset == 1

    def test_eof_repeats_across_modes(self):
        scanner = Scanner("")
        assert scanner.scan_text().type is TokenType.EOF
        assert scanner.scan_expr().type is TokenType.EOF
        assert scanner.scan_text().type is TokenType.EOF

    def test_sentinel_like_characters_are_ordinary_text(self):
        """End of input is not a reserved character."""
        assert scan_all("a\uffffb\x00") == [(TokenType.TEXT, "a\uffffb\x00"), EOF]

    def test_tokenize_stops_after_eof(self):
        tokens = list(Scanner("x").tokenize())
        assert tokens[-1].type is TokenType.EOF
        assert len(tokens) == 2


# =============================================================================
# Character Access and Sources
# =============================================================================

class TestCharacterAccess:
    """Low-level character lookahead used by the scanning rules."""

    def test_peek_does_not_consume(self):
        scanner = Scanner("abc")
        assert scanner.peek_char(2) == "c"
        assert scanner.peek_char() == "a"
        assert scanner.get_char() == "a"
        assert scanner.offset == 1

    def test_peek_past_end(self):
        scanner = Scanner("a")
        assert scanner.peek_char(3) is None
        assert scanner.get_char() == "a"
        assert scanner.get_char() is None

    def test_skip_chars_past_end(self):
        scanner = Scanner("ab")
        scanner.skip_chars(5)
        assert scanner.offset == 2

    def test_take_while(self):
        scanner = Scanner("aaab")
        out: list[str] = []
        scanner.take_while(lambda c: c == "a", out)
        assert out == ["a", "a", "a"]
        assert scanner.peek_char() == "b"

    def test_lazy_source(self):
        """Characters are pulled only when needed."""
        pulled = []

        def chars():
            for c in "a;b":
                pulled.append(c)
                yield c

        scanner = Scanner(chars())
        scanner.scan_text()
        assert pulled == ["a", ";"]

    def test_source_error_propagates(self):
        def chars():
            yield "a"
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        scanner = Scanner(chars())
        with pytest.raises(UnicodeDecodeError):
            scanner.scan_text()


class TestTokenRepr:
    """Debug representation used by the token dump."""

    def test_repr_with_text(self):
        token = Token(TokenType.TEXT, "ls", Span(0, 2))
        assert repr(token) == "Token(TEXT, 'ls', 0..2)"

    def test_repr_with_integer(self):
        assert repr(Token(TokenType.INTEGER, 7, Span(0, 1))) == "Token(INTEGER, 7, 0..1)"

    def test_repr_without_value(self):
        assert repr(Token(TokenType.EOF, None, Span(3, 3))) == "Token(EOF, 3..3)"
