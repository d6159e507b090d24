"""
Shell Scanner (Tokenizer)
=========================

This module implements the two-mode scanner for the shell language. It
pulls characters from any character source and produces tokens one at a
time, on request.

Scan Modes
----------
The caller chooses the mode for every request; the scanner keeps no mode
of its own.

- **Text**: everything is literal text except the special characters
  ``; ( ) [ ] $`` and newline. Literal runs are coalesced into a single
  TEXT token, and the special character is returned by the next call.
- **Expr**: structured tokens for control-structure headers: decimal
  integers, identifiers and keywords. Any other character is an error.

Text Mode Tokens
----------------
| Input        | Token                  |
|--------------|------------------------|
| ``;``        | SEMI                   |
| ``;;``       | SEMI_SEMI              |
| ``( ) [ ]``  | LPAREN RPAREN ...      |
| ``$``        | DOLLAR                 |
| ``$$``       | DOLLAR_DOLLAR          |
| ``$name``    | DOLLAR_IDENT('name')   |
| newline      | NEWLINE                |

Example Usage
-------------
>>> from shellfront.scanner import Scanner
>>> scanner = Scanner("echo $HOME;")
>>> for token in scanner.tokenize():
...     print(token)
Token(TEXT, 'echo ', 0..5)
Token(DOLLAR_IDENT, 'HOME', 5..10)
Token(SEMI, 10..11)
Token(EOF, 11..11)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, Iterator, Optional

from shellfront.errors import SourceLocation, Span, UnexpectedStringError
from shellfront.stream import BufferStream

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the shell language."""

    # === Structural Tokens ===
    EOF = auto()            # End of input, repeated forever once reached
    NEWLINE = auto()        # \n in text mode

    # === Literals ===
    TEXT = auto()           # Coalesced run of literal characters
    IDENT = auto()          # Identifier (expr mode)
    INTEGER = auto()        # Decimal integer (expr mode)

    # === Keywords ===
    IF = auto()
    ELIF = auto()
    ELSE = auto()
    FI = auto()
    FOR = auto()
    WHILE = auto()
    UNTIL = auto()
    DO = auto()
    DONE = auto()
    CASE = auto()
    ESAC = auto()
    FUNCTION = auto()

    # === Punctuation ===
    SEMI = auto()           # ;
    SEMI_SEMI = auto()      # ;;
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACKET = auto()       # [
    RBRACKET = auto()       # ]

    # === Variable References ===
    DOLLAR = auto()         # $
    DOLLAR_DOLLAR = auto()  # $$
    DOLLAR_IDENT = auto()   # $name

    @property
    def description(self) -> str:
        """Human-readable name used in diagnostics."""
        return TOKEN_DESCRIPTIONS[self]


class ScanMode(Enum):
    """Lexical context requested by the caller."""
    TEXT = auto()
    EXPR = auto()


# =============================================================================
# Keyword and Character Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "elif": TokenType.ELIF,
    "else": TokenType.ELSE,
    "fi": TokenType.FI,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "until": TokenType.UNTIL,
    "do": TokenType.DO,
    "done": TokenType.DONE,
    "case": TokenType.CASE,
    "esac": TokenType.ESAC,
    "function": TokenType.FUNCTION,
}

TOKEN_DESCRIPTIONS: dict[TokenType, str] = {
    TokenType.EOF: "end of input",
    TokenType.NEWLINE: "newline",
    TokenType.TEXT: "text",
    TokenType.IDENT: "identifier",
    TokenType.INTEGER: "integer",
    TokenType.SEMI: "';'",
    TokenType.SEMI_SEMI: "';;'",
    TokenType.LPAREN: "opening parenthesis",
    TokenType.RPAREN: "closing parenthesis",
    TokenType.LBRACKET: "opening bracket",
    TokenType.RBRACKET: "closing bracket",
    TokenType.DOLLAR: "'$'",
    TokenType.DOLLAR_DOLLAR: "'$$'",
    TokenType.DOLLAR_IDENT: "variable reference",
    **{token_type: f"keyword '{word}'" for word, token_type in KEYWORDS.items()},
}

# Characters that end a literal run in text mode
TEXT_SPECIAL = frozenset(";()[]$\n")

# Text-mode characters that always form a token on their own
SINGLE_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "\n": TokenType.NEWLINE,
}

DIGITS = frozenset(string.digits)


def is_ident_start(char: Optional[str]) -> bool:
    return char is not None and (char.isalpha() or char == "_")


def is_ident_part(char: Optional[str]) -> bool:
    return char is not None and (char.isalnum() or char == "_")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from shell source.

    Attributes:
        type: The TokenType classification
        value: Text for TEXT, name for IDENT and DOLLAR_IDENT, int for
            INTEGER, None otherwise
        span: Character offsets the token covers
        line: Line of the first character (1-indexed)
        column: Column of the first character (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None
    span: Span
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.span})"
            return f"Token({self.type.name}, {self.value!r}, {self.span})"
        return f"Token({self.type.name}, {self.span})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes shell source on demand.

    Usage:
        scanner = Scanner(source_text, filename)
        token = scanner.scan_text()
        header = scanner.scan_expr()

    Args:
        chars: Any iterable of characters. Errors raised while iterating
            propagate out of the scan call that needed the character.
        filename: Name of the source (for error reporting)
    """

    def __init__(self, chars: Iterable[str], filename: str = "<input>"):
        self.filename = filename
        self._chars: BufferStream[Optional[str]] = BufferStream.from_iterable(chars, end=None)

        # Offset of the next unconsumed character
        self._offset = 0
        self._line = 1
        self._column = 1

        # Where the token currently being scanned began
        self._start_offset = 0
        self._start_line = 1
        self._start_column = 1

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def span(self) -> Span:
        """Characters consumed so far by the current token."""
        return Span(self._start_offset, self._offset)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def peek_char(self, offset: int = 0) -> Optional[str]:
        """
        Look at the character ``offset`` positions ahead without consuming.

        Returns None at end of input.
        """
        return self._chars.peek(offset)

    def get_char(self) -> Optional[str]:
        """Consume and return the next character, or None at end of input."""
        char = self._chars.get()
        if char is None:
            return None

        self._offset += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def skip_char(self) -> None:
        self.get_char()

    def skip_chars(self, count: int) -> None:
        for _ in range(count):
            if self.get_char() is None:
                break

    def take_while(self, predicate: Callable[[Optional[str]], bool], out: list[str]) -> None:
        """
        Consume characters into ``out`` while ``predicate`` holds.

        The first character failing the predicate is left unconsumed.
        """
        while predicate(self.peek_char()):
            out.append(self.get_char())

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _begin_token(self) -> None:
        self._start_offset = self._offset
        self._start_line = self._line
        self._start_column = self._column

    def _make_token(self, token_type: TokenType, value: str | int | None = None) -> Token:
        token = Token(
            type=token_type,
            value=value,
            span=self.span,
            line=self._start_line,
            column=self._start_column,
            filename=self.filename,
        )
        logger.debug(f"{self.filename}: scanned {token!r}")
        return token

    # =========================================================================
    # Public Scanning Entry Points
    # =========================================================================

    def scan(self, mode: ScanMode = ScanMode.TEXT) -> Token:
        """
        Produce the next token in the given mode.

        Raises:
            UnexpectedStringError: If a character matches no rule of the mode
        """
        if mode is ScanMode.EXPR:
            return self.scan_expr()
        return self.scan_text()

    def scan_text(self) -> Token:
        """Produce the next text-mode token."""
        self._begin_token()
        text: list[str] = []

        while True:
            char = self.peek_char()
            if char is None or char in TEXT_SPECIAL:
                if text:
                    return self._make_token(TokenType.TEXT, "".join(text))
                return self._scan_special(char)
            text.append(self.get_char())

    def scan_expr(self) -> Token:
        """Produce the next expr-mode token."""
        self._begin_token()
        char = self.peek_char()

        if char is None:
            return self._make_token(TokenType.EOF)

        if char in DIGITS:
            return self._scan_integer()

        if is_ident_start(char):
            chars: list[str] = []
            self.take_while(is_ident_part, chars)
            name = "".join(chars)
            if name in KEYWORDS:
                return self._make_token(KEYWORDS[name])
            return self._make_token(TokenType.IDENT, name)

        raise UnexpectedStringError(
            char,
            Span(self._start_offset, self._offset + 1),
            SourceLocation(self.filename, self._line, self._column),
        )

    def tokenize(self, mode: ScanMode = ScanMode.TEXT) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EOF.

        Raises:
            UnexpectedStringError: If invalid input is encountered
        """
        while True:
            token = self.scan(mode)
            yield token
            if token.type is TokenType.EOF:
                return

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_special(self, char: Optional[str]) -> Token:
        """Scan a text-mode token starting at a special character."""
        if char is None:
            return self._make_token(TokenType.EOF)

        if char == ";":
            if self.peek_char(1) == ";":
                self.skip_chars(2)
                return self._make_token(TokenType.SEMI_SEMI)
            self.skip_char()
            return self._make_token(TokenType.SEMI)

        if char == "$":
            return self._scan_dollar()

        self.skip_char()
        return self._make_token(SINGLE_TOKENS[char])

    def _scan_dollar(self) -> Token:
        """Scan ``$``, ``$$`` or ``$name``."""
        following = self.peek_char(1)
        self.skip_char()

        if following == "$":
            self.skip_char()
            return self._make_token(TokenType.DOLLAR_DOLLAR)

        if is_ident_start(following):
            name: list[str] = []
            self.take_while(is_ident_part, name)
            return self._make_token(TokenType.DOLLAR_IDENT, "".join(name))

        return self._make_token(TokenType.DOLLAR)

    def _scan_integer(self) -> Token:
        """Accumulate decimal digits left to right."""
        value = 0
        while self.peek_char() in DIGITS:
            value = value * 10 + int(self.get_char())
        return self._make_token(TokenType.INTEGER, value)
