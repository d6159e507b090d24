"""
Shellfront Error Hierarchy
==========================

This module defines the exception hierarchy shared by the scanner and the
parser. All exceptions inherit from ShellFrontError, allowing callers to
catch every front-end failure with a single except clause.

Exception Hierarchy
-------------------
ShellFrontError (base)
└── ShellSyntaxError - scanner and parser syntax errors
    ├── UnexpectedStringError - character matches no scanner rule
    └── UnexpectedTokenError - token does not fit the grammar

Error Message Format
--------------------
    script.sh:3:7: error: unexpected token ';'
    hint: expected one of: text, identifier, '(', newline, end of input

Spans
-----
Spans are half-open ``[start, end)`` offsets counted in Unicode code
points (Python string indices), not encoded bytes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from shellfront.scanner import Token, TokenType


# =============================================================================
# Base Exception Class
# =============================================================================

class ShellFrontError(Exception):
    """
    Base exception for all shellfront errors.

        try:
            parse_source(text)
        except ShellFrontError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Position Tracking
# =============================================================================

@dataclass(frozen=True)
class Span:
    """
    Half-open range of character offsets ``[start, end)``.

    Attributes:
        start: Offset of the first character
        end: Offset one past the last character
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class SourceLocation:
    """
    A line/column position in a source file, for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Parser Expectations
# =============================================================================

class Expected(ABC):
    """What the parser wanted at the point of failure."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description for the error hint."""


@dataclass(frozen=True)
class ExpectedToken(Expected):
    """A single concrete token kind, e.g. a closing parenthesis."""
    token_type: "TokenType"

    def describe(self) -> str:
        return self.token_type.description


@dataclass(frozen=True)
class ExpectedOneOf(Expected):
    """
    A set of acceptable alternatives.

    The set is the grammar's first-set at the failure point and is never
    empty.
    """
    alternatives: tuple[Expected, ...]

    def __post_init__(self):
        if not self.alternatives:
            raise ValueError("ExpectedOneOf requires at least one alternative")

    @classmethod
    def of(cls, *token_types: "TokenType") -> "ExpectedOneOf":
        """Build an alternative set from token types."""
        return cls(tuple(ExpectedToken(t) for t in token_types))

    def describe(self) -> str:
        return "one of: " + ", ".join(alt.describe() for alt in self.alternatives)

    def __contains__(self, token_type: object) -> bool:
        return any(
            isinstance(alt, ExpectedToken) and alt.token_type == token_type
            for alt in self.alternatives
        )


# =============================================================================
# Syntax Errors (Scanner and Parser)
# =============================================================================

class ShellSyntaxError(ShellFrontError):
    """
    Syntax error in shell source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnexpectedStringError(ShellSyntaxError):
    """
    Raised by the scanner when a character matches no rule of the
    active mode.

    Attributes:
        actual: The offending character
        span: From the start of the token attempt through the character
    """

    def __init__(
        self,
        actual: str,
        span: Span,
        location: Optional[SourceLocation] = None,
    ):
        self.actual = actual
        self.span = span
        super().__init__(
            f"unexpected character {actual!r} at {span}",
            location=location,
        )


class UnexpectedTokenError(ShellSyntaxError):
    """
    Raised by the parser when the next token does not match the grammar.

    Attributes:
        actual: The token that was found
        expected: What the grammar accepts at this point
    """

    def __init__(self, actual: "Token", expected: Expected):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"unexpected {actual.type.description}",
            location=actual.location,
            hint=f"expected {expected.describe()}",
        )
