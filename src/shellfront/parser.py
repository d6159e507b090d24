"""
Shell Recursive Descent Parser
==============================

Consumes a peekable stream of tokens and builds the command tree.

Grammar (Simplified EBNF)
-------------------------
file        ::= command* EOF
command     ::= part* (NEWLINE | EOF)
part        ::= TEXT | IDENT | group
group       ::= '(' part* ')'

A group's parts end at the closing parenthesis; a newline or end of input
inside a group is reported as a missing closing parenthesis.

Errors abort the parse immediately. There is no resynchronization.

Example Usage
-------------
>>> from shellfront.parser import Parser
>>> Parser.from_source("ls (a)").parse_file()
FileNode(elements=(Command(parts=(Literal(text='ls '), Command(parts=(Literal(text='a'),)))),))
"""

import logging
from typing import Iterable

from shellfront.ast import Command, Expr, FileNode, Literal
from shellfront.errors import ExpectedOneOf, ExpectedToken, UnexpectedTokenError
from shellfront.scanner import Scanner, Token, TokenType
from shellfront.stream import BufferStream, Stream

logger = logging.getLogger(__name__)


# Tokens that can start a command part
PART_START = (TokenType.TEXT, TokenType.IDENT, TokenType.LPAREN)

# Tokens that end a top-level command
COMMAND_END = (TokenType.NEWLINE, TokenType.EOF)

# Literal-bearing tokens
LITERAL_TOKENS = (TokenType.TEXT, TokenType.IDENT)


class Parser:
    """
    Recursive descent parser for the shell command subset.

    Usage:
        parser = Parser(BufferStream(scanner.scan_text))
        tree = parser.parse_file()

    Attributes:
        tokens: Peekable stream of tokens. Once it yields EOF it must keep
            yielding EOF.
    """

    def __init__(self, tokens: Stream[Token]):
        self.tokens = tokens

    @classmethod
    def from_source(cls, source: Iterable[str], filename: str = "<input>") -> "Parser":
        """Build a parser reading text-mode tokens from ``source``."""
        scanner = Scanner(source, filename)
        return cls(BufferStream(scanner.scan_text))

    def parse_file(self) -> FileNode:
        """
        Parse commands until end of input.

        Raises:
            ShellSyntaxError: On the first scanner or parser error
        """
        elements: list[Expr] = []
        while self.tokens.peek().type is not TokenType.EOF:
            elements.append(self.parse_command())

        logger.debug(f"Parsed file with {len(elements)} commands")
        return FileNode(tuple(elements))

    def parse_command(self) -> Command:
        """
        Parse one command, consuming its terminating NEWLINE or EOF.

        Raises:
            UnexpectedTokenError: If a token cannot start a part
        """
        parts = self._parse_parts(nested=False)
        return Command(tuple(parts))

    def _parse_parts(self, nested: bool) -> list[Expr]:
        parts: list[Expr] = []

        while True:
            token = self.tokens.peek()

            if token.type in COMMAND_END:
                if not nested:
                    self.tokens.get()
                break

            if nested and token.type is TokenType.RPAREN:
                break

            self.tokens.get()

            if token.type in LITERAL_TOKENS:
                parts.append(Literal(token.value))
            elif token.type is TokenType.LPAREN:
                parts.append(self._parse_group())
            else:
                raise UnexpectedTokenError(token, self._expected_part(nested))

        logger.debug(f"Parsed {'group' if nested else 'command'} with {len(parts)} parts")
        return parts

    def _parse_group(self) -> Command:
        """Parse the inside of '(' ... ')'; the '(' is already consumed."""
        parts = self._parse_parts(nested=True)

        closing = self.tokens.get()
        if closing.type is not TokenType.RPAREN:
            raise UnexpectedTokenError(closing, ExpectedToken(TokenType.RPAREN))

        return Command(tuple(parts))

    @staticmethod
    def _expected_part(nested: bool) -> ExpectedOneOf:
        if nested:
            return ExpectedOneOf.of(*PART_START, TokenType.RPAREN)
        return ExpectedOneOf.of(*PART_START, *COMMAND_END)
