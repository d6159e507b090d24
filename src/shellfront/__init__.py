"""
Shellfront - Scanner and Parser Front End for a Shell-Like Language
===================================================================

This package turns shell source text into a token stream and then into a
command-expression tree. It does not execute anything: expansion,
redirection, globbing and job control belong to whatever consumes the
tree.

Main Components
---------------
- **stream**: generic peekable stream with a lookahead buffer
- **scanner**: two-mode tokenizer (text and expr)
- **parser**: recursive descent parser producing the command tree
- **ast**: command tree nodes, visitor and pretty printer
- **errors**: exception hierarchy shared by scanner and parser

Quick Start
-----------
    >>> from shellfront import Scanner, Parser
    >>> [t.type.name for t in Scanner("a;b").tokenize()]
    ['TEXT', 'SEMI', 'TEXT', 'EOF']
    >>> Parser.from_source("(a)").parse_command()
    Command(parts=(Command(parts=(Literal(text='a'),)),))

Or use the command-line tool:
    $ shscan --emit ast script.sh
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from shellfront.errors import (
    ShellFrontError,
    ShellSyntaxError,
    UnexpectedStringError,
    UnexpectedTokenError,
    Span,
    SourceLocation,
    Expected,
    ExpectedToken,
    ExpectedOneOf,
)
from shellfront.stream import Stream, BufferStream
from shellfront.scanner import Scanner, ScanMode, Token, TokenType, KEYWORDS
from shellfront.ast import Node, Expr, Literal, Command, FileNode, ASTVisitor, ASTPrinter
from shellfront.parser import Parser
from shellfront.frontend import (
    EmitKind,
    FrontendOptions,
    FrontendResult,
    tokenize_source,
    parse_source,
    process_file,
)

__all__ = [
    # Version info
    "__version__",
    # Errors
    "ShellFrontError",
    "ShellSyntaxError",
    "UnexpectedStringError",
    "UnexpectedTokenError",
    "Span",
    "SourceLocation",
    "Expected",
    "ExpectedToken",
    "ExpectedOneOf",
    # Streams
    "Stream",
    "BufferStream",
    # Scanner
    "Scanner",
    "ScanMode",
    "Token",
    "TokenType",
    "KEYWORDS",
    # AST
    "Node",
    "Expr",
    "Literal",
    "Command",
    "FileNode",
    "ASTVisitor",
    "ASTPrinter",
    # Parser
    "Parser",
    # Pipeline
    "EmitKind",
    "FrontendOptions",
    "FrontendResult",
    "tokenize_source",
    "parse_source",
    "process_file",
]
