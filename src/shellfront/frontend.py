"""
Shellfront Pipeline
===================

Programmatic entry points wiring the pipeline together:

    Source → Scanner → BufferStream → Parser → FileNode

Usage
-----
>>> from shellfront.frontend import parse_source, tokenize_source
>>> [t.type.name for t in tokenize_source("a;;b")]
['TEXT', 'SEMI_SEMI', 'TEXT', 'EOF']
>>> parse_source("ls\\n").elements
(Command(parts=(Literal(text='ls'),)),)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from shellfront.ast import FileNode
from shellfront.parser import Parser
from shellfront.scanner import ScanMode, Scanner, Token
from shellfront.source import iter_file_chars

logger = logging.getLogger(__name__)


class EmitKind(Enum):
    """What a pipeline run produces."""
    TOKENS = "tokens"
    AST = "ast"


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        filename: Name used in tokens and error messages
        mode: Scan mode for token dumps (parsing always reads text mode)
        encoding: Encoding used when reading source files
    """
    filename: str = "<input>"
    mode: ScanMode = ScanMode.TEXT
    encoding: str = "utf-8"


@dataclass
class FrontendResult:
    """
    Output of a pipeline run.

    Attributes:
        filename: Source that was processed
        tokens: Scanned tokens including the final EOF (token runs only)
        ast: Parsed tree (AST runs only)
    """
    filename: str
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[FileNode] = None


def tokenize_source(source: Iterable[str], options: Optional[FrontendOptions] = None) -> list[Token]:
    """
    Scan ``source`` completely.

    Raises:
        UnexpectedStringError: If a character matches no scanner rule
    """
    options = options or FrontendOptions()
    scanner = Scanner(source, options.filename)
    return list(scanner.tokenize(options.mode))


def parse_source(source: Iterable[str], options: Optional[FrontendOptions] = None) -> FileNode:
    """
    Parse ``source`` into a FileNode.

    Raises:
        ShellSyntaxError: On the first scanner or parser error
    """
    options = options or FrontendOptions()
    return Parser.from_source(source, options.filename).parse_file()


def process_file(
    path: Union[str, Path],
    emit: EmitKind = EmitKind.TOKENS,
    options: Optional[FrontendOptions] = None,
) -> FrontendResult:
    """
    Stream a source file through the requested stage.

    Characters are pulled from the file only as the scanner needs them,
    with line endings untranslated.

    Raises:
        FileNotFoundError: If the file does not exist
        UnicodeDecodeError: If the file cannot be decoded
        ShellSyntaxError: On the first scanner or parser error
    """
    options = options or FrontendOptions(filename=str(path))
    result = FrontendResult(filename=options.filename)
    chars = iter_file_chars(path, options.encoding)

    try:
        if emit is EmitKind.AST:
            result.ast = parse_source(chars, options)
            logger.info(f"{options.filename}: parsed {len(result.ast.elements)} commands")
        else:
            result.tokens = tokenize_source(chars, options)
            logger.info(f"{options.filename}: scanned {len(result.tokens)} tokens")
    finally:
        chars.close()

    return result
