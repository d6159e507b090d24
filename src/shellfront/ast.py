"""
Shell Abstract Syntax Tree (AST) Definitions
============================================

Node types produced by the parser.

Node Hierarchy
--------------
Node (base)
├── FileNode - root, one element per top-level command
└── Expr
    ├── Literal - a run of literal text or an identifier
    └── Command - ordered parts, possibly nested commands

Design Notes
------------
- Nodes are frozen dataclasses; the tree is immutable once returned
- Each node owns its children outright (no shared or back references)
- ``parts`` and ``elements`` keep source order
"""

from dataclasses import dataclass


# =============================================================================
# AST Node Classes
# =============================================================================

@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expr(Node):
    """Base class for command-expression nodes."""
    pass


@dataclass(frozen=True)
class Literal(Expr):
    """
    Literal text.

    Attributes:
        text: The literal characters, exactly as scanned
    """
    text: str


@dataclass(frozen=True)
class Command(Expr):
    """
    A command: an ordered sequence of literal and nested-command parts.

    Attributes:
        parts: Parts in source order
    """
    parts: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class FileNode(Node):
    """
    Root node aggregating top-level commands in source order.

    Attributes:
        elements: One Command per top-level command
    """
    elements: tuple[Expr, ...] = ()


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST traversal.

        class LiteralCounter(ASTVisitor):
            def __init__(self):
                self.count = 0

            def visit_Literal(self, node):
                self.count += 1
    """

    def visit(self, node: Node):
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Node) -> None:
        for field_value in node.__dict__.values():
            if isinstance(field_value, Node):
                self.visit(field_value)
            elif isinstance(field_value, tuple):
                for item in field_value:
                    if isinstance(item, Node):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

        >>> print(ASTPrinter().print(FileNode((Command((Literal("ls"),)),))))
        File
          Command
            Literal 'ls'
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Node) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_FileNode(self, node: FileNode):
        self._emit("File")
        self.indent_level += 1
        for element in node.elements:
            self.visit(element)
        self.indent_level -= 1

    def visit_Command(self, node: Command):
        self._emit("Command")
        self.indent_level += 1
        for part in node.parts:
            self.visit(part)
        self.indent_level -= 1

    def visit_Literal(self, node: Literal):
        self._emit(f"Literal {node.text!r}")
