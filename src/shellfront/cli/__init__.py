"""
Shellfront Command-Line Interface
=================================

- **shscan**: dump the tokens or the command tree of a shell source file

Implemented as a Click application with the shared error handling in
``shellfront.cli.errors``.
"""

__all__ = ["shscan"]
