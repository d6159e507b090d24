"""
shscan - Shell Front-End Command-Line Interface
===============================================

Scans (and optionally parses) a shell source file and writes a
human-readable dump to stderr.

Usage Examples
--------------
Token dump:
    $ shscan script.sh

Command tree:
    $ shscan --emit ast script.sh

Expr-mode tokens:
    $ shscan --mode expr header.txt

Verbose mode:
    $ shscan -v script.sh
"""

import logging
from pathlib import Path

import click

from shellfront import __version__
from shellfront.ast import ASTPrinter
from shellfront.cli.errors import handle_cli_exception
from shellfront.frontend import EmitKind, FrontendOptions, process_file
from shellfront.scanner import ScanMode

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--emit",
    type=click.Choice([kind.value for kind in EmitKind], case_sensitive=False),
    default=EmitKind.TOKENS.value,
    show_default=True,
    help="What to dump: the token stream or the parsed command tree",
)
@click.option(
    "--mode",
    type=click.Choice(["text", "expr"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Scan mode for the token dump; parsing always reads text mode",
)
@click.option(
    "-e", "--encoding",
    default="utf-8",
    show_default=True,
    help="Source file encoding",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="shscan")
def main(
    input_file: Path,
    emit: str,
    mode: str,
    encoding: str,
    verbose: bool,
) -> None:
    """
    Tokenize or parse a shell source file.

    INPUT_FILE is the UTF-8 source file to read. The dump is written to
    stderr; any error aborts with a non-zero exit code.

    \b
    Examples:
        shscan script.sh               # Token stream
        shscan --emit ast script.sh    # Command tree
        shscan --mode expr hdr.txt     # Expr-mode tokens
    """
    setup_logging(verbose)

    options = FrontendOptions(
        filename=str(input_file),
        mode=ScanMode[mode.upper()],
        encoding=encoding,
    )
    kind = EmitKind(emit.lower())
    if kind is EmitKind.AST and options.mode is ScanMode.EXPR:
        raise click.UsageError("--mode expr applies to the token dump only, not --emit ast")

    try:
        logger.debug(f"Processing {input_file} (emit={kind.value}, mode={mode})")
        result = process_file(input_file, kind, options)
    except Exception as e:
        handle_cli_exception(e, verbose)

    if result.ast is not None:
        click.echo(ASTPrinter().print(result.ast), err=True)
    else:
        for token in result.tokens:
            click.echo(repr(token), err=True)


if __name__ == "__main__":
    main()
