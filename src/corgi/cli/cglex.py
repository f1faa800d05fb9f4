"""
cglex - Corgi Token Dump Command-Line Interface
===============================================

Scans a Corgi source file and prints its tokens, one per line. Tokens
that carry text (strings and identifiers) show it in parentheses.
Comments are not shown; lexical errors are printed to stderr with their
position and the offending source text.

Usage Examples
--------------
Dump tokens:
    $ cglex hello.cg

Show byte offsets and lengths:
    $ cglex --positions hello.cg

Verbose mode (debug logging, tracebacks on internal errors):
    $ cglex -v hello.cg

Exit Codes
----------
0 - Success
1 - The file contains lexical errors
2 - Invalid arguments or unreadable file
3 - Internal error
"""

import logging
import sys
from pathlib import Path

import click

from corgi import __version__
from corgi.cli.errors import ExitCode, handle_cli_exception
from corgi.config import ScanOptions
from corgi.driver import scan_file
from corgi.errors import DiagnosticCollector
from corgi.lexer import Token, TokenType

logger = logging.getLogger(__name__)


def format_token(token: Token, positions: bool = False) -> str:
    """
    Format one token for the dump.

    Examples:
        identifier (count)
        end of line
        12:3  string (abc)
    """
    line = token.type.display_name
    if token.text is not None:
        line += f" ({token.text})"
    elif token.type is TokenType.ERROR:
        line += f": {token.error}"
    if positions:
        line = f"{token.offset}:{token.length}\t{line}"
    return line


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--positions",
    is_flag=True,
    help="Prefix each token with its byte offset and length",
)
@click.option(
    "--no-error-tokens",
    is_flag=True,
    help="Leave error tokens out of the dump (they are still reported)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="cglex")
def main(
    input_file: Path,
    positions: bool,
    no_error_tokens: bool,
    verbose: bool,
) -> None:
    """
    Scan a Corgi source file and print its tokens.

    INPUT_FILE is the Corgi source file (.cg) to scan.

    \b
    Examples:
        cglex hello.cg                # One token per line
        cglex --positions hello.cg    # With offset:length
        cglex -v hello.cg             # Debug logging

    Options can also be set through CORGI_KEEP_ERROR_TOKENS and
    CORGI_ENCODING environment variables.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    options = ScanOptions.from_env()
    # Diagnostics are printed below instead of logged
    options.report_errors = False
    if no_error_tokens:
        options.keep_error_tokens = False

    try:
        stream = scan_file(input_file, options)
    except Exception as e:
        handle_cli_exception(e, verbose)

    for token in stream:
        click.echo(format_token(token, positions))

    if stream.has_errors():
        collector = DiagnosticCollector()
        collector.extend(stream.diagnostics)
        click.echo(collector.report(), err=True)
        sys.exit(ExitCode.LEXICAL_ERROR)

    logger.debug(f"Scanned {input_file}: {len(stream)} tokens")


if __name__ == "__main__":
    main()
