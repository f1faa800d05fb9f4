"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes across all CLI tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    LEXICAL_ERROR = 1    # Source scanned, but contains lexical errors
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for all CLI tools.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from corgi.errors import CorgiError, ScanOpenError

    if isinstance(error, ScanOpenError):
        click.echo(f"Error: {error.reason}: '{error.path}'", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, CorgiError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INTERNAL_ERROR)

    else:
        # Unexpected internal error
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
