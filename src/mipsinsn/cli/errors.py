"""
CLI Error Handling
==================

Consistent error reporting and exit codes for the command-line tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from mipsinsn.errors import MipsError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    DISASSEMBLY_ERROR = 1  # Decoding or configuration error
    INVALID_ARGS = 2       # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3     # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised by a CLI tool and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print the full traceback for internal errors

    Raises:
        SystemExit: Always, with the exit code matching the error
    """
    if isinstance(error, MipsError):
        # Already formatted as "error: ...\nhint: ..."
        click.echo(str(error), err=True)
        sys.exit(ExitCode.DISASSEMBLY_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
