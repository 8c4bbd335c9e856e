"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the android-mcp CLI.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn, Optional

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands."""
    SUCCESS = 0
    TOOL_ERROR = 1       # Tool returned an error or an external command failed
    INVALID_ARGS = 2     # Invalid arguments, unknown tool or malformed JSON
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: Optional[str] = None
) -> NoReturn:
    """
    Unified exception handler for CLI commands.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (e.g., "Server")

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from android_mcp.errors import AndroidMcpError

    if isinstance(error, AndroidMcpError):
        # Messages already read as complete sentences
        click.echo(str(error), err=True)
        sys.exit(ExitCode.TOOL_ERROR)

    elif isinstance(error, click.BadParameter):
        # Invalid command-line arguments
        click.echo(f"Error: {error.format_message()}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        # Unexpected internal error
        prefix = f"{error_type} internal error" if error_type else "Internal error"
        click.echo(f"{prefix}: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
