"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and a CLI command wrapper
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

from typing import Callable, TypeVar

import typer

from ..errors import NonZeroExit

T = TypeVar('T')

EXIT_CODES = {
    "ToolchainNotFound": 1,
    "SpawnFailure": 1,
    "ParseFailure": 1,
    "ValidationError": 2,
    "ValueError": 2,
}


def normalize_exit_code(code: int) -> int:
    """
    Convert a child's return code into a status this process can exit with.

    asyncio reports death-by-signal as ``-signum``; shells report it as
    ``128 + signum``.
    """
    if code < 0:
        return 128 - code
    return code


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    - 1: Launch failure (ToolchainNotFound, SpawnFailure), parse failure,
      or any unknown error
    - 2: Invalid arguments (ValidationError, ValueError)
    - NonZeroExit: the toolchain's own exit status

    Args:
        exc: Exception to map

    Returns:
        Non-zero exit code
    """
    if isinstance(exc, NonZeroExit):
        return normalize_exit_code(exc.exit_code) or 1
    return EXIT_CODES.get(type(exc).__name__, 1)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function; on failure prints the error with its
    remediation guidance to stderr and converts it into ``typer.Exit``.

    Args:
        func: Function to execute

    Returns:
        Function result if successful

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except (typer.Exit, typer.Abort):
        raise
    except Exception as e:
        from .printers import print_error
        print_error(e)
        raise typer.Exit(code=exit_code_for(e)) from e
