"""
Human-readable output formatting.

Centralizes everything the bridge itself writes to the terminal (errors,
remediation hints, the version banner and verbose diagnostics) so the CLI
and the facade stay free of formatting code. The toolchain's own output is
never routed through here.
"""
from __future__ import annotations

from typing import Sequence

import typer
from rich.console import Console
from rich.markup import escape

from ..errors import ForgeKitError, ToolchainNotFound
from ..runtime_types import ExecutionResult

_err_console = Console(stderr=True, highlight=False)


def print_error(exc: BaseException) -> None:
    """
    Print a failure to stderr.

    Errors from the bridge's taxonomy are shown with their kind; a missing
    toolchain also gets its multi-line install guidance.

    Args:
        exc: Exception that ended the command
    """
    if isinstance(exc, ToolchainNotFound):
        first, _, rest = exc.message.partition("\n")
        _err_console.print(f"[bold red]Error:[/] {escape(first)}", soft_wrap=True)
        if rest:
            _err_console.print(escape(rest), soft_wrap=True)
        return

    if isinstance(exc, ForgeKitError):
        _err_console.print(f"[bold red]Error ({exc.kind.value}):[/] {escape(str(exc))}", soft_wrap=True)
        return

    _err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", soft_wrap=True)


def print_version(version: str) -> None:
    """Print the wrapper's version banner."""
    typer.echo(f"ForgeKit CLI for Python v{version}")
    typer.echo("Wrapper for ForgeKit Rust CLI")


def print_invocation(binary: str, args: Sequence[str]) -> None:
    """Echo the command line about to be executed (verbose mode)."""
    line = f"[ForgeKit] Executed: {binary} {' '.join(args)}"
    _err_console.print(f"[dim]{escape(line)}[/]", soft_wrap=True)


def print_captured(result: ExecutionResult) -> None:
    """
    Echo captured streams after a call completes (verbose mode).

    Args:
        result: Finished invocation; empty streams are skipped
    """
    if result.stdout:
        _err_console.print(f"[dim]{escape('[STDOUT] ' + result.stdout.rstrip())}[/]", soft_wrap=True)
    if result.stderr:
        _err_console.print(f"[dim]{escape('[STDERR] ' + result.stderr.rstrip())}[/]", soft_wrap=True)
