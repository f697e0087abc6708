"""
ForgeKit CLI for Python

Direct pass-through to the ForgeKit toolchain. Every operation builds its
argument vector with the same rules as the programmatic facade and runs the
toolchain in streamed mode, so its output goes straight to this terminal:
- new: Create a new .mox application
- build / package / build-package / run: Project lifecycle
- add / remove / update: Dependency management
- search / templates: Discovery
- help / version: Handled locally, never reach the toolchain

The process exits with the toolchain's own exit code, or 1 when the
toolchain cannot be launched.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .cli_context import CLIContext
from .commands import Operation, build_args
from .operations import normalize_exit_code, run_and_exit
from .operations.printers import print_invocation, print_version
from .runtime_types import OutputMode

app = typer.Typer(
    name="forgekit-py",
    help="ForgeKit CLI for Python - wrapper for the ForgeKit Rust CLI",
    no_args_is_help=True,
    add_completion=False,
)

_PATH_HELP = "Specify project path"

_LOGGER_NAME = "forgekit_bridge"


def _configure_logging(verbose: bool) -> None:
    """Send this package's debug logs to stderr; other loggers are left alone."""
    if not verbose:
        return
    package_logger = logging.getLogger(_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)


def _version_callback(value: bool) -> None:
    if value:
        print_version(__version__)
        raise typer.Exit()


def _context(ctx: typer.Context) -> CLIContext:
    if isinstance(ctx.obj, CLIContext):
        return ctx.obj
    # A false --verbose flag defers to FORGEKIT_VERBOSE
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    return CLIContext.from_env(verbose=verbose or None)


def _passthrough(ctx: typer.Context, operation: Operation, options: Dict[str, Any]) -> None:
    """Run ``operation`` in streamed mode and exit with the toolchain's status."""

    def _run() -> int:
        context = _context(ctx)
        args = build_args(operation, options)
        if context.settings.verbose:
            print_invocation(context.settings.binary, args)
        result = asyncio.run(context.executor.execute(args, mode=OutputMode.STREAMED))
        return normalize_exit_code(result.exit_code)

    code = run_and_exit(_run)
    raise typer.Exit(code=code)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True,
                                 help="Show the wrapper version and exit"),
    verbose: bool = typer.Option(False, "--verbose", help="Echo the toolchain command line and debug logs"),
) -> None:
    """ForgeKit CLI for Python."""
    _configure_logging(verbose)
    if ctx.obj is None:
        ctx.obj = {"verbose": verbose}


@app.command()
def new(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new project"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Specify template type"),
) -> None:
    """Create a new project."""
    _passthrough(ctx, Operation.NEW, {"name": name, "path": path, "template": template})


@app.command()
def build(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Build the project."""
    _passthrough(ctx, Operation.BUILD, {"path": path})


@app.command()
def package(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Package the project."""
    _passthrough(ctx, Operation.PACKAGE, {"path": path})


@app.command("build-package")
def build_package(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Build and package."""
    _passthrough(ctx, Operation.BUILD_PACKAGE, {"path": path})


@app.command()
def run(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Run the project."""
    _passthrough(ctx, Operation.RUN, {"path": path})


@app.command()
def add(
    ctx: typer.Context,
    package_name: str = typer.Argument(..., metavar="PACKAGE", help="Dependency to add"),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Specify version"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Add dependency."""
    _passthrough(ctx, Operation.ADD, {"package": package_name, "version": version, "path": path})


@app.command()
def remove(
    ctx: typer.Context,
    package_name: str = typer.Argument(..., metavar="PACKAGE", help="Dependency to remove"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Remove dependency."""
    _passthrough(ctx, Operation.REMOVE, {"package": package_name, "path": path})


@app.command()
def update(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, "--path", "-p", help=_PATH_HELP),
) -> None:
    """Update dependencies."""
    _passthrough(ctx, Operation.UPDATE, {"path": path})


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Search query"),
) -> None:
    """Search packages."""
    _passthrough(ctx, Operation.SEARCH, {"query": query})


@app.command()
def templates(ctx: typer.Context) -> None:
    """List templates."""
    _passthrough(ctx, Operation.TEMPLATES, {})


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show this message and exit."""
    typer.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


@app.command("version")
def version_command() -> None:
    """Show the wrapper version."""
    print_version(__version__)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
