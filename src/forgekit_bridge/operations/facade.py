"""
Operations Facade - programmatic access to the ForgeKit toolchain.

One coroutine per toolchain operation, each a fixed composition of argument
construction, captured execution, failure classification and (where the
result is derived from text) output parsing.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..classifier import check_exit
from ..commands import (
    AddOptions, NewOptions, Operation, OptionsLike, PathOptions, RemoveOptions,
    SearchOptions, TemplatesOptions, build_args,
)
from ..executor import ProcessExecutor
from ..parsers import parse_search_results, parse_templates, require_package_path
from ..runtime_types import ExecutionResult, Executor, OutputMode, TemplateDescriptor
from ..settings import Settings, create_settings_from_env
from . import printers

logger = logging.getLogger(__name__)


class ForgeKit:
    """
    Application service facade for the ForgeKit toolchain.

    Design Notes: ForgeKit Facade

    The facade holds only configuration fixed at construction (working
    directory, binary location, verbosity) and an executor. Neither is
    mutated afterwards, so any number of calls may be awaited concurrently;
    each spawns its own process. There is no queue, pool, retry or timeout:
    concurrency and cancellation are the caller's responsibility.

    Errors are never recovered here. Launch failures surface as
    ``ToolchainNotFound`` / ``SpawnFailure``, non-zero exits as
    ``NonZeroExit`` and missing package paths as ``ParseFailure``.
    """

    def __init__(self, settings: Optional[Settings] = None, *,
                 executor: Optional[Executor] = None):
        """
        Initialize the facade.

        Args:
            settings: Optional settings (if None, loaded from environment)
            executor: Process executor (if None, a ProcessExecutor built from settings)
        """
        if settings is None:
            settings = create_settings_from_env()
        self.settings = settings

        if executor is None:
            self.executor: Executor = ProcessExecutor.from_settings(settings)
        else:
            self.executor = executor

    @classmethod
    def from_env(cls, *, working_dir: Optional[str] = None, binary: Optional[str] = None,
                 verbose: Optional[bool] = None) -> ForgeKit:
        """Create a facade from the environment, applying explicit overrides."""
        return cls(create_settings_from_env(working_dir=working_dir, binary=binary, verbose=verbose))

    async def invoke(self, operation: Operation, options: OptionsLike = None) -> ExecutionResult:
        """
        Run one operation in captured mode and check its exit status.

        Args:
            operation: Toolchain operation
            options: Options model or mapping for the operation

        Returns:
            ExecutionResult of a successful (exit code 0) invocation

        Raises:
            ToolchainNotFound, SpawnFailure: If the process cannot be launched
            NonZeroExit: If the toolchain exits with a non-zero status
        """
        args = build_args(operation, options)
        if self.settings.verbose:
            printers.print_invocation(self.settings.binary, args)

        result = await self.executor.execute(args, mode=OutputMode.CAPTURED)

        if self.settings.verbose:
            printers.print_captured(result)
        return check_exit(result)

    async def new(self, name: str, *, path: Optional[str] = None,
                  template: Optional[str] = None) -> ExecutionResult:
        """Create a new .mox application."""
        return await self.invoke(Operation.NEW, NewOptions(name=name, path=path, template=template))

    async def build(self, *, path: Optional[str] = None) -> ExecutionResult:
        """Build the project."""
        return await self.invoke(Operation.BUILD, PathOptions(path=path))

    async def package(self, *, path: Optional[str] = None) -> str:
        """
        Package the project into a .mox file.

        Returns:
            Path of the created package, as reported by the toolchain

        Raises:
            ParseFailure: If the toolchain did not report a package path
        """
        result = await self.invoke(Operation.PACKAGE, PathOptions(path=path))
        return require_package_path(result.stdout)

    async def build_package(self, *, path: Optional[str] = None) -> str:
        """
        Build and package the project.

        Returns:
            Path of the created package

        Raises:
            ParseFailure: If the toolchain did not report a package path
        """
        result = await self.invoke(Operation.BUILD_PACKAGE, PathOptions(path=path))
        return require_package_path(result.stdout)

    async def run(self, *, path: Optional[str] = None) -> ExecutionResult:
        """Run the project locally."""
        return await self.invoke(Operation.RUN, PathOptions(path=path))

    async def add(self, package: str, *, version: Optional[str] = None,
                  path: Optional[str] = None) -> ExecutionResult:
        """Add a dependency to the project."""
        return await self.invoke(Operation.ADD, AddOptions(package=package, version=version, path=path))

    async def remove(self, package: str, *, path: Optional[str] = None) -> ExecutionResult:
        """Remove a dependency from the project."""
        return await self.invoke(Operation.REMOVE, RemoveOptions(package=package, path=path))

    async def update(self, *, path: Optional[str] = None) -> ExecutionResult:
        """Update project dependencies."""
        return await self.invoke(Operation.UPDATE, PathOptions(path=path))

    async def search(self, query: str) -> List[str]:
        """Search for available packages; an empty list means no hits."""
        result = await self.invoke(Operation.SEARCH, SearchOptions(query=query))
        packages = parse_search_results(result.stdout)
        logger.debug(f"Search for {query!r} returned {len(packages)} entries")
        return packages

    async def templates(self) -> List[TemplateDescriptor]:
        """List available project templates."""
        result = await self.invoke(Operation.TEMPLATES, TemplatesOptions())
        return parse_templates(result.stdout)
