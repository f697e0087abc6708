"""
forgekit-bridge: Python front ends for the ForgeKit app-packaging toolchain.

Wraps the external ``forgekit`` executable with an asynchronous facade that
returns structured results, and a command-line pass-through.

Example:
    >>> import asyncio
    >>> from forgekit_bridge import ForgeKit
    >>> kit = ForgeKit.from_env(working_dir="/work/myapp")
    >>> asyncio.run(kit.build_package())  # doctest: +SKIP
    '/work/myapp/target/myapp.mox'
"""
from __future__ import annotations

__version__ = "0.1.0"

from .commands import Operation, build_args
from .errors import (
    ErrorKind,
    ForgeKitError,
    NonZeroExit,
    ParseFailure,
    SpawnFailure,
    ToolchainNotFound,
)
from .executor import ProcessExecutor
from .operations import ForgeKit
from .runtime_types import ExecutionResult, OutputMode, TemplateDescriptor
from .settings import Settings, create_settings_from_env

__all__ = [
    "__version__",
    "ForgeKit",
    "Operation",
    "build_args",
    "ProcessExecutor",
    "ExecutionResult",
    "OutputMode",
    "TemplateDescriptor",
    "Settings",
    "create_settings_from_env",
    "ErrorKind",
    "ForgeKitError",
    "ToolchainNotFound",
    "SpawnFailure",
    "NonZeroExit",
    "ParseFailure",
]
