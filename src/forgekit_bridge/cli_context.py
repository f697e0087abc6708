"""
CLI Context for managing application dependencies.

Provides a clean way to manage CLI-level dependencies like settings and the
process executor, avoiding a process-wide default instance.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .executor import ProcessExecutor
from .runtime_types import Executor
from .settings import Settings, create_settings_from_env


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    Created once per CLI invocation from the environment and handed to the
    command through ``typer.Context.obj``.
    """
    settings: Settings
    _executor: Optional[Executor] = None

    @classmethod
    def from_env(cls, *, verbose: Optional[bool] = None) -> CLIContext:
        """
        Create CLI context from environment variables.

        Args:
            verbose: ``--verbose`` flag; None defers to FORGEKIT_VERBOSE

        Returns:
            CLIContext with settings loaded from environment
        """
        return cls(settings=create_settings_from_env(verbose=verbose))

    @property
    def executor(self) -> Executor:
        """
        Get or create the executor (lazy initialization).

        Returns:
            Executor bound to the configured binary and working directory
        """
        if self._executor is None:
            self._executor = ProcessExecutor.from_settings(self.settings)
        return self._executor
