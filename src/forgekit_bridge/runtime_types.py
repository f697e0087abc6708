"""
Runtime types for toolchain invocations.

These types define the interface between the operations facade and the
process layer, enabling dependency injection of different executors (real
subprocesses, test fakes).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence, Tuple

__all__ = ["OutputMode", "ExecutionResult", "TemplateDescriptor", "Executor"]


class OutputMode(str, Enum):
    """How the toolchain's output streams are wired."""
    CAPTURED = "captured"   # buffered in memory, returned in the result
    STREAMED = "streamed"   # inherited from the caller's own stdout/stderr


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """
    Outcome of a single toolchain invocation.

    Produced exactly once per call. In streamed mode ``stdout`` and
    ``stderr`` are empty because the text went straight to the caller's
    terminal.
    """
    args: Tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class TemplateDescriptor:
    """A project template advertised by ``forgekit templates``."""
    name: str
    description: str

    def __str__(self) -> str:
        return f"{self.name} - {self.description}"


class Executor(Protocol):
    """
    Protocol for launching the toolchain.

    Implementations spawn exactly one process per call and own its handle
    until it exits.
    """

    async def execute(
        self,
        args: Sequence[str],
        *,
        mode: OutputMode = OutputMode.CAPTURED,
    ) -> ExecutionResult:
        """
        Run the toolchain with ``args`` and wait for it to terminate.

        Args:
            args: Argument vector (without the binary itself)
            mode: Whether output is captured or streamed to the caller

        Returns:
            ExecutionResult for the finished process, whatever its exit status

        Raises:
            ToolchainNotFound: If the executable cannot be resolved
            SpawnFailure: For any other launch failure
        """
        ...
