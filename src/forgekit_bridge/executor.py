"""
Subprocess execution for the ForgeKit toolchain.

Launches the ``forgekit`` executable on an asyncio subprocess in either
captured or streamed mode. Launch failures are classified here; exit-status
checking is left to the caller so streamed and captured mode share one
execution contract.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional, Sequence

from .classifier import classify_launch_error
from .runtime_types import ExecutionResult, Executor, OutputMode
from .settings import Settings

__all__ = ["ProcessExecutor"]

logger = logging.getLogger(__name__)


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class ProcessExecutor(Executor):
    """
    Executor backed by real subprocesses.

    Holds only the binary location and working directory, both fixed at
    construction, so one instance can serve any number of concurrent calls.
    """

    def __init__(self, *, binary: str, cwd: str) -> None:
        self.binary = binary
        self.cwd = cwd

    @classmethod
    def from_settings(cls, settings: Settings) -> ProcessExecutor:
        return cls(binary=settings.binary, cwd=settings.working_dir)

    async def execute(
        self,
        args: Sequence[str],
        *,
        mode: OutputMode = OutputMode.CAPTURED,
    ) -> ExecutionResult:
        """
        Spawn the toolchain and wait for it to exit.

        In captured mode both pipes are drained concurrently while the
        process runs. In streamed mode the child writes straight to this
        process's stdout and stderr.

        If the awaiting task is cancelled the child is killed before the
        cancellation propagates.

        Raises:
            ToolchainNotFound: If the executable cannot be resolved
            SpawnFailure: For any other launch failure, including arguments
                the OS rejects (embedded null bytes)
        """
        args = [str(a) for a in args]
        pipe = asyncio.subprocess.PIPE if mode is OutputMode.CAPTURED else None

        logger.debug(f"Launching {self.binary} {' '.join(args)} in {self.cwd} ({mode.value})")
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary, *args,
                cwd=self.cwd,
                stdin=asyncio.subprocess.DEVNULL if mode is OutputMode.CAPTURED else None,
                stdout=pipe,
                stderr=pipe,
            )
        except (OSError, ValueError) as e:
            raise classify_launch_error(e, binary=self.binary, cwd=self.cwd) from e

        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            if proc.returncode is None:
                logger.debug(f"Cancelled; killing forgekit process {proc.pid}")
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
            raise

        logger.debug(f"forgekit process {proc.pid} exited with code {proc.returncode}")
        return ExecutionResult(
            args=tuple(args),
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            exit_code=proc.returncode,
        )
