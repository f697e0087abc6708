"""
Failure classification for toolchain invocations.

Maps launch-time failures (``OSError``, or ``ValueError`` for arguments the
OS cannot accept) and non-zero terminations onto the fixed error
taxonomy in ``errors``.
"""
from __future__ import annotations

import errno
import logging
import os
from typing import Optional, Union

from .errors import ForgeKitError, NonZeroExit, SpawnFailure, ToolchainNotFound
from .runtime_types import ExecutionResult

__all__ = ["classify_launch_error", "check_exit"]

logger = logging.getLogger(__name__)


def _same_path(a: object, b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    try:
        return os.path.abspath(os.fsdecode(a)) == os.path.abspath(b)
    except (TypeError, ValueError):
        return False


def classify_launch_error(exc: Union[OSError, ValueError], *, binary: str,
                          cwd: Optional[str] = None) -> ForgeKitError:
    """
    Classify an error raised while spawning the toolchain.

    A missing file is only reported as ``ToolchainNotFound`` when it is the
    executable that is missing. Python reports a missing working directory
    with the same errno but names the directory in ``exc.filename``; that
    case is a ``SpawnFailure``.

    Args:
        exc: Error raised by the process launch
        binary: Executable that was being launched
        cwd: Working directory the launch used

    Returns:
        ToolchainNotFound or SpawnFailure (never raises)
    """
    if not isinstance(exc, OSError):
        # e.g. an embedded null byte in an argument
        logger.error(f"Failed to launch {binary}: {exc}")
        return SpawnFailure(f"Error running forgekit: {exc}", binary)

    missing = isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT
    if missing and not _same_path(exc.filename, cwd):
        logger.error(f"ForgeKit executable not found: {binary}")
        return ToolchainNotFound(binary)

    if missing:
        message = f"Working directory does not exist: {cwd}"
    else:
        reason = exc.strerror or str(exc)
        message = f"Error running forgekit: {reason}"
    logger.error(f"Failed to launch {binary}: {exc}")
    return SpawnFailure(message, binary)


def check_exit(result: ExecutionResult) -> ExecutionResult:
    """
    Return ``result`` unchanged if the process exited cleanly.

    Raises:
        NonZeroExit: If the exit status is non-zero
    """
    if result.exit_code != 0:
        logger.warning(f"forgekit {' '.join(result.args)} exited with code {result.exit_code}")
        raise NonZeroExit(result.exit_code, result.stdout, result.stderr, args=result.args)
    return result
