"""
ForgeKit bridge error classes.

Provides a fixed taxonomy of errors that can occur while driving the external
toolchain. Launch failures, non-zero terminations and unparseable output are
all surfaced through this hierarchy so callers can branch on ``kind`` rather
than on message text.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .settings import ENV_BINARY


class ErrorKind(str, Enum):
    """Stable identifiers for each failure class."""
    TOOLCHAIN_NOT_FOUND = "ToolchainNotFound"
    SPAWN_FAILURE = "SpawnFailure"
    NON_ZERO_EXIT = "NonZeroExit"
    PARSE_FAILURE = "ParseFailure"


INSTALL_HINT = "cargo install forgekit"

NOT_FOUND_MESSAGE = (
    "ForgeKit CLI not found. Please install ForgeKit first: "
    f"{INSTALL_HINT}\n"
    f"Or set {ENV_BINARY} environment variable to the forgekit binary location."
)


class ForgeKitError(Exception):
    """
    Base class for all bridge errors.

    ``message`` holds the diagnostic text shown to users; ``kind`` is the
    stable taxonomy label.
    """
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ToolchainNotFound(ForgeKitError):
    """
    The toolchain executable does not exist or cannot be resolved.

    Raised when:
    - The configured binary name is not on PATH
    - An explicit binary path points at a missing file
    """
    kind = ErrorKind.TOOLCHAIN_NOT_FOUND

    def __init__(self, binary: str):
        super().__init__(NOT_FOUND_MESSAGE)
        self.binary = binary


class SpawnFailure(ForgeKitError):
    """
    Any other launch-time failure.

    Raised when:
    - The binary exists but is not executable
    - The working directory is missing
    - The OS refuses to create the process
    """
    kind = ErrorKind.SPAWN_FAILURE

    def __init__(self, message: str, binary: str):
        super().__init__(message)
        self.binary = binary


class NonZeroExit(ForgeKitError):
    """
    The toolchain started but terminated with a non-zero status.

    The message is the captured stderr when it has content, otherwise the
    captured stdout.
    """
    kind = ErrorKind.NON_ZERO_EXIT

    def __init__(self, exit_code: int, stdout: str, stderr: str,
                 args: Optional[Sequence[str]] = None):
        detail = stderr.strip() if stderr.strip() else stdout.strip()
        super().__init__(detail)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.command_args = tuple(args or ())

    def __str__(self) -> str:
        return f"ForgeKit command failed with exit code {self.exit_code}: {self.message}"


class ParseFailure(ForgeKitError):
    """
    Required structured data was missing from otherwise-successful output.
    """
    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


__all__ = [
    "ErrorKind",
    "ForgeKitError",
    "ToolchainNotFound",
    "SpawnFailure",
    "NonZeroExit",
    "ParseFailure",
    "NOT_FOUND_MESSAGE",
    "INSTALL_HINT",
]
