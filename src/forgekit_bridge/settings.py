"""
Settings and configuration for the ForgeKit bridge.

Centralizes configuration values and provides validation with fail-fast behavior.
Environment variables are read once, when settings are created, and the
resulting object is never mutated afterwards.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

__all__ = [
    "DEFAULT_BINARY",
    "Settings",
    "create_settings_from_env",
    "ENV_BINARY",
    "ENV_VERBOSE",
]

DEFAULT_BINARY = "forgekit"

ENV_BINARY = "FORGEKIT_PATH"
ENV_VERBOSE = "FORGEKIT_VERBOSE"


@dataclass(frozen=True)
class Settings:
    """
    Configuration shared by every invocation issued through one facade.

    Attributes:
        working_dir: Directory the external toolchain is launched in
        binary: Name or path of the toolchain executable (resolved via PATH
            when it is a bare name)
        verbose: Echo argument vectors and captured streams to stderr
    """
    working_dir: str
    binary: str = DEFAULT_BINARY
    verbose: bool = False

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.working_dir:
            raise ValueError("working_dir is required")
        if not self.binary or not self.binary.strip():
            raise ValueError("binary must be a non-empty executable name or path")


def _str_to_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


def create_settings_from_env(
    *,
    working_dir: Optional[str] = None,
    binary: Optional[str] = None,
    verbose: Optional[bool] = None,
) -> Settings:
    """
    Load settings from environment variables, with explicit overrides.

    Environment Variables:
        - FORGEKIT_PATH (default: "forgekit", looked up on PATH)
        - FORGEKIT_VERBOSE (default: false)

    Keyword arguments that are not None take precedence over the
    environment. The working directory defaults to the process's current
    directory at call time.

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If the resulting configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    if working_dir is None:
        working_dir = os.getcwd()

    if binary is None:
        binary = os.getenv(ENV_BINARY) or DEFAULT_BINARY

    if verbose is None:
        verbose = _str_to_bool(os.getenv(ENV_VERBOSE, "false"))

    return Settings(working_dir=str(working_dir), binary=binary, verbose=verbose)
