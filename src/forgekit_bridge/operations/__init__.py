"""
Operations package - Application service layer between callers and the toolchain.

This package provides the ForgeKit facade that composes argument building,
process execution and output parsing, centralizes error mapping, and handles
terminal output while keeping CLI commands thin and testable.
"""
from .facade import ForgeKit
from .mappers import exit_code_for, normalize_exit_code, run_and_exit

__all__ = ["ForgeKit", "exit_code_for", "normalize_exit_code", "run_and_exit"]
