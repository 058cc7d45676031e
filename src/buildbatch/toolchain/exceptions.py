from __future__ import annotations


class ToolchainError(Exception):
    """Base exception for the toolchain module."""


class ToolNotFoundError(ToolchainError):
    """Raised when no compiler or linker is registered for a source kind."""
