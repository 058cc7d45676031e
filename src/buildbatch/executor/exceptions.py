from __future__ import annotations

from pathlib import Path


class ExecutorError(Exception):
    """Base exception for the executor module."""


class BuildOperationFailure(ExecutorError):
    """Raised when a recorded process or filesystem operation fails."""

    def __init__(self, message: str, *, command: object = None) -> None:
        super().__init__(message)
        self.command = command


class ProcessFailedError(BuildOperationFailure):
    """Raised when a spawned program cannot start or exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        program: str,
        returncode: int | None = None,
        output: str = "",
        command: object = None,
    ) -> None:
        super().__init__(message, command=command)
        self.program = program
        self.returncode = returncode
        self.output = output


class FileOperationError(BuildOperationFailure):
    """Raised when a filesystem operation fails."""

    def __init__(self, message: str, *, path: Path, command: object = None) -> None:
        super().__init__(message, command=command)
        self.path = path


class ConfigurationError(ExecutorError):
    """Raised when the executor is asked to run something it cannot handle."""


class UnknownCommandError(ConfigurationError):
    """Raised in strict mode for a record kind without a registered handler."""
