from __future__ import annotations

from .abc import FileSystem, Spawner
from .exceptions import (
    BuildOperationFailure,
    ConfigurationError,
    ExecutorError,
    FileOperationError,
    ProcessFailedError,
    UnknownCommandError,
)
from .local import LocalFileSystem, LocalSpawner
from .main import Executor
from .schema import RunOptions, RunOutcome

__all__ = [
    "BuildOperationFailure",
    "ConfigurationError",
    "Executor",
    "ExecutorError",
    "FileOperationError",
    "FileSystem",
    "LocalFileSystem",
    "LocalSpawner",
    "ProcessFailedError",
    "RunOptions",
    "RunOutcome",
    "Spawner",
    "UnknownCommandError",
]
