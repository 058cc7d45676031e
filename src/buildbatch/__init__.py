from __future__ import annotations

from loguru import logger

from .batch import BatchData, CommandBatch
from .executor import Executor, RunOptions
from .presenter import Presenter
from .settings import Settings

logger.disable("buildbatch")

__all__ = [
    "BatchData",
    "CommandBatch",
    "Executor",
    "Presenter",
    "RunOptions",
    "Settings",
]
