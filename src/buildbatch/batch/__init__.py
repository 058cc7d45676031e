from __future__ import annotations

from .main import CommandBatch
from .model import BatchData

__all__ = [
    "BatchData",
    "CommandBatch",
]
