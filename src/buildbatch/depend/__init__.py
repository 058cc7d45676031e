from __future__ import annotations

from .abc import ChangePredicate
from .cache import FileDependCache
from .model import DependencyCacheData, DependencyData
from .schema import DependencyInfo, FileArgs

__all__ = [
    "ChangePredicate",
    "DependencyCacheData",
    "DependencyData",
    "DependencyInfo",
    "FileArgs",
    "FileDependCache",
]
