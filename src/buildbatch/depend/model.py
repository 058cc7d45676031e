from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .schema import DependencyInfo


class DependencyData(BaseModel):
    files: list[Path] = Field(default_factory=list)
    values: list[Any] = Field(default_factory=list)
    lastmtime: float | None = None
    cache_key: str | None = None

    @classmethod
    def from_info(cls, info: DependencyInfo) -> DependencyData:
        return cls(
            files=list(info.files),
            values=list(info.values),
            lastmtime=info.lastmtime,
            cache_key=info.cache_key,
        )

    def to_info(self) -> DependencyInfo:
        info = DependencyInfo(lastmtime=self.lastmtime, cache_key=self.cache_key)
        info.add_files(self.files)
        info.add_values(self.values)
        return info


class DependencyCacheData(BaseModel):
    """On-disk record of the last successful run of a batch."""

    files: list[str]
    values_digest: str
    mtime: float
