from __future__ import annotations

from pydantic import BaseModel, Field

from buildbatch.command import CommandData, to_data
from buildbatch.depend import DependencyData

from .main import CommandBatch


class BatchData(BaseModel):
    """Serialized form of a command batch, as read and written by the CLI."""

    name: str | None = None
    records: list[CommandData] = Field(default_factory=list)
    deps: DependencyData | None = None

    @classmethod
    def from_batch(cls, batch: CommandBatch) -> BatchData:
        return cls(
            name=batch.name,
            records=[to_data(record) for record in batch.records],
            deps=DependencyData.from_info(batch.deps) if batch.deps else None,
        )

    def to_batch(self) -> CommandBatch:
        batch = CommandBatch(name=self.name)
        for record in self.records:
            batch.append(record.to_command())
        if self.deps is not None:
            deps = self.deps.to_info()
            batch.add_dependency_files(*deps.files)
            batch.add_dependency_values(*deps.values)
            batch.set_last_mtime(deps.lastmtime)
            batch.set_dependency_cache(deps.cache_key)
        return batch
