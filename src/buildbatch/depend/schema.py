from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from attrs import define, field

type FileArgs = str | Path | Iterable[FileArgs]


@define
class DependencyInfo:
    """Tracked inputs deciding whether a batch's effects are up to date."""

    files: list[Path] = field(factory=list)
    """Tracked files, insertion ordered and without duplicates."""

    values: list[object] = field(factory=list)
    """Opaque values in append order; any change in the sequence invalidates the cache."""

    lastmtime: float | None = None
    """Time of the last known good run; falls back to the cache's own record when unset."""

    cache_key: str | None = None

    def add_files(self, paths: Iterable[FileArgs]) -> None:
        """Track `paths`, flattening nested lists of paths."""
        for path in paths:
            if not isinstance(path, (str, Path)):
                self.add_files(path)
                continue
            path = Path(path)
            if path not in self.files:
                self.files.append(path)

    def add_values(self, values: Iterable[object]) -> None:
        self.values.extend(values)
