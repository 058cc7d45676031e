from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path


class ChangePredicate(ABC):
    """Answers whether anything a batch depends on changed since its last successful run."""

    @abstractmethod
    async def evaluate(
        self,
        files: Sequence[Path],
        values: Sequence[object],
        lastmtime: float | None,
        cache_key: str | None,
    ) -> bool:
        """Return True if the batch must run again."""

    async def commit(
        self,
        files: Sequence[Path],
        values: Sequence[object],
        cache_key: str | None,
    ) -> None:
        """Record a successful run so that the next evaluation can skip."""
