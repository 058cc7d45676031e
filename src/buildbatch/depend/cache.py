from __future__ import annotations

import hashlib
import json
import time
from collections.abc import Sequence
from pathlib import Path
from typing import final, override

import anyio
from attrs import define, field
from loguru import logger
from pydantic import ValidationError

from .abc import ChangePredicate
from .exceptions import DependencyEvaluationError
from .model import DependencyCacheData


def values_digest(values: Sequence[object]) -> str:
    """Order-sensitive fingerprint of the dependency values."""
    encoded = json.dumps(list(values), default=str, separators=(",", ":"))
    return hashlib.sha256(encoded.encode()).hexdigest()


@final
@define
class FileDependCache(ChangePredicate):
    """Change predicate persisting one small JSON file per batch under `cache_dir`."""

    cache_dir: Path = field(default=Path(".buildbatch/deps"), converter=Path)

    def cache_path(self, files: Sequence[Path], cache_key: str | None) -> Path:
        key = cache_key if cache_key is not None else "\n".join(map(str, files))
        name = hashlib.sha1(key.encode()).hexdigest()
        return self.cache_dir / f"{name}.json"

    async def load(self, path: Path) -> DependencyCacheData | None:
        cache_file = anyio.Path(path)
        if not await cache_file.exists():
            return None
        try:
            content = await cache_file.read_text(encoding="utf-8")
            return DependencyCacheData.model_validate_json(content)
        except (OSError, ValidationError) as e:
            raise DependencyEvaluationError(
                f"Failed to read dependency cache {path}: {e}"
            ) from e

    @override
    async def evaluate(
        self,
        files: Sequence[Path],
        values: Sequence[object],
        lastmtime: float | None,
        cache_key: str | None,
    ) -> bool:
        path = self.cache_path(files, cache_key)
        cached = await self.load(path)
        if cached is None:
            logger.debug("No dependency cache at {}", path)
            return True

        if cached.values_digest != values_digest(values):
            logger.debug("Dependency values changed")
            return True

        if cached.files != [str(f) for f in files]:
            logger.debug("Dependency file list changed")
            return True

        threshold = lastmtime if lastmtime is not None else cached.mtime
        for file in files:
            try:
                stat = await anyio.Path(file).stat()
            except FileNotFoundError:
                logger.debug("Dependency file {} is missing", file)
                return True
            if stat.st_mtime > threshold:
                logger.debug("Dependency file {} is newer than last run", file)
                return True

        return False

    @override
    async def commit(
        self,
        files: Sequence[Path],
        values: Sequence[object],
        cache_key: str | None,
    ) -> None:
        path = anyio.Path(self.cache_path(files, cache_key))
        data = DependencyCacheData(
            files=[str(f) for f in files],
            values_digest=values_digest(values),
            mtime=time.time(),
        )
        await path.parent.mkdir(parents=True, exist_ok=True)
        await path.write_text(data.model_dump_json(), encoding="utf-8")
