from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel

ENV_PREFIX: Final = "BUILDBATCH_"

type ProgressStyle = Literal["scroll", "overwrite"]


class Settings(BaseModel):
    """Runtime configuration, read from `BUILDBATCH_*` environment variables."""

    verbose: bool = False
    dry_run: bool = False

    progress_style: Literal["scroll", "overwrite"] | None = None
    """Status line style. None picks `overwrite` on a terminal and `scroll` otherwise."""

    log_level: str = "WARNING"
    cache_dir: Path = Path(".buildbatch/deps")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        environ = os.environ if environ is None else environ
        data = {
            name: environ[key]
            for name in cls.model_fields
            if (key := f"{ENV_PREFIX}{name.upper()}") in environ
        }
        return cls.model_validate(data)
