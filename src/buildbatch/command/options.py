from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CommandOptions(BaseModel):
    """Base class for per-command option structures."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SpawnOptions(CommandOptions):
    envs: dict[str, str | list[str]] = Field(default_factory=dict)
    """Environment overrides on top of the inherited environment. List values are joined with `os.pathsep`."""

    cwd: Path | None = None
    """Working directory of the child process."""

    timeout: timedelta | None = None


class CopyOptions(CommandOptions):
    symlinks: bool = False
    """Copy symbolic links as links instead of following them."""


class MoveOptions(CommandOptions):
    overwrite: bool = True
    """Replace an existing destination. When false an existing destination is an error."""


class LinkOptions(CommandOptions):
    symbolic: bool = True
    """Create a symbolic link; otherwise a hard link."""

    force: bool = False
    """Remove an existing destination first."""


class ChangeDirOptions(CommandOptions):
    create: bool = False
    """Create the directory if it does not exist."""
