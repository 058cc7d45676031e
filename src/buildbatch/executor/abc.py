from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from buildbatch.command import (
    ChangeDirOptions,
    CopyOptions,
    LinkOptions,
    MoveOptions,
    SpawnOptions,
)
from buildbatch.utils.process import ProcessResult


class Spawner(ABC):
    @abstractmethod
    async def spawn(
        self,
        program: str,
        args: Sequence[str],
        options: SpawnOptions,
        *,
        visible: bool = False,
    ) -> ProcessResult:
        """
        Run a program to completion.

        A visible spawn passes the child's output through to the console; otherwise
        the output is captured in the result. A non-zero exit status is returned,
        not raised.
        """


class FileSystem(ABC):
    @abstractmethod
    async def make_dir(self, path: Path) -> None:
        """Create a directory and its parents if it does not exist."""

    @abstractmethod
    async def remove(self, path: Path) -> None:
        """Remove a file, link or directory tree. A missing path is not an error."""

    @abstractmethod
    async def copy(self, src: Path, dst: Path, options: CopyOptions) -> None:
        """Copy a file or directory tree."""

    @abstractmethod
    async def move(self, src: Path, dst: Path, options: MoveOptions) -> None:
        """Move a file or directory."""

    @abstractmethod
    async def link(self, src: Path, dst: Path, options: LinkOptions) -> None:
        """Create `dst` as a link to `src`."""

    @abstractmethod
    async def change_dir(self, path: Path, options: ChangeDirOptions) -> None:
        """Change the working directory of the current process."""
