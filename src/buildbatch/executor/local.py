from __future__ import annotations

import errno
import os
import shlex
import shutil
from collections.abc import Sequence
from functools import partial
from pathlib import Path
from typing import final, override

import anyio
from attrs import define
from loguru import logger

from buildbatch.command import (
    ChangeDirOptions,
    CopyOptions,
    LinkOptions,
    MoveOptions,
    SpawnOptions,
)
from buildbatch.utils.process import ProcessResult, run_process

from .abc import FileSystem, Spawner


@final
@define
class LocalSpawner(Spawner):
    """Spawns programs on the host."""

    @override
    async def spawn(
        self,
        program: str,
        args: Sequence[str],
        options: SpawnOptions,
        *,
        visible: bool = False,
    ) -> ProcessResult:
        logger.debug("Spawning: {}", shlex.join([program, *args]))
        return await run_process(
            program,
            *args,
            check=False,
            capture=not visible,
            cwd=options.cwd,
            env=options.envs,
            timeout=options.timeout,
        )


@final
@define
class LocalFileSystem(FileSystem):
    """Filesystem operations on the host; blocking `shutil` calls run in a worker thread."""

    @override
    async def make_dir(self, path: Path) -> None:
        target = anyio.Path(path)
        if not await target.is_dir():
            await target.mkdir(parents=True, exist_ok=True)

    @override
    async def remove(self, path: Path) -> None:
        target = anyio.Path(path)
        if await target.is_symlink() or await target.is_file():
            await target.unlink(missing_ok=True)
        elif await target.is_dir():
            await anyio.to_thread.run_sync(shutil.rmtree, path)

    @override
    async def copy(self, src: Path, dst: Path, options: CopyOptions) -> None:
        source = anyio.Path(src)
        if await source.is_dir() and not (
            options.symlinks and await source.is_symlink()
        ):
            await anyio.to_thread.run_sync(
                partial(
                    shutil.copytree,
                    src,
                    dst,
                    symlinks=options.symlinks,
                    dirs_exist_ok=True,
                )
            )
            return

        await anyio.Path(dst).parent.mkdir(parents=True, exist_ok=True)
        await anyio.to_thread.run_sync(
            partial(shutil.copy2, src, dst, follow_symlinks=not options.symlinks)
        )

    @override
    async def move(self, src: Path, dst: Path, options: MoveOptions) -> None:
        target = anyio.Path(dst)
        if not options.overwrite and await target.exists():
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(dst))

        await target.parent.mkdir(parents=True, exist_ok=True)
        await anyio.to_thread.run_sync(shutil.move, src, dst)

    @override
    async def link(self, src: Path, dst: Path, options: LinkOptions) -> None:
        target = anyio.Path(dst)
        if options.force:
            await self.remove(dst)

        await target.parent.mkdir(parents=True, exist_ok=True)
        if options.symbolic:
            await target.symlink_to(src)
        else:
            await target.hardlink_to(src)

    @override
    async def change_dir(self, path: Path, options: ChangeDirOptions) -> None:
        if options.create:
            await self.make_dir(path)
        os.chdir(path)
