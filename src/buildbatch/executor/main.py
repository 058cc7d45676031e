from __future__ import annotations

import shlex
from collections.abc import Awaitable, Callable
from pathlib import Path

import loguru
from attrs import define, field
from loguru import logger

from buildbatch.batch import CommandBatch
from buildbatch.command import (
    ChangeDir,
    Command,
    Copy,
    Link,
    MakeDir,
    Move,
    Remove,
    RunSilent,
    RunVerbose,
    RunVisible,
    Show,
    Spawn,
)
from buildbatch.depend import ChangePredicate, DependencyInfo, FileDependCache
from buildbatch.presenter import Presenter

from .abc import FileSystem, Spawner
from .exceptions import (
    FileOperationError,
    ProcessFailedError,
    UnknownCommandError,
)
from .local import LocalFileSystem, LocalSpawner
from .schema import RunOptions, RunOutcome

type Handler[C] = Callable[[C, RunOptions], Awaitable[None]]


@define
class Executor:
    """Replays command batches, skipping those whose dependencies are unchanged."""

    presenter: Presenter = field(factory=Presenter)
    predicate: ChangePredicate = field(factory=FileDependCache)
    spawner: Spawner = field(factory=LocalSpawner)
    filesystem: FileSystem = field(factory=LocalFileSystem)

    strict: bool = False
    """Raise `UnknownCommandError` for records without a handler instead of skipping them."""

    _handlers: dict[type, Handler] = field(init=False, factory=dict)

    def __attrs_post_init__(self) -> None:
        self._handlers.update(
            {
                Show: self._run_show,
                RunVisible: self._run_visible,
                RunVerbose: self._run_verbose,
                RunSilent: self._run_silent,
                MakeDir: self._run_make_dir,
                Remove: self._run_remove,
                Copy: self._run_copy,
                Move: self._run_move,
                Link: self._run_link,
                ChangeDir: self._run_change_dir,
            }
        )

    def register_handler[C](self, kind: type[C], handler: Handler[C]) -> None:
        """Register or replace the handler for a record type."""
        self._handlers[kind] = handler

    async def run(
        self, batch: CommandBatch, options: RunOptions | None = None
    ) -> RunOutcome:
        """
        Run all records of `batch` in order.

        Returns "empty" for a batch without records, "skipped" when the change
        predicate reports its dependencies unchanged, and "executed" otherwise.
        The first failing record raises and no later record runs.
        """
        options = options or RunOptions()
        log = logger.bind(batch=batch.name or "-")

        if batch.is_empty():
            return "empty"

        deps = batch.deps
        if deps is not None and deps.files and not await self._is_changed(deps, log):
            log.debug("Dependencies unchanged, skipping {} records", len(batch.records))
            return "skipped"

        log.debug("Running {} records", len(batch.records))
        try:
            for command in batch.records:
                await self._dispatch(command, options, log)
        except Exception:
            self.presenter.finish()
            raise

        if deps is not None and deps.files and not options.dry_run:
            await self.predicate.commit(deps.files, deps.values, deps.cache_key)

        return "executed"

    async def _is_changed(self, deps: DependencyInfo, log: loguru.Logger) -> bool:
        try:
            return await self.predicate.evaluate(
                deps.files, deps.values, deps.lastmtime, deps.cache_key
            )
        except Exception as e:
            # rerunning is always safe, skipping on a broken cache is not
            log.warning("Dependency check failed, running anyway: {}", e)
            return True

    async def _dispatch(
        self, command: Command, options: RunOptions, log: loguru.Logger
    ) -> None:
        handler = self._handlers.get(type(command))
        if handler is None:
            if self.strict:
                raise UnknownCommandError(
                    f"No handler for command type {type(command).__name__}"
                )
            log.debug("Skipping unknown command {!r}", command)
            return
        await handler(command, options)

    async def _spawn(self, command: Spawn, *, visible: bool = False) -> None:
        try:
            result = await self.spawner.spawn(
                command.program, command.args, command.options, visible=visible
            )
        except OSError as e:
            raise ProcessFailedError(
                f"Failed to run {command.program}: {e}",
                program=command.program,
                command=command,
            ) from e

        if result.returncode != 0:
            output = f"{result.stdout}{result.stderr}".strip()
            raise ProcessFailedError(
                f"{shlex.join(command.argv)} exited with status {result.returncode}"
                + (f"\n{output}" if output else ""),
                program=command.program,
                returncode=result.returncode,
                output=output,
                command=command,
            )

    async def _run_show(self, command: Show, options: RunOptions) -> None:
        self.presenter.render(command.text, command.progress, verbose=options.verbose)

    async def _run_visible(self, command: RunVisible, options: RunOptions) -> None:
        if options.dry_run or options.verbose:
            self.presenter.echo(shlex.join(command.argv))
        if not options.dry_run:
            self.presenter.finish()
            await self._spawn(command, visible=True)

    async def _run_verbose(self, command: RunVerbose, options: RunOptions) -> None:
        if options.dry_run or options.verbose:
            self.presenter.echo(shlex.join(command.argv))
        if not options.dry_run:
            await self._spawn(command)

    async def _run_silent(self, command: RunSilent, options: RunOptions) -> None:
        if not options.dry_run:
            await self._spawn(command)

    async def _run_make_dir(self, command: MakeDir, options: RunOptions) -> None:
        if not options.dry_run:
            await self._fs(
                command, command.path, self.filesystem.make_dir(command.path)
            )

    async def _run_remove(self, command: Remove, options: RunOptions) -> None:
        if not options.dry_run:
            await self._fs(
                command, command.path, self.filesystem.remove(command.path)
            )

    async def _run_copy(self, command: Copy, options: RunOptions) -> None:
        if not options.dry_run:
            await self._fs(
                command,
                command.src,
                self.filesystem.copy(command.src, command.dst, command.options),
            )

    async def _run_move(self, command: Move, options: RunOptions) -> None:
        if not options.dry_run:
            await self._fs(
                command,
                command.src,
                self.filesystem.move(command.src, command.dst, command.options),
            )

    async def _run_link(self, command: Link, options: RunOptions) -> None:
        if not options.dry_run:
            await self._fs(
                command,
                command.dst,
                self.filesystem.link(command.src, command.dst, command.options),
            )

    async def _run_change_dir(self, command: ChangeDir, options: RunOptions) -> None:
        if not options.dry_run:
            await self._fs(
                command,
                command.path,
                self.filesystem.change_dir(command.path, command.options),
            )

    async def _fs(
        self, command: Command, path: Path, operation: Awaitable[None]
    ) -> None:
        try:
            await operation
        except OSError as e:
            raise FileOperationError(
                f"{type(command).__name__} failed for {path}: {e}",
                path=path,
                command=command,
            ) from e
