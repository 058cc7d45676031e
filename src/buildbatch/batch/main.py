from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from attrs import define, field

from buildbatch.command import (
    ChangeDir,
    ChangeDirOptions,
    Command,
    Copy,
    CopyOptions,
    Link,
    LinkOptions,
    MakeDir,
    Move,
    MoveOptions,
    Remove,
    RunSilent,
    RunVerbose,
    RunVisible,
    Show,
    SpawnOptions,
)
from buildbatch.depend import DependencyInfo, FileArgs
from buildbatch.presenter import progress_text, status_text
from buildbatch.toolchain import (
    CompileOptions,
    LinkerOptions,
    Target,
    ToolchainRegistry,
    default_registry,
    sourcekind_of,
)

type PathLike = str | Path


def _shared_sourcekind(sources: Sequence[Path]) -> str | None:
    kinds = {sourcekind_of(s) for s in sources}
    return kinds.pop() if len(kinds) == 1 else None


@define
class CommandBatch:
    """
    Ordered, append-only list of deferred build operations.

    Builder methods record what a build step does without doing it. An `Executor`
    later replays the records in order, prints them in dry-run mode, or skips
    them when the batch's dependency info is unchanged since the last run.

    >>> batch = CommandBatch()
    >>> batch.show_progress(50, "compiling %s", "a.c")
    >>> batch.spawn_verbose("cc", ["-c", "a.c", "-o", "a.o"])
    """

    target: Target | None = None
    """Owning target, used to resolve the linker. Never owned by the batch."""

    name: str | None = None
    """Label used in log records."""

    toolchains: ToolchainRegistry = field(factory=lambda: default_registry)

    _records: list[Command] = field(init=False, factory=list)
    _deps: DependencyInfo | None = field(init=False, default=None)

    @property
    def records(self) -> tuple[Command, ...]:
        return tuple(self._records)

    @property
    def deps(self) -> DependencyInfo | None:
        return self._deps

    def is_empty(self) -> bool:
        return len(self._records) == 0

    def append(self, command: Command) -> None:
        self._records.append(command)

    def _ensure_deps(self) -> DependencyInfo:
        if self._deps is None:
            self._deps = DependencyInfo()
        return self._deps

    # processes

    def spawn_visible(
        self,
        program: PathLike,
        args: Sequence[PathLike] | None = None,
        options: SpawnOptions | None = None,
    ) -> None:
        self._spawn(RunVisible(program=program, args=args, options=options))

    def spawn_verbose(
        self,
        program: PathLike,
        args: Sequence[PathLike] | None = None,
        options: SpawnOptions | None = None,
    ) -> None:
        self._spawn(RunVerbose(program=program, args=args, options=options))

    def spawn_silent(
        self,
        program: PathLike,
        args: Sequence[PathLike] | None = None,
        options: SpawnOptions | None = None,
    ) -> None:
        self._spawn(RunSilent(program=program, args=args, options=options))

    def _spawn(self, command: RunVisible | RunVerbose | RunSilent) -> None:
        self.append(command)
        # the invocation itself is part of what the cached result depends on
        self.add_dependency_values(command.program, *command.args)

    def compile(
        self,
        sources: PathLike | Sequence[PathLike],
        object_path: PathLike,
        options: CompileOptions | None = None,
    ) -> None:
        """Compile `sources` into `object_path` with the compiler for their source kind."""
        options = (options or CompileOptions()).bind(self.target)
        object_path = Path(object_path)

        if isinstance(sources, (str, Path)):
            source_paths = [Path(sources)]
            sourcekind = options.sourcekind or sourcekind_of(sources)
        else:
            source_paths = [Path(s) for s in sources]
            sourcekind = options.sourcekind or _shared_sourcekind(source_paths)

        compiler = self.toolchains.load_compiler(sourcekind, options)
        program, args = compiler.compargv(source_paths, object_path, options)

        self.make_dir(object_path.parent)
        self.spawn_verbose(
            program,
            args,
            SpawnOptions(envs={**compiler.runenvs(), **options.envs}),
        )

    def link(
        self,
        objects: Sequence[PathLike],
        target_path: PathLike,
        options: LinkerOptions | None = None,
    ) -> None:
        """Link `objects` into `target_path` with the owning target's linker."""
        options = (options or LinkerOptions()).bind(self.target)
        target_path = Path(target_path)
        object_paths = [Path(o) for o in objects]

        if self.target is not None:
            linker = self.target.linker()
        else:
            linker = self.toolchains.load_linker(
                options.targetkind, options.sourcekinds, options
            )
        program, args = linker.linkargv(object_paths, target_path, options)

        self.make_dir(target_path.parent)
        self.spawn_verbose(
            program,
            args,
            SpawnOptions(envs={**linker.runenvs(), **options.envs}),
        )

    # filesystem

    def make_dir(self, path: PathLike) -> None:
        self.append(MakeDir(path=path))

    def remove(self, path: PathLike) -> None:
        self.append(Remove(path=path))

    def copy(
        self, src: PathLike, dst: PathLike, options: CopyOptions | None = None
    ) -> None:
        self.append(Copy(src=src, dst=dst, options=options))

    def move(
        self, src: PathLike, dst: PathLike, options: MoveOptions | None = None
    ) -> None:
        self.append(Move(src=src, dst=dst, options=options))

    def link_path(
        self, src: PathLike, dst: PathLike, options: LinkOptions | None = None
    ) -> None:
        self.append(Link(src=src, dst=dst, options=options))

    def change_dir(
        self, path: PathLike, options: ChangeDirOptions | None = None
    ) -> None:
        self.append(ChangeDir(path=path, options=options))

    # status

    def show(self, fmt: str, *args: object) -> None:
        self.append(Show(text=status_text(fmt, *args)))

    def show_progress(self, progress: float | None, fmt: str, *args: object) -> None:
        if progress is None:
            return
        self.append(Show(text=progress_text(progress, fmt, *args), progress=progress))

    # dependencies

    def add_dependency_files(self, *paths: FileArgs) -> None:
        self._ensure_deps().add_files(paths)

    def add_dependency_values(self, *values: object) -> None:
        self._ensure_deps().add_values(values)

    def set_last_mtime(self, lastmtime: float | None) -> None:
        self._ensure_deps().lastmtime = lastmtime

    def set_dependency_cache(self, cache_key: str | None) -> None:
        self._ensure_deps().cache_key = cache_key
