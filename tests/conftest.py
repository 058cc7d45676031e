from __future__ import annotations

from collections.abc import Sequence
from io import StringIO
from pathlib import Path
from typing import override

import pytest
from attrs import define, field
from rich.console import Console

from buildbatch.command import (
    ChangeDirOptions,
    CopyOptions,
    LinkOptions,
    MoveOptions,
    SpawnOptions,
)
from buildbatch.depend import ChangePredicate
from buildbatch.executor import FileSystem, Spawner
from buildbatch.presenter import Presenter
from buildbatch.toolchain import (
    CompileOptions,
    Compiler,
    Linker,
    LinkerOptions,
    ToolchainRegistry,
)
from buildbatch.utils.process import ProcessResult

type Call = tuple[object, ...]


@define
class RecordingSpawner(Spawner):
    calls: list[Call]
    failing: set[str] = field(factory=set)

    @override
    async def spawn(
        self,
        program: str,
        args: Sequence[str],
        options: SpawnOptions,
        *,
        visible: bool = False,
    ) -> ProcessResult:
        self.calls.append(("spawn", program, tuple(args), visible))
        if program in self.failing:
            return ProcessResult(returncode=2, stdout="", stderr="boom")
        return ProcessResult(returncode=0, stdout="", stderr="")


@define
class RecordingFileSystem(FileSystem):
    calls: list[Call]
    failing: set[str] = field(factory=set)

    def _record(self, op: str, *args: object) -> None:
        self.calls.append((op, *args))
        if op in self.failing:
            raise PermissionError(13, "Permission denied", str(args[0]))

    @override
    async def make_dir(self, path: Path) -> None:
        self._record("make_dir", path)

    @override
    async def remove(self, path: Path) -> None:
        self._record("remove", path)

    @override
    async def copy(self, src: Path, dst: Path, options: CopyOptions) -> None:
        self._record("copy", src, dst)

    @override
    async def move(self, src: Path, dst: Path, options: MoveOptions) -> None:
        self._record("move", src, dst)

    @override
    async def link(self, src: Path, dst: Path, options: LinkOptions) -> None:
        self._record("link", src, dst)

    @override
    async def change_dir(self, path: Path, options: ChangeDirOptions) -> None:
        self._record("change_dir", path)


@define
class StubPredicate(ChangePredicate):
    changed: bool | Exception = True
    evaluated: list[Call] = field(factory=list)
    committed: list[Call] = field(factory=list)

    @override
    async def evaluate(
        self,
        files: Sequence[Path],
        values: Sequence[object],
        lastmtime: float | None,
        cache_key: str | None,
    ) -> bool:
        self.evaluated.append((list(files), list(values), lastmtime, cache_key))
        if isinstance(self.changed, Exception):
            raise self.changed
        return self.changed

    @override
    async def commit(
        self,
        files: Sequence[Path],
        values: Sequence[object],
        cache_key: str | None,
    ) -> None:
        self.committed.append((list(files), list(values), cache_key))


@define
class FakeCompiler(Compiler):
    program: str = "fakecc"
    seen: list[CompileOptions] = field(factory=list)

    @override
    def compargv(
        self, sources: Sequence[Path], object_path: Path, options: CompileOptions
    ) -> tuple[str, list[str]]:
        self.seen.append(options)
        return self.program, ["-c", *map(str, sources), "-o", str(object_path)]

    @override
    def runenvs(self) -> dict[str, str | list[str]]:
        return {"PATH": ["/opt/fake/bin"], "LANG": "C"}


@define
class FakeLinker(Linker):
    program: str = "fakeld"
    seen: list[LinkerOptions] = field(factory=list)

    @override
    def linkargv(
        self, objects: Sequence[Path], target_path: Path, options: LinkerOptions
    ) -> tuple[str, list[str]]:
        self.seen.append(options)
        return self.program, [*map(str, objects), "-o", str(target_path)]

    @override
    def runenvs(self) -> dict[str, str | list[str]]:
        return {"LD_MODE": "fake"}


@define
class FakeTarget:
    name: str = "app"
    _linker: FakeLinker = field(factory=lambda: FakeLinker(program="targetld"))

    def linker(self) -> FakeLinker:
        return self._linker


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def calls() -> list[Call]:
    return []


@pytest.fixture
def spawner(calls: list[Call]) -> RecordingSpawner:
    return RecordingSpawner(calls)


@pytest.fixture
def filesystem(calls: list[Call]) -> RecordingFileSystem:
    return RecordingFileSystem(calls)


@pytest.fixture
def predicate() -> StubPredicate:
    return StubPredicate()


@pytest.fixture
def console() -> Console:
    return Console(file=StringIO(), width=80, highlight=False, color_system=None)


@pytest.fixture
def presenter(console: Console) -> Presenter:
    return Presenter(console=console, progress_style=lambda: "scroll")


@pytest.fixture
def compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def linker() -> FakeLinker:
    return FakeLinker()


@pytest.fixture
def toolchains(compiler: FakeCompiler, linker: FakeLinker) -> ToolchainRegistry:
    registry = ToolchainRegistry()
    registry.register_compiler("cc", lambda options: compiler)
    registry.register_linker("binary", "cc", lambda options: linker)
    return registry


@pytest.fixture
def target() -> FakeTarget:
    return FakeTarget()
