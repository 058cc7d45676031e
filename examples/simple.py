from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import override

import anyio
from attrs import define
from loguru import logger

from buildbatch import CommandBatch, Executor, RunOptions
from buildbatch.toolchain import (
    CompileOptions,
    Compiler,
    Linker,
    LinkerOptions,
    ToolchainRegistry,
)


@define
class SimpleCompiler(Compiler):
    program: str = "cc"

    @override
    def compargv(
        self, sources: Sequence[Path], object_path: Path, options: CompileOptions
    ) -> tuple[str, list[str]]:
        args = ["-c", *options.flags, *map(str, sources), "-o", str(object_path)]
        return self.program, args


@define
class SimpleLinker(Linker):
    program: str = "cc"

    @override
    def linkargv(
        self, objects: Sequence[Path], target_path: Path, options: LinkerOptions
    ) -> tuple[str, list[str]]:
        args = [*map(str, objects), *options.flags, "-o", str(target_path)]
        return self.program, args


async def main() -> None:
    toolchains = ToolchainRegistry()
    toolchains.register_compiler("cc", lambda options: SimpleCompiler())
    toolchains.register_linker("binary", "cc", lambda options: SimpleLinker())

    batch = CommandBatch(name="hello", toolchains=toolchains)
    batch.show_progress(50, "compiling %s", "hello.c")
    batch.compile("hello.c", "build/obj/hello.o")
    batch.show_progress(100, "linking %s", "hello")
    batch.link(
        ["build/obj/hello.o"],
        "build/bin/hello",
        LinkerOptions(targetkind="binary", sourcekinds=["cc"]),
    )
    batch.add_dependency_files("hello.c")

    outcome = await Executor().run(batch, RunOptions(dry_run=True))
    print(outcome)


if __name__ == "__main__":
    logger.enable("buildbatch")
    anyio.run(main)
