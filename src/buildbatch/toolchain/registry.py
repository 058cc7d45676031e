from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Final

from attrs import define, field

from .abc import Compiler, Linker
from .exceptions import ToolchainError, ToolNotFoundError
from .schema import CompileOptions, LinkerOptions

SOURCE_KINDS: Final = MappingProxyType(
    {
        ".c": "cc",
        ".cc": "cxx",
        ".cpp": "cxx",
        ".cxx": "cxx",
        ".c++": "cxx",
        ".mpp": "cxx",
        ".ixx": "cxx",
        ".m": "mm",
        ".mm": "mxx",
        ".s": "as",
        ".S": "as",
        ".asm": "as",
        ".rs": "rc",
        ".go": "gc",
        ".zig": "zc",
    }
)


def sourcekind_of(path: str | Path) -> str:
    """Return the source kind of a file from its extension."""
    suffix = Path(path).suffix
    kind = SOURCE_KINDS.get(suffix) or SOURCE_KINDS.get(suffix.lower())
    if kind is None:
        raise ToolchainError(f"Unknown source kind for {path}")
    return kind


type CompilerFactory = Callable[[CompileOptions], Compiler]
type LinkerFactory = Callable[[LinkerOptions], Linker]


@define
class ToolchainRegistry:
    """Compiler and linker providers, keyed by source kind."""

    _compilers: dict[str, CompilerFactory] = field(factory=dict)
    _linkers: dict[tuple[str, str], LinkerFactory] = field(factory=dict)

    def register_compiler(self, sourcekind: str, factory: CompilerFactory) -> None:
        self._compilers[sourcekind] = factory

    def register_linker(
        self, targetkind: str, sourcekind: str, factory: LinkerFactory
    ) -> None:
        self._linkers[(targetkind, sourcekind)] = factory

    def load_compiler(
        self, sourcekind: str | None, options: CompileOptions
    ) -> Compiler:
        if sourcekind is None:
            raise ToolchainError("Source kind is required to load a compiler")
        if factory := self._compilers.get(sourcekind):
            return factory(options)
        raise ToolNotFoundError(f"No compiler registered for source kind {sourcekind!r}")

    def load_linker(
        self,
        targetkind: str | None,
        sourcekinds: Sequence[str],
        options: LinkerOptions,
    ) -> Linker:
        if targetkind is None:
            raise ToolchainError("Target kind is required to load a linker")
        for sourcekind in sourcekinds:
            if factory := self._linkers.get((targetkind, sourcekind)):
                return factory(options)
        raise ToolNotFoundError(
            f"No linker registered for {targetkind!r} with source kinds {list(sourcekinds)}"
        )


default_registry: Final = ToolchainRegistry()
"""Process-wide registry used by batches created without an explicit one."""
