from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from .schema import CompileOptions, LinkerOptions

type Argv = tuple[str, list[str]]
"""Program and its arguments."""

type RunEnvs = Mapping[str, str | list[str]]


class Compiler(ABC):
    @abstractmethod
    def compargv(
        self, sources: Sequence[Path], object_path: Path, options: CompileOptions
    ) -> Argv:
        """Return the program and arguments compiling `sources` into `object_path`."""

    def runenvs(self) -> RunEnvs:
        """Environment variables the compiler needs to run."""
        return {}


class Linker(ABC):
    @abstractmethod
    def linkargv(
        self, objects: Sequence[Path], target_path: Path, options: LinkerOptions
    ) -> Argv:
        """Return the program and arguments linking `objects` into `target_path`."""

    def runenvs(self) -> RunEnvs:
        """Environment variables the linker needs to run."""
        return {}


class Target(Protocol):
    """Build target owning a batch; supplies the linker for its artifact."""

    @property
    def name(self) -> str: ...

    def linker(self) -> Linker: ...
