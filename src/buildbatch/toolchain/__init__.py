from __future__ import annotations

from .abc import Compiler, Linker, Target
from .registry import ToolchainRegistry, default_registry, sourcekind_of
from .schema import CompileOptions, LinkerOptions

__all__ = [
    "CompileOptions",
    "Compiler",
    "Linker",
    "LinkerOptions",
    "Target",
    "ToolchainRegistry",
    "default_registry",
    "sourcekind_of",
]
