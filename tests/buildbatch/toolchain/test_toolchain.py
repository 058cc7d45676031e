from __future__ import annotations

from pathlib import Path

import pytest

from buildbatch.toolchain import (
    CompileOptions,
    LinkerOptions,
    ToolchainRegistry,
    sourcekind_of,
)
from buildbatch.toolchain.exceptions import ToolchainError, ToolNotFoundError


@pytest.mark.parametrize(
    ("path", "kind"),
    [
        ("a.c", "cc"),
        ("src/a.cpp", "cxx"),
        (Path("a.cc"), "cxx"),
        ("a.mm", "mxx"),
        ("start.S", "as"),
        ("lib.rs", "rc"),
        ("A.C", "cc"),
    ],
)
def test_sourcekind_of(path, kind):
    assert sourcekind_of(path) == kind


def test_sourcekind_of_unknown_extension():
    with pytest.raises(ToolchainError):
        sourcekind_of("README")
    with pytest.raises(ToolchainError):
        sourcekind_of("a.txt")


class TestRegistry:
    def test_load_compiler(self, toolchains, compiler):
        options = CompileOptions(flags=["-O2"])
        assert toolchains.load_compiler("cc", options) is compiler

    def test_compiler_factory_gets_options(self, compiler):
        seen = []
        registry = ToolchainRegistry()
        registry.register_compiler("cc", lambda options: seen.append(options) or compiler)

        options = CompileOptions(sourcekind="cc")
        registry.load_compiler("cc", options)
        assert seen == [options]

    def test_compiler_errors(self, toolchains):
        with pytest.raises(ToolchainError):
            toolchains.load_compiler(None, CompileOptions())
        with pytest.raises(ToolNotFoundError):
            toolchains.load_compiler("cxx", CompileOptions())

    def test_linker_picks_first_registered_sourcekind(self, toolchains, linker):
        found = toolchains.load_linker("binary", ["cxx", "cc"], LinkerOptions())
        assert found is linker

    def test_linker_errors(self, toolchains):
        with pytest.raises(ToolchainError):
            toolchains.load_linker(None, ["cc"], LinkerOptions())
        with pytest.raises(ToolNotFoundError):
            toolchains.load_linker("shared", ["cc"], LinkerOptions())
        with pytest.raises(ToolNotFoundError):
            toolchains.load_linker("binary", [], LinkerOptions())

    def test_tool_not_found_is_toolchain_error(self):
        assert issubclass(ToolNotFoundError, ToolchainError)


def test_options_bind_target(target):
    options = CompileOptions(flags=["-g"])
    bound = options.bind(target)
    assert bound.target is target
    assert bound.flags == options.flags
    assert options.target is None
    assert LinkerOptions().bind(None).target is None
