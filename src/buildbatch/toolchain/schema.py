from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from attrs import evolve, field, frozen

if TYPE_CHECKING:
    from .abc import Target


@frozen
class CompileOptions:
    sourcekind: str | None = None
    """Source kind of the inputs. Detected from the extension for a single source."""

    envs: Mapping[str, str | list[str]] = field(factory=dict)
    """Environment overrides, taking precedence over the compiler's own run environment."""

    flags: Sequence[str] = ()
    """Extra flags passed through to the compiler provider."""

    target: Target | None = None
    """Owning target, bound by the batch."""

    def bind(self, target: Target | None) -> CompileOptions:
        return evolve(self, target=target)


@frozen
class LinkerOptions:
    targetkind: str | None = None
    """Kind of artifact, e.g. `binary`, `static` or `shared`. Used without an owning target."""

    sourcekinds: Sequence[str] = ()
    """Source kinds of the linked objects. Used without an owning target."""

    envs: Mapping[str, str | list[str]] = field(factory=dict)

    flags: Sequence[str] = ()

    target: Target | None = None

    def bind(self, target: Target | None) -> LinkerOptions:
        return evolve(self, target=target)
