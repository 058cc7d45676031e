from __future__ import annotations

from pathlib import Path

from attrs import field, frozen
from attrs.converters import default_if_none

from .options import (
    ChangeDirOptions,
    CopyOptions,
    LinkOptions,
    MoveOptions,
    SpawnOptions,
)


def _to_path(value: str | Path) -> Path:
    return Path(value)


def _to_args(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, Path)):
        return (str(value),)
    return tuple(str(arg) for arg in value)  # ty: ignore[not-iterable]


@frozen
class Show:
    """Emit a status line, optionally carrying a 0-100 progress value.

    `text` is rich markup; the batch builders escape the caller's message.
    """

    text: str
    progress: float | None = None


@frozen
class _Spawn:
    program: str = field(converter=str)
    args: tuple[str, ...] = field(default=(), converter=_to_args)
    options: SpawnOptions = field(
        factory=SpawnOptions, converter=default_if_none(factory=SpawnOptions)
    )

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


@frozen
class RunVisible(_Spawn):
    """Spawn with output passed through to the console."""


@frozen
class RunVerbose(_Spawn):
    """Spawn quietly; the command line is shown in verbose and dry-run modes."""


@frozen
class RunSilent(_Spawn):
    """Spawn quietly and never show the command line."""


@frozen
class MakeDir:
    path: Path = field(converter=_to_path)


@frozen
class Remove:
    path: Path = field(converter=_to_path)


@frozen
class Copy:
    src: Path = field(converter=_to_path)
    dst: Path = field(converter=_to_path)
    options: CopyOptions = field(
        factory=CopyOptions, converter=default_if_none(factory=CopyOptions)
    )


@frozen
class Move:
    src: Path = field(converter=_to_path)
    dst: Path = field(converter=_to_path)
    options: MoveOptions = field(
        factory=MoveOptions, converter=default_if_none(factory=MoveOptions)
    )


@frozen
class Link:
    src: Path = field(converter=_to_path)
    dst: Path = field(converter=_to_path)
    options: LinkOptions = field(
        factory=LinkOptions, converter=default_if_none(factory=LinkOptions)
    )


@frozen
class ChangeDir:
    path: Path = field(converter=_to_path)
    options: ChangeDirOptions = field(
        factory=ChangeDirOptions, converter=default_if_none(factory=ChangeDirOptions)
    )


type Spawn = RunVisible | RunVerbose | RunSilent

type Command = (
    Show
    | RunVisible
    | RunVerbose
    | RunSilent
    | MakeDir
    | Remove
    | Copy
    | Move
    | Link
    | ChangeDir
)
"""A single deferred operation recorded in a batch."""
