from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Annotated, Literal, override

from pydantic import BaseModel, Field

from .options import (
    ChangeDirOptions,
    CopyOptions,
    LinkOptions,
    MoveOptions,
    SpawnOptions,
)
from .schema import (
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
)


class CommandDataBase(BaseModel, ABC):
    """Serialized form of a command record."""

    @abstractmethod
    def to_command(self) -> Command:
        """Construct the in-memory record from the data model."""


class ShowData(CommandDataBase):
    kind: Literal["show"] = "show"
    text: str
    progress: float | None = None

    @override
    def to_command(self) -> Show:
        return Show(text=self.text, progress=self.progress)


_SPAWN_TYPES: dict[str, type[RunVisible | RunVerbose | RunSilent]] = {
    "run_visible": RunVisible,
    "run_verbose": RunVerbose,
    "run_silent": RunSilent,
}


class SpawnData(CommandDataBase):
    kind: Literal["run_visible", "run_verbose", "run_silent"]
    program: str
    args: list[str] = Field(default_factory=list)
    options: SpawnOptions = Field(default_factory=SpawnOptions)

    @override
    def to_command(self) -> RunVisible | RunVerbose | RunSilent:
        return _SPAWN_TYPES[self.kind](
            program=self.program, args=self.args, options=self.options
        )


class MakeDirData(CommandDataBase):
    kind: Literal["mkdir"] = "mkdir"
    path: Path

    @override
    def to_command(self) -> MakeDir:
        return MakeDir(path=self.path)


class RemoveData(CommandDataBase):
    kind: Literal["remove"] = "remove"
    path: Path

    @override
    def to_command(self) -> Remove:
        return Remove(path=self.path)


class CopyData(CommandDataBase):
    kind: Literal["copy"] = "copy"
    src: Path
    dst: Path
    options: CopyOptions = Field(default_factory=CopyOptions)

    @override
    def to_command(self) -> Copy:
        return Copy(src=self.src, dst=self.dst, options=self.options)


class MoveData(CommandDataBase):
    kind: Literal["move"] = "move"
    src: Path
    dst: Path
    options: MoveOptions = Field(default_factory=MoveOptions)

    @override
    def to_command(self) -> Move:
        return Move(src=self.src, dst=self.dst, options=self.options)


class LinkData(CommandDataBase):
    kind: Literal["link"] = "link"
    src: Path
    dst: Path
    options: LinkOptions = Field(default_factory=LinkOptions)

    @override
    def to_command(self) -> Link:
        return Link(src=self.src, dst=self.dst, options=self.options)


class ChangeDirData(CommandDataBase):
    kind: Literal["cd"] = "cd"
    path: Path
    options: ChangeDirOptions = Field(default_factory=ChangeDirOptions)

    @override
    def to_command(self) -> ChangeDir:
        return ChangeDir(path=self.path, options=self.options)


CommandData = Annotated[
    ShowData
    | SpawnData
    | MakeDirData
    | RemoveData
    | CopyData
    | MoveData
    | LinkData
    | ChangeDirData,
    Field(discriminator="kind"),
]


def to_data(command: Command) -> CommandData:
    """Convert an in-memory record into its serialized form."""
    match command:
        case Show(text=text, progress=progress):
            return ShowData(text=text, progress=progress)
        case RunVisible() | RunVerbose() | RunSilent():
            kind = next(k for k, t in _SPAWN_TYPES.items() if type(command) is t)
            return SpawnData(
                kind=kind,  # ty: ignore[invalid-argument-type]
                program=command.program,
                args=list(command.args),
                options=command.options,
            )
        case MakeDir(path=path):
            return MakeDirData(path=path)
        case Remove(path=path):
            return RemoveData(path=path)
        case Copy(src=src, dst=dst, options=options):
            return CopyData(src=src, dst=dst, options=options)
        case Move(src=src, dst=dst, options=options):
            return MoveData(src=src, dst=dst, options=options)
        case Link(src=src, dst=dst, options=options):
            return LinkData(src=src, dst=dst, options=options)
        case ChangeDir(path=path, options=options):
            return ChangeDirData(path=path, options=options)
        case _:
            raise TypeError(f"Unsupported command type: {type(command).__name__}")
