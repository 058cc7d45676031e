from __future__ import annotations

from .model import CommandData, to_data
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
    Spawn,
)

__all__ = [
    "ChangeDir",
    "ChangeDirOptions",
    "Command",
    "CommandData",
    "Copy",
    "CopyOptions",
    "Link",
    "LinkOptions",
    "MakeDir",
    "Move",
    "MoveOptions",
    "Remove",
    "RunSilent",
    "RunVerbose",
    "RunVisible",
    "Show",
    "Spawn",
    "SpawnOptions",
    "to_data",
]
