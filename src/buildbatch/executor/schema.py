from __future__ import annotations

from typing import Literal

from attrs import frozen

type RunOutcome = Literal["empty", "skipped", "executed"]


@frozen
class RunOptions:
    """Options for a single `Executor.run` call."""

    dry_run: bool = False
    """Print what would run instead of running it."""

    verbose: bool = False
    """Show full status lines and the command lines of verbose spawns."""
