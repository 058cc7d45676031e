from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from datetime import timedelta
from pathlib import Path
from typing import NamedTuple

import anyio

type EnvValue = str | Sequence[str]


class ProcessResult(NamedTuple):
    returncode: int
    stdout: str
    stderr: str


def merge_env(envs: Mapping[str, EnvValue] | None) -> dict[str, str] | None:
    """Overlay `envs` on the current environment, joining list values with `os.pathsep`."""
    if not envs:
        return None

    merged = dict(os.environ)
    for key, value in envs.items():
        merged[key] = value if isinstance(value, str) else os.pathsep.join(value)
    return merged


async def run_process(
    *command: str,
    input: str | None = None,
    check: bool = True,
    capture: bool = True,
    cwd: str | Path | None = None,
    env: Mapping[str, EnvValue] | None = None,
    encoding: str = "utf-8",
    timeout: timedelta | None = None,
) -> ProcessResult:
    """Runs a process and returns its result including stdout and stderr.

    With `capture=False` the child writes straight to the parent's console and
    the returned stdout/stderr are empty.
    """
    stream = subprocess.PIPE if capture else None

    async def _run() -> subprocess.CompletedProcess[bytes]:
        return await anyio.run_process(
            list(command),
            input=input.encode(encoding) if input else None,
            stdout=stream,
            stderr=stream,
            check=check,
            cwd=cwd,
            env=merge_env(env),
        )

    if timeout is not None:
        with anyio.fail_after(timeout.total_seconds()):
            result = await _run()
    else:
        result = await _run()

    return ProcessResult(
        returncode=result.returncode,
        stdout=result.stdout.decode(encoding) if result.stdout else "",
        stderr=result.stderr.decode(encoding) if result.stderr else "",
    )
