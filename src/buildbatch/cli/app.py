from __future__ import annotations

import sys
from pathlib import Path

import anyio
from cyclopts import App
from loguru import logger

from buildbatch.batch import BatchData, CommandBatch
from buildbatch.depend import FileDependCache
from buildbatch.executor import BuildOperationFailure, Executor, RunOptions
from buildbatch.generator import render_script
from buildbatch.logging import setup_logging
from buildbatch.settings import Settings

app = App(name="buildbatch", help="Run or export deferred command batches.")


async def load_batch(plan: Path) -> CommandBatch:
    content = await anyio.Path(plan).read_text(encoding="utf-8")
    return BatchData.model_validate_json(content).to_batch()


@app.command
async def run(
    plan: Path,
    *,
    dry_run: bool | None = None,
    verbose: bool | None = None,
    strict: bool = False,
    log_level: str | None = None,
) -> None:
    """Run the batch stored in a JSON plan file.

    Parameters
    ----------
    plan
        Path to the JSON plan.
    dry_run
        Print what would run without running it. Defaults to BUILDBATCH_DRY_RUN.
    verbose
        Show full status lines and command lines. Defaults to BUILDBATCH_VERBOSE.
    strict
        Fail on record kinds this version cannot run.
    log_level
        Log level for the stderr sink. Defaults to BUILDBATCH_LOG_LEVEL.
    """
    settings = Settings.from_env()
    setup_logging(log_level or settings.log_level)

    batch = await load_batch(plan)
    executor = Executor(predicate=FileDependCache(settings.cache_dir), strict=strict)
    options = RunOptions(
        dry_run=settings.dry_run if dry_run is None else dry_run,
        verbose=settings.verbose if verbose is None else verbose,
    )

    try:
        outcome = await executor.run(batch, options)
    except BuildOperationFailure as e:
        raise SystemExit(f"error: {e}") from e

    logger.info("Batch {} finished: {}", batch.name or plan.name, outcome)


@app.command
async def export(plan: Path, *, output: Path | None = None) -> None:
    """Write the batch stored in a JSON plan file as a shell script.

    Parameters
    ----------
    plan
        Path to the JSON plan.
    output
        Script path. The script is written to stdout when omitted.
    """
    script = render_script(await load_batch(plan))
    if output is None:
        sys.stdout.write(script)
        return

    target = anyio.Path(output)
    await target.write_text(script, encoding="utf-8")
    await target.chmod(0o755)
