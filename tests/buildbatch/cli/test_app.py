from __future__ import annotations

import sys

import pytest

from buildbatch.batch import BatchData, CommandBatch
from buildbatch.cli.app import export, load_batch, run

pytestmark = pytest.mark.anyio


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BUILDBATCH_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("BUILDBATCH_PROGRESS_STYLE", "scroll")
    monkeypatch.delenv("BUILDBATCH_DRY_RUN", raising=False)
    return tmp_path


def write_plan(batch: CommandBatch, path):
    path.write_text(BatchData.from_batch(batch).model_dump_json(), encoding="utf-8")
    return path


async def test_load_batch(workspace):
    batch = CommandBatch(name="demo")
    batch.make_dir("out")
    plan = write_plan(batch, workspace / "plan.json")

    loaded = await load_batch(plan)
    assert loaded.name == "demo"
    assert loaded.records == batch.records


async def test_run(workspace):
    batch = CommandBatch(name="demo")
    batch.make_dir(workspace / "out")
    batch.spawn_silent(
        sys.executable, ["-c", "open('out/ok', 'w').close()"]
    )
    plan = write_plan(batch, workspace / "plan.json")

    await run(plan, log_level="ERROR")

    assert (workspace / "out" / "ok").exists()


async def test_run_dry_run(workspace):
    batch = CommandBatch()
    batch.make_dir(workspace / "out")
    plan = write_plan(batch, workspace / "plan.json")

    await run(plan, dry_run=True, log_level="ERROR")

    assert not (workspace / "out").exists()


async def test_run_failure_exits(workspace):
    batch = CommandBatch()
    batch.spawn_silent(sys.executable, ["-c", "raise SystemExit(4)"])
    plan = write_plan(batch, workspace / "plan.json")

    with pytest.raises(SystemExit) as exc_info:
        await run(plan, log_level="ERROR")
    assert "exited with status 4" in str(exc_info.value.code)


async def test_export_to_file(workspace):
    batch = CommandBatch(name="demo")
    batch.make_dir("out")
    plan = write_plan(batch, workspace / "plan.json")
    output = workspace / "build.sh"

    await export(plan, output=output)

    assert output.read_text().splitlines()[-1] == "mkdir -p out"
    assert output.stat().st_mode & 0o111


async def test_export_to_stdout(workspace, capsys):
    batch = CommandBatch()
    batch.remove("out")
    plan = write_plan(batch, workspace / "plan.json")

    await export(plan)

    assert capsys.readouterr().out.endswith("rm -rf out\n")
