from __future__ import annotations

import os
import shlex
from typing import Final

from jinja2 import Environment, PackageLoader

from buildbatch.batch import BatchData, CommandBatch
from buildbatch.command.model import SpawnData
from buildbatch.presenter import markup_text

SCRIPT_TEMPLATE_FILE: Final = "script.sh.j2"


def _quote(value: object) -> str:
    return shlex.quote(str(value))


def _plain(markup: str) -> str:
    return markup_text(markup).plain


def _spawn_line(record: SpawnData) -> str:
    words = [record.program, *record.args]
    if envs := record.options.envs:
        assignments = [
            f"{key}={value if isinstance(value, str) else os.pathsep.join(value)}"
            for key, value in envs.items()
        ]
        words = ["env", *assignments, *words]

    line = shlex.join(words)
    if cwd := record.options.cwd:
        return f"(cd {_quote(cwd)} && {line})"
    return line


_env: Final = Environment(
    loader=PackageLoader("buildbatch.generator", "templates"),
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters.update(quote=_quote, plain=_plain, spawn_line=_spawn_line)
_script_template: Final = _env.get_template(SCRIPT_TEMPLATE_FILE)


def render_script(batch: CommandBatch) -> str:
    """Render a batch as a POSIX shell script running the same operations in order."""
    data = BatchData.from_batch(batch)
    return _script_template.render(
        name=data.name,
        records=data.records,
        deps=data.deps,
    )
