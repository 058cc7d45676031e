from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from buildbatch.settings import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert not settings.verbose
    assert not settings.dry_run
    assert settings.progress_style is None
    assert settings.cache_dir == Path(".buildbatch/deps")


def test_reads_prefixed_variables():
    settings = Settings.from_env(
        {
            "BUILDBATCH_VERBOSE": "1",
            "BUILDBATCH_DRY_RUN": "true",
            "BUILDBATCH_PROGRESS_STYLE": "scroll",
            "BUILDBATCH_CACHE_DIR": "/tmp/deps",
            "VERBOSE": "0",
        }
    )
    assert settings.verbose
    assert settings.dry_run
    assert settings.progress_style == "scroll"
    assert settings.cache_dir == Path("/tmp/deps")


def test_rejects_unknown_progress_style():
    with pytest.raises(ValidationError):
        Settings.from_env({"BUILDBATCH_PROGRESS_STYLE": "fancy"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("BUILDBATCH_LOG_LEVEL", "DEBUG")
    assert Settings.from_env().log_level == "DEBUG"
