import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    # keep real ~/.proxifocus and any local .env out of the tests
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("PROXIFOCUS_DB_PATH", raising=False)
    monkeypatch.delenv("PROXIFOCUS_STORAGE_KEY", raising=False)
    monkeypatch.delenv("PROXIFOCUS_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    # the CLI reconfigures the root logger on every invocation
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
