"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cmd_keeper.config import AppConfig, ClipboardConfig, LoggingConfig, ShellConfig, StorageConfig, TuiConfig, reset_config
from cmd_keeper.storage.database import Storage
from cmd_keeper.storage.models import CommandDatabase
from cmd_keeper.tui.app import AppState


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the config directory at a temp dir and drop env overrides."""
    home = tmp_path / "cmd-keeper-home"
    monkeypatch.setenv("CMD_KEEPER_HOME", str(home))
    for var in ("CMD_KEEPER_DB_PATH", "CMD_KEEPER_LOG_LEVEL", "CMD_KEEPER_CLIPBOARD"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield home
    reset_config()


@pytest.fixture
def app_config(tmp_path):
    """Create a test configuration."""
    return AppConfig(
        storage=StorageConfig(db_path=str(tmp_path / "commands.json")),
        tui=TuiConfig(poll_interval=0.05, list_width=40, confirm_width=30),
        shell=ShellConfig(wait_for_enter=False),
        clipboard=ClipboardConfig(backend=""),
        logging=LoggingConfig(level="DEBUG", file=str(tmp_path / "test.log")),
    )


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path / "data" / "commands.json")


@pytest.fixture
def copied():
    """Records what the app state sends to the clipboard."""
    return []


@pytest.fixture
def make_state(storage, copied):
    """Build an AppState over a database holding the given (command, description, tags) rows."""

    def _make(*rows):
        db = CommandDatabase()
        for command, description, tags in rows:
            db.add(command, description, tags)
        if rows:
            storage.save(db)
        return AppState(db, storage, copy_fn=copied.append)

    return _make
