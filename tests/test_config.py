# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tidylist.cli.bootstrap import create_initial_state
from tidylist.config import Settings

_VARS = (
    "TIDYLIST_APP_NAME",
    "TIDYLIST_LOG_LEVEL",
    "TIDYLIST_CONSOLE_ENABLED",
    "TIDYLIST_DEFAULT_PRIORITY",
    "TIDYLIST_REPAIR_DELAY_SECONDS",
    "TIDYLIST_DATA_DIR",
    "TIDYLIST_STORAGE_PATH",
    "TIDYLIST_SLOT_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "tidylist"
    assert s.console_enabled is True
    assert s.default_priority == "high"
    assert s.repair_delay_seconds == 1.0
    assert s.slot_key == "todoData"
    assert s.storage_path == s.data_dir / "storage.json"


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TIDYLIST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TIDYLIST_CONSOLE_ENABLED", "no")
    monkeypatch.setenv("TIDYLIST_DEFAULT_PRIORITY", " LOW ")
    monkeypatch.setenv("TIDYLIST_REPAIR_DELAY_SECONDS", "2.5")
    monkeypatch.setenv("TIDYLIST_SLOT_KEY", "otherKey")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.storage_path == tmp_path / "storage.json"
    assert s.console_enabled is False
    assert s.default_priority == "low"
    assert s.repair_delay_seconds == 2.5
    assert s.slot_key == "otherKey"


def test_bad_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIDYLIST_REPAIR_DELAY_SECONDS", "soon")
    assert Settings.from_env().repair_delay_seconds == 1.0
    monkeypatch.setenv("TIDYLIST_REPAIR_DELAY_SECONDS", "-3")
    assert Settings.from_env().repair_delay_seconds == 0.0


def test_bootstrap_falls_back_on_unknown_default_priority(settings, slot, confirmer) -> None:
    settings.default_priority = "asap"
    state = create_initial_state(confirmer=confirmer, settings=settings, slot=slot)
    assert state.filters.default_priority.value == "high"
    assert settings.data_dir.exists()
