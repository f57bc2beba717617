# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tidylist.cli.bootstrap import create_initial_state
from tidylist.core.state import AppState
from tidylist.tasks.filters import FilterController
from tidylist.tasks.task_store import TaskStore

from .fakes import FakeConfirmer, FakeSlot


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than the real config module,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tidylist-test",
        log_level="DEBUG",
        console_enabled=True,
        default_priority="high",
        repair_delay_seconds=0.0,
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "storage.json",
        slot_key="todoData",
    )


@pytest.fixture()
def slot() -> FakeSlot:
    return FakeSlot()


@pytest.fixture()
def confirmer() -> FakeConfirmer:
    return FakeConfirmer(answer=True)


@pytest.fixture()
def filters() -> FilterController:
    return FilterController()


@pytest.fixture()
def store(slot: FakeSlot, filters: FilterController) -> TaskStore:
    s = TaskStore(slot, filters=filters)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, slot: FakeSlot, confirmer: FakeConfirmer) -> AppState:
    """AppState wired with the fake slot and confirmer (no files touched for tasks)."""
    return create_initial_state(confirmer=confirmer, settings=settings, slot=slot)
