# tests/test_filters.py

from __future__ import annotations

from tidylist.tasks.filters import FilterController, TaskFilter
from tidylist.tasks.task_models import Priority


def test_defaults() -> None:
    fc = FilterController()
    assert fc.active is TaskFilter.ALL
    assert fc.default_priority is Priority.HIGH


def test_invalid_values_keep_previous() -> None:
    fc = FilterController()
    assert fc.set_filter("pending") is True
    assert fc.set_filter("urgent-priority") is False
    assert fc.active is TaskFilter.PENDING

    assert fc.set_default_priority("low") is True
    assert fc.set_default_priority("asap") is False
    assert fc.default_priority is Priority.LOW


def test_parse_is_case_insensitive() -> None:
    fc = FilterController()
    assert fc.set_filter(" High-Priority ") is True
    assert fc.active is TaskFilter.HIGH_PRIORITY


def test_reset_restores_session_start() -> None:
    fc = FilterController(default_priority=Priority.MEDIUM)
    fc.set_filter("completed")
    fc.set_default_priority("low")
    fc.reset()
    assert fc.active is TaskFilter.ALL
    assert fc.default_priority is Priority.MEDIUM
