# src/tidylist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the slot storage, filter controller and task store into AppState,
- loads the task list from the slot.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Confirmer
from ..core.state import AppState
from ..storage.slot_file import JsonFileSlotStorage
from ..tasks.filters import FilterController
from ..tasks.task_models import Priority
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, confirmer: Confirmer, settings=None, slot=None) -> AppState:
    """
    Create AppState from the provided settings and load the task list.

    Keeping settings and the slot injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    default_priority = Priority.parse(getattr(settings, "default_priority", None))
    if default_priority is None:
        logger.warning(
            "Unknown default priority %r in settings; using high.",
            getattr(settings, "default_priority", None),
        )
        default_priority = Priority.HIGH

    filters = FilterController(default_priority=default_priority)
    if slot is None:
        slot = JsonFileSlotStorage(settings.storage_path)
    store = TaskStore(slot, key=settings.slot_key, filters=filters)
    store.load()

    return AppState(settings=settings, store=store, filters=filters, confirmer=confirmer)
