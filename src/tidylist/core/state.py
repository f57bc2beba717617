# src/tidylist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.filters import FilterController
from ..tasks.task_store import TaskStore
from ..view.renderer import RenderedView
from .ports import Confirmer


@dataclass
class AppState:
    """
    Explicit session state.

    Everything a front-end touches hangs off this object; no module-level
    globals. A new session (reload) means a new AppState.
    """

    # Settings object (real Settings or a test double with the same attributes).
    settings: Any

    store: TaskStore
    filters: FilterController
    confirmer: Confirmer

    # Last view shown to the user; row numbers in commands refer to it.
    last_view: RenderedView | None = None
