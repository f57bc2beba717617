# src/tidylist/tasks/filters.py

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from .task_models import Priority

logger = logging.getLogger(__name__)


class TaskFilter(StrEnum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    HIGH_PRIORITY = "high-priority"
    MEDIUM_PRIORITY = "medium-priority"
    LOW_PRIORITY = "low-priority"

    @classmethod
    def parse(cls, raw: Any) -> TaskFilter | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None

    @property
    def priority(self) -> Priority | None:
        """The priority a *-priority filter selects, None for the others."""
        if not self.value.endswith("-priority"):
            return None
        return Priority(self.value.removesuffix("-priority"))


class FilterController:
    """
    Session-local view state: the active filter and the default priority for new tasks.

    Neither value is persisted; a new session starts from ALL and the configured
    default priority. Setters reject unknown values and keep the previous one.
    """

    def __init__(self, default_priority: Priority = Priority.HIGH) -> None:
        self._initial_priority = default_priority
        self._active = TaskFilter.ALL
        self._default_priority = default_priority

    @property
    def active(self) -> TaskFilter:
        return self._active

    @property
    def default_priority(self) -> Priority:
        return self._default_priority

    def set_filter(self, value: Any) -> bool:
        parsed = TaskFilter.parse(value)
        if parsed is None:
            logger.warning("Rejected unknown filter %r; keeping %s", value, self._active.value)
            return False
        self._active = parsed
        logger.debug("Active filter -> %s", parsed.value)
        return True

    def set_default_priority(self, value: Any) -> bool:
        parsed = Priority.parse(value)
        if parsed is None:
            logger.warning(
                "Rejected unknown priority %r; keeping %s", value, self._default_priority.value
            )
            return False
        self._default_priority = parsed
        logger.debug("Default priority -> %s", parsed.value)
        return True

    def reset(self) -> None:
        self._active = TaskFilter.ALL
        self._default_priority = self._initial_priority
