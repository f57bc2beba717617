# src/tidylist/tasks/task_store.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core.ports import SlotStorage
from .codec import DecodeOutcome, decode_slot, serialize
from .filters import FilterController
from .task_models import (
    Priority,
    TaskCounts,
    TaskRecord,
    ValidationError,
    count_tasks,
    create_record,
)

logger = logging.getLogger(__name__)

DEFAULT_SLOT_KEY = "todoData"


@dataclass(frozen=True, slots=True)
class ClearResult:
    removed: tuple[TaskRecord, ...]

    @property
    def nothing_to_clear(self) -> bool:
        return not self.removed


class TaskStore:
    """
    Authoritative task list for the session and its single mutation point.

    Every mutation:
    - builds the new list as a fresh tuple,
    - writes the serialized list to the slot exactly once,
    - swaps it in only after the write succeeded.

    Readers (the renderer) only ever see complete tuples, and the slot only
    ever receives complete lists. A slot error propagates and leaves both
    untouched. Operations on an unknown id are soft no-ops.
    """

    def __init__(
        self,
        slot: SlotStorage,
        *,
        key: str = DEFAULT_SLOT_KEY,
        filters: FilterController | None = None,
    ) -> None:
        self._slot = slot
        self._key = key
        self._filters = filters or FilterController()
        self._tasks: tuple[TaskRecord, ...] = ()
        self.last_load: DecodeOutcome | None = None

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _commit(self, tasks: tuple[TaskRecord, ...]) -> None:
        # Write first: if the slot raises, memory keeps the list the slot still holds.
        self._slot.set_item(self._key, serialize(tasks))
        self._tasks = tasks

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _replace_at(self, index: int, task: TaskRecord) -> None:
        self._commit(self._tasks[:index] + (task,) + self._tasks[index + 1 :])

    # ---- reads ----

    def current_list(self) -> tuple[TaskRecord, ...]:
        return self._tasks

    def get(self, task_id: str) -> TaskRecord | None:
        i = self._index_of(task_id)
        return None if i is None else self._tasks[i]

    def find(self, ref: str) -> TaskRecord | None:
        """Resolve an exact id or a unique id prefix."""
        ref = (ref or "").strip()
        if not ref:
            return None
        exact = self.get(ref)
        if exact is not None:
            return exact
        ref = ref.lower()
        matches = [t for t in self._tasks if t.id.lower().startswith(ref)]
        return matches[0] if len(matches) == 1 else None

    def count(self) -> TaskCounts:
        return count_tasks(self._tasks)

    # ---- lifecycle ----

    def load(self) -> list[TaskRecord]:
        """Replace the in-memory list with whatever the slot decodes to. Never raises."""
        outcome = decode_slot(self._slot.get_item(self._key))
        self._tasks = tuple(outcome.tasks)
        self.last_load = outcome
        logger.info(
            "TaskStore loaded key=%s source=%s total=%s warnings=%s",
            self._key,
            outcome.source,
            len(self._tasks),
            len(outcome.warnings),
        )
        return list(self._tasks)

    def repair(self) -> bool:
        """
        Rewrite the slot in the current format if it holds anything else.

        Returns True when a write happened.
        """
        expected = serialize(self._tasks)
        stored = self._slot.get_item(self._key)
        if stored == expected:
            return False
        if stored is None and not self._tasks:
            return False
        self._slot.set_item(self._key, expected)
        logger.info("TaskStore repaired slot key=%s total=%s", self._key, len(self._tasks))
        return True

    # ---- mutations ----

    def add(self, text: str, priority: Any = None) -> TaskRecord:
        """
        Append a new pending task and persist.

        `priority=None` uses the filter controller's default priority. Raises
        ValidationError for empty text; the list and the slot stay untouched.
        """
        default = self._filters.default_priority
        try:
            task = create_record(text, default if priority is None else priority, default=default)
        except ValidationError:
            logger.debug("Rejected empty task text.")
            raise

        self._commit(self._tasks + (task,))
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        return task

    def toggle_complete(self, task_id: str) -> TaskRecord | None:
        i = self._index_of(task_id)
        if i is None:
            logger.debug("toggle_complete: unknown id=%s", task_id)
            return None
        task = self._tasks[i].toggled()
        self._replace_at(i, task)
        logger.debug("Task %s completed=%s", task.id, task.completed)
        return task

    def delete(self, task_id: str) -> bool:
        """Remove a task. Callers must have obtained confirmation already."""
        i = self._index_of(task_id)
        if i is None:
            logger.debug("delete: unknown id=%s", task_id)
            return False
        self._commit(self._tasks[:i] + self._tasks[i + 1 :])
        logger.debug("Task deleted id=%s", task_id)
        return True

    def clear_completed(self) -> ClearResult:
        removed = tuple(t for t in self._tasks if t.completed)
        if not removed:
            return ClearResult(removed=())
        self._commit(tuple(t for t in self._tasks if not t.completed))
        logger.info("Cleared %s completed task(s)", len(removed))
        return ClearResult(removed=removed)

    def set_priority(self, task_id: str, new_priority: Any) -> TaskRecord | None:
        priority = Priority.parse(new_priority)
        if priority is None:
            logger.debug("set_priority: rejected %r", new_priority)
            return None
        i = self._index_of(task_id)
        if i is None:
            logger.debug("set_priority: unknown id=%s", task_id)
            return None
        task = self._tasks[i].with_priority(priority)
        self._replace_at(i, task)
        return task
