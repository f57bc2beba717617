# src/tidylist/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, NamedTuple


class ValidationError(ValueError):
    """Invalid user input (empty task text). Nothing is mutated or persisted."""


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def coerce(cls, raw: Any, default: Priority | None = None) -> Priority:
        """
        Parse a priority case-insensitively.

        Anything that is not one of the three values maps to `default`
        (MEDIUM when not given).
        """
        fallback = cls.MEDIUM if default is None else default
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return fallback
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return fallback

    @classmethod
    def parse(cls, raw: Any) -> Priority | None:
        """Strict variant of coerce(): None for anything invalid."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


def utc_now_iso() -> str:
    # Same shape as JS Date.toISOString(): 2024-05-01T09:30:00.123Z
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class TaskRecord:
    """
    One to-do item.

    Records are immutable: every update goes through dataclasses.replace(),
    so `id` and `created` survive all mutations.

    Invariant: `completed_at` is non-empty iff `completed` is True.
    """

    id: str
    text: str
    priority: Priority
    completed: bool
    created: str
    completed_at: str = ""

    def toggled(self, now: str | None = None) -> TaskRecord:
        if self.completed:
            return replace(self, completed=False, completed_at="")
        return replace(self, completed=True, completed_at=now or utc_now_iso())

    def with_priority(self, priority: Priority) -> TaskRecord:
        return replace(self, priority=priority)


class TaskCounts(NamedTuple):
    pending: int
    completed: int
    total: int


def create_record(
    text: str,
    priority: Any = None,
    *,
    default: Priority = Priority.MEDIUM,
    now: str | None = None,
) -> TaskRecord:
    """
    Build a new pending record.

    Raises ValidationError when `text` is empty after trimming. An unknown
    `priority` falls back to `default`.
    """
    label = (text or "").strip()
    if not label:
        raise ValidationError("task text is required")

    return TaskRecord(
        id=new_task_id(),
        text=label,
        priority=Priority.coerce(priority, default),
        completed=False,
        created=now or utc_now_iso(),
        completed_at="",
    )


def count_tasks(tasks: tuple[TaskRecord, ...] | list[TaskRecord]) -> TaskCounts:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    return TaskCounts(pending=total - completed, completed=completed, total=total)
