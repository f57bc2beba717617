# src/tidylist/view/renderer.py

"""
View projection: (task list, active filter) -> visible rows.

Rendering is a full rebuild from the model on every call. Counts always cover
the whole list, including tasks the active filter hides.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..tasks.filters import FilterController, TaskFilter
from ..tasks.task_models import TaskCounts, TaskRecord
from ..tasks.task_store import TaskStore

_EMPTY_MESSAGES = {
    TaskFilter.ALL: "No tasks yet. Type something to add one.",
    TaskFilter.PENDING: "Nothing pending.",
    TaskFilter.COMPLETED: "No completed tasks.",
}


def is_visible(task: TaskRecord, active: TaskFilter) -> bool:
    if active is TaskFilter.PENDING:
        return not task.completed
    if active is TaskFilter.COMPLETED:
        return task.completed
    priority = active.priority
    if priority is not None:
        return task.priority == priority
    return True


def visible_tasks(tasks: Iterable[TaskRecord], active: TaskFilter) -> list[TaskRecord]:
    return [t for t in tasks if is_visible(t, active)]


def format_count(counts: TaskCounts) -> str:
    return f"{counts.pending} pending, {counts.completed} completed - {counts.total} total"


@dataclass(frozen=True, slots=True)
class RenderedRow:
    position: int  # 1-based, display only
    task: TaskRecord

    @property
    def task_id(self) -> str:
        return self.task.id


@dataclass(frozen=True, slots=True)
class RenderedView:
    rows: tuple[RenderedRow, ...]
    count_line: str
    filter: TaskFilter

    def task_id_at(self, position: int) -> str | None:
        for row in self.rows:
            if row.position == position:
                return row.task_id
        return None


def render_view(store: TaskStore, filters: FilterController) -> RenderedView:
    active = filters.active
    rows = tuple(
        RenderedRow(position=i, task=t)
        for i, t in enumerate(visible_tasks(store.current_list(), active), start=1)
    )
    return RenderedView(rows=rows, count_line=format_count(store.count()), filter=active)


def render_row(row: RenderedRow) -> str:
    t = row.task
    mark = "x" if t.completed else " "
    return f"{row.position:>3}. [{mark}] {t.text}  ({t.priority.value.upper()}) #{t.id[:8]}"


def render_lines(view: RenderedView) -> list[str]:
    lines = [f"Filter: {view.filter.value}"]
    if view.rows:
        lines.extend(render_row(r) for r in view.rows)
    else:
        lines.append(
            "  " + _EMPTY_MESSAGES.get(view.filter, f"No {view.filter.value} tasks.")
        )
    lines.append(view.count_line)
    return lines
