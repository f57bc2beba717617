# src/tidylist/tasks/codec.py

"""
Slot codec: task list <-> the single persisted string.

Current format (version 2):

    {"version": 2, "tasks": [{"id": ..., "text": ..., "priority": "high",
      "completed": false, "created": "...Z", "completedAt": ""}, ...]}

A bare JSON array of the same objects (version 1) is also accepted.
Anything else is handed to the legacy markup recovery path.

Decoding happens in two steps:
- inspect_slot() classifies the raw string once (Empty | StructuredList | LegacyBlob)
- decode_slot() dispatches on that variant

deserialize() never raises. Problems become warnings on the DecodeOutcome and
are logged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from .legacy_markup import parse_legacy_markup
from .task_models import Priority, TaskRecord, new_task_id, utc_now_iso

logger = logging.getLogger(__name__)

SLOT_FORMAT_VERSION = 2

DecodeSource = Literal["empty", "structured", "legacy"]

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}


class PersistenceFormatError(ValueError):
    """Malformed persisted entry. Internal to the codec; never escapes deserialize()."""


# ---- tagged slot variants ----


@dataclass(frozen=True, slots=True)
class Empty:
    pass


@dataclass(frozen=True, slots=True)
class StructuredList:
    entries: list[Any]
    version: int


@dataclass(frozen=True, slots=True)
class LegacyBlob:
    markup: str


SlotContents = Empty | StructuredList | LegacyBlob


@dataclass(slots=True)
class DecodeOutcome:
    tasks: list[TaskRecord]
    source: DecodeSource
    warnings: list[str] = field(default_factory=list)
    # format version of a structured slot; None for empty and legacy slots
    version: int | None = None

    @property
    def needs_rewrite(self) -> bool:
        """True when the slot does not already hold exactly the structured form of `tasks`."""
        if self.source == "legacy" or self.warnings:
            return True
        return self.source == "structured" and self.version != SLOT_FORMAT_VERSION


# ---- encoding ----


def record_to_dict(task: TaskRecord) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "priority": task.priority.value,
        "completed": task.completed,
        "created": task.created,
        "completedAt": task.completed_at,
    }


def serialize(tasks: tuple[TaskRecord, ...] | list[TaskRecord]) -> str:
    payload = {
        "version": SLOT_FORMAT_VERSION,
        "tasks": [record_to_dict(t) for t in tasks],
    }
    return json.dumps(payload, ensure_ascii=False)


# ---- decoding ----


def inspect_slot(raw: str | None) -> SlotContents:
    """Classify the slot contents with a single look at the string."""
    if raw is None or not raw.strip():
        return Empty()

    text = raw.strip()
    if text[0] not in "[{":
        return LegacyBlob(raw)

    try:
        data = json.loads(text)
    except ValueError:
        # Truncated or hand-edited JSON: the legacy path recovers what it can.
        return LegacyBlob(raw)

    if isinstance(data, list):
        return StructuredList(entries=data, version=1)
    if isinstance(data, dict) and isinstance(data.get("tasks"), list):
        version = data.get("version")
        return StructuredList(
            entries=data["tasks"],
            version=version if isinstance(version, int) else SLOT_FORMAT_VERSION,
        )
    return LegacyBlob(raw)


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_STRINGS
    return False


def _as_timestamp(raw: Any) -> str:
    return raw.strip() if isinstance(raw, str) else ""


def _settle_completion(
    completed: bool, completed_at: str, *, where: str, warnings: list[str]
) -> str:
    if completed and not completed_at:
        warnings.append(f"{where}: completed without completion time; stamped now")
        return utc_now_iso()
    if not completed and completed_at:
        warnings.append(f"{where}: completion time on a pending task; cleared")
        return ""
    return completed_at


def _decode_entry(entry: Any, where: str, warnings: list[str]) -> TaskRecord:
    if not isinstance(entry, dict):
        raise PersistenceFormatError(f"{where}: expected an object, got {type(entry).__name__}")

    text = entry.get("text")
    if not isinstance(text, str) or not text.strip():
        raise PersistenceFormatError(f"{where}: missing or empty text")

    raw_priority = entry.get("priority")
    priority = Priority.parse(raw_priority)
    if priority is None:
        warnings.append(f"{where}: invalid priority {raw_priority!r}; using medium")
        priority = Priority.MEDIUM

    created = _as_timestamp(entry.get("created"))
    if not created:
        warnings.append(f"{where}: missing created; stamped now")
        created = utc_now_iso()

    completed = _as_bool(entry.get("completed", False))
    completed_at = _as_timestamp(entry.get("completedAt", entry.get("completed_at")))
    completed_at = _settle_completion(completed, completed_at, where=where, warnings=warnings)

    task_id = entry.get("id")
    if not isinstance(task_id, str) or not task_id.strip():
        task_id = new_task_id()
        warnings.append(f"{where}: missing id; generated {task_id}")

    return TaskRecord(
        id=task_id.strip(),
        text=text.strip(),
        priority=priority,
        completed=completed,
        created=created,
        completed_at=completed_at,
    )


def _decode_structured(contents: StructuredList, warnings: list[str]) -> list[TaskRecord]:
    out: list[TaskRecord] = []
    seen: set[str] = set()
    for index, entry in enumerate(contents.entries):
        where = f"task #{index}"
        try:
            task = _decode_entry(entry, where, warnings)
        except PersistenceFormatError as e:
            warnings.append(f"{e}; skipped")
            continue
        if task.id in seen:
            fresh = new_task_id()
            warnings.append(f"{where}: duplicate id {task.id}; reassigned {fresh}")
            task = TaskRecord(
                id=fresh,
                text=task.text,
                priority=task.priority,
                completed=task.completed,
                created=task.created,
                completed_at=task.completed_at,
            )
        seen.add(task.id)
        out.append(task)
    return out


def _decode_legacy(contents: LegacyBlob, warnings: list[str]) -> list[TaskRecord]:
    out: list[TaskRecord] = []
    for index, item in enumerate(parse_legacy_markup(contents.markup, warnings)):
        where = f"legacy item #{index}"
        created = item.created
        if not created:
            created = utc_now_iso()
        completed_at = _settle_completion(
            item.completed, item.completed_at, where=where, warnings=warnings
        )
        out.append(
            TaskRecord(
                id=new_task_id(),
                text=item.text,
                priority=item.priority or Priority.MEDIUM,
                completed=item.completed,
                created=created,
                completed_at=completed_at,
            )
        )
    return out


def decode_slot(raw: str | None) -> DecodeOutcome:
    contents = inspect_slot(raw)
    warnings: list[str] = []

    try:
        if isinstance(contents, StructuredList):
            outcome = DecodeOutcome(
                _decode_structured(contents, warnings), "structured", warnings, contents.version
            )
        elif isinstance(contents, LegacyBlob):
            outcome = DecodeOutcome(_decode_legacy(contents, warnings), "legacy", warnings)
        else:
            outcome = DecodeOutcome([], "empty", warnings)
    except Exception as e:
        # Last line of defence: a bad slot must never block startup.
        logger.exception("Slot decode failed; starting with an empty list.")
        warnings.append(f"decode failed: {e}")
        outcome = DecodeOutcome([], "empty", warnings)

    for w in outcome.warnings:
        logger.warning("Slot decode (%s): %s", outcome.source, w)
    return outcome


def deserialize(raw: str | None) -> list[TaskRecord]:
    return decode_slot(raw).tasks
