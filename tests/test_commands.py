# tests/test_commands.py

from __future__ import annotations

import json

from tidylist.cli.commands import CommandRegistry, registry, resolve_ref
from tidylist.core.state import AppState

from .fakes import FakeConfirmer, FakeSlot


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_with_priority_prefix(state: AppState) -> None:
    reply = registry.handle(state, "/add !low Water plants") or ""
    assert reply.startswith("Task added successfully!")
    (task,) = state.store.current_list()
    assert task.text == "Water plants"
    assert task.priority.value == "low"


def test_add_empty_reports_and_does_not_write(state: AppState, slot: FakeSlot) -> None:
    assert registry.handle(state, "/add    ") == "Please enter a task!"
    assert registry.handle(state, "/add !high") == "Please enter a task!"
    assert state.store.current_list() == ()
    assert slot.writes == []


def test_done_by_row_number_and_id_prefix(state: AppState) -> None:
    registry.handle(state, "/add first")
    registry.handle(state, "/add second")

    assert (registry.handle(state, "/done 2") or "").startswith("Task completed.")
    first, second = state.store.current_list()
    assert second.completed and not first.completed

    reply = registry.handle(state, f"/done #{second.id[:8]}") or ""
    assert reply.startswith("Task marked as pending.")
    assert "No such task" in (registry.handle(state, "/done 99") or "")


def test_row_numbers_follow_the_filtered_view(state: AppState) -> None:
    registry.handle(state, "/add !high alpha")
    registry.handle(state, "/add !low beta")
    registry.handle(state, "/filter low-priority")

    registry.handle(state, "/done 1")
    alpha, beta = state.store.current_list()
    assert beta.completed
    assert not alpha.completed


def test_delete_asks_first(state: AppState, confirmer: FakeConfirmer) -> None:
    registry.handle(state, "/add doomed")

    confirmer.answer = False
    assert registry.handle(state, "/del 1") == "Delete cancelled."
    assert len(state.store.current_list()) == 1

    confirmer.answer = True
    assert (registry.handle(state, "/del 1") or "").startswith("Task deleted!")
    assert state.store.current_list() == ()
    assert confirmer.prompts == ["Are you sure you want to delete this task?"] * 2


def test_clear_completed_flow(state: AppState, confirmer: FakeConfirmer, slot: FakeSlot) -> None:
    assert registry.handle(state, "/clear") == "No completed tasks to clear!"
    assert confirmer.prompts == []

    for text in ("A", "B", "C"):
        registry.handle(state, f"/add {text}")
    registry.handle(state, "/done 1")
    registry.handle(state, "/done 3")
    writes = len(slot.writes)

    emitted: list[str] = []
    reply = registry.handle(state, "/clear", emit=emitted.append) or ""
    assert reply.startswith("Completed tasks cleared!")
    assert confirmer.prompts == ["Are you sure you want to delete 2 completed task(s)?"]
    assert emitted == ["Removed 2 task(s)."]
    assert [t.text for t in state.store.current_list()] == ["B"]
    assert len(slot.writes) == writes + 1


def test_priority_default_and_filter_commands(state: AppState) -> None:
    registry.handle(state, "/add task")
    assert "Unknown priority" in (registry.handle(state, "/prio 1 urgent") or "")
    assert (registry.handle(state, "/prio 1 medium") or "").startswith("Priority set to medium.")

    assert registry.handle(state, "/default") == "Default priority: high."
    assert registry.handle(state, "/default low") == "Default priority: low."
    assert "Unknown priority" in (registry.handle(state, "/default asap") or "")
    assert state.filters.default_priority.value == "low"

    assert "Unknown filter" in (registry.handle(state, "/filter someday") or "")
    assert state.filters.active.value == "all"
    assert (registry.handle(state, "/filter completed") or "").startswith("Filter: completed")


def test_count_and_status(state: AppState) -> None:
    registry.handle(state, "/add a")
    registry.handle(state, "/add b")
    registry.handle(state, "/done 1")
    assert registry.handle(state, "/count") == "1 pending, 1 completed - 2 total"

    status = registry.handle(state, "/status") or ""
    assert "key todoData" in status
    assert "Loaded from: empty" in status


def test_help_lists_commands(state: AppState) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/done", "/del", "/clear", "/prio", "/filter", "/count"):
        assert name in text


def test_hash_reference_is_always_an_id(state: AppState, slot: FakeSlot) -> None:
    slot.items["todoData"] = json.dumps(
        {
            "version": 2,
            "tasks": [
                {"id": "12345678deadbeef", "text": "digits id", "created": "2024-01-01T00:00:00.000Z"},
                {"id": "abcdef0011223344", "text": "other", "created": "2024-01-01T00:00:00.000Z"},
            ],
        }
    )
    state.store.load()

    assert resolve_ref(state, "#12345678") == "12345678deadbeef"
    assert resolve_ref(state, "12345678") is None  # bare digits: row number
    assert resolve_ref(state, "2") == "abcdef0011223344"
    assert resolve_ref(state, "#") is None

    assert (registry.handle(state, "/done #12345678") or "").startswith("Task completed.")
    assert state.store.get("12345678deadbeef").completed
