# src/tidylist/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.filters import TaskFilter
from ..tasks.task_models import Priority, ValidationError
from ..view.renderer import format_count, render_lines, render_view

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

MSG_ADDED = "Task added successfully!"
MSG_EMPTY = "Please enter a task!"
MSG_DELETED = "Task deleted!"
MSG_CLEARED = "Completed tasks cleared!"
MSG_NOTHING_TO_CLEAR = "No completed tasks to clear!"

_PRIORITY_HINT = "Use high, medium or low."


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other line adds a task (prefix with !high, !medium or !low).")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def show_view(state: AppState, message: str | None = None) -> str:
    """Re-render the list, remember it for row-number lookups, prepend `message`."""
    view = render_view(state.store, state.filters)
    state.last_view = view
    lines = render_lines(view)
    if message:
        lines.insert(0, message)
    return "\n".join(lines)


def resolve_ref(state: AppState, ref: str) -> str | None:
    """
    Turn a user reference into a task id.

    Bare digits are row numbers of the last rendered view. Anything else,
    and anything written with a leading '#', is an id or a unique id prefix.
    """
    ref = ref.strip()
    if ref.startswith("#"):
        task = state.store.find(ref[1:])
        return task.id if task is not None else None
    if not ref:
        return None
    if ref.isdigit():
        view = state.last_view or render_view(state.store, state.filters)
        return view.task_id_at(int(ref))
    task = state.store.find(ref)
    return task.id if task is not None else None


def _split_priority_prefix(words: list[str]) -> tuple[Priority | None, list[str]]:
    if words and words[0].startswith("!"):
        priority = Priority.parse(words[0][1:])
        if priority is not None:
            return priority, words[1:]
    return None, words


def add_from_input(state: AppState, line: str) -> str:
    """Plain input line -> new task (the input box + Enter of the page)."""
    priority, words = _split_priority_prefix(line.split())
    try:
        state.store.add(" ".join(words), priority)
    except ValidationError:
        return MSG_EMPTY
    return show_view(state, MSG_ADDED)


def _no_such_task(ref: str) -> str:
    return f"No such task: {ref}. Use /list to see row numbers."


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add text          -> add with the default priority
    /add !low text     -> add with an explicit priority
    """
    return add_from_input(state, " ".join(args))


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <row|id>"
    task_id = resolve_ref(state, args[0])
    task = state.store.toggle_complete(task_id) if task_id else None
    if task is None:
        return _no_such_task(args[0])
    return show_view(state, "Task completed." if task.completed else "Task marked as pending.")


def cmd_delete(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if not args:
        return "Usage: /del <row|id>"
    task_id = resolve_ref(state, args[0])
    if task_id is None:
        return _no_such_task(args[0])

    if not state.confirmer.confirm("Are you sure you want to delete this task?"):
        return "Delete cancelled."

    if not state.store.delete(task_id):
        # Gone in the meantime: nothing to do.
        return show_view(state)
    return show_view(state, MSG_DELETED)


def cmd_clear(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    completed = state.store.count().completed
    if completed == 0:
        return MSG_NOTHING_TO_CLEAR

    if not state.confirmer.confirm(
        f"Are you sure you want to delete {completed} completed task(s)?"
    ):
        return "Clear cancelled."

    result = state.store.clear_completed()
    if result.nothing_to_clear:
        return MSG_NOTHING_TO_CLEAR
    if emit:
        with contextlib.suppress(Exception):
            emit(f"Removed {len(result.removed)} task(s).")
    return show_view(state, MSG_CLEARED)


def cmd_priority(state: AppState, args: list[str]) -> str:
    """
    /prio <row|id> <high|medium|low>
    """
    if len(args) < 2:
        return f"Usage: /prio <row|id> <priority>. {_PRIORITY_HINT}"
    if Priority.parse(args[1]) is None:
        return f"Unknown priority: {args[1]}. {_PRIORITY_HINT}"
    task_id = resolve_ref(state, args[0])
    task = state.store.set_priority(task_id, args[1]) if task_id else None
    if task is None:
        return _no_such_task(args[0])
    return show_view(state, f"Priority set to {task.priority.value}.")


def cmd_default(state: AppState, args: list[str]) -> str:
    """
    /default           -> show the priority used for new tasks
    /default <prio>    -> change it for this session
    """
    if not args:
        return f"Default priority: {state.filters.default_priority.value}."
    if not state.filters.set_default_priority(args[0]):
        return f"Unknown priority: {args[0]}. {_PRIORITY_HINT}"
    return f"Default priority: {state.filters.default_priority.value}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter            -> show the active filter and the choices
    /filter <name>     -> switch filter and show the list
    """
    choices = ", ".join(f.value for f in TaskFilter)
    if not args:
        return f"Active filter: {state.filters.active.value}. Choices: {choices}."
    if not state.filters.set_filter(args[0]):
        return f"Unknown filter: {args[0]}. Choices: {choices}."
    return show_view(state)


def cmd_list(state: AppState, args: list[str]) -> str:
    return show_view(state)


def cmd_count(state: AppState, args: list[str]) -> str:
    return format_count(state.store.count())


def cmd_status(state: AppState, args: list[str]) -> str:
    outcome = state.store.last_load
    source = outcome.source if outcome is not None else "not loaded"
    warnings = len(outcome.warnings) if outcome is not None else 0
    storage = getattr(state.settings, "storage_path", "?")
    return (
        "Status:\n"
        f"  Storage: {storage} (key {state.store.key})\n"
        f"  Loaded from: {source} ({warnings} warning(s))\n"
        f"  Filter: {state.filters.active.value}\n"
        f"  Default priority: {state.filters.default_priority.value}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add [!high|!medium|!low] text.")
registry.register(
    "done", cmd_done, help_text="Toggle completion: /done <row|id>.", aliases=["toggle"]
)
registry.register(
    "del", cmd_delete, help_text="Delete a task (asks first): /del <row|id>.", aliases=["delete", "rm"]
)
registry.register("clear", cmd_clear, help_text="Delete all completed tasks (asks first).")
registry.register(
    "prio", cmd_priority, help_text="Change priority: /prio <row|id> <high|medium|low>.",
    aliases=["priority"],
)
registry.register("default", cmd_default, help_text="Show/set default priority for new tasks.")
registry.register(
    "filter", cmd_filter,
    help_text="all | pending | completed | high-priority | medium-priority | low-priority.",
)
registry.register("list", cmd_list, help_text="Show the tasks visible under the active filter.", aliases=["ls"])
registry.register("count", cmd_count, help_text="Show pending/completed/total counts.")
registry.register("status", cmd_status, help_text="Show storage, filter and default priority.")
