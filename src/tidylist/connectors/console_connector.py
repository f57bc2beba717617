# src/tidylist/connectors/console_connector.py

"""
Console front-end.

Blocking calls (the `> ` prompt and every command, since /del and /clear may
stop for a y/N answer) run in daemon threads. The event loop stays free for
the delayed repair pass, and a lock shared with that pass keeps a single
writer on the store. A daemon thread is abandoned rather than joined when the
loop is cancelled, so Ctrl-C never waits for a pending `input()`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from ..cli.commands import add_from_input, registry as command_registry, show_view
from ..core.state import AppState
from ..tasks.repair import schedule_consistency_repair

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
Printer = Callable[[str], None]

T = TypeVar("T")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


async def _run_blocking(fn: Callable[..., T], *args: Any) -> T:
    """Await `fn(*args)` running in a fresh daemon thread."""
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[T] = loop.create_future()

    def deliver(result: Any, exc: BaseException | None) -> None:
        if fut.done():
            return  # the awaiting side was cancelled
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(result)

    def worker() -> None:
        result: Any = None
        exc: BaseException | None = None
        try:
            result = fn(*args)
        except BaseException as e:
            exc = e
        # the loop may already be closed after a cancelled run
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(deliver, result, exc)

    threading.Thread(target=worker, name="tidylist-console-io", daemon=True).start()
    return await fut


class ConsoleConfirmer:
    """Confirmer port backed by a y/N prompt on stdin."""

    def __init__(self, read_line: ReadLine = input) -> None:
        self._read_line = read_line

    def confirm(self, message: str) -> bool:
        try:
            answer = self._read_line(f"{message} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in {"y", "yes"}


def handle_line(state: AppState, line: str, emit: Printer | None = None) -> str | None:
    """
    One user gesture -> reply text.

    Slash commands go to the registry, anything else becomes a new task.
    Returns None for empty input.
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = command_registry.handle(state, line, emit=emit)
        if reply is None:
            reply = add_from_input(state, line)
    except Exception:
        logger.exception("Command handler crashed.")
        reply = "Internal error while handling a command."
    return reply


async def run_console_loop(
    state: AppState,
    *,
    read_line: ReadLine = input,
    out: Printer = print,
) -> None:
    """
    Interactive loop.

    The loop thread only schedules work. Each command runs in its own daemon
    thread while `store_lock` is held, and the repair pass takes the same
    lock, so the store never sees two writers at once.
    """
    store_lock = asyncio.Lock()
    delay = float(getattr(state.settings, "repair_delay_seconds", 1.0))
    repair = schedule_consistency_repair(state.store, delay_seconds=delay, lock=store_lock)

    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "tidylist"))
    out(f"[{_ts_local()}] {app_name}: type a task and press Enter. Use /help for commands, /exit to quit.")
    out(show_view(state))

    def emit(text: str) -> None:
        out(f"[{_ts_local()}] {text}")

    try:
        while True:
            try:
                line = await _run_blocking(read_line, "> ")
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                out("")
                break

            if line.strip().lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            async with store_lock:
                reply = await _run_blocking(handle_line, state, line, emit)
            if reply is not None:
                out(reply)
    finally:
        if not repair.done():
            repair.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await repair

    logger.info("Console connector finished.")
