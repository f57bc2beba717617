# src/tidylist/tasks/repair.py

from __future__ import annotations

"""
One-shot consistency repair after load.

When the slot held the legacy markup, an older structured version, or records
that had to be normalized, the in-memory list is already correct but the slot
is not. A short while after startup the list is written back in the current
format. The pass runs once, on the same event loop as the front-end, and
never raises.
"""

import asyncio
import contextlib
import logging

from .task_store import TaskStore

logger = logging.getLogger(__name__)


async def run_consistency_repair(
    store: TaskStore,
    *,
    delay_seconds: float = 1.0,
    lock: asyncio.Lock | None = None,
) -> bool:
    """
    Sleep for `delay_seconds`, then rewrite the slot if needed.

    `lock`, when given, is held around the rewrite; front-ends that mutate the
    store outside the loop thread hold the same lock while they do.
    Returns True if the slot was rewritten. Cancellation drops the pass.
    """
    await asyncio.sleep(max(0.0, float(delay_seconds)))

    outcome = store.last_load
    if outcome is not None and not outcome.needs_rewrite:
        logger.debug("Consistency repair: slot already current (source=%s)", outcome.source)
        return False

    async with lock if lock is not None else contextlib.nullcontext():
        try:
            return store.repair()
        except Exception:
            logger.exception("Consistency repair failed key=%s", store.key)
            return False


def schedule_consistency_repair(
    store: TaskStore,
    *,
    delay_seconds: float,
    lock: asyncio.Lock | None = None,
) -> asyncio.Task[bool]:
    """Start the repair pass on the running loop (fire-and-forget)."""
    return asyncio.create_task(
        run_consistency_repair(store, delay_seconds=delay_seconds, lock=lock),
        name="tidylist-consistency-repair",
    )
