# src/tidylist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (which loads the slot), then runs the
console loop on an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleConfirmer, run_console_loop
from ..logging_setup import setup_logging
from ..view.renderer import format_count

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    log_file = setup_logging(log_dir=settings.data_dir, file_level=file_level)

    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    state = create_initial_state(confirmer=ConsoleConfirmer(), settings=settings)

    if not settings.console_enabled:
        # Headless run: load (and repair) the slot, report counts, exit.
        state.store.repair()
        print(format_count(state.store.count()))
        logger.info("Console disabled; slot checked, exiting.")
        return

    try:
        asyncio.run(run_console_loop(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
