# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TIDYLIST_APP_NAME": "App display name (default: tidylist).",
    "TIDYLIST_LOG_LEVEL": "Log file level (default: INFO). Console shows WARNING+ only.",
    # Front-end
    "TIDYLIST_CONSOLE_ENABLED": "Run the interactive console (true/false). False: load, repair, print counts, exit.",
    "TIDYLIST_DEFAULT_PRIORITY": "Initial default priority for new tasks: high | medium | low (default: high).",
    "TIDYLIST_REPAIR_DELAY_SECONDS": "Delay before the one-shot slot repair pass after load (default: 1.0).",
    # Paths (gitignored)
    "TIDYLIST_DATA_DIR": "Local data directory (default: .local/tidylist).",
    "TIDYLIST_STORAGE_PATH": "Slot storage JSON file (default: <data_dir>/storage.json).",
    "TIDYLIST_SLOT_KEY": "Key of the persisted slot (default: todoData).",
}
