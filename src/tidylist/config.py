# src/tidylist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
- The slot key stays "todoData" unless explicitly overridden, so existing data
  keeps loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TIDYLIST"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Front-end ----
    console_enabled: bool
    default_priority: str
    repair_delay_seconds: float

    # ---- Local data (ignored by git) ----
    data_dir: Path
    storage_path: Path
    slot_key: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tidylist").strip() or "tidylist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        # Validated in cli/bootstrap.create_initial_state; an unknown value falls back to "high".
        default_priority = _env(_k("DEFAULT_PRIORITY"), "high").strip().lower() or "high"
        repair_delay_seconds = max(0.0, _env_float(_k("REPAIR_DELAY_SECONDS"), 1.0))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tidylist"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.json")
        slot_key = _env(_k("SLOT_KEY"), "todoData").strip() or "todoData"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            default_priority=default_priority,
            repair_delay_seconds=repair_delay_seconds,
            data_dir=data_dir,
            storage_path=storage_path,
            slot_key=slot_key,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
