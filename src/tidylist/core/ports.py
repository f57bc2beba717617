# src/tidylist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on a SlotStorage Protocol instead of a concrete file, and
front-ends supply a Confirmer. Tests plug in fakes for both.
"""

from typing import Protocol


class SlotStorage(Protocol):
    """
    localStorage-like key/value store holding strings.

    get_item() returns None for a missing key. Writes are synchronous.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class Confirmer(Protocol):
    """Front-end side yes/no prompt for destructive operations (delete, clear completed)."""

    def confirm(self, message: str) -> bool: ...
