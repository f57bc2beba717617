# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class FakeSlot:
    """
    In-memory SlotStorage.

    - Records every write so tests can assert "persisted exactly once"
    - Can be pre-seeded with raw slot contents (legacy blobs, garbage, ...)
    """

    items: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass(slots=True)
class FakeConfirmer:
    """Confirmer that answers with a fixed value and remembers the prompts."""

    answer: bool = True
    prompts: list[str] = field(default_factory=list)

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer
