# src/tidylist/tasks/legacy_markup.py

"""
Best-effort recovery of the legacy slot format.

Before the structured format existed, the slot held the list's rendered
markup verbatim, e.g.:

    <li class="checked" data-created="..." data-completed="...">Buy milk<span><i class="fas fa-times"></i></span></li>

Later revisions added a priority badge inside the item
(`<span class="priority-badge high">HIGH</span>`) or a `data-priority`
attribute. This module turns whatever is left of such a blob into plain
LegacyItem values. It never raises; problems are reported as warnings.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser

from .task_models import Priority

logger = logging.getLogger(__name__)

# Text of the old "delete" button when it was not an icon.
_DELETE_GLYPHS = {"×", "✕", "✖", "❌"}
_DELETE_CLASSES = {"fa-times", "fa-xmark", "fa-trash", "delete", "remove", "close"}

_TOKEN = r"(high|medium|low)"
_LEADING_MARKER = re.compile(rf"^\s*[\[(]?{_TOKEN}[\])]?\s*[:|\-]?\s+", re.IGNORECASE)
_TRAILING_MARKER = re.compile(rf"\s+[:|\-]?\s*[\[(]?{_TOKEN}[\])]?\s*$", re.IGNORECASE)
_WS = re.compile(r"\s+")


@dataclass(slots=True)
class LegacyItem:
    text: str
    priority: Priority | None
    completed: bool
    created: str
    completed_at: str


@dataclass(slots=True)
class _Group:
    """Text collected under one top-level child element of an <li>."""

    classes: set[str] = field(default_factory=set)
    text: str = ""


@dataclass(slots=True)
class _OpenItem:
    attrs: dict[str, str]
    # ("text", str) for data directly inside the <li>, ("group", index) for a child element
    pieces: list[tuple[str, str | int]] = field(default_factory=list)
    groups: list[_Group] = field(default_factory=list)
    child_depth: int = 0


def _classes(attrs: dict[str, str]) -> set[str]:
    return {c.strip().lower() for c in (attrs.get("class") or "").split() if c.strip()}


def priority_from_classes(classes: set[str]) -> Priority | None:
    for cls in sorted(classes):
        parts = set(re.split(r"[-_]", cls))
        if cls not in {p.value for p in Priority} and "priority" not in parts:
            continue
        for p in Priority:
            if p.value in parts:
                return p
    return None


def split_priority_marker(text: str) -> tuple[Priority | None, str]:
    """
    Find a standalone HIGH/MEDIUM/LOW token at the start or end of `text`.

    Returns (priority, remaining_label). The token is only taken when the
    remaining label is non-empty; otherwise the text is returned untouched.
    """
    for pattern in (_LEADING_MARKER, _TRAILING_MARKER):
        m = pattern.search(text)
        if not m:
            continue
        rest = (text[: m.start()] + " " + text[m.end():]).strip()
        if rest:
            return Priority(m.group(1).lower()), rest
    return None, text


class _LegacyListParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.items: list[_OpenItem] = []
        self._current: _OpenItem | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "li":
            # browsers implicitly close an open <li> when a new one starts
            self._finish()
            self._current = _OpenItem(attrs={k: (v or "") for k, v in attrs})
            return

        item = self._current
        if item is None:
            return

        if item.child_depth == 0:
            item.groups.append(_Group())
            item.pieces.append(("group", len(item.groups) - 1))
        item.groups[-1].classes |= _classes({k: (v or "") for k, v in attrs})
        if tag not in {"br", "img", "hr", "input", "wbr"}:
            item.child_depth += 1

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        item = self._current
        if item is None or tag == "li":
            return
        if item.child_depth == 0:
            item.groups.append(_Group(classes=_classes({k: (v or "") for k, v in attrs})))
            item.pieces.append(("group", len(item.groups) - 1))
        else:
            item.groups[-1].classes |= _classes({k: (v or "") for k, v in attrs})

    def handle_endtag(self, tag: str) -> None:
        item = self._current
        if item is None:
            return
        if tag == "li":
            self._finish()
            return
        if item.child_depth > 0:
            item.child_depth -= 1

    def handle_data(self, data: str) -> None:
        item = self._current
        if item is None:
            return
        if item.child_depth > 0 and item.groups:
            item.groups[-1].text += data
        else:
            item.pieces.append(("text", data))

    def _finish(self) -> None:
        if self._current is not None:
            self.items.append(self._current)
            self._current = None

    def finish(self) -> None:
        self._finish()


def _is_delete_group(group: _Group) -> bool:
    return bool(group.classes & _DELETE_CLASSES) or _WS.sub(" ", group.text).strip() in _DELETE_GLYPHS


def _next_group(item: _OpenItem, start: int) -> _Group | None:
    """The first child group after pieces[start], skipping whitespace-only text."""
    for kind, value in item.pieces[start + 1 :]:
        if kind == "text":
            if str(value).strip():
                return None
            continue
        return item.groups[int(value)]
    return None


def _to_legacy_item(item: _OpenItem) -> LegacyItem:
    li_classes = _classes(item.attrs)
    priority = Priority.parse(item.attrs.get("data-priority")) or priority_from_classes(li_classes)

    label_parts: list[str] = []
    for index, (kind, value) in enumerate(item.pieces):
        if kind == "text":
            label_parts.append(str(value))
            continue

        group = item.groups[int(value)]
        if _is_delete_group(group):
            continue

        marker = priority_from_classes(group.classes)
        if marker is None:
            # A bare HIGH/MEDIUM/LOW element is a badge only right before the delete button;
            # anywhere else it is inline markup from the task text.
            following = _next_group(item, index)
            if following is not None and _is_delete_group(following):
                marker = Priority.parse(_WS.sub(" ", group.text).strip())
        if marker is not None:
            priority = priority or marker
            continue
        label_parts.append(group.text)

    # innerHTML text: element boundaries add no spaces
    label = _WS.sub(" ", "".join(label_parts)).strip()

    if priority is None and label:
        priority, label = split_priority_marker(label)

    completed = "checked" in li_classes or "completed" in li_classes
    return LegacyItem(
        text=label,
        priority=priority,
        completed=completed,
        created=(item.attrs.get("data-created") or "").strip(),
        completed_at=(item.attrs.get("data-completed") or "").strip(),
    )


def parse_legacy_markup(markup: str, warnings: list[str]) -> list[LegacyItem]:
    """
    Extract every <li> from a legacy blob.

    Items whose label is empty after marker extraction are skipped and
    reported in `warnings`. Never raises.
    """
    parser = _LegacyListParser()
    try:
        parser.feed(markup)
        parser.close()
    except Exception as e:
        # Keep whatever was parsed before the failure.
        warnings.append(f"legacy markup parse stopped early: {e}")
        logger.debug("Legacy markup parser failed.", exc_info=True)
    parser.finish()

    if not parser.items:
        warnings.append("legacy slot contains no list items; starting empty")
        return []

    out: list[LegacyItem] = []
    for index, raw in enumerate(parser.items):
        try:
            item = _to_legacy_item(raw)
        except Exception as e:
            warnings.append(f"legacy item #{index} could not be decoded: {e}")
            continue
        if not item.text:
            warnings.append(f"legacy item #{index} has no text; skipped")
            continue
        out.append(item)
    return out
