# savepoint/model.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

LEVELS: Tuple[str, ...] = ("log", "info", "warn", "error", "debug")


def _as_millis(v: Any) -> Optional[int]:
    # NaN, Infinity and overflowed literals are valid to json.loads but not timestamps.
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    if isinstance(v, float) and not math.isfinite(v):
        return None
    return int(v)


@dataclass(frozen=True)
class LogEntry:
    timestamp: int
    level: str
    message: str

    def to_json(self) -> Dict[str, Any]:
        # Wire/storage shape stays compatible with existing save files.
        return {"t": self.timestamp, "lvl": self.level, "msg": self.message}

    @classmethod
    def from_json(cls, raw: Any) -> Optional["LogEntry"]:
        """Parse one stored entry; None when the shape is not an entry."""
        if not isinstance(raw, dict):
            return None
        t = _as_millis(raw.get("t"))
        lvl = raw.get("lvl")
        msg = raw.get("msg")
        if t is None:
            return None
        if lvl not in LEVELS or not isinstance(msg, str):
            return None
        return cls(timestamp=t, level=lvl, message=msg)


@dataclass
class NoteRecord:
    key: str
    title: str
    text: str
    updated_at: int

    def to_json(self) -> Dict[str, Any]:
        return {"title": self.title, "notes": self.text, "ts": self.updated_at}

    @classmethod
    def from_json(cls, key: str, raw: Any) -> Optional["NoteRecord"]:
        if not isinstance(key, str) or not isinstance(raw, dict):
            return None
        title = raw.get("title")
        text = raw.get("notes", "")
        ts = raw.get("ts", 0)
        if title is None:
            title = key
        if not isinstance(title, str) or not isinstance(text, str):
            return None
        ts = _as_millis(ts)
        if ts is None:
            return None
        return cls(key=key, title=title, text=text, updated_at=ts)


@dataclass(frozen=True)
class CatalogItem:
    id: str
    title: str
    src: str = ""

    @property
    def label(self) -> str:
        return self.title or self.src or self.id


__all__ = [
    "LEVELS",
    "LogEntry",
    "NoteRecord",
    "CatalogItem",
]
