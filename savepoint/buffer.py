# savepoint/buffer.py
from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional

from .config import KEY_CONSOLE, MAX_LOGS
from .model import LogEntry
from .store import Store


class LogBuffer:
    """Bounded, persisted, append-ordered sequence of LogEntry.

    Invariant: len(self) <= capacity; overflow evicts from the front.
    Every mutation is written through to the store.
    """

    def __init__(self, store: Store, *, capacity: int = MAX_LOGS, key: str = KEY_CONSOLE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.store = store
        self.key = key
        self.capacity = int(capacity)
        self._entries: deque[LogEntry] = deque(maxlen=self.capacity)
        self.load()

    def load(self) -> None:
        raw = self.store.get(self.key, [])
        self._entries.clear()
        if not isinstance(raw, list):
            return
        for item in raw:
            e = LogEntry.from_json(item)
            if e is not None:
                self._entries.append(e)

    def persist(self) -> bool:
        return self.store.set(self.key, [e.to_json() for e in self._entries])

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)
        self.persist()

    def replace(self, entries: Iterable[LogEntry]) -> None:
        self._entries.clear()
        self._entries.extend(entries)
        self.persist()

    def clear(self) -> None:
        self._entries.clear()
        self.persist()

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def tail(self, limit: int, level: Optional[str] = None) -> List[LogEntry]:
        """Most recent `limit` entries (oldest first), optionally one level only."""
        items = [e for e in self._entries if level is None or e.level == level]
        if limit <= 0:
            return []
        return items[-limit:]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))
