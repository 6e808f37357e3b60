"""Per-game progress notes.

Records are created lazily on the first edit of a key (selection alone never
creates one). Local edits update memory immediately and are written to the
store after a quiescence window; switching the active key flushes the pending
write instead of dropping it. Remote (relayed) writes always win and are
persisted immediately.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .catalog import Catalog, find_item
from .config import KEY_NOTES, NOTE_DEBOUNCE_S
from .model import NoteRecord
from .schedule import Scheduler, ThreadingScheduler, TimerHandle
from .store import Store
from .util.clock import now_ms


class NoteRegistry:
    def __init__(
        self,
        store: Store,
        *,
        catalog: Optional[Catalog] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], int] = now_ms,
        debounce_s: float = NOTE_DEBOUNCE_S,
        key: str = KEY_NOTES,
        on_saved: Optional[Callable[[], None]] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.scheduler = scheduler or ThreadingScheduler()
        self.clock = clock
        self.debounce_s = float(debounce_s)
        self.key = key
        self.on_saved = on_saved
        self.active_key: Optional[str] = None
        self._records: Dict[str, NoteRecord] = {}
        self._timer: Optional[TimerHandle] = None
        self._dirty = False
        self._closed = False
        self._lock = threading.RLock()
        self.load()

    # --- storage ------------------------------------------------------------

    def load(self) -> None:
        raw = self.store.get(self.key, {})
        with self._lock:
            self._records = {}
            if not isinstance(raw, dict):
                return
            for k, v in raw.items():
                rec = NoteRecord.from_json(k, v)
                if rec is not None:
                    self._records[k] = rec

    def to_json(self) -> Dict[str, Any]:
        with self._lock:
            return {k: r.to_json() for k, r in self._records.items()}

    def persist(self) -> bool:
        with self._lock:
            self._dirty = False
            return self.store.set(self.key, self.to_json())

    def flush(self) -> bool:
        """Write a pending debounced edit now; False when nothing was pending."""
        with self._lock:
            self._cancel_timer()
            if not self._dirty:
                return False
            self.persist()
        return True

    def close(self) -> None:
        self.flush()
        self._closed = True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule(self) -> None:
        self._cancel_timer()
        self._timer = self.scheduler.call_later(self.debounce_s, self._fire)

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
            if self._closed or not self._dirty:
                return
            self.persist()
        if self.on_saved is not None:
            self.on_saved()

    # --- queries ------------------------------------------------------------

    def get(self, key: str) -> Optional[NoteRecord]:
        return self._records.get(key)

    def text_for(self, key: Optional[str]) -> str:
        if not key:
            return ""
        rec = self._records.get(key)
        return rec.text if rec is not None else ""

    def keys(self) -> List[str]:
        return list(self._records)

    def snapshot(self) -> Dict[str, NoteRecord]:
        with self._lock:
            return {k: NoteRecord(r.key, r.title, r.text, r.updated_at) for k, r in self._records.items()}

    def resolve_title(self, key: str) -> str:
        item = find_item(self.catalog, key)
        if item is not None and item.title:
            return item.title
        return key

    def choices(self) -> List[Tuple[str, str]]:
        """Selectable (key, label) pairs: saved notes first, then unsaved catalog entries."""
        out = [(k, r.title or k) for k, r in self._records.items()]
        if self.catalog is not None:
            for item in self.catalog.items():
                if item.id not in self._records:
                    out.append((item.id, item.label))
        return out

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    # --- mutations ----------------------------------------------------------

    def select(self, key: Optional[str]) -> str:
        """Make `key` the active entity and return its current text."""
        key = key or None
        with self._lock:
            if key != self.active_key:
                self.flush()
            self.active_key = key
            return self.text_for(key)

    def edit(self, text: str) -> Optional[NoteRecord]:
        """Apply a text change to the active key; None when nothing is selected."""
        with self._lock:
            key = self.active_key
            if not key:
                return None
            rec = self._records.get(key)
            ts = int(self.clock())
            if rec is None:
                rec = NoteRecord(key=key, title=self.resolve_title(key), text="", updated_at=ts)
                self._records[key] = rec
            rec.text = str(text)
            rec.updated_at = ts
            self._dirty = True
            self._schedule()
            return rec

    def apply_remote(self, key: str, title: str, text: str) -> NoteRecord:
        with self._lock:
            ts = int(self.clock())
            rec = self._records.get(key)
            if rec is None:
                rec = NoteRecord(key=key, title=title, text="", updated_at=ts)
                self._records[key] = rec
            rec.text = text
            rec.updated_at = ts
            self.persist()
            return rec

    def merge(self, records: Mapping[str, NoteRecord]) -> None:
        """Overwrite-by-key merge (import path); persisted immediately."""
        with self._lock:
            for k, r in records.items():
                self._records[k] = NoteRecord(key=k, title=r.title, text=r.text, updated_at=r.updated_at)
            self._cancel_timer()
            self.persist()

    def clear(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._records.clear()
            self.persist()
