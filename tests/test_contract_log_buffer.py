from __future__ import annotations

import unittest

from savepoint.buffer import LogBuffer
from savepoint.config import KEY_CONSOLE
from savepoint.model import LogEntry
from savepoint.store import MemoryStore


def _entry(i: int, level: str = "log") -> LogEntry:
    return LogEntry(timestamp=1000 + i, level=level, message=f"m{i}")


class TestLogBufferContract(unittest.TestCase):
    def test_overflow_keeps_last_n_in_append_order(self) -> None:
        store = MemoryStore()
        buf = LogBuffer(store, capacity=10)
        for i in range(10 + 7):
            buf.append(_entry(i))
            self.assertLessEqual(len(buf), 10)

        self.assertEqual(len(buf), 10)
        self.assertEqual([e.message for e in buf.entries()], [f"m{i}" for i in range(7, 17)])

        # Persisted after every append, oldest first.
        stored = store.get(KEY_CONSOLE, [])
        self.assertEqual([x["msg"] for x in stored], [f"m{i}" for i in range(7, 17)])

    def test_loads_from_store_and_skips_malformed_items(self) -> None:
        store = MemoryStore({
            KEY_CONSOLE: [
                {"t": 1, "lvl": "warn", "msg": "kept"},
                {"t": "x", "lvl": "warn", "msg": "bad ts"},
                {"t": 2, "lvl": "shout", "msg": "bad level"},
                "garbage",
            ]
        })
        buf = LogBuffer(store)
        self.assertEqual(buf.entries(), [LogEntry(1, "warn", "kept")])

    def test_corrupt_store_starts_empty(self) -> None:
        store = MemoryStore()
        store.set_raw(KEY_CONSOLE, "[[[")
        self.assertEqual(len(LogBuffer(store)), 0)

        store.set(KEY_CONSOLE, {"not": "a list"})
        self.assertEqual(len(LogBuffer(store)), 0)

    def test_non_finite_timestamps_never_crash_startup(self) -> None:
        store = MemoryStore()
        for literal in ("NaN", "Infinity", "-Infinity"):
            store.set_raw(KEY_CONSOLE, '[{"t": ' + literal + ', "lvl": "log", "msg": "x"}]')
            self.assertEqual(len(LogBuffer(store)), 0)

        store.set_raw(
            KEY_CONSOLE,
            '[{"t": 1e400, "lvl": "log", "msg": "huge"}, {"t": 7, "lvl": "warn", "msg": "kept"}]',
        )
        buf = LogBuffer(store)
        self.assertEqual([(e.timestamp, e.message) for e in buf.entries()], [(7, "kept")])

        self.assertIsNone(LogEntry.from_json({"t": float("nan"), "lvl": "log", "msg": "x"}))
        self.assertIsNone(LogEntry.from_json({"t": True, "lvl": "log", "msg": "x"}))

    def test_tail_is_recomputed_window(self) -> None:
        buf = LogBuffer(MemoryStore(), capacity=50)
        for i in range(30):
            buf.append(_entry(i, "error" if i % 3 == 0 else "log"))

        self.assertEqual([e.message for e in buf.tail(3)], ["m27", "m28", "m29"])
        errs = buf.tail(2, "error")
        self.assertEqual([e.message for e in errs], ["m24", "m27"])
        self.assertEqual(buf.tail(0), [])

    def test_clear_persists_empty(self) -> None:
        store = MemoryStore()
        buf = LogBuffer(store)
        buf.append(_entry(1))
        buf.clear()
        self.assertEqual(len(buf), 0)
        self.assertEqual(store.get(KEY_CONSOLE, None), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
