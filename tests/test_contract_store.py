from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from savepoint.store import JsonFileStore, MemoryStore


class TestMemoryStoreContract(unittest.TestCase):
    def test_absent_and_corrupt_values_resolve_to_fallback(self) -> None:
        s = MemoryStore()
        self.assertEqual(s.get("missing", []), [])

        s.set_raw("broken", "{not json")
        self.assertEqual(s.get("broken", {"x": 1}), {"x": 1})

        s.set_raw("nulled", "null")
        self.assertEqual(s.get("nulled", "fb"), "fb")

    def test_set_is_full_overwrite(self) -> None:
        s = MemoryStore({"k": [1, 2, 3]})
        self.assertTrue(s.set("k", {"a": 1}))
        self.assertEqual(s.get("k"), {"a": 1})

    def test_unserializable_write_is_swallowed(self) -> None:
        s = MemoryStore({"k": "old"})
        self.assertFalse(s.set("k", {"obj": object()}))
        self.assertEqual(s.get("k"), "old")


class TestJsonFileStoreContract(unittest.TestCase):
    def test_round_trip_and_corruption(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            s = JsonFileStore(Path(td) / "ctx")
            self.assertEqual(s.get("dbg_console_v1", []), [])
            self.assertTrue(s.set("dbg_console_v1", [{"t": 1, "lvl": "log", "msg": "x"}]))
            self.assertEqual(s.get("dbg_console_v1", []), [{"t": 1, "lvl": "log", "msg": "x"}])

            (Path(td) / "ctx" / "dbg_console_v1.json").write_text("[{oops", encoding="utf-8")
            self.assertEqual(s.get("dbg_console_v1", []), [])

    def test_write_failure_returns_false(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            blocker = Path(td) / "not-a-dir"
            blocker.write_text("file in the way", encoding="utf-8")
            s = JsonFileStore(blocker)
            self.assertFalse(s.set("dbg_notes_v1", {}))
            self.assertEqual(s.get("dbg_notes_v1", {"fb": True}), {"fb": True})

    def test_rejects_path_like_keys(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            s = JsonFileStore(td)
            with self.assertRaises(ValueError):
                s.get("../escape")


if __name__ == "__main__":
    unittest.main(verbosity=2)
