from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from savepoint.buffer import LogBuffer
from savepoint.config import KEY_CONSOLE, KEY_NOTES
from savepoint.errors import SaveFileError
from savepoint.model import LogEntry
from savepoint.notes import NoteRegistry
from savepoint.saves import (
    clear_all,
    default_filename,
    export_all,
    import_file,
    import_text,
    stats_line,
    write_json,
)
from savepoint.schedule import ManualScheduler
from savepoint.store import MemoryStore


class TestSavesContract(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore({
            KEY_CONSOLE: [{"t": 1, "lvl": "log", "msg": "old log"}],
            KEY_NOTES: {"g1": {"title": "Asteroids", "notes": "wave 2", "ts": 5}},
        })
        self.buf = LogBuffer(self.store, capacity=4)
        self.notes = NoteRegistry(self.store, scheduler=ManualScheduler())

    def _snapshot(self):
        return self.store.get(KEY_CONSOLE), self.store.get(KEY_NOTES)

    def test_export_shape(self) -> None:
        data = export_all(self.buf, self.notes, exported_at="2026-01-01T00:00:00.000Z")
        self.assertEqual(
            data,
            {
                "exportedAt": "2026-01-01T00:00:00.000Z",
                "version": 1,
                "notes": {"g1": {"title": "Asteroids", "notes": "wave 2", "ts": 5}},
                "consoleLogs": [{"t": 1, "lvl": "log", "msg": "old log"}],
            },
        )
        self.assertTrue(export_all(self.buf, self.notes)["exportedAt"].endswith("Z"))

    def test_import_merges_notes_and_replaces_logs(self) -> None:
        payload = {
            "version": 1,
            "notes": {
                "g1": {"title": "Asteroids", "notes": "wave 9", "ts": 9},
                "g2": {"title": "Pong", "notes": "11-3", "ts": 10},
            },
            "consoleLogs": [{"t": i, "lvl": "info", "msg": f"n{i}"} for i in range(6)],
        }
        n_notes, n_logs = import_text(json.dumps(payload), self.buf, self.notes)
        self.assertEqual((n_notes, n_logs), (2, 4))
        self.assertEqual(self.notes.text_for("g1"), "wave 9")
        self.assertEqual(self.notes.get("g2").title, "Pong")
        self.assertEqual([e.message for e in self.buf.entries()], ["n2", "n3", "n4", "n5"])
        self.assertEqual(len(self.store.get(KEY_CONSOLE)), 4)
        self.assertEqual(set(self.store.get(KEY_NOTES)), {"g1", "g2"})

    def test_missing_console_logs_leaves_buffer_untouched(self) -> None:
        import_text(json.dumps({"notes": {"g3": {"title": "Pong", "notes": "x", "ts": 1}}}), self.buf, self.notes)
        self.assertEqual(self.buf.entries(), [LogEntry(1, "log", "old log")])
        self.assertEqual(self.store.get(KEY_CONSOLE), [{"t": 1, "lvl": "log", "msg": "old log"}])
        self.assertIn("g3", self.notes)

    def test_missing_notes_leaves_registry_untouched(self) -> None:
        import_text(json.dumps({"consoleLogs": []}), self.buf, self.notes)
        self.assertEqual(len(self.buf), 0)
        self.assertEqual(self.notes.keys(), ["g1"])
        self.assertEqual(self.store.get(KEY_NOTES), {"g1": {"title": "Asteroids", "notes": "wave 2", "ts": 5}})

    def test_invalid_json_fails_once_and_touches_nothing(self) -> None:
        before = self._snapshot()
        with self.assertRaises(SaveFileError) as ctx:
            import_text("{definitely not json", self.buf, self.notes)
        self.assertEqual(str(ctx.exception), "Invalid save file.")
        self.assertEqual(self._snapshot(), before)

    def test_malformed_section_rejects_whole_import(self) -> None:
        before = self._snapshot()
        bad = {
            "notes": {"g9": {"title": "New", "notes": "fine", "ts": 1}},
            "consoleLogs": [{"t": 1, "lvl": "log", "msg": "ok"}, {"t": 2, "lvl": "log"}],
        }
        for text in (json.dumps(bad), "[]", "42", json.dumps({"notes": []}), json.dumps({"version": 1})):
            with self.assertRaises(SaveFileError):
                import_text(text, self.buf, self.notes)
        self.assertEqual(self._snapshot(), before)
        self.assertNotIn("g9", self.notes)

    def test_non_finite_numbers_reject_import(self) -> None:
        before = self._snapshot()
        for text in (
            '{"consoleLogs": [{"t": NaN, "lvl": "log", "msg": "x"}]}',
            '{"consoleLogs": [{"t": 1e400, "lvl": "log", "msg": "x"}]}',
            '{"notes": {"g9": {"title": "New", "notes": "x", "ts": Infinity}}}',
            '{"notes": {"g9": {"title": "New", "notes": "x", "ts": -1e400}}}',
        ):
            with self.assertRaises(SaveFileError) as ctx:
                import_text(text, self.buf, self.notes)
            self.assertEqual(str(ctx.exception), "Invalid save file.")
        self.assertEqual(self._snapshot(), before)
        self.assertNotIn("g9", self.notes)

    def test_import_file_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = write_json(Path(td) / "out" / default_filename("save", 123), export_all(self.buf, self.notes))
            self.assertEqual(p.name, "dbg-save-123.json")

            fresh_store = MemoryStore()
            buf = LogBuffer(fresh_store)
            notes = NoteRegistry(fresh_store, scheduler=ManualScheduler())
            import_file(p, buf, notes)
            self.assertEqual(buf.entries(), self.buf.entries())
            self.assertEqual(notes.text_for("g1"), "wave 2")

            with self.assertRaises(SaveFileError):
                import_file(Path(td) / "missing.json", buf, notes)

    def test_clear_all_persists_both_empty(self) -> None:
        clear_all(self.buf, self.notes)
        self.assertEqual(len(self.buf), 0)
        self.assertEqual(len(self.notes), 0)
        self.assertEqual(self.store.get(KEY_CONSOLE, None), [])
        self.assertEqual(self.store.get(KEY_NOTES, None), {})

    def test_stats_line(self) -> None:
        self.assertEqual(stats_line(self.buf, self.notes), "1 note(s) saved  •  1 console log(s) stored")

    def test_default_filename_kinds(self) -> None:
        self.assertEqual(default_filename("notes", 7), "dbg-notes-7.json")
        self.assertEqual(default_filename("console", 7), "dbg-console-7.json")
        with self.assertRaises(ValueError):
            default_filename("everything", 7)


if __name__ == "__main__":
    unittest.main(verbosity=2)
