"""Save-file export / import.

Export shape (version 1):
  {"exportedAt": "<ISO-8601>", "version": 1,
   "notes": {<key>: {"title", "notes", "ts"}}, "consoleLogs": [{"t", "lvl", "msg"}]}

Import validates the whole document before touching state: `notes` is merged
overwrite-by-key, `consoleLogs` replaces the buffer; a missing section leaves
that part untouched. Any malformed input rejects the entire import.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .buffer import LogBuffer
from .config import EXPORT_VERSION
from .errors import SaveFileError
from .model import LogEntry, NoteRecord
from .notes import NoteRegistry
from .store import reject_constant
from .util.clock import iso_now, now_ms

INVALID_SAVE_FILE = "Invalid save file."


def export_all(buffer: LogBuffer, notes: NoteRegistry, *, exported_at: Optional[str] = None) -> Dict[str, Any]:
    return {
        "exportedAt": exported_at or iso_now(),
        "version": EXPORT_VERSION,
        "notes": notes.to_json(),
        "consoleLogs": [e.to_json() for e in buffer.entries()],
    }


def export_notes(notes: NoteRegistry) -> Dict[str, Any]:
    return notes.to_json()


def export_console(buffer: LogBuffer) -> List[Dict[str, Any]]:
    return [e.to_json() for e in buffer.entries()]


def default_filename(kind: str, ms: Optional[int] = None) -> str:
    """dbg-save-<ms>.json / dbg-notes-<ms>.json / dbg-console-<ms>.json"""
    if kind not in ("save", "notes", "console"):
        raise ValueError(f"unknown export kind: {kind!r}")
    return f"dbg-{kind}-{ms if ms is not None else now_ms()}.json"


def write_json(path: str | Path, data: Any) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return p


def parse_save(text: str) -> Tuple[Optional[Dict[str, NoteRecord]], Optional[List[LogEntry]]]:
    """Validate a save document; returns (notes or None, logs or None)."""
    try:
        data = json.loads(text, parse_constant=reject_constant)
    except (TypeError, ValueError) as e:
        raise SaveFileError(INVALID_SAVE_FILE) from e
    if not isinstance(data, dict):
        raise SaveFileError(INVALID_SAVE_FILE)

    notes: Optional[Dict[str, NoteRecord]] = None
    raw_notes = data.get("notes")
    if raw_notes is not None:
        if not isinstance(raw_notes, dict):
            raise SaveFileError(INVALID_SAVE_FILE)
        notes = {}
        for k, v in raw_notes.items():
            rec = NoteRecord.from_json(k, v)
            if rec is None:
                raise SaveFileError(INVALID_SAVE_FILE)
            notes[k] = rec

    logs: Optional[List[LogEntry]] = None
    raw_logs = data.get("consoleLogs")
    if raw_logs is not None:
        if not isinstance(raw_logs, list):
            raise SaveFileError(INVALID_SAVE_FILE)
        logs = []
        for item in raw_logs:
            e = LogEntry.from_json(item)
            if e is None:
                raise SaveFileError(INVALID_SAVE_FILE)
            logs.append(e)

    if notes is None and logs is None:
        # Neither section present: not a save file at all.
        raise SaveFileError(INVALID_SAVE_FILE)
    return notes, logs


def import_text(text: str, buffer: LogBuffer, notes: NoteRegistry) -> Tuple[int, int]:
    """Apply a save document atomically; returns (notes merged, logs loaded)."""
    parsed_notes, parsed_logs = parse_save(text)
    n_notes = n_logs = 0
    if parsed_notes is not None:
        notes.merge(parsed_notes)
        n_notes = len(parsed_notes)
    if parsed_logs is not None:
        buffer.replace(parsed_logs)
        n_logs = len(buffer)
    return n_notes, n_logs


def import_file(path: str | Path, buffer: LogBuffer, notes: NoteRegistry) -> Tuple[int, int]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SaveFileError(INVALID_SAVE_FILE) from e
    return import_text(text, buffer, notes)


def clear_all(buffer: LogBuffer, notes: NoteRegistry) -> None:
    buffer.clear()
    notes.clear()


def stats_line(buffer: LogBuffer, notes: NoteRegistry) -> str:
    return f"{len(notes)} note(s) saved  •  {len(buffer)} console log(s) stored"
