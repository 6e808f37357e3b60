"""Per-context key/value persistence.

Each key holds one JSON document. Reads never fail the caller: absent,
unreadable or corrupt data resolves to the caller-supplied fallback. Writes
never fail the caller either; a failed write returns False and the in-memory
state stays authoritative for the session.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Protocol

log = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class Store(Protocol):
    def get(self, key: str, fallback: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> bool: ...

    def delete(self, key: str) -> None: ...


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def reject_constant(name: str) -> Any:
    """json.loads hook: NaN and Infinity literals count as corrupt data."""
    raise ValueError(f"non-finite JSON literal: {name}")


def _loads(raw: str | None, fallback: Any) -> Any:
    if not raw:
        return fallback
    try:
        obj = json.loads(raw, parse_constant=reject_constant)
    except ValueError:
        return fallback
    return fallback if obj is None else obj


class MemoryStore:
    """Store kept in process memory (serialized text, like the file store)."""

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, str] = {}
        for k, v in (initial or {}).items():
            self.set(k, v)

    def get(self, key: str, fallback: Any = None) -> Any:
        return _loads(self._data.get(key), fallback)

    def set(self, key: str, value: Any) -> bool:
        try:
            self._data[key] = _dumps(value)
        except (TypeError, ValueError):
            return False
        return True

    def set_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore:
    """Store backed by `<root>/<key>.json` files."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key or ""):
            raise ValueError(f"invalid store key: {key!r}")
        return self.root / f"{key}.json"

    def get(self, key: str, fallback: Any = None) -> Any:
        p = self._path(key)
        try:
            raw = p.read_text(encoding="utf-8")
        except FileNotFoundError:
            return fallback
        except (OSError, UnicodeDecodeError) as e:
            log.debug("store read failed for %s: %s", key, e)
            return fallback
        return _loads(raw, fallback)

    def set(self, key: str, value: Any) -> bool:
        p = self._path(key)
        try:
            blob = _dumps(value)
        except (TypeError, ValueError) as e:
            log.debug("store value for %s is not JSON-serializable: %s", key, e)
            return False
        tmp_name = None
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=str(p.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_name, p)
            tmp_name = None
        except OSError as e:
            log.debug("store write failed for %s: %s", key, e)
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        return True

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except OSError:
            pass
