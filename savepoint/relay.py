"""Inbound cross-window message handling.

Wire shapes posted by the capture agent:

  {"type": "sp_log",  "lvl": <level>, "msg": <str>, "gameTitle": <str>}
  {"type": "sp_note", "key": <str>,   "txt": <str>, "gameTitle": <str>}

Everything else is noise: the relay listens to all message traffic, so
unknown or malformed messages are dropped without any diagnostics.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from .interceptor import ConsoleInterceptor
from .model import LEVELS, LogEntry
from .notes import NoteRegistry

TYPE_LOG = "sp_log"
TYPE_NOTE = "sp_note"


@dataclass(frozen=True)
class LogRelay:
    level: str
    message: str
    source_title: str

    def to_json(self) -> dict:
        return {"type": TYPE_LOG, "lvl": self.level, "msg": self.message, "gameTitle": self.source_title}


@dataclass(frozen=True)
class NoteRelay:
    key: str
    title: str
    text: str

    def to_json(self) -> dict:
        return {"type": TYPE_NOTE, "key": self.key, "txt": self.text, "gameTitle": self.title}


RelayMessage = Union[LogRelay, NoteRelay]


def parse_relay_message(data: Any) -> Optional[RelayMessage]:
    if not isinstance(data, dict):
        return None
    kind = data.get("type")
    title = data.get("gameTitle")
    if not isinstance(title, str):
        return None
    if kind == TYPE_LOG:
        lvl = data.get("lvl")
        msg = data.get("msg")
        if lvl not in LEVELS or not isinstance(msg, str):
            return None
        return LogRelay(level=lvl, message=msg, source_title=title)
    if kind == TYPE_NOTE:
        key = data.get("key")
        txt = data.get("txt")
        if not isinstance(key, str) or not key or not isinstance(txt, str):
            return None
        return NoteRelay(key=key, title=title, text=txt)
    return None


class MessageRelay:
    def __init__(
        self,
        interceptor: ConsoleInterceptor,
        notes: NoteRegistry,
        *,
        allowed_origins: Optional[Iterable[str]] = None,
    ) -> None:
        self.interceptor = interceptor
        self.notes = notes
        self.allowed_origins = frozenset(allowed_origins) if allowed_origins else None

    def origin_allowed(self, origin: Optional[str]) -> bool:
        if self.allowed_origins is None:
            return True
        return origin is not None and origin in self.allowed_origins

    def handle(self, data: Any, origin: Optional[str] = None) -> Optional[RelayMessage]:
        if not self.origin_allowed(origin):
            return None
        msg = parse_relay_message(data)
        if isinstance(msg, LogRelay):
            self._on_log(msg)
        elif isinstance(msg, NoteRelay):
            self.notes.apply_remote(msg.key, msg.title, msg.text)
        return msg

    def handle_text(self, line: str, origin: Optional[str] = None) -> Optional[RelayMessage]:
        try:
            data = json.loads(line)
        except (TypeError, ValueError):
            return None
        return self.handle(data, origin)

    def _on_log(self, msg: LogRelay) -> Optional[LogEntry]:
        view = self.interceptor.view
        refresh = (
            view is not None
            and bool(getattr(view, "visible", False))
            and bool(view.accepts(msg.level))
        )
        return self.interceptor.record(
            msg.level, f"[{msg.source_title}] {msg.message}", refresh=refresh
        )
