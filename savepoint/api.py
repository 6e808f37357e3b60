"""savepoint.api

Stable *library* entrypoint for savepoint.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from savepoint.buffer import LogBuffer
from savepoint.catalog import StaticCatalog, StoreCatalog
from savepoint.config import HubConfig, config_from_env
from savepoint.errors import SaveFileError
from savepoint.hub import Hub
from savepoint.interceptor import CaptureHandler, Console, ConsoleInterceptor, console
from savepoint.model import LEVELS, CatalogItem, LogEntry, NoteRecord
from savepoint.notes import NoteRegistry
from savepoint.patcher import InjectionPatcher
from savepoint.relay import LogRelay, MessageRelay, NoteRelay, parse_relay_message
from savepoint.render.inline import build_agent_html, derive_note_key
from savepoint.saves import clear_all, export_all, import_text
from savepoint.schedule import ManualScheduler, ThreadingScheduler
from savepoint.store import JsonFileStore, MemoryStore

__all__ = [
    "LEVELS",
    "LogEntry",
    "NoteRecord",
    "CatalogItem",
    "HubConfig",
    "config_from_env",
    "MemoryStore",
    "JsonFileStore",
    "LogBuffer",
    "Console",
    "console",
    "ConsoleInterceptor",
    "CaptureHandler",
    "StaticCatalog",
    "StoreCatalog",
    "NoteRegistry",
    "ManualScheduler",
    "ThreadingScheduler",
    "InjectionPatcher",
    "build_agent_html",
    "derive_note_key",
    "LogRelay",
    "NoteRelay",
    "parse_relay_message",
    "MessageRelay",
    "export_all",
    "import_text",
    "clear_all",
    "SaveFileError",
    "Hub",
]
