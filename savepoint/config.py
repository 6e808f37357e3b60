# savepoint/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Persisted keys (one JSON document per key, per context).
KEY_CONSOLE = "dbg_console_v1"
KEY_NOTES = "dbg_notes_v1"
KEY_INJECT = "dbg_inject_enabled"
KEY_ITEMS = "dbg_items_v6"

MAX_LOGS = 400
DISPLAY_LIMIT = 120
NOTE_DEBOUNCE_S = 0.6
SAVE_INDICATOR_S = 1.2

AGENT_MAX_LINES = 80
AGENT_LINE_CHARS = 200

EXPORT_VERSION = 1


def default_home() -> Path:
    return Path.home() / ".savepoint"


@dataclass(frozen=True)
class HubConfig:
    """Resolved hub settings.

    home: store root (one directory per browsing context).
    max_logs: log buffer capacity N.
    display_limit: console display window M (must stay below max_logs).
    """

    home: Path
    max_logs: int = MAX_LOGS
    display_limit: int = DISPLAY_LIMIT
    note_debounce_s: float = NOTE_DEBOUNCE_S
    allowed_origins: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.max_logs < 2:
            # display_limit must fit strictly below max_logs.
            raise ValueError(f"max_logs must be >= 2, got {self.max_logs}")
        if not (0 < self.display_limit < self.max_logs):
            raise ValueError(
                f"display_limit must be in 1..{self.max_logs - 1}, got {self.display_limit}"
            )
        if self.note_debounce_s < 0:
            raise ValueError("note_debounce_s must be non-negative")


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def config_from_env(env: Optional[Mapping[str, str]] = None, *, home: Optional[str] = None) -> HubConfig:
    """Build a HubConfig from SAVEPOINT_* environment variables.

    An explicit `home` (e.g. from --home) wins over SAVEPOINT_HOME.
    SAVEPOINT_ORIGINS is a comma-separated allow-list for relayed messages;
    unset means any origin is accepted.
    """
    env = os.environ if env is None else env
    root = home or env.get("SAVEPOINT_HOME") or str(default_home())
    origins_raw = (env.get("SAVEPOINT_ORIGINS") or "").strip()
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip()) or None
    max_logs = _env_int(env, "SAVEPOINT_MAX_LOGS", MAX_LOGS)
    if max_logs < 2:
        raise ValueError(f"SAVEPOINT_MAX_LOGS must be >= 2, got {max_logs}")
    return HubConfig(
        home=Path(root).expanduser(),
        max_logs=max_logs,
        display_limit=min(DISPLAY_LIMIT, max_logs - 1),
        allowed_origins=origins,
    )
