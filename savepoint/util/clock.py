# savepoint/util/clock.py
from __future__ import annotations

import datetime as dt
import time


def now_ms() -> int:
    """Wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


def fmt_clock(ms: int) -> str:
    """Render epoch milliseconds as local HH:MM:SS (console display style)."""
    return dt.datetime.fromtimestamp(ms / 1000.0).strftime("%H:%M:%S")


def iso_now() -> str:
    # Export stamps are UTC with a trailing Z, matching Date#toISOString.
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
