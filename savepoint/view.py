# savepoint/view.py
from __future__ import annotations

import sys
from typing import Callable, List, Optional, TextIO

from .buffer import LogBuffer
from .config import DISPLAY_LIMIT
from .model import LEVELS, LogEntry
from .util.clock import fmt_clock


def format_entry(entry: LogEntry) -> str:
    return f"{fmt_clock(entry.timestamp)} {entry.level:<5} {entry.message}"


class ConsoleView:
    """Text rendering of the console display window.

    The window is recomputed from the full buffer on every refresh (last
    `limit` entries matching the level filter, most recent last).
    """

    def __init__(
        self,
        buffer: LogBuffer,
        *,
        limit: int = DISPLAY_LIMIT,
        out: Optional[TextIO] = None,
        formatter: Callable[[LogEntry], str] = format_entry,
    ) -> None:
        self.buffer = buffer
        self.limit = int(limit)
        self.out = out
        self.formatter = formatter
        self.visible = False
        self.level_filter: Optional[str] = None
        self.lines: List[str] = []
        self.refresh_count = 0

    def show(self) -> None:
        self.visible = True
        self.refresh()

    def hide(self) -> None:
        self.visible = False

    def set_filter(self, level: Optional[str]) -> None:
        if level is not None and level not in LEVELS:
            raise ValueError(f"unknown level filter: {level!r}")
        self.level_filter = level
        if self.visible:
            self.refresh()

    def accepts(self, level: str) -> bool:
        return self.level_filter is None or self.level_filter == level

    def refresh(self) -> None:
        window = self.buffer.tail(self.limit, self.level_filter)
        self.lines = [self.formatter(e) for e in window]
        self.refresh_count += 1
        if self.out is not None:
            self.out.write("\n".join(self.lines) + ("\n" if self.lines else ""))
            self.out.flush()

    def render(self) -> str:
        self.refresh()
        return "\n".join(self.lines)


def print_window(buffer: LogBuffer, *, limit: int, level: Optional[str] = None, out: TextIO = sys.stdout) -> int:
    """One-shot render used by the CLI; returns the number of lines shown."""
    view = ConsoleView(buffer, limit=limit, out=out)
    view.level_filter = level
    view.refresh()
    return len(view.lines)
