"""Console capture.

`ConsoleInterceptor` wraps the five level callables of a console-like target
so every call is still forwarded to the original handler, then flattened
into a LogEntry and appended to the bounded LogBuffer. `CaptureHandler`
feeds stdlib `logging` records into the same pipeline.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable, Dict, Optional

from .buffer import LogBuffer
from .model import LEVELS, LogEntry
from .util.clock import now_ms


class Console:
    """Default ambient console: log/info/debug to stdout, warn/error to stderr."""

    def __init__(self, out=None, err=None) -> None:
        self._out = out
        self._err = err

    def _emit(self, stream, args: tuple) -> None:
        print(*args, file=stream)

    def log(self, *args: Any) -> None:
        self._emit(self._out or sys.stdout, args)

    def info(self, *args: Any) -> None:
        self._emit(self._out or sys.stdout, args)

    def debug(self, *args: Any) -> None:
        self._emit(self._out or sys.stdout, args)

    def warn(self, *args: Any) -> None:
        self._emit(self._err or sys.stderr, args)

    def error(self, *args: Any) -> None:
        self._emit(self._err or sys.stderr, args)


console = Console()


def stringify_arg(arg: Any) -> str:
    if isinstance(arg, str):
        return arg
    if isinstance(arg, (dict, list, tuple)):
        try:
            return json.dumps(arg, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError, RecursionError):
            return str(arg)
    return str(arg)


def flatten_args(args: tuple) -> str:
    return " ".join(stringify_arg(a) for a in args)


class ConsoleInterceptor:
    def __init__(
        self,
        buffer: LogBuffer,
        target: Any = None,
        *,
        clock: Callable[[], int] = now_ms,
        view: Any = None,
    ) -> None:
        self.buffer = buffer
        self.target = console if target is None else target
        self.clock = clock
        self.view = view
        self._originals: Dict[str, Callable[..., Any]] = {}
        self._owned: Dict[str, bool] = {}
        self._busy = False

    @property
    def installed(self) -> bool:
        return bool(self._originals)

    def install(self) -> None:
        if self.installed:
            return
        own = getattr(self.target, "__dict__", {})
        for level in LEVELS:
            original = getattr(self.target, level)
            self._originals[level] = original
            self._owned[level] = level in own
            setattr(self.target, level, self._wrap(level, original))

    def uninstall(self) -> None:
        for level, original in self._originals.items():
            if self._owned.get(level):
                setattr(self.target, level, original)
            else:
                # Drop the instance override so class lookup resumes.
                try:
                    delattr(self.target, level)
                except AttributeError:
                    setattr(self.target, level, original)
        self._originals.clear()
        self._owned.clear()

    def original(self, level: str) -> Callable[..., Any]:
        return self._originals.get(level) or getattr(self.target, level)

    def _wrap(self, level: str, original: Callable[..., Any]) -> Callable[..., Any]:
        def wrapper(*args: Any) -> None:
            original(*args)
            self.record(level, flatten_args(args))

        wrapper.__name__ = level
        wrapper.__wrapped__ = original  # type: ignore[attr-defined]
        return wrapper

    def record(self, level: str, message: str, *, refresh: Optional[bool] = None) -> Optional[LogEntry]:
        """Append one pre-flattened entry; refresh the view if attached and visible.

        Nested captures (something logging from inside a refresh) are dropped.
        """
        if level not in LEVELS:
            raise ValueError(f"unknown level: {level!r}")
        if self._busy:
            return None
        self._busy = True
        try:
            entry = LogEntry(timestamp=int(self.clock()), level=level, message=message)
            self.buffer.append(entry)
            view = self.view
            if refresh is None:
                refresh = view is not None and bool(getattr(view, "visible", False))
            if refresh and view is not None:
                view.refresh()
            return entry
        finally:
            self._busy = False


_LOGGING_LEVELS = (
    (logging.ERROR, "error"),
    (logging.WARNING, "warn"),
    (logging.INFO, "info"),
)


def level_for_record(levelno: int) -> str:
    for threshold, name in _LOGGING_LEVELS:
        if levelno >= threshold:
            return name
    return "debug"


class CaptureHandler(logging.Handler):
    """Bridge stdlib logging into a ConsoleInterceptor.

    Records from this package's own loggers are skipped so storage
    diagnostics never loop back into the buffer.
    """

    def __init__(self, interceptor: ConsoleInterceptor, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.interceptor = interceptor

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == "savepoint" or record.name.startswith("savepoint."):
            return
        try:
            msg = record.getMessage()
            self.interceptor.record(level_for_record(record.levelno), msg)
        except Exception:
            self.handleError(record)
