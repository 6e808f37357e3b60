# savepoint/hub.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .buffer import LogBuffer
from .catalog import Catalog, StoreCatalog
from .config import HubConfig
from .interceptor import ConsoleInterceptor
from .notes import NoteRegistry
from .patcher import InjectionPatcher
from .relay import MessageRelay
from .saves import clear_all
from .schedule import Scheduler
from .store import JsonFileStore, Store
from .util.clock import now_ms
from .view import ConsoleView

LOADED_BANNER = "[SaveProgress] Module loaded ✓ — console interception active"


@dataclass
class Hub:
    """All hub-context components, wired to one store."""

    store: Store
    buffer: LogBuffer
    view: ConsoleView
    interceptor: ConsoleInterceptor
    notes: NoteRegistry
    patcher: InjectionPatcher
    relay: MessageRelay
    started: bool = False

    @classmethod
    def open(
        cls,
        config: HubConfig,
        *,
        store: Optional[Store] = None,
        host: Any = None,
        console: Any = None,
        catalog: Optional[Catalog] = None,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], int] = now_ms,
    ) -> "Hub":
        store = store if store is not None else JsonFileStore(config.home)
        buffer = LogBuffer(store, capacity=config.max_logs)
        view = ConsoleView(buffer, limit=config.display_limit)
        interceptor = ConsoleInterceptor(buffer, console, clock=clock, view=view)
        if catalog is None:
            catalog = StoreCatalog(store)
        notes = NoteRegistry(
            store,
            catalog=catalog,
            scheduler=scheduler,
            clock=clock,
            debounce_s=config.note_debounce_s,
        )
        patcher = InjectionPatcher(host if host is not None else object(), store=store)
        relay = MessageRelay(interceptor, notes, allowed_origins=config.allowed_origins)
        return cls(
            store=store,
            buffer=buffer,
            view=view,
            interceptor=interceptor,
            notes=notes,
            patcher=patcher,
            relay=relay,
        )

    def start(self, *, banner: bool = True) -> None:
        if self.started:
            return
        self.interceptor.install()
        self.patcher.sync()
        self.started = True
        if banner:
            self.interceptor.target.log(LOADED_BANNER)

    def ready(self) -> bool:
        """Host finished initializing; retry a deferred factory patch."""
        return self.patcher.on_ready()

    def clear_all(self) -> None:
        clear_all(self.buffer, self.notes)
        if self.view.visible:
            self.view.refresh()

    def close(self) -> None:
        self.notes.close()
        self.interceptor.uninstall()
        self.started = False

    def __enter__(self) -> "Hub":
        self.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
