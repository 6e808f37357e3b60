# savepoint/host.py
from __future__ import annotations

from typing import Callable, Optional

from .model import CatalogItem
from .render.blanker import make_blanker_html

BlankerFactory = Callable[[str, str, bool], str]


class LauncherHost:
    """Minimal stand-in for the launcher page the hub lives in.

    `make_blanker_html` only exists after load(), the same way the launcher's
    factory appears some time after the hub module has started.
    """

    def __init__(self, factory: Optional[BlankerFactory] = None) -> None:
        self._factory = factory or make_blanker_html
        self.loaded = False

    def load(self) -> None:
        self.make_blanker_html = self._factory
        self.loaded = True

    def open_blanker(self, item: CatalogItem, auto_fs: bool = False) -> str:
        factory = getattr(self, "make_blanker_html", None)
        if factory is None:
            raise RuntimeError("launcher not loaded: make_blanker_html is missing")
        return factory(item.title or item.id, item.src, auto_fs)
