"""Agent injection into the launcher's child-window document factory.

States:
  unpatched --enable (factory present)--> patched --disable--> unpatched

The factory found at the first successful enable is captured once and is the
only callable ever wrapped or restored, so repeated enable/disable cycles
never stack wrappers.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional

from .config import KEY_INJECT
from .render.inline import build_agent_html, inject_before_body_close
from .store import Store

log = logging.getLogger(__name__)

DEFAULT_FACTORY_ATTR = "make_blanker_html"


class InjectionPatcher:
    def __init__(
        self,
        host: Any,
        *,
        store: Store,
        attr: str = DEFAULT_FACTORY_ATTR,
        agent_builder: Callable[[str], str] = build_agent_html,
        key: str = KEY_INJECT,
    ) -> None:
        self.host = host
        self.attr = attr
        self.store = store
        self.key = key
        self.agent_builder = agent_builder
        self.enabled = bool(store.get(key, False) is True)
        self._original: Optional[Callable[..., Any]] = None
        self._wrapper: Optional[Callable[..., Any]] = None

    @property
    def original(self) -> Optional[Callable[..., Any]]:
        return self._original

    @property
    def patched(self) -> bool:
        return self._wrapper is not None and getattr(self.host, self.attr, None) is self._wrapper

    def set_enabled(self, enabled: bool) -> bool:
        """Persist the flag and apply it; returns whether the factory is now patched."""
        self.enabled = bool(enabled)
        self.store.set(self.key, self.enabled)
        self.sync()
        return self.patched

    def toggle(self) -> bool:
        return self.set_enabled(not self.enabled)

    def on_ready(self) -> bool:
        """Lifecycle checkpoint: retry a patch that found no factory earlier."""
        return self.sync()

    def sync(self) -> bool:
        if not self.enabled:
            self._restore()
            return False

        if self._original is None:
            current = getattr(self.host, self.attr, None)
            if not callable(current):
                log.debug("%s not available yet; patch deferred", self.attr)
                return False
            self._original = current
            self._wrapper = self._wrap(current)

        if getattr(self.host, self.attr, None) is not self._wrapper:
            setattr(self.host, self.attr, self._wrapper)
        return True

    def _restore(self) -> None:
        if self._original is None:
            return
        if getattr(self.host, self.attr, None) is not self._original:
            setattr(self.host, self.attr, self._original)

    def _wrap(self, original: Callable[..., Any]) -> Callable[..., Any]:
        builder = self.agent_builder

        @functools.wraps(original)
        def with_agent(*args: Any, **kwargs: Any) -> Any:
            base = original(*args, **kwargs)
            if not isinstance(base, str):
                return base
            title = args[0] if args else kwargs.get("title", "")
            return inject_before_body_close(base, builder(str(title)))

        return with_agent
