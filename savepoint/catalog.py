# savepoint/catalog.py
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol

from .config import KEY_ITEMS
from .model import CatalogItem
from .store import Store


class Catalog(Protocol):
    """Read-only launcher catalog: enumerate entities with id/title."""

    def items(self) -> List[CatalogItem]: ...


def _coerce_item(raw: Any) -> Optional[CatalogItem]:
    if isinstance(raw, CatalogItem):
        return raw
    if not isinstance(raw, dict):
        return None
    item_id = raw.get("id")
    if item_id is None or isinstance(item_id, bool):
        return None
    title = raw.get("title")
    src = raw.get("src")
    return CatalogItem(
        id=str(item_id),
        title=title if isinstance(title, str) else "",
        src=src if isinstance(src, str) else "",
    )


def coerce_items(raw: Any) -> List[CatalogItem]:
    if not isinstance(raw, (list, tuple)):
        return []
    out: List[CatalogItem] = []
    for r in raw:
        it = _coerce_item(r)
        if it is not None:
            out.append(it)
    return out


class StaticCatalog:
    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items = coerce_items(list(items))

    def items(self) -> List[CatalogItem]:
        return list(self._items)


class StoreCatalog:
    """Catalog read from the launcher's own persisted item list."""

    def __init__(self, store: Store, key: str = KEY_ITEMS) -> None:
        self.store = store
        self.key = key

    def items(self) -> List[CatalogItem]:
        return coerce_items(self.store.get(self.key, []))


def find_item(catalog: Optional[Catalog], item_id: str) -> Optional[CatalogItem]:
    if catalog is None:
        return None
    for it in catalog.items():
        if it.id == item_id:
            return it
    return None
