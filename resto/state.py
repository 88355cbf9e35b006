"""Observable persisted collections and the application state value."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, TypeVar

from resto.config import MENU_ITEMS_KEY, ORDERS_KEY
from resto.models import (
    MenuItem,
    Order,
    menu_items_from_list,
    menu_items_to_list,
    orders_from_list,
    orders_to_list,
    utc_now,
)
from resto.persistence import KeyedStore, KeyValueSubstrate, MemorySubstrate, SqliteSubstrate

if TYPE_CHECKING:
    from resto.catalog import MenuCatalog
    from resto.composer import OrderComposer
    from resto.deliveries import DeliveryTracker
    from resto.reset import BulkReset

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[tuple[Any, ...]], None]


class PersistentCollection(Generic[T]):
    """
    Working copy of one keyed collection.

    Every mutation replaces the whole tuple, writes it through the store and
    then hands the new snapshot to subscribers.
    """

    def __init__(
        self,
        store: KeyedStore,
        key: str,
        encode: Callable[[tuple[T, ...]], Any],
        decode: Callable[[Any], tuple[T, ...]],
    ) -> None:
        self.store = store
        self.key = key
        self._encode = encode
        self._decode = decode
        self._listeners: list[Listener] = []
        self._items: tuple[T, ...] = ()
        self.reload()

    def __len__(self) -> int:
        return len(self._items)

    def snapshot(self) -> tuple[T, ...]:
        return self._items

    def reload(self) -> tuple[T, ...]:
        self._items = tuple(self.store.load(self.key, (), decode=self._decode))
        return self._items

    def replace(self, items: Iterable[T]) -> bool:
        """Swap in a new collection; returns whether it was persisted."""
        self._items = tuple(items)
        saved = self.store.save(self.key, self._items, encode=self._encode)
        if not saved:
            logger.warning("collection %r kept in memory only", self.key)
        self._notify()
        return saved

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._items)


@dataclass
class AppState:
    """Everything the screens need: the store, both collections and the components."""

    store: KeyedStore
    menu_items: PersistentCollection[MenuItem]
    orders: PersistentCollection[Order]
    catalog: MenuCatalog
    composer: OrderComposer
    deliveries: DeliveryTracker
    reset: BulkReset

    @classmethod
    def from_substrate(cls, substrate: KeyValueSubstrate, now: Callable[[], datetime] = utc_now) -> AppState:
        from resto.catalog import MenuCatalog
        from resto.composer import OrderComposer
        from resto.deliveries import DeliveryTracker
        from resto.reset import BulkReset

        store = KeyedStore(substrate)
        menu_items: PersistentCollection[MenuItem] = PersistentCollection(
            store, MENU_ITEMS_KEY, menu_items_to_list, menu_items_from_list
        )
        orders: PersistentCollection[Order] = PersistentCollection(store, ORDERS_KEY, orders_to_list, orders_from_list)
        catalog = MenuCatalog(menu_items)
        return cls(
            store=store,
            menu_items=menu_items,
            orders=orders,
            catalog=catalog,
            composer=OrderComposer(catalog, orders, now=now),
            deliveries=DeliveryTracker(orders, now=now),
            reset=BulkReset(menu_items, orders),
        )

    @classmethod
    def open(cls, db_path: str | None = None) -> AppState:
        """State backed by the local SQLite file."""
        return cls.from_substrate(SqliteSubstrate(db_path))

    @classmethod
    def in_memory(cls, now: Callable[[], datetime] = utc_now) -> AppState:
        return cls.from_substrate(MemorySubstrate(), now=now)
