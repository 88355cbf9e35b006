"""Draft order composition and finalization."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable

from resto.catalog import MenuCatalog
from resto.models import PENDING, MenuItem, Order, OrderItem, make_id, utc_now
from resto.state import PersistentCollection

logger = logging.getLogger(__name__)


class OrderComposer:
    """
    Build an order from catalog items.

    The draft lives in memory only. Finalizing freezes the draft lines and
    their total into a pending order at the head of the order log.
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        orders: PersistentCollection[Order],
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self.catalog = catalog
        self.orders = orders
        self._now = now
        self._draft: list[OrderItem] = []

    def menu(self) -> tuple[MenuItem, ...]:
        return self.catalog.items()

    def draft(self) -> tuple[OrderItem, ...]:
        return tuple(self._draft)

    def _find(self, order_item_id: str) -> int | None:
        for idx, line in enumerate(self._draft):
            if line.id == order_item_id:
                return idx
        return None

    def add_to_draft(self, menu_item: MenuItem) -> OrderItem:
        for idx, line in enumerate(self._draft):
            if line.menu_item.id == menu_item.id:
                # Incrementing keeps the line id stable.
                self._draft[idx] = replace(line, quantity=line.quantity + 1)
                return self._draft[idx]

        taken = {line.id for line in self._draft}
        line_id = f"{menu_item.id}-{make_id()}"
        while line_id in taken:
            line_id = f"{menu_item.id}-{make_id()}"
        line = OrderItem(id=line_id, menu_item=menu_item, quantity=1)
        self._draft.append(line)
        return line

    def set_quantity(self, order_item_id: str, quantity: int) -> bool:
        idx = self._find(order_item_id)
        if idx is None:
            return False
        quantity = int(quantity)
        if quantity <= 0:
            del self._draft[idx]
            return True
        self._draft[idx] = replace(self._draft[idx], quantity=quantity)
        return True

    def increment(self, order_item_id: str) -> bool:
        idx = self._find(order_item_id)
        if idx is None:
            return False
        return self.set_quantity(order_item_id, self._draft[idx].quantity + 1)

    def decrement(self, order_item_id: str) -> bool:
        idx = self._find(order_item_id)
        if idx is None:
            return False
        return self.set_quantity(order_item_id, self._draft[idx].quantity - 1)

    def clear_draft(self) -> None:
        self._draft.clear()

    def total(self) -> float:
        return sum((line.line_total for line in self._draft), 0.0)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._draft)

    def finalize(self) -> Order | None:
        """Place the draft as a pending order; returns None for an empty draft."""
        if not self._draft:
            return None

        order = Order(
            id=f"order-{make_id()}",
            items=tuple(self._draft),
            total=self.total(),
            status=PENDING,
            created_at=self._now().isoformat(),
        )
        self.orders.replace([order, *self.orders.snapshot()])
        self._draft.clear()
        logger.info("order placed id=%s lines=%d total=%.2f", order.id, len(order.items), order.total)
        return order
