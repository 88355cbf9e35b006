"""Destructive bulk clears and data counts for the settings page."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from resto.models import DELIVERED, PENDING, MenuItem, Order
from resto.state import PersistentCollection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSummary:
    """Counts shown before a reset."""

    menu_items: int
    orders: int
    pending: int
    delivered: int

    @property
    def is_empty(self) -> bool:
        return self.menu_items == 0 and self.orders == 0


class BulkReset:
    """Unconditional clears. Callers confirm with the user first."""

    def __init__(self, menu_items: PersistentCollection[MenuItem], orders: PersistentCollection[Order]) -> None:
        self.menu_items = menu_items
        self.orders = orders

    def summary(self) -> DataSummary:
        orders = self.orders.snapshot()
        return DataSummary(
            menu_items=len(self.menu_items),
            orders=len(orders),
            pending=sum(1 for order in orders if order.status == PENDING),
            delivered=sum(1 for order in orders if order.status == DELIVERED),
        )

    def clear_catalog(self) -> None:
        logger.info("clearing menu catalog count=%d", len(self.menu_items))
        self.menu_items.replace(())

    def clear_orders(self) -> None:
        logger.info("clearing order log count=%d", len(self.orders))
        self.orders.replace(())

    def clear_all(self) -> None:
        self.clear_catalog()
        self.clear_orders()
