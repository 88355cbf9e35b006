"""Delivery tracking: the pending -> delivered transition."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from resto.models import DELIVERED, PENDING, Order, utc_now
from resto.state import PersistentCollection

logger = logging.getLogger(__name__)


class DeliveryTracker:
    """Query the order log by status and mark pending orders delivered."""

    def __init__(self, orders: PersistentCollection[Order], now: Callable[[], datetime] = utc_now) -> None:
        self.orders = orders
        self._now = now

    def get(self, order_id: str) -> Order | None:
        for order in self.orders.snapshot():
            if order.id == order_id:
                return order
        return None

    def list_pending(self) -> list[Order]:
        return [order for order in self.orders.snapshot() if order.status == PENDING]

    def list_delivered(self, limit: int | None = None) -> list[Order]:
        delivered = [order for order in self.orders.snapshot() if order.status == DELIVERED]
        if limit is None:
            return delivered
        return delivered[: max(0, limit)]

    def mark_delivered(self, order_id: str) -> Order | None:
        """Deliver a pending order. Missing or already delivered orders are left alone."""
        order = self.get(order_id)
        if order is None or order.status != PENDING:
            return None

        delivered = order.deliver(self._now())
        self.orders.replace(delivered if existing.id == order_id else existing for existing in self.orders.snapshot())
        logger.info("order delivered id=%s at=%s", delivered.id, delivered.delivered_at)
        return delivered
