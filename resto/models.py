"""Domain models for resto-ops."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

PENDING = "pending"
DELIVERED = "delivered"
ORDER_STATUSES = (PENDING, DELIVERED)


class ModelError(ValueError):
    """A record violates a domain invariant."""


class InvalidTransition(ModelError):
    """An order status change that the lifecycle does not allow."""


_last_id_ms = 0


def make_id() -> str:
    """Return a millisecond timestamp id, strictly increasing within the process."""
    global _last_id_ms
    now_ms = time.time_ns() // 1_000_000
    _last_id_ms = max(now_ms, _last_id_ms + 1)
    return str(_last_id_ms)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_valid_price(price: object) -> bool:
    """Prices must be positive finite numbers. Booleans are not prices."""
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    return math.isfinite(price) and price > 0


@dataclass(frozen=True)
class MenuItem:
    """A dish on the catalog."""

    id: str
    name: str
    price: float


@dataclass(frozen=True)
class OrderItem:
    """One order line: a snapshot of a menu item and how many were ordered."""

    id: str
    menu_item: MenuItem
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ModelError(f"order item {self.id!r} quantity must be >= 1, got {self.quantity}")

    @property
    def line_total(self) -> float:
        return self.menu_item.price * self.quantity


@dataclass(frozen=True)
class Order:
    """A finalized order. The total is frozen when the order is placed."""

    id: str
    items: tuple[OrderItem, ...]
    total: float
    status: str
    created_at: str
    delivered_at: str | None = None

    def __post_init__(self) -> None:
        if self.status not in ORDER_STATUSES:
            raise ModelError(f"unknown order status {self.status!r}")
        if (self.status == DELIVERED) != (self.delivered_at is not None):
            raise ModelError(f"order {self.id!r}: deliveredAt must be set only when delivered")

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def short_number(self) -> str:
        """Display number shown on screens, the tail of the id."""
        return self.id[-6:]

    def deliver(self, at: datetime) -> Order:
        """Return the delivered copy of a pending order."""
        if self.status != PENDING:
            raise InvalidTransition(f"order {self.id!r} is already {self.status}")
        delivered_at = max(at, parse_timestamp(self.created_at))
        return replace(self, status=DELIVERED, delivered_at=delivered_at.isoformat())


def menu_item_to_dict(item: MenuItem) -> dict[str, Any]:
    return {"id": item.id, "name": item.name, "price": item.price}


def menu_item_from_dict(data: dict[str, Any]) -> MenuItem:
    price = data["price"]
    if isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0:
        raise ModelError(f"invalid menu item price {price!r}")
    return MenuItem(id=str(data["id"]), name=str(data["name"]), price=price)


def order_item_to_dict(item: OrderItem) -> dict[str, Any]:
    return {"id": item.id, "menuItem": menu_item_to_dict(item.menu_item), "quantity": item.quantity}


def order_item_from_dict(data: dict[str, Any]) -> OrderItem:
    quantity = data["quantity"]
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ModelError(f"invalid order item quantity {quantity!r}")
    return OrderItem(id=str(data["id"]), menu_item=menu_item_from_dict(data["menuItem"]), quantity=quantity)


def order_to_dict(order: Order) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": order.id,
        "items": [order_item_to_dict(item) for item in order.items],
        "total": order.total,
        "status": order.status,
        "createdAt": order.created_at,
    }
    if order.delivered_at is not None:
        data["deliveredAt"] = order.delivered_at
    return data


def order_from_dict(data: dict[str, Any]) -> Order:
    total = data["total"]
    if isinstance(total, bool) or not isinstance(total, (int, float)):
        raise ModelError(f"invalid order total {total!r}")
    delivered_at = data.get("deliveredAt")
    return Order(
        id=str(data["id"]),
        items=tuple(order_item_from_dict(item) for item in data["items"]),
        total=total,
        status=str(data["status"]),
        created_at=str(data["createdAt"]),
        delivered_at=str(delivered_at) if delivered_at is not None else None,
    )


def menu_items_to_list(items: tuple[MenuItem, ...]) -> list[dict[str, Any]]:
    return [menu_item_to_dict(item) for item in items]


def menu_items_from_list(data: list[dict[str, Any]]) -> tuple[MenuItem, ...]:
    if not isinstance(data, list):
        raise ModelError("menu catalog payload must be a list")
    return tuple(menu_item_from_dict(item) for item in data)


def orders_to_list(orders: tuple[Order, ...]) -> list[dict[str, Any]]:
    return [order_to_dict(order) for order in orders]


def orders_from_list(data: list[dict[str, Any]]) -> tuple[Order, ...]:
    if not isinstance(data, list):
        raise ModelError("order log payload must be a list")
    return tuple(order_from_dict(order) for order in data)
