"""Tests for domain records, their invariants and JSON shape."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from resto.models import (
    DELIVERED,
    PENDING,
    InvalidTransition,
    MenuItem,
    ModelError,
    Order,
    OrderItem,
    is_valid_price,
    make_id,
    menu_items_from_list,
    order_from_dict,
    order_to_dict,
    orders_from_list,
)

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _order(**overrides) -> Order:
    pizza = MenuItem(id="1", name="Pizza", price=10.0)
    fields = dict(
        id="order-1714564800000",
        items=(OrderItem(id="1-1714564800000", menu_item=pizza, quantity=2),),
        total=20.0,
        status=PENDING,
        created_at=CREATED.isoformat(),
    )
    fields.update(overrides)
    return Order(**fields)


def test_make_id_is_strictly_increasing():
    ids = [int(make_id()) for _ in range(50)]
    assert ids == sorted(set(ids))


@pytest.mark.parametrize("price, expected", [(1, True), (0.5, True), (0, False), (-2, False), (float("inf"), False), (True, False), ("3", False)])
def test_is_valid_price(price, expected):
    assert is_valid_price(price) is expected


def test_order_item_requires_positive_quantity():
    with pytest.raises(ModelError):
        OrderItem(id="x", menu_item=MenuItem("1", "Pizza", 10.0), quantity=0)


def test_order_derived_values():
    order = _order()
    assert order.item_count == 2
    assert order.short_number == "800000"
    assert order.items[0].line_total == 20.0
    assert order.is_pending


def test_delivered_at_only_with_delivered_status():
    with pytest.raises(ModelError):
        _order(delivered_at=CREATED.isoformat())
    with pytest.raises(ModelError):
        _order(status=DELIVERED)


def test_stored_delivery_earlier_than_creation_still_decodes():
    data = order_to_dict(_order())
    data["status"] = DELIVERED
    data["deliveredAt"] = (CREATED - timedelta(minutes=1)).isoformat()

    assert order_from_dict(data).delivered_at == data["deliveredAt"]


def test_unknown_status_is_rejected():
    with pytest.raises(ModelError):
        _order(status="cancelled")


def test_deliver_sets_timestamp_and_keeps_total():
    delivered = _order().deliver(CREATED + timedelta(minutes=30))
    assert delivered.status == DELIVERED
    assert delivered.delivered_at == (CREATED + timedelta(minutes=30)).isoformat()
    assert delivered.total == 20.0


def test_deliver_never_predates_creation():
    delivered = _order().deliver(CREATED - timedelta(hours=1))
    assert delivered.delivered_at == CREATED.isoformat()


def test_deliver_twice_is_invalid():
    delivered = _order().deliver(CREATED)
    with pytest.raises(InvalidTransition):
        delivered.deliver(CREATED)


def test_order_json_shape_uses_stored_keys():
    data = order_to_dict(_order())
    assert data == {
        "id": "order-1714564800000",
        "items": [
            {
                "id": "1-1714564800000",
                "menuItem": {"id": "1", "name": "Pizza", "price": 10.0},
                "quantity": 2,
            }
        ],
        "total": 20.0,
        "status": "pending",
        "createdAt": CREATED.isoformat(),
    }


def test_delivered_order_json_includes_delivered_at():
    delivered = _order().deliver(CREATED + timedelta(minutes=5))
    data = order_to_dict(delivered)
    assert data["deliveredAt"] == delivered.delivered_at
    assert order_from_dict(data) == delivered


def test_order_from_dict_accepts_zulu_timestamps():
    data = order_to_dict(_order())
    data["createdAt"] = "2024-05-01T12:00:00.000Z"
    data["status"] = DELIVERED
    data["deliveredAt"] = "2024-05-01T12:10:00.000Z"
    assert order_from_dict(data).status == DELIVERED


@pytest.mark.parametrize(
    "payload",
    [
        {"not": "a list"},
        [{"id": "1", "name": "Pizza"}],
        [{"id": "1", "name": "Pizza", "price": "ten"}],
        [{"id": "1", "name": "Pizza", "price": -1}],
    ],
)
def test_menu_items_from_list_rejects_incompatible_payloads(payload):
    with pytest.raises((ModelError, KeyError, TypeError)):
        menu_items_from_list(payload)


def test_orders_from_list_rejects_bad_quantity():
    data = order_to_dict(_order())
    data["items"][0]["quantity"] = 0
    with pytest.raises(ModelError):
        orders_from_list([data])
