"""Menu catalog management."""

from __future__ import annotations

import logging

from resto.models import MenuItem, is_valid_price, make_id
from resto.state import PersistentCollection

logger = logging.getLogger(__name__)


def _parse_price(price: object) -> float | None:
    """Accept numbers or numeric text typed into the UI."""
    if isinstance(price, str):
        try:
            price = float(price.strip().replace(",", "."))
        except ValueError:
            return None
    if not is_valid_price(price):
        return None
    return price  # type: ignore[return-value]


class MenuCatalog:
    """Add, edit and remove menu items. Placed orders keep their own snapshots."""

    def __init__(self, collection: PersistentCollection[MenuItem]) -> None:
        self.collection = collection

    def __len__(self) -> int:
        return len(self.collection)

    def items(self) -> tuple[MenuItem, ...]:
        return self.collection.snapshot()

    def get(self, item_id: str) -> MenuItem | None:
        for item in self.items():
            if item.id == item_id:
                return item
        return None

    def add(self, name: str, price: object) -> MenuItem | None:
        clean_name = name.strip()
        parsed = _parse_price(price)
        if not clean_name or parsed is None:
            logger.info("menu add rejected name=%r price=%r", name, price)
            return None

        existing_ids = {item.id for item in self.items()}
        item_id = make_id()
        while item_id in existing_ids:
            item_id = make_id()

        item = MenuItem(id=item_id, name=clean_name, price=parsed)
        self.collection.replace([*self.items(), item])
        logger.info("menu item added id=%s name=%r price=%s", item.id, item.name, item.price)
        return item

    def update(self, item_id: str, name: str, price: object) -> bool:
        clean_name = name.strip()
        parsed = _parse_price(price)
        if not clean_name or parsed is None:
            logger.info("menu update rejected id=%s name=%r price=%r", item_id, name, price)
            return False
        if self.get(item_id) is None:
            return False

        self.collection.replace(
            MenuItem(id=item.id, name=clean_name, price=parsed) if item.id == item_id else item
            for item in self.items()
        )
        logger.info("menu item updated id=%s", item_id)
        return True

    def remove(self, item_id: str) -> bool:
        if self.get(item_id) is None:
            return False
        self.collection.replace(item for item in self.items() if item.id != item_id)
        logger.info("menu item removed id=%s", item_id)
        return True
