"""Runtime configuration defaults for persistence, logging and display."""

from __future__ import annotations

import os

DB_PATH = "data/resto.db"
DEBUG_LOG_PATH = "/tmp/resto-debug.log"

# Storage keys. Each key holds exactly one record type.
MENU_ITEMS_KEY = "menuItems"
ORDERS_KEY = "orders"

# The deliveries page only lists the most recent delivered orders.
RECENT_DELIVERED_LIMIT = 5

CURRENCY_SYMBOL = "€"
DATE_FORMAT = "%d/%m/%Y %H:%M"

_DB_PATH_ENV = "RESTO_DB_PATH"
_DEBUG_LOG_ENV = "RESTO_DEBUG_LOG"


def resolve_db_path() -> str:
    """Return the SQLite file path, honoring RESTO_DB_PATH when set."""
    override = os.environ.get(_DB_PATH_ENV, "").strip()
    return override or DB_PATH


def resolve_debug_log_path() -> str:
    """Return the debug log path, honoring RESTO_DEBUG_LOG when set."""
    override = os.environ.get(_DEBUG_LOG_ENV, "").strip()
    return override or DEBUG_LOG_PATH
