"""Logging configuration.

The Textual UI owns the terminal, so log records go to a file instead of
stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

from resto.config import resolve_debug_log_path

_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def setup_logging(level: int = logging.INFO, log_path: str | None = None) -> None:
    """Attach a file handler for the debug log to the root logger, once."""
    global _handler
    root = logging.getLogger()
    root.setLevel(level)
    if _handler is not None and _handler in root.handlers:
        return

    path = Path(log_path or resolve_debug_log_path())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        # Logging must never interfere with app flow.
        handler = logging.NullHandler()

    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    _handler = handler

    logging.getLogger("asyncio").setLevel(logging.WARNING)
