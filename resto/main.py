"""Entry point for the resto-ops Textual app."""

from __future__ import annotations

import argparse
import logging

from resto.logs import setup_logging
from resto.restaurant_app import RestaurantApp
from resto.state import AppState

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Restaurant menu, order and delivery manager")
    parser.add_argument("--db", default=None, help="SQLite file holding menu and orders")
    parser.add_argument("--memory", action="store_true", help="keep data in memory only, nothing is saved")
    parser.add_argument("--log-file", default=None, help="debug log path")
    parser.add_argument("--verbose", action="store_true", help="log debug messages")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    state = AppState.in_memory() if args.memory else AppState.open(args.db)
    logger.info("starting memory=%s db=%r", args.memory, args.db)
    RestaurantApp(state).run()


if __name__ == "__main__":
    main()
