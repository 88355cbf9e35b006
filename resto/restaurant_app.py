"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from resto.config import RECENT_DELIVERED_LIMIT
from resto.confirm_modal import ConfirmModal
from resto.menu_item_modal import MenuItemModal
from resto.rendering import (
    format_menu_item_label,
    format_order_detail,
    format_order_line,
    format_order_summary,
    format_price,
)
from resto.state import AppState

logger = logging.getLogger(__name__)

PAGES = ("menu", "order", "deliveries", "settings")
PAGE_TITLES = {
    "menu": "Menu",
    "order": "Take an Order",
    "deliveries": "Deliveries",
    "settings": "Settings",
}
PAGE_HELP = {
    "menu": "A add. E edit. D delete. J/K move.",
    "order": "Enter add dish. Left/Right switch pane. +/- quantity. X clear. Ctrl+S place order.",
    "deliveries": "J/K move. Left/Right pending or delivered. Enter/M mark delivered.",
    "settings": "M clear menu. O clear orders. R reset everything.",
}


class RestaurantApp(App):
    """A Textual app for running a small restaurant: menu, orders and deliveries."""

    TITLE = "Resto Ops"
    SUB_TITLE = "Menu / Orders / Deliveries"

    CSS = """
    Screen {
        layout: vertical;
    }

    #tabs {
        height: 1;
        padding: 0 1;
    }

    #main-layout {
        height: 1fr;
    }

    #left-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #right-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #left-list, #right-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        height: 2;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("1", "show_page('menu')", "Menu"),
        ("2", "show_page('order')", "Order"),
        ("3", "show_page('deliveries')", "Deliveries"),
        ("4", "show_page('settings')", "Settings"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("up", "move_cursor(-1)", "Previous"),
        ("left", "focus_pane('left')", "Menu pane"),
        ("right", "focus_pane('right')", "Order pane"),
        ("enter", "primary", "Select"),
        ("a", "add_menu_item", "Add dish"),
        ("e", "edit_menu_item", "Edit dish"),
        ("d", "delete_menu_item", "Delete dish"),
        ("plus", "change_quantity(1)", "More"),
        ("minus", "change_quantity(-1)", "Less"),
        ("x", "clear_draft", "Clear draft"),
        Binding("ctrl+s", "place_order", "Place order", priority=True),
        ("m", "page_m", "Deliver / clear menu"),
        ("o", "clear_orders", "Clear orders"),
        ("r", "reset_all", "Reset all"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, state: AppState) -> None:
        super().__init__()
        self.state = state
        self.page = "menu"
        self.active_pane = "left"
        self.left_index = 0
        self.right_index = 0
        self.system_status = ""
        self._unsubscribers: list[Callable[[], None]] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="tabs")
        with Horizontal(id="main-layout"):
            with Vertical(id="left-pane"):
                yield Static(id="left-title", classes="pane-title")
                yield Static(id="left-list")
            with Vertical(id="right-pane"):
                yield Static(id="right-title", classes="pane-title")
                yield Static(id="right-list")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._unsubscribers.append(self.state.menu_items.subscribe(lambda _: self._refresh_all()))
        self._unsubscribers.append(self.state.orders.subscribe(lambda _: self._refresh_all()))
        logger.info(
            "app mounted menu_items=%d orders=%d", len(self.state.menu_items), len(self.state.orders)
        )
        self._refresh_all()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_status()

    # Actions

    def action_show_page(self, page: str) -> None:
        if self._modal_open() or page not in PAGES:
            return
        self.page = page
        self.active_pane = "left"
        self.left_index = 0
        self.right_index = 0
        self.system_status = ""
        self._refresh_all()

    def action_move_cursor(self, delta: int) -> None:
        if self._modal_open():
            return
        if self.active_pane == "right" and self.page in {"order", "deliveries"}:
            count = len(self._right_rows())
            if count:
                self.right_index = (self.right_index + delta) % count
        else:
            count = len(self._left_rows())
            if count:
                self.left_index = (self.left_index + delta) % count
        self._refresh_all()

    def action_focus_pane(self, pane: str) -> None:
        if self._modal_open() or self.page not in {"order", "deliveries"}:
            return
        self.active_pane = pane
        self.right_index = 0
        self._refresh_all()

    def action_primary(self) -> None:
        if self._modal_open():
            return
        if self.page == "order" and self.active_pane == "left":
            item = self._selected(self.state.catalog.items(), self.left_index)
            if item is not None:
                self.state.composer.add_to_draft(item)
                self._refresh_all()
        elif self.page == "deliveries":
            self._deliver_selected()

    def action_add_menu_item(self) -> None:
        if self._modal_open() or self.page != "menu":
            return

        def submit(name: str, price: str) -> bool:
            return self.state.catalog.add(name, price) is not None

        self.push_screen(MenuItemModal("New dish", on_submit=submit), self._after_modal)

    def action_edit_menu_item(self) -> None:
        if self._modal_open() or self.page != "menu":
            return
        item = self._selected(self.state.catalog.items(), self.left_index)
        if item is None:
            return

        def submit(name: str, price: str) -> bool:
            return self.state.catalog.update(item.id, name, price)

        self.push_screen(
            MenuItemModal("Edit dish", on_submit=submit, name=item.name, price=f"{item.price:.2f}"),
            self._after_modal,
        )

    def action_delete_menu_item(self) -> None:
        if self._modal_open() or self.page != "menu":
            return
        item = self._selected(self.state.catalog.items(), self.left_index)
        if item is None:
            return
        self.state.catalog.remove(item.id)
        self._set_status(f"Removed {item.name}")

    def action_change_quantity(self, delta: int) -> None:
        if self._modal_open() or self.page != "order":
            return
        line = self._selected(self.state.composer.draft(), self.right_index)
        if line is None:
            return
        if delta > 0:
            self.state.composer.increment(line.id)
        else:
            self.state.composer.decrement(line.id)
        self._refresh_all()

    def action_clear_draft(self) -> None:
        if self._modal_open() or self.page != "order":
            return
        self.state.composer.clear_draft()
        self.right_index = 0
        self._refresh_all()

    def action_place_order(self) -> None:
        if self._modal_open() or self.page != "order":
            return
        order = self.state.composer.finalize()
        if order is None:
            self._set_status("Nothing to order")
            return
        self.right_index = 0
        message = f"Order #{order.short_number} placed: {format_price(order.total)}"
        self.notify(message, title="Order placed")
        self._set_status(message)

    def action_page_m(self) -> None:
        if self._modal_open():
            return
        if self.page == "deliveries":
            self._deliver_selected()
        elif self.page == "settings":
            self._confirm(
                "Clear menu",
                f"Delete all {len(self.state.menu_items)} dishes from the menu?",
                self.state.reset.clear_catalog,
                "Menu cleared",
            )

    def action_clear_orders(self) -> None:
        if self._modal_open() or self.page != "settings":
            return
        self._confirm(
            "Clear orders",
            f"Delete all {len(self.state.orders)} orders?",
            self.state.reset.clear_orders,
            "Orders cleared",
        )

    def action_reset_all(self) -> None:
        if self._modal_open() or self.page != "settings":
            return
        self._confirm(
            "Reset everything",
            "Delete the whole menu and every order?",
            self.state.reset.clear_all,
            "All data cleared",
        )

    def _confirm(self, title: str, message: str, run: Callable[[], None], done: str) -> None:
        def handle(confirmed: bool | None) -> None:
            if not confirmed:
                self._set_status("Cancelled")
                return
            run()
            self.left_index = 0
            self.system_status = done
            self._refresh_all()

        self.push_screen(ConfirmModal(title, message), handle)

    def _after_modal(self, saved: bool | None) -> None:
        if saved:
            self.system_status = "Menu saved"
        self._refresh_all()

    def _deliver_selected(self) -> None:
        if self.active_pane != "left":
            return
        order = self._selected(self.state.deliveries.list_pending(), self.left_index)
        if order is None:
            return
        delivered = self.state.deliveries.mark_delivered(order.id)
        if delivered is not None:
            self._set_status(f"Order #{delivered.short_number} delivered")

    # Rendering

    @staticmethod
    def _selected(rows: Sequence, index: int):
        if not rows:
            return None
        return rows[min(index, len(rows) - 1)]

    def _left_rows(self) -> Sequence:
        if self.page in {"menu", "order"}:
            return self.state.catalog.items()
        if self.page == "deliveries":
            return self.state.deliveries.list_pending()
        return ()

    def _right_rows(self) -> Sequence:
        if self.page == "order":
            return self.state.composer.draft()
        if self.page == "deliveries":
            return self.state.deliveries.list_delivered(limit=RECENT_DELIVERED_LIMIT)
        return ()

    def selected_order(self):
        """The order whose details the deliveries page shows."""
        if self.page != "deliveries":
            return None
        if self.active_pane == "right":
            return self._selected(self._right_rows(), self.right_index)
        return self._selected(self.state.deliveries.list_pending(), self.left_index)

    def _refresh_all(self) -> None:
        try:
            self.query_one("#tabs", Static)
        except NoMatches:
            return
        self._refresh_tabs()
        getattr(self, f"_render_{self.page}")()
        self._refresh_status()

    def _refresh_tabs(self) -> None:
        tabs = Text()
        for idx, page in enumerate(PAGES, start=1):
            style = "bold reverse" if page == self.page else "dim"
            tabs.append(f" {idx} {PAGE_TITLES[page]} ", style=style)
            tabs.append(" ")
        self.query_one("#tabs", Static).update(tabs)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        bar.update(f"{PAGE_HELP[self.page]}\n{self.system_status or 'Ready'}")

    def _show_panes(self, left_title: str, left: Text | str, right_title: str, right: Text | str) -> None:
        self.query_one("#left-title", Static).update(left_title)
        self.query_one("#left-list", Static).update(left)
        self.query_one("#right-title", Static).update(right_title)
        self.query_one("#right-list", Static).update(right)

    def _cursor_lines(self, labels: Sequence[Text], index: int, active: bool = True) -> Text:
        if index >= len(labels):
            index = max(0, len(labels) - 1)
        lines = Text()
        for idx, label in enumerate(labels):
            if idx > 0:
                lines.append("\n")
            lines.append("➤ " if active and idx == index else "  ")
            lines.append_text(label)
        return lines

    def _render_menu(self) -> None:
        items = self.state.catalog.items()
        left: Text | str = "(no dishes yet, press A to add one)"
        if items:
            left = self._cursor_lines([format_menu_item_label(item) for item in items], self.left_index)
        self._show_panes(f"Current menu ({len(items)} dishes)", left, "Help", PAGE_HELP["menu"])

    def _render_order(self) -> None:
        composer = self.state.composer
        items = composer.menu()
        left: Text | str = "(no dishes available, add some on the Menu page)"
        if items:
            left = self._cursor_lines(
                [format_menu_item_label(item) for item in items], self.left_index, self.active_pane == "left"
            )

        draft = composer.draft()
        right: Text | str = "(empty order, add dishes from the menu)"
        if draft:
            right = self._cursor_lines(
                [format_order_line(line) for line in draft], self.right_index, self.active_pane == "right"
            )
            right.append(f"\n\nTotal: {format_price(composer.total())}", style="bold")
            right.append(f"  ({composer.item_count()} items)")
        self._show_panes("Available menu", left, "Current order", right)

    def _render_deliveries(self) -> None:
        tracker = self.state.deliveries
        pending = tracker.list_pending()
        left: Text | str = "(no orders out for delivery)"
        if pending:
            left = self._cursor_lines(
                [format_order_summary(order) for order in pending], self.left_index, self.active_pane == "left"
            )

        right = Text()
        selected = self.selected_order()
        if selected is not None:
            right.append_text(format_order_detail(selected))
            right.append("\n\n")
        delivered = self._right_rows()
        total_delivered = len(tracker.list_delivered())
        right.append(f"Recently delivered ({total_delivered})", style="bold green")
        if delivered:
            right.append("\n")
            right.append_text(
                self._cursor_lines(
                    [format_order_summary(order) for order in delivered],
                    self.right_index,
                    self.active_pane == "right",
                )
            )
        self._show_panes(f"Out for delivery ({len(pending)})", left, "Details", right)

    def _render_settings(self) -> None:
        summary = self.state.reset.summary()
        left = Text()
        left.append(f"Dishes on the menu: {summary.menu_items}\n")
        left.append(f"Total orders: {summary.orders}\n")
        left.append(f"Pending: {summary.pending}\n")
        left.append(f"Delivered: {summary.delivered}")
        right = Text()
        right.append("M  clear the menu\n", style="bold")
        right.append("O  clear all orders\n", style="bold")
        right.append("R  reset everything\n", style="bold #b23a48")
        right.append("\nData is stored locally on this machine.", style="dim")
        self._show_panes("Statistics", left, "Danger zone", right)
