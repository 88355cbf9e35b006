"""Rendering helpers for menu items and orders."""

from __future__ import annotations

from rich.text import Text

from resto.config import CURRENCY_SYMBOL, DATE_FORMAT
from resto.models import DELIVERED, MenuItem, Order, OrderItem, parse_timestamp


def format_price(amount: float) -> str:
    return f"{amount:.2f} {CURRENCY_SYMBOL}"


def format_timestamp(value: str | None) -> str:
    """Render an ISO timestamp in local time; blank for missing values."""
    if not value:
        return ""
    return parse_timestamp(value).astimezone().strftime(DATE_FORMAT)


def status_style(status: str) -> str:
    """Return a consistent badge style for order statuses."""
    if status == DELIVERED:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #c77d1a"


def status_badge(order: Order) -> Text:
    label = "DELIVERED" if order.status == DELIVERED else "PENDING"
    return Text(f" {label} ", style=status_style(order.status))


def format_menu_item_label(item: MenuItem) -> Text:
    text = Text()
    text.append(item.name)
    text.append(f"  {format_price(item.price)}", style="dim")
    return text


def format_order_line(line: OrderItem) -> Text:
    """`Pizza  10.00 € × 2 = 20.00 €`"""
    text = Text()
    text.append(line.menu_item.name, style="bold")
    text.append(f"  {format_price(line.menu_item.price)} × {line.quantity} = ")
    text.append(format_price(line.line_total), style="bold")
    return text


def format_order_summary(order: Order) -> Text:
    """One-row order summary used in the delivery lists."""
    text = Text()
    text.append_text(status_badge(order))
    text.append(f" #{order.short_number}", style="bold")
    text.append(f"  {format_timestamp(order.created_at)}")
    text.append(f"  {order.item_count} items  {format_price(order.total)}")
    if order.delivered_at is not None:
        text.append(f"  delivered {format_timestamp(order.delivered_at)}", style="green")
    return text


def format_order_detail(order: Order) -> Text:
    text = Text()
    text.append(f"Order #{order.short_number} ", style="bold")
    text.append_text(status_badge(order))
    text.append(f"\nOrdered: {format_timestamp(order.created_at)}")
    if order.delivered_at is not None:
        text.append(f"\nDelivered: {format_timestamp(order.delivered_at)}", style="green")
    text.append("\n")
    for line in order.items:
        text.append("\n  ")
        text.append_text(format_order_line(line))
    text.append(f"\n\nTotal: {format_price(order.total)}", style="bold")
    return text
