"""Menu item entry modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

_NAME_FIELD = "name"
_PRICE_FIELD = "price"
_MAX_NAME_LENGTH = 60
_MAX_PRICE_LENGTH = 9


class MenuItemModal(ModalScreen[bool]):
    """Prompt for a dish name and price, for both adding and editing."""

    CSS = """
    MenuItemModal {
        align: center middle;
        background: $background 60%;
    }

    #menu-item-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #menu-item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #menu-item-fields {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #menu-item-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #menu-item-help {
        color: #dddddd;
    }
    """

    def __init__(
        self,
        title: str,
        on_submit: Callable[[str, str], bool],
        name: str = "",
        price: str = "",
    ) -> None:
        super().__init__()
        self.title_text = title
        self.on_submit = on_submit
        self.values = {_NAME_FIELD: name, _PRICE_FIELD: price}
        self.field = _NAME_FIELD
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="menu-item-dialog"):
            yield Static(self.title_text, id="menu-item-title")
            yield Static(id="menu-item-fields")
            yield Static(id="menu-item-error")
            yield Static("Tab switch field. Enter save. Backspace delete. Esc cancel.", id="menu-item-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(False)
            event.stop()
            return

        if event.key in {"tab", "shift+tab", "up", "down"}:
            self.field = _PRICE_FIELD if self.field == _NAME_FIELD else _NAME_FIELD
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.values[self.field]:
                self.values[self.field] = self.values[self.field][:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self._type(event.character)
            event.stop()
            return

        # Ignore all other non-text keys while the dialog is open.
        event.stop()

    def _type(self, character: str) -> None:
        current = self.values[self.field]
        if self.field == _PRICE_FIELD:
            if not (character.isdigit() or character in ".,") or len(current) >= _MAX_PRICE_LENGTH:
                return
        elif len(current) >= _MAX_NAME_LENGTH:
            return
        self.values[self.field] = current + character
        self.error = ""
        self._refresh_content()

    def _confirm(self) -> None:
        if not self.values[_NAME_FIELD].strip():
            self.error = "Name is required."
            self.field = _NAME_FIELD
            self._refresh_content()
            return

        if not self.on_submit(self.values[_NAME_FIELD], self.values[_PRICE_FIELD]):
            self.error = "Price must be a number greater than 0."
            self.field = _PRICE_FIELD
            self._refresh_content()
            return

        self.dismiss(True)

    def _refresh_content(self) -> None:
        fields = Text()
        for idx, (field, label) in enumerate(((_NAME_FIELD, "Name "), (_PRICE_FIELD, "Price"))):
            if idx > 0:
                fields.append("\n")
            active = field == self.field
            pointer = "➤ " if active else "  "
            cursor = "|" if active else ""
            fields.append(f"{pointer}{label}: {self.values[field]}{cursor}", style="bold white" if active else "white")

        self.query_one("#menu-item-fields", Static).update(fields)
        self.query_one("#menu-item-error", Static).update(self.error or "")
