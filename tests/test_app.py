"""Smoke tests driving the Textual app headlessly."""

from __future__ import annotations

import pytest

from resto.restaurant_app import RestaurantApp
from resto.state import AppState


@pytest.mark.asyncio
async def test_app_takes_and_delivers_an_order():
    state = AppState.in_memory()
    state.catalog.add("Pizza", 10)
    app = RestaurantApp(state)

    async with app.run_test() as pilot:
        assert app.page == "menu"

        await pilot.press("2", "enter", "enter")
        await pilot.pause()
        assert state.composer.total() == 20.0

        await pilot.press("ctrl+s")
        await pilot.pause()
        assert len(state.deliveries.list_pending()) == 1
        assert state.deliveries.list_pending()[0].total == 20.0

        await pilot.press("3", "m")
        await pilot.pause()
        assert state.deliveries.list_pending() == []
        assert len(state.deliveries.list_delivered()) == 1


@pytest.mark.asyncio
async def test_app_reset_requires_confirmation():
    state = AppState.in_memory()
    state.catalog.add("Pizza", 10)
    app = RestaurantApp(state)

    async with app.run_test() as pilot:
        await pilot.press("4", "m", "n")
        await pilot.pause()
        assert len(state.catalog) == 1

        await pilot.press("m", "y")
        await pilot.pause()
        assert len(state.catalog) == 0


@pytest.mark.asyncio
async def test_app_shows_details_of_delivered_orders():
    state = AppState.in_memory()
    pizza = state.catalog.add("Pizza", 10)
    state.composer.add_to_draft(pizza)
    delivered = state.deliveries.mark_delivered(state.composer.finalize().id)
    state.composer.add_to_draft(pizza)
    state.composer.add_to_draft(pizza)
    pending = state.composer.finalize()
    app = RestaurantApp(state)

    async with app.run_test() as pilot:
        await pilot.press("3")
        await pilot.pause()
        assert app.selected_order() == pending

        await pilot.press("right")
        await pilot.pause()
        assert app.active_pane == "right"
        assert app.selected_order() == delivered

        await pilot.press("m", "enter")
        await pilot.pause()
        assert state.deliveries.list_pending() == [pending]

        await pilot.press("left")
        await pilot.pause()
        assert app.selected_order() == pending
