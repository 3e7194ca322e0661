from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from foh.application.dto.requests import (
    IngredientRequest,
    MenuItemAvailabilityRequest,
    MenuItemRequest,
    UpdateMenuItemRequest,
)
from foh.application.use_cases.get_menu import MENU_CACHE_KEY, GetMenu
from foh.application.use_cases.manage_menu import (
    AddMenuItem,
    DeleteMenuItem,
    MenuItemNotFoundError,
    SetMenuItemAvailability,
    UnknownIngredientError,
    UpdateMenuItem,
)
from foh.domain.common.ids import MenuItemId


class BrokenCache:
    def get(self, key: str) -> str | None:
        raise ConnectionError("cache down")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("cache down")

    def delete(self, key: str) -> None:
        raise ConnectionError("cache down")


def test_menu_is_grouped_and_cached(store) -> None:
    store.add_menu_item("itm_002", name="Mango Lassi", category="Drinks", price_cents=9000)
    store.add_menu_item("itm_001", name="Paneer Tikka", category="Starters")

    menu = GetMenu(repository=store.menu, cache=store.cache).execute()

    assert menu.categories == ["Drinks", "Starters"]
    assert [item.name for item in menu.items] == ["Mango Lassi", "Paneer Tikka"]
    assert MENU_CACHE_KEY in store.cache.values


def test_cached_menu_is_served_without_repository(store) -> None:
    store.add_menu_item("itm_001")
    GetMenu(repository=store.menu, cache=store.cache).execute()
    store.menu.items.clear()

    menu = GetMenu(repository=store.menu, cache=store.cache).execute()

    assert len(menu.items) == 1


def test_available_only_filters_menu(store) -> None:
    store.add_menu_item("itm_001", is_available=False)
    store.add_menu_item("itm_002", name="Dal Makhani", category="Mains")

    menu = GetMenu(repository=store.menu, cache=store.cache).execute(available_only=True)

    assert [item.itemId for item in menu.items] == ["itm_002"]
    assert menu.categories == ["Mains"]


def test_broken_cache_falls_back_to_repository(store) -> None:
    store.add_menu_item("itm_001")

    menu = GetMenu(repository=store.menu, cache=BrokenCache()).execute()

    assert len(menu.items) == 1


def test_writes_invalidate_cache(store) -> None:
    store.add_menu_item("itm_001")
    GetMenu(repository=store.menu, cache=store.cache).execute()

    added = AddMenuItem(repository=store.menu, cache=store.cache, currency="INR").execute(
        MenuItemRequest(name="Gulab Jamun", category="Desserts", priceCents=8000)
    )

    assert MENU_CACHE_KEY not in store.cache.values
    assert added.itemId.startswith("itm_")
    assert added.price.currency == "INR"


def test_update_recomputes_cost_of_goods_from_stock(store) -> None:
    store.add_menu_item("itm_001", cost_cents=1000)
    store.add_stock_item("stk_001", average_cost_cents=40000)
    store.add_stock_item("stk_002", name="Spices", average_cost_cents=2000)

    updated = UpdateMenuItem(repository=store.menu, stock_repository=store.stock, cache=store.cache).execute(
        MenuItemId("itm_001"),
        UpdateMenuItemRequest(
            name="Paneer Tikka",
            category="Starters",
            priceCents=26000,
            ingredients=[
                IngredientRequest(stockItemId="stk_001", quantity=0.2),
                IngredientRequest(stockItemId="stk_002", quantity=0.5),
            ],
        ),
    )

    assert updated.costOfGoods.amountCents == 9000
    assert updated.price.amountCents == 26000
    assert len(updated.ingredients) == 2


def test_update_without_ingredients_keeps_cost(store) -> None:
    store.add_menu_item("itm_001", cost_cents=1000)

    updated = UpdateMenuItem(repository=store.menu, stock_repository=store.stock, cache=store.cache).execute(
        MenuItemId("itm_001"),
        UpdateMenuItemRequest(name="Paneer Tikka", category="Starters", priceCents=26000),
    )

    assert updated.costOfGoods.amountCents == 1000


def test_update_rejects_unknown_ingredient(store) -> None:
    store.add_menu_item("itm_001")

    with pytest.raises(UnknownIngredientError):
        UpdateMenuItem(repository=store.menu, stock_repository=store.stock, cache=store.cache).execute(
            MenuItemId("itm_001"),
            UpdateMenuItemRequest(
                name="Paneer Tikka",
                category="Starters",
                priceCents=26000,
                ingredients=[IngredientRequest(stockItemId="stk_404", quantity=1)],
            ),
        )


def test_toggle_availability_and_delete(store) -> None:
    store.add_menu_item("itm_001")

    toggled = SetMenuItemAvailability(repository=store.menu, cache=store.cache).execute(
        MenuItemId("itm_001"),
        MenuItemAvailabilityRequest(isAvailable=False),
    )
    assert toggled.isAvailable is False

    DeleteMenuItem(repository=store.menu, cache=store.cache).execute(MenuItemId("itm_001"))
    assert store.menu.count() == 0

    with pytest.raises(MenuItemNotFoundError):
        DeleteMenuItem(repository=store.menu, cache=store.cache).execute(MenuItemId("itm_001"))
