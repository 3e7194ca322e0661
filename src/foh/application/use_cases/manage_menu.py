from __future__ import annotations

from uuid import uuid4

from foh.application.dto.requests import (
    IngredientRequest,
    MenuItemAvailabilityRequest,
    MenuItemRequest,
    UpdateMenuItemRequest,
)
from foh.application.dto.responses import MenuItemResponse
from foh.application.mappers.menu_mapper import to_menu_item_response
from foh.application.ports.cache import CacheStore
from foh.application.ports.repositories import MenuRepository, StockRepository
from foh.application.use_cases.get_menu import invalidate_menu_cache
from foh.domain.common.ids import MenuItemId, StockItemId
from foh.domain.common.money import Money
from foh.domain.inventory.entities import compute_cost_of_goods
from foh.domain.menu.entities import Ingredient, MenuItem


class MenuItemNotFoundError(Exception):
    pass


class UnknownIngredientError(Exception):
    pass


class AddMenuItem:
    def __init__(self, repository: MenuRepository, cache: CacheStore, currency: str) -> None:
        self._repository = repository
        self._cache = cache
        self._currency = currency

    def execute(self, request_dto: MenuItemRequest) -> MenuItemResponse:
        item = MenuItem(
            item_id=MenuItemId(f"itm_{uuid4().hex[:12]}"),
            name=request_dto.name.strip(),
            price=Money(amount_cents=request_dto.price_cents, currency=self._currency),
            category=request_dto.category.strip(),
            is_available=request_dto.is_available,
            image_url=request_dto.image_url,
        )
        self._repository.add(item)
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(item)


class UpdateMenuItem:
    """Replace an item's editable fields.

    When ingredients are given, cost of goods is recomputed from the current
    average cost of each stock item; otherwise the stored cost is kept.
    """

    def __init__(
        self,
        repository: MenuRepository,
        stock_repository: StockRepository,
        cache: CacheStore,
    ) -> None:
        self._repository = repository
        self._stock_repository = stock_repository
        self._cache = cache

    def execute(self, item_id: MenuItemId, request_dto: UpdateMenuItemRequest) -> MenuItemResponse:
        current = self._repository.get(item_id)
        if current is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")

        price = Money(amount_cents=request_dto.price_cents, currency=current.price.currency)
        ingredients = [_to_ingredient(row) for row in request_dto.ingredients]
        cost_of_goods = current.cost_of_goods
        if ingredients:
            stock_items = self._stock_repository.get_many(
                [ingredient.stock_item_id for ingredient in ingredients]
            )
            missing = [
                str(ingredient.stock_item_id)
                for ingredient in ingredients
                if str(ingredient.stock_item_id) not in stock_items
            ]
            if missing:
                raise UnknownIngredientError(f"unknown stock items: {', '.join(missing)}")
            cost_of_goods = compute_cost_of_goods(ingredients, stock_items, price.currency)

        updated = MenuItem(
            item_id=current.item_id,
            name=request_dto.name.strip(),
            price=price,
            category=request_dto.category.strip(),
            is_available=request_dto.is_available,
            cost_of_goods=cost_of_goods,
            ingredients=ingredients or current.ingredients,
            image_url=request_dto.image_url or current.image_url,
        )
        self._repository.update(updated)
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(updated)


class SetMenuItemAvailability:
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(
        self,
        item_id: MenuItemId,
        request_dto: MenuItemAvailabilityRequest,
    ) -> MenuItemResponse:
        current = self._repository.get(item_id)
        if current is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        updated = current.with_availability(request_dto.is_available)
        self._repository.update(updated)
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(updated)


class DeleteMenuItem:
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId) -> None:
        if self._repository.get(item_id) is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        # past orders keep their snapshot and show the item as unknown
        self._repository.delete(item_id)
        invalidate_menu_cache(self._cache)


def _to_ingredient(row: IngredientRequest) -> Ingredient:
    return Ingredient(stock_item_id=StockItemId(row.stock_item_id), quantity=row.quantity)
