from __future__ import annotations

from foh.application.dto.responses import IngredientResponse, MenuItemResponse, MenuResponse
from foh.application.mappers.money_mapper import to_money_response
from foh.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        itemId=str(item.item_id),
        name=item.name,
        price=to_money_response(item.price),
        category=item.category,
        isAvailable=item.is_available,
        costOfGoods=to_money_response(item.cost_of_goods) if item.cost_of_goods else None,
        ingredients=[
            IngredientResponse(
                stockItemId=str(ingredient.stock_item_id),
                quantity=ingredient.quantity,
            )
            for ingredient in item.ingredients
        ],
        imageUrl=item.image_url,
    )


def to_menu_response(items: list[MenuItem]) -> MenuResponse:
    return MenuResponse(
        items=[to_menu_item_response(item) for item in items],
        categories=sorted({item.category for item in items}),
    )
