from __future__ import annotations

from dataclasses import dataclass, field, replace

from foh.domain.common.ids import MenuItemId, StockItemId
from foh.domain.common.money import Money


@dataclass(frozen=True)
class Ingredient:
    stock_item_id: StockItemId
    quantity: float

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("ingredient quantity must be > 0")


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: Money
    category: str
    is_available: bool
    cost_of_goods: Money | None = None
    ingredients: list[Ingredient] = field(default_factory=list)
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.category.strip():
            raise ValueError("category must be non-empty")
        if self.cost_of_goods is not None and self.cost_of_goods.currency != self.price.currency:
            raise ValueError("cost_of_goods currency must match price currency")

    @property
    def unit_cost(self) -> Money:
        # absent cost of goods is treated as free
        return self.cost_of_goods or Money.zero(self.price.currency)

    def with_availability(self, is_available: bool) -> MenuItem:
        return replace(self, is_available=is_available)
