from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from foh.domain.common.ids import PurchaseOrderId, StockItemId, StockUsageLogId, SupplierId
from foh.domain.common.money import Money
from foh.domain.menu.entities import Ingredient


class StockUnit(str, Enum):
    KG = "kg"
    G = "g"
    L = "l"
    ML = "ml"
    PIECE = "piece"


class PurchaseStatus(str, Enum):
    ORDERED = "ordered"
    RECEIVED = "received"
    CANCELLED = "cancelled"


class UsageCategory(str, Enum):
    KITCHEN_PREP = "kitchen_prep"
    SPILLAGE = "spillage"
    STAFF_MEAL = "staff_meal"
    OTHER = "other"


@dataclass(frozen=True)
class Supplier:
    supplier_id: SupplierId
    name: str
    phone: str
    contact_person: str | None = None
    email: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")


@dataclass(frozen=True)
class StockItem:
    stock_item_id: StockItemId
    name: str
    unit: StockUnit
    quantity_in_stock: float
    low_stock_threshold: float
    average_cost_per_unit: Money

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.low_stock_threshold < 0:
            raise ValueError("low_stock_threshold must be >= 0")

    @property
    def is_low(self) -> bool:
        return self.quantity_in_stock <= self.low_stock_threshold

    def receive(self, quantity: float, cost_per_unit: Money) -> StockItem:
        """Add delivered stock and fold its cost into a weighted average."""
        if quantity <= 0:
            raise ValueError("received quantity must be > 0")
        new_quantity = self.quantity_in_stock + quantity
        current_value = max(self.quantity_in_stock, 0.0) * self.average_cost_per_unit.amount_cents
        purchase_value = quantity * cost_per_unit.amount_cents
        if new_quantity > 0:
            average_cents = round((current_value + purchase_value) / new_quantity)
        else:
            average_cents = cost_per_unit.amount_cents
        return replace(
            self,
            quantity_in_stock=new_quantity,
            average_cost_per_unit=Money(
                amount_cents=average_cents,
                currency=self.average_cost_per_unit.currency,
            ),
        )


@dataclass(frozen=True)
class PurchaseOrderLine:
    stock_item_id: StockItemId
    quantity: float
    cost_per_unit: Money

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")


@dataclass(frozen=True)
class PurchaseOrder:
    purchase_order_id: PurchaseOrderId
    supplier_id: SupplierId
    lines: list[PurchaseOrderLine]
    status: PurchaseStatus
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("purchase order must contain at least one line")

    @property
    def total_cost(self) -> Money:
        total = Money.zero(self.lines[0].cost_per_unit.currency)
        for line in self.lines:
            total = total + line.cost_per_unit.times(line.quantity)
        return total

    def receive(self) -> PurchaseOrder:
        if self.status != PurchaseStatus.ORDERED:
            raise PurchaseOrderStateError(
                f"cannot receive purchase order in status={self.status.value}"
            )
        return replace(self, status=PurchaseStatus.RECEIVED)

    def cancel(self) -> PurchaseOrder:
        if self.status != PurchaseStatus.ORDERED:
            raise PurchaseOrderStateError(
                f"cannot cancel purchase order in status={self.status.value}"
            )
        return replace(self, status=PurchaseStatus.CANCELLED)


@dataclass(frozen=True)
class StockUsageLog:
    log_id: StockUsageLogId
    stock_item_id: StockItemId
    quantity_used: float
    category: UsageCategory
    notes: str | None
    created_at: datetime

    def __post_init__(self) -> None:
        if self.quantity_used <= 0:
            raise ValueError("quantity_used must be > 0")


def compute_cost_of_goods(
    ingredients: list[Ingredient],
    stock_items: dict[str, StockItem],
    currency: str,
) -> Money:
    """Sum ingredient quantity times average unit cost; unknown stock items cost nothing."""
    total_cents = 0.0
    for ingredient in ingredients:
        stock_item = stock_items.get(str(ingredient.stock_item_id))
        if stock_item is None:
            continue
        total_cents += stock_item.average_cost_per_unit.amount_cents * ingredient.quantity
    return Money(amount_cents=round(total_cents), currency=currency)


class PurchaseOrderStateError(Exception):
    pass
