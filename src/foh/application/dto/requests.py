from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from foh.domain.inventory.entities import PurchaseStatus, StockUnit, UsageCategory
from foh.domain.order.entities import CANCELLATION_REASON_MIN_LENGTH
from foh.domain.user.entities import Role, UserStatus


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


CancellationReason = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=CANCELLATION_REASON_MIN_LENGTH),
]


class OrderItemRequest(CamelBaseModel):
    menu_item_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class CreateOrderRequest(CamelBaseModel):
    table_id: str = Field(min_length=1)
    items: list[OrderItemRequest] = Field(min_length=1)
    waiter_id: str | None = None


class UpdateOrderItemsRequest(CamelBaseModel):
    items: list[OrderItemRequest] = Field(min_length=1)


class UpdateOrderStatusRequest(CamelBaseModel):
    status: str = Field(min_length=1)


class CancelOrderRequest(CamelBaseModel):
    reason: CancellationReason


class LoginRequest(CamelBaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class RegisterUserRequest(CamelBaseModel):
    name: str = Field(min_length=2)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)
    role: Role


class UpdateUserStatusRequest(CamelBaseModel):
    status: UserStatus


class IngredientRequest(CamelBaseModel):
    stock_item_id: str = Field(min_length=1)
    quantity: float = Field(gt=0)


class MenuItemRequest(CamelBaseModel):
    name: str = Field(min_length=3)
    category: str = Field(min_length=3)
    price_cents: int = Field(gt=0)
    image_url: str | None = None
    is_available: bool = True


class UpdateMenuItemRequest(MenuItemRequest):
    ingredients: list[IngredientRequest] = Field(default_factory=list)


class MenuItemAvailabilityRequest(CamelBaseModel):
    is_available: bool


class CreateBillRequest(CamelBaseModel):
    table_number: int = Field(ge=1)


class SupplierRequest(CamelBaseModel):
    name: str = Field(min_length=2)
    phone: str = Field(min_length=10)
    contact_person: str | None = None
    email: str | None = None


class StockItemRequest(CamelBaseModel):
    name: str = Field(min_length=2)
    unit: StockUnit
    quantity_in_stock: float = Field(ge=0)
    low_stock_threshold: float = Field(ge=0)
    average_cost_per_unit_cents: int = Field(ge=0)


class StockUsageRequest(CamelBaseModel):
    stock_item_id: str = Field(min_length=1)
    quantity_used: float = Field(gt=0)
    category: UsageCategory
    notes: str | None = None


class PurchaseOrderLineRequest(CamelBaseModel):
    stock_item_id: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    cost_per_unit_cents: int = Field(ge=0)


class PurchaseOrderRequest(CamelBaseModel):
    supplier_id: str = Field(min_length=1)
    lines: list[PurchaseOrderLineRequest] = Field(min_length=1)


class PurchaseOrderStatusRequest(CamelBaseModel):
    status: PurchaseStatus
