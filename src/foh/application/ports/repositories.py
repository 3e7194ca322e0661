from __future__ import annotations

from typing import Protocol

from foh.domain.billing.entities import Bill
from foh.domain.common.ids import (
    BillId,
    MenuItemId,
    OrderId,
    PurchaseOrderId,
    StockItemId,
    SupplierId,
    TableId,
    UserId,
    WaiterId,
)
from foh.domain.inventory.entities import PurchaseOrder, StockItem, StockUsageLog, Supplier
from foh.domain.menu.entities import MenuItem
from foh.domain.order.entities import Order, OrderStatus
from foh.domain.table.entities import Table
from foh.domain.user.entities import User, Waiter


class UserRepository(Protocol):
    def add(self, user: User) -> None: ...

    def get(self, user_id: UserId) -> User | None: ...

    def get_by_email(self, email: str) -> User | None: ...

    def list_all(self) -> list[User]: ...

    def update(self, user: User) -> None: ...

    def delete(self, user_id: UserId) -> None: ...

    def count(self) -> int: ...


class WaiterRepository(Protocol):
    def add(self, waiter: Waiter) -> None: ...

    def get(self, waiter_id: WaiterId) -> Waiter | None: ...

    def get_by_user_id(self, user_id: UserId) -> Waiter | None: ...

    def list_all(self) -> list[Waiter]: ...

    def delete_by_user_id(self, user_id: UserId) -> None: ...

    def count(self) -> int: ...


class TableRepository(Protocol):
    def get(self, table_id: TableId) -> Table | None: ...

    def get_by_number(self, table_number: int) -> Table | None: ...

    def list_all(self) -> list[Table]: ...

    def add(self, table: Table) -> None: ...

    def update(self, table: Table) -> None: ...

    def release_if_idle(self, table_number: int, waiter_id: WaiterId) -> bool: ...

    def count(self) -> int: ...


class MenuRepository(Protocol):
    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def list_all(self) -> list[MenuItem]: ...

    def add(self, item: MenuItem) -> None: ...

    def update(self, item: MenuItem) -> None: ...

    def delete(self, item_id: MenuItemId) -> None: ...

    def count(self) -> int: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_all(self, status: OrderStatus | None = None) -> list[Order]: ...

    def list_for_table(self, table_number: int, status: OrderStatus | None = None) -> list[Order]: ...

    def update_with_version(self, order: Order, expected_version: int) -> Order: ...

    def delete(self, order_id: OrderId) -> None: ...


class BillRepository(Protocol):
    def add(self, bill: Bill) -> None: ...

    def add_with_orders(self, bill: Bill, orders: list[Order]) -> None:
        """Insert `bill` and save `orders` in one transaction.

        Each order carries the version it was read at; if any stored version
        moved on, nothing is written and OptimisticConcurrencyError is raised.
        """
        ...

    def get(self, bill_id: BillId) -> Bill | None: ...

    def list_all(self) -> list[Bill]: ...

    def update(self, bill: Bill) -> None: ...


class SupplierRepository(Protocol):
    def add(self, supplier: Supplier) -> None: ...

    def get(self, supplier_id: SupplierId) -> Supplier | None: ...

    def list_all(self) -> list[Supplier]: ...

    def update(self, supplier: Supplier) -> None: ...

    def delete(self, supplier_id: SupplierId) -> None: ...


class StockRepository(Protocol):
    def add(self, item: StockItem) -> None: ...

    def get(self, stock_item_id: StockItemId) -> StockItem | None: ...

    def get_many(self, stock_item_ids: list[StockItemId]) -> dict[str, StockItem]: ...

    def list_all(self) -> list[StockItem]: ...

    def update(self, item: StockItem) -> None: ...

    def adjust_quantity(self, stock_item_id: StockItemId, delta: float) -> None: ...

    def delete(self, stock_item_id: StockItemId) -> None: ...

    def add_usage(self, log: StockUsageLog) -> None: ...

    def list_usage(self) -> list[StockUsageLog]: ...


class PurchaseOrderRepository(Protocol):
    def add(self, purchase_order: PurchaseOrder) -> None: ...

    def get(self, purchase_order_id: PurchaseOrderId) -> PurchaseOrder | None: ...

    def list_all(self) -> list[PurchaseOrder]: ...

    def update(self, purchase_order: PurchaseOrder) -> None: ...


class OptimisticConcurrencyError(Exception):
    pass
