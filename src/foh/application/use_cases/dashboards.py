from __future__ import annotations

from datetime import datetime, timezone

from foh.application.dto.responses import (
    AdminDashboardResponse,
    KitchenDashboardResponse,
    ManagerDashboardResponse,
    MenuItemResponse,
    OrderDetailResponse,
    TableResponse,
    WaiterDashboardResponse,
)
from foh.application.mappers.menu_mapper import to_menu_item_response
from foh.application.mappers.order_mapper import to_order_detail_response
from foh.application.mappers.report_mapper import to_daily_item_counts_response
from foh.application.mappers.table_mapper import to_table_response
from foh.application.mappers.user_mapper import to_user_response, to_waiter_response
from foh.application.ports.repositories import (
    MenuRepository,
    OrderRepository,
    TableRepository,
    UserRepository,
    WaiterRepository,
)
from foh.application.use_cases.reports import GetAnalytics
from foh.domain.common.ids import UserId
from foh.domain.order.entities import ACTIVE_STATUSES, Order, OrderStatus
from foh.domain.reporting.aggregation import REVENUE_STATUSES, daily_item_counts
from foh.domain.table.entities import TableStatus


class _DashboardReader:
    def __init__(
        self,
        order_repository: OrderRepository,
        table_repository: TableRepository,
        waiter_repository: WaiterRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._order_repository = order_repository
        self._table_repository = table_repository
        self._waiter_repository = waiter_repository
        self._menu_repository = menu_repository

    def _names(self) -> tuple[dict[str, str], dict[str, str]]:
        waiter_names = {
            str(waiter.waiter_id): waiter.name for waiter in self._waiter_repository.list_all()
        }
        item_names = {str(item.item_id): item.name for item in self._menu_repository.list_all()}
        return waiter_names, item_names

    def _details(
        self,
        orders: list[Order],
        names: tuple[dict[str, str], dict[str, str]],
        newest_first: bool = False,
    ) -> list[OrderDetailResponse]:
        ordered = sorted(orders, key=lambda order: order.created_at, reverse=newest_first)
        waiter_names, item_names = names
        return [to_order_detail_response(order, waiter_names, item_names) for order in ordered]

    def _tables(self, waiter_names: dict[str, str]) -> list[TableResponse]:
        tables = sorted(self._table_repository.list_all(), key=lambda table: table.table_number)
        return [to_table_response(table, waiter_names) for table in tables]

    def _available_menu(self) -> list[MenuItemResponse]:
        items = sorted(
            (item for item in self._menu_repository.list_all() if item.is_available),
            key=lambda item: (item.category, item.name),
        )
        return [to_menu_item_response(item) for item in items]


class GetWaiterDashboard(_DashboardReader):
    """Orders, tables and menu for one waiter.

    A user without a waiter profile (an admin looking over the floor) sees
    every waiter's orders and every table.
    """

    def execute(self, user_id: str) -> WaiterDashboardResponse:
        waiter = self._waiter_repository.get_by_user_id(UserId(user_id))
        names = self._names()
        orders = self._order_repository.list_all()
        if waiter is not None:
            orders = [order for order in orders if order.waiter_id == waiter.waiter_id]

        tables = self._tables(names[0])
        if waiter is not None:
            tables = [
                table
                for table in tables
                if table.status == TableStatus.AVAILABLE.value
                or table.waiterId == str(waiter.waiter_id)
            ]

        return WaiterDashboardResponse(
            waiter=to_waiter_response(waiter) if waiter is not None else None,
            activeOrders=self._details([o for o in orders if o.is_active], names),
            servedOrders=self._details(
                [o for o in orders if o.status in REVENUE_STATUSES],
                names,
                newest_first=True,
            ),
            tables=tables,
            menu=self._available_menu(),
        )


class GetKitchenDashboard(_DashboardReader):
    def execute(self) -> KitchenDashboardResponse:
        approved = self._order_repository.list_all(status=OrderStatus.APPROVED)
        return KitchenDashboardResponse(orders=self._details(approved, self._names()))


class GetManagerDashboard(_DashboardReader):
    def execute(self) -> ManagerDashboardResponse:
        names = self._names()
        orders = self._order_repository.list_all()
        active = [order for order in orders if order.status in ACTIVE_STATUSES]

        def with_status(status: OrderStatus) -> list[OrderDetailResponse]:
            return self._details([order for order in active if order.status == status], names)

        today = datetime.now(timezone.utc).date()
        return ManagerDashboardResponse(
            pendingOrders=with_status(OrderStatus.PENDING),
            approvedOrders=with_status(OrderStatus.APPROVED),
            preparedOrders=with_status(OrderStatus.PREPARED),
            today=to_daily_item_counts_response(daily_item_counts(orders, today)),
            tables=self._tables(names[0]),
            menu=self._available_menu(),
        )


class GetAdminDashboard(_DashboardReader):
    def __init__(
        self,
        order_repository: OrderRepository,
        table_repository: TableRepository,
        waiter_repository: WaiterRepository,
        menu_repository: MenuRepository,
        user_repository: UserRepository,
        analytics: GetAnalytics,
    ) -> None:
        super().__init__(order_repository, table_repository, waiter_repository, menu_repository)
        self._user_repository = user_repository
        self._analytics = analytics

    def execute(self) -> AdminDashboardResponse:
        names = self._names()
        orders = self._order_repository.list_all()
        users = sorted(self._user_repository.list_all(), key=lambda user: user.email)
        return AdminDashboardResponse(
            analytics=self._analytics.execute(),
            users=[to_user_response(user) for user in users],
            servedOrders=self._details(
                [order for order in orders if order.status in REVENUE_STATUSES],
                names,
                newest_first=True,
            ),
            cancelledOrders=self._details(
                [order for order in orders if order.status == OrderStatus.CANCELLED],
                names,
                newest_first=True,
            ),
            tables=self._tables(names[0]),
        )
