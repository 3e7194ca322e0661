"""Analytics, report data and CSV exports, all recomputed per request."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pandas as pd

from foh.application.dto.responses import (
    AnalyticsResponse,
    ReportDataResponse,
    ReportPeriodResponse,
    ReportRowsResponse,
    ReportSummaryResponse,
)
from foh.application.mappers.bill_mapper import to_bill_response
from foh.application.mappers.menu_mapper import to_menu_item_response
from foh.application.mappers.money_mapper import cents_response
from foh.application.mappers.order_mapper import to_order_detail_response
from foh.application.mappers.report_mapper import (
    to_item_revenue_response,
    to_profit_response,
    to_revenue_summary_response,
    to_waiter_revenue_response,
    to_waiter_statistics_response,
)
from foh.application.mappers.user_mapper import to_user_response, to_waiter_response
from foh.application.ports.repositories import (
    BillRepository,
    MenuRepository,
    OrderRepository,
    UserRepository,
    WaiterRepository,
)
from foh.domain.reporting.aggregation import (
    analyze_profit,
    filter_by_period,
    revenue_by_item,
    revenue_by_waiter,
    revenue_orders,
    summarize_revenue,
    waiter_statistics,
)

UNKNOWN_WAITER_LABEL = "Unknown Waiter"
REPORT_TYPES = ("orders", "bills", "users", "summary")

ORDER_COLUMNS = [
    "order_id",
    "created_at",
    "table_number",
    "waiter",
    "status",
    "items",
    "total_cents",
    "currency",
]
BILL_COLUMNS = ["bill_id", "created_at", "table_number", "orders", "total_cents", "currency", "status"]
USER_COLUMNS = ["user_id", "name", "email", "role", "status"]


class InvalidReportPeriodError(Exception):
    pass


class InvalidReportTypeError(Exception):
    pass


def _check_period(start: date | None, end: date | None) -> None:
    if (start is None) != (end is None):
        raise InvalidReportPeriodError("start and end must be given together")
    if start is not None and end is not None and start > end:
        raise InvalidReportPeriodError("start must not be after end")


class GetAnalytics:
    def __init__(
        self,
        order_repository: OrderRepository,
        menu_repository: MenuRepository,
        waiter_repository: WaiterRepository,
        currency: str,
    ) -> None:
        self._order_repository = order_repository
        self._menu_repository = menu_repository
        self._waiter_repository = waiter_repository
        self._currency = currency

    def execute(self, start: date | None = None, end: date | None = None) -> AnalyticsResponse:
        _check_period(start, end)
        orders = self._order_repository.list_all()
        period = None
        if start is not None and end is not None:
            orders = filter_by_period(orders, start, end)
            period = ReportPeriodResponse(start=start, end=end)

        menu_items = self._menu_repository.list_all()
        waiters = self._waiter_repository.list_all()
        earning = revenue_orders(orders)
        currency = self._currency
        return AnalyticsResponse(
            period=period,
            summary=to_revenue_summary_response(
                summarize_revenue(orders, total_menu_items=len(menu_items)),
                currency,
            ),
            revenueByWaiter=[
                to_waiter_revenue_response(row, currency)
                for row in revenue_by_waiter(earning, waiters)
            ],
            revenueByItem=[
                to_item_revenue_response(row, currency)
                for row in revenue_by_item(earning, menu_items)
            ],
            profit=to_profit_response(analyze_profit(earning, menu_items), currency),
            staff=[
                to_waiter_statistics_response(row, currency)
                for row in waiter_statistics(orders, waiters)
            ],
        )


class GetReportData:
    def __init__(
        self,
        order_repository: OrderRepository,
        bill_repository: BillRepository,
        user_repository: UserRepository,
        menu_repository: MenuRepository,
        waiter_repository: WaiterRepository,
        currency: str,
    ) -> None:
        self._order_repository = order_repository
        self._bill_repository = bill_repository
        self._user_repository = user_repository
        self._menu_repository = menu_repository
        self._waiter_repository = waiter_repository
        self._currency = currency

    def execute(self, start: date, end: date) -> ReportDataResponse:
        _check_period(start, end)
        orders = sorted(
            filter_by_period(self._order_repository.list_all(), start, end),
            key=lambda order: order.created_at,
        )
        bills = sorted(
            filter_by_period(self._bill_repository.list_all(), start, end),
            key=lambda bill: bill.created_at,
        )
        users = self._user_repository.list_all()
        menu_items = self._menu_repository.list_all()
        waiters = self._waiter_repository.list_all()

        summary = summarize_revenue(orders, total_menu_items=len(menu_items))
        waiter_names = {str(waiter.waiter_id): waiter.name for waiter in waiters}
        item_names = {str(item.item_id): item.name for item in menu_items}
        return ReportDataResponse(
            reportPeriod=ReportPeriodResponse(start=start, end=end),
            summary=ReportSummaryResponse(
                totalRevenue=cents_response(summary.total_revenue_cents, self._currency),
                totalOrders=summary.total_orders,
                servedOrders=summary.served_orders,
                cancelledOrders=summary.cancelled_orders,
                totalBills=len(bills),
                totalUsers=len(users),
                totalMenuItems=summary.total_menu_items,
            ),
            data=ReportRowsResponse(
                orders=[
                    to_order_detail_response(
                        order,
                        waiter_names,
                        item_names,
                        unknown_waiter=UNKNOWN_WAITER_LABEL,
                    )
                    for order in orders
                ],
                bills=[to_bill_response(bill) for bill in bills],
                users=[to_user_response(user) for user in users],
                menuItems=[to_menu_item_response(item) for item in menu_items],
                waiters=[to_waiter_response(waiter) for waiter in waiters],
            ),
        )


class ExportReportCsv:
    """Render one report table as CSV, one row per record."""

    def __init__(self, report_data: GetReportData) -> None:
        self._report_data = report_data

    def execute(self, report_type: str, start: date, end: date) -> str:
        if report_type not in REPORT_TYPES:
            raise InvalidReportTypeError(
                f"report type must be one of {', '.join(REPORT_TYPES)}, got {report_type!r}"
            )
        report = self._report_data.execute(start, end)
        frame = _REPORT_FRAMES[report_type](report)
        return frame.to_csv(index=False, lineterminator="\n")


def _orders_frame(report: ReportDataResponse) -> pd.DataFrame:
    rows = [
        {
            "order_id": order.orderId,
            "created_at": order.createdAt.isoformat(),
            "table_number": order.tableNumber,
            "waiter": order.waiterName,
            "status": order.status,
            "items": "; ".join(f"{item.quantity} x {item.itemName}" for item in order.items),
            "total_cents": order.total.amountCents,
            "currency": order.total.currency,
        }
        for order in report.data.orders
    ]
    return pd.DataFrame(rows, columns=ORDER_COLUMNS)


def _bills_frame(report: ReportDataResponse) -> pd.DataFrame:
    rows = [
        {
            "bill_id": bill.billId,
            "created_at": bill.createdAt.isoformat(),
            "table_number": bill.tableNumber,
            "orders": len(bill.orderIds),
            "total_cents": bill.total.amountCents,
            "currency": bill.total.currency,
            "status": bill.status,
        }
        for bill in report.data.bills
    ]
    return pd.DataFrame(rows, columns=BILL_COLUMNS)


def _users_frame(report: ReportDataResponse) -> pd.DataFrame:
    # UserResponse carries no password hash
    rows = [
        {
            "user_id": user.userId,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "status": user.status,
        }
        for user in report.data.users
    ]
    return pd.DataFrame(rows, columns=USER_COLUMNS)


def _summary_frame(report: ReportDataResponse) -> pd.DataFrame:
    summary = report.summary
    metrics = {
        "period_start": report.reportPeriod.start.isoformat(),
        "period_end": report.reportPeriod.end.isoformat(),
        "total_revenue_cents": summary.totalRevenue.amountCents,
        "currency": summary.totalRevenue.currency,
        "total_orders": summary.totalOrders,
        "served_orders": summary.servedOrders,
        "cancelled_orders": summary.cancelledOrders,
        "total_bills": summary.totalBills,
        "total_users": summary.totalUsers,
        "total_menu_items": summary.totalMenuItems,
    }
    return pd.DataFrame({"metric": list(metrics), "value": list(metrics.values())})


_REPORT_FRAMES: dict[str, Callable[[ReportDataResponse], pd.DataFrame]] = {
    "orders": _orders_frame,
    "bills": _bills_frame,
    "users": _users_frame,
    "summary": _summary_frame,
}
