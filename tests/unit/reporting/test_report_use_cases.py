from __future__ import annotations

import io
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from foh.application.use_cases.reports import (
    UNKNOWN_WAITER_LABEL,
    ExportReportCsv,
    GetAnalytics,
    GetReportData,
    InvalidReportPeriodError,
    InvalidReportTypeError,
)
from foh.domain.order.entities import OrderStatus

DAY = date(2026, 10, 17)


def _report_data(store) -> GetReportData:
    return GetReportData(
        order_repository=store.orders,
        bill_repository=store.bills,
        user_repository=store.users,
        menu_repository=store.menu,
        waiter_repository=store.waiters,
        currency="INR",
    )


@pytest.fixture
def restaurant(store):
    store.add_waiter("wtr_001", "Priya", "usr_w1")
    store.add_user()
    store.add_menu_item("itm_001", name='Chef\'s "Special"', cost_cents=5000)
    store.add_order("ord_1", status=OrderStatus.SERVED, lines=[("itm_001", 2, 25000)])
    store.add_order("ord_2", waiter_id="wtr_gone", status=OrderStatus.CANCELLED)
    store.add_order(
        "ord_old",
        status=OrderStatus.SERVED,
        created_at=datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc),
    )
    return store


def test_analytics_on_empty_store_is_all_zero(store) -> None:
    analytics = GetAnalytics(
        order_repository=store.orders,
        menu_repository=store.menu,
        waiter_repository=store.waiters,
        currency="INR",
    ).execute()

    assert analytics.summary.totalRevenue.amountCents == 0
    assert analytics.profit.profitMarginPercent == 0.0
    assert analytics.revenueByItem == []


def test_analytics_restricted_to_period(restaurant) -> None:
    use_case = GetAnalytics(
        order_repository=restaurant.orders,
        menu_repository=restaurant.menu,
        waiter_repository=restaurant.waiters,
        currency="INR",
    )

    everything = use_case.execute()
    today = use_case.execute(start=DAY, end=DAY)

    assert everything.summary.totalOrders == 3
    assert today.summary.totalOrders == 2
    assert today.summary.totalRevenue.amountCents == 50000
    assert today.period.start == DAY


def test_analytics_rejects_half_open_or_reversed_period(restaurant) -> None:
    use_case = GetAnalytics(
        order_repository=restaurant.orders,
        menu_repository=restaurant.menu,
        waiter_repository=restaurant.waiters,
        currency="INR",
    )
    with pytest.raises(InvalidReportPeriodError):
        use_case.execute(start=DAY)
    with pytest.raises(InvalidReportPeriodError):
        use_case.execute(start=DAY, end=date(2026, 10, 1))


def test_report_data_resolves_names_and_hides_hashes(restaurant) -> None:
    report = _report_data(restaurant).execute(DAY, DAY)

    assert report.summary.totalOrders == 2
    assert report.summary.servedOrders == 1
    assert report.summary.totalUsers == 1
    waiter_names = {row.orderId: row.waiterName for row in report.data.orders}
    assert waiter_names == {"ord_1": "Priya", "ord_2": UNKNOWN_WAITER_LABEL}
    assert "passwordHash" not in report.data.users[0].model_dump()


def test_csv_export_escapes_quotes(restaurant) -> None:
    content = ExportReportCsv(_report_data(restaurant)).execute("orders", DAY, DAY)

    assert '"2 x Chef\'s ""Special"""' in content
    frame = pd.read_csv(io.StringIO(content))
    assert list(frame.columns)[0] == "order_id"
    assert len(frame) == 2
    assert "2 x Chef's \"Special\"" in set(frame["items"])


def test_csv_summary_and_users(restaurant) -> None:
    export = ExportReportCsv(_report_data(restaurant))

    summary = pd.read_csv(io.StringIO(export.execute("summary", DAY, DAY)), dtype=str)
    users = pd.read_csv(io.StringIO(export.execute("users", DAY, DAY)))

    metrics = dict(zip(summary["metric"], summary["value"]))
    assert metrics["total_revenue_cents"] == "50000"
    assert list(users["email"]) == ["admin@foh.test"]
    assert "password" not in " ".join(users.columns)


def test_csv_empty_period_keeps_header(restaurant) -> None:
    content = ExportReportCsv(_report_data(restaurant)).execute("bills", DAY, DAY)

    assert content == "bill_id,created_at,table_number,orders,total_cents,currency,status\n"


def test_csv_rejects_unknown_report_type(restaurant) -> None:
    with pytest.raises(InvalidReportTypeError):
        ExportReportCsv(_report_data(restaurant)).execute("salaries", DAY, DAY)
