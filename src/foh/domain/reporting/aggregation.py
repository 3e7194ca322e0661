"""Revenue and profit figures derived from order history.

Everything here is recomputed from the order list on each call. Amounts are
integer minor units taken from the price snapshot stored on each order item,
never from the current menu price.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Iterable, Protocol, Sequence, TypeVar

from foh.domain.menu.entities import MenuItem
from foh.domain.order.entities import Order, OrderStatus
from foh.domain.user.entities import Waiter

UNKNOWN_ITEM = "Unknown Item"
UNKNOWN_WAITER = "Unknown"

REVENUE_STATUSES = frozenset({OrderStatus.SERVED, OrderStatus.BILLED})


class _Timestamped(Protocol):
    @property
    def created_at(self) -> datetime: ...


T = TypeVar("T", bound=_Timestamped)


@dataclass(frozen=True)
class RevenueSummary:
    total_revenue_cents: int
    total_orders: int
    served_orders: int
    cancelled_orders: int
    total_menu_items: int


@dataclass(frozen=True)
class WaiterRevenue:
    waiter_id: str
    name: str
    revenue_cents: int


@dataclass(frozen=True)
class ItemRevenue:
    menu_item_id: str
    name: str
    quantity: int
    revenue_cents: int


@dataclass(frozen=True)
class ItemProfit:
    menu_item_id: str
    name: str
    price_cents: int
    cost_per_unit_cents: int
    profit_per_unit_cents: int
    units_sold: int
    revenue_cents: int
    cost_cents: int
    profit_cents: int


@dataclass(frozen=True)
class ProfitAnalysis:
    total_revenue_cents: int
    total_cost_cents: int
    total_profit_cents: int
    profit_margin_percent: float
    items: list[ItemProfit]


@dataclass(frozen=True)
class WaiterStatistics:
    waiter_id: str
    name: str
    orders_taken: int
    orders_served: int
    orders_cancelled: int
    revenue_cents: int


@dataclass(frozen=True)
class DailyItemCounts:
    day: date
    items_ordered: int
    items_served: int


def order_total_cents(order: Order) -> int:
    return sum(item.price.amount_cents * item.quantity for item in order.items)


def revenue_orders(orders: Iterable[Order]) -> list[Order]:
    return [order for order in orders if order.status in REVENUE_STATUSES]


def filter_by_period(records: Iterable[T], start: date, end: date) -> list[T]:
    """Keep records created between start 00:00 and end 23:59:59.999999 UTC."""
    lower = datetime.combine(start, time.min, tzinfo=timezone.utc)
    upper = datetime.combine(end, time.max, tzinfo=timezone.utc)
    kept: list[T] = []
    for record in records:
        created_at = record.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        if lower <= created_at <= upper:
            kept.append(record)
    return kept


def summarize_revenue(orders: Sequence[Order], total_menu_items: int = 0) -> RevenueSummary:
    served = revenue_orders(orders)
    return RevenueSummary(
        total_revenue_cents=sum(order_total_cents(order) for order in served),
        total_orders=len(orders),
        served_orders=len(served),
        cancelled_orders=sum(1 for order in orders if order.status == OrderStatus.CANCELLED),
        total_menu_items=total_menu_items,
    )


def revenue_by_waiter(orders: Iterable[Order], waiters: Sequence[Waiter]) -> list[WaiterRevenue]:
    revenue: dict[str, int] = defaultdict(int)
    for order in orders:
        revenue[str(order.waiter_id)] += order_total_cents(order)

    rows = [
        WaiterRevenue(
            waiter_id=str(waiter.waiter_id),
            name=waiter.name,
            revenue_cents=revenue.pop(str(waiter.waiter_id), 0),
        )
        for waiter in waiters
    ]
    rows.extend(
        WaiterRevenue(waiter_id=waiter_id, name=UNKNOWN_WAITER, revenue_cents=amount)
        for waiter_id, amount in sorted(revenue.items())
    )
    return rows


def revenue_by_item(
    orders: Iterable[Order],
    menu_items: Sequence[MenuItem],
    limit: int | None = 10,
) -> list[ItemRevenue]:
    names = {str(item.item_id): item.name for item in menu_items}
    quantities: dict[str, int] = defaultdict(int)
    revenue: dict[str, int] = defaultdict(int)
    for order in orders:
        for item in order.items:
            key = str(item.menu_item_id)
            quantities[key] += item.quantity
            revenue[key] += item.price.amount_cents * item.quantity

    ranking = sorted(
        (
            ItemRevenue(
                menu_item_id=key,
                name=names.get(key, UNKNOWN_ITEM),
                quantity=quantities[key],
                revenue_cents=amount,
            )
            for key, amount in revenue.items()
        ),
        key=lambda row: (-row.revenue_cents, row.name),
    )
    if limit is not None:
        return ranking[:limit]
    return ranking


def analyze_profit(orders: Iterable[Order], menu_items: Sequence[MenuItem]) -> ProfitAnalysis:
    catalog = {str(item.item_id): item for item in menu_items}
    units: dict[str, int] = defaultdict(int)
    revenue: dict[str, int] = defaultdict(int)
    for order in orders:
        for item in order.items:
            key = str(item.menu_item_id)
            units[key] += item.quantity
            revenue[key] += item.price.amount_cents * item.quantity

    rows: list[ItemProfit] = []
    for key in list(catalog) + [key for key in units if key not in catalog]:
        menu_item = catalog.get(key)
        price_cents = menu_item.price.amount_cents if menu_item else 0
        cost_per_unit = menu_item.unit_cost.amount_cents if menu_item else 0
        sold = units.get(key, 0)
        item_revenue = revenue.get(key, 0)
        item_cost = cost_per_unit * sold
        rows.append(
            ItemProfit(
                menu_item_id=key,
                name=menu_item.name if menu_item else UNKNOWN_ITEM,
                price_cents=price_cents,
                cost_per_unit_cents=cost_per_unit,
                profit_per_unit_cents=price_cents - cost_per_unit,
                units_sold=sold,
                revenue_cents=item_revenue,
                cost_cents=item_cost,
                profit_cents=item_revenue - item_cost,
            )
        )
    rows.sort(key=lambda row: (-row.profit_cents, row.name))

    total_revenue = sum(row.revenue_cents for row in rows)
    total_cost = sum(row.cost_cents for row in rows)
    total_profit = total_revenue - total_cost
    margin = (total_profit / total_revenue) * 100 if total_revenue > 0 else 0.0
    return ProfitAnalysis(
        total_revenue_cents=total_revenue,
        total_cost_cents=total_cost,
        total_profit_cents=total_profit,
        profit_margin_percent=round(margin, 2),
        items=rows,
    )


def waiter_statistics(orders: Iterable[Order], waiters: Sequence[Waiter]) -> list[WaiterStatistics]:
    taken: dict[str, int] = defaultdict(int)
    served: dict[str, int] = defaultdict(int)
    cancelled: dict[str, int] = defaultdict(int)
    revenue: dict[str, int] = defaultdict(int)
    for order in orders:
        key = str(order.waiter_id)
        taken[key] += 1
        if order.status in REVENUE_STATUSES:
            served[key] += 1
            revenue[key] += order_total_cents(order)
        elif order.status == OrderStatus.CANCELLED:
            cancelled[key] += 1

    names = {str(waiter.waiter_id): waiter.name for waiter in waiters}
    keys = list(names) + sorted(key for key in taken if key not in names)
    return [
        WaiterStatistics(
            waiter_id=key,
            name=names.get(key, UNKNOWN_WAITER),
            orders_taken=taken.get(key, 0),
            orders_served=served.get(key, 0),
            orders_cancelled=cancelled.get(key, 0),
            revenue_cents=revenue.get(key, 0),
        )
        for key in keys
    ]


def daily_item_counts(orders: Iterable[Order], day: date) -> DailyItemCounts:
    ordered = 0
    served = 0
    for order in filter_by_period(orders, day, day):
        count = sum(item.quantity for item in order.items)
        ordered += count
        if order.status in REVENUE_STATUSES:
            served += count
    return DailyItemCounts(day=day, items_ordered=ordered, items_served=served)
