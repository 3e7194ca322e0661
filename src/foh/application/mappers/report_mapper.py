from __future__ import annotations

from foh.application.dto.responses import (
    DailyItemCountsResponse,
    ItemProfitResponse,
    ItemRevenueResponse,
    ProfitAnalysisResponse,
    RevenueSummaryResponse,
    WaiterRevenueResponse,
    WaiterStatisticsResponse,
)
from foh.application.mappers.money_mapper import cents_response
from foh.domain.reporting.aggregation import (
    DailyItemCounts,
    ItemRevenue,
    ProfitAnalysis,
    RevenueSummary,
    WaiterRevenue,
    WaiterStatistics,
)


def to_revenue_summary_response(summary: RevenueSummary, currency: str) -> RevenueSummaryResponse:
    return RevenueSummaryResponse(
        totalRevenue=cents_response(summary.total_revenue_cents, currency),
        totalOrders=summary.total_orders,
        servedOrders=summary.served_orders,
        cancelledOrders=summary.cancelled_orders,
        totalMenuItems=summary.total_menu_items,
    )


def to_waiter_revenue_response(row: WaiterRevenue, currency: str) -> WaiterRevenueResponse:
    return WaiterRevenueResponse(
        waiterId=row.waiter_id,
        name=row.name,
        revenue=cents_response(row.revenue_cents, currency),
    )


def to_item_revenue_response(row: ItemRevenue, currency: str) -> ItemRevenueResponse:
    return ItemRevenueResponse(
        menuItemId=row.menu_item_id,
        name=row.name,
        quantity=row.quantity,
        revenue=cents_response(row.revenue_cents, currency),
    )


def to_profit_response(analysis: ProfitAnalysis, currency: str) -> ProfitAnalysisResponse:
    return ProfitAnalysisResponse(
        currency=currency,
        totalRevenueCents=analysis.total_revenue_cents,
        totalCostCents=analysis.total_cost_cents,
        totalProfitCents=analysis.total_profit_cents,
        profitMarginPercent=analysis.profit_margin_percent,
        items=[
            ItemProfitResponse(
                menuItemId=row.menu_item_id,
                name=row.name,
                priceCents=row.price_cents,
                costPerUnitCents=row.cost_per_unit_cents,
                profitPerUnitCents=row.profit_per_unit_cents,
                unitsSold=row.units_sold,
                revenueCents=row.revenue_cents,
                costCents=row.cost_cents,
                profitCents=row.profit_cents,
            )
            for row in analysis.items
        ],
    )


def to_waiter_statistics_response(row: WaiterStatistics, currency: str) -> WaiterStatisticsResponse:
    return WaiterStatisticsResponse(
        waiterId=row.waiter_id,
        name=row.name,
        ordersTaken=row.orders_taken,
        ordersServed=row.orders_served,
        ordersCancelled=row.orders_cancelled,
        revenue=cents_response(row.revenue_cents, currency),
    )


def to_daily_item_counts_response(counts: DailyItemCounts) -> DailyItemCountsResponse:
    return DailyItemCountsResponse(
        day=counts.day,
        itemsOrdered=counts.items_ordered,
        itemsServed=counts.items_served,
    )
