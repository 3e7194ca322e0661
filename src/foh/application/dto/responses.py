from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amountCents: int
    currency: str


class OrderItemResponse(BaseModel):
    menuItemId: str
    quantity: int
    price: MoneyResponse
    lineTotal: MoneyResponse


class OrderResponse(BaseModel):
    orderId: str
    tableNumber: int
    waiterId: str
    status: str
    items: list[OrderItemResponse] = Field(default_factory=list)
    total: MoneyResponse
    createdAt: datetime
    cancellationReason: str | None = None
    version: int


class OrderDetailItemResponse(BaseModel):
    menuItemId: str
    itemName: str
    quantity: int
    price: MoneyResponse


class OrderDetailResponse(BaseModel):
    orderId: str
    tableNumber: int
    waiterId: str
    waiterName: str
    status: str
    items: list[OrderDetailItemResponse] = Field(default_factory=list)
    total: MoneyResponse
    createdAt: datetime
    cancellationReason: str | None = None


class TableResponse(BaseModel):
    tableId: str
    tableNumber: int
    status: str
    waiterId: str | None = None
    waiterName: str | None = None


class IngredientResponse(BaseModel):
    stockItemId: str
    quantity: float


class MenuItemResponse(BaseModel):
    itemId: str
    name: str
    price: MoneyResponse
    category: str
    isAvailable: bool
    costOfGoods: MoneyResponse | None = None
    ingredients: list[IngredientResponse] = Field(default_factory=list)
    imageUrl: str | None = None


class MenuResponse(BaseModel):
    items: list[MenuItemResponse] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class UserResponse(BaseModel):
    userId: str
    name: str
    email: str
    role: str
    status: str


class WaiterResponse(BaseModel):
    waiterId: str
    name: str
    userId: str | None = None


class SessionResponse(BaseModel):
    user: UserResponse
    expiresAt: datetime


class RegisterUserResponse(BaseModel):
    user: UserResponse
    pending: bool


class BillResponse(BaseModel):
    billId: str
    tableNumber: int
    orderIds: list[str] = Field(default_factory=list)
    waiterId: str | None = None
    subtotal: MoneyResponse
    tax: MoneyResponse
    total: MoneyResponse
    status: str
    createdAt: datetime


class SupplierResponse(BaseModel):
    supplierId: str
    name: str
    phone: str
    contactPerson: str | None = None
    email: str | None = None


class StockItemResponse(BaseModel):
    stockItemId: str
    name: str
    unit: str
    quantityInStock: float
    lowStockThreshold: float
    averageCostPerUnit: MoneyResponse
    isLow: bool


class StockUsageResponse(BaseModel):
    logId: str
    stockItemId: str
    quantityUsed: float
    category: str
    notes: str | None = None
    createdAt: datetime


class PurchaseOrderLineResponse(BaseModel):
    stockItemId: str
    quantity: float
    costPerUnit: MoneyResponse


class PurchaseOrderResponse(BaseModel):
    purchaseOrderId: str
    supplierId: str
    lines: list[PurchaseOrderLineResponse] = Field(default_factory=list)
    status: str
    totalCost: MoneyResponse
    createdAt: datetime


class RevenueSummaryResponse(BaseModel):
    totalRevenue: MoneyResponse
    totalOrders: int
    servedOrders: int
    cancelledOrders: int
    totalMenuItems: int


class WaiterRevenueResponse(BaseModel):
    waiterId: str
    name: str
    revenue: MoneyResponse


class ItemRevenueResponse(BaseModel):
    menuItemId: str
    name: str
    quantity: int
    revenue: MoneyResponse


class ItemProfitResponse(BaseModel):
    menuItemId: str
    name: str
    priceCents: int
    costPerUnitCents: int
    profitPerUnitCents: int
    unitsSold: int
    revenueCents: int
    costCents: int
    profitCents: int


class ProfitAnalysisResponse(BaseModel):
    currency: str
    totalRevenueCents: int
    totalCostCents: int
    totalProfitCents: int
    profitMarginPercent: float
    items: list[ItemProfitResponse] = Field(default_factory=list)


class WaiterStatisticsResponse(BaseModel):
    waiterId: str
    name: str
    ordersTaken: int
    ordersServed: int
    ordersCancelled: int
    revenue: MoneyResponse


class ReportPeriodResponse(BaseModel):
    start: date
    end: date


class AnalyticsResponse(BaseModel):
    period: ReportPeriodResponse | None = None
    summary: RevenueSummaryResponse
    revenueByWaiter: list[WaiterRevenueResponse] = Field(default_factory=list)
    revenueByItem: list[ItemRevenueResponse] = Field(default_factory=list)
    profit: ProfitAnalysisResponse
    staff: list[WaiterStatisticsResponse] = Field(default_factory=list)


class ReportSummaryResponse(BaseModel):
    totalRevenue: MoneyResponse
    totalOrders: int
    servedOrders: int
    cancelledOrders: int
    totalBills: int
    totalUsers: int
    totalMenuItems: int


class ReportRowsResponse(BaseModel):
    orders: list[OrderDetailResponse] = Field(default_factory=list)
    bills: list[BillResponse] = Field(default_factory=list)
    users: list[UserResponse] = Field(default_factory=list)
    menuItems: list[MenuItemResponse] = Field(default_factory=list)
    waiters: list[WaiterResponse] = Field(default_factory=list)


class ReportDataResponse(BaseModel):
    reportPeriod: ReportPeriodResponse
    summary: ReportSummaryResponse
    data: ReportRowsResponse


class DailyItemCountsResponse(BaseModel):
    day: date
    itemsOrdered: int
    itemsServed: int


class WaiterDashboardResponse(BaseModel):
    waiter: WaiterResponse | None = None
    activeOrders: list[OrderDetailResponse] = Field(default_factory=list)
    servedOrders: list[OrderDetailResponse] = Field(default_factory=list)
    tables: list[TableResponse] = Field(default_factory=list)
    menu: list[MenuItemResponse] = Field(default_factory=list)


class KitchenDashboardResponse(BaseModel):
    orders: list[OrderDetailResponse] = Field(default_factory=list)


class ManagerDashboardResponse(BaseModel):
    pendingOrders: list[OrderDetailResponse] = Field(default_factory=list)
    approvedOrders: list[OrderDetailResponse] = Field(default_factory=list)
    preparedOrders: list[OrderDetailResponse] = Field(default_factory=list)
    today: DailyItemCountsResponse
    tables: list[TableResponse] = Field(default_factory=list)
    menu: list[MenuItemResponse] = Field(default_factory=list)


class AdminDashboardResponse(BaseModel):
    analytics: AnalyticsResponse
    users: list[UserResponse] = Field(default_factory=list)
    servedOrders: list[OrderDetailResponse] = Field(default_factory=list)
    cancelledOrders: list[OrderDetailResponse] = Field(default_factory=list)
    tables: list[TableResponse] = Field(default_factory=list)


class UploadResponse(BaseModel):
    url: str
