from __future__ import annotations

from typing import NewType

UserId = NewType("UserId", str)
WaiterId = NewType("WaiterId", str)
TableId = NewType("TableId", str)
MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
BillId = NewType("BillId", str)
SupplierId = NewType("SupplierId", str)
StockItemId = NewType("StockItemId", str)
PurchaseOrderId = NewType("PurchaseOrderId", str)
StockUsageLogId = NewType("StockUsageLogId", str)
