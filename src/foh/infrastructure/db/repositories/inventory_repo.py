from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from foh.application.ports.repositories import (
    PurchaseOrderRepository,
    StockRepository,
    SupplierRepository,
)
from foh.domain.common.ids import PurchaseOrderId, StockItemId, StockUsageLogId, SupplierId
from foh.domain.common.money import Money
from foh.domain.inventory.entities import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseStatus,
    StockItem,
    StockUnit,
    StockUsageLog,
    Supplier,
    UsageCategory,
)
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.models.inventory import (
    PurchaseOrderModel,
    StockItemModel,
    StockUsageLogModel,
    SupplierModel,
)
from foh.infrastructure.db.repositories.common import ensure_utc


class SqlAlchemySupplierRepository(SupplierRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, supplier: Supplier) -> None:
        with Session(self._database.engine) as session:
            session.add(SupplierModel(id=str(supplier.supplier_id), **_supplier_values(supplier)))
            session.commit()

    def get(self, supplier_id: SupplierId) -> Supplier | None:
        with Session(self._database.engine) as session:
            model = session.get(SupplierModel, str(supplier_id))
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[Supplier]:
        statement = select(SupplierModel).order_by(SupplierModel.name)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def update(self, supplier: Supplier) -> None:
        statement = (
            update(SupplierModel)
            .where(SupplierModel.id == str(supplier.supplier_id))
            .values(**_supplier_values(supplier))
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def delete(self, supplier_id: SupplierId) -> None:
        with Session(self._database.engine) as session:
            session.execute(delete(SupplierModel).where(SupplierModel.id == str(supplier_id)))
            session.commit()

    def _to_domain(self, model: SupplierModel) -> Supplier:
        return Supplier(
            supplier_id=SupplierId(model.id),
            name=model.name,
            phone=model.phone,
            contact_person=model.contact_person,
            email=model.email,
        )


class SqlAlchemyStockRepository(StockRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, item: StockItem) -> None:
        with Session(self._database.engine) as session:
            session.add(StockItemModel(id=str(item.stock_item_id), **_stock_values(item)))
            session.commit()

    def get(self, stock_item_id: StockItemId) -> StockItem | None:
        with Session(self._database.engine) as session:
            model = session.get(StockItemModel, str(stock_item_id))
            if model is None:
                return None
            return self._to_domain(model)

    def get_many(self, stock_item_ids: list[StockItemId]) -> dict[str, StockItem]:
        if not stock_item_ids:
            return {}
        statement = select(StockItemModel).where(
            StockItemModel.id.in_([str(stock_item_id) for stock_item_id in stock_item_ids])
        )
        with Session(self._database.engine) as session:
            return {model.id: self._to_domain(model) for model in session.execute(statement).scalars()}

    def list_all(self) -> list[StockItem]:
        statement = select(StockItemModel).order_by(StockItemModel.name)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def update(self, item: StockItem) -> None:
        statement = (
            update(StockItemModel)
            .where(StockItemModel.id == str(item.stock_item_id))
            .values(**_stock_values(item))
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def adjust_quantity(self, stock_item_id: StockItemId, delta: float) -> None:
        # relative update so concurrent adjustments do not overwrite each other
        statement = (
            update(StockItemModel)
            .where(StockItemModel.id == str(stock_item_id))
            .values(quantity_in_stock=StockItemModel.quantity_in_stock + delta)
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def delete(self, stock_item_id: StockItemId) -> None:
        with Session(self._database.engine) as session:
            session.execute(delete(StockItemModel).where(StockItemModel.id == str(stock_item_id)))
            session.commit()

    def add_usage(self, log: StockUsageLog) -> None:
        with Session(self._database.engine) as session:
            session.add(
                StockUsageLogModel(
                    id=str(log.log_id),
                    stock_item_id=str(log.stock_item_id),
                    quantity_used=log.quantity_used,
                    category=log.category.value,
                    notes=log.notes,
                    created_at=log.created_at,
                )
            )
            session.commit()

    def list_usage(self) -> list[StockUsageLog]:
        statement = select(StockUsageLogModel).order_by(StockUsageLogModel.created_at)
        with Session(self._database.engine) as session:
            return [
                StockUsageLog(
                    log_id=StockUsageLogId(model.id),
                    stock_item_id=StockItemId(model.stock_item_id),
                    quantity_used=model.quantity_used,
                    category=UsageCategory(model.category),
                    notes=model.notes,
                    created_at=ensure_utc(model.created_at),
                )
                for model in session.execute(statement).scalars()
            ]

    def _to_domain(self, model: StockItemModel) -> StockItem:
        return StockItem(
            stock_item_id=StockItemId(model.id),
            name=model.name,
            unit=StockUnit(model.unit),
            quantity_in_stock=model.quantity_in_stock,
            low_stock_threshold=model.low_stock_threshold,
            average_cost_per_unit=Money(amount_cents=model.average_cost_cents, currency=model.currency),
        )


class SqlAlchemyPurchaseOrderRepository(PurchaseOrderRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, purchase_order: PurchaseOrder) -> None:
        with Session(self._database.engine) as session:
            session.add(
                PurchaseOrderModel(
                    id=str(purchase_order.purchase_order_id),
                    supplier_id=str(purchase_order.supplier_id),
                    lines=[
                        {
                            "stockItemId": str(line.stock_item_id),
                            "quantity": line.quantity,
                            "costPerUnitCents": line.cost_per_unit.amount_cents,
                            "currency": line.cost_per_unit.currency,
                        }
                        for line in purchase_order.lines
                    ],
                    status=purchase_order.status.value,
                    created_at=purchase_order.created_at,
                )
            )
            session.commit()

    def get(self, purchase_order_id: PurchaseOrderId) -> PurchaseOrder | None:
        with Session(self._database.engine) as session:
            model = session.get(PurchaseOrderModel, str(purchase_order_id))
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[PurchaseOrder]:
        statement = select(PurchaseOrderModel).order_by(PurchaseOrderModel.created_at)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def update(self, purchase_order: PurchaseOrder) -> None:
        # lines are fixed once ordered
        statement = (
            update(PurchaseOrderModel)
            .where(PurchaseOrderModel.id == str(purchase_order.purchase_order_id))
            .values(status=purchase_order.status.value)
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def _to_domain(self, model: PurchaseOrderModel) -> PurchaseOrder:
        return PurchaseOrder(
            purchase_order_id=PurchaseOrderId(model.id),
            supplier_id=SupplierId(model.supplier_id),
            lines=[
                PurchaseOrderLine(
                    stock_item_id=StockItemId(row["stockItemId"]),
                    quantity=float(row["quantity"]),
                    cost_per_unit=Money(
                        amount_cents=int(row["costPerUnitCents"]),
                        currency=row["currency"],
                    ),
                )
                for row in model.lines
            ],
            status=PurchaseStatus(model.status),
            created_at=ensure_utc(model.created_at),
        )


def _supplier_values(supplier: Supplier) -> dict:
    return {
        "name": supplier.name,
        "phone": supplier.phone,
        "contact_person": supplier.contact_person,
        "email": supplier.email,
    }


def _stock_values(item: StockItem) -> dict:
    return {
        "name": item.name,
        "unit": item.unit.value,
        "quantity_in_stock": item.quantity_in_stock,
        "low_stock_threshold": item.low_stock_threshold,
        "average_cost_cents": item.average_cost_per_unit.amount_cents,
        "currency": item.average_cost_per_unit.currency,
    }
