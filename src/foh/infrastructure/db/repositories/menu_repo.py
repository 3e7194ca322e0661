from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from foh.application.ports.repositories import MenuRepository
from foh.domain.common.ids import MenuItemId, StockItemId
from foh.domain.common.money import Money
from foh.domain.menu.entities import Ingredient, MenuItem
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.models.menu import MenuItemModel


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._database.engine) as session:
            model = session.get(MenuItemModel, str(item_id))
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[MenuItem]:
        statement = select(MenuItemModel).order_by(MenuItemModel.category, MenuItemModel.name)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, item: MenuItem) -> None:
        with Session(self._database.engine) as session:
            session.add(MenuItemModel(id=str(item.item_id), **self._values(item)))
            session.commit()

    def update(self, item: MenuItem) -> None:
        statement = (
            update(MenuItemModel)
            .where(MenuItemModel.id == str(item.item_id))
            .values(**self._values(item))
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def delete(self, item_id: MenuItemId) -> None:
        with Session(self._database.engine) as session:
            session.execute(delete(MenuItemModel).where(MenuItemModel.id == str(item_id)))
            session.commit()

    def count(self) -> int:
        with Session(self._database.engine) as session:
            return session.execute(select(func.count()).select_from(MenuItemModel)).scalar_one()

    def _values(self, item: MenuItem) -> dict:
        return {
            "name": item.name,
            "category": item.category,
            "price_cents": item.price.amount_cents,
            "currency": item.price.currency,
            "is_available": item.is_available,
            "cost_of_goods_cents": (
                item.cost_of_goods.amount_cents if item.cost_of_goods is not None else None
            ),
            "ingredients": [
                {"stockItemId": str(ingredient.stock_item_id), "quantity": ingredient.quantity}
                for ingredient in item.ingredients
            ],
            "image_url": item.image_url,
        }

    def _to_domain(self, model: MenuItemModel) -> MenuItem:
        cost_of_goods = None
        if model.cost_of_goods_cents is not None:
            cost_of_goods = Money(amount_cents=model.cost_of_goods_cents, currency=model.currency)
        return MenuItem(
            item_id=MenuItemId(model.id),
            name=model.name,
            price=Money(amount_cents=model.price_cents, currency=model.currency),
            category=model.category,
            is_available=model.is_available,
            cost_of_goods=cost_of_goods,
            ingredients=[
                Ingredient(
                    stock_item_id=StockItemId(row["stockItemId"]),
                    quantity=float(row["quantity"]),
                )
                for row in model.ingredients or []
            ],
            image_url=model.image_url,
        )
