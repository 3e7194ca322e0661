from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from foh.application.ports.repositories import UserRepository, WaiterRepository
from foh.domain.common.ids import UserId, WaiterId
from foh.domain.user.entities import Role, User, UserStatus, Waiter
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.models.user import UserModel, WaiterModel


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, user: User) -> None:
        with Session(self._database.engine) as session:
            session.add(
                UserModel(
                    id=str(user.user_id),
                    name=user.name,
                    email=user.email,
                    role=user.role.value,
                    password_hash=user.password_hash,
                    status=user.status.value,
                )
            )
            session.commit()

    def get(self, user_id: UserId) -> User | None:
        with Session(self._database.engine) as session:
            model = session.get(UserModel, str(user_id))
            if model is None:
                return None
            return self._to_domain(model)

    def get_by_email(self, email: str) -> User | None:
        statement = select(UserModel).where(UserModel.email == email).limit(1)
        with Session(self._database.engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[User]:
        statement = select(UserModel).order_by(UserModel.email)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def update(self, user: User) -> None:
        statement = (
            update(UserModel)
            .where(UserModel.id == str(user.user_id))
            .values(
                name=user.name,
                email=user.email,
                role=user.role.value,
                password_hash=user.password_hash,
                status=user.status.value,
            )
        )
        with Session(self._database.engine) as session:
            session.execute(statement)
            session.commit()

    def delete(self, user_id: UserId) -> None:
        with Session(self._database.engine) as session:
            session.execute(delete(UserModel).where(UserModel.id == str(user_id)))
            session.commit()

    def count(self) -> int:
        with Session(self._database.engine) as session:
            return session.execute(select(func.count()).select_from(UserModel)).scalar_one()

    def _to_domain(self, model: UserModel) -> User:
        return User(
            user_id=UserId(model.id),
            name=model.name,
            email=model.email,
            role=Role(model.role),
            password_hash=model.password_hash,
            status=UserStatus(model.status),
        )


class SqlAlchemyWaiterRepository(WaiterRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, waiter: Waiter) -> None:
        with Session(self._database.engine) as session:
            session.add(
                WaiterModel(
                    id=str(waiter.waiter_id),
                    name=waiter.name,
                    user_id=str(waiter.user_id) if waiter.user_id is not None else None,
                )
            )
            session.commit()

    def get(self, waiter_id: WaiterId) -> Waiter | None:
        with Session(self._database.engine) as session:
            model = session.get(WaiterModel, str(waiter_id))
            if model is None:
                return None
            return self._to_domain(model)

    def get_by_user_id(self, user_id: UserId) -> Waiter | None:
        statement = select(WaiterModel).where(WaiterModel.user_id == str(user_id)).limit(1)
        with Session(self._database.engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def list_all(self) -> list[Waiter]:
        statement = select(WaiterModel).order_by(WaiterModel.name)
        with Session(self._database.engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def delete_by_user_id(self, user_id: UserId) -> None:
        with Session(self._database.engine) as session:
            session.execute(delete(WaiterModel).where(WaiterModel.user_id == str(user_id)))
            session.commit()

    def count(self) -> int:
        with Session(self._database.engine) as session:
            return session.execute(select(func.count()).select_from(WaiterModel)).scalar_one()

    def _to_domain(self, model: WaiterModel) -> Waiter:
        return Waiter(
            waiter_id=WaiterId(model.id),
            name=model.name,
            user_id=UserId(model.user_id) if model.user_id is not None else None,
        )
