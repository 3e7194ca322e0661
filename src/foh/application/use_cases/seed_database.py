from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import uuid4

from foh.application.ports.repositories import (
    MenuRepository,
    TableRepository,
    UserRepository,
    WaiterRepository,
)
from foh.application.ports.security import PasswordHasher
from foh.domain.common.ids import MenuItemId, TableId, UserId, WaiterId
from foh.domain.common.money import Money
from foh.domain.menu.entities import MenuItem
from foh.domain.table.entities import Table, TableStatus
from foh.domain.user.entities import Role, User, UserStatus, Waiter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserFixture:
    name: str
    email: str
    role: Role


@dataclass(frozen=True)
class MenuItemFixture:
    name: str
    price_cents: int
    category: str
    is_available: bool = True
    image_url: str | None = None


@dataclass(frozen=True)
class SeedFixtures:
    password: str
    users: list[UserFixture] = field(default_factory=list)
    menu_items: list[MenuItemFixture] = field(default_factory=list)
    table_count: int = 0


@dataclass(frozen=True)
class SeedReport:
    users: int
    waiters: int
    menu_items: int
    tables: int


class SeedDatabase:
    """Fill empty collections with starter data.

    Each collection is only touched while it is empty, so running the seed
    again leaves existing data alone.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        waiter_repository: WaiterRepository,
        menu_repository: MenuRepository,
        table_repository: TableRepository,
        hasher: PasswordHasher,
        currency: str,
    ) -> None:
        self._user_repository = user_repository
        self._waiter_repository = waiter_repository
        self._menu_repository = menu_repository
        self._table_repository = table_repository
        self._hasher = hasher
        self._currency = currency

    def execute(self, fixtures: SeedFixtures) -> SeedReport:
        report = SeedReport(
            users=self._seed_users(fixtures),
            waiters=self._seed_waiters(),
            menu_items=self._seed_menu(fixtures),
            tables=self._seed_tables(fixtures),
        )
        logger.info(
            "seed_complete",
            extra={
                "users": report.users,
                "waiters": report.waiters,
                "menu_items": report.menu_items,
                "tables": report.tables,
            },
        )
        return report

    def _seed_users(self, fixtures: SeedFixtures) -> int:
        if self._user_repository.count() > 0:
            return 0
        # one hash for every starter account keeps seeding fast
        password_hash = self._hasher.hash(fixtures.password)
        for fixture in fixtures.users:
            self._user_repository.add(
                User(
                    user_id=UserId(f"usr_{uuid4().hex[:12]}"),
                    name=fixture.name,
                    email=fixture.email,
                    role=fixture.role,
                    password_hash=password_hash,
                    status=UserStatus.APPROVED,
                )
            )
        return len(fixtures.users)

    def _seed_waiters(self) -> int:
        if self._waiter_repository.count() > 0:
            return 0
        created = 0
        for user in self._user_repository.list_all():
            if user.role != Role.WAITER:
                continue
            self._waiter_repository.add(
                Waiter(
                    waiter_id=WaiterId(f"wtr_{uuid4().hex[:12]}"),
                    name=user.name,
                    user_id=user.user_id,
                )
            )
            created += 1
        return created

    def _seed_menu(self, fixtures: SeedFixtures) -> int:
        if self._menu_repository.count() > 0:
            return 0
        for fixture in fixtures.menu_items:
            self._menu_repository.add(
                MenuItem(
                    item_id=MenuItemId(f"itm_{uuid4().hex[:12]}"),
                    name=fixture.name,
                    price=Money(amount_cents=fixture.price_cents, currency=self._currency),
                    category=fixture.category,
                    is_available=fixture.is_available,
                    image_url=fixture.image_url,
                )
            )
        return len(fixtures.menu_items)

    def _seed_tables(self, fixtures: SeedFixtures) -> int:
        if self._table_repository.count() > 0:
            return 0
        for number in range(1, fixtures.table_count + 1):
            self._table_repository.add(
                Table(
                    table_id=TableId(f"tbl_{number:03d}"),
                    table_number=number,
                    status=TableStatus.AVAILABLE,
                    waiter_id=None,
                )
            )
        return fixtures.table_count
