from __future__ import annotations

import logging

from foh.application.use_cases.seed_database import SeedDatabase
from foh.config import load_settings
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from foh.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from foh.infrastructure.db.repositories.user_repo import (
    SqlAlchemyUserRepository,
    SqlAlchemyWaiterRepository,
)
from foh.infrastructure.observability.logging_config import configure_logging
from foh.infrastructure.security.passwords import BcryptPasswordHasher
from foh.infrastructure.seed.fixtures import STARTER_FIXTURES

logger = logging.getLogger(__name__)


def build_seeder(database: Database, currency: str) -> SeedDatabase:
    return SeedDatabase(
        user_repository=SqlAlchemyUserRepository(database),
        waiter_repository=SqlAlchemyWaiterRepository(database),
        menu_repository=SqlAlchemyMenuRepository(database),
        table_repository=SqlAlchemyTableRepository(database),
        hasher=BcryptPasswordHasher(),
        currency=currency,
    )


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    database = Database(settings.database_url, connect_timeout=2)
    database.open()
    try:
        if settings.db_create_schema:
            database.create_schema()
        report = build_seeder(database, settings.currency).execute(STARTER_FIXTURES)
    finally:
        database.close()

    print(
        f"seed complete: users={report.users} waiters={report.waiters} "
        f"menu_items={report.menu_items} tables={report.tables}"
    )


if __name__ == "__main__":
    main()
