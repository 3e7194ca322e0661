from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from foh.infrastructure.db.models import billing, inventory, menu, order, table, user  # noqa: F401
from foh.infrastructure.db.models.base import Base

logger = logging.getLogger(__name__)


class DatabaseNotOpenError(RuntimeError):
    pass


class Database:
    """Owns the SQLAlchemy engine for the lifetime of the application.

    Created once at startup, opened by the app lifespan and disposed at
    shutdown; repositories receive it through dependency injection.
    """

    def __init__(self, url: str, connect_timeout: int = 2) -> None:
        self._url = url
        self._connect_timeout = max(1, connect_timeout)
        self._engine: Engine | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise DatabaseNotOpenError("database is not open")
        return self._engine

    def open(self) -> Engine:
        if self._engine is not None:
            return self._engine

        if self._url.startswith("sqlite"):
            kwargs: dict = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self._url or self._url.rstrip("/").endswith("sqlite:"):
                # every session must see the same in-memory database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_pre_ping": True,
                "connect_args": {"connect_timeout": self._connect_timeout},
            }
        self._engine = create_engine(self._url, **kwargs)
        logger.info("database_opened", extra={"dialect": self._engine.dialect.name})
        return self._engine

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("database_closed")

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def ping(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("database_ping_failed", exc_info=True)
            return False
