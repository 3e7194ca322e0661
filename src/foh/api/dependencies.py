"""FastAPI dependency providers.

Long-lived collaborators (database, redis, token codec, image host) live on
`app.state`; repositories and use cases are built per request around them.
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request
from opentelemetry import trace

from foh.api.middleware.request_id import get_request_id
from foh.application.ports.cache import CacheStore
from foh.application.ports.images import ImageHost
from foh.application.ports.security import PasswordHasher, SessionClaims, SessionTokenCodec
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.table_release import TableReleaser
from foh.application.use_cases.view_refresh import ViewRefresher
from foh.config import Settings
from foh.domain.user.entities import Role
from foh.infrastructure.cache.cache_store import build_cache_store
from foh.infrastructure.cache.redis_client import RedisConnection
from foh.infrastructure.db.database import Database
from foh.infrastructure.db.repositories.bill_repo import SqlAlchemyBillRepository
from foh.infrastructure.db.repositories.inventory_repo import (
    SqlAlchemyPurchaseOrderRepository,
    SqlAlchemyStockRepository,
    SqlAlchemySupplierRepository,
)
from foh.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from foh.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from foh.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from foh.infrastructure.db.repositories.user_repo import (
    SqlAlchemyUserRepository,
    SqlAlchemyWaiterRepository,
)
from foh.infrastructure.messaging.redis_publisher import build_publisher


class NotAuthenticatedError(Exception):
    pass


class PermissionDeniedError(Exception):
    pass


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_redis(request: Request) -> RedisConnection:
    return request.app.state.redis


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_codec(request: Request) -> SessionTokenCodec:
    return request.app.state.codec


def get_image_host(request: Request) -> ImageHost:
    return request.app.state.image_host


def get_cache(redis: RedisConnection = Depends(get_redis)) -> CacheStore:
    return build_cache_store(redis)


def get_refresher(redis: RedisConnection = Depends(get_redis)) -> ViewRefresher:
    return ViewRefresher(build_publisher(redis))


def current_trace_context() -> TraceContext:
    span_context = trace.get_current_span().get_span_context()
    trace_id = format(span_context.trace_id, "032x") if span_context.is_valid else None
    return TraceContext(trace_id=trace_id, request_id=get_request_id())


class Repositories:
    """Every repository bound to one Database."""

    def __init__(self, database: Database) -> None:
        self.users = SqlAlchemyUserRepository(database)
        self.waiters = SqlAlchemyWaiterRepository(database)
        self.tables = SqlAlchemyTableRepository(database)
        self.menu = SqlAlchemyMenuRepository(database)
        self.orders = SqlAlchemyOrderRepository(database)
        self.bills = SqlAlchemyBillRepository(database)
        self.suppliers = SqlAlchemySupplierRepository(database)
        self.stock = SqlAlchemyStockRepository(database)
        self.purchase_orders = SqlAlchemyPurchaseOrderRepository(database)

    def releaser(self) -> TableReleaser:
        return TableReleaser(self.tables)


def get_repositories(database: Database = Depends(get_database)) -> Repositories:
    return Repositories(database)


def current_session(request: Request) -> SessionClaims | None:
    # AccessControlMiddleware decodes the cookie once per request
    return getattr(request.state, "session", None)


def require_session(session: SessionClaims | None = Depends(current_session)) -> SessionClaims:
    if session is None:
        raise NotAuthenticatedError("authentication required")
    return session


def require_roles(*roles: Role) -> Callable[..., SessionClaims]:
    allowed = frozenset(roles)

    def dependency(session: SessionClaims = Depends(require_session)) -> SessionClaims:
        if session.role not in allowed:
            raise PermissionDeniedError(f"role {session.role.value} may not perform this action")
        return session

    return dependency


STAFF = (Role.ADMIN, Role.MANAGER, Role.WAITER, Role.KITCHEN)
FLOOR = (Role.ADMIN, Role.MANAGER, Role.WAITER)
MANAGEMENT = (Role.ADMIN, Role.MANAGER)
