from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foh.api.error_handling import register_exception_handlers
from foh.api.middleware.access import AccessControlMiddleware
from foh.api.middleware.access_log import AccessLogMiddleware
from foh.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from foh.api.routes.auth import router as auth_router
from foh.api.routes.bills import router as bills_router
from foh.api.routes.health import router as health_router
from foh.api.routes.inventory import router as inventory_router
from foh.api.routes.menu import router as menu_router
from foh.api.routes.metrics import router as metrics_router
from foh.api.routes.orders import router as orders_router
from foh.api.routes.pages import router as pages_router
from foh.api.routes.reports import router as reports_router
from foh.api.routes.tables import router as tables_router
from foh.api.routes.uploads import router as uploads_router
from foh.api.routes.users import router as users_router
from foh.api.ws.manager import ConnectionManager
from foh.api.ws.routes import router as ws_router
from foh.config import Settings, load_settings
from foh.infrastructure.cache.redis_client import RedisConnection
from foh.infrastructure.db.database import Database
from foh.infrastructure.images.cloudinary import CloudinaryImageHost
from foh.infrastructure.messaging.redis_event_listener import start_redis_fanout
from foh.infrastructure.observability.logging_config import configure_logging
from foh.infrastructure.observability.otel import configure_otel
from foh.infrastructure.security.passwords import BcryptPasswordHasher
from foh.infrastructure.security.tokens import JoseSessionTokenCodec
from foh.infrastructure.seed.fixtures import STARTER_FIXTURES
from foh.tools.seed import build_seeder

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    redis: RedisConnection = app.state.redis

    database.open()
    if settings.db_create_schema:
        database.create_schema()
    redis.open()

    if settings.seed_on_startup:
        report = build_seeder(database, settings.currency).execute(STARTER_FIXTURES)
        logger.info(
            "seed_on_startup_complete",
            extra={
                "users": report.users,
                "waiters": report.waiters,
                "menu_items": report.menu_items,
                "tables": report.tables,
            },
        )

    fanout_task: asyncio.Task[None] | None = None
    if redis.configured:
        manager: ConnectionManager = app.state.ws_manager
        fanout_task = asyncio.create_task(start_redis_fanout(settings.redis_url, manager.broadcast))
    app.state.redis_fanout_task = fanout_task
    logger.info("app_started", extra={"app_env": settings.app_env, "redis": redis.configured})
    try:
        yield
    finally:
        if fanout_task is not None:
            fanout_task.cancel()
            with suppress(asyncio.CancelledError):
                await fanout_task
        redis.close()
        database.close()
        logger.info("app_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level, service=settings.otel_service_name)

    app = FastAPI(title="Front of House Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url, connect_timeout=2)
    app.state.redis = RedisConnection(settings.redis_url)
    app.state.hasher = BcryptPasswordHasher()
    app.state.codec = JoseSessionTokenCodec(
        settings.jwt_secret,
        ttl=timedelta(minutes=settings.session_ttl_minutes),
        refresh_window=timedelta(minutes=settings.session_refresh_minutes),
    )
    app.state.image_host = CloudinaryImageHost(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.cloudinary_folder,
    )
    app.state.ws_manager = ConnectionManager()

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(tables_router)
    app.include_router(menu_router)
    app.include_router(orders_router)
    app.include_router(bills_router)
    app.include_router(inventory_router)
    app.include_router(reports_router)
    app.include_router(uploads_router)
    app.include_router(pages_router)
    app.include_router(ws_router)

    # last added runs first: CORS, request id, access log, then the role gate
    app.add_middleware(AccessControlMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    configure_otel(app, settings)
    return app
