from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from foh.api.dependencies import get_database, get_redis
from foh.infrastructure.cache.redis_client import RedisConnection
from foh.infrastructure.db.database import Database

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(
    response: Response,
    database: Database = Depends(get_database),
    redis: RedisConnection = Depends(get_redis),
) -> dict[str, object]:
    database_ready = database.ping()
    # without REDIS_URL the service runs degraded by design: no cache, no live refresh
    redis_ready = redis.ping() if redis.configured else True

    if database_ready and redis_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"database": database_ready, "redis": redis_ready},
    }
