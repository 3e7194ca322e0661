from __future__ import annotations

import logging

from pydantic import ValidationError

from foh.application.dto.responses import MenuResponse
from foh.application.mappers.menu_mapper import to_menu_response
from foh.application.ports.cache import CacheStore
from foh.application.ports.repositories import MenuRepository

logger = logging.getLogger(__name__)

MENU_CACHE_KEY = "menu:items"
MENU_CACHE_TTL_SECONDS = 300


def invalidate_menu_cache(cache: CacheStore) -> None:
    try:
        cache.delete(MENU_CACHE_KEY)
    except Exception:
        logger.warning("menu_cache_invalidate_failed", exc_info=True)


class GetMenu:
    def __init__(
        self,
        repository: MenuRepository,
        cache: CacheStore,
        ttl_seconds: int = MENU_CACHE_TTL_SECONDS,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def _cache_get(self) -> str | None:
        try:
            return self._cache.get(MENU_CACHE_KEY)
        except Exception:
            logger.warning("menu_cache_read_failed", exc_info=True)
            return None

    def _cache_set(self, value: str) -> None:
        try:
            self._cache.set(MENU_CACHE_KEY, value, ttl_seconds=self._ttl_seconds)
        except Exception:
            logger.warning("menu_cache_write_failed", exc_info=True)

    def execute(self, available_only: bool = False) -> MenuResponse:
        response = self._load()
        if not available_only:
            return response
        items = [item for item in response.items if item.isAvailable]
        return MenuResponse(items=items, categories=sorted({item.category for item in items}))

    def _load(self) -> MenuResponse:
        payload = self._cache_get()
        if payload:
            try:
                return MenuResponse.model_validate_json(payload)
            except ValidationError:
                logger.warning("menu_cache_payload_invalid")

        items = sorted(self._repository.list_all(), key=lambda item: (item.category, item.name))
        response = to_menu_response(items)
        self._cache_set(response.model_dump_json())
        return response
