from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from foh.api.dependencies import (
    MANAGEMENT,
    Repositories,
    get_cache,
    get_repositories,
    get_settings,
    require_roles,
    require_session,
)
from foh.application.dto.requests import (
    MenuItemAvailabilityRequest,
    MenuItemRequest,
    UpdateMenuItemRequest,
)
from foh.application.dto.responses import MenuItemResponse, MenuResponse
from foh.application.ports.cache import CacheStore
from foh.application.ports.security import SessionClaims
from foh.application.use_cases.get_menu import GetMenu
from foh.application.use_cases.manage_menu import (
    AddMenuItem,
    DeleteMenuItem,
    SetMenuItemAvailability,
    UpdateMenuItem,
)
from foh.config import Settings
from foh.domain.common.ids import MenuItemId

router = APIRouter(prefix="/api/menu", tags=["menu"])

manager_only = require_roles(*MANAGEMENT)


@router.get("", response_model=MenuResponse)
def get_menu(
    available_only: bool = False,
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
    cache: CacheStore = Depends(get_cache),
) -> MenuResponse:
    return GetMenu(repository=repos.menu, cache=cache).execute(available_only=available_only)


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def add_menu_item(
    request_dto: MenuItemRequest,
    _: SessionClaims = Depends(manager_only),
    repos: Repositories = Depends(get_repositories),
    cache: CacheStore = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> MenuItemResponse:
    use_case = AddMenuItem(repository=repos.menu, cache=cache, currency=settings.currency)
    return use_case.execute(request_dto)


@router.put("/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    item_id: str,
    request_dto: UpdateMenuItemRequest,
    _: SessionClaims = Depends(manager_only),
    repos: Repositories = Depends(get_repositories),
    cache: CacheStore = Depends(get_cache),
) -> MenuItemResponse:
    use_case = UpdateMenuItem(repository=repos.menu, stock_repository=repos.stock, cache=cache)
    return use_case.execute(MenuItemId(item_id), request_dto)


@router.patch("/{item_id}/availability", response_model=MenuItemResponse)
def set_menu_item_availability(
    item_id: str,
    request_dto: MenuItemAvailabilityRequest,
    _: SessionClaims = Depends(manager_only),
    repos: Repositories = Depends(get_repositories),
    cache: CacheStore = Depends(get_cache),
) -> MenuItemResponse:
    use_case = SetMenuItemAvailability(repository=repos.menu, cache=cache)
    return use_case.execute(MenuItemId(item_id), request_dto)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: str,
    _: SessionClaims = Depends(manager_only),
    repos: Repositories = Depends(get_repositories),
    cache: CacheStore = Depends(get_cache),
) -> Response:
    DeleteMenuItem(repository=repos.menu, cache=cache).execute(MenuItemId(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
