"""Dashboard view models served at the page paths.

AccessControlMiddleware has already redirected anonymous or wrong-role
requests by the time a handler here runs, so handlers only need the session.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from foh.api.dependencies import (
    Repositories,
    current_session,
    get_repositories,
    get_settings,
    require_session,
)
from foh.application.dto.responses import (
    AdminDashboardResponse,
    KitchenDashboardResponse,
    ManagerDashboardResponse,
    WaiterDashboardResponse,
)
from foh.application.ports.security import SessionClaims
from foh.application.use_cases.dashboards import (
    GetAdminDashboard,
    GetKitchenDashboard,
    GetManagerDashboard,
    GetWaiterDashboard,
)
from foh.application.use_cases.reports import GetAnalytics
from foh.config import Settings

router = APIRouter(tags=["pages"])


def _readers(repos: Repositories) -> dict[str, object]:
    return {
        "order_repository": repos.orders,
        "table_repository": repos.tables,
        "waiter_repository": repos.waiters,
        "menu_repository": repos.menu,
    }


@router.get("/login")
def login_page(session: SessionClaims | None = Depends(current_session)) -> dict[str, object]:
    return {"page": "login", "authenticated": session is not None}


@router.get("/unauthorized")
def unauthorized_page(session: SessionClaims | None = Depends(current_session)) -> dict[str, object]:
    return {
        "page": "unauthorized",
        "role": session.role.value if session else None,
        "message": "your role does not have access to that page",
    }


@router.get("/waiter", response_model=WaiterDashboardResponse)
def waiter_dashboard(
    session: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> WaiterDashboardResponse:
    return GetWaiterDashboard(**_readers(repos)).execute(session.user_id)


@router.get("/kitchen", response_model=KitchenDashboardResponse)
def kitchen_dashboard(
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> KitchenDashboardResponse:
    return GetKitchenDashboard(**_readers(repos)).execute()


@router.get("/manager", response_model=ManagerDashboardResponse)
def manager_dashboard(
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> ManagerDashboardResponse:
    return GetManagerDashboard(**_readers(repos)).execute()


@router.get("/admin", response_model=AdminDashboardResponse)
def admin_dashboard(
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_settings),
) -> AdminDashboardResponse:
    analytics = GetAnalytics(
        order_repository=repos.orders,
        menu_repository=repos.menu,
        waiter_repository=repos.waiters,
        currency=settings.currency,
    )
    use_case = GetAdminDashboard(
        **_readers(repos),
        user_repository=repos.users,
        analytics=analytics,
    )
    return use_case.execute()
