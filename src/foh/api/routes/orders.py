from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from foh.api.dependencies import (
    FLOOR,
    MANAGEMENT,
    STAFF,
    Repositories,
    current_trace_context,
    get_refresher,
    get_repositories,
    get_settings,
    require_roles,
    require_session,
)
from foh.application.dto.requests import (
    CancelOrderRequest,
    CreateOrderRequest,
    UpdateOrderItemsRequest,
    UpdateOrderStatusRequest,
)
from foh.application.dto.responses import OrderResponse
from foh.application.ports.security import SessionClaims
from foh.application.use_cases.cancel_order import CancelOrder
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.create_order import CreateOrder
from foh.application.use_cases.delete_order import DeleteOrder
from foh.application.use_cases.get_order import GetOrder, ListOrders
from foh.application.use_cases.transition_order import TransitionOrder
from foh.application.use_cases.update_order_items import UpdateOrderItems
from foh.application.use_cases.view_refresh import ViewRefresher
from foh.config import Settings
from foh.domain.common.ids import OrderId

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    request_dto: CreateOrderRequest,
    session: SessionClaims = Depends(require_roles(*FLOOR)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> OrderResponse:
    use_case = CreateOrder(
        menu_repository=repos.menu,
        table_repository=repos.tables,
        waiter_repository=repos.waiters,
        order_repository=repos.orders,
        refresher=refresher,
    )
    return use_case.execute(request_dto, acting_user_id=session.user_id, trace_ctx=trace_ctx)


@router.get("", response_model=list[OrderResponse])
def list_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> list[OrderResponse]:
    return ListOrders(repos.orders).execute(status=status_filter)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> OrderResponse:
    return GetOrder(repos.orders).execute(OrderId(order_id))


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    request_dto: UpdateOrderStatusRequest,
    _: SessionClaims = Depends(require_roles(*STAFF)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> OrderResponse:
    use_case = TransitionOrder(
        order_repository=repos.orders,
        releaser=repos.releaser(),
        refresher=refresher,
    )
    return use_case.execute(OrderId(order_id), request_dto.status, trace_ctx)


@router.post("/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(
    order_id: str,
    request_dto: CancelOrderRequest,
    _: SessionClaims = Depends(require_roles(*FLOOR)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    settings: Settings = Depends(get_settings),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> OrderResponse:
    use_case = CancelOrder(
        order_repository=repos.orders,
        releaser=repos.releaser(),
        refresher=refresher,
        release_table=settings.release_table_on_cancel,
    )
    return use_case.execute(OrderId(order_id), request_dto.reason, trace_ctx)


@router.put("/{order_id}/items", response_model=OrderResponse)
def update_order_items(
    order_id: str,
    request_dto: UpdateOrderItemsRequest,
    _: SessionClaims = Depends(require_roles(*FLOOR)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> OrderResponse:
    use_case = UpdateOrderItems(
        menu_repository=repos.menu,
        order_repository=repos.orders,
        refresher=refresher,
    )
    return use_case.execute(OrderId(order_id), request_dto, trace_ctx)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: str,
    _: SessionClaims = Depends(require_roles(*MANAGEMENT)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> Response:
    use_case = DeleteOrder(
        order_repository=repos.orders,
        releaser=repos.releaser(),
        refresher=refresher,
    )
    use_case.execute(OrderId(order_id), trace_ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
