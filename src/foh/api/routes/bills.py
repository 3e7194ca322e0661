from __future__ import annotations

from fastapi import APIRouter, Depends, status

from foh.api.dependencies import (
    FLOOR,
    MANAGEMENT,
    Repositories,
    current_trace_context,
    get_refresher,
    get_repositories,
    require_roles,
)
from foh.application.dto.requests import CreateBillRequest
from foh.application.dto.responses import BillResponse
from foh.application.ports.security import SessionClaims
from foh.application.use_cases.billing import CreateBillForTable, ListBills, MarkBillPaid
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.view_refresh import ViewRefresher
from foh.domain.common.ids import BillId

router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
def create_bill(
    request_dto: CreateBillRequest,
    _: SessionClaims = Depends(require_roles(*FLOOR)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> BillResponse:
    use_case = CreateBillForTable(
        order_repository=repos.orders,
        bill_repository=repos.bills,
        refresher=refresher,
    )
    return use_case.execute(request_dto.table_number, trace_ctx)


@router.get("", response_model=list[BillResponse])
def list_bills(
    _: SessionClaims = Depends(require_roles(*MANAGEMENT)),
    repos: Repositories = Depends(get_repositories),
) -> list[BillResponse]:
    return ListBills(repos.bills).execute()


@router.post("/{bill_id}/pay", response_model=BillResponse)
def pay_bill(
    bill_id: str,
    _: SessionClaims = Depends(require_roles(*FLOOR)),
    repos: Repositories = Depends(get_repositories),
    refresher: ViewRefresher = Depends(get_refresher),
    trace_ctx: TraceContext = Depends(current_trace_context),
) -> BillResponse:
    use_case = MarkBillPaid(
        bill_repository=repos.bills,
        order_repository=repos.orders,
        menu_repository=repos.menu,
        stock_repository=repos.stock,
        releaser=repos.releaser(),
        refresher=refresher,
    )
    return use_case.execute(BillId(bill_id), trace_ctx)
