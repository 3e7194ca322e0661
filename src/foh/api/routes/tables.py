from __future__ import annotations

from fastapi import APIRouter, Depends

from foh.api.dependencies import Repositories, get_repositories, require_session
from foh.application.dto.responses import TableResponse
from foh.application.ports.security import SessionClaims
from foh.application.use_cases.list_tables import ListTables

router = APIRouter(prefix="/api/tables", tags=["tables"])


@router.get("", response_model=list[TableResponse])
def list_tables(
    _: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> list[TableResponse]:
    return ListTables(table_repository=repos.tables, waiter_repository=repos.waiters).execute()
