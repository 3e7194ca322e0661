from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Response

from foh.api.dependencies import MANAGEMENT, Repositories, get_repositories, get_settings, require_roles
from foh.application.dto.responses import AnalyticsResponse, ReportDataResponse
from foh.application.use_cases.reports import ExportReportCsv, GetAnalytics, GetReportData
from foh.config import Settings

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(require_roles(*MANAGEMENT))],
)


def _report_data(
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_settings),
) -> GetReportData:
    return GetReportData(
        order_repository=repos.orders,
        bill_repository=repos.bills,
        user_repository=repos.users,
        menu_repository=repos.menu,
        waiter_repository=repos.waiters,
        currency=settings.currency,
    )


@router.get("/analytics", response_model=AnalyticsResponse)
def analytics(
    start: date | None = None,
    end: date | None = None,
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_settings),
) -> AnalyticsResponse:
    use_case = GetAnalytics(
        order_repository=repos.orders,
        menu_repository=repos.menu,
        waiter_repository=repos.waiters,
        currency=settings.currency,
    )
    return use_case.execute(start=start, end=end)


@router.get("/data", response_model=ReportDataResponse)
def report_data(
    start: date,
    end: date,
    use_case: GetReportData = Depends(_report_data),
) -> ReportDataResponse:
    return use_case.execute(start, end)


@router.get("/export/{report_type}")
def export_report(
    report_type: str,
    start: date,
    end: date,
    use_case: GetReportData = Depends(_report_data),
) -> Response:
    content = ExportReportCsv(use_case).execute(report_type, start, end)
    filename = f"{report_type}-report-{start.isoformat()}-to-{end.isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
