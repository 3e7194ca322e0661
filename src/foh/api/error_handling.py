from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from foh.api.dependencies import NotAuthenticatedError, PermissionDeniedError
from foh.api.middleware.request_id import get_request_id
from foh.application.ports.images import ImageUploadError
from foh.application.use_cases.billing import BillNotFoundError, NoServedOrdersError
from foh.application.use_cases.create_order import (
    MenuItemUnavailableError,
    TableNotFoundError,
    WaiterNotFoundError,
)
from foh.application.use_cases.get_order import InvalidStatusFilterError
from foh.application.use_cases.inventory import (
    PurchaseOrderNotFoundError,
    StockItemNotFoundError,
    SupplierNotFoundError,
)
from foh.application.use_cases.login_user import (
    AccountPendingApprovalError,
    InvalidCredentialsError,
)
from foh.application.use_cases.manage_menu import MenuItemNotFoundError, UnknownIngredientError
from foh.application.use_cases.manage_users import UserNotFoundError
from foh.application.use_cases.register_user import EmailAlreadyRegisteredError
from foh.application.use_cases.reports import InvalidReportPeriodError, InvalidReportTypeError
from foh.application.use_cases.transition_order import (
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
)
from foh.application.use_cases.upload_image import EmptyUploadError, UnsupportedUploadError
from foh.domain.billing.entities import BillAlreadyPaidError
from foh.domain.inventory.entities import PurchaseOrderStateError
from foh.domain.order.entities import InvalidCancellationReasonError


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": jsonable_encoder(validation_exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (NotAuthenticatedError, 401, "NOT_AUTHENTICATED"),
        (PermissionDeniedError, 403, "FORBIDDEN"),
        (InvalidCredentialsError, 401, "INVALID_CREDENTIALS"),
        (AccountPendingApprovalError, 403, "ACCOUNT_PENDING_APPROVAL"),
        (EmailAlreadyRegisteredError, 409, "EMAIL_ALREADY_REGISTERED"),
        (UserNotFoundError, 404, "USER_NOT_FOUND"),
        (TableNotFoundError, 404, "TABLE_NOT_FOUND"),
        (WaiterNotFoundError, 404, "WAITER_NOT_FOUND"),
        (MenuItemUnavailableError, 400, "MENU_ITEM_UNAVAILABLE"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (UnknownIngredientError, 400, "UNKNOWN_INGREDIENT"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (InvalidStatusFilterError, 400, "INVALID_STATUS_FILTER"),
        (InvalidCancellationReasonError, 400, "INVALID_CANCELLATION_REASON"),
        (OrderConflictError, 409, "CONFLICT"),
        (NoServedOrdersError, 409, "NO_SERVED_ORDERS"),
        (BillNotFoundError, 404, "BILL_NOT_FOUND"),
        (BillAlreadyPaidError, 409, "BILL_ALREADY_PAID"),
        (SupplierNotFoundError, 404, "SUPPLIER_NOT_FOUND"),
        (StockItemNotFoundError, 404, "STOCK_ITEM_NOT_FOUND"),
        (PurchaseOrderNotFoundError, 404, "PURCHASE_ORDER_NOT_FOUND"),
        (PurchaseOrderStateError, 409, "INVALID_PURCHASE_ORDER_STATE"),
        (InvalidReportPeriodError, 400, "INVALID_REPORT_PERIOD"),
        (InvalidReportTypeError, 400, "INVALID_REPORT_TYPE"),
        (EmptyUploadError, 400, "EMPTY_UPLOAD"),
        (UnsupportedUploadError, 400, "UNSUPPORTED_UPLOAD"),
        (ImageUploadError, 502, "IMAGE_HOST_ERROR"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
