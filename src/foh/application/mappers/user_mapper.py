from __future__ import annotations

from foh.application.dto.responses import UserResponse, WaiterResponse
from foh.domain.user.entities import User, Waiter


def to_user_response(user: User) -> UserResponse:
    # password hashes never leave the service
    return UserResponse(
        userId=str(user.user_id),
        name=user.name,
        email=user.email,
        role=user.role.value,
        status=user.status.value,
    )


def to_waiter_response(waiter: Waiter) -> WaiterResponse:
    return WaiterResponse(
        waiterId=str(waiter.waiter_id),
        name=waiter.name,
        userId=str(waiter.user_id) if waiter.user_id is not None else None,
    )
