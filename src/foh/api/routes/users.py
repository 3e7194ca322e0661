from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from foh.api.dependencies import Repositories, get_hasher, get_repositories, require_roles
from foh.application.dto.requests import RegisterUserRequest, UpdateUserStatusRequest
from foh.application.dto.responses import RegisterUserResponse, UserResponse
from foh.application.ports.security import PasswordHasher, SessionClaims
from foh.application.use_cases.manage_users import DeleteUser, ListUsers, UpdateUserStatus
from foh.application.use_cases.register_user import RegisterUser
from foh.domain.common.ids import UserId
from foh.domain.user.entities import Role, UserStatus

router = APIRouter(prefix="/api/users", tags=["users"])

admin_only = require_roles(Role.ADMIN)


@router.get("", response_model=list[UserResponse])
def list_users(
    status_filter: UserStatus | None = Query(default=None, alias="status"),
    _: SessionClaims = Depends(admin_only),
    repos: Repositories = Depends(get_repositories),
) -> list[UserResponse]:
    return ListUsers(repos.users).execute(status=status_filter)


@router.post("", response_model=RegisterUserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    request_dto: RegisterUserRequest,
    _: SessionClaims = Depends(admin_only),
    repos: Repositories = Depends(get_repositories),
    hasher: PasswordHasher = Depends(get_hasher),
) -> RegisterUserResponse:
    use_case = RegisterUser(
        user_repository=repos.users,
        waiter_repository=repos.waiters,
        hasher=hasher,
    )
    return use_case.execute(request_dto, approved=True)


@router.patch("/{user_id}/status", response_model=UserResponse)
def update_user_status(
    user_id: str,
    request_dto: UpdateUserStatusRequest,
    _: SessionClaims = Depends(admin_only),
    repos: Repositories = Depends(get_repositories),
) -> UserResponse:
    use_case = UpdateUserStatus(user_repository=repos.users, waiter_repository=repos.waiters)
    return use_case.execute(UserId(user_id), request_dto.status)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    _: SessionClaims = Depends(admin_only),
    repos: Repositories = Depends(get_repositories),
) -> Response:
    DeleteUser(user_repository=repos.users, waiter_repository=repos.waiters).execute(UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
