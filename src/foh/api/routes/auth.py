from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from foh.api.dependencies import (
    Repositories,
    get_codec,
    get_hasher,
    get_repositories,
    get_settings,
    require_session,
)
from foh.api.middleware.access import set_session_cookie
from foh.application.dto.requests import LoginRequest, RegisterUserRequest
from foh.application.dto.responses import RegisterUserResponse, SessionResponse
from foh.application.mappers.user_mapper import to_user_response
from foh.application.ports.security import PasswordHasher, SessionClaims, SessionTokenCodec
from foh.application.use_cases.login_user import LoginUser
from foh.application.use_cases.manage_users import UserNotFoundError
from foh.application.use_cases.register_user import RegisterUser
from foh.config import Settings
from foh.domain.common.ids import UserId
from foh.infrastructure.security.tokens import SESSION_COOKIE_NAME

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse)
def login(
    request_dto: LoginRequest,
    response: Response,
    repos: Repositories = Depends(get_repositories),
    hasher: PasswordHasher = Depends(get_hasher),
    codec: SessionTokenCodec = Depends(get_codec),
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    use_case = LoginUser(user_repository=repos.users, hasher=hasher, codec=codec)
    result = use_case.execute(request_dto.email, request_dto.password)
    set_session_cookie(
        response,
        result.token,
        max_age=settings.session_ttl_minutes * 60,
        secure=settings.secure_cookies,
    )
    return result.session


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout() -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return response


@router.post("/register", response_model=RegisterUserResponse, status_code=status.HTTP_201_CREATED)
def register(
    request_dto: RegisterUserRequest,
    repos: Repositories = Depends(get_repositories),
    hasher: PasswordHasher = Depends(get_hasher),
) -> RegisterUserResponse:
    use_case = RegisterUser(
        user_repository=repos.users,
        waiter_repository=repos.waiters,
        hasher=hasher,
    )
    return use_case.execute(request_dto, approved=False)


@router.get("/session", response_model=SessionResponse)
def current_user(
    session: SessionClaims = Depends(require_session),
    repos: Repositories = Depends(get_repositories),
) -> SessionResponse:
    user = repos.users.get(UserId(session.user_id))
    if user is None:
        raise UserNotFoundError(f"user {session.user_id} no longer exists")
    return SessionResponse(user=to_user_response(user), expiresAt=session.expires_at)
