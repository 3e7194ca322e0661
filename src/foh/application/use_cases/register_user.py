from __future__ import annotations

from uuid import uuid4

from foh.application.dto.requests import RegisterUserRequest
from foh.application.dto.responses import RegisterUserResponse
from foh.application.mappers.user_mapper import to_user_response
from foh.application.ports.repositories import UserRepository, WaiterRepository
from foh.application.ports.security import PasswordHasher
from foh.domain.common.ids import UserId, WaiterId
from foh.domain.user.entities import Role, User, UserStatus, Waiter


class EmailAlreadyRegisteredError(Exception):
    pass


def ensure_waiter_profile(user: User, waiter_repository: WaiterRepository) -> Waiter | None:
    """Approved waiter accounts get a waiter profile exactly once."""
    if user.role != Role.WAITER or not user.is_approved:
        return None
    existing = waiter_repository.get_by_user_id(user.user_id)
    if existing is not None:
        return existing
    waiter = Waiter(
        waiter_id=WaiterId(f"wtr_{uuid4().hex[:12]}"),
        name=user.name,
        user_id=user.user_id,
    )
    waiter_repository.add(waiter)
    return waiter


class RegisterUser:
    def __init__(
        self,
        user_repository: UserRepository,
        waiter_repository: WaiterRepository,
        hasher: PasswordHasher,
    ) -> None:
        self._user_repository = user_repository
        self._waiter_repository = waiter_repository
        self._hasher = hasher

    def execute(self, request_dto: RegisterUserRequest, approved: bool = False) -> RegisterUserResponse:
        """Self sign-up leaves the account pending; admins create approved accounts."""
        email = request_dto.email.strip().lower()
        if self._user_repository.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(f"email {email} is already registered")

        user = User(
            user_id=UserId(f"usr_{uuid4().hex[:12]}"),
            name=request_dto.name.strip(),
            email=email,
            role=request_dto.role,
            password_hash=self._hasher.hash(request_dto.password),
            status=UserStatus.APPROVED if approved else UserStatus.PENDING,
        )
        self._user_repository.add(user)
        ensure_waiter_profile(user, self._waiter_repository)
        return RegisterUserResponse(user=to_user_response(user), pending=not user.is_approved)
