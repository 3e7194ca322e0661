from __future__ import annotations

from foh.application.dto.responses import UserResponse
from foh.application.mappers.user_mapper import to_user_response
from foh.application.ports.repositories import UserRepository, WaiterRepository
from foh.application.use_cases.register_user import ensure_waiter_profile
from foh.domain.common.ids import UserId
from foh.domain.user.entities import UserStatus


class UserNotFoundError(Exception):
    pass


class ListUsers:
    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    def execute(self, status: UserStatus | None = None) -> list[UserResponse]:
        users = self._user_repository.list_all()
        if status is not None:
            users = [user for user in users if user.status == status]
        return [to_user_response(user) for user in sorted(users, key=lambda user: user.email)]


class UpdateUserStatus:
    def __init__(
        self,
        user_repository: UserRepository,
        waiter_repository: WaiterRepository,
    ) -> None:
        self._user_repository = user_repository
        self._waiter_repository = waiter_repository

    def execute(self, user_id: UserId, status: UserStatus) -> UserResponse:
        user = self._user_repository.get(user_id)
        if user is None:
            raise UserNotFoundError(f"user {user_id} not found")
        updated = user.with_status(status)
        self._user_repository.update(updated)
        ensure_waiter_profile(updated, self._waiter_repository)
        return to_user_response(updated)


class DeleteUser:
    def __init__(
        self,
        user_repository: UserRepository,
        waiter_repository: WaiterRepository,
    ) -> None:
        self._user_repository = user_repository
        self._waiter_repository = waiter_repository

    def execute(self, user_id: UserId) -> None:
        if self._user_repository.get(user_id) is None:
            raise UserNotFoundError(f"user {user_id} not found")
        # orders keep the waiter id and later render the waiter as unknown
        self._waiter_repository.delete_by_user_id(user_id)
        self._user_repository.delete(user_id)
