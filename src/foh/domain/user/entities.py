from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from foh.domain.common.ids import UserId, WaiterId


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    WAITER = "waiter"
    KITCHEN = "kitchen"


class UserStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"


@dataclass(frozen=True)
class User:
    user_id: UserId
    name: str
    email: str
    role: Role
    password_hash: str
    status: UserStatus

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if "@" not in self.email:
            raise ValueError("email must contain '@'")

    @property
    def is_approved(self) -> bool:
        return self.status == UserStatus.APPROVED

    def with_status(self, status: UserStatus) -> User:
        return replace(self, status=status)


@dataclass(frozen=True)
class Waiter:
    waiter_id: WaiterId
    name: str
    user_id: UserId | None
