from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from foh.domain.user.entities import Role


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    name: str
    role: Role
    email: str
    issued_at: datetime
    expires_at: datetime


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


class SessionTokenCodec(Protocol):
    def issue(self, user_id: str, name: str, role: Role, email: str) -> tuple[str, SessionClaims]: ...

    def decode(self, token: str) -> SessionClaims | None: ...

    def needs_refresh(self, claims: SessionClaims, now: datetime | None = None) -> bool: ...
