from __future__ import annotations

from dataclasses import dataclass

from foh.application.dto.responses import SessionResponse
from foh.application.mappers.user_mapper import to_user_response
from foh.application.ports.repositories import UserRepository
from foh.application.ports.security import PasswordHasher, SessionTokenCodec


class InvalidCredentialsError(Exception):
    pass


class AccountPendingApprovalError(Exception):
    pass


@dataclass(frozen=True)
class LoginResult:
    token: str
    session: SessionResponse


class LoginUser:
    def __init__(
        self,
        user_repository: UserRepository,
        hasher: PasswordHasher,
        codec: SessionTokenCodec,
    ) -> None:
        self._user_repository = user_repository
        self._hasher = hasher
        self._codec = codec

    def execute(self, email: str, password: str) -> LoginResult:
        user = self._user_repository.get_by_email(email.strip().lower())
        # one message for both cases so the endpoint does not reveal which emails exist
        if user is None or not self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError("invalid email or password")
        if not user.is_approved:
            raise AccountPendingApprovalError("account is awaiting approval")

        token, claims = self._codec.issue(
            user_id=str(user.user_id),
            name=user.name,
            role=user.role,
            email=user.email,
        )
        return LoginResult(
            token=token,
            session=SessionResponse(user=to_user_response(user), expiresAt=claims.expires_at),
        )
