from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from foh.application.ports.security import SessionClaims, SessionTokenCodec
from foh.domain.user.entities import Role

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"
ALGORITHM = "HS256"


class JoseSessionTokenCodec(SessionTokenCodec):
    """HS256 session tokens carrying {id, name, role, email, iat, exp}."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=1),
        refresh_window: timedelta = timedelta(minutes=15),
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._refresh_window = refresh_window

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: str, name: str, role: Role, email: str) -> tuple[str, SessionClaims]:
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        expires_at = issued_at + self._ttl
        token = jwt.encode(
            {
                "id": user_id,
                "name": name,
                "role": role.value,
                "email": email,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            },
            self._secret,
            algorithm=ALGORITHM,
        )
        claims = SessionClaims(
            user_id=user_id,
            name=name,
            role=role,
            email=email,
            issued_at=issued_at,
            expires_at=expires_at,
        )
        return token, claims

    def decode(self, token: str) -> SessionClaims | None:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
            return SessionClaims(
                user_id=str(payload["id"]),
                name=str(payload["name"]),
                role=Role(payload["role"]),
                email=str(payload["email"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (JWTError, KeyError, ValueError, TypeError):
            logger.info("session_token_rejected")
            return None

    def needs_refresh(self, claims: SessionClaims, now: datetime | None = None) -> bool:
        current = now or datetime.now(timezone.utc)
        return claims.expires_at - current < self._refresh_window
