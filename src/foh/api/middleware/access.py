from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from foh.application.ports.security import SessionTokenCodec
from foh.domain.access.policy import AccessOutcome, decide
from foh.infrastructure.security.tokens import SESSION_COOKIE_NAME

logger = logging.getLogger(__name__)


def set_session_cookie(response: Response, token: str, max_age: int, secure: bool) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=max_age,
        httponly=True,
        secure=secure,
        samesite="lax",
        path="/",
    )


class AccessControlMiddleware(BaseHTTPMiddleware):
    """Decode the session cookie, gate page routes by role and keep sessions fresh."""

    async def dispatch(self, request: Request, call_next):
        codec: SessionTokenCodec = request.app.state.codec
        settings = request.app.state.settings

        session = None
        token = request.cookies.get(SESSION_COOKIE_NAME)
        if token:
            session = codec.decode(token)
        request.state.session = session

        decision = decide(request.url.path, session.role if session else None)
        if decision.outcome == AccessOutcome.REDIRECT and decision.location:
            logger.info(
                "access_redirect",
                extra={"path": request.url.path, "location": decision.location},
            )
            response: Response = RedirectResponse(decision.location, status_code=307)
        else:
            response = await call_next(request)

        if session is not None and codec.needs_refresh(session):
            fresh_token, _ = codec.issue(
                user_id=session.user_id,
                name=session.name,
                role=session.role,
                email=session.email,
            )
            set_session_cookie(
                response,
                fresh_token,
                max_age=settings.session_ttl_minutes * 60,
                secure=settings.secure_cookies,
            )
        return response
