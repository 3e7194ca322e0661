"""Role based access rules for the dashboard pages.

The table is evaluated top to bottom and the first matching prefix decides.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from foh.domain.user.entities import Role

LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
UNAUTHORIZED_PATH = "/unauthorized"

# Paths that are not pages and are never redirected.
PASSTHROUGH_PREFIXES = ("/api", "/health", "/metrics", "/ws", "/docs", "/openapi.json")

ACCESS_POLICY: tuple[tuple[str, frozenset[Role]], ...] = (
    ("/admin", frozenset({Role.ADMIN})),
    ("/manager", frozenset({Role.MANAGER, Role.ADMIN})),
    ("/waiter", frozenset({Role.WAITER, Role.ADMIN})),
    ("/kitchen", frozenset({Role.KITCHEN, Role.ADMIN})),
)


class AccessOutcome(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    location: str | None = None

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(outcome=AccessOutcome.ALLOW)

    @classmethod
    def redirect(cls, location: str) -> AccessDecision:
        return cls(outcome=AccessOutcome.REDIRECT, location=location)


def dashboard_path(role: Role) -> str:
    return f"/{role.value}"


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def required_roles(path: str) -> frozenset[Role] | None:
    for prefix, roles in ACCESS_POLICY:
        if _matches(path, prefix):
            return roles
    return None


def decide(path: str, role: Role | None) -> AccessDecision:
    if any(_matches(path, prefix) for prefix in PASSTHROUGH_PREFIXES):
        return AccessDecision.allow()

    if path == SIGNUP_PATH:
        return AccessDecision.redirect(LOGIN_PATH)

    allowed = required_roles(path)
    if role is None:
        if allowed is not None or path == "/":
            return AccessDecision.redirect(LOGIN_PATH)
        return AccessDecision.allow()

    # public pages bounce signed-in users to their dashboard
    if path in ("/", LOGIN_PATH, UNAUTHORIZED_PATH):
        return AccessDecision.redirect(dashboard_path(role))
    if allowed is not None and role not in allowed:
        return AccessDecision.redirect(UNAUTHORIZED_PATH)
    return AccessDecision.allow()
