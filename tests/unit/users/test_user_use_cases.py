from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fakes import PlainPasswordHasher

from foh.application.dto.requests import RegisterUserRequest
from foh.application.use_cases.login_user import (
    AccountPendingApprovalError,
    InvalidCredentialsError,
    LoginUser,
)
from foh.application.use_cases.manage_users import (
    DeleteUser,
    ListUsers,
    UpdateUserStatus,
    UserNotFoundError,
)
from foh.application.use_cases.register_user import EmailAlreadyRegisteredError, RegisterUser
from foh.domain.common.ids import UserId
from foh.domain.user.entities import Role, UserStatus
from foh.infrastructure.security.tokens import JoseSessionTokenCodec


def _register(store, email: str = "Ravi@Example.com", role: Role = Role.WAITER, approved: bool = False):
    return RegisterUser(
        user_repository=store.users,
        waiter_repository=store.waiters,
        hasher=PlainPasswordHasher(),
    ).execute(
        RegisterUserRequest(name="Ravi", email=email, password="secret1", role=role),
        approved=approved,
    )


def _login(store, email: str, password: str):
    return LoginUser(
        user_repository=store.users,
        hasher=PlainPasswordHasher(),
        codec=JoseSessionTokenCodec("test-secret"),
    ).execute(email, password)


def test_self_registration_is_pending_without_waiter_profile(store) -> None:
    response = _register(store)

    assert response.pending is True
    assert response.user.email == "ravi@example.com"
    assert store.waiters.count() == 0


def test_duplicate_email_is_rejected_case_insensitively(store) -> None:
    _register(store)

    with pytest.raises(EmailAlreadyRegisteredError):
        _register(store, email="RAVI@example.com")


def test_admin_created_waiter_gets_profile(store) -> None:
    response = _register(store, approved=True)

    assert response.pending is False
    waiter = store.waiters.get_by_user_id(UserId(response.user.userId))
    assert waiter is not None
    assert waiter.name == "Ravi"


def test_approval_creates_waiter_profile_once(store) -> None:
    user_id = UserId(_register(store).user.userId)
    use_case = UpdateUserStatus(user_repository=store.users, waiter_repository=store.waiters)

    use_case.execute(user_id, UserStatus.APPROVED)
    use_case.execute(user_id, UserStatus.APPROVED)

    assert store.waiters.count() == 1


def test_login_flow(store) -> None:
    _register(store, role=Role.MANAGER)

    with pytest.raises(AccountPendingApprovalError):
        _login(store, "ravi@example.com", "secret1")

    store.users.update(store.users.get_by_email("ravi@example.com").with_status(UserStatus.APPROVED))
    result = _login(store, " RAVI@example.com ", "secret1")

    assert result.session.user.role == "manager"
    claims = JoseSessionTokenCodec("test-secret").decode(result.token)
    assert claims.email == "ravi@example.com"
    assert claims.role == Role.MANAGER


@pytest.mark.parametrize(
    ("email", "password"),
    [("ravi@example.com", "wrong-password"), ("nobody@example.com", "secret1")],
)
def test_bad_credentials_share_one_error(store, email: str, password: str) -> None:
    _register(store, approved=True)

    with pytest.raises(InvalidCredentialsError) as excinfo:
        _login(store, email, password)
    assert str(excinfo.value) == "invalid email or password"


def test_list_and_delete_users(store) -> None:
    waiter_user = _register(store, approved=True).user
    _register(store, email="kiran@example.com", role=Role.KITCHEN)

    pending = ListUsers(store.users).execute(status=UserStatus.PENDING)
    assert [user.email for user in pending] == ["kiran@example.com"]

    DeleteUser(user_repository=store.users, waiter_repository=store.waiters).execute(
        UserId(waiter_user.userId)
    )
    assert store.users.get(UserId(waiter_user.userId)) is None
    assert store.waiters.count() == 0

    with pytest.raises(UserNotFoundError):
        DeleteUser(user_repository=store.users, waiter_repository=store.waiters).execute(
            UserId(waiter_user.userId)
        )
