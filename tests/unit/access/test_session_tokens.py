from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from foh.domain.user.entities import Role
from foh.infrastructure.security.passwords import BcryptPasswordHasher
from foh.infrastructure.security.tokens import JoseSessionTokenCodec


def test_token_round_trip_carries_session_claims() -> None:
    codec = JoseSessionTokenCodec("test-secret")
    token, issued = codec.issue(user_id="usr_1", name="Asha", role=Role.ADMIN, email="asha@foh.test")

    claims = codec.decode(token)

    assert claims == issued
    assert claims.expires_at - claims.issued_at == timedelta(hours=1)


def test_tampered_or_foreign_tokens_are_rejected() -> None:
    token, _ = JoseSessionTokenCodec("test-secret").issue(
        user_id="usr_1", name="Asha", role=Role.ADMIN, email="asha@foh.test"
    )

    assert JoseSessionTokenCodec("other-secret").decode(token) is None
    assert JoseSessionTokenCodec("test-secret").decode("not-a-token") is None


def test_expired_tokens_are_rejected() -> None:
    codec = JoseSessionTokenCodec("test-secret", ttl=timedelta(seconds=-5))
    token, _ = codec.issue(user_id="usr_1", name="Asha", role=Role.ADMIN, email="asha@foh.test")

    assert codec.decode(token) is None


def test_refresh_window() -> None:
    codec = JoseSessionTokenCodec("test-secret")
    _, claims = codec.issue(user_id="usr_1", name="Asha", role=Role.ADMIN, email="asha@foh.test")

    assert not codec.needs_refresh(claims, now=claims.issued_at)
    assert not codec.needs_refresh(claims, now=claims.expires_at - timedelta(minutes=16))
    assert codec.needs_refresh(claims, now=claims.expires_at - timedelta(minutes=14))


def test_bcrypt_hasher() -> None:
    hasher = BcryptPasswordHasher(rounds=4)
    password_hash = hasher.hash("123456")

    assert password_hash != "123456"
    assert hasher.verify("123456", password_hash)
    assert not hasher.verify("654321", password_hash)
    assert not hasher.verify("123456", "not-a-bcrypt-hash")
