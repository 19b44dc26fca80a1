"""Tests for authentication workflows."""

import base64
import hashlib
from urllib.parse import parse_qs, urlparse
from uuid import uuid4

import pytest

from fresco_guard.domain.models import AuthUser
from fresco_guard.errors import AuthProviderError
from fresco_guard.services.auth import (
    EMAIL_TAKEN,
    UNKNOWN_EMAIL,
    WRONG_CREDENTIALS,
    AuthService,
    signup_error_message,
)
from tests.conftest import FakeAuthGateway, InMemoryUserRepository, make_profile


def _service(
    gateway: FakeAuthGateway, users: InMemoryUserRepository | None = None
) -> AuthService:
    return AuthService(
        gateway=gateway,
        users=users or InMemoryUserRepository(),
        site_url="http://localhost:8000",
    )


def test_sign_up_translates_duplicate_email() -> None:
    gateway = FakeAuthGateway()
    service = _service(gateway)
    service.sign_up("ana@example.com", "secreto123", "Ana")

    with pytest.raises(AuthProviderError) as exc_info:
        service.sign_up("ANA@example.com", "secreto123", "Ana")

    assert exc_info.value.message == EMAIL_TAKEN
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Password should be at least 6 characters", "6 caracteres"),
        ("Unable to validate email address: invalid format", "Correo"),
        ("Database error saving new user", "base de datos"),
        ("Something else", "Something else"),
    ],
)
def test_signup_error_message(raw: str, expected: str) -> None:
    assert expected in signup_error_message(raw)


def test_sign_in_distinguishes_unknown_email_from_wrong_password() -> None:
    gateway = FakeAuthGateway()
    users = InMemoryUserRepository()
    profile = users.add(make_profile(email="ana@example.com"))
    gateway.register(AuthUser(id=profile.id, email="ana@example.com", name="Ana"))
    service = _service(gateway, users)

    with pytest.raises(AuthProviderError) as wrong:
        service.sign_in("ana@example.com", "incorrecta")
    with pytest.raises(AuthProviderError) as unknown:
        service.sign_in("nadie@example.com", "incorrecta")

    assert wrong.value.message == WRONG_CREDENTIALS
    assert wrong.value.status_code == 401
    assert unknown.value.message == UNKNOWN_EMAIL


def test_resolve_merges_profile() -> None:
    gateway = FakeAuthGateway()
    users = InMemoryUserRepository()
    profile = users.add(
        make_profile(plan="PREMIUM_MONTHLY", notifications_enabled=False, food_count=4)
    )
    session = gateway.register(AuthUser(id=profile.id, email=profile.email, name=None))

    user = _service(gateway, users).resolve(session.access_token)

    assert user is not None
    assert user.name == "Ana"
    assert user.is_premium
    assert user.notifications_enabled is False
    assert user.food_count == 4


def test_resolve_defaults_when_profile_missing() -> None:
    gateway = FakeAuthGateway()
    session = gateway.register(AuthUser(id=uuid4(), email="x@example.com", name="X"))

    user = _service(gateway).resolve(session.access_token)

    assert user is not None
    assert user.plan == "FREE"
    assert user.notifications_enabled is True


def test_resolve_defaults_when_profile_query_fails() -> None:
    gateway = FakeAuthGateway()
    users = InMemoryUserRepository(fail_profile_reads=True)
    profile = users.add(make_profile(plan="PREMIUM_YEARLY"))
    session = gateway.register(
        AuthUser(id=profile.id, email=profile.email, name="Ana")
    )

    user = _service(gateway, users).resolve(session.access_token)

    assert user is not None
    assert user.id == profile.id
    assert user.plan == "FREE"
    assert user.notifications_enabled is True


def test_resolve_unknown_token() -> None:
    assert _service(FakeAuthGateway()).resolve("nope") is None


def test_google_sign_in_uses_pkce() -> None:
    gateway = FakeAuthGateway()
    service = _service(gateway)

    url, verifier = service.google_sign_in("http://testserver")
    query = parse_qs(urlparse(url).query)
    expected = (
        base64.urlsafe_b64encode(hashlib.sha256(verifier.encode()).digest())
        .decode()
        .rstrip("=")
    )

    assert query["code_challenge"] == [expected]
    assert query["redirect_to"] == ["http://testserver/api/auth/callback"]

    session = service.complete_google_sign_in("code-1", verifier, "http://testserver")

    assert session is not None
    assert gateway.exchanges == [
        ("code-1", verifier, "http://testserver/api/auth/callback")
    ]
