"""Supabase Auth gateway."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError, Client, ClientOptions, create_client

from fresco_guard.domain.models import AuthSession, AuthUser
from fresco_guard.errors import AuthProviderError
from fresco_guard.services.auth import AuthGateway, AuthResult


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Stateless wrapper around Supabase Auth.

    Each call gets its own client so sessions never leak between requests.
    """

    supabase_url: str
    anon_key: str
    client_factory: Callable[[], Client] | None = None

    def sign_up(
        self, email: str, password: str, name: str | None, redirect_to: str
    ) -> AuthResult:
        """Register a user with email and password."""
        credentials: dict[str, object] = {
            "email": email,
            "password": password,
            "options": {
                "data": {"name": name} if name else {},
                "email_redirect_to": redirect_to,
            },
        }
        try:
            response = self._client().auth.sign_up(credentials)
        except AuthError as exc:
            raise AuthProviderError(exc.message) from exc
        return _to_result(response.user, response.session)

    def sign_in(self, email: str, password: str) -> AuthResult:
        """Authenticate with email and password."""
        try:
            response = self._client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise AuthProviderError(exc.message) from exc
        return _to_result(response.user, response.session)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            self._client().auth.admin.sign_out(access_token)
        except AuthError as exc:
            raise AuthProviderError(exc.message) from exc

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user of a valid access token."""
        try:
            response = self._client().auth.get_user(access_token)
        except AuthError:
            return None
        if response is None or response.user is None:
            return None
        return _to_user(response.user)

    def refresh(self, refresh_token: str) -> AuthSession | None:
        """Exchange a refresh token for a new session."""
        try:
            response = self._client().auth.refresh_session(refresh_token)
        except AuthError:
            return None
        return _to_session(response.session)

    def google_authorize_url(self, redirect_to: str, code_challenge: str) -> str:
        """Return the Supabase URL that starts Google sign-in."""
        url = httpx.URL(
            f"{self.supabase_url.rstrip('/')}/auth/v1/authorize",
            params={
                "provider": "google",
                "redirect_to": redirect_to,
                "code_challenge": code_challenge,
                "code_challenge_method": "s256",
            },
        )
        return str(url)

    def exchange_code(
        self, code: str, code_verifier: str, redirect_to: str
    ) -> AuthResult:
        """Exchange an OAuth authorization code for a session."""
        try:
            response = self._client().auth.exchange_code_for_session(
                {
                    "auth_code": code,
                    "code_verifier": code_verifier,
                    "redirect_to": redirect_to,
                }
            )
        except AuthError as exc:
            raise AuthProviderError(exc.message) from exc
        return _to_result(response.user, response.session)

    def _client(self) -> Client:
        if self.client_factory is not None:
            return self.client_factory()
        return create_client(
            self.supabase_url,
            self.anon_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )


def _to_result(user: object | None, session: object | None) -> AuthResult:
    return AuthResult(
        user=_to_user(user) if user is not None else None,
        session=_to_session(session),
    )


def _to_user(user: object) -> AuthUser:
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthUser(
        id=UUID(str(user.id)),
        email=getattr(user, "email", None),
        name=metadata.get("name") or metadata.get("full_name"),
        avatar_url=metadata.get("avatar_url") or metadata.get("picture"),
    )


def _to_session(session: object | None) -> AuthSession | None:
    if session is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=getattr(session, "expires_in", None),
    )
