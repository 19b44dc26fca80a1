"""Authentication workflows on top of the identity provider."""

import base64
import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import Protocol

from fresco_guard.domain.models import (
    PLAN_FREE,
    AuthSession,
    AuthUser,
    CurrentUser,
)
from fresco_guard.errors import AppError, AuthProviderError, StorageError
from fresco_guard.services.profiles import UserRepository

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/api/auth/callback"

EMAIL_TAKEN = "Este correo electrónico ya está registrado"
UNKNOWN_EMAIL = "No existe una cuenta con ese correo electrónico"
WRONG_CREDENTIALS = "Correo electrónico o contraseña incorrectos"


@dataclass(frozen=True)
class AuthResult:
    """User and session returned by sign-up or sign-in."""

    user: AuthUser | None
    session: AuthSession | None


@dataclass(frozen=True)
class RequestContext:
    """Per-request authentication state passed explicitly to handlers."""

    user: CurrentUser | None = None
    access_token: str | None = None


class AuthGateway(Protocol):
    """Interface for the identity provider."""

    def sign_up(
        self, email: str, password: str, name: str | None, redirect_to: str
    ) -> AuthResult:
        """Register a user with email and password."""

    def sign_in(self, email: str, password: str) -> AuthResult:
        """Authenticate with email and password."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user of a valid access token."""

    def refresh(self, refresh_token: str) -> AuthSession | None:
        """Exchange a refresh token for a new session."""

    def google_authorize_url(self, redirect_to: str, code_challenge: str) -> str:
        """Return the provider URL that starts Google sign-in."""

    def exchange_code(
        self, code: str, code_verifier: str, redirect_to: str
    ) -> AuthResult:
        """Exchange an OAuth authorization code for a session."""


@dataclass
class AuthService:
    """Sign-up, sign-in and session resolution with localized errors."""

    gateway: AuthGateway
    users: UserRepository
    site_url: str

    def sign_up(self, email: str, password: str, name: str | None) -> AuthResult:
        """Register a new account."""
        try:
            result = self.gateway.sign_up(
                email=email.strip().lower(),
                password=password,
                name=name,
                redirect_to=f"{self.site_url.rstrip('/')}{CALLBACK_PATH}",
            )
        except AuthProviderError as exc:
            logger.warning("Sign-up rejected: %s", exc.message)
            raise AuthProviderError(signup_error_message(exc.message)) from exc
        if result.user is None:
            raise AppError("Error al registrar usuario")
        return result

    def sign_in(self, email: str, password: str) -> AuthResult:
        """Authenticate an existing account."""
        normalized = email.strip().lower()
        try:
            result = self.gateway.sign_in(normalized, password)
        except AuthProviderError as exc:
            message = exc.message
            if _is_invalid_credentials(message):
                message = (
                    WRONG_CREDENTIALS
                    if self.users.email_exists(normalized)
                    else UNKNOWN_EMAIL
                )
            raise AuthProviderError(message, status_code=401) from exc
        if result.user is None:
            raise AppError("Error al iniciar sesión")
        return result

    def sign_out(self, access_token: str) -> None:
        """End the caller's session."""
        self.gateway.sign_out(access_token)

    def refresh(self, refresh_token: str) -> AuthSession | None:
        """Return a new session for a refresh token, if it is still valid."""
        return self.gateway.refresh(refresh_token)

    def resolve(self, access_token: str) -> CurrentUser | None:
        """Return the current user for an access token."""
        auth_user = self.gateway.get_user(access_token)
        if auth_user is None:
            return None
        try:
            profile = self.users.get_profile(auth_user.id)
        except StorageError:
            logger.warning(
                "Failed to load profile, using defaults",
                extra={"user_id": str(auth_user.id)},
            )
            profile = None
        else:
            if profile is None:
                logger.warning(
                    "Profile row missing for user",
                    extra={"user_id": str(auth_user.id)},
                )
        if profile is None:
            return CurrentUser(
                id=auth_user.id,
                email=auth_user.email,
                name=auth_user.name,
                image=auth_user.avatar_url,
                plan=PLAN_FREE,
            )
        return CurrentUser(
            id=auth_user.id,
            email=profile.email or auth_user.email,
            name=profile.name or auth_user.name,
            image=profile.image or auth_user.avatar_url,
            plan=profile.plan or PLAN_FREE,
            notifications_enabled=profile.notifications_enabled,
            food_count=profile.food_count,
        )

    def google_sign_in(self, origin: str) -> tuple[str, str]:
        """Return the Google authorize URL and the PKCE verifier to keep."""
        verifier = secrets.token_urlsafe(64)
        url = self.gateway.google_authorize_url(
            redirect_to=f"{origin.rstrip('/')}{CALLBACK_PATH}",
            code_challenge=_code_challenge(verifier),
        )
        return url, verifier

    def complete_google_sign_in(
        self, code: str, verifier: str, origin: str
    ) -> AuthSession | None:
        """Exchange the OAuth callback code for a session."""
        result = self.gateway.exchange_code(
            code=code,
            code_verifier=verifier,
            redirect_to=f"{origin.rstrip('/')}{CALLBACK_PATH}",
        )
        return result.session


def signup_error_message(raw: str) -> str:
    """Translate provider sign-up errors to Spanish."""
    lowered = raw.lower()
    if any(
        marker in lowered
        for marker in (
            "user already registered",
            "already exists",
            "duplicate",
            "23505",
            "email address is already registered",
        )
    ):
        return EMAIL_TAKEN
    if "password" in lowered and any(
        marker in lowered for marker in ("too short", "at least", "minimum")
    ):
        return "La contraseña debe tener al menos 6 caracteres"
    if "email" in lowered and any(
        marker in lowered for marker in ("invalid", "format", "malformed")
    ):
        return "Correo electrónico inválido"
    if "database error" in lowered:
        return (
            "Error al crear usuario. "
            "Verifica que la base de datos esté configurada correctamente."
        )
    return raw


def _is_invalid_credentials(raw: str) -> bool:
    lowered = raw.lower()
    return "invalid login credentials" in lowered or (
        "invalid email or password" in lowered
    )


def _code_challenge(verifier: str) -> str:
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
