"""Request-scoped dependencies shared by the API routers."""

from collections.abc import Callable

from fastapi import Depends, Header, Request, Response

from fresco_guard.config import Settings
from fresco_guard.containers import AppContainer
from fresco_guard.domain.models import AuthSession, CurrentUser
from fresco_guard.errors import NotAuthenticatedError
from fresco_guard.services.auth import RequestContext

REFRESH_TOKEN_MAX_AGE = 60 * 60 * 24 * 30
OAUTH_VERIFIER_MAX_AGE = 60 * 10
FOOD_AUTH_MESSAGE = "No autenticado. Por favor inicia sesión"


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_request_context(
    request: Request,
    response: Response,
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> RequestContext:
    """Resolve the caller from a bearer token or the session cookies."""
    settings = container.settings
    access_token = _bearer_token(authorization) or request.cookies.get(
        settings.access_token_cookie
    )
    if access_token:
        user = container.auth_service.resolve(access_token)
        if user is not None:
            return RequestContext(user=user, access_token=access_token)

    refresh_token = request.cookies.get(settings.refresh_token_cookie)
    if not refresh_token:
        return RequestContext()
    session = container.auth_service.refresh(refresh_token)
    if session is None:
        return RequestContext()
    user = container.auth_service.resolve(session.access_token)
    if user is None:
        return RequestContext()
    set_session_cookies(response, session, settings)
    return RequestContext(user=user, access_token=session.access_token)


def authenticated_user(
    message: str = "No autenticado",
) -> Callable[[RequestContext], CurrentUser]:
    """Build a dependency that rejects anonymous callers with ``message``."""

    def dependency(
        context: RequestContext = Depends(get_request_context),
    ) -> CurrentUser:
        if context.user is None:
            raise NotAuthenticatedError(message)
        return context.user

    return dependency


require_user = authenticated_user()
require_food_user = authenticated_user(FOOD_AUTH_MESSAGE)


def set_session_cookies(
    response: Response, session: AuthSession, settings: Settings
) -> None:
    """Store the session tokens in httponly cookies."""
    response.set_cookie(
        settings.access_token_cookie,
        session.access_token,
        max_age=session.expires_in,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    response.set_cookie(
        settings.refresh_token_cookie,
        session.refresh_token,
        max_age=REFRESH_TOKEN_MAX_AGE,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.access_token_cookie)
    response.delete_cookie(settings.refresh_token_cookie)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
