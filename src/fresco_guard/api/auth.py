"""Sign-up, sign-in and session endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from fresco_guard.api.dependencies import (
    OAUTH_VERIFIER_MAX_AGE,
    clear_session_cookies,
    get_request_context,
    set_session_cookies,
)
from fresco_guard.api.schemas import LoginInput, RegisterInput
from fresco_guard.errors import AuthProviderError
from fresco_guard.services.auth import CALLBACK_PATH, AuthResult, RequestContext
from fresco_guard.services.profiles import serialize_user

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup")
async def signup(
    payload: RegisterInput, request: Request, response: Response
) -> dict[str, object]:
    """Register with email and password."""
    container: AppContainer = request.app.state.container
    result = container.auth_service.sign_up(
        email=payload.email or "", password=payload.password or "", name=payload.name
    )
    return _signed_in(result, response, container)


@router.post("/signin")
async def signin(
    payload: LoginInput, request: Request, response: Response
) -> dict[str, object]:
    """Sign in with email and password."""
    container: AppContainer = request.app.state.container
    result = container.auth_service.sign_in(payload.email or "", payload.password or "")
    return _signed_in(result, response, container)


@router.post("/signout")
async def signout(
    request: Request,
    response: Response,
    context: RequestContext = Depends(get_request_context),
) -> dict[str, object]:
    """End the current session and drop the session cookies."""
    container: AppContainer = request.app.state.container
    if context.access_token:
        container.auth_service.sign_out(context.access_token)
    clear_session_cookies(response, container.settings)
    return {"success": True, "message": "Sesión cerrada correctamente"}


@router.get("/user")
async def current_user(
    context: RequestContext = Depends(get_request_context),
) -> dict[str, object]:
    """Report whether the caller is signed in; never fails with 401."""
    if context.user is None:
        return {"authenticated": False, "user": None}
    return {"authenticated": True, "user": serialize_user(context.user)}


@router.get("/google")
async def google_sign_in(request: Request) -> RedirectResponse:
    """Redirect to Google through Supabase with a PKCE challenge."""
    container: AppContainer = request.app.state.container
    url, verifier = container.auth_service.google_sign_in(_origin(request))
    redirect = RedirectResponse(url, status_code=302)
    redirect.set_cookie(
        container.settings.oauth_verifier_cookie,
        verifier,
        max_age=OAUTH_VERIFIER_MAX_AGE,
        httponly=True,
        secure=container.settings.secure_cookies,
        samesite="lax",
        path=CALLBACK_PATH,
    )
    return redirect


@router.get("/callback")
async def oauth_callback(request: Request, code: str | None = None) -> RedirectResponse:
    """Finish Google sign-in and send the user home."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    redirect = RedirectResponse("/", status_code=302)
    verifier = request.cookies.get(settings.oauth_verifier_cookie)
    if code and verifier:
        try:
            session = container.auth_service.complete_google_sign_in(
                code, verifier, _origin(request)
            )
        except AuthProviderError as exc:
            logger.warning("OAuth code exchange failed: %s", exc.message)
        else:
            if session is not None:
                set_session_cookies(redirect, session, settings)
    redirect.delete_cookie(settings.oauth_verifier_cookie, path=CALLBACK_PATH)
    return redirect


def _signed_in(
    result: AuthResult, response: Response, container: AppContainer
) -> dict[str, object]:
    if result.session is not None:
        set_session_cookies(response, result.session, container.settings)
    user = result.user
    return {
        "success": True,
        "user": {
            "id": str(user.id) if user else None,
            "email": user.email if user else None,
            "name": user.name if user else None,
        },
    }


def _origin(request: Request) -> str:
    return str(request.base_url).rstrip("/")
