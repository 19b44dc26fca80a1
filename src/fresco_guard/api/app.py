"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fresco_guard.api.auth import router as auth_router
from fresco_guard.api.camera import router as camera_router
from fresco_guard.api.dashboard import router as dashboard_router
from fresco_guard.api.foods import router as foods_router
from fresco_guard.api.notifications import router as notifications_router
from fresco_guard.api.ocr import router as ocr_router
from fresco_guard.api.profile import router as profile_router
from fresco_guard.api.recipes import router as recipes_router
from fresco_guard.api.ui import router as ui_router
from fresco_guard.app_logging import configure_logging
from fresco_guard.containers import AppContainer
from fresco_guard.errors import AppError

INVALID_REQUEST = "Datos inválidos en el request"
INVALID_IDENTIFIER = "Identificador inválido"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="FrescoGuard", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            {"error": validation_message(exc.errors())}, status_code=400
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Error interno del servidor"}, status_code=500)

    app.include_router(ui_router)
    app.include_router(auth_router)
    app.include_router(foods_router)
    app.include_router(camera_router)
    app.include_router(ocr_router)
    app.include_router(recipes_router)
    app.include_router(notifications_router)
    app.include_router(dashboard_router)
    app.include_router(profile_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def validation_message(errors: Sequence[Any]) -> str:
    """Return the message of the first validation error."""
    if not errors:
        return INVALID_REQUEST
    first = errors[0]
    location = tuple(first.get("loc", ()))
    if first.get("type") == "json_invalid" or location == ("body",):
        return INVALID_REQUEST
    if location[:1] == ("path",):
        return INVALID_IDENTIFIER
    message = str(first.get("msg") or INVALID_REQUEST)
    return message.removeprefix("Value error, ")
