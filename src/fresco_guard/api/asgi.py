"""ASGI entrypoint for the FrescoGuard API."""

from fresco_guard.api.app import create_app
from fresco_guard.containers import build_container

app = create_app(build_container())
