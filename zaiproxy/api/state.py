"""Access to the per-app settings and backend client.

Both are attached to ``app.state`` by :func:`zaiproxy.main.create_app`, so
handlers never reach for module-level globals.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from ..config_loader import ProxySettings
from ..core.backend import BackendClient
from ..core.cors import error_json


def get_settings(request: Request) -> ProxySettings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not initialized. Was the app built with create_app()?")
    return settings


def get_backend_client(request: Request) -> BackendClient:
    client = getattr(request.app.state, "backend_client", None)
    if client is None:
        raise RuntimeError("Backend client not initialized. Was the app built with create_app()?")
    return client


def configuration_error() -> JSONResponse:
    """500 returned by every backend-bound route when no API key is set."""
    return error_json(
        "Backend API key is not configured (set ZAI_API_KEY)",
        "configuration_error",
        status_code=500,
    )
