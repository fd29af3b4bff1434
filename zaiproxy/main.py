"""Main FastAPI application for the Z.AI proxy."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .api.routes import (
    completions,
    health_check,
    list_models,
    preflight,
    proxy_request,
    responses_endpoint,
)
from .config_loader import ProxySettings, load_settings
from .core.backend import BackendClient

logger = logging.getLogger("zai-proxy")

PASSTHROUGH_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def create_app(
    settings: Optional[ProxySettings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Factory function to create the FastAPI application.

    Args:
        settings: Resolved settings; loaded from config and environment when omitted.
        client: HTTP client for backend calls. When omitted one is created and
            closed with the app's lifespan.

    Returns:
        The configured FastAPI application instance.
    """
    if settings is None:
        settings = load_settings()

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.backend.timeout),
            follow_redirects=False,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Z.AI proxy starting up...")
        logger.info("Configured bind address %s:%s", settings.host, settings.port)
        logger.info("Backend: %s (default model %s)", settings.backend.base_url, settings.backend.default_model)
        try:
            yield
        finally:
            if owns_client:
                await client.aclose()
            logger.info("Z.AI proxy shut down")

    app = FastAPI(
        title="Z.AI OpenAI Proxy",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.backend_client = BackendClient(settings.backend, client)

    # Preflight for every path comes first
    app.options("/{path:path}")(preflight)

    app.get("/")(health_check)
    app.get("/health")(health_check)
    app.get("/v1/models")(list_models)
    app.get("/models")(list_models)
    app.post("/v1/completions")(completions)
    app.post("/v1/responses")(responses_endpoint)
    app.post("/responses")(responses_endpoint)

    # Everything else goes to the backend as-is
    app.api_route("/{path:path}", methods=PASSTHROUGH_METHODS)(proxy_request)

    logger.info("FastAPI application created")
    return app


__all__ = ["create_app"]
