"""Health check and CORS preflight endpoints."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from ...core.cors import cors_json, preflight_response
from ..state import get_settings

logger = logging.getLogger("zai-proxy")


async def health_check(request: Request) -> JSONResponse:
    """Report proxy status.

    GET / and GET /health
    """
    settings = get_settings(request)
    return cors_json({
        "status": "ok",
        "service": settings.service_name,
        "default_model": settings.backend.default_model,
        "backend": settings.backend.base_url,
        "rate_limit_info": settings.rate_limit_info,
    })


async def preflight(request: Request) -> Response:
    """Answer a CORS preflight for any path with 204 and CORS headers only."""
    logger.debug(f"CORS preflight for {request.url.path}")
    return preflight_response()
