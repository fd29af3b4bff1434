"""Pass-through proxy for every other backend-bound path.

Requests already in the backend's dialect are forwarded almost untouched;
only a missing ``model`` on chat completions is filled in. Response bytes
are streamed back verbatim.
"""

import json
import logging
from typing import AsyncIterator

import httpx
from fastapi import Request
from fastapi.responses import Response, StreamingResponse

from ...core.backend import (
    filter_response_headers,
    format_httpx_error,
    is_chat_completions_path,
    strip_version_prefix,
)
from ...core.cors import error_json, with_cors
from ..state import configuration_error, get_backend_client, get_settings

logger = logging.getLogger("zai-proxy")


def inject_default_model(body: bytes, default_model: str) -> bytes:
    """Set ``model`` on a chat completions body when the client left it out."""
    payload = json.loads(body or b"{}")
    if isinstance(payload, dict) and not payload.get("model"):
        payload["model"] = default_model
        logger.debug(f"Injected default model {default_model}")
    return json.dumps(payload).encode("utf-8")


async def proxy_request(request: Request) -> Response:
    """Forward any other request to the backend's native path space."""
    settings = get_settings(request)
    if not settings.backend.has_credentials:
        return configuration_error()
    client = get_backend_client(request)

    path = request.url.path
    logger.info(f"Proxying {request.method} {path}")

    try:
        content = await request.body()
        if request.method == "POST" and is_chat_completions_path(strip_version_prefix(path)):
            content = inject_default_model(content, settings.backend.default_model)

        upstream_response = await client.open_stream(
            request.method,
            path,
            request.url.query,
            content=content,
            accept=request.headers.get("accept"),
        )
    except httpx.RequestError as exc:
        message = format_httpx_error(exc)
        logger.error(f"Proxy error: {message}")
        return error_json(message, "proxy_error", status_code=500)
    except Exception as exc:
        logger.exception(f"Proxy error: {exc}")
        return error_json(str(exc) or "Internal proxy error", "proxy_error", status_code=500)

    logger.info(f"Backend responded {upstream_response.status_code} for {request.method} {path}")

    async def _iter_response() -> AsyncIterator[bytes]:
        try:
            async for chunk in upstream_response.aiter_raw():
                yield chunk
        finally:
            await upstream_response.aclose()

    return StreamingResponse(
        _iter_response(),
        status_code=upstream_response.status_code,
        headers=with_cors(filter_response_headers(upstream_response.headers)),
    )
