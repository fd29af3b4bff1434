"""Cross-origin headers attached to every response the proxy produces."""

from typing import Any, Mapping, Optional

from fastapi.responses import JSONResponse, Response

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, Accept",
    "Access-Control-Max-Age": "86400",
}


def cors_headers() -> dict[str, str]:
    return dict(CORS_HEADERS)


def with_cors(headers: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Merge CORS headers over ``headers``; CORS values win on conflicts."""
    cors_names = {name.lower() for name in CORS_HEADERS}
    merged = {
        key: value
        for key, value in (headers or {}).items()
        if key.lower() not in cors_names
    }
    merged.update(CORS_HEADERS)
    return merged


def cors_json(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=cors_headers())


def error_json(
    message: str,
    error_type: str,
    status_code: int = 500,
    **extra: Any,
) -> JSONResponse:
    """Build the ``{"error": {...}}`` envelope shared by every failure path."""
    error: dict[str, Any] = {"message": message, "type": error_type}
    error.update(extra)
    return cors_json({"error": error}, status_code=status_code)


def preflight_response() -> Response:
    return Response(status_code=204, headers=cors_headers())
