"""API module for the proxy."""

from .routes import (
    completions,
    health_check,
    list_models,
    preflight,
    proxy_request,
    responses_endpoint,
)

__all__ = [
    "completions",
    "health_check",
    "list_models",
    "preflight",
    "proxy_request",
    "responses_endpoint",
]
