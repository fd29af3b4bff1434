"""API routes for the proxy."""

from .completions import completions
from .health import health_check, preflight
from .models import list_models
from .passthrough import proxy_request
from .responses import responses_endpoint

__all__ = [
    "completions",
    "health_check",
    "list_models",
    "preflight",
    "proxy_request",
    "responses_endpoint",
]
