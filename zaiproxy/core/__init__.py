"""Core module initialization."""

from .backend import (
    Backend,
    BackendClient,
    build_outbound_headers,
    filter_response_headers,
    format_httpx_error,
    is_chat_completions_path,
    strip_version_prefix,
)
from .cors import cors_headers, cors_json, error_json, preflight_response, with_cors
from .exceptions import ConfigurationError, InvalidBackendResponse, ProxyError
from .roles import normalize_role

__all__ = [
    "Backend",
    "BackendClient",
    "ConfigurationError",
    "InvalidBackendResponse",
    "ProxyError",
    "build_outbound_headers",
    "cors_headers",
    "cors_json",
    "error_json",
    "filter_response_headers",
    "format_httpx_error",
    "is_chat_completions_path",
    "normalize_role",
    "preflight_response",
    "strip_version_prefix",
    "with_cors",
]
