"""Legacy ``/v1/completions`` support."""

from .translator import (
    build_api_error,
    chat_response_to_completion,
    completion_to_chat_request,
)

__all__ = [
    "build_api_error",
    "chat_response_to_completion",
    "completion_to_chat_request",
]
