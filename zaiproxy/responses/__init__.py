"""Responses API support for the proxy.

Requests to ``/v1/responses`` are translated to Chat Completions, sent to
the backend, and the chat response is translated back.
"""

from .translator import (
    FALLBACK_USER_MESSAGE,
    build_internal_error,
    build_messages,
    chat_response_to_response,
    content_part_text,
    convert_input_item,
    responses_to_chat_request,
    tool_calls_to_output,
)

__all__ = [
    "FALLBACK_USER_MESSAGE",
    "build_internal_error",
    "build_messages",
    "chat_response_to_response",
    "content_part_text",
    "convert_input_item",
    "responses_to_chat_request",
    "tool_calls_to_output",
]
