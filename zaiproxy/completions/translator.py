"""Translation between the legacy Completions dialect and Chat Completions.

A legacy request carries a single ``prompt``; it becomes a one-message chat
request. The chat response is projected back onto ``text_completion``
choices.
"""

import logging
from typing import Any, Mapping, Optional

from ..core.exceptions import InvalidBackendResponse
from ..core.fields import copy_present, now_millis, now_seconds
from ..types.chat import ChatCompletionResponse, ChatRequest, Choice
from ..types.completions import CompletionChoice, CompletionRequest, CompletionResponse

logger = logging.getLogger("zai-proxy")

SAMPLING_PARAMS = (
    "max_tokens",
    "temperature",
    "top_p",
    "frequency_penalty",
    "presence_penalty",
)


def completion_to_chat_request(
    payload: CompletionRequest, default_model: str
) -> ChatRequest:
    """Convert a legacy completions request to a chat request."""
    prompt = payload.get("prompt")
    request: ChatRequest = {
        "model": payload.get("model") or default_model,
        "messages": [
            {"role": "user", "content": prompt if prompt is not None else ""},
        ],
    }
    copy_present(request, payload, SAMPLING_PARAMS)
    return request


def _choice_text(choice: Choice) -> str:
    message = choice.get("message")
    content = message.get("content") if isinstance(message, Mapping) else None
    return content or choice.get("text") or ""


def chat_response_to_completion(
    data: ChatCompletionResponse,
    request_model: Optional[str],
    default_model: str,
) -> CompletionResponse:
    """Convert a chat completion response to a legacy completion.

    Raises:
        InvalidBackendResponse: if the backend omitted the ``choices`` list.
    """
    choices = data.get("choices")
    if not isinstance(choices, list):
        logger.error(f"Invalid backend response - missing or invalid choices: {data}")
        raise InvalidBackendResponse("Invalid response from backend API")

    completion_choices: list[CompletionChoice] = []
    for choice in choices:
        if not isinstance(choice, Mapping):
            choice = {}
        completion_choices.append({
            "index": choice.get("index"),
            "text": _choice_text(choice),
            "finish_reason": choice.get("finish_reason"),
        })

    response: CompletionResponse = {
        "id": data.get("id") or f"cmpl-{now_millis()}",
        "object": "text_completion",
        "created": data.get("created") or now_seconds(),
        "model": data.get("model") or request_model or default_model,
        "choices": completion_choices,
    }
    if "usage" in data:
        response["usage"] = data["usage"]
    return response


def build_api_error(status_code: int, error_text: str) -> dict[str, Any]:
    """Wrap a backend error body in the legacy ``api_error`` envelope."""
    return {
        "error": {
            "message": f"Backend API error: {status_code} {error_text}",
            "type": "api_error",
            "param": None,
            "code": status_code,
        }
    }
