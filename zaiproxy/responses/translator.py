"""Bidirectional translation between the Responses API and Chat Completions.

This module handles:
1. Converting Responses API requests to Chat Completions format
2. Converting Chat Completions responses to Responses API format
3. Tool/function call reconstruction on the way back

The backend only understands flat string content and four roles, so every
input item is collapsed to ``{"role": ..., "content": "<text>"}``.
"""

import json
import logging
from typing import Any, Mapping, Optional, Union

from ..core.fields import copy_present, is_given, now_millis, now_seconds
from ..core.roles import normalize_role
from ..logging import truncate_for_log
from ..types.chat import (
    ChatCompletionResponse,
    ChatMessage,
    ChatRequest,
    ContentPart,
    ResponseMessage,
    ToolCall,
)
from ..types.responses import (
    FunctionCallItem,
    InputItem,
    MessageItem,
    ResponseObject,
    ResponsesRequest,
)

logger = logging.getLogger("zai-proxy")

FALLBACK_USER_MESSAGE = "Please respond."
TEXT_PART_TYPES = ("text", "input_text")


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _as_text(value: Any) -> str:
    """Coerce a part's ``text`` field to a string; missing or empty is ``""``."""
    if isinstance(value, str):
        return value
    if value is None or value is False or value == 0:
        return ""
    return _to_json(value)


def _is_text_part(part: Any) -> bool:
    return isinstance(part, Mapping) and part.get("type") in TEXT_PART_TYPES


# =============================================================================
# Responses API → Chat Completions
# =============================================================================


def content_part_text(part: Union[str, ContentPart]) -> str:
    """Extract text from one content part.

    ``text`` and ``input_text`` parts contribute their ``text`` field; a bare
    string is its own text; any other tag falls back to its JSON form.
    """
    if isinstance(part, str):
        return part
    if _is_text_part(part):
        return _as_text(part.get("text"))
    return _to_json(part)


def _role_message_content(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(content_part_text(part) for part in content)
    return _to_json(content if is_given(content) else "")


def _typed_message_content(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            _as_text(part.get("text")) for part in content if _is_text_part(part)
        )
    return _to_json(content)


def convert_input_item(item: InputItem) -> Optional[ChatMessage]:
    """Convert one Responses input item to a chat message.

    Returns None for shapes the backend has no use for; they are skipped
    without error.
    """
    if isinstance(item, str):
        return {"role": "user", "content": item}
    if not isinstance(item, Mapping):
        return None

    role = item.get("role")
    item_type = item.get("type")

    # OpenAI-style message: {"role": ..., "content": ...}
    if role and ("content" in item or role == "assistant"):
        return {
            "role": normalize_role(role),
            "content": _role_message_content(item.get("content")),
        }

    if item_type in TEXT_PART_TYPES and item.get("text"):
        return {"role": "user", "content": item["text"]}

    # Empty lists and objects still count as content
    if item_type == "message" and is_given(item.get("content")):
        return {
            "role": normalize_role(role or "user"),
            "content": _typed_message_content(item["content"]),
        }

    logger.debug(f"Translator: Skipping unsupported input item: {truncate_for_log(_to_json(item), 200)}")
    return None


def build_messages(
    instructions: Any, input_: Union[str, list[InputItem], None]
) -> list[ChatMessage]:
    """Build the backend message list from ``instructions`` and ``input``."""
    messages: list[ChatMessage] = []

    # 1. Instructions become the system message
    if isinstance(instructions, str) and instructions:
        messages.append({"role": "system", "content": instructions})

    # 2./3. Convert input to messages
    if isinstance(input_, str):
        messages.append({"role": "user", "content": input_})
    elif isinstance(input_, list):
        for item in input_:
            message = convert_input_item(item)
            if message is not None:
                messages.append(message)

    # 4. The backend expects at least one user turn
    if not any(message["role"] == "user" for message in messages):
        logger.debug("Translator: No user message found, adding fallback")
        messages.append({"role": "user", "content": FALLBACK_USER_MESSAGE})

    # 5. Final pass over every role, including ones added verbatim above
    return [
        {**message, "role": normalize_role(message["role"])}
        for message in messages
    ]


def responses_to_chat_request(
    payload: ResponsesRequest, default_model: str
) -> ChatRequest:
    """Convert a Responses API request to a Chat Completions request."""
    messages = build_messages(payload.get("instructions"), payload.get("input"))
    logger.debug(f"Translator: Final sanitized messages: {truncate_for_log(_to_json(messages))}")

    request: ChatRequest = {
        "model": payload.get("model") or default_model,
        "messages": messages,
    }

    # max_output_tokens is copied after max_tokens and wins when both are set
    copy_present(
        request,
        payload,
        ("temperature", "max_tokens", "max_output_tokens", "top_p"),
        rename={"max_output_tokens": "max_tokens"},
    )

    # Structured output: response_format wins over text.format
    text_config = payload.get("text")
    if isinstance(text_config, Mapping) and isinstance(text_config.get("format"), Mapping):
        request["response_format"] = text_config["format"]
    if is_given(payload.get("response_format")):
        request["response_format"] = payload["response_format"]

    tools = payload.get("tools")
    if isinstance(tools, list):
        request["tools"] = tools
    if "tool_choice" in payload:
        request["tool_choice"] = payload["tool_choice"]

    return request


# =============================================================================
# Chat Completions → Responses API
# =============================================================================


def _first_message(completion: ChatCompletionResponse) -> ResponseMessage:
    choices = completion.get("choices")
    if not isinstance(choices, list) or not choices:
        return {}
    first_choice = choices[0] if isinstance(choices[0], Mapping) else {}
    message = first_choice.get("message")
    return message if isinstance(message, Mapping) else {}


def tool_calls_to_output(tool_calls: list[ToolCall]) -> list[FunctionCallItem]:
    """Convert chat ``tool_calls`` into Responses ``function_call`` items."""
    items: list[FunctionCallItem] = []
    for tool_call in tool_calls:
        if not isinstance(tool_call, Mapping):
            tool_call = {}
        function = tool_call.get("function")
        if not isinstance(function, Mapping):
            function = {}
        items.append({
            "type": "function_call",
            "id": tool_call.get("id"),
            "call_id": tool_call.get("id"),
            "name": function.get("name"),
            "arguments": function.get("arguments"),
        })
    return items


def chat_response_to_response(
    completion: ChatCompletionResponse, chat_request: ChatRequest
) -> ResponseObject:
    """Convert a Chat Completions response to a Responses API envelope.

    Args:
        completion: The backend's chat completion body
        chat_request: The chat request that produced it (model fallback)

    Returns:
        Responses API response object
    """
    message = _first_message(completion)
    content_text = message.get("content") or ""

    message_item: MessageItem = {
        "type": "message",
        "id": f"msg-{now_millis()}",
        "role": "assistant",
        "status": "completed",
        "content": [{"type": "output_text", "text": content_text}],
    }
    response: ResponseObject = {
        "id": completion.get("id") or f"resp-{now_millis()}",
        "object": "response",
        "created": completion.get("created") or now_seconds(),
        "model": completion.get("model") or chat_request.get("model"),
        "output": [message_item],
        "output_text": content_text,
        "status": "completed",
    }
    if "usage" in completion:
        response["usage"] = completion["usage"]

    # Tool calls replace the message item entirely
    tool_calls = message.get("tool_calls")
    if isinstance(tool_calls, list) and tool_calls:
        response["output"] = tool_calls_to_output(tool_calls)

    return response


def build_internal_error(message: str) -> dict[str, Any]:
    return {"error": {"message": message, "type": "internal_error"}}
