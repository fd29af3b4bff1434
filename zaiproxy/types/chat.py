"""Types for the canonical Chat Completions dialect.

These follow the OpenAI chat format the backend speaks natively. Backend
responses are treated as opaque data apart from the fields declared here.
"""

from typing import Any, Literal, Union
from typing_extensions import NotRequired, TypedDict


Role = Literal["system", "user", "assistant", "tool"]
"""Roles accepted by the backend.

Clients may also send ``developer`` and ``function``; those are mapped by
:func:`zaiproxy.core.roles.normalize_role` before a request leaves the proxy.
"""


class TextPart(TypedDict):
    """A ``text`` content part."""
    type: Literal["text"]
    text: str


class InputTextPart(TypedDict):
    """An ``input_text`` content part (Responses dialect)."""
    type: Literal["input_text"]
    text: str


ContentPart = Union[TextPart, InputTextPart, dict[str, Any]]
"""Tagged union of content parts.

The last arm catches every other tag; such parts are serialized to their
JSON text rather than dropped.
"""


class ChatMessage(TypedDict):
    """A message as sent to the backend."""
    role: str
    content: Union[str, list[ContentPart]]


class ChatRequest(TypedDict):
    """Canonical request body for ``POST /chat/completions``.

    Optional keys are only present when the client supplied them.
    """
    model: str
    messages: list[ChatMessage]
    temperature: NotRequired[float]
    max_tokens: NotRequired[int]
    top_p: NotRequired[float]
    frequency_penalty: NotRequired[float]
    presence_penalty: NotRequired[float]
    response_format: NotRequired[dict[str, Any]]
    tools: NotRequired[list[dict[str, Any]]]
    tool_choice: NotRequired[Any]


class FunctionCall(TypedDict, total=False):
    """Function descriptor nested inside a tool call."""
    name: str
    arguments: str


class ToolCall(TypedDict, total=False):
    """A tool call on an assistant message."""
    id: str
    type: str
    function: FunctionCall


class ResponseMessage(TypedDict, total=False):
    content: str | None
    tool_calls: list[ToolCall]


class Choice(TypedDict, total=False):
    index: int
    message: ResponseMessage
    text: str
    finish_reason: str | None


class ChatCompletionResponse(TypedDict, total=False):
    """Backend response body; every field may be missing."""
    id: str
    object: str
    created: int
    model: str
    choices: list[Choice]
    usage: dict[str, Any]
