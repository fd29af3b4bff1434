"""Types for the Responses dialect.

Only the subset the proxy reads or writes is modelled. Input items are
classified structurally (see :mod:`zaiproxy.responses.translator`), so they
stay loosely typed here.
"""

from typing import Any, Literal, Union
from typing_extensions import NotRequired, TypedDict


InputItem = Union[str, dict[str, Any]]


class ResponsesRequest(TypedDict, total=False):
    """Inbound ``POST /v1/responses`` body (fields the proxy reads)."""
    model: str
    instructions: str
    input: Union[str, list[InputItem]]
    temperature: float
    max_tokens: int
    max_output_tokens: int
    top_p: float
    text: dict[str, Any]
    response_format: dict[str, Any]
    tools: list[dict[str, Any]]
    tool_choice: Any


class OutputText(TypedDict):
    type: Literal["output_text"]
    text: str


class MessageItem(TypedDict):
    """Assistant message output item."""
    type: Literal["message"]
    id: str
    role: Literal["assistant"]
    status: Literal["completed"]
    content: list[OutputText]


class FunctionCallItem(TypedDict):
    """Function call output item, one per backend tool call."""
    type: Literal["function_call"]
    id: str | None
    call_id: str | None
    name: str | None
    arguments: str | None


OutputItem = Union[MessageItem, FunctionCallItem]


class ResponseObject(TypedDict):
    """Outbound Responses envelope."""
    id: str
    object: Literal["response"]
    created: int
    model: str
    output: list[OutputItem]
    output_text: str
    usage: NotRequired[dict[str, Any]]
    status: Literal["completed"]
