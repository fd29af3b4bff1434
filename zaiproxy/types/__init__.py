"""Type definitions for the proxy."""

from .chat import (
    ChatCompletionResponse,
    ChatMessage,
    ChatRequest,
    Choice,
    ContentPart,
    FunctionCall,
    InputTextPart,
    ResponseMessage,
    Role,
    TextPart,
    ToolCall,
)
from .completions import CompletionChoice, CompletionRequest, CompletionResponse
from .responses import (
    FunctionCallItem,
    InputItem,
    MessageItem,
    OutputItem,
    OutputText,
    ResponseObject,
    ResponsesRequest,
)

__all__ = [
    "ChatCompletionResponse",
    "ChatMessage",
    "ChatRequest",
    "Choice",
    "CompletionChoice",
    "CompletionRequest",
    "CompletionResponse",
    "ContentPart",
    "FunctionCall",
    "FunctionCallItem",
    "InputItem",
    "InputTextPart",
    "MessageItem",
    "OutputItem",
    "OutputText",
    "ResponseMessage",
    "ResponseObject",
    "ResponsesRequest",
    "Role",
    "TextPart",
    "ToolCall",
]
