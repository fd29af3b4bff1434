"""Types for the legacy Completions dialect."""

from typing import Any
from typing_extensions import NotRequired, TypedDict


class CompletionRequest(TypedDict, total=False):
    """Inbound ``POST /v1/completions`` body (fields the proxy reads)."""
    prompt: str
    model: str
    max_tokens: int
    temperature: float
    top_p: float
    frequency_penalty: float
    presence_penalty: float


class CompletionChoice(TypedDict):
    index: int | None
    text: str
    finish_reason: str | None


class CompletionResponse(TypedDict):
    """Outbound legacy completion, projected from a chat response."""
    id: str
    object: str
    created: int
    model: str
    choices: list[CompletionChoice]
    usage: NotRequired[dict[str, Any]]
