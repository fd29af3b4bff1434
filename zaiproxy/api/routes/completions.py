"""Legacy completions endpoint.

POST /v1/completions is converted to a chat completion, sent to the backend,
and the chat response is projected back onto the ``text_completion`` shape.
"""

import json
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ...completions import (
    build_api_error,
    chat_response_to_completion,
    completion_to_chat_request,
)
from ...core.cors import cors_json, error_json
from ...core.exceptions import InvalidBackendResponse
from ...logging import truncate_for_log
from ...types.chat import ChatCompletionResponse
from ...types.completions import CompletionRequest
from ..state import configuration_error, get_backend_client, get_settings

logger = logging.getLogger("zai-proxy")


async def completions(request: Request) -> JSONResponse:
    """Legacy completions endpoint - OpenAI compatible.

    POST /v1/completions
    """
    logger.info("Received legacy completions request")
    settings = get_settings(request)
    if not settings.backend.has_credentials:
        return configuration_error()
    client = get_backend_client(request)
    default_model = settings.backend.default_model

    try:
        body = await request.body()
        payload: CompletionRequest = json.loads(body or b"{}")
        if not isinstance(payload, dict):
            raise ValueError("Request body must be a JSON object")
        logger.debug(f"Request body: {truncate_for_log(body.decode('utf-8', 'replace'))}")

        chat_request = completion_to_chat_request(payload, default_model)
        logger.debug(f"Converted to chat format: {truncate_for_log(json.dumps(chat_request))}")

        backend_response = await client.post_chat_completions(chat_request)
        if not backend_response.is_success:
            error_text = backend_response.text
            logger.error(
                f"Backend API error: {backend_response.status_code} {truncate_for_log(error_text)}"
            )
            return cors_json(
                build_api_error(backend_response.status_code, error_text),
                status_code=backend_response.status_code,
            )

        data: ChatCompletionResponse = backend_response.json()
        if not isinstance(data, dict):
            raise InvalidBackendResponse("Invalid response from backend API")

        completion = chat_response_to_completion(data, payload.get("model"), default_model)
        logger.debug(f"Legacy response: {truncate_for_log(json.dumps(completion))}")
        return cors_json(completion, status_code=backend_response.status_code)

    except Exception as exc:
        logger.exception(f"Legacy completions error: {exc}")
        return error_json(
            str(exc) or "Internal server error",
            "internal_error",
            status_code=500,
            param=None,
            code="internal_error",
        )
