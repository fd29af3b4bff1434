"""Responses API endpoint handler.

POST /v1/responses (and /responses) is simulated on top of the backend's
chat completions: the request is translated, sent, and the chat response is
rebuilt as a Responses envelope. Backend errors are relayed untouched.
"""

import json
import logging

from fastapi import Request
from fastapi.responses import Response

from ...core.cors import cors_headers, cors_json
from ...logging import truncate_for_log
from ...responses import (
    build_internal_error,
    chat_response_to_response,
    responses_to_chat_request,
)
from ...types.chat import ChatCompletionResponse
from ...types.responses import ResponsesRequest
from ..state import configuration_error, get_backend_client, get_settings

logger = logging.getLogger("zai-proxy")


async def responses_endpoint(request: Request) -> Response:
    """POST /v1/responses - Responses API endpoint.

    Args:
        request: The FastAPI request object

    Returns:
        JSONResponse with the Responses envelope, the backend's own error
        body on a backend failure, or an ``internal_error`` envelope.
    """
    logger.info("Received Responses API request")
    settings = get_settings(request)
    if not settings.backend.has_credentials:
        return configuration_error()
    client = get_backend_client(request)

    try:
        body = await request.body()
        payload: ResponsesRequest = json.loads(body or b"{}")
        if not isinstance(payload, dict):
            raise ValueError("Request body must be a JSON object")
        logger.debug(f"Responses API body: {truncate_for_log(body.decode('utf-8', 'replace'))}")

        chat_request = responses_to_chat_request(payload, settings.backend.default_model)
        logger.debug(f"Converted to chat completions: {truncate_for_log(json.dumps(chat_request))}")

        backend_response = await client.post_chat_completions(chat_request)
        if not backend_response.is_success:
            logger.error(
                f"Backend API error: {backend_response.status_code} "
                f"{truncate_for_log(backend_response.text)}"
            )
            # Relayed verbatim, unlike the legacy endpoint which re-wraps it
            return Response(
                content=backend_response.content,
                status_code=backend_response.status_code,
                media_type="application/json",
                headers=cors_headers(),
            )

        data: ChatCompletionResponse = backend_response.json()
        if not isinstance(data, dict):
            raise ValueError("Invalid response from backend API")
        logger.debug("Backend chat response received")

        response = chat_response_to_response(data, chat_request)
        logger.debug(f"Responses API response: {truncate_for_log(json.dumps(response))}")
        return cors_json(response)

    except Exception as exc:
        logger.exception(f"Responses API error: {exc}")
        return cors_json(
            build_internal_error(str(exc) or "Internal server error"),
            status_code=500,
        )
