"""Models listing endpoint - OpenAI compatible."""

import logging

from fastapi.responses import JSONResponse

from ...core.cors import cors_json

logger = logging.getLogger("zai-proxy")

MODEL_CATALOG: list[dict] = [
    {"id": "glm-4.7", "created": 1734825600},
    {"id": "glm-4.6", "created": 1730000000},
    {"id": "glm-4.5", "created": 1725000000},
    {"id": "glm-4.5-air", "created": 1725000000},
]


def build_model_list() -> dict:
    return {
        "object": "list",
        "data": [
            {
                "id": entry["id"],
                "object": "model",
                "created": entry["created"],
                "owned_by": "zhipu",
                "permission": [],
                "root": entry["id"],
                "parent": None,
            }
            for entry in MODEL_CATALOG
        ],
    }


async def list_models() -> JSONResponse:
    """List available models in OpenAI API format.

    GET /v1/models and GET /models
    """
    logger.info("Received models list request")
    return cors_json(build_model_list())
