"""Role normalization for the backend's four-role vocabulary.

The backend accepts only ``system``, ``user``, ``assistant`` and ``tool``.
Newer OpenAI dialects add roles that map cleanly onto those four; anything
else is passed through untouched so new roles reach the backend as-is.
"""

import logging
from typing import Any

logger = logging.getLogger("zai-proxy")

CANONICAL_ROLES = frozenset({"system", "user", "assistant", "tool"})

ROLE_MAP: dict[str, str] = {
    "developer": "system",
    "function": "tool",
}


def normalize_role(role: Any) -> Any:
    """Map a client role onto the backend vocabulary."""
    if not isinstance(role, str):
        return role
    mapped = ROLE_MAP.get(role, role)
    if mapped != role:
        logger.debug("Role mapped: %s -> %s", role, mapped)
    return mapped
