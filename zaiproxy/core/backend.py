"""Backend configuration and the outbound call capability."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

logger = logging.getLogger("zai-proxy")

DEFAULT_BASE_URL = "https://api.z.ai/api/coding/paas/v4"
DEFAULT_MODEL = "glm-4.7"
CHAT_COMPLETIONS_PATH = "/chat/completions"

HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "proxy-connection",
}


@dataclass(frozen=True)
class Backend:
    """The single chat-completions backend the proxy fronts."""

    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    default_model: str = DEFAULT_MODEL
    timeout: Optional[float] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    def build_url(self, path: str, query: str = "") -> str:
        """Build the full backend URL, dropping a leading ``/v1`` segment.

        The backend base already carries its own version (``.../v4``), so
        ``/v1/chat/completions`` becomes ``<base>/chat/completions``.
        """
        base = self.base_url.rstrip("/")
        normalized_path = strip_version_prefix(path)
        url = f"{base}{normalized_path}"
        if query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{query}"
        return url


def strip_version_prefix(path: str) -> str:
    normalized_path = path or ""
    if not normalized_path.startswith("/"):
        normalized_path = f"/{normalized_path}"
    if normalized_path == "/v1" or normalized_path.startswith("/v1/"):
        normalized_path = normalized_path[len("/v1"):] or "/"
    return normalized_path


def is_chat_completions_path(path: str) -> bool:
    return CHAT_COMPLETIONS_PATH in path


def build_outbound_headers(api_key: str, accept: Optional[str] = None) -> dict[str, str]:
    """Build headers for a backend call.

    Inbound headers are never copied wholesale: the client's Authorization
    is replaced by the backend key and only Accept survives (streaming
    negotiation depends on it).
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        # Explicitly request uncompressed responses
        "Accept-Encoding": "identity",
    }
    if accept:
        headers["Accept"] = accept
    return headers


def filter_response_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Filter backend response headers, removing hop-by-hop headers."""
    connection_tokens: set[str] = set()
    for key, value in headers.items():
        if key.lower() == "connection":
            connection_tokens.update(
                token.strip().lower() for token in value.split(",") if token.strip()
            )
    filtered: dict[str, str] = {}
    for key, value in headers.items():
        key_lower = key.lower()
        if key_lower in HOP_BY_HOP_HEADERS or key_lower in connection_tokens:
            continue
        filtered[key] = value
    return filtered


def format_httpx_error(exc: Exception, url: Optional[str] = None) -> str:
    """Produce a detailed, user-facing description of an httpx error."""
    parts = [exc.__class__.__name__]
    message = str(exc).strip()
    if message:
        parts.append(message)

    request = None
    if isinstance(exc, httpx.RequestError):
        try:
            request = exc.request
        except RuntimeError:
            request = None
    if request is not None:
        parts.append(f"request={request.method} {request.url}")
    elif url:
        parts.append(f"url={url}")
    return "; ".join(parts)


class BackendClient:
    """Sends canonical requests to the backend.

    Wraps one ``httpx.AsyncClient``; the proxy keeps no other state, so a
    single instance serves every request.
    """

    def __init__(self, backend: Backend, client: httpx.AsyncClient) -> None:
        self.backend = backend
        self.client = client

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.backend.timeout)

    async def post_chat_completions(self, body: Mapping[str, Any]) -> httpx.Response:
        """POST a canonical chat request and return the buffered response."""
        url = self.backend.build_url(CHAT_COMPLETIONS_PATH)
        logger.debug("Calling backend at %s", url)
        response = await self.client.post(
            url,
            content=json.dumps(body).encode("utf-8"),
            headers=build_outbound_headers(self.backend.api_key or ""),
            timeout=self._timeout(),
        )
        logger.debug("Backend response status: %s", response.status_code)
        return response

    async def open_stream(
        self,
        method: str,
        path: str,
        query: str = "",
        content: Optional[bytes] = None,
        accept: Optional[str] = None,
    ) -> httpx.Response:
        """Send a request and return the response unread; caller must close it."""
        url = self.backend.build_url(path, query)
        request = self.client.build_request(
            method,
            url,
            headers=build_outbound_headers(self.backend.api_key or "", accept),
            content=None if method.upper() in {"GET", "HEAD"} else content,
            timeout=self._timeout(),
        )
        logger.debug("Forwarding %s to %s", method, url)
        return await self.client.send(request, stream=True)
