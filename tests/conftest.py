"""Pytest configuration and fixtures for testing."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI

from zaiproxy.config_loader import ProxySettings
from zaiproxy.core.backend import Backend
from zaiproxy.main import create_app
from zaiproxy.testing import FakeUpstream

UPSTREAM_BASE_URL = "http://upstream.local/api/paas/v4"
UPSTREAM_PREFIX = "/api/paas/v4"


def make_settings(
    *,
    api_key: str | None = "test-key",
    default_model: str = "glm-4.7",
    base_url: str = UPSTREAM_BASE_URL,
) -> ProxySettings:
    """Build settings pointing at the fake upstream."""
    return ProxySettings(
        backend=Backend(
            base_url=base_url,
            api_key=api_key,
            default_model=default_model,
        ),
    )


def build_proxy_app(upstream: FakeUpstream, settings: ProxySettings | None = None) -> FastAPI:
    """Create a proxy app whose backend calls land on ``upstream``."""
    return create_app(settings or make_settings(), client=upstream.make_client())


@asynccontextmanager
async def proxy_client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Async client talking to the proxy app in-process."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://proxy.local",
    ) as client:
        yield client
    await app.state.backend_client.client.aclose()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> ProxySettings:
    return make_settings()


@pytest.fixture
def proxy_app(upstream: FakeUpstream, settings: ProxySettings) -> FastAPI:
    return build_proxy_app(upstream, settings)
