"""Shared pytest fixtures for MockupForge tests."""

from __future__ import annotations

from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import FakeUpstream
from mockupforge.api.main import create_app
from mockupforge.core.config import MockupForgeConfig
from mockupforge.core.gateway import GenerationGateway
from mockupforge.core.models import GenerationSettings


@pytest.fixture
def test_config(monkeypatch) -> MockupForgeConfig:
    """Configuration with a fake credential and no .env influence."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("MOCKUPFORGE_GEMINI_API_KEY", raising=False)
    return MockupForgeConfig(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_model="test-model",
        gemini_base_url="https://upstream.test/v1beta",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def gateway(test_config: MockupForgeConfig, http_client: httpx.AsyncClient) -> GenerationGateway:
    return GenerationGateway.from_config(test_config, http_client)


@pytest.fixture
def unconfigured_gateway(http_client: httpx.AsyncClient) -> GenerationGateway:
    return GenerationGateway(None, client=http_client)


@pytest.fixture
def default_settings() -> GenerationSettings:
    return GenerationSettings(detail_level=50, style_preference="realistic", color_scheme="vibrant")


@pytest.fixture
def test_client(
    test_config: MockupForgeConfig,
    gateway: GenerationGateway,
) -> Generator[TestClient, None, None]:
    """TestClient for an app whose gateway talks to :class:`FakeUpstream`."""
    app = create_app(test_config, gateway=gateway)
    with TestClient(app) as client:
        yield client
