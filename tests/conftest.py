import inspect
import json
import os
from typing import Any, Callable, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from ghl_bridge.gateway_core import GatewayConfig, ToolGateway

TENANT_ID = "loc-123"
TOKEN = "pit-test-token"


class UpstreamStub:
    """Stands in for the upstream endpoint. Records every request it receives."""

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], Any] = lambda request: httpx.Response(200, json={"ok": True})

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        response = self.handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response

    def respond(self, status_code: int, **kwargs: Any) -> None:
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    @property
    def last_body(self) -> Any:
        return json.loads(self.calls[-1].content)


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def http_client(upstream: UpstreamStub) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(bearer_token=TOKEN, default_tenant_id=TENANT_ID)


@pytest.fixture
def gateway(config: GatewayConfig, http_client: httpx.AsyncClient) -> ToolGateway:
    return ToolGateway.from_config(config, http_client=http_client)


@pytest.fixture
def unconfigured_gateway(http_client: httpx.AsyncClient) -> ToolGateway:
    return ToolGateway.from_config(GatewayConfig(default_tenant_id=TENANT_ID), http_client=http_client)


@pytest.fixture
def mock_chat_session() -> MagicMock:
    session = MagicMock()
    session.send_message = AsyncMock()
    return session


@pytest.fixture
def mock_genai_client(mock_chat_session: MagicMock) -> MagicMock:
    client = MagicMock()
    client.chats.create.return_value = mock_chat_session
    return client


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "once"),
        "match_on": ["method", "path", "query"],
        "filter_headers": [
            "authorization",
            "x-goog-api-key",
            "x-api-key",
            "api-key",
            "locationid",
        ],
        "filter_query_parameters": ["key", "api_key", "access_token"],
        "decode_compressed_response": True,
    }
