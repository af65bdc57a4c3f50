import asyncio
import time

import httpx
import pytest

from ghl_bridge.gateway_core import GatewayConfig, ToolCallRequest, ToolGateway, UpstreamClient

from .conftest import TENANT_ID, TOKEN, UpstreamStub


def _contact_request() -> ToolCallRequest:
    return ToolCallRequest(tool="contacts_get-contact", parameters={"contactId": "abc"}, tenant_id=TENANT_ID)


@pytest.mark.asyncio
async def test_success_passes_body_through(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(200, json={"foo": "bar"})

    result = await gateway.execute(_contact_request())

    assert result.success is True
    assert result.tool == "contacts_get-contact"
    assert result.data == {"foo": "bar"}
    assert result.error is None
    assert result.status_code == 200
    assert result.timestamp.endswith("Z")


@pytest.mark.asyncio
async def test_forwarded_request_shape(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    await gateway.execute(_contact_request())

    assert len(upstream.calls) == 1
    sent = upstream.calls[0]
    assert sent.method == "POST"
    assert str(sent.url) == gateway.config.upstream_url
    assert upstream.last_body == {"tool": "contacts_get-contact", "input": {"contactId": "abc"}}
    assert sent.headers["Authorization"] == f"Bearer {TOKEN}"
    assert sent.headers["locationId"] == TENANT_ID
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.headers["Accept"] == "application/json, text/plain, */*"
    assert sent.headers["User-Agent"] == gateway.config.client_id


@pytest.mark.asyncio
async def test_tenant_header_is_configurable(http_client: httpx.AsyncClient, upstream: UpstreamStub) -> None:
    config = GatewayConfig(bearer_token=TOKEN, tenant_header="X-Tenant")
    gateway = ToolGateway.from_config(config, http_client=http_client)

    await gateway.execute(_contact_request())

    assert upstream.calls[0].headers["X-Tenant"] == TENANT_ID


@pytest.mark.asyncio
async def test_text_body_is_returned_raw(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(200, text="plain answer")

    result = await gateway.execute(_contact_request())

    assert result.success
    assert result.data == "plain answer"


@pytest.mark.asyncio
async def test_unauthorized(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(401, json={"message": "Invalid JWT"})

    result = await gateway.execute(_contact_request())

    assert result.success is False
    assert result.error is not None
    assert result.error.kind == "upstream_unauthorized"
    assert result.error.status_code == 401
    assert result.error.message == "authentication failed"
    assert result.error.details == {"message": "Invalid JWT"}
    assert len(upstream.calls) == 1


@pytest.mark.asyncio
async def test_forbidden(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(403, json={"message": "scope missing"})

    result = await gateway.execute(_contact_request())

    assert result.error is not None
    assert result.error.kind == "upstream_forbidden"
    assert result.status_code == 403
    assert result.error.message == "insufficient permissions"


@pytest.mark.asyncio
async def test_other_status_passes_through(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(500, json={"message": "boom"})

    result = await gateway.execute(_contact_request())

    assert result.error is not None
    assert result.error.kind == "upstream_other"
    assert result.error.status_code == 500
    assert result.error.message == "boom"

    payload = result.to_payload()
    assert payload["success"] is False
    assert payload["error"] == "boom"
    assert payload["statusCode"] == 500
    assert payload["details"] == {"message": "boom"}


@pytest.mark.asyncio
async def test_other_status_without_message(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(422, text="")

    result = await gateway.execute(_contact_request())

    assert result.error is not None
    assert result.error.status_code == 422
    assert result.error.message == "upstream returned HTTP 422"
    assert result.error.details is None


@pytest.mark.asyncio
async def test_transport_failure(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    upstream.handler = refuse

    result = await gateway.execute(_contact_request())

    assert result.error is not None
    assert result.error.kind == "transport_failure"
    assert result.error.status_code == 500
    assert "connection refused" in result.error.message


@pytest.mark.asyncio
async def test_timeout_is_bounded(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={})

    upstream.handler = slow

    started = time.monotonic()
    result = await gateway.execute(_contact_request(), timeout=0.05)
    elapsed = time.monotonic() - started

    assert elapsed >= 0.05
    assert elapsed < 1
    assert result.error is not None
    assert result.error.kind == "upstream_timeout"
    assert result.error.status_code == 408
    assert result.error.message == "request timed out"


@pytest.mark.asyncio
async def test_connection_test_uses_location_tool(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    upstream.respond(200, json={"location": {"id": TENANT_ID}})

    result = await gateway.test_connection(TENANT_ID)

    assert result.success
    assert upstream.last_body == {"tool": "locations_get-location", "input": {}}


def test_health_makes_no_upstream_call(gateway: ToolGateway, upstream: UpstreamStub) -> None:
    health = gateway.health()

    assert health["status"] == "healthy"
    assert health["configured"] is True
    assert health["toolCount"] == len(gateway.registry)
    assert upstream.calls == []


def test_health_reports_unconfigured(unconfigured_gateway: ToolGateway) -> None:
    assert unconfigured_gateway.health()["configured"] is False


@pytest.mark.asyncio
async def test_owned_client_is_closed(config: GatewayConfig) -> None:
    async with UpstreamClient(config) as client:
        inner = client._client

    assert inner.is_closed


@pytest.mark.asyncio
async def test_shared_client_is_left_open(config: GatewayConfig, http_client: httpx.AsyncClient) -> None:
    async with UpstreamClient(config, http_client):
        pass

    assert not http_client.is_closed
