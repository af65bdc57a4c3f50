"""FastAPI application exposing the gateway over HTTP, MCP JSON-RPC and a Gemini chat endpoint."""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from google import genai
from google.genai.client import AsyncClient
from mcp.types import PARSE_ERROR

from ghl_bridge.adapters.gemini import GeminiChatBridge
from ghl_bridge.adapters.mcp import MCPToolServer
from ghl_bridge.gateway_core import (
    VERSION,
    GatewayConfig,
    GatewayError,
    ToolCallRequest,
    ToolGateway,
    ToolInputError,
    ToolParameterSchemaFactory,
    get_logger,
)
from ghl_bridge.gateway_core.tools.models import utc_timestamp
from ghl_bridge.gateway_core.tools.registry import CONNECTION_TEST_TOOL
from .models import ChatRequest, ConnectionTestRequest, ExecuteRequest

logger = get_logger(__name__)

ghl_router = APIRouter(prefix="/api/ghl", tags=["ghl"])
root_router = APIRouter()


def get_gateway(request: Request) -> ToolGateway:
    return request.app.state.gateway


def get_config(request: Request) -> GatewayConfig:
    return request.app.state.config


def get_schema_factory(request: Request) -> ToolParameterSchemaFactory:
    return request.app.state.schema_factory


async def gateway_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a gateway error as the uniform failure envelope."""
    if not isinstance(exc, GatewayError):
        raise exc
    payload = exc.to_payload()
    body = {"success": False, "error": payload.pop("message"), **payload, "timestamp": utc_timestamp()}
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a malformed request body, e.g. a non-string ``tool``, as a 400 failure envelope."""
    if not isinstance(exc, RequestValidationError):
        raise exc
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    body = {
        "success": False,
        "error": "Invalid request body",
        "kind": ToolInputError.kind,
        "statusCode": ToolInputError.status_code,
        "details": jsonable_encoder(exc.errors()),
        "timestamp": utc_timestamp(),
    }
    return JSONResponse(status_code=ToolInputError.status_code, content=body)


@root_router.get("/health", summary="Gateway health")
@ghl_router.get("/health", summary="Gateway health")
def health(gateway: ToolGateway = Depends(get_gateway)) -> dict[str, Any]:
    """Reports whether the upstream credential is configured. Makes no upstream call."""
    return gateway.health()


@ghl_router.get("/tools", summary="List available tools")
def list_tools(
    gateway: ToolGateway = Depends(get_gateway),
    factory: ToolParameterSchemaFactory = Depends(get_schema_factory),
) -> dict[str, Any]:
    tools = [
        {
            "name": tool.name,
            "description": tool.description,
            "requiredParams": list(tool.required_params),
            "optionalParams": list(tool.optional_params),
            "inputSchema": factory.build(tool),
        }
        for tool in gateway.describe_catalog()
    ]
    return {
        "success": True,
        "tools": tools,
        "totalTools": len(tools),
        "upstreamUrl": gateway.config.upstream_url,
        "timestamp": utc_timestamp(),
    }


@ghl_router.post("/execute", summary="Execute a tool")
async def execute_tool(
    body: ExecuteRequest,
    gateway: ToolGateway = Depends(get_gateway),
    config: GatewayConfig = Depends(get_config),
) -> JSONResponse:
    """Validates and forwards one tool call. Input errors are rendered by the gateway error handler."""
    request = ToolCallRequest(
        tool=body.tool,  # type: ignore[arg-type]
        parameters=body.parameters if body.parameters is not None else {},
        tenant_id=body.tenant_id or config.default_tenant_id,
    )
    result = await gateway.execute(request)
    return JSONResponse(status_code=result.status_code, content=result.to_payload())


@ghl_router.post("/test", summary="Test the upstream connection")
async def test_connection(
    body: Optional[ConnectionTestRequest] = None,
    gateway: ToolGateway = Depends(get_gateway),
    config: GatewayConfig = Depends(get_config),
) -> JSONResponse:
    tenant_id = (body.tenant_id if body else None) or config.default_tenant_id
    result = await gateway.test_connection(tenant_id)
    if not result.success:
        return JSONResponse(status_code=result.status_code, content=result.to_payload())
    return JSONResponse(
        content={
            "success": True,
            "message": "Connection to GHL MCP successful",
            "testTool": CONNECTION_TEST_TOOL,
            "ghlResponse": result.data,
            "timestamp": result.timestamp,
        }
    )


@root_router.post("/tools/list", summary="List tools with input schemas")
def tools_list(
    gateway: ToolGateway = Depends(get_gateway),
    factory: ToolParameterSchemaFactory = Depends(get_schema_factory),
) -> dict[str, Any]:
    return {
        "tools": [
            {"name": tool.name, "description": tool.description, "inputSchema": factory.build(tool)}
            for tool in gateway.describe_catalog()
        ]
    }


@root_router.post("/mcp", summary="MCP JSON-RPC endpoint")
async def mcp_endpoint(request: Request) -> Response:
    server: MCPToolServer = request.app.state.mcp_server
    try:
        message = await request.json()
    except json.JSONDecodeError:
        logger.warning("Rejected MCP request with an unparsable body.")
        return JSONResponse(
            content={"jsonrpc": "2.0", "id": None, "error": {"code": PARSE_ERROR, "message": "Parse error"}}
        )

    reply = await server.handle(message)
    if reply is None:
        return Response(status_code=202)
    return JSONResponse(content=reply)


@root_router.post("/api/chat", summary="Chat with Gemini over the GHL tools")
async def chat(body: ChatRequest, request: Request) -> JSONResponse:
    bridge: Optional[GeminiChatBridge] = request.app.state.chat_bridge
    if bridge is None:
        return JSONResponse(
            status_code=503, content={"success": False, "error": "Chat is not configured (set GEMINI_API_KEY)."}
        )
    if not body.message or not body.message.strip():
        return JSONResponse(status_code=400, content={"success": False, "error": "Message is required"})

    try:
        reply = await bridge.chat(body.message, tenant_id=body.tenant_id)
    except Exception as e:
        logger.error(f"Chat endpoint error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return JSONResponse(
        content={
            "success": True,
            "response": reply.content,
            "toolCalls": reply.tool_calls,
            "timestamp": utc_timestamp(),
        }
    )


def create_app(
    config: Optional[GatewayConfig] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    genai_client: Optional[AsyncClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Gateway configuration. Read from the environment when omitted.
        http_client: Optional HTTP client for upstream calls. Not closed by the app.
        genai_client: Optional async Gemini client. Created from ``gemini_api_key`` when omitted.

    Returns:
        The configured FastAPI application.
    """
    config = config or GatewayConfig.from_env()
    gateway = ToolGateway.from_config(config, http_client=http_client)

    if genai_client is None and config.gemini_api_key:
        genai_client = genai.Client(api_key=config.gemini_api_key).aio

    chat_bridge = None
    if genai_client is not None:
        chat_bridge = GeminiChatBridge(
            aclient=genai_client,
            gateway=gateway,
            model_name=config.gemini_model,
            default_tenant_id=config.default_tenant_id,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "GHL bridge %s serving %d tools (configured=%s).", VERSION, len(gateway.registry), config.is_configured
        )
        if not config.is_configured:
            logger.warning("GHL_PIT_TOKEN is not set. Execute and test calls will answer 503.")
        yield
        await gateway.upstream.aclose()

    app = FastAPI(
        title="GHL Bridge",
        description="Forwards function-calling tool invocations to the GoHighLevel MCP endpoint.",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.gateway = gateway
    app.state.schema_factory = ToolParameterSchemaFactory()
    app.state.mcp_server = MCPToolServer(gateway, default_tenant_id=config.default_tenant_id)
    app.state.chat_bridge = chat_bridge

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(root_router)
    app.include_router(ghl_router)
    return app
