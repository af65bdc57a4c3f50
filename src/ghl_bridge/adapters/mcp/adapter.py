"""Serve the gateway over MCP-style JSON-RPC and shape results as MCP content blocks."""

import json
from typing import Any, Dict, List, Optional

from mcp.types import (
    LATEST_PROTOCOL_VERSION,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    CallToolResult,
    ErrorData,
    Implementation,
    InitializeResult,
    JSONRPCError,
    JSONRPCResponse,
    ServerCapabilities,
    TextContent,
    Tool as MCPTool,
    ToolsCapability,
)

from ghl_bridge.gateway_core import (
    VERSION,
    GatewayError,
    ToolCallRequest,
    ToolCallResult,
    ToolGateway,
    ToolParameterSchemaFactory,
    get_logger,
)

logger = get_logger(__name__)

__all__ = ["MCPToolServer", "to_call_tool_result", "error_call_tool_result", "list_mcp_tools"]

SERVER_NAME = "ghl-bridge"
TENANT_ARGUMENT_KEYS = ("tenantId", "locationId")


def to_call_tool_result(result: ToolCallResult) -> CallToolResult:
    """Wrap a gateway result as an MCP tool-call result.

    Args:
        result: The gateway result.

    Returns:
        One text block holding the JSON-serialized data, or the error text, plus ``isError``.
    """
    if result.success:
        text = json.dumps(result.data, default=str)
    else:
        text = result.error.message if result.error else "unknown error"
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=not result.success)


def error_call_tool_result(error: GatewayError) -> CallToolResult:
    """An MCP tool-call result for a call rejected before forwarding.

    The text block holds the JSON error payload, so details such as the list of
    available tools reach the client.
    """
    payload = error.to_payload()
    body = {"success": False, "error": payload.pop("message"), **payload}
    return CallToolResult(content=[TextContent(type="text", text=json.dumps(body))], isError=True)


def list_mcp_tools(gateway: ToolGateway, schema_factory: Optional[ToolParameterSchemaFactory] = None) -> List[MCPTool]:
    factory = schema_factory or ToolParameterSchemaFactory()
    return [
        MCPTool(name=tool.name, description=tool.description, inputSchema=factory.build(tool))
        for tool in gateway.describe_catalog()
    ]


class MCPToolServer:
    """
    Answers MCP JSON-RPC messages (``initialize``, ``ping``, ``tools/list``, ``tools/call``).

    ``tools/call`` goes through ``ToolGateway.execute``. The tenant comes from a
    ``tenantId`` or ``locationId`` argument, which is removed before forwarding,
    or from the server default.
    """

    def __init__(
        self,
        gateway: ToolGateway,
        default_tenant_id: Optional[str] = None,
        schema_factory: Optional[ToolParameterSchemaFactory] = None,
    ) -> None:
        self.gateway = gateway
        self.default_tenant_id = default_tenant_id
        self.schema_factory = schema_factory or ToolParameterSchemaFactory()

    async def handle(self, message: Any) -> Optional[Dict[str, Any]]:
        """Handle one JSON-RPC message.

        Args:
            message: The decoded JSON body.

        Returns:
            The JSON-RPC response as a dict, or None for notifications. Malformed
            messages get an ``Invalid Request`` error, with a null id when none was readable.
        """
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            request_id = message.get("id") if isinstance(message, dict) else None
            logger.warning("Rejected malformed JSON-RPC message: %r", message)
            return self._error(request_id, INVALID_REQUEST, "Invalid JSON-RPC request")

        method = message["method"]
        request_id = message.get("id")
        params = message.get("params") or {}

        if request_id is None:
            logger.debug("Received MCP notification '%s'.", method)
            return None

        logger.info("MCP request '%s' (id=%s).", method, request_id)
        if method == "initialize":
            return self._result(request_id, self.initialize_result().model_dump(by_alias=True, exclude_none=True))
        if method == "ping":
            return self._result(request_id, {})
        if method == "tools/list":
            tools = [t.model_dump(by_alias=True, exclude_none=True) for t in self.list_tools()]
            return self._result(request_id, {"tools": tools})
        if method == "tools/call":
            if not isinstance(params, dict) or not isinstance(params.get("name"), str):
                return self._error(request_id, INVALID_PARAMS, "tools/call requires a tool 'name'")
            call_result = await self.call_tool(params["name"], params.get("arguments"))
            return self._result(request_id, call_result.model_dump(by_alias=True, exclude_none=True, mode="json"))

        return self._error(request_id, METHOD_NOT_FOUND, f"Unknown method: {method}")

    def initialize_result(self) -> InitializeResult:
        return InitializeResult(
            protocolVersion=LATEST_PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability(listChanged=False)),
            serverInfo=Implementation(name=SERVER_NAME, version=VERSION),
        )

    def list_tools(self) -> List[MCPTool]:
        return list_mcp_tools(self.gateway, self.schema_factory)

    async def call_tool(self, name: str, arguments: Any) -> CallToolResult:
        """Execute a tool through the gateway and wrap the outcome as MCP content."""
        parameters = dict(arguments) if isinstance(arguments, dict) else arguments
        tenant_id = self.default_tenant_id
        if isinstance(parameters, dict):
            for key in TENANT_ARGUMENT_KEYS:
                supplied = parameters.pop(key, None)
                if supplied:
                    tenant_id = supplied

        request = ToolCallRequest(tool=name, parameters=parameters, tenant_id=tenant_id)
        try:
            result = await self.gateway.execute(request)
        except GatewayError as exc:
            logger.warning("MCP tools/call for '%s' rejected: %s", name, exc.message)
            return error_call_tool_result(exc)
        return to_call_tool_result(result)

    @staticmethod
    def _result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
        return JSONRPCResponse(jsonrpc="2.0", id=request_id, result=result).model_dump(by_alias=True, mode="json")

    @staticmethod
    def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
        error = ErrorData(code=code, message=message)
        if isinstance(request_id, bool) or not isinstance(request_id, (str, int)):
            # JSONRPCError only models string or integer ids
            return {"jsonrpc": "2.0", "id": None, "error": error.model_dump(exclude_none=True, mode="json")}
        return JSONRPCError(jsonrpc="2.0", id=request_id, error=error).model_dump(
            by_alias=True, exclude_none=True, mode="json"
        )
