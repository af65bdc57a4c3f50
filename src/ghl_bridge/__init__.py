"""GHL Bridge: a tool gateway in front of the GoHighLevel MCP endpoint."""

from .gateway_core import (
    VERSION,
    GatewayConfig,
    GatewayError,
    ToolInputError,
    MissingFieldError,
    UnknownToolError,
    MissingRequiredParameterError,
    ConfigurationMissingError,
    UpstreamError,
    ToolDefinition,
    ToolCallRequest,
    ToolCallResult,
    ToolCallError,
    ToolRegistry,
    GHL_TOOLS,
    GHL_ALIASES,
    ToolGateway,
    UpstreamClient,
    get_logger,
    setup_logging,
)
from .adapters import GeminiChatBridge, GeminiToolCatalog, MCPToolServer, OpenAIToolCatalog
from .server import create_app

__version__ = VERSION

__all__ = [
    "VERSION",
    "GatewayConfig",
    "GatewayError",
    "ToolInputError",
    "MissingFieldError",
    "UnknownToolError",
    "MissingRequiredParameterError",
    "ConfigurationMissingError",
    "UpstreamError",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolCallError",
    "ToolRegistry",
    "GHL_TOOLS",
    "GHL_ALIASES",
    "ToolGateway",
    "UpstreamClient",
    "get_logger",
    "setup_logging",
    "GeminiChatBridge",
    "GeminiToolCatalog",
    "MCPToolServer",
    "OpenAIToolCatalog",
    "create_app",
]
