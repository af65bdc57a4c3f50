from .models import ToolDefinition, ToolCallRequest, ToolCallResult, ToolCallError, ValidationOutcome
from .registry import ToolRegistry, AliasResolver, GHL_TOOLS, GHL_ALIASES
from .schema import ToolParameterSchemaFactory
from .execution import ToolGateway, UpstreamClient

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolCallError",
    "ValidationOutcome",
    "ToolRegistry",
    "AliasResolver",
    "GHL_TOOLS",
    "GHL_ALIASES",
    "ToolParameterSchemaFactory",
    "ToolGateway",
    "UpstreamClient",
]
