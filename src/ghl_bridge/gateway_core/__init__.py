"""Public exports for the core gateway abstractions and utilities."""

from .config import GatewayConfig, VERSION
from .exceptions import (
    GatewayError,
    ToolRegistrationError,
    ToolInputError,
    MissingFieldError,
    UnknownToolError,
    MissingRequiredParameterError,
    ConfigurationMissingError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnauthorizedError,
    UpstreamForbiddenError,
    UpstreamOtherError,
    TransportFailureError,
)
from .logger import get_logger, setup_logging
from .tools import (
    ToolDefinition,
    ToolCallRequest,
    ToolCallResult,
    ToolCallError,
    ValidationOutcome,
    ToolRegistry,
    AliasResolver,
    GHL_TOOLS,
    GHL_ALIASES,
    ToolParameterSchemaFactory,
    ToolGateway,
    UpstreamClient,
)

__all__ = [
    "GatewayConfig",
    "VERSION",
    "GatewayError",
    "ToolRegistrationError",
    "ToolInputError",
    "MissingFieldError",
    "UnknownToolError",
    "MissingRequiredParameterError",
    "ConfigurationMissingError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "UpstreamUnauthorizedError",
    "UpstreamForbiddenError",
    "UpstreamOtherError",
    "TransportFailureError",
    "get_logger",
    "setup_logging",
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
