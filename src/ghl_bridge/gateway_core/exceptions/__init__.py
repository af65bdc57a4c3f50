"""Export the gateway exception hierarchy used across validation and forwarding paths."""

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

__all__ = [
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
]
