"""
Exception hierarchy for the tool gateway.

Caller-input errors are raised before any network traffic happens. Upstream
errors are raised by the upstream client and converted into a failed
``ToolCallResult`` at the gateway's forward boundary.
"""

from typing import Any, List, Optional, Sequence


class GatewayError(Exception):
    """Base exception for all gateway errors.

    Attributes:
        kind: Machine-checkable classification of the failure.
        status_code: The HTTP status the failure maps to when surfaced to a caller.
    """

    kind: str = "gateway_error"
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> dict[str, Any]:
        """Serialize the error for an outward failure envelope."""
        return {"message": self.message, "kind": self.kind, "statusCode": self.status_code}


class ToolRegistrationError(GatewayError):
    """Raised when the static tool catalog is inconsistent."""

    kind = "tool_registration"


class ToolInputError(GatewayError):
    """Base for errors in the caller's request. Never reaches the network."""

    kind = "invalid_request"
    status_code = 400


class MissingFieldError(ToolInputError):
    """Raised when ``tool`` or the tenant id is absent.

    Carries the catalog names, so a caller that omitted ``tool`` can pick one.
    """

    kind = "missing_field"

    def __init__(self, fields: Sequence[str], available_tools: Sequence[str] = ()) -> None:
        self.fields: List[str] = list(fields)
        self.available_tools: List[str] = list(available_tools)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["fields"] = self.fields
        payload["availableTools"] = self.available_tools
        return payload


class UnknownToolError(ToolInputError):
    """Raised when a tool name is not in the catalog."""

    kind = "unknown_tool"

    def __init__(self, tool: str, available_tools: Sequence[str]) -> None:
        self.tool = tool
        self.available_tools: List[str] = list(available_tools)
        super().__init__(f"Tool '{tool}' not found")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["availableTools"] = self.available_tools
        return payload


class MissingRequiredParameterError(ToolInputError):
    """Raised when a required tool parameter is absent or empty."""

    kind = "missing_required_parameter"

    def __init__(self, tool: str, missing: Sequence[str]) -> None:
        self.tool = tool
        self.missing: List[str] = list(missing)
        super().__init__(f"Tool '{tool}' is missing required parameters: {', '.join(self.missing)}")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["missing"] = self.missing
        return payload


class ConfigurationMissingError(GatewayError):
    """Raised when execution is attempted without an upstream credential."""

    kind = "configuration_missing"
    status_code = 503


class UpstreamError(GatewayError):
    """Base for failures of the single forward attempt.

    Attributes:
        details: The upstream response body, if one was received.
    """

    kind = "upstream_error"

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None) -> None:
        super().__init__(message, status_code)
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["details"] = self.details
        return payload


class UpstreamTimeoutError(UpstreamError):
    """The upstream call did not complete within its bound."""

    kind = "upstream_timeout"
    status_code = 408


class UpstreamUnauthorizedError(UpstreamError):
    """The upstream rejected the bearer credential."""

    kind = "upstream_unauthorized"
    status_code = 401


class UpstreamForbiddenError(UpstreamError):
    """The credential lacks permission for the requested operation."""

    kind = "upstream_forbidden"
    status_code = 403


class UpstreamOtherError(UpstreamError):
    """Any other non-2xx upstream status. The status is passed through."""

    kind = "upstream_other"


class TransportFailureError(UpstreamError):
    """No usable HTTP response was received."""

    kind = "transport_failure"
    status_code = 500
