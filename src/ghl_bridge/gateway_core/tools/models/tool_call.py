"""Data models for a single tool invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, cast

from pydantic import BaseModel, Field

from .models import ToolDefinition


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ToolCallRequest:
    """A normalized tool invocation: one per inbound call, consumed by one forward."""

    tool: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    tenant_id: Optional[str] = None


@dataclass(frozen=True)
class ValidationOutcome:
    """A request that passed validation, paired with its catalog entry."""

    definition: ToolDefinition
    request: ToolCallRequest


class ToolCallError(BaseModel):
    """Failure details carried by an unsuccessful ``ToolCallResult``.

    Attributes:
        message: Upstream-provided message, or the raw transport error text.
        status_code: The outward HTTP status for this failure.
        kind: Machine-checkable classification, e.g. ``upstream_timeout``.
        details: The upstream response body, if any.
    """

    message: str
    status_code: int
    kind: str
    details: Any = None


class ToolCallResult(BaseModel):
    """The uniform envelope produced by the gateway for every forward attempt."""

    success: bool
    tool: str
    data: Any = None
    error: Optional[ToolCallError] = None
    timestamp: str = Field(default_factory=utc_timestamp)

    @property
    def status_code(self) -> int:
        """The outward HTTP status for this result."""
        return self.error.status_code if self.error else 200

    def to_payload(self) -> Dict[str, Any]:
        """Render the result the way the execute endpoint returns it."""
        if self.success:
            return {"success": True, "tool": self.tool, "data": self.data, "executedAt": self.timestamp}

        error = cast(ToolCallError, self.error)
        return {
            "success": False,
            "tool": self.tool,
            "error": error.message,
            "kind": error.kind,
            "statusCode": error.status_code,
            "details": error.details,
            "timestamp": self.timestamp,
        }
