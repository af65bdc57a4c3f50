"""Tool-related data models."""

from .models import ToolDefinition
from .tool_call import ToolCallRequest, ToolCallResult, ToolCallError, ValidationOutcome, utc_timestamp

__all__ = ["ToolDefinition", "ToolCallRequest", "ToolCallResult", "ToolCallError", "ValidationOutcome", "utc_timestamp"]
