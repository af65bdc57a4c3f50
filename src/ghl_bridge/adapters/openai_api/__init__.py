"""OpenAI tool-message envelope."""

from .adapter import OpenAIToolCatalog, tool_call_to_request, to_tool_message, error_tool_message

__all__ = ["OpenAIToolCatalog", "tool_call_to_request", "to_tool_message", "error_tool_message"]
