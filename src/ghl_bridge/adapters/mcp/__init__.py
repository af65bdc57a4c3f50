"""MCP tool-call envelope and JSON-RPC handler."""

from .adapter import MCPToolServer, to_call_tool_result, error_call_tool_result, list_mcp_tools

__all__ = ["MCPToolServer", "to_call_tool_result", "error_call_tool_result", "list_mcp_tools"]
