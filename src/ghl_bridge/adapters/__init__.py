"""Presentation adapters: envelope translators over the shared gateway."""

from .gemini import GeminiChatBridge, GeminiToolCatalog
from .mcp import MCPToolServer
from .openai_api import OpenAIToolCatalog

__all__ = ["GeminiChatBridge", "GeminiToolCatalog", "MCPToolServer", "OpenAIToolCatalog"]
