"""Gemini function-calling envelope and chat bridge."""

from .core import GeminiChatBridge, ChatReply
from .registry import GeminiToolCatalog, EXECUTE_FUNCTION
from .adapter import to_function_response, error_function_response, function_call_to_request, get_function_calls

__all__ = [
    "GeminiChatBridge",
    "ChatReply",
    "GeminiToolCatalog",
    "EXECUTE_FUNCTION",
    "to_function_response",
    "error_function_response",
    "function_call_to_request",
    "get_function_calls",
]
