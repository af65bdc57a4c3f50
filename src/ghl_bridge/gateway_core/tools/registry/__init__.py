from .base import ToolRegistry
from .aliases import AliasResolver
from .catalog import GHL_TOOLS, GHL_ALIASES, CONNECTION_TEST_TOOL

__all__ = ["ToolRegistry", "AliasResolver", "GHL_TOOLS", "GHL_ALIASES", "CONNECTION_TEST_TOOL"]
