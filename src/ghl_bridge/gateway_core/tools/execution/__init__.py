from .gateway import ToolGateway, is_empty_value
from .upstream import UpstreamClient

__all__ = ["ToolGateway", "UpstreamClient", "is_empty_value"]
