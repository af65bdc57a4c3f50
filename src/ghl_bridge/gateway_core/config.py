"""Process-wide configuration, built once at startup and injected into the gateway."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_UPSTREAM_URL = "https://services.leadconnectorhq.com/mcp/"
DEFAULT_TENANT_HEADER = "locationId"
VERSION = "1.0.0"


class GatewayConfig(BaseModel):
    """
    Immutable settings for the gateway and the HTTP server around it.

    Attributes:
        bearer_token: Credential sent to the upstream as ``Authorization: Bearer``.
        default_tenant_id: Tenant used by the HTTP layer when a caller omits one.
        upstream_url: The single upstream tool-execution endpoint.
        tenant_header: Name of the header carrying the tenant id.
        client_id: ``User-Agent`` sent upstream.
        execute_timeout: Bound in seconds for general execution calls.
        test_timeout: Bound in seconds for connection-test calls.
        host: Interface the server binds to.
        port: Port the server listens on.
        gemini_api_key: Key for the optional chat endpoint.
        gemini_model: Model used by the chat endpoint.
        log_level: Level for the server's log output.
    """

    model_config = ConfigDict(frozen=True)

    bearer_token: Optional[str] = None
    default_tenant_id: Optional[str] = None
    upstream_url: str = DEFAULT_UPSTREAM_URL
    tenant_header: str = DEFAULT_TENANT_HEADER
    client_id: str = f"ghl-bridge/{VERSION}"
    execute_timeout: float = Field(default=30.0, gt=0)
    test_timeout: float = Field(default=10.0, gt=0)
    host: str = "0.0.0.0"
    port: int = 3000
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    log_level: str = "INFO"

    @property
    def is_configured(self) -> bool:
        """Whether an upstream credential is present."""
        return bool(self.bearer_token and self.bearer_token.strip())

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "GatewayConfig":
        """Build the configuration from environment variables.

        Args:
            load_env_file: Load a ``.env`` file first, if one can be found.

        Returns:
            The populated configuration.
        """
        if load_env_file:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                logger.debug("Loading environment from %s", env_file)
                load_dotenv(env_file)

        values: dict = {
            "bearer_token": os.getenv("GHL_PIT_TOKEN"),
            "default_tenant_id": os.getenv("GHL_LOCATION_ID"),
            "gemini_api_key": os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
        }
        optional = {
            "upstream_url": "GHL_MCP_URL",
            "tenant_header": "GHL_TENANT_HEADER",
            "execute_timeout": "GHL_EXECUTE_TIMEOUT",
            "test_timeout": "GHL_TEST_TIMEOUT",
            "host": "HOST",
            "port": "PORT",
            "gemini_model": "GEMINI_MODEL",
            "log_level": "LOG_LEVEL",
        }
        for field_name, env_name in optional.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw

        config = cls(**values)
        if not config.is_configured:
            logger.error("GHL_PIT_TOKEN environment variable is missing. Tool execution is disabled.")
        return config
