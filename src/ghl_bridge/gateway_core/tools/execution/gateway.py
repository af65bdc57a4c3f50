"""The tool gateway: validate a call against the catalog, forward it, and map the outcome."""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import httpx

from ..models import ToolCallError, ToolCallRequest, ToolCallResult, ToolDefinition, ValidationOutcome, utc_timestamp
from ..registry import AliasResolver, CONNECTION_TEST_TOOL, GHL_ALIASES, GHL_TOOLS, ToolRegistry
from .upstream import UpstreamClient
from ...config import GatewayConfig, VERSION
from ...exceptions import (
    ConfigurationMissingError,
    MissingFieldError,
    MissingRequiredParameterError,
    ToolInputError,
    UnknownToolError,
    UpstreamError,
)
from ...logger import get_logger

logger = get_logger(__name__)


def is_empty_value(value: Any) -> bool:
    """Whether a parameter value counts as absent.

    ``None``, blank strings, and empty lists or objects are empty. ``0`` and ``False`` are values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


class ToolGateway:
    """
    Single execution path shared by every presentation adapter.

    The gateway holds no per-call state. The registry, alias table and
    configuration are read-only, so one instance serves all concurrent requests.
    """

    def __init__(
        self,
        config: GatewayConfig,
        registry: ToolRegistry,
        upstream: UpstreamClient,
        aliases: Optional[AliasResolver] = None,
    ) -> None:
        """
        Args:
            config: Process-wide configuration.
            registry: The tool catalog.
            upstream: Client for the upstream endpoint.
            aliases: Optional short-name resolver applied by ``execute``.
        """
        self.config = config
        self.registry = registry
        self.upstream = upstream
        self.aliases = aliases

    @classmethod
    def from_config(
        cls,
        config: GatewayConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        tools: Iterable[ToolDefinition] = GHL_TOOLS,
        aliases: Optional[Mapping[str, str]] = GHL_ALIASES,
    ) -> "ToolGateway":
        """Wire a gateway from configuration and the static GHL catalog.

        Args:
            config: Process-wide configuration.
            http_client: Optional shared HTTP client, e.g. a stub transport in tests.
            tools: Catalog entries.
            aliases: Short-name table, or None to disable alias resolution.
        """
        registry = ToolRegistry(tools)
        resolver = AliasResolver(aliases, registry) if aliases is not None else None
        return cls(config, registry, UpstreamClient(config, http_client), resolver)

    def resolve_tool_name(self, name: str) -> str:
        if self.aliases is None or not isinstance(name, str):
            return name
        return self.aliases.resolve(name)

    def describe_catalog(self) -> Tuple[ToolDefinition, ...]:
        """Enumerate the catalog in registry insertion order."""
        return self.registry.describe()

    def validate(self, request: ToolCallRequest) -> ValidationOutcome:
        """Check a request against the catalog. No network traffic.

        Args:
            request: The tool call.

        Returns:
            The matched definition together with the request.

        Raises:
            MissingFieldError: ``tool`` or the tenant id is absent.
            UnknownToolError: The tool is not in the catalog.
            MissingRequiredParameterError: A required parameter is absent or empty.
            ToolInputError: The parameter bag is not an object.
        """
        missing_fields = []
        if is_empty_value(request.tool) or not isinstance(request.tool, str):
            missing_fields.append("tool")
        if is_empty_value(request.tenant_id) or not isinstance(request.tenant_id, str):
            missing_fields.append("tenantId")
        if missing_fields:
            raise MissingFieldError(missing_fields, self.registry.names)

        definition = self.registry.get(request.tool)
        if definition is None:
            logger.warning("Rejected call to unknown tool '%s'.", request.tool)
            raise UnknownToolError(request.tool, self.registry.names)

        parameters = request.parameters if request.parameters is not None else {}
        if not isinstance(parameters, Mapping):
            raise ToolInputError("Tool parameters must be an object.")

        missing: List[str] = [name for name in definition.required_params if is_empty_value(parameters.get(name))]
        if missing:
            logger.warning("Rejected call to '%s': missing %s.", request.tool, missing)
            raise MissingRequiredParameterError(request.tool, missing)

        return ValidationOutcome(definition=definition, request=request)

    def ensure_configured(self) -> None:
        """
        Raises:
            ConfigurationMissingError: If no upstream credential is configured.
        """
        if not self.config.is_configured:
            raise ConfigurationMissingError("Upstream credential is not configured (set GHL_PIT_TOKEN).")

    async def forward(
        self, definition: ToolDefinition, request: ToolCallRequest, timeout: Optional[float] = None
    ) -> ToolCallResult:
        """Send a validated call upstream, once, and map the outcome.

        Args:
            definition: The catalog entry returned by ``validate``.
            request: The validated request.
            timeout: Bound in seconds. Defaults to the configured execution bound.

        Returns:
            A successful result carrying the upstream body, or a failed one
            carrying the classified error. Upstream errors are never raised.
        """
        bound = timeout if timeout is not None else self.config.execute_timeout
        parameters: Dict[str, Any] = dict(request.parameters or {})
        logger.info("Executing tool '%s' for tenant '%s'.", definition.name, request.tenant_id)
        logger.debug("Tool input: %s", parameters)

        try:
            data = await self.upstream.call_tool(definition.name, parameters, str(request.tenant_id), bound)
        except UpstreamError as exc:
            return ToolCallResult(
                success=False,
                tool=definition.name,
                error=ToolCallError(
                    message=exc.message,
                    status_code=exc.status_code,
                    kind=exc.kind,
                    details=exc.details,
                ),
            )

        logger.info("Tool '%s' executed successfully.", definition.name)
        return ToolCallResult(success=True, tool=definition.name, data=data)

    async def execute(self, request: ToolCallRequest, timeout: Optional[float] = None) -> ToolCallResult:
        """Resolve aliases, validate, check configuration, then forward.

        Args:
            request: The inbound call.
            timeout: Optional bound override.

        Returns:
            The forward result.

        Raises:
            ToolInputError: On any caller-input problem. Nothing is sent upstream.
            ConfigurationMissingError: If no upstream credential is configured.
        """
        canonical = self.resolve_tool_name(request.tool)
        if canonical != request.tool:
            request = dataclasses.replace(request, tool=canonical)

        outcome = self.validate(request)
        self.ensure_configured()
        return await self.forward(outcome.definition, outcome.request, timeout=timeout)

    async def test_connection(self, tenant_id: Optional[str]) -> ToolCallResult:
        """Check the upstream with a harmless read and the short test bound."""
        request = ToolCallRequest(tool=CONNECTION_TEST_TOOL, parameters={}, tenant_id=tenant_id)
        return await self.execute(request, timeout=self.config.test_timeout)

    def health(self) -> Dict[str, Any]:
        """Introspection only. Makes no upstream call."""
        return {
            "status": "healthy",
            "configured": self.config.is_configured,
            "toolCount": len(self.registry),
            "version": VERSION,
            "timestamp": utc_timestamp(),
        }
