"""HTTP client for the upstream CRM tool-execution endpoint."""

import asyncio
from types import TracebackType
from typing import Any, Dict, Optional, Type

import httpx

from ...config import GatewayConfig
from ...exceptions import (
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnauthorizedError,
    UpstreamForbiddenError,
    UpstreamOtherError,
    TransportFailureError,
)
from ...logger import get_logger

logger = get_logger(__name__)

__all__ = ["UpstreamClient"]


class UpstreamClient:
    """Posts tool calls to the single upstream URL and classifies failures.

    One attempt per call, never retried. Every failure leaves this class as an
    ``UpstreamError`` subclass; raw ``httpx`` exceptions do not escape.
    """

    def __init__(self, config: GatewayConfig, http_client: Optional[httpx.AsyncClient] = None) -> None:
        """
        Args:
            config: Gateway configuration (URL, credential, headers, bounds).
            http_client: A client to reuse. If None, one is created and owned by this instance.
        """
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()

    async def __aenter__(self) -> "UpstreamClient":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.debug("Upstream HTTP client closed.")

    def build_headers(self, tenant_id: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.bearer_token}",
            self._config.tenant_header: tenant_id,
            "Content-Type": "application/json",
            "Accept": "application/json, text/plain, */*",
            "User-Agent": self._config.client_id,
        }

    async def call_tool(self, tool: str, tool_input: Dict[str, Any], tenant_id: str, timeout: float) -> Any:
        """Forward one tool call.

        Args:
            tool: Canonical tool name.
            tool_input: The parameter bag, sent as ``input``.
            tenant_id: Tenant id, sent in the tenant header.
            timeout: Bound in seconds for the whole call.

        Returns:
            The upstream response body: parsed JSON, raw text, or None when empty.

        Raises:
            UpstreamError: One of its subclasses, classified by failure cause.
        """
        body = {"tool": tool, "input": tool_input}
        logger.debug("POST %s tool=%s", self._config.upstream_url, tool)

        try:
            response = await asyncio.wait_for(
                self._client.post(
                    self._config.upstream_url,
                    json=body,
                    headers=self.build_headers(tenant_id),
                    timeout=timeout,
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("Upstream call for '%s' timed out after %ss.", tool, timeout)
            raise UpstreamTimeoutError("request timed out") from exc
        except httpx.HTTPError as exc:
            msg = str(exc) or type(exc).__name__
            logger.error("Transport failure calling upstream for '%s': %s", tool, msg)
            raise TransportFailureError(msg) from exc

        payload = self._parse_body(response)
        if response.is_success:
            return payload

        raise self._classify(response.status_code, payload)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _classify(status: int, payload: Any) -> UpstreamError:
        """Map a non-2xx upstream response to its error class."""
        upstream_message = None
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            upstream_message = payload["message"]

        if status == 401:
            error: UpstreamError = UpstreamUnauthorizedError("authentication failed", details=payload)
        elif status == 403:
            error = UpstreamForbiddenError("insufficient permissions", details=payload)
        elif status == 408:
            error = UpstreamTimeoutError("request timed out", details=payload)
        else:
            error = UpstreamOtherError(
                upstream_message or f"upstream returned HTTP {status}", status_code=status, details=payload
            )

        logger.error("Upstream responded with HTTP %d (%s): %s", status, error.kind, upstream_message or payload)
        return error
