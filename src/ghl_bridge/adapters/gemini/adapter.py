"""Translate between Gemini function calls and the gateway's tool call protocol."""

from typing import Any, Dict, Mapping, Optional, Sequence

from google.genai import types
from google.genai.types import GenerateContentResponse

from ghl_bridge.gateway_core import GatewayError, ToolCallRequest, ToolCallResult, get_logger
from .registry import EXECUTE_FUNCTION

logger = get_logger(__name__)


def get_function_calls(response: GenerateContentResponse) -> Sequence[types.FunctionCall]:
    """Extract the function calls from a Gemini response, in order."""
    return [p.function_call for p in (response.parts or []) if p.function_call]


def function_call_to_request(function_call: types.FunctionCall, tenant_id: Optional[str]) -> ToolCallRequest:
    """Turn a ``ghl_execute`` call into a gateway request.

    The tenant of the turn always wins. A ``tenantId`` or ``locationId`` argument
    from the model is used only when the turn has no tenant.

    Args:
        function_call: The call emitted by the model.
        tenant_id: The tenant the chat turn runs against.

    Returns:
        The request. Validation is left to the gateway.
    """
    args: Mapping[str, Any] = getattr(function_call, "args", None) or {}
    parameters = args.get("parameters")
    if not tenant_id:
        tenant_id = args.get("tenantId") or args.get("locationId")
    return ToolCallRequest(
        tool=args.get("tool"),  # type: ignore[arg-type]
        parameters=dict(parameters) if isinstance(parameters, Mapping) else parameters,  # type: ignore[arg-type]
        tenant_id=tenant_id,
    )


def result_payload(result: ToolCallResult) -> Dict[str, Any]:
    if result.success:
        return {"success": True, "tool": result.tool, "data": result.data}
    error = result.error
    return {
        "success": False,
        "tool": result.tool,
        "error": error.message if error else "unknown error",
        "kind": error.kind if error else None,
    }


def to_function_response(result: ToolCallResult, name: str = EXECUTE_FUNCTION) -> types.Part:
    """Wrap a gateway result as a named Gemini function response.

    Args:
        result: The gateway result.
        name: The function name the model called.

    Returns:
        A Part containing the function response.
    """
    return types.Part(function_response=types.FunctionResponse(name=name, response=result_payload(result)))


def error_function_response(name: str, error: GatewayError | str) -> types.Part:
    """A failed function response for calls that never reached the upstream."""
    if isinstance(error, GatewayError):
        payload = error.to_payload()
        response = {"success": False, "error": payload.pop("message"), **payload}
    else:
        response = {"success": False, "error": error}
    logger.debug("Returning error function response for '%s': %s", name, response)
    return types.Part(function_response=types.FunctionResponse(name=name, response=response))
