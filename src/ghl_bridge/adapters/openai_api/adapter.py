import json
from typing import Any, Dict, List, Optional

from openai.types.chat import ChatCompletionToolMessageParam, ChatCompletionToolParam

from ghl_bridge.gateway_core import (
    GatewayError,
    ToolCallRequest,
    ToolCallResult,
    ToolInputError,
    ToolParameterSchemaFactory,
    ToolRegistry,
)


class OpenAIToolCatalog:
    """Exports the catalog as OpenAI chat-completion tools, one function per catalog entry."""

    def __init__(self, registry: ToolRegistry, schema_factory: Optional[ToolParameterSchemaFactory] = None) -> None:
        self.registry = registry
        self.schema_factory = schema_factory or ToolParameterSchemaFactory()

    @property
    def tool_object(self) -> List[ChatCompletionToolParam]:
        """
        Returns:
            A list of OpenAI tool definitions.
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": self.schema_factory.build(tool),
                },
            }
            for tool in self.registry
        ]


def tool_call_to_request(tool_call: Any, tenant_id: Optional[str]) -> ToolCallRequest:
    """Turn an OpenAI tool call into a gateway request.

    Args:
        tool_call: A function tool call from the assistant message (anything with ``function.name``
            and ``function.arguments``).
        tenant_id: The tenant to run it against.

    Raises:
        ToolInputError: If the arguments are not a JSON object.
    """
    raw_args = tool_call.function.arguments
    if not raw_args:
        arguments: Any = {}
    else:
        try:
            arguments = json.loads(raw_args)
        except json.JSONDecodeError as exc:
            raise ToolInputError(f"Failed to parse arguments for tool '{tool_call.function.name}': {exc}") from exc

    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ToolInputError("Function arguments must decode to a JSON object.")

    return ToolCallRequest(tool=tool_call.function.name, parameters=arguments, tenant_id=tenant_id)


def to_tool_message(result: ToolCallResult, call_id: str) -> ChatCompletionToolMessageParam:
    """Wrap a gateway result as a ``tool`` role message.

    Args:
        result: The gateway result.
        call_id: The id of the tool call being answered.
    """
    if result.success:
        content: Dict[str, Any] = {"success": True, "data": result.data}
    else:
        content = {"success": False, "error": result.error.message if result.error else "unknown error"}
    return {"role": "tool", "tool_call_id": call_id, "content": json.dumps(content, default=str)}


def error_tool_message(error: GatewayError, call_id: str) -> ChatCompletionToolMessageParam:
    """A ``tool`` role message for a call the gateway rejected before forwarding."""
    payload = error.to_payload()
    content = {"success": False, "error": payload.pop("message"), **payload}
    return {"role": "tool", "tool_call_id": call_id, "content": json.dumps(content)}
