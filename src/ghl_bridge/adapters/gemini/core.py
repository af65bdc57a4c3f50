import asyncio
from typing import Any, List, Optional

from google.genai import types
from google.genai.client import AsyncClient
from pydantic import BaseModel

from ghl_bridge.gateway_core import GatewayError, ToolGateway, get_logger
from .adapter import error_function_response, function_call_to_request, get_function_calls, to_function_response
from .registry import EXECUTE_FUNCTION, GeminiToolCatalog

logger = get_logger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a GoHighLevel assistant. The user's location ID is {tenant_id}. "
    "Always include this locationId as tenantId when calling functions. "
    "Help users interact with their GHL data naturally."
)


class ChatReply(BaseModel):
    """Outcome of one chat turn.

    Attributes:
        content: Final text answer of the model.
        tool_calls: Number of ``ghl_execute`` calls answered during the turn.
        tenant_id: The tenant the turn ran against.
    """

    content: str
    tool_calls: int = 0
    tenant_id: Optional[str] = None


class GeminiChatBridge:
    """
    Runs a Gemini chat turn whose function calls are executed through the gateway.

    Every ``ghl_execute`` call goes through ``ToolGateway.execute``, the same path
    the HTTP and MCP surfaces use. Input errors are returned to the model as
    failed function responses so it can correct the call.
    """

    def __init__(
        self,
        aclient: AsyncClient,
        gateway: ToolGateway,
        model_name: str,
        default_tenant_id: Optional[str] = None,
        temp: float = 1.0,
        max_tokens: int = 8192,
        max_function_loops: int = 5,
    ):
        """
        Args:
            aclient: The async Google GenAI client.
            gateway: The shared tool gateway.
            model_name: The Gemini model identifier.
            default_tenant_id: Tenant used when a turn does not name one.
            temp: Sampling temperature.
            max_tokens: Maximum output tokens per response.
            max_function_loops: Maximum number of function-call rounds per turn.
        """
        self.client = aclient
        self.gateway = gateway
        self.model = model_name
        self.default_tenant_id = default_tenant_id
        self.temperature = temp
        self.max_tokens = max_tokens
        self.max_function_loops = max_function_loops
        self.catalog = GeminiToolCatalog(gateway.registry)
        logger.info(f"Initialized GeminiChatBridge with model='{model_name}', tools={len(gateway.registry)}")

    def _build_config(self, tenant_id: Optional[str]) -> types.GenerateContentConfig:
        tool_obj = self.catalog.tool_object
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION.format(tenant_id=tenant_id or "unknown"),
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            tools=[tool_obj] if tool_obj else None,
        )

    async def chat(self, message: str, tenant_id: Optional[str] = None) -> ChatReply:
        """Process one user message, answering function calls until the model replies with text.

        Args:
            message: The user's message.
            tenant_id: Tenant for this turn. Falls back to the bridge default.

        Returns:
            The final answer and the number of tool calls made.
        """
        tenant = tenant_id or self.default_tenant_id
        logger.debug(f"Starting chat turn for tenant={tenant}: {message[:50]}...")

        chat = self.client.chats.create(model=self.model, config=self._build_config(tenant))

        try:
            response = await chat.send_message(message)
        except Exception as e:
            logger.error(f"Error sending message to Gemini: {e}", exc_info=True)
            raise

        answered = 0
        for loop_index in range(self.max_function_loops):
            function_calls = get_function_calls(response)
            if not function_calls:
                break

            logger.info(
                f"Loop {loop_index + 1}/{self.max_function_loops}: Processing {len(function_calls)} function call(s)."
            )
            parts = await asyncio.gather(*(self._answer(fc, tenant) for fc in function_calls))
            answered += len(parts)
            response = await chat.send_message(list(parts))
        else:
            if get_function_calls(response):
                logger.warning(f"Max function loops ({self.max_function_loops}) reached. Stopping execution.")

        return ChatReply(content=self._text_of(response), tool_calls=answered, tenant_id=tenant)

    async def _answer(self, function_call: types.FunctionCall, tenant_id: Optional[str]) -> types.Part:
        name = function_call.name or ""
        if name != EXECUTE_FUNCTION:
            logger.warning(f"Model called unknown function '{name}'.")
            return error_function_response(name, f"Function '{name}' is not available. Use '{EXECUTE_FUNCTION}'.")

        request = function_call_to_request(function_call, tenant_id)
        try:
            result = await self.gateway.execute(request)
        except GatewayError as exc:
            logger.warning(f"Tool call rejected before forwarding: {exc.message}")
            return error_function_response(name, exc)

        return to_function_response(result, name)

    @staticmethod
    def _text_of(response: Any) -> str:
        parts = getattr(response, "parts", None)
        return "".join([p.text for p in parts if p.text]) if parts else ""
