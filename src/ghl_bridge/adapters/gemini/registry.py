"""Expose the tool catalog to Gemini as a single ``ghl_execute`` function declaration."""

from typing import Any, Dict

from google.genai import types

from ghl_bridge.gateway_core import ToolParameterSchemaFactory, ToolRegistry

EXECUTE_FUNCTION = "ghl_execute"


class GeminiToolCatalog:
    """
    Builds the Gemini ``types.Tool`` for the gateway.

    The model gets one generic function taking a tool name, a parameter bag
    and an optional tenant id. The tool names are enumerated in the schema so
    the model can only pick catalog entries.
    """

    def __init__(self, registry: ToolRegistry, schema_factory: ToolParameterSchemaFactory | None = None) -> None:
        """
        Args:
            registry: The tool catalog.
            schema_factory: Derives per-parameter schemas. Defaults to the standard factory.
        """
        self.registry = registry
        self.schema_factory = schema_factory or ToolParameterSchemaFactory()

    def _catalog_summary(self) -> str:
        return ", ".join(f"{tool.name} ({tool.description})" for tool in self.registry)

    def _parameter_properties(self) -> Dict[str, Any]:
        """Union of every parameter any tool declares."""
        properties: Dict[str, Any] = {}
        for tool in self.registry:
            for name in tool.all_params:
                properties.setdefault(name, self.schema_factory.param_schema(name))
        return properties

    @property
    def parameters_schema(self) -> Dict[str, Any]:
        parameters: Dict[str, Any] = {
            "type": "object",
            "description": "Parameters for the tool (varies by tool)",
        }
        properties = self._parameter_properties()
        if properties:
            parameters["properties"] = properties

        return {
            "type": "object",
            "properties": {
                "tool": {
                    "type": "string",
                    "description": "The GHL tool name (e.g. 'contacts_get-contacts')",
                    "enum": list(self.registry.names),
                },
                "parameters": parameters,
                "tenantId": {"type": "string", "description": "GoHighLevel location ID"},
            },
            "required": ["tool"],
        }

    @property
    def declaration(self) -> types.FunctionDeclaration:
        return types.FunctionDeclaration(
            name=EXECUTE_FUNCTION,
            description=f"Execute a GoHighLevel action. Available tools: {self._catalog_summary()}.",
            parameters=self.parameters_schema,  # type: ignore[arg-type]
        )

    @property
    def tool_object(self) -> types.Tool | None:
        """
        The ``types.Tool`` to pass in ``GenerateContentConfig.tools``, or None for an empty catalog.
        """
        if not len(self.registry):
            return None
        return types.Tool(function_declarations=[self.declaration])
