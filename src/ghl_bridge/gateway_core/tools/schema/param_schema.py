import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..models import ToolDefinition

# Parameters whose values are not plain strings. Everything else is typed as a string.
KNOWN_PARAM_SCHEMAS: Mapping[str, Dict[str, Any]] = MappingProxyType(
    {
        "tags": {"type": "array", "items": {"type": "string"}},
        "customFields": {"type": "object"},
    }
)


class ToolParameterSchemaFactory:
    """Derives a JSON schema for a tool from its required and optional parameter names."""

    def __init__(self, known_params: Mapping[str, Dict[str, Any]] = KNOWN_PARAM_SCHEMAS) -> None:
        self._known_params = known_params

    def param_schema(self, param_name: str) -> Dict[str, Any]:
        """Schema for a single parameter.

        Args:
            param_name: The parameter name.

        Returns:
            A fresh schema dict; callers may mutate it.
        """
        known = self._known_params.get(param_name)
        if known is None:
            return {"type": "string"}
        return copy.deepcopy(known)

    def build(self, definition: ToolDefinition) -> Dict[str, Any]:
        """Build the ``inputSchema`` for a tool.

        Args:
            definition: The tool definition.

        Returns:
            An object schema listing every declared parameter, with the required ones marked.
        """
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {name: self.param_schema(name) for name in definition.all_params},
        }
        if definition.required_params:
            schema["required"] = list(definition.required_params)
        return schema

