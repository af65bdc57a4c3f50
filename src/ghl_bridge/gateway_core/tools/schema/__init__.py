from .param_schema import ToolParameterSchemaFactory, KNOWN_PARAM_SCHEMAS

__all__ = ["ToolParameterSchemaFactory", "KNOWN_PARAM_SCHEMAS"]
