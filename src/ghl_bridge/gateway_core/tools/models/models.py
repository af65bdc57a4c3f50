from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class ToolDefinition(BaseModel):
    """
    Represents one CRM operation exposed through the catalog.

    Attributes:
        name: The unique name of the tool, e.g. ``contacts_get-contact``.
        description: A human-readable description, used for catalog display only.
        required_params: Parameter names that must be present and non-empty in a call.
        optional_params: Parameter names that may be present.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    required_params: Tuple[str, ...] = ()
    optional_params: Tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Tool name must not be empty.")
        return value

    @property
    def all_params(self) -> Tuple[str, ...]:
        """Required parameters followed by optional ones, in declaration order."""
        return self.required_params + self.optional_params
