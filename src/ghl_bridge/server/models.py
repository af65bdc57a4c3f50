from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field


class ExecuteRequest(BaseModel):
    """Request body for executing a tool.

    Fields are optional here so the gateway, not the schema layer, reports missing ones.
    """

    tool: Optional[str] = None
    parameters: Any = None
    tenant_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("tenantId", "locationId", "tenant_id")
    )


class ConnectionTestRequest(BaseModel):
    """Request body for the upstream connection test."""

    tenant_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("tenantId", "locationId", "tenant_id")
    )


class ChatRequest(BaseModel):
    """Request body for a chat turn."""

    message: Optional[str] = None
    tenant_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("tenantId", "locationId", "tenant_id")
    )
