from ghl_bridge.gateway_core import ToolDefinition, ToolParameterSchemaFactory


def test_schema_marks_required_params() -> None:
    tool = ToolDefinition(
        name="contacts_update-contact",
        description="Update",
        required_params=("contactId",),
        optional_params=("email", "tags", "customFields"),
    )

    schema = ToolParameterSchemaFactory().build(tool)

    assert schema == {
        "type": "object",
        "properties": {
            "contactId": {"type": "string"},
            "email": {"type": "string"},
            "tags": {"type": "array", "items": {"type": "string"}},
            "customFields": {"type": "object"},
        },
        "required": ["contactId"],
    }


def test_schema_without_required_params_omits_required() -> None:
    tool = ToolDefinition(name="locations_get-location", description="Location")

    schema = ToolParameterSchemaFactory().build(tool)

    assert schema == {"type": "object", "properties": {}}


def test_param_schema_returns_fresh_copies() -> None:
    factory = ToolParameterSchemaFactory()

    first = factory.param_schema("tags")
    first["items"]["type"] = "integer"

    assert factory.param_schema("tags") == {"type": "array", "items": {"type": "string"}}


def test_custom_known_params() -> None:
    factory = ToolParameterSchemaFactory(known_params={"limit": {"type": "integer"}})

    assert factory.param_schema("limit") == {"type": "integer"}
    assert factory.param_schema("tags") == {"type": "string"}
