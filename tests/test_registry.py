import pytest

from ghl_bridge.gateway_core import GHL_ALIASES, GHL_TOOLS, AliasResolver, ToolDefinition, ToolRegistry
from ghl_bridge.gateway_core import ToolRegistrationError
from ghl_bridge.gateway_core.tools.registry import CONNECTION_TEST_TOOL


def test_catalog_loads_every_tool_once() -> None:
    registry = ToolRegistry(GHL_TOOLS)

    assert len(registry) == len(GHL_TOOLS)
    assert registry.names == tuple(tool.name for tool in GHL_TOOLS)
    assert len(set(registry.names)) == len(registry.names)
    assert CONNECTION_TEST_TOOL in registry


def test_lookup_preserves_declared_params() -> None:
    registry = ToolRegistry(GHL_TOOLS)

    contact = registry.get("contacts_get-contact")
    assert contact is not None
    assert contact.required_params == ("contactId",)
    assert contact.optional_params == ()

    send = registry.get("conversations_send-a-new-message")
    assert send is not None
    assert send.required_params[:2] == ("contactId", "message")

    assert registry.get("does_not_exist") is None


def test_describe_is_ordered_and_idempotent() -> None:
    registry = ToolRegistry(GHL_TOOLS)

    first = registry.describe()
    second = registry.describe()

    assert first == second
    assert [tool.name for tool in first] == list(registry.names)
    assert list(registry) == list(first)


def test_tools_view_is_read_only() -> None:
    registry = ToolRegistry(GHL_TOOLS)

    with pytest.raises(TypeError):
        registry.tools["new"] = ToolDefinition(name="new", description="x")  # type: ignore[index]


def test_duplicate_tool_name_rejected() -> None:
    tool = ToolDefinition(name="a_b", description="first")
    with pytest.raises(ToolRegistrationError, match="already registered"):
        ToolRegistry([tool, ToolDefinition(name="a_b", description="second")])


def test_param_both_required_and_optional_rejected() -> None:
    tool = ToolDefinition(name="a_b", description="x", required_params=("id",), optional_params=("id", "limit"))
    with pytest.raises(ToolRegistrationError, match="both required and optional"):
        ToolRegistry([tool])


def test_repeated_param_rejected() -> None:
    tool = ToolDefinition(name="a_b", description="x", optional_params=("limit", "limit"))
    with pytest.raises(ToolRegistrationError):
        ToolRegistry([tool])


def test_blank_tool_name_rejected() -> None:
    with pytest.raises(ValueError):
        ToolDefinition(name="  ", description="x")


def test_alias_resolution() -> None:
    resolver = AliasResolver(GHL_ALIASES, ToolRegistry(GHL_TOOLS))

    assert resolver.resolve("contacts") == "contacts_get-contacts"
    assert resolver.resolve("location") == "locations_get-location"
    assert resolver.resolve("contacts_get-contact") == "contacts_get-contact"
    assert resolver.resolve("nonsense") == "nonsense"


def test_alias_to_unknown_tool_rejected() -> None:
    registry = ToolRegistry([ToolDefinition(name="a_b", description="x")])
    with pytest.raises(ToolRegistrationError, match="ghost"):
        AliasResolver({"ghost": "missing_tool"}, registry)
