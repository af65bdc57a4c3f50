"""The GoHighLevel tool catalog and its short aliases."""

from types import MappingProxyType
from typing import Mapping, Tuple

from ..models import ToolDefinition


def _tool(name: str, description: str, required: Tuple[str, ...] = (), optional: Tuple[str, ...] = ()) -> ToolDefinition:
    return ToolDefinition(name=name, description=description, required_params=required, optional_params=optional)


GHL_TOOLS: Tuple[ToolDefinition, ...] = (
    _tool("contacts_get-contacts", "Fetch all contacts", optional=("limit", "skip", "query")),
    _tool(
        "contacts_create-contact",
        "Create a new contact",
        optional=("firstName", "lastName", "email", "phone", "tags", "customFields"),
    ),
    _tool("contacts_get-contact", "Fetch contact details", required=("contactId",)),
    _tool(
        "contacts_update-contact",
        "Update an existing contact",
        required=("contactId",),
        optional=("firstName", "lastName", "email", "phone", "tags", "customFields"),
    ),
    _tool(
        "contacts_upsert-contact",
        "Create a contact or update the one matching its email or phone",
        optional=("firstName", "lastName", "email", "phone", "tags", "customFields"),
    ),
    _tool("contacts_add-tags", "Add tags to a contact", required=("contactId", "tags")),
    _tool("contacts_remove-tags", "Remove tags from a contact", required=("contactId", "tags")),
    _tool("contacts_get-all-tasks", "List the tasks of a contact", required=("contactId",)),
    _tool(
        "conversations_search-conversation",
        "Search conversations",
        optional=("contactId", "query", "limit", "status"),
    ),
    _tool("conversations_get-messages", "Get the messages of a conversation", required=("conversationId",), optional=("limit",)),
    _tool(
        "conversations_send-a-new-message",
        "Send a message to a contact",
        required=("contactId", "message"),
        optional=("type", "conversationId"),
    ),
    _tool(
        "opportunities_search-opportunity",
        "Search opportunities (deals)",
        optional=("query", "pipelineId", "status", "contactId", "limit"),
    ),
    _tool("opportunities_get-pipelines", "List opportunity pipelines"),
    _tool("opportunities_get-opportunity", "Fetch opportunity details", required=("opportunityId",)),
    _tool(
        "opportunities_update-opportunity",
        "Update an opportunity",
        required=("opportunityId",),
        optional=("name", "status", "pipelineStageId", "monetaryValue", "customFields"),
    ),
    _tool(
        "calendars_get-calendar-events",
        "Get calendar events (appointments)",
        optional=("calendarId", "userId", "groupId", "startTime", "endTime"),
    ),
    _tool("calendars_get-appointment-notes", "Get the notes of an appointment", required=("appointmentId",)),
    _tool("payments_list-transactions", "List payment transactions", optional=("limit", "offset", "contactId", "startAt", "endAt")),
    _tool("payments_get-order-by-id", "Fetch a payment order", required=("orderId",)),
    _tool("locations_get-location", "Get location details by ID"),
    _tool("locations_get-custom-fields", "List the custom fields of a location", optional=("model",)),
)

GHL_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "contacts": "contacts_get-contacts",
        "contact": "contacts_get-contact",
        "create_contact": "contacts_create-contact",
        "update_contact": "contacts_update-contact",
        "conversations": "conversations_search-conversation",
        "messages": "conversations_get-messages",
        "send_message": "conversations_send-a-new-message",
        "opportunities": "opportunities_search-opportunity",
        "pipelines": "opportunities_get-pipelines",
        "calendar": "calendars_get-calendar-events",
        "appointments": "calendars_get-calendar-events",
        "transactions": "payments_list-transactions",
        "payments": "payments_list-transactions",
        "location": "locations_get-location",
    }
)

CONNECTION_TEST_TOOL = "locations_get-location"
