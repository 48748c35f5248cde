"""Tests for contact, conversation, opportunity, calendar, location and messaging tools."""

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from ghl_mcp.errors import GHLAPIError
from ghl_mcp.models import CustomFieldValue
from ghl_mcp.tools import (
    blog,
    calendar,
    contacts,
    conversations,
    email,
    email_verification,
    locations,
    opportunities,
    surveys,
    workflows,
)


class TestContacts:
    """Tests for contact tools."""

    def test_create_contact(self, fake_client):
        """The configured location is added and the created ID is reported."""
        fake_client.post.return_value = {"contact": {"id": "c1", "email": "ann@example.com"}}

        result = contacts.create_contact(email="ann@example.com", first_name="Ann", tags=["vip"])

        path = fake_client.post.call_args.args[0]
        body = fake_client.post.call_args.kwargs["json"]
        assert path == "/contacts/"
        assert body["locationId"] == "loc123"
        assert body["firstName"] == "Ann"
        assert body["tags"] == ["vip"]
        assert result["success"] is True
        assert result["contact"]["id"] == "c1"
        assert result["message"] == "Contact created with ID: c1"

    def test_duplicate_contact_hint(self, fake_client):
        fake_client.post.side_effect = GHLAPIError(400, "This location does not allow duplicated contacts")

        with pytest.raises(ToolError, match="upsert_contact"):
            contacts.create_contact(email="ann@example.com")

    def test_get_contact_not_found(self, fake_client):
        fake_client.get.side_effect = GHLAPIError(404, "Contact not found")

        with pytest.raises(ToolError) as exc_info:
            contacts.get_contact("missing")

        message = str(exc_info.value)
        assert "Verify the contact ID with search_contacts" in message
        assert "Original error: GHL API Error (404): Contact not found" in message

    def test_search_contacts_filters(self, fake_client):
        fake_client.post.return_value = {"contacts": [{"id": "c1"}], "total": 7}

        result = contacts.search_contacts(email="ann@example.com", limit=5)

        body = fake_client.post.call_args.kwargs["json"]
        assert body["pageLimit"] == 5
        assert body["filters"] == [{"field": "email", "operator": "eq", "value": "ann@example.com"}]
        assert result["total"] == 7
        assert result["message"] == "Found 1 contacts (7 total)"

    def test_update_contact_custom_fields(self, fake_client):
        """Custom field values go out with GHL field names."""
        fake_client.put.return_value = {"contact": {"id": "c1"}}

        contacts.update_contact("c1", custom_fields=[CustomFieldValue(id="f1", field_value="gold")])

        body = fake_client.put.call_args.kwargs["json"]
        assert fake_client.put.call_args.args[0] == "/contacts/c1"
        assert body["customFields"] == [{"id": "f1", "field_value": "gold"}]


class TestConversations:
    """Tests for conversation tools."""

    def test_send_sms_uses_conversation_api_version(self, fake_client):
        fake_client.post.return_value = {"messageId": "m1", "conversationId": "conv1"}

        result = conversations.send_sms("c1", "Hello")

        assert fake_client.post.call_args.args[0] == "/conversations/messages"
        assert fake_client.post.call_args.kwargs["version"] == "2021-04-15"
        assert fake_client.post.call_args.kwargs["json"]["type"] == "SMS"
        assert result["message_id"] == "m1"
        assert result["conversation_id"] == "conv1"

    def test_send_sms_too_long(self, fake_client):
        with pytest.raises(ToolError, match="1600"):
            conversations.send_sms("c1", "x" * 1601)
        fake_client.post.assert_not_called()

    def test_outbound_call_not_configured(self, fake_client):
        """A 500 from the call endpoint explains how to enable calling."""
        fake_client.post.side_effect = GHLAPIError(500, "Internal server error")

        with pytest.raises(ToolError, match="Call functionality is not configured"):
            conversations.add_outbound_call("conv1", "prov1", to="+15550001111", from_number="+15550002222")

    def test_outbound_call_payload(self, fake_client):
        fake_client.post.return_value = {"messageId": "m2"}

        conversations.add_outbound_call("conv1", "prov1", to="+15550001111", from_number="+15550002222", status="completed")

        body = fake_client.post.call_args.kwargs["json"]
        assert body["type"] == "Call"
        assert body["call"] == {"to": "+15550001111", "from": "+15550002222", "status": "completed"}

    def test_message_status_provider_hint(self, fake_client):
        fake_client.put.side_effect = GHLAPIError(403, "No conversation provider found")

        with pytest.raises(ToolError, match="no conversation provider is configured"):
            conversations.update_message_status("m1", "read")

    def test_get_message_recording_is_base64(self, fake_client):
        fake_client.download.return_value = (b"RIFF", "audio/wav")

        result = conversations.get_message_recording("m1")

        assert result["recording"] == "UklGRg=="
        assert result["content_type"] == "audio/wav"
        assert fake_client.download.call_args.args[0] == "/conversations/messages/m1/locations/loc123/recording"

    def test_inbound_call_not_configured(self, fake_client):
        fake_client.post.side_effect = GHLAPIError(500, "Internal server error")

        with pytest.raises(ToolError, match="Call functionality is not configured"):
            conversations.add_inbound_message("Call", "conv1", "prov1")

    def test_inbound_sms_error_not_rewritten(self, fake_client):
        fake_client.post.side_effect = GHLAPIError(500, "Internal server error")

        with pytest.raises(ToolError) as excinfo:
            conversations.add_inbound_message("SMS", "conv1", "prov1", message="Hi")

        assert str(excinfo.value) == "Failed to add inbound message: GHL API Error (500): Internal server error"

    def test_recent_messages_rows(self, fake_client):
        fake_client.get.return_value = {"conversations": [{
            "id": "conv1",
            "fullName": "Ann Lee",
            "email": "ann@example.com",
            "phone": "+15550001111",
            "lastMessageBody": "See you then",
            "lastMessageType": "TYPE_SMS",
            "unreadCount": 2,
            "starred": False,
            "dateAdded": 1760950800000,
        }]}

        result = conversations.get_recent_messages(limit=5)

        params = fake_client.get.call_args.kwargs["params"]
        assert fake_client.get.call_args.args[0] == "/conversations/search"
        assert params == {
            "locationId": "loc123",
            "limit": 5,
            "status": "unread",
            "sortBy": "last_message_date",
            "sort": "desc",
        }
        assert result["conversations"] == [{
            "conversationId": "conv1",
            "contactName": "Ann Lee",
            "contactEmail": "ann@example.com",
            "contactPhone": "+15550001111",
            "lastMessageBody": "See you then",
            "lastMessageType": "TYPE_SMS",
            "unreadCount": 2,
            "starred": False,
        }]
        assert result["message"] == "Retrieved 1 recent conversations"


class TestOpportunities:
    def test_update_status_sends_status_only(self, fake_client):
        result = opportunities.update_opportunity_status("o1", "won")

        fake_client.put.assert_called_once_with("/opportunities/o1/status", json={"status": "won"})
        assert result["message"] == "Opportunity status updated to won"

    @pytest.mark.parametrize("new, verb", [(True, "created"), (False, "updated")])
    def test_upsert_reports_is_new(self, fake_client, new, verb):
        fake_client.post.return_value = {"opportunity": {"id": "o1"}, "new": new}

        result = opportunities.upsert_opportunity("pipe1", "c1", name="Deal")

        assert fake_client.post.call_args.args[0] == "/opportunities/upsert"
        assert result["is_new"] is new
        assert result["opportunity"] == {"id": "o1"}
        assert result["message"] == f"Opportunity {verb} successfully"


class TestCalendar:
    """Tests for calendar tools."""

    def test_free_slots_converts_dates(self, fake_client):
        fake_client.get.return_value = {"2025-10-20": {"slots": ["2025-10-20T09:00:00Z"]}, "traceId": "t"}

        result = calendar.get_free_slots("cal1", "2025-10-20", "2025-10-21")

        params = fake_client.get.call_args.kwargs["params"]
        assert fake_client.get.call_args.args[0] == "/calendars/cal1/free-slots"
        assert params["startDate"] == 1760918400000
        assert params["endDate"] == 1761004800000
        assert result["slots"] == {"2025-10-20": {"slots": ["2025-10-20T09:00:00Z"]}}

    def test_events_accept_iso_bounds(self, fake_client):
        fake_client.get.return_value = {"events": [{"id": "e1"}]}

        result = calendar.get_calendar_events("cal1", "2025-10-20T09:00:00Z", "1760954400000")

        params = fake_client.get.call_args.kwargs["params"]
        assert params["startTime"] == "1760950800000"
        assert params["endTime"] == "1760954400000"
        assert result["events"] == [{"id": "e1"}]


class TestLocations:
    def test_get_location_defaults_to_configured(self, fake_client):
        fake_client.get.return_value = {"location": {"id": "loc123"}}

        locations.get_location()

        assert fake_client.get.call_args.args[0] == "/locations/loc123"

    def test_create_location_tag(self, fake_client):
        locations.create_location_tag("vip", location_id="other")

        fake_client.post.assert_called_once_with("/locations/other/tags", json={"name": "vip"})

    def test_custom_values_limited_client_side(self, fake_client):
        fake_client.get.return_value = {"customValues": [{"id": f"cv{i}"} for i in range(30)]}

        result = locations.get_location_custom_values()

        assert fake_client.get.call_args.args[0] == "/locations/loc123/customValues"
        assert len(result["custom_values"]) == 25
        assert result["total"] == 30
        assert result["returned"] == 25
        assert result["has_more"] is True
        assert result["message"] == "Retrieved 25 of 30 custom values (use limit parameter to get more)"

    def test_custom_values_all_returned(self, fake_client):
        fake_client.get.return_value = {"customValues": [{"id": "cv1"}, {"id": "cv2"}]}

        result = locations.get_location_custom_values(limit=5)

        assert result["has_more"] is False
        assert result["message"] == "Retrieved 2 of 2 custom values"


class TestMessaging:
    """Tests for blog, email, workflow and survey tools."""

    def test_check_url_slug(self, fake_client):
        fake_client.get.return_value = {"exists": True}

        result = blog.check_url_slug("spring-sale")

        assert result["exists"] is True
        assert result["available"] is False

    def test_create_email_template(self, fake_client):
        email.create_email_template("Welcome", "<p>Hi</p>")

        body = fake_client.post.call_args.kwargs["json"]
        assert fake_client.post.call_args.args[0] == "/emails/builder"
        assert body["type"] == "html"
        assert body["locationId"] == "loc123"

    def test_workflow_status_counts(self, fake_client):
        fake_client.get.return_value = {"workflows": [
            {"id": "w1", "status": "published"},
            {"id": "w2", "status": "draft"},
            {"id": "w3", "status": "published"},
        ]}

        result = workflows.get_workflows()

        assert result["metadata"] == {"total_workflows": 3, "workflow_statuses": {"published": 2, "draft": 1}}

    def test_workflow_failure_message(self, fake_client):
        fake_client.get.side_effect = GHLAPIError(400, "Bad Request")

        with pytest.raises(ToolError, match="Failed to get workflows: GHL API Error \\(400\\): Bad Request"):
            workflows.get_workflows()

    def test_survey_limit(self, fake_client):
        with pytest.raises(ToolError, match="between 1 and 50"):
            surveys.get_surveys(limit=51)


class TestVerifyEmail:
    """verify_email reports failures in its result."""

    def test_success(self, fake_client):
        fake_client.post.return_value = {
            "result": "deliverable",
            "risk": "low",
            "reason": [],
            "leadconnectorRecomendation": {"isEmailValid": True},
        }

        result = email_verification.verify_email("email", "ann@example.com")

        assert fake_client.post.call_args.kwargs["params"] == {"locationId": "loc123"}
        assert result["success"] is True
        assert result["message"] == "Email verification completed. Result: deliverable, Risk: low, Recommended: Valid"

    def test_failure_does_not_raise(self, fake_client):
        fake_client.post.side_effect = GHLAPIError(402, "Insufficient wallet balance")

        result = email_verification.verify_email("email", "ann@example.com")

        assert result["success"] is False
        assert result["verification"]["verified"] is False
        assert result["verification"]["address"] == "ann@example.com"
        assert "Insufficient wallet balance" in result["message"]
