"""Tests for the GHL HTTP client."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from ghl_mcp.client import GHLClient, compact, get_client, set_client
from ghl_mcp.config import Settings
from ghl_mcp.errors import GHLAPIError


def make_response(status=200, body=None, reason="OK", content_type="application/json"):
    """Build a real requests.Response carrying ``body``."""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    elif isinstance(body, str):
        response._content = body.encode()
    else:
        response._content = json.dumps(body).encode()
    response.headers["Content-Type"] = content_type
    return response


class TestCompact:
    """Tests for dropping unset values."""

    def test_drops_none_only(self):
        assert compact({"a": 1, "b": None, "c": False, "d": ""}) == {"a": 1, "c": False, "d": ""}

    def test_none_input(self):
        assert compact(None) is None


class TestGHLClient:
    """Tests for GHLClient."""

    @pytest.fixture
    def client(self, test_settings):
        return GHLClient(test_settings, session=requests.Session())

    @pytest.fixture
    def send(self, client):
        with patch.object(client.session, "request") as mock_request:
            mock_request.return_value = make_response(body={"ok": True})
            yield mock_request

    def test_headers(self, client):
        """Every request carries auth, version and JSON headers."""
        headers = client.session.headers
        assert headers["Authorization"] == "Bearer test-key"
        assert headers["Version"] == "2021-07-28"
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"

    def test_requires_credentials(self):
        with pytest.raises(ValueError, match="GHL_API_KEY"):
            GHLClient(Settings(ghl_api_key="", ghl_location_id="loc"))

    def test_get_builds_url_and_query(self, client, send):
        """None values are dropped and booleans become true/false."""
        result = client.get("/contacts/", params={"locationId": "loc123", "query": None, "active": True})

        assert result == {"ok": True}
        method, url = send.call_args.args
        assert method == "GET"
        assert url == "https://ghl.example.test/contacts/"
        assert send.call_args.kwargs["params"] == {"locationId": "loc123", "active": "true"}
        assert send.call_args.kwargs["timeout"] == 30

    def test_list_query_values(self, client, send):
        client.get("/x", params={"ids": [1, 2], "flags": [True, False]})
        assert send.call_args.kwargs["params"] == {"ids": [1, 2], "flags": ["true", "false"]}

    def test_post_compacts_body(self, client, send):
        client.post("/contacts/", json={"email": "a@b.c", "phone": None})
        assert send.call_args.kwargs["json"] == {"email": "a@b.c"}

    def test_list_body_passes_through(self, client, send):
        client.post("/x", json=[{"a": None}])
        assert send.call_args.kwargs["json"] == [{"a": None}]

    def test_version_override(self, client, send):
        """Endpoints on the older API version override the header per call."""
        client.get("/conversations/search", version="2021-04-15")
        assert send.call_args.kwargs["headers"] == {"Version": "2021-04-15"}

    def test_empty_body_decodes_to_empty_dict(self, client, send):
        send.return_value = make_response(status=204, body=None)
        assert client.delete("/contacts/abc") == {}

    def test_error_message_from_body(self, client, send):
        """A non-2xx response raises GHLAPIError with the body's message."""
        send.return_value = make_response(status=422, body={"message": ["email must be an email", "phone is invalid"]})

        with pytest.raises(GHLAPIError) as exc_info:
            client.post("/contacts/", json={"email": "x"})

        error = exc_info.value
        assert error.status_code == 422
        assert error.message == "email must be an email, phone is invalid"
        assert str(error) == "GHL API Error (422): email must be an email, phone is invalid"
        assert error.body == {"message": ["email must be an email", "phone is invalid"]}

    def test_error_falls_back_to_reason(self, client, send):
        send.return_value = make_response(status=502, body=None, reason="Bad Gateway")
        with pytest.raises(GHLAPIError, match="Bad Gateway"):
            client.get("/x")

    def test_timeout(self, client, send):
        send.side_effect = requests.Timeout("read timed out")
        with pytest.raises(GHLAPIError) as exc_info:
            client.get("/x")
        assert exc_info.value.status_code is None
        assert exc_info.value.message == "Tool execution timeout after 30s"

    def test_connection_error(self, client, send):
        send.side_effect = requests.ConnectionError("refused")
        with pytest.raises(GHLAPIError, match="Request failed: refused"):
            client.get("/x")

    def test_upload_with_file(self, client, send):
        """File uploads go out as multipart without the JSON content type."""
        client.upload(
            "/medias/upload-file",
            fields={"altType": "location", "altId": "loc123", "name": None},
            files={"file": ("a.png", b"data", "image/png")},
        )

        kwargs = send.call_args.kwargs
        assert kwargs["data"] == {"altType": "location", "altId": "loc123"}
        assert kwargs["files"] == {"file": ("a.png", b"data", "image/png")}
        assert kwargs["headers"] == {"Content-Type": None}

    def test_upload_fields_only(self, client, send):
        """Without a file every field becomes a multipart part."""
        client.upload("/medias/upload-file", fields={"hosted": True, "fileUrl": "https://x/y.png"})

        kwargs = send.call_args.kwargs
        assert kwargs["data"] is None
        assert kwargs["files"] == {"hosted": (None, "true"), "fileUrl": (None, "https://x/y.png")}

    def test_download(self, client, send):
        send.return_value = make_response(body=b"\x00\x01", content_type="audio/wav")

        content, content_type = client.download("/recording", version="2021-04-15")

        assert content == b"\x00\x01"
        assert content_type == "audio/wav"
        assert send.call_args.kwargs["headers"] == {"Accept": "*/*", "Version": "2021-04-15"}

    def test_test_connection_unwraps_location(self, client, send):
        send.return_value = make_response(body={"location": {"id": "loc123", "name": "Acme"}})

        assert client.test_connection() == {"id": "loc123", "name": "Acme"}
        assert send.call_args.args[1] == "https://ghl.example.test/locations/loc123"


class TestSharedClient:
    """Tests for get_client/set_client."""

    def test_set_client_replaces_shared_instance(self):
        fake = MagicMock()
        set_client(fake)
        try:
            assert get_client() is fake
        finally:
            set_client(None)
