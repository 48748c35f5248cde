"""Tests for the MCP client helper."""

import asyncio
import contextlib
import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from mcp.types import TextContent

from ghl_mcp import mcp_client


class FakeSession:
    """Stands in for mcp.ClientSession."""

    result = None
    calls = []

    def __init__(self, read_stream, write_stream):
        self.streams = (read_stream, write_stream)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def initialize(self):
        return None

    async def call_tool(self, name, arguments=None):
        FakeSession.calls.append((name, arguments))
        return FakeSession.result


@contextlib.asynccontextmanager
async def fake_transport(url):
    yield ("read", "write", lambda: None)


@pytest.fixture
def server():
    """Patch the transport and session; set ``server.result`` to the tool result."""
    FakeSession.calls = []
    with patch.object(mcp_client, "streamable_http_client", fake_transport), \
            patch.object(mcp_client, "ClientSession", FakeSession):
        yield FakeSession


def tool_result(structured=None, text=None, is_error=False):
    content = [TextContent(type="text", text=text)] if text is not None else []
    return SimpleNamespace(structuredContent=structured, content=content, isError=is_error)


class TestCallMcpTool:
    """Tests for call_mcp_tool."""

    def test_returns_structured_content(self, server):
        server.result = tool_result(structured={"success": True, "contact": {"id": "c1"}})

        data = asyncio.run(mcp_client.call_mcp_tool("get_contact", {"contact_id": "c1"}))

        assert data == {"success": True, "contact": {"id": "c1"}}
        assert server.calls == [("get_contact", {"contact_id": "c1"})]

    def test_falls_back_to_json_text(self, server):
        server.result = tool_result(text=json.dumps({"success": True}))

        assert asyncio.run(mcp_client.call_mcp_tool("get_pipelines")) == {"success": True}

    def test_plain_text(self, server):
        server.result = tool_result(text="hello")

        assert asyncio.run(mcp_client.call_mcp_tool("x")) == {"text": "hello"}

    def test_error_result_raises(self, server):
        server.result = tool_result(text="Failed to get contact: GHL API Error (404): Not found", is_error=True)

        with pytest.raises(mcp_client.MCPToolError, match="Not found"):
            asyncio.run(mcp_client.call_mcp_tool("get_contact", {"contact_id": "nope"}))


class TestCli:
    """Tests for the command line entry point."""

    def test_prints_json(self, server):
        server.result = tool_result(structured={"success": True})

        result = CliRunner().invoke(mcp_client.main, ["get_pipelines", "{}", "--url", "http://h:1/mcp"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"success": True}

    def test_rejects_bad_json(self, server):
        result = CliRunner().invoke(mcp_client.main, ["get_contact", "{nope"])

        assert result.exit_code != 0
        assert "not valid JSON" in result.output
        assert server.calls == []
