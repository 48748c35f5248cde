"""Tests for tool registration."""

import asyncio
import threading

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from ghl_mcp.errors import GHLAPIError
from ghl_mcp.mcp_server import TOOL_REGISTRY, ghl_tool, mcp, tool_counts

EXPECTED_COUNTS = {
    "contact": 31,
    "conversation": 20,
    "blog": 7,
    "opportunity": 10,
    "calendar": 13,
    "location": 24,
    "email": 5,
    "email_verification": 1,
    "workflow": 1,
    "survey": 2,
    "association": 10,
    "custom_field": 8,
    "media": 3,
    "object": 9,
    "payments": 20,
    "products": 10,
    "social_media": 17,
    "store": 18,
    "invoices": 39,
    "utility": 2,
}


class TestRegistry:
    """Every tool module registers its tools under its category."""

    def test_category_counts(self):
        counts = tool_counts()
        assert counts.pop("total") == 250
        assert counts == EXPECTED_COUNTS

    def test_registered_with_fastmcp(self):
        tools = asyncio.run(mcp.list_tools())
        names = {t.name for t in tools}
        assert len(tools) == 250
        assert names == set(TOOL_REGISTRY)

    def test_schema_uses_python_parameter_names(self):
        tools = {t.name: t for t in asyncio.run(mcp.list_tools())}
        schema = tools["create_contact"].inputSchema
        assert schema["required"] == ["email"]
        assert {"first_name", "last_name", "phone", "tags", "source"} <= set(schema["properties"])
        assert tools["create_contact"].description.startswith("Create a new contact")


class TestGhlTool:
    """Tests for the ghl_tool decorator."""

    @pytest.fixture
    def restore_registry(self):
        before = dict(TOOL_REGISTRY)
        yield
        for name in set(TOOL_REGISTRY) - set(before):
            del TOOL_REGISTRY[name]
            mcp._tool_manager._tools.pop(name, None)

    def test_wraps_errors(self, restore_registry):
        @ghl_tool("testing", action="do the thing")
        def registry_sample_failing(value: int) -> dict:
            raise GHLAPIError(409, "Conflict")

        assert TOOL_REGISTRY["registry_sample_failing"] == "testing"
        with pytest.raises(ToolError, match="Failed to do the thing: GHL API Error \\(409\\): Conflict"):
            registry_sample_failing(value=1)

    def test_value_error_becomes_tool_error(self, restore_registry):
        @ghl_tool("testing")
        def registry_sample_invalid() -> dict:
            raise ValueError("limit must be between 1 and 50")

        with pytest.raises(ToolError, match="limit must be between 1 and 50"):
            registry_sample_invalid()

    def test_passes_result_through(self, restore_registry):
        @ghl_tool("testing")
        def registry_sample_ok(name: str) -> dict:
            return {"success": True, "name": name}

        assert registry_sample_ok(name="x") == {"success": True, "name": "x"}

    def test_served_from_worker_thread(self, restore_registry):
        """FastMCP awaits the tool while the blocking call runs off the event loop."""
        threads = []

        @ghl_tool("testing")
        def registry_sample_thread() -> dict:
            threads.append(threading.get_ident())
            return {"success": True}

        assert mcp._tool_manager.get_tool("registry_sample_thread").is_async is True
        asyncio.run(mcp.call_tool("registry_sample_thread", {}))

        assert len(threads) == 1
        assert threads[0] != threading.get_ident()
        assert registry_sample_thread() == {"success": True}
