"""Tests for the HTTP transport routes."""

import asyncio
import contextlib
import logging
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ghl_mcp import http_server
from ghl_mcp.config import Settings
from ghl_mcp.errors import GHLAPIError
from ghl_mcp.logs import FlushFileHandler, configure_logging
from ghl_mcp.mcp_server import mcp


@pytest.fixture
def client():
    """A TestClient that skips the lifespan (no credentials or GHL calls needed)."""
    return TestClient(http_server.app)


class TestStatusRoutes:
    """Tests for the JSON status routes."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["server"] == "ghl-mcp-server"
        assert data["version"] == "1.0.0"
        assert data["timestamp"]
        assert data["tools"]["total"] == 250
        assert data["tools"]["contact"] == 31

    def test_capabilities(self, client):
        assert client.get("/capabilities").json() == {
            "capabilities": {"tools": {}},
            "server": {"name": "ghl-mcp-server", "version": "1.0.0"},
        }

    def test_tools(self, client):
        data = client.get("/tools").json()

        assert data["count"] == 250
        assert len(data["tools"]) == 250
        assert data["categories"]["invoices"] == 39
        tool = next(t for t in data["tools"] if t["name"] == "send_sms")
        assert tool["description"]
        assert tool["inputSchema"]["type"] == "object"

    def test_root(self, client):
        data = client.get("/").json()

        assert data["name"] == "GoHighLevel MCP Server"
        assert data["status"] == "running"
        assert data["endpoints"] == {
            "health": "/health",
            "capabilities": "/capabilities",
            "tools": "/tools",
            "mcp": "/mcp",
        }

    def test_cors_preflight(self, client):
        response = client.options("/mcp", headers={
            "Origin": "https://chatgpt.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "mcp-session-id",
        })

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://chatgpt.com"


class TestMCPEndpoint:
    def test_unhandled_failure_is_jsonrpc_error(self, client):
        """A crash inside the session manager answers with a JSON-RPC internal error."""
        with patch.object(mcp.session_manager, "handle_request", side_effect=RuntimeError("boom")):
            response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})

        assert response.status_code == 500
        assert response.json() == {
            "jsonrpc": "2.0",
            "error": {"code": -32603, "message": "Internal server error"},
            "id": None,
        }


class TestCheckConnection:
    """The startup connection test never blocks startup."""

    def test_success(self):
        fake = MagicMock()
        fake.test_connection.return_value = {"id": "loc123", "name": "Acme"}
        with patch.object(http_server, "get_client", return_value=fake):
            assert http_server.check_connection() == {"id": "loc123", "name": "Acme"}

    def test_failure_is_logged(self):
        fake = MagicMock()
        fake.test_connection.side_effect = GHLAPIError(401, "Invalid JWT")
        with patch.object(http_server, "get_client", return_value=fake):
            assert http_server.check_connection() is None


class TestLifespan:
    """Tests for application startup."""

    @pytest.fixture
    def startup(self):
        """Skip credential checks, the GHL call and the session manager."""
        with patch.object(Settings, "require_credentials"), \
                patch.object(http_server, "check_connection"), \
                patch.object(mcp.session_manager, "run", return_value=contextlib.nullcontext()):
            yield
        logger = logging.getLogger("ghl_mcp")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    @staticmethod
    def run_lifespan():
        async def enter():
            async with http_server.lifespan(http_server.app):
                pass

        asyncio.run(enter())

    def test_keeps_log_level_from_command_line(self, tmp_path, startup):
        logger = configure_logging(console=False, log_path=str(tmp_path / "mcp.log"), level="DEBUG")

        self.run_lifespan()

        assert logger.level == logging.DEBUG
        assert [type(h) for h in logger.handlers] == [FlushFileHandler]

    def test_configures_logging_when_unset(self, startup):
        logger = logging.getLogger("ghl_mcp")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        with patch.object(http_server, "configure_logging") as configure:
            self.run_lifespan()

        configure.assert_called_once_with()
