"""Shared fixtures."""

from unittest.mock import MagicMock

import pytest

from ghl_mcp.client import set_client
from ghl_mcp.config import Settings
from ghl_mcp.mcp_server import load_tools

load_tools()


@pytest.fixture
def test_settings(tmp_path):
    """Settings with dummy credentials and a throwaway log file."""
    return Settings(
        ghl_api_key="test-key",
        ghl_location_id="loc123",
        ghl_base_url="https://ghl.example.test",
        ghl_api_version="2021-07-28",
        request_timeout=30,
        log_path=str(tmp_path / "mcp.log"),
    )


@pytest.fixture
def fake_client():
    """Replace the shared GHL client with a mock for the duration of a test."""
    fake = MagicMock()
    fake.location_id = "loc123"
    fake.get.return_value = {}
    fake.post.return_value = {}
    fake.put.return_value = {}
    fake.patch.return_value = {}
    fake.delete.return_value = {}
    set_client(fake)
    yield fake
    set_client(None)
