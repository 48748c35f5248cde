"""Tests for logging setup."""

import logging

import pytest

from ghl_mcp.logs import FlushFileHandler, configure_logging


@pytest.fixture
def restore_logger():
    logger = logging.getLogger("ghl_mcp")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestConfigureLogging:
    def test_file_only_for_stdio(self, tmp_path, restore_logger):
        """The STDIO transport keeps stdout and stderr clean."""
        path = tmp_path / "logs" / "mcp.log"

        logger = configure_logging(console=False, log_path=str(path), level="debug")

        assert [type(h) for h in logger.handlers] == [FlushFileHandler]
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        logging.getLogger("ghl_mcp.tools.contacts").info("create_contact: email='a@b.c'")
        text = path.read_text()
        assert "[INFO] GHL MCP Server logger initialized" in text
        assert "create_contact: email='a@b.c'" in text

    def test_reconfigure_replaces_handlers(self, tmp_path, restore_logger):
        configure_logging(log_path=str(tmp_path / "a.log"))
        logger = configure_logging(log_path=str(tmp_path / "b.log"))

        assert len(logger.handlers) == 2
