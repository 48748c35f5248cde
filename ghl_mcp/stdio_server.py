"""STDIO transport for desktop MCP hosts.

stdout carries the protocol, so logs go to the log file only.
"""

from __future__ import annotations

import logging
import sys

from .config import settings
from .logs import configure_logging
from .mcp_server import SERVER_NAME, load_tools, mcp, tool_counts

logger = logging.getLogger("ghl_mcp.stdio")


def main() -> None:
    configure_logging(console=False)
    try:
        settings.require_credentials()
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)

    load_tools()
    logger.info("Starting %s over stdio with %d tools", SERVER_NAME, tool_counts()["total"])
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
