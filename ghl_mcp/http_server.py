"""HTTP transport: FastAPI app serving MCP Streamable HTTP on /mcp.

Also exposes plain JSON status routes (/health, /capabilities, /tools, /)
for load balancers and for humans poking at a deployment.
"""

from __future__ import annotations

import contextlib
import errno
import logging
import sys
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Optional

import click
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.types import Message, Receive, Scope, Send

from .client import get_client
from .config import settings
from .errors import GHLAPIError
from .logs import configure_logging
from .mcp_server import SERVER_NAME, SERVER_VERSION, load_tools, mcp, tool_counts

logger = logging.getLogger("ghl_mcp.http")

JSONRPC_INTERNAL_ERROR = {
    "jsonrpc": "2.0",
    "error": {"code": -32603, "message": "Internal server error"},
    "id": None,
}


class _MCPEndpoint:
    """ASGI endpoint handing /mcp requests to the FastMCP session manager."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        started = False

        async def tracked_send(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        logger.debug("MCP %s %s", scope.get("method"), scope.get("path"))
        try:
            await mcp.session_manager.handle_request(scope, receive, tracked_send)
        except Exception:
            logger.exception("Error handling MCP request")
            if not started:
                response = JSONResponse(JSONRPC_INTERNAL_ERROR, status_code=500)
                await response(scope, receive, send)


def check_connection() -> Optional[Dict[str, Any]]:
    """Try one GHL call; log the outcome instead of failing startup."""
    try:
        location = get_client().test_connection()
    except GHLAPIError as e:
        logger.warning("GHL connection test failed, starting anyway: %s", e)
        return None
    logger.info("Connected to GHL location %s", location.get("name") or settings.ghl_location_id)
    return location


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Validate configuration and run the MCP session manager."""
    # main() has already configured logging unless uvicorn imported the app directly
    if not logging.getLogger("ghl_mcp").handlers:
        configure_logging()
    settings.require_credentials()
    check_connection()
    async with mcp.session_manager.run():
        logger.info("%s %s ready with %d tools", SERVER_NAME, SERVER_VERSION, tool_counts()["total"])
        try:
            yield
        finally:
            logger.info("Application shutting down...")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_app() -> FastAPI:
    """Build the FastAPI application with every tool registered."""
    load_tools()
    # Creates mcp.session_manager
    mcp.streamable_http_app()

    app = FastAPI(title="GoHighLevel MCP Server", version=SERVER_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "Accept", "mcp-session-id"],
        expose_headers=["mcp-session-id"],
    )

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "timestamp": _now(),
            "tools": tool_counts(),
        }

    @app.get("/capabilities")
    def capabilities() -> Dict[str, Any]:
        return {
            "capabilities": {"tools": {}},
            "server": {"name": SERVER_NAME, "version": SERVER_VERSION},
        }

    @app.get("/tools")
    async def list_tools() -> Dict[str, Any]:
        tools = await mcp.list_tools()
        return {
            "tools": [
                {"name": t.name, "description": t.description, "inputSchema": t.inputSchema}
                for t in tools
            ],
            "count": len(tools),
            "categories": tool_counts(),
        }

    @app.get("/")
    def root() -> Dict[str, Any]:
        return {
            "name": "GoHighLevel MCP Server",
            "version": SERVER_VERSION,
            "status": "running",
            "endpoints": {
                "health": "/health",
                "capabilities": "/capabilities",
                "tools": "/tools",
                "mcp": "/mcp",
            },
            "tools": tool_counts(),
        }

    app.add_route("/mcp", _MCPEndpoint(), methods=["GET", "POST", "DELETE"])
    return app


app = create_app()


@click.command()
@click.option("--host", default=settings.host, show_default=True, help="Interface to bind")
@click.option("--port", default=settings.port, show_default=True, help="Port to listen on for HTTP")
@click.option("--log-level", default=settings.log_level, show_default=True, help="Logging level")
def main(host: str, port: int, log_level: str) -> None:
    """Serve the GHL MCP tools over Streamable HTTP."""
    configure_logging(level=log_level)
    logger.info("Starting %s on http://%s:%d", SERVER_NAME, host, port)
    logger.info("  - MCP endpoint: http://%s:%d/mcp", host, port)
    logger.info("  - Health check: http://%s:%d/health", host, port)
    try:
        uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
    except OSError as e:
        if e.errno == errno.EADDRINUSE:
            logger.error("Port %d is already in use. Set PORT to a free port or stop the other process.", port)
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
