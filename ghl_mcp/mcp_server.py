from __future__ import annotations

import anyio.to_thread
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

import functools
import inspect
import logging
import time
from typing import Any, Callable, Dict, Optional, Sequence

from .config import settings
from .errors import ErrorHint, GHLAPIError, explain

SERVER_NAME = "ghl-mcp-server"
SERVER_VERSION = "1.0.0"

INSTRUCTIONS = """Tools for a GoHighLevel (GHL) CRM sub-account.
Most tools default to the configured location; pass location_id to target another one.
Monetary values (products, invoices, opportunities) are floats in the account
currency, not cents. Use calculate_future_datetime before scheduling anything
relative to "now" and calculate for arithmetic."""

mcp = FastMCP(
    SERVER_NAME,
    instructions=INSTRUCTIONS,
    json_response=True,
    stateless_http=True,
    host=settings.host,
    port=settings.port,
)

logger = logging.getLogger("ghl_mcp.mcp")

# tool name -> category, in registration order
TOOL_REGISTRY: Dict[str, str] = {}


def _describe(kwargs: Dict[str, Any]) -> str:
    parts = []
    for key, value in kwargs.items():
        if value is None:
            continue
        text = repr(value)
        if len(text) > 80:
            text = text[:77] + "..."
        parts.append(f"{key}={text}")
    return " ".join(parts)


def ghl_tool(category: str, action: Optional[str] = None, hints: Sequence[ErrorHint] = ()) -> Callable:
    """Register a function as an MCP tool in ``category``.

    The wrapped tool logs its arguments and duration, and converts GHL
    failures into ``ToolError`` so the client receives an ``isError``
    result carrying a readable message. FastMCP gets an async version
    that runs the tool in a worker thread; the decorator returns the
    plain synchronous function.

    Args:
        category: Group reported by /health and /tools (e.g. "contact")
        action: Verb phrase for the fallback error ("Failed to <action>: ...").
            Defaults to the tool name with underscores as spaces.
        hints: Error rewrite rules for this tool, checked in order.
    """
    def decorator(fn: Callable) -> Callable:
        name = fn.__name__
        verb = action or name.replace("_", " ")

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            logger.info("%s: %s", name, _describe(kwargs))
            start = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except ToolError:
                logger.warning("%s: rejected after %.2fs", name, time.perf_counter() - start)
                raise
            except GHLAPIError as e:
                logger.warning("%s: failed after %.2fs: %s", name, time.perf_counter() - start, e)
                raise ToolError(explain(e, hints, verb)) from e
            except ValueError as e:
                logger.warning("%s: invalid request: %s", name, e)
                raise ToolError(str(e)) from e
            except Exception:
                logger.exception("%s failed", name)
                raise
            logger.info("%s: ok in %.2fs", name, time.perf_counter() - start)
            return result

        @functools.wraps(fn)
        async def run_in_thread(*args, **kwargs):
            # GHL calls block on requests; keep them off the event loop
            return await anyio.to_thread.run_sync(functools.partial(wrapper, *args, **kwargs))

        # Resolve postponed annotations against the tool's own module
        signature = inspect.signature(fn, eval_str=True)
        wrapper.__signature__ = signature
        run_in_thread.__signature__ = signature
        TOOL_REGISTRY[name] = category
        mcp.tool()(run_in_thread)
        return wrapper

    return decorator


def tool_counts() -> Dict[str, int]:
    """Number of registered tools per category, plus ``total``."""
    counts: Dict[str, int] = {}
    for category in TOOL_REGISTRY.values():
        counts[category] = counts.get(category, 0) + 1
    counts["total"] = len(TOOL_REGISTRY)
    return counts


def load_tools() -> FastMCP:
    """Import every tool module so their tools register on ``mcp``."""
    from . import tools  # noqa: F401

    logger.info("Registered %d tools", len(TOOL_REGISTRY))
    return mcp
