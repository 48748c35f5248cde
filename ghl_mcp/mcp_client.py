from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import click
from mcp import ClientSession
from mcp.client.streamable_http import streamable_http_client

DEFAULT_MCP_URL = "http://localhost:9000/mcp"


class MCPToolError(RuntimeError):
    """The server answered the call with an error result."""


def _content_payload(result: Any) -> Dict[str, Any]:
    texts = [c.text for c in result.content or [] if getattr(c, "type", None) == "text"]
    if not texts:
        return {}
    text = "\n".join(texts)
    try:
        data = json.loads(text)
    except ValueError:
        return {"text": text}
    return data if isinstance(data, dict) else {"result": data}


async def call_mcp_tool(
    tool_name: str, arguments: Optional[Dict[str, Any]] = None, mcp_url: str = DEFAULT_MCP_URL
) -> Dict[str, Any]:
    """
    Calls an MCP tool and returns structuredContent (JSON).

    Falls back to the JSON text content for servers that send no
    structured result. Raises MCPToolError when the tool reports isError.
    """
    async with streamable_http_client(mcp_url) as (read_stream, write_stream, _):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            result = await session.call_tool(tool_name, arguments=arguments or {})
            if result.isError:
                message = _content_payload(result).get("text") or f"{tool_name} failed"
                raise MCPToolError(message)
            if result.structuredContent:
                return result.structuredContent
            return _content_payload(result)


@click.command()
@click.argument("tool_name")
@click.argument("arguments", required=False, default="{}")
@click.option("--url", default=DEFAULT_MCP_URL, show_default=True, help="MCP endpoint of a running server")
def main(tool_name: str, arguments: str, url: str) -> None:
    """Call TOOL_NAME on a running server with ARGUMENTS given as a JSON object."""
    try:
        args = json.loads(arguments)
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="ARGUMENTS") from e
    if not isinstance(args, dict):
        raise click.BadParameter("must be a JSON object", param_hint="ARGUMENTS")

    try:
        data = asyncio.run(call_mcp_tool(tool_name, args, url))
    except MCPToolError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(data, indent=2, default=str))


if __name__ == "__main__":
    main()
