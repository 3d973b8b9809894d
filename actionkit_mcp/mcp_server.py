"""MCP protocol server exposing ActionKit actions as tools.

Uses the official MCP Python SDK with stdio transport.

IMPORTANT: All logging MUST go to stderr, not stdout!
The MCP protocol uses stdout for JSON-RPC communication.
"""

import json
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import InvocationFailure, RemoteRejectedError
from .logging_config import get_logger
from .tool_registry import ToolRegistry

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Tool Definitions
# -----------------------------------------------------------------------------

def get_tool_definitions(registry: ToolRegistry) -> list[Tool]:
    """Return the MCP tool list for every registered tool."""
    return [
        Tool(
            name=definition.name,
            description=definition.description,
            inputSchema=definition.schema.json_schema(),
        )
        for definition in registry.list_tools()
    ]


def _error_content(error: str, **details: Any) -> list[TextContent]:
    return [TextContent(
        type="text",
        text=json.dumps({"success": False, "error": error, **details}, indent=2)
    )]


async def call_registered_tool(
    registry: ToolRegistry,
    name: str,
    arguments: Optional[dict[str, Any]],
) -> list[TextContent]:
    """Execute a tool and return the result as MCP content.

    Failures are scoped to this call: they come back as an error-shaped
    result and never affect other tools.
    """
    logger.info(f"Calling tool: {name}")

    try:
        result = await registry.execute(name, arguments)
    except ValidationError as e:
        logger.warning(f"Invalid arguments for tool: {name}")
        return _error_content(f"Invalid arguments: {e}")
    except RemoteRejectedError as e:
        return _error_content(str(e), status_code=e.status_code)
    except InvocationFailure as e:
        return _error_content(str(e))
    except ValueError as e:
        # Unknown tool
        return _error_content(str(e))

    if isinstance(result, str):
        text = result
    else:
        text = json.dumps(result, indent=2, default=str)
    return [TextContent(type="text", text=text)]


# -----------------------------------------------------------------------------
# Server Construction
# -----------------------------------------------------------------------------

def create_server(registry: ToolRegistry, settings: Optional[Settings] = None) -> Server:
    """Create an MCP server whose tool set is the given registry."""
    settings = settings or get_settings()
    server = Server(settings.mcp_server_name, version=settings.mcp_server_version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """Return the list of available tools."""
        return get_tool_definitions(registry)

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Execute a tool and return the result."""
        return await call_registered_tool(registry, name, arguments)

    return server


async def serve_stdio(server: Server) -> None:
    """Run the MCP server using stdio transport."""
    logger.info("Starting ActionKit MCP Server (stdio transport)")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )
