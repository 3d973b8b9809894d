"""Main entry point for the ActionKit MCP bridge.

Issues the user credential, hydrates the tool set from the ActionKit
catalog and serves it over stdio. Any construction failure is fatal.
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from .bridge import ActionBridge, hydrate_tools
from .catalog import CatalogFetcher
from .client import ActionKitClient
from .config import Settings, get_settings
from .credentials import CredentialIssuer
from .errors import ActionKitError
from .invoker import ActionInvoker
from .logging_config import get_logger, setup_logging
from .mcp_server import create_server, serve_stdio
from .tool_registry import ToolRegistry

logger = get_logger(__name__)


async def build_registry(settings: Settings, client: ActionKitClient) -> ToolRegistry:
    """Issue a credential and build the tool registry from the catalog.

    Raises:
        FatalConfigError, FetchFailure, BuildFailure
    """
    credential = CredentialIssuer(settings.signing_key).issue(settings.actionkit_user_id)
    bridge = ActionBridge(
        ActionInvoker(client),
        failure_policy=settings.actionkit_failure_policy,
        string_length_mode=settings.actionkit_string_length_mode,
    )
    return await hydrate_tools(CatalogFetcher(client), bridge, credential)


async def run(settings: Settings, list_only: bool = False) -> None:
    """Build the tool set, then serve it (or print its manifest)."""
    async with ActionKitClient(
        base_url=settings.actionkit_base_url,
        project_id=settings.paragon_project_id,
        timeout=settings.actionkit_timeout,
    ) as client:
        registry = await build_registry(settings, client)

        if list_only:
            print(json.dumps(registry.get_manifest(), indent=2))
            return

        await serve_stdio(create_server(registry, settings))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="actionkit-mcp",
        description="Serve ActionKit actions as MCP tools over stdio",
    )
    parser.add_argument(
        "--list-tools",
        action="store_true",
        help="Print the tool manifest as JSON and exit",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Start the MCP server."""
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.mcp_log_level)

    logger.info(
        "Starting ActionKit MCP bridge",
        extra={"config": settings.get_safe_dict()}
    )

    try:
        asyncio.run(run(settings, list_only=args.list_tools))
    except ActionKitError as e:
        logger.critical(f"Server unable to be created: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
