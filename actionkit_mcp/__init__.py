"""ActionKit MCP bridge - ActionKit actions served as MCP tools.

Fetches the ActionKit action catalog for one user, translates every
action's parameter schema into a validated tool contract and proxies tool
calls back to ActionKit with a signed credential.

Usage:
    actionkit-mcp              Serve tools over stdio
    actionkit-mcp --list-tools Print the tool manifest
"""

__version__ = "1.0.0"

from .bridge import ActionBridge, FailurePolicy, hydrate_tools
from .catalog import ActionDescriptor, Catalog, CatalogFetcher, parse_catalog
from .client import ActionKitClient
from .credentials import Credential, CredentialIssuer
from .errors import (
    ActionKitError,
    BuildFailure,
    FatalConfigError,
    FetchFailure,
    InvocationFailure,
    RemoteRejectedError,
    TransportError,
    UnsupportedTypeError,
)
from .invoker import ActionInvoker
from .schema import PropertyKind, StringLengthMode, ToolSchema, translate
from .tool_registry import ToolDefinition, ToolRegistry

__all__ = [
    "ActionBridge",
    "FailurePolicy",
    "hydrate_tools",
    "ActionDescriptor",
    "Catalog",
    "CatalogFetcher",
    "parse_catalog",
    "ActionKitClient",
    "Credential",
    "CredentialIssuer",
    "ActionKitError",
    "BuildFailure",
    "FatalConfigError",
    "FetchFailure",
    "InvocationFailure",
    "RemoteRejectedError",
    "TransportError",
    "UnsupportedTypeError",
    "ActionInvoker",
    "PropertyKind",
    "StringLengthMode",
    "ToolSchema",
    "translate",
    "ToolDefinition",
    "ToolRegistry",
]
