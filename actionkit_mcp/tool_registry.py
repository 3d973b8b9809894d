"""Tool registration for the ActionKit MCP bridge.

Provides a registry of tools built from the action catalog with:
- Schema validation using runtime-generated Pydantic models
- Tool manifest for discovery
- Execution routing
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .schema import ToolSchema


@dataclass
class ToolDefinition:
    """Definition of an MCP tool backed by one remote action.

    Attributes:
        name: Unique tool identifier, identical to the remote action name
        description: Human-readable description, passed through verbatim
        schema: Validated-input contract for the tool's arguments
        handler: Async function receiving the validated parameters
        tags: Optional tags for categorization (the integration name)
    """
    name: str
    description: str
    schema: ToolSchema
    handler: Callable
    tags: List[str] = field(default_factory=list)

    def to_manifest_dict(self) -> Dict[str, Any]:
        """Convert to manifest dictionary.

        Returns:
            Dictionary with tool metadata and parameters
        """
        return {
            "name": self.name,
            "description": self.description,
            "tags": self.tags,
            "parameters": [
                {
                    "name": rule.name,
                    "type": rule.kind.value,
                    "description": rule.description or "",
                    "required": rule.required,
                }
                for rule in self.schema.rules.values()
            ],
        }


class ToolRegistry:
    """Registry of bridged tools.

    Filled once at startup and read-only afterwards, so concurrent
    executions need no locking.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name: str,
        description: str,
        schema: ToolSchema,
        handler: Callable,
        tags: Optional[List[str]] = None
    ) -> None:
        """Register a new tool.

        Raises:
            ValueError: If tool with same name already exists
        """
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")

        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            schema=schema,
            handler=handler,
            tags=tags or []
        )

    def get(self, name: str) -> Optional[ToolDefinition]:
        """Get a tool by name, or None."""
        return self._tools.get(name)

    def list_tools(self) -> List[ToolDefinition]:
        """Get all registered tools in registration order."""
        return list(self._tools.values())

    def get_manifest(self) -> List[Dict[str, Any]]:
        """Get tool manifest for discovery output."""
        return [tool.to_manifest_dict() for tool in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    async def execute(
        self,
        name: str,
        parameters: Optional[Dict[str, Any]]
    ) -> Any:
        """Execute a tool with the given parameters.

        Args:
            name: Tool identifier
            parameters: Raw input parameters

        Returns:
            Tool execution result

        Raises:
            ValueError: If tool not found
            ValidationError: If parameters invalid
        """
        tool = self.get(name)
        if tool is None:
            raise ValueError(f"Tool '{name}' not found")

        validated = tool.schema.validate(parameters)

        if inspect.iscoroutinefunction(tool.handler):
            return await tool.handler(validated)
        return tool.handler(validated)
