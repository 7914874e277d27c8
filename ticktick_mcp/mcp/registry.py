"""Tool registry for the fixed set of TickTick MCP tools."""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from ticktick_mcp.mcp.models import JsonContent, Tool
from ticktick_mcp.security.credentials import CredentialRecord

logger = logging.getLogger(__name__)

# Type alias for tool handlers
ToolHandler = Callable[[dict[str, Any], CredentialRecord], Awaitable[list[JsonContent]]]


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool with its descriptor and handler."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler

    def to_mcp_tool(self) -> Tool:
        """Convert to MCP Tool model for protocol responses."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=copy.deepcopy(self.input_schema),
        )


@dataclass(frozen=True)
class ToolOutcome:
    """Success-or-error result of a tool invocation.

    Exactly one of ``content`` and ``error`` is set.
    """

    content: list[JsonContent] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ToolRegistry:
    """Registry for MCP tools, kept in declaration order."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        handler: ToolHandler,
    ) -> None:
        """Register a tool with the registry."""
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=handler,
        )
        logger.debug(f"Registered tool: {name}")

    def resolve(self, name: str) -> ToolDefinition | None:
        """Get a tool by name, or None when it is not registered."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List all registered tools as MCP Tool models."""
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    async def call_tool(
        self,
        tool: ToolDefinition,
        arguments: dict[str, Any],
        credential: CredentialRecord,
    ) -> ToolOutcome:
        """Invoke a resolved tool, capturing any failure in the outcome."""
        try:
            content = await tool.handler(arguments, credential)
        except Exception as e:
            logger.warning(f"Tool {tool.name} failed: {e!r}")
            return ToolOutcome(error=str(e))
        return ToolOutcome(content=content)

    @property
    def tool_count(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)


# Global registry instance
_registry: ToolRegistry | None = None


def get_registry() -> ToolRegistry:
    """Get the global tool registry, registering the TickTick tools on first use."""
    global _registry
    if _registry is None:
        from ticktick_mcp.tools.ticktick.tools import register_tools

        registry = ToolRegistry()
        register_tools(registry)
        _registry = registry
    return _registry


def reset_registry() -> None:
    """Reset the global registry (useful for testing)."""
    global _registry
    _registry = None
