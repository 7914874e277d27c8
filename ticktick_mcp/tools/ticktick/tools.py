"""TickTick tools: the fixed tool set advertised over MCP."""

import json
from typing import Any

from ticktick_mcp.mcp.errors import ToolArgumentError
from ticktick_mcp.mcp.models import JsonContent
from ticktick_mcp.mcp.registry import ToolRegistry
from ticktick_mcp.security.credentials import CredentialRecord
from ticktick_mcp.tools.ticktick.client import get_client


def _require_string(arguments: dict[str, Any], name: str) -> str:
    value = arguments.get(name)
    if not isinstance(value, str) or not value:
        raise ToolArgumentError(name)
    return value


def wrap_payload(payload: Any) -> list[JsonContent]:
    """Wrap a raw upstream payload as a single JSON content item."""
    return [JsonContent(text=json.dumps(payload, separators=(",", ":"), ensure_ascii=False))]


async def search_handler(
    arguments: dict[str, Any], credential: CredentialRecord
) -> list[JsonContent]:
    """Handle the search tool call."""
    query = _require_string(arguments, "q")
    payload = await get_client().search_tasks(query, credential)
    return wrap_payload(payload)


async def fetch_handler(
    arguments: dict[str, Any], credential: CredentialRecord
) -> list[JsonContent]:
    """Handle the fetch tool call."""
    task_id = _require_string(arguments, "id")
    payload = await get_client().get_task(task_id, credential)
    return wrap_payload(payload)


def register_tools(registry: ToolRegistry) -> None:
    """Register the TickTick tools, in the order they are advertised."""

    # Tool: search
    registry.register(
        name="search",
        description="Search TickTick tasks by query",
        input_schema={
            "type": "object",
            "properties": {"q": {"type": "string"}},
            "required": ["q"],
        },
        handler=search_handler,
    )

    # Tool: fetch
    registry.register(
        name="fetch",
        description="Fetch a TickTick task by id",
        input_schema={
            "type": "object",
            "properties": {"id": {"type": "string"}},
            "required": ["id"],
        },
        handler=fetch_handler,
    )
