"""MCP (Model Context Protocol) implementation with JSON-RPC 2.0."""

from ticktick_mcp.mcp.models import (
    JsonRpcRequest,
    JsonRpcResponse,
    JsonRpcError,
    Tool,
    JsonContent,
    ToolCallResult,
)
from ticktick_mcp.mcp.registry import ToolRegistry, ToolOutcome
from ticktick_mcp.mcp.errors import (
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    NOT_AUTHORIZED,
    TOOL_EXECUTION_ERROR,
)

__all__ = [
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcError",
    "Tool",
    "JsonContent",
    "ToolCallResult",
    "ToolRegistry",
    "ToolOutcome",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "NOT_AUTHORIZED",
    "TOOL_EXECUTION_ERROR",
]
