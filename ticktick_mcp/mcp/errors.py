"""JSON-RPC 2.0 error codes and error response helpers."""

from typing import Any

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700  # Invalid JSON was received
INVALID_REQUEST = -32600  # The JSON sent is not a valid Request object
METHOD_NOT_FOUND = -32601  # The method (or tool) does not exist

# Server-defined error codes (must be between -32000 and -32099)
NOT_AUTHORIZED = -32000  # No TickTick credential stored yet
TOOL_EXECUTION_ERROR = -32001  # Tool handler or TickTick API failed

NOT_AUTHORIZED_MESSAGE = "Not authorized with TickTick"
UNKNOWN_TOOL_MESSAGE = "Unknown tool"


def error_message(code: int) -> str:
    """Get the standard message for a JSON-RPC error code."""
    messages = {
        PARSE_ERROR: "Parse error",
        INVALID_REQUEST: "Invalid Request",
        METHOD_NOT_FOUND: "Method not found",
        NOT_AUTHORIZED: NOT_AUTHORIZED_MESSAGE,
        TOOL_EXECUTION_ERROR: "TickTick API error",
    }
    return messages.get(code, "Unknown error")


def make_error_data(code: int, message: str | None = None, data: Any = None) -> dict[str, Any]:
    """Create an error object for JSON-RPC response."""
    error: dict[str, Any] = {
        "code": code,
        "message": message or error_message(code),
    }
    if data is not None:
        error["data"] = data
    return error


class ToolArgumentError(ValueError):
    """Raised by a tool handler when a required argument is missing or empty."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing required argument: '{argument}'")
