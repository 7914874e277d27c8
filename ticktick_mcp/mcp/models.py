"""Pydantic models for MCP JSON-RPC 2.0 protocol."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


# =============================================================================
# JSON-RPC 2.0 Base Models
# =============================================================================


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request object.

    ``jsonrpc`` is optional on the wire; clients that omit it are accepted.
    A missing ``id`` is kept as ``None`` and echoed back as ``null``; a
    missing ``method`` is routed like any other unknown method.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: StrictInt | StrictFloat | StrictStr | None = None
    method: StrictStr | None = None
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: StrictInt | StrictFloat | StrictStr | None = None
    result: Any = None
    error: JsonRpcError | None = None

    def model_dump(self, **kwargs: Any) -> dict[str, Any]:
        """Serialize with exactly one of ``result`` or ``error``."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result
        return data


# =============================================================================
# MCP Content Types
# =============================================================================


class JsonContent(BaseModel):
    """Raw upstream JSON payload, serialized as text."""

    type: Literal["json"] = "json"
    text: str


# =============================================================================
# MCP Tool Models
# =============================================================================


class Tool(BaseModel):
    """MCP tool descriptor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique tool name")
    description: str = Field(..., description="Human-readable description")
    inputSchema: dict[str, Any] = Field(
        ..., description="JSON Schema for tool input"
    )


class ToolCallResult(BaseModel):
    """Successful result of a tool call."""

    content: list[JsonContent]


class ToolsListResult(BaseModel):
    """Result of tools/list request."""

    tools: list[Tool]


class OfferingsResult(BaseModel):
    """Result of server/listOfferings request (always empty for now)."""

    offerings: list[dict[str, Any]] = Field(default_factory=list)


class ToolCallParams(BaseModel):
    """Parameters for tools/call request."""

    name: StrictStr
    arguments: dict[str, Any] = Field(default_factory=dict)
