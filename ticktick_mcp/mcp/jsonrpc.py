"""JSON-RPC 2.0 message processing."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from ticktick_mcp.mcp.models import JsonRpcRequest, JsonRpcResponse, JsonRpcError
from ticktick_mcp.mcp.handlers import MCPHandlers
from ticktick_mcp.mcp.errors import PARSE_ERROR, INVALID_REQUEST, make_error_data

logger = logging.getLogger(__name__)


def _salvage_id(data: Any) -> int | float | str | None:
    """Best-effort id of a request that failed validation."""
    if isinstance(data, dict):
        request_id = data.get("id")
        if isinstance(request_id, (int, float, str)) and not isinstance(request_id, bool):
            return request_id
    return None


class JsonRpcProcessor:
    """Process single (non-batched) JSON-RPC 2.0 messages.

    Every message gets exactly one response: requests without an ``id`` are
    answered with ``"id": null`` rather than treated as notifications.
    """

    def __init__(self, handlers: MCPHandlers):
        self.handlers = handlers

    def parse_request(
        self, raw_data: str | bytes
    ) -> tuple[JsonRpcRequest | None, JsonRpcResponse | None]:
        """
        Parse a JSON-RPC request from raw data.

        Returns (request, error_response) tuple. One will be None.
        """
        try:
            if isinstance(raw_data, bytes):
                raw_data = raw_data.decode("utf-8")
            data = json.loads(raw_data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return None, JsonRpcResponse(
                id=None,
                error=JsonRpcError(**make_error_data(PARSE_ERROR, f"Invalid JSON: {e}")),
            )

        if not isinstance(data, dict):
            return None, JsonRpcResponse(
                id=None,
                error=JsonRpcError(
                    **make_error_data(INVALID_REQUEST, "Request must be a JSON object")
                ),
            )

        try:
            return JsonRpcRequest.model_validate(data), None
        except ValidationError as e:
            return None, JsonRpcResponse(
                id=_salvage_id(data),
                error=JsonRpcError(
                    **make_error_data(INVALID_REQUEST, f"Invalid JSON-RPC request: {e}")
                ),
            )

    async def process_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Process a validated JSON-RPC request."""
        result, error = await self.handlers.dispatch(request.method, request.params)

        if error is not None:
            return JsonRpcResponse(
                id=request.id,
                error=JsonRpcError(**error),
            )
        return JsonRpcResponse(
            id=request.id,
            result=result,
        )

    async def handle_message(self, raw_data: str | bytes) -> JsonRpcResponse:
        """Handle a raw JSON-RPC message end-to-end."""
        request, error_response = self.parse_request(raw_data)
        if error_response is not None:
            logger.info(f"Rejected JSON-RPC message: {error_response.error.message}")
            return error_response

        return await self.process_request(request)  # type: ignore[arg-type]
