"""MCP method handlers for JSON-RPC requests."""

import logging
from typing import Any

from pydantic import ValidationError

from ticktick_mcp.mcp.errors import (
    METHOD_NOT_FOUND,
    NOT_AUTHORIZED,
    TOOL_EXECUTION_ERROR,
    UNKNOWN_TOOL_MESSAGE,
    make_error_data,
)
from ticktick_mcp.mcp.models import (
    OfferingsResult,
    ToolCallParams,
    ToolCallResult,
    ToolsListResult,
)
from ticktick_mcp.mcp.registry import ToolRegistry
from ticktick_mcp.security.credentials import DEFAULT_SUBJECT, CredentialStore

logger = logging.getLogger(__name__)


class MethodError(Exception):
    """A JSON-RPC error raised by a method handler."""

    def __init__(self, code: int, message: str | None = None):
        self.code = code
        self.message = message
        super().__init__(message)

    def to_error_data(self) -> dict[str, Any]:
        return make_error_data(self.code, self.message)


class MCPHandlers:
    """Handlers for the MCP methods this server supports."""

    def __init__(
        self,
        registry: ToolRegistry,
        credentials: CredentialStore,
        subject: str = DEFAULT_SUBJECT,
    ):
        self.registry = registry
        self.credentials = credentials
        self.subject = subject
        self._methods = {
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
            "server/listOfferings": self.handle_list_offerings,
        }

    async def handle_tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle the tools/list request."""
        return ToolsListResult(tools=self.registry.list_tools()).model_dump()

    async def handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        Handle the tools/call request.

        A well-formed tool name is resolved before the credential is checked,
        so an unknown tool is reported the same way whether or not a user has
        authorized. Malformed params are only reported as such to an
        authorized caller; without a credential they are rejected as
        unauthorized. The TickTick API is never reached without a credential.
        """
        try:
            call_params = ToolCallParams.model_validate(params)
        except ValidationError as e:
            if self.credentials.get(self.subject) is None:
                logger.info("Rejected malformed tools/call: no TickTick credential")
                raise MethodError(NOT_AUTHORIZED) from e
            logger.warning(f"Invalid tools/call params: {e}")
            raise MethodError(TOOL_EXECUTION_ERROR, f"Invalid parameters: {e}") from e

        tool = self.registry.resolve(call_params.name)
        if tool is None:
            logger.info(f"Unknown tool requested: {call_params.name}")
            raise MethodError(METHOD_NOT_FOUND, UNKNOWN_TOOL_MESSAGE)

        credential = self.credentials.get(self.subject)
        if credential is None:
            logger.info(f"Rejected call to {tool.name}: no TickTick credential")
            raise MethodError(NOT_AUTHORIZED)

        logger.info(f"Calling tool: {tool.name}")
        outcome = await self.registry.call_tool(tool, call_params.arguments, credential)
        if not outcome.ok:
            raise MethodError(TOOL_EXECUTION_ERROR, outcome.error)
        return ToolCallResult(content=outcome.content).model_dump()

    async def handle_list_offerings(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle the server/listOfferings request."""
        return OfferingsResult().model_dump()

    async def dispatch(
        self, method: str | None, params: dict[str, Any] | None
    ) -> tuple[Any | None, dict[str, Any] | None]:
        """
        Dispatch a method call to the appropriate handler.

        Returns (result, error) tuple. One will be None.
        """
        handler = self._methods.get(method)
        if handler is None:
            logger.info(f"Method not found: {method}")
            return None, make_error_data(METHOD_NOT_FOUND)

        try:
            result = await handler(params or {})
            return result, None
        except MethodError as e:
            return None, e.to_error_data()
        except Exception as e:
            logger.exception(f"Error handling method {method}")
            return None, make_error_data(TOOL_EXECUTION_ERROR, str(e))
