"""SSE (Server-Sent Events) handshake for MCP."""

import asyncio
import logging
import uuid
from typing import Any, AsyncGenerator

from sse_starlette.sse import EventSourceResponse

logger = logging.getLogger(__name__)

ENDPOINT_EVENT = {"event": "endpoint", "data": "{}"}


class HandshakeStream:
    """A kept-open event stream that announces readiness exactly once."""

    def __init__(self) -> None:
        self.stream_id = str(uuid.uuid4())[:8]
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """End the stream from the server side."""
        self._closed.set()

    async def events(self) -> AsyncGenerator[dict[str, Any], None]:
        """Yield the endpoint event, then hold the connection until closed."""
        yield ENDPOINT_EVENT
        logger.debug(f"Handshake sent on stream {self.stream_id}")
        try:
            await self._closed.wait()
        except asyncio.CancelledError:
            logger.info(f"Handshake stream {self.stream_id} disconnected")
            raise
        finally:
            self._closed.set()


def create_handshake_response(stream: HandshakeStream | None = None) -> EventSourceResponse:
    """Create the SSE response for the handshake stream."""
    stream = stream or HandshakeStream()
    return EventSourceResponse(
        stream.events(),
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
