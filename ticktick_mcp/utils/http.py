"""HTTP client utilities with connection pooling."""

import asyncio
import logging

import httpx

from ticktick_mcp.config.loader import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# Connection Pooling - Shared HTTP Client
# =============================================================================

_shared_client: httpx.AsyncClient | None = None
_client_lock = asyncio.Lock()


def _user_agent() -> str:
    settings = get_settings()
    return f"{settings.server_name}/{settings.server_version}"


async def get_shared_client() -> httpx.AsyncClient:
    """Get a shared HTTP client with connection pooling.

    The client carries no timeout unless UPSTREAM_TIMEOUT is set: upstream
    latency bounds are left to the caller.
    """
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        async with _client_lock:
            # Double-check after acquiring lock
            if _shared_client is None or _shared_client.is_closed:
                settings = get_settings()
                _shared_client = httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.upstream_timeout),
                    headers={"User-Agent": _user_agent()},
                    limits=httpx.Limits(
                        max_keepalive_connections=10,
                        max_connections=20,
                        keepalive_expiry=30.0,
                    ),
                )
                logger.debug("Created shared HTTP client with connection pooling")

    return _shared_client


async def close_shared_client() -> None:
    """Close the shared HTTP client (call on shutdown)."""
    global _shared_client
    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.debug("Closed shared HTTP client")


def create_http_client(
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create a standalone async HTTP client.

    Args:
        timeout: Request timeout in seconds. None disables the timeout.
        transport: Optional transport, e.g. ``httpx.MockTransport`` in tests.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": _user_agent()},
        transport=transport,
    )
