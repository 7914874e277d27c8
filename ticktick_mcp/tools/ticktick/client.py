"""TickTick open API client."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ticktick_mcp.config.loader import get_settings
from ticktick_mcp.security.credentials import CredentialRecord
from ticktick_mcp.utils.http import get_shared_client

logger = logging.getLogger(__name__)

# Marks left unescaped in a URI component, on top of alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment or query value."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


class TickTickClient:
    """Client for the TickTick task endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or get_settings().ticktick_api_base).rstrip("/")
        self._http_client = http_client

    async def _get(self, url: str, credential: CredentialRecord) -> Any:
        client = self._http_client or await get_shared_client()
        response = await client.get(
            url, headers={"Authorization": credential.authorization_header}
        )
        response.raise_for_status()
        return response.json()

    async def search_tasks(self, query: str, credential: CredentialRecord) -> Any:
        """
        Search tasks by free-text query.

        Args:
            query: Search term, passed to TickTick unmodified
            credential: Stored OAuth credential

        Returns:
            The raw JSON payload returned by TickTick
        """
        url = f"{self.base_url}/task?search={encode_component(query)}"
        logger.debug(f"Searching TickTick tasks: {url}")
        return await self._get(url, credential)

    async def get_task(self, task_id: str, credential: CredentialRecord) -> Any:
        """Get a single task by its id, returning the raw JSON payload."""
        url = f"{self.base_url}/task/{encode_component(task_id)}"
        logger.debug(f"Fetching TickTick task: {url}")
        return await self._get(url, credential)


# Singleton client
_client: TickTickClient | None = None


def get_client() -> TickTickClient:
    """Get the TickTick client instance."""
    global _client
    if _client is None:
        _client = TickTickClient()
    return _client


def reset_client() -> None:
    """Drop the TickTick client instance (useful for testing)."""
    global _client
    _client = None
