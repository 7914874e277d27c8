"""Utility modules: logging, HTTP client."""

from ticktick_mcp.utils.logging import setup_logging, get_logger
from ticktick_mcp.utils.http import create_http_client, get_shared_client

__all__ = [
    "setup_logging",
    "get_logger",
    "create_http_client",
    "get_shared_client",
]
