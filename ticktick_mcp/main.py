"""FastAPI MCP Server - Main application entrypoint."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from ticktick_mcp.config.loader import get_settings
from ticktick_mcp.mcp.handlers import MCPHandlers
from ticktick_mcp.mcp.jsonrpc import JsonRpcProcessor
from ticktick_mcp.mcp.registry import get_registry
from ticktick_mcp.mcp.transport_sse import create_handshake_response
from ticktick_mcp.security.credentials import get_credential_store
from ticktick_mcp.security.oauth import (
    OAuthError,
    generate_state,
    get_oauth_client,
    get_state_tracker,
)
from ticktick_mcp.utils.http import close_shared_client
from ticktick_mcp.utils.logging import setup_logging, set_request_id, get_logger

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    setup_logging()
    log = get_logger("startup")

    settings = get_settings()
    log.info(
        "Starting MCP server",
        server_name=settings.server_name,
        version=settings.server_version,
        oauth_configured=settings.oauth_configured,
    )
    if not settings.oauth_configured:
        log.warning("OAuth is not configured; tools/call will answer Not authorized")

    registry = get_registry()
    log.info("Tool registry ready", tools=[tool.name for tool in registry.list_tools()])

    yield

    # Shutdown
    log.info("Shutting down MCP server")
    await close_shared_client()


# Create FastAPI app
app = FastAPI(
    title="TickTick MCP Server",
    description="Remote MCP server exposing TickTick task search and fetch tools",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS so browser-based MCP clients can reach the server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


# Request ID middleware
@app.middleware("http")
async def add_request_id_middleware(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = set_request_id(request.headers.get("X-Request-ID"))
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# =============================================================================
# Health and Info Endpoints
# =============================================================================


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with server info."""
    settings = get_settings()
    registry = get_registry()

    return {
        "name": settings.server_name,
        "version": settings.server_version,
        "description": "MCP server for TickTick tasks",
        "endpoints": {
            "health": "/health",
            "mcp": "/mcp",
            "oauth_start": "/oauth/start",
            "oauth_callback": "/oauth/callback",
        },
        "tools_available": registry.tool_count,
        "authorized": get_credential_store().get() is not None,
    }


# =============================================================================
# OAuth Endpoints
# =============================================================================


@app.get("/oauth/start")
async def oauth_start():
    """Redirect the user to the TickTick authorization page."""
    client = get_oauth_client()
    if not client.settings.oauth_configured:
        return PlainTextResponse("OAuth is not configured", status_code=500)

    if client.settings.oauth_verify_state:
        state = get_state_tracker().issue()
    else:
        state = generate_state()
    return RedirectResponse(client.authorization_url(state), status_code=302)


@app.get("/oauth/callback")
async def oauth_callback(code: str | None = None, state: str | None = None):
    """Exchange the authorization code and store the resulting credential."""
    log = get_logger("oauth")
    if not code:
        return PlainTextResponse("Missing authorization code", status_code=400)

    client = get_oauth_client()
    if client.settings.oauth_verify_state and not get_state_tracker().consume(state):
        log.warning("OAuth callback with unknown state")
        return PlainTextResponse("Invalid OAuth state", status_code=400)

    try:
        record = await client.exchange_code(code)
    except OAuthError:
        log.error("Failed to exchange authorization code", exc_info=True)
        return PlainTextResponse("Failed to exchange authorization code", status_code=500)

    get_credential_store().set(record)
    log.info("OAuth authorization complete")
    return PlainTextResponse("Authorization complete. You may close this window.")


# =============================================================================
# MCP Endpoints
# =============================================================================


@app.get("/mcp")
async def mcp_handshake():
    """
    SSE endpoint for MCP session establishment.

    Sends a single 'endpoint' event and keeps the stream open.
    """
    return create_handshake_response()


@app.post("/mcp")
async def mcp_message(request: Request) -> JSONResponse:
    """
    JSON-RPC endpoint.

    Always answers 200: protocol errors travel inside the JSON-RPC envelope.
    """
    body = await request.body()

    handlers = MCPHandlers(get_registry(), get_credential_store())
    processor = JsonRpcProcessor(handlers)

    response = await processor.handle_message(body)
    return JSONResponse(content=response.model_dump())


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ticktick_mcp.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
