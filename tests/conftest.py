"""Pytest configuration and fixtures."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from ticktick_mcp.main import app
from ticktick_mcp.config.loader import Settings, get_settings
from ticktick_mcp.mcp.registry import reset_registry
from ticktick_mcp.security import oauth
from ticktick_mcp.security.credentials import (
    CredentialRecord,
    get_credential_store,
    reset_credential_store,
)
from ticktick_mcp.tools.ticktick import client as ticktick_client
from ticktick_mcp.utils.http import create_http_client

API_BASE = "https://ticktick.test/open/v1"
TOKEN_URL = "https://ticktick.test/oauth/token"
AUTH_URL = "https://ticktick.test/oauth/authorize"


@pytest.fixture
def client():
    """Synchronous test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset registry, credential store, clients and settings around each test."""
    get_settings.cache_clear()
    reset_registry()
    reset_credential_store()
    ticktick_client.reset_client()
    oauth.reset_oauth()
    yield
    reset_registry()
    reset_credential_store()
    ticktick_client.reset_client()
    oauth.reset_oauth()
    get_settings.cache_clear()


@pytest.fixture
def oauth_settings():
    """Settings with a complete OAuth configuration."""
    return Settings(
        oauth_auth_url=AUTH_URL,
        oauth_token_url=TOKEN_URL,
        oauth_client_id="client-123",
        oauth_client_secret="secret-456",
        oauth_redirect="https://mcp.test/oauth/callback",
    )


class RecordingTransport:
    """httpx mock handler that records requests and replays canned responses."""

    def __init__(self, status_code: int = 200, payload=None, raise_error: Exception | None = None):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.raise_error = raise_error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode())

    def http_client(self) -> httpx.AsyncClient:
        return create_http_client(transport=httpx.MockTransport(self))


@pytest.fixture
def ticktick_api(monkeypatch):
    """Route TickTick API calls to a recording mock; returns the recorder."""
    recorder = RecordingTransport(payload=[{"id": "t1", "title": "Buy groceries"}])
    monkeypatch.setattr(
        ticktick_client,
        "_client",
        ticktick_client.TickTickClient(base_url=API_BASE, http_client=recorder.http_client()),
    )
    return recorder


@pytest.fixture
def token_endpoint(monkeypatch, oauth_settings):
    """Route the OAuth token exchange to a recording mock; returns the recorder."""
    recorder = RecordingTransport(
        payload={"access_token": "tok-abc", "token_type": "bearer", "expires_in": 3600}
    )
    monkeypatch.setattr(
        oauth,
        "_client",
        oauth.OAuthClient(settings=oauth_settings, http_client=recorder.http_client()),
    )
    return recorder


@pytest.fixture
def authorized():
    """Store a TickTick credential as if the OAuth callback had succeeded."""
    record = CredentialRecord(access_token="stored-token", token_type="bearer")
    get_credential_store().set(record)
    return record


@pytest.fixture
def sample_jsonrpc_request():
    """Sample JSON-RPC request factory."""
    def _make_request(method: str, params: dict = None, id: int = 1):
        return {
            "jsonrpc": "2.0",
            "id": id,
            "method": method,
            "params": params or {},
        }
    return _make_request
