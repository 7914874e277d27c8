"""Tests for structured logging helpers."""

from structlog.testing import capture_logs

from ticktick_mcp.security.credentials import CredentialRecord, InMemoryCredentialStore
from ticktick_mcp.security.oauth import OAuthClient
from ticktick_mcp.utils.logging import (
    add_request_id,
    get_request_id,
    redact_secrets,
    set_request_id,
)

from conftest import TOKEN_URL, RecordingTransport


def test_redact_secrets_masks_token_fields():
    event = redact_secrets(
        None, "info", {"event": "stored", "access_token": "t", "client_secret": "s"}
    )
    assert event == {"event": "stored", "access_token": "***", "client_secret": "***"}


def test_redact_secrets_leaves_other_fields():
    event = {"event": "Calling tool", "tool": "search"}
    assert redact_secrets(None, "info", dict(event)) == event


def test_request_id_is_added_to_events():
    set_request_id("req00001")
    assert get_request_id() == "req00001"
    assert add_request_id(None, "info", {"event": "x"})["request_id"] == "req00001"


def test_generated_request_id_is_short():
    assert len(set_request_id()) == 8


def test_credential_store_logs_structured_event_without_token():
    store = InMemoryCredentialStore()
    with capture_logs() as logs:
        store.set(CredentialRecord(access_token="very-secret"))
        store.set(CredentialRecord(access_token="even-more-secret"))

    assert [(e["event"], e["subject"], e["replaced"]) for e in logs] == [
        ("Stored TickTick credential", "default", False),
        ("Stored TickTick credential", "default", True),
    ]
    assert "secret" not in repr(logs)


async def test_token_exchange_logs_endpoint_not_code(oauth_settings):
    recorder = RecordingTransport(payload={"access_token": "tok-abc"})
    client = OAuthClient(settings=oauth_settings, http_client=recorder.http_client())

    with capture_logs() as logs:
        await client.exchange_code("auth-code-123")

    (event,) = logs
    assert event["token_url"] == TOKEN_URL
    assert "auth-code-123" not in repr(logs)
    assert "tok-abc" not in repr(logs)
