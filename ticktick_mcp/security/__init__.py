"""Security modules: credential storage and the OAuth flow."""

from ticktick_mcp.security.credentials import (
    CredentialRecord,
    CredentialStore,
    InMemoryCredentialStore,
    get_credential_store,
)

__all__ = [
    "CredentialRecord",
    "CredentialStore",
    "InMemoryCredentialStore",
    "get_credential_store",
]
