"""Credential storage for TickTick OAuth tokens."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, StrictStr

from ticktick_mcp.utils.logging import get_logger

logger = get_logger(__name__)

# Subject used while the server serves a single implicit user
DEFAULT_SUBJECT = "default"


class CredentialRecord(BaseModel):
    """Token response from the OAuth exchange.

    Only ``access_token`` is required; every other field the provider returns
    (``token_type``, ``expires_in``, ``scope``...) is kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    access_token: StrictStr

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"


class CredentialStore(ABC):
    """Where the dispatcher reads credentials and the OAuth callback writes them."""

    @abstractmethod
    def get(self, subject: str = DEFAULT_SUBJECT) -> CredentialRecord | None:
        """Return the stored record for ``subject``, or None."""

    @abstractmethod
    def set(self, record: CredentialRecord, subject: str = DEFAULT_SUBJECT) -> None:
        """Store ``record`` for ``subject``, replacing any previous record."""


class InMemoryCredentialStore(CredentialStore):
    """Process-lifetime store. Records are replaced whole, never merged."""

    def __init__(self) -> None:
        self._records: dict[str, CredentialRecord] = {}

    def get(self, subject: str = DEFAULT_SUBJECT) -> CredentialRecord | None:
        return self._records.get(subject)

    def set(self, record: CredentialRecord, subject: str = DEFAULT_SUBJECT) -> None:
        replaced = subject in self._records
        self._records[subject] = record
        logger.info("Stored TickTick credential", subject=subject, replaced=replaced)


# Global credential store
_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Get the global credential store."""
    global _store
    if _store is None:
        _store = InMemoryCredentialStore()
    return _store


def reset_credential_store() -> None:
    """Drop all stored credentials (useful for testing)."""
    global _store
    _store = None
