"""OAuth authorization-code flow against the TickTick identity provider."""

import secrets
import time
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
from pydantic import ValidationError

from ticktick_mcp.config.loader import Settings, get_settings
from ticktick_mcp.security.credentials import CredentialRecord
from ticktick_mcp.utils.http import get_shared_client
from ticktick_mcp.utils.logging import get_logger

logger = get_logger(__name__)

# Issued states expire after ten minutes; at most this many are kept
STATE_TTL_SECONDS = 600.0
MAX_PENDING_STATES = 1000


class OAuthError(Exception):
    """Raised when the authorization code could not be exchanged for tokens."""


def generate_state() -> str:
    """Return a fresh opaque value for the ``state`` parameter."""
    return secrets.token_urlsafe(24)


class StateTracker:
    """
    Remembers issued OAuth states until a callback consumes them.

    States expire after ``ttl`` seconds, and at most ``max_pending`` are kept;
    issuing beyond the cap forgets the oldest state first.
    """

    def __init__(
        self,
        ttl: float = STATE_TTL_SECONDS,
        max_pending: int = MAX_PENDING_STATES,
    ) -> None:
        self.ttl = ttl
        self.max_pending = max_pending
        self._pending: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def issue(self) -> str:
        now = time.monotonic()
        self._prune(now)
        state = generate_state()
        self._pending[state] = now + self.ttl
        return state

    def consume(self, state: str | None) -> bool:
        """Return True and forget ``state`` if it was issued, unused and unexpired."""
        if state is None:
            return False
        expires_at = self._pending.pop(state, None)
        return expires_at is not None and time.monotonic() < expires_at

    def _prune(self, now: float) -> None:
        for state, expires_at in list(self._pending.items()):
            if expires_at <= now:
                del self._pending[state]
        # Insertion order is issue order
        while self._pending and len(self._pending) >= self.max_pending:
            del self._pending[next(iter(self._pending))]


class OAuthClient:
    """Builds authorization URLs and exchanges codes at the token endpoint."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self._http_client = http_client

    def authorization_url(self, state: str) -> str:
        """
        Build the provider authorization URL.

        Query parameters already present on OAUTH_AUTH_URL are preserved;
        ``scope`` is only added when OAUTH_SCOPE is set.
        """
        settings = self.settings
        parts = urlsplit(settings.oauth_auth_url)
        query = dict(parse_qsl(parts.query))
        query.update(
            {
                "client_id": settings.oauth_client_id,
                "redirect_uri": settings.oauth_redirect,
                "response_type": "code",
            }
        )
        if settings.oauth_scope:
            query["scope"] = settings.oauth_scope
        query["state"] = state
        return urlunsplit(parts._replace(query=urlencode(query)))

    async def exchange_code(self, code: str) -> CredentialRecord:
        """
        Exchange an authorization code for a credential record.

        Raises:
            OAuthError: If the request fails, the provider rejects the code,
                or the response carries no access token.
        """
        settings = self.settings
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": settings.oauth_client_id,
            "client_secret": settings.oauth_client_secret,
            "redirect_uri": settings.oauth_redirect,
        }

        client = self._http_client or await get_shared_client()
        logger.info("Exchanging authorization code", token_url=settings.oauth_token_url)
        try:
            response = await client.post(settings.oauth_token_url, data=form)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise OAuthError(f"Token exchange failed: {e}") from e

        if not isinstance(payload, dict):
            raise OAuthError("Token endpoint returned a non-object payload")
        try:
            return CredentialRecord.model_validate(payload)
        except ValidationError as e:
            raise OAuthError("Token endpoint response has no access_token") from e


# Global OAuth client and state tracker
_client: OAuthClient | None = None
_states: StateTracker | None = None


def get_oauth_client() -> OAuthClient:
    """Get the OAuth client instance."""
    global _client
    if _client is None:
        _client = OAuthClient()
    return _client


def get_state_tracker() -> StateTracker:
    """Get the process-wide OAuth state tracker."""
    global _states
    if _states is None:
        _states = StateTracker()
    return _states


def reset_oauth() -> None:
    """Forget the OAuth client and issued states (useful for testing)."""
    global _client, _states
    _client = None
    _states = None
