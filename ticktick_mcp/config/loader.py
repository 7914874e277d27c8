"""Configuration loading from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OAuth (authorization-code flow against TickTick)
    oauth_auth_url: str = ""
    oauth_token_url: str = ""
    oauth_client_id: str = ""
    oauth_client_secret: str = ""
    oauth_redirect: str = ""
    oauth_scope: str = ""  # omitted from the authorization URL when empty
    oauth_verify_state: bool = False

    # TickTick open API
    ticktick_api_base: str = "https://api.ticktick.com/open/v1"
    upstream_timeout: float | None = Field(default=None, gt=0)  # None = no timeout

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Server info
    server_name: str = "ticktick-mcp-server"
    server_version: str = "1.0.0"

    # Host and port
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def oauth_configured(self) -> bool:
        """Check if the OAuth endpoints and client id are set."""
        return bool(self.oauth_auth_url and self.oauth_token_url and self.oauth_client_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
