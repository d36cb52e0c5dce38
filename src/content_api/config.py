"""API configuration loaded from environment variables."""
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    """API configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug mode and API documentation.
        cors_origins_raw: Raw comma-separated CORS origins string.
        json_logs: Render logs as JSON lines instead of console output.
        key: API key for authenticating requests. Empty disables auth.
        slow_search_ms: Search time above which a warning is logged.
        suggestion_limit: Default number of autocomplete suggestions.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    json_logs: bool = True
    cors_origins_raw: str = "http://localhost:3000"
    key: str = ""

    slow_search_ms: float = 300.0
    suggestion_limit: int = 5

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [
            origin.strip()
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
