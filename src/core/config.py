"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables. The embedding application decides which .env file to load.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Stream timings are validated against each other

Usage:
    from src.core.config import get_settings

    settings = get_settings()
    url = f"{settings.api_base_url}{settings.notification_stream_path}"

    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment


class Settings(BaseSettings):
    """
    Notification stream client settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)

    Returns:
        Settings: Client configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="Notistream",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # API configuration
    api_base_url: str = Field(
        description="API base URL (e.g., https://api.example.com)",
    )
    notification_stream_path: str = Field(
        default="/v1/notifications/subscribe",
        description="Path of the server-sent notification stream",
    )
    token_reissue_path: str = Field(
        default="/v1/auth/reissue",
        description="Path of the credential reissue endpoint",
    )

    # Stream lifecycle timings
    sse_reconnect_delay_seconds: float = Field(
        default=5.0,
        description="Fixed delay before reconnecting after a transport failure",
    )
    sse_refresh_reopen_delay_seconds: float = Field(
        default=0.1,
        description="Short yield before reopening with a freshly refreshed credential",
    )
    sse_heartbeat_timeout_seconds: float = Field(
        default=60.0,
        description="Silence after which the stream is considered dead",
    )
    sse_heartbeat_check_interval_seconds: float = Field(
        default=10.0,
        description="How often the heartbeat watchdog checks for silence",
    )
    sse_connect_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for establishing the stream connection",
    )

    # Credential settings
    token_refresh_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for the credential reissue request",
    )
    access_token_expiry_buffer_seconds: int = Field(
        default=120,
        description="Access tokens expiring within this window count as expiring soon",
    )
    access_token_default_ttl_seconds: int = Field(
        default=1800,
        description="Assumed access token lifetime when the token carries no exp claim",
    )

    # Forced logout
    logout_dedupe_seconds: float = Field(
        default=3.0,
        description="Repeat forced-logout invocations within this window are dropped",
    )
    forced_logout_message: str = Field(
        default="Your session has expired. Please sign in again.",
        description="Reason shown to the user when the session is ended",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator(
        "sse_reconnect_delay_seconds",
        "sse_refresh_reopen_delay_seconds",
        "sse_heartbeat_timeout_seconds",
        "sse_heartbeat_check_interval_seconds",
        "sse_connect_timeout_seconds",
        "token_refresh_timeout_seconds",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """
        Reject zero or negative delays and timeouts.

        Raises:
            ValueError: If the value is not positive.
        """
        if v <= 0:
            raise ValueError("delays and timeouts must be positive")
        return v

    @model_validator(mode="after")
    def validate_heartbeat_window(self) -> "Settings":
        """
        Ensure the watchdog checks more often than the timeout it enforces.

        Raises:
            ValueError: If the check interval is not shorter than the timeout.
        """
        if self.sse_heartbeat_check_interval_seconds >= self.sse_heartbeat_timeout_seconds:
            raise ValueError(
                "sse_heartbeat_check_interval_seconds must be shorter than "
                "sse_heartbeat_timeout_seconds"
            )
        return self

    @property
    def notification_stream_url(self) -> str:
        """Absolute URL of the notification stream."""
        return f"{self.api_base_url}{self.notification_stream_path}"

    @property
    def token_reissue_url(self) -> str:
        """Absolute URL of the credential reissue endpoint."""
        return f"{self.api_base_url}{self.token_reissue_path}"

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()  # type: ignore[call-arg]  # Pydantic Settings loads from env
