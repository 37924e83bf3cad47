"""Harness settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """E2E harness configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Target API
    scheme: Literal["http", "https"] = Field(default="http", description="API scheme")
    host: str = Field(default="localhost", description="API host")
    port: int = Field(default=3000, ge=1, le=65535, description="API port")
    api_prefix: str = Field(default="/api", description="Global route prefix of the API")
    request_timeout: float = Field(
        default=10.0, gt=0, description="Per-request timeout in seconds"
    )

    # Logging
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    # Fixtures
    test_password: str = Field(
        default="TestPassword123!", description="Password used for generated test users"
    )
    skip_if_unreachable: bool = Field(
        default=True, description="Skip e2e tests when the API health probe fails"
    )

    # Rate-limit retry (429)
    rate_limit_max_attempts: int = Field(
        default=3, ge=1, description="Attempts before giving up on a rate-limited call"
    )
    rate_limit_initial_delay: float = Field(
        default=2.0, ge=0, description="First backoff delay in seconds"
    )
    rate_limit_max_delay: float = Field(
        default=8.0, ge=0, description="Upper bound for a single backoff delay"
    )
    rate_limit_jitter: float = Field(
        default=1.0, ge=0, description="Maximum random jitter added to each delay"
    )
    rate_limit_deadline: float = Field(
        default=30.0, gt=0, description="Total seconds allowed across all attempts"
    )

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Force a single leading slash and no trailing slash."""
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @property
    def base_url(self) -> str:
        """Root URL every request path is appended to."""
        return f"{self.scheme}://{self.host}:{self.port}{self.api_prefix}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
