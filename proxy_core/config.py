"""
Application configuration using Pydantic settings.

Usage:
    from proxy_core.config import get_settings
    settings = get_settings()

For constants, import from proxy_core.constants:
    from proxy_core.constants import RESPONSE_HEADERS, RECENT_PIPES
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - TINYBIRD_API_KEY (credential forwarded to the analytics API)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Replay Search Proxy"
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    # Analytics backend
    tinybird_api_key: str = Field(default="", validation_alias="TINYBIRD_API_KEY")
    analytics_base_url: str = Field(
        default="https://api.us-east.tinybird.co/v0/pipes",
        validation_alias="ANALYTICS_BASE_URL",
    )
    backend_timeout: float = Field(default=30.0, gt=0, validation_alias="BACKEND_TIMEOUT")

    # Redis
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")
    cache_enabled: bool = Field(default=True, validation_alias="CACHE_ENABLED")

    @property
    def is_development(self) -> bool:
        """Human-readable console logs instead of JSON lines."""
        return self.debug or self.environment == "development"

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()

    @property
    def redis_url(self) -> str:
        """Construct Redis URL from components."""
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Caching and results
    cache_ttl: int = Field(default=60 * 60 * 24, ge=1, validation_alias="CACHE_TTL")
    search_result_limit: int = Field(default=20, ge=1, validation_alias="SEARCH_RESULT_LIMIT")

    @field_validator("analytics_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Pipe paths are joined with a single slash."""
        return v.rstrip("/")

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if not self.tinybird_api_key:
            errors.append("TINYBIRD_API_KEY is required for analytics API access")

        if not self.analytics_base_url.startswith("https://"):
            warnings.append(
                "ANALYTICS_BASE_URL is not served over HTTPS - the API key "
                "will travel in plaintext."
            )

        if not self.cache_enabled:
            warnings.append("CACHE_ENABLED is false - every request hits the analytics API.")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
