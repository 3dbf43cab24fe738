"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Exolix
    # ======================
    exolix_api_key: str = Field(default="", description="Exolix API key (sent as Authorization)")
    exolix_api_url: str = Field(
        default="https://exolix.com/api/v2/", description="Exolix API base URL"
    )
    exolix_order_url: str = Field(
        default="https://exolix.com/transaction/",
        description="Prefix of the human-facing order tracking URL",
    )

    # ======================
    # HTTP
    # ======================
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "exolix": {
                "api_url": self.exolix_api_url,
                "order_url": self.exolix_order_url,
                "api_key": "***" if self.exolix_api_key else "(not set)",
            },
            "http_timeout": self.http_timeout,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
