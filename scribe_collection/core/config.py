"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


PLACEHOLDER_BASE_URL = "https://yoursite.com"


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation.

    Values come from environment variables or a local ``.env`` file.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # Collection API
    # COLLECTION_API_URL: base URL of the service exposing /api/collection.
    # COLLECTION_API_TOKEN: optional Bearer token sent with every request.
    collection_api_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the document-listing API"
    )
    collection_api_token: str = Field(
        default="",
        description="Optional Bearer token for the document-listing API"
    )
    collection_api_timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Public site origin used to build document links and embed snippets.
    public_base_url: str = Field(
        default=PLACEHOLDER_BASE_URL,
        description="Public origin of the site (used in links and embed code)"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ('json', 'text'):
            raise ValueError("Invalid log format. Must be 'json' or 'text'")
        return v_lower

    @field_validator('public_base_url', 'collection_api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip('/')

    def validate_production_config(self) -> list[str]:
        """Validate configuration for production environment.

        In production, raises if links would point at a placeholder origin
        or the listing API is a local address. In development, returns the
        problems so the caller can log them as warnings.

        Raises:
            ConfigurationError: If production config is unusable.
        """
        errors: list[str] = []

        if self.public_base_url == PLACEHOLDER_BASE_URL:
            errors.append(
                "PUBLIC_BASE_URL is the placeholder origin. "
                "Embed snippets and links would point at it."
            )

        if "localhost" in self.collection_api_url or "127.0.0.1" in self.collection_api_url:
            errors.append(
                f"COLLECTION_API_URL points at a local address: {self.collection_api_url}"
            )

        if errors and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is invalid:\n  - " + "\n  - ".join(errors)
            )
        return errors

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
