"""
Configuration management using Pydantic settings.

Handles environment variables and validation for:
- Okta API credentials and connection settings
- Pagination page size
- Logging levels and output format
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OktaSettings(BaseSettings):
    """Okta API connection and pagination settings."""

    model_config = SettingsConfigDict(env_prefix="OKTA_")

    domain: str = Field(
        default="",
        description="Okta domain (e.g., company.okta.com)",
    )

    token: str = Field(
        default="",
        description="Okta API token with read permissions",
    )

    api_version: str = Field(
        default="v1",
        description="Okta API version to use",
    )

    page_size: int = Field(
        default=200,
        ge=1,
        le=200,
        description="Items requested per page (Okta maximum is 200)",
    )

    request_timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="HTTP request timeout in seconds",
    )

    @field_validator("domain")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        """Validate Okta domain format."""
        # Allow empty domain for testing/default case
        if not v:
            return v

        # Remove protocol if provided
        domain = v.lower().replace("https://", "").replace("http://", "").rstrip("/")

        if "." not in domain:
            raise ValueError("Invalid Okta domain format")

        return domain

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Basic Okta token format validation."""
        # Allow empty token for testing/default case
        if not v:
            return v
        if len(v) < 10:
            raise ValueError("Okta token appears to be invalid")
        return v

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}/api/{self.api_version}"


class AppSettings(BaseSettings):
    """Application runtime configuration."""

    model_config = SettingsConfigDict(env_prefix="OKTA_PAGING_")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )

    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )


class Settings(BaseSettings):
    """Main configuration combining all setting categories."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    okta: OktaSettings = Field(default_factory=OktaSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment and config files."""
        return cls()

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app.log_level == "DEBUG"

    def validate_okta_connection(self) -> bool:
        """Validate that Okta configuration is complete."""
        return bool(self.okta.domain and self.okta.token)
