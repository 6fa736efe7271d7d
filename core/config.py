"""
Application configuration using Pydantic Settings.

This module provides typed and validated settings for the application,
with support for environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class ConfigurationError(ValueError):
    """Raised when a required credential or setting is missing or invalid."""


class ShopeeSettings(BaseSettings):
    """Shopee Open Platform partner settings."""

    model_config = SettingsConfigDict(env_prefix="SHOPEE_")

    partner_id: str = Field(default="", description="Shopee partner ID (numeric)")
    partner_key: SecretStr = Field(default=SecretStr(""), description="Shopee partner key")
    api_base_url: str = Field(
        default="https://partner.shopeemobile.com",
        description="Shopee partner API host",
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds", gt=0)

    @field_validator("partner_id", mode="before")
    @classmethod
    def strip_partner_id(cls, v: str | int) -> str:
        """Accept the partner ID as int or string."""
        return str(v).strip()

    @property
    def is_configured(self) -> bool:
        """Check if partner credentials are configured."""
        return bool(self.partner_id.isdigit() and self.partner_key.get_secret_value())


class GeminiSettings(BaseSettings):
    """Google Gemini API settings."""

    model_config = SettingsConfigDict(env_prefix="GEMINI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="Gemini API Key")
    model: str = Field(default="gemini-2.0-flash", description="Gemini model to use")

    @property
    def is_configured(self) -> bool:
        """Check if Gemini API key is configured."""
        return bool(self.api_key.get_secret_value())


class UploadSettings(BaseSettings):
    """Local storage for merchant-uploaded product photos."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    directory: Path = Field(
        default=BASE_DIR / "public" / "uploads",
        description="Directory where uploaded images are written",
    )
    url_prefix: str = Field(default="/uploads/", description="Public URL prefix for uploads")

    @field_validator("url_prefix")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Django's FileSystemStorage expects base URLs to end with a slash."""
        return v if v.endswith("/") else f"{v}/"


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides environment-specific
    settings loading.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")
    secret_key: SecretStr = Field(
        default=SecretStr("django-insecure-change-me-in-production"),
        description="Django secret key",
    )
    allowed_hosts: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Allowed hosts",
    )
    public_base_url: str = Field(
        default="http://localhost:8000",
        description="Externally reachable base URL, used for the OAuth redirect",
    )

    # Sub-settings
    shopee: ShopeeSettings = Field(default_factory=ShopeeSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    uploads: UploadSettings = Field(default_factory=UploadSettings)

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v: str | list[str]) -> list[str]:
        """Parse allowed hosts from comma-separated string or list."""
        if isinstance(v, str):
            return [h.strip() for h in v.split(",") if h.strip()]
        return v

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store the base URL without a trailing slash."""
        return v.rstrip("/")

    @property
    def oauth_redirect_url(self) -> str:
        """URL Shopee redirects back to after the merchant approves."""
        return f"{self.public_base_url}/api/auth/shopee/callback/"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
