"""Tests for Pydantic Settings configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import SecretStr

from core.config import (
    GeminiSettings,
    Settings,
    ShopeeSettings,
    UploadSettings,
    get_settings,
)


class TestShopeeSettings:
    """Tests for ShopeeSettings."""

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values should come from SHOPEE_* variables."""
        monkeypatch.setenv("SHOPEE_PARTNER_ID", " 123456 ")
        monkeypatch.setenv("SHOPEE_PARTNER_KEY", "key")
        monkeypatch.setenv("SHOPEE_TIMEOUT", "5")

        settings = ShopeeSettings()

        assert settings.partner_id == "123456"
        assert settings.partner_key.get_secret_value() == "key"
        assert settings.timeout == 5.0
        assert settings.is_configured is True

    def test_default_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The live partner host should be the default."""
        monkeypatch.delenv("SHOPEE_API_BASE_URL", raising=False)

        assert ShopeeSettings().api_base_url == "https://partner.shopeemobile.com"

    def test_not_configured_without_key(self) -> None:
        """is_configured should be False when the key is empty."""
        settings = ShopeeSettings(partner_id="1", partner_key=SecretStr(""))

        assert settings.is_configured is False

    def test_not_configured_with_non_numeric_id(self) -> None:
        """is_configured should be False when the partner ID is not numeric."""
        settings = ShopeeSettings(partner_id="abc", partner_key=SecretStr("key"))

        assert settings.is_configured is False

    def test_partner_key_hidden_in_repr(self) -> None:
        """The partner key should not appear in repr."""
        settings = ShopeeSettings(partner_id="1", partner_key=SecretStr("super-secret"))

        assert "super-secret" not in repr(settings)


class TestGeminiSettings:
    """Tests for GeminiSettings."""

    def test_default_model(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default model should be gemini-2.0-flash."""
        monkeypatch.delenv("GEMINI_MODEL", raising=False)

        assert GeminiSettings().model == "gemini-2.0-flash"

    def test_is_configured(self) -> None:
        """is_configured should follow the API key."""
        assert GeminiSettings(api_key=SecretStr("k")).is_configured is True
        assert GeminiSettings(api_key=SecretStr("")).is_configured is False


class TestUploadSettings:
    """Tests for UploadSettings."""

    def test_url_prefix_gets_trailing_slash(self) -> None:
        """url_prefix should always end with a slash."""
        assert UploadSettings(url_prefix="/media").url_prefix == "/media/"

    def test_directory_from_environment(self, tmp_path: Path) -> None:
        """The conftest upload directory should be picked up."""
        assert UploadSettings().directory == tmp_path / "uploads"


class TestSettings:
    """Tests for main Settings class."""

    def test_environment_flags(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment properties should reflect ENVIRONMENT."""
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings()

        assert settings.is_production is True
        assert settings.is_development is False
        assert settings.is_test is False

    def test_allowed_hosts_from_comma_separated_string(self) -> None:
        """allowed_hosts should accept a comma-separated string."""
        settings = Settings(allowed_hosts="example.com, shop.example.com")

        assert settings.allowed_hosts == ["example.com", "shop.example.com"]

    def test_allowed_hosts_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A comma-separated ALLOWED_HOSTS variable should be split, not JSON-decoded."""
        monkeypatch.setenv("ALLOWED_HOSTS", "localhost,127.0.0.1, shop.example.com")

        settings = Settings()

        assert settings.allowed_hosts == ["localhost", "127.0.0.1", "shop.example.com"]

    def test_oauth_redirect_url(self) -> None:
        """The OAuth callback URL should be built from public_base_url."""
        settings = Settings(public_base_url="https://listing.example.com/")

        assert settings.oauth_redirect_url == (
            "https://listing.example.com/api/auth/shopee/callback/"
        )

    def test_sub_settings_are_loaded(self) -> None:
        """Shopee and Gemini sections should be read from the environment."""
        settings = Settings()

        assert settings.shopee.is_configured is True
        assert settings.gemini.is_configured is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self) -> None:
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()
