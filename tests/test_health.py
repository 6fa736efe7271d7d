"""Tests for health check endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.config import get_settings

if TYPE_CHECKING:
    from pathlib import Path

    import pytest
    from django.test import Client


class TestHealthCheck:
    """Tests for the health check endpoint."""

    def test_health_check_returns_200(self, test_client: Client) -> None:
        """Health check should return 200 when credentials and uploads are fine."""
        response = test_client.get("/health/")

        assert response.status_code == 200
        assert response["Content-Type"] == "application/json"
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["shopee"]["status"] == "healthy"
        assert data["checks"]["uploads"]["status"] == "healthy"

    def test_creates_upload_directory(self, test_client: Client) -> None:
        """The upload directory should exist after a health check."""
        test_client.get("/health/")

        assert get_settings().uploads.directory.is_dir()

    def test_returns_503_without_shopee_credentials(
        self,
        test_client: Client,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Missing partner credentials should make the service unhealthy."""
        monkeypatch.setenv("SHOPEE_PARTNER_KEY", "")
        get_settings.cache_clear()

        response = test_client.get("/health/")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["checks"]["shopee"]["status"] == "unhealthy"

    def test_gemini_is_optional(
        self,
        test_client: Client,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A missing Gemini key should be reported but not fail the check."""
        monkeypatch.setenv("GEMINI_API_KEY", "")
        get_settings.cache_clear()

        response = test_client.get("/health/")

        assert response.status_code == 200
        assert response.json()["checks"]["gemini"]["status"] == "disabled"

    def test_unwritable_upload_directory(
        self,
        test_client: Client,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        """An upload path that cannot be created should make the service unhealthy."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file")
        monkeypatch.setenv("UPLOAD_DIRECTORY", str(blocker / "uploads"))
        get_settings.cache_clear()

        response = test_client.get("/health/")

        assert response.status_code == 503
        assert response.json()["checks"]["uploads"]["status"] == "unhealthy"
