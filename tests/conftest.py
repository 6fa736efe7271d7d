"""
Pytest configuration and fixtures for the test suite.

This module contains shared fixtures used across all tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from django.test import Client

from apps.listings.dependencies import reset_dependencies
from core.config import get_settings
from services.shopee.types import PartnerIdentity, ShopCredentials
from services.storage import ImageStorage
from tests.helpers import ACCESS_TOKEN, PARTNER_ID, PARTNER_KEY, SHOP_ID

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_settings(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Iterator[None]:
    """Give every test its own credentials, upload directory and service instances."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SHOPEE_PARTNER_ID", str(PARTNER_ID))
    monkeypatch.setenv("SHOPEE_PARTNER_KEY", PARTNER_KEY)
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setenv("UPLOAD_DIRECTORY", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    reset_dependencies()
    yield
    get_settings.cache_clear()
    reset_dependencies()


@pytest.fixture()
def test_client() -> Client:
    """Return a Django test client."""
    return Client()


@pytest.fixture()
def authorized_client(test_client: Client) -> Client:
    """Return a test client carrying a shop session."""
    test_client.cookies["shopee_access_token"] = ACCESS_TOKEN
    test_client.cookies["shopee_refresh_token"] = "test-refresh-token"
    test_client.cookies["shopee_shop_id"] = str(SHOP_ID)
    return test_client


@pytest.fixture()
def identity() -> PartnerIdentity:
    """Return the test partner identity."""
    return PartnerIdentity.from_credentials(PARTNER_ID, PARTNER_KEY)


@pytest.fixture()
def credentials() -> ShopCredentials:
    """Return test shop credentials."""
    return ShopCredentials(access_token=ACCESS_TOKEN, shop_id=SHOP_ID)


@pytest.fixture()
def storage(tmp_path: Path) -> ImageStorage:
    """Return an image storage in a temporary directory."""
    return ImageStorage(tmp_path / "images", base_url="/uploads/")
