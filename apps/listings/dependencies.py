"""
Lazily built, process-wide service instances.

Each getter builds its object once from validated settings; views receive
them through these functions instead of constructing clients per request.
Missing credentials raise ConfigurationError on first use.
"""

from __future__ import annotations

from functools import lru_cache

from core.config import get_settings
from services.gemini import GeminiService
from services.listings import ListingService
from services.shopee import PartnerIdentity, ShopeeAuth, ShopeeClient
from services.storage import ImageStorage


@lru_cache(maxsize=1)
def get_partner_identity() -> PartnerIdentity:
    """Return the partner identity from SHOPEE_PARTNER_ID / SHOPEE_PARTNER_KEY."""
    shopee = get_settings().shopee
    return PartnerIdentity.from_credentials(
        shopee.partner_id,
        shopee.partner_key.get_secret_value(),
    )


@lru_cache(maxsize=1)
def get_shopee_auth() -> ShopeeAuth:
    """Return the OAuth token exchanger."""
    shopee = get_settings().shopee
    return ShopeeAuth(get_partner_identity(), base_url=shopee.api_base_url, timeout=shopee.timeout)


@lru_cache(maxsize=1)
def get_shopee_client() -> ShopeeClient:
    """Return the signed Shopee API client."""
    shopee = get_settings().shopee
    return ShopeeClient(
        get_partner_identity(),
        base_url=shopee.api_base_url,
        timeout=shopee.timeout,
    )


@lru_cache(maxsize=1)
def get_gemini_service() -> GeminiService | None:
    """Return the Gemini service, or None when no API key is configured."""
    gemini = get_settings().gemini
    if not gemini.is_configured:
        return None
    return GeminiService(api_key=gemini.api_key.get_secret_value(), model=gemini.model)


@lru_cache(maxsize=1)
def get_image_storage() -> ImageStorage:
    """Return the upload storage."""
    uploads = get_settings().uploads
    return ImageStorage(uploads.directory, base_url=uploads.url_prefix)


@lru_cache(maxsize=1)
def get_listing_service() -> ListingService:
    """Return the listing service."""
    return ListingService(
        client=get_shopee_client(),
        storage=get_image_storage(),
        describer=get_gemini_service(),
    )


def reset_dependencies() -> None:
    """Drop every cached instance (settings changes, tests)."""
    for getter in (
        get_partner_identity,
        get_shopee_auth,
        get_shopee_client,
        get_gemini_service,
        get_image_storage,
        get_listing_service,
    ):
        getter.cache_clear()
