"""Listing service package."""

from services.listings.service import ListingService
from services.listings.types import (
    ListingError,
    ListingErrorKind,
    ListingRequest,
)

__all__ = [
    "ListingError",
    "ListingErrorKind",
    "ListingRequest",
    "ListingService",
]
