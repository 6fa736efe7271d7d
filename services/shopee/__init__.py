"""Shopee partner API package."""

from services.shopee.auth import ShopeeAuth
from services.shopee.client import ShopeeClient
from services.shopee.errors import (
    AuthExchangeError,
    ErrorCode,
    ErrorPhase,
    ParseError,
    RemoteApiError,
    ShopeeError,
)
from services.shopee.signing import SignedRequest, sign
from services.shopee.types import (
    Category,
    CreatedItem,
    PartnerIdentity,
    ProductListing,
    ShopCredentials,
    TokenPair,
    UploadedImage,
)

__all__ = [
    "AuthExchangeError",
    "Category",
    "CreatedItem",
    "ErrorCode",
    "ErrorPhase",
    "ParseError",
    "PartnerIdentity",
    "ProductListing",
    "RemoteApiError",
    "ShopCredentials",
    "ShopeeAuth",
    "ShopeeClient",
    "ShopeeError",
    "SignedRequest",
    "TokenPair",
    "UploadedImage",
    "sign",
]
