"""Types for the listing service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Defaults applied when the merchant leaves shipping fields empty
DEFAULT_WEIGHT = 1000
DEFAULT_PACKAGE_SIZE = 10

REQUIRED_FIELDS = ("title", "description", "category_id", "price", "stock", "image_ids")


class ListingErrorKind(str, Enum):
    """Kinds of listing failures."""

    VALIDATION = "validation"
    IMAGE = "image"
    UPLOAD = "upload"
    SHOPEE = "shopee"
    AI = "ai"
    NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True, slots=True)
class ListingError:
    """
    Error from a listing operation.

    Attributes:
        kind: What went wrong.
        message: Human-readable error message.
        details: Underlying error, as text.
        cause: The underlying error value (ShopeeError, StorageError, ...).
    """

    kind: ListingErrorKind
    message: str
    details: str | None = None
    cause: Any = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


@dataclass(frozen=True, slots=True)
class ListingRequest:
    """
    What the merchant submitted for publishing.

    Attributes:
        title: Listing title.
        description: Listing description.
        category_id: Shopee category.
        price: Price.
        stock: Stock.
        image_ids: Local image IDs from the upload endpoint, in display order.
        original_price: Price before discount; defaults to ``price``.
        weight: Package weight; defaults to ``DEFAULT_WEIGHT``.
        package_length: Defaults to ``DEFAULT_PACKAGE_SIZE``.
        package_width: Defaults to ``DEFAULT_PACKAGE_SIZE``.
        package_height: Defaults to ``DEFAULT_PACKAGE_SIZE``.
        brand_name: Free-text brand.
        pre_order: Whether the item ships as pre-order.
        days_to_ship: Pre-order lead time; pre-order is only sent when set.
        attribute_list: Category attributes, passed through to Shopee.
    """

    title: str
    description: str
    category_id: int
    price: float
    stock: int
    image_ids: tuple[str, ...]
    original_price: float | None = None
    weight: float | None = None
    package_length: int | None = None
    package_width: int | None = None
    package_height: int | None = None
    brand_name: str | None = None
    pre_order: bool = False
    days_to_ship: int | None = None
    attribute_list: tuple[dict[str, Any], ...] = ()

    def missing_fields(self) -> list[str]:
        """Return required fields that are empty or zero."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]
