"""Types for the Shopee partner API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from core.config import ConfigurationError


class ItemStatus(str, Enum):
    """Listing status on creation."""

    NORMAL = "NORMAL"
    UNLIST = "UNLIST"


@dataclass(frozen=True, slots=True)
class PartnerIdentity:
    """
    The (partner id, partner key) pair identifying this app to Shopee.

    Loaded once at startup. The key is only ever used as HMAC key material.

    Attributes:
        partner_id: Numeric partner ID.
        partner_key: Partner key bytes.
    """

    partner_id: int
    partner_key: bytes = field(repr=False)

    @classmethod
    def from_credentials(cls, partner_id: str | int, partner_key: str) -> PartnerIdentity:
        """
        Build an identity from raw configuration values.

        Raises:
            ConfigurationError: If either value is missing or the ID is not numeric.
        """
        raw_id = str(partner_id).strip()
        if not raw_id or not partner_key:
            msg = "Shopee partner_id and partner_key are required"
            raise ConfigurationError(msg)
        if not raw_id.isdigit():
            msg = f"Shopee partner_id must be numeric, got {raw_id!r}"
            raise ConfigurationError(msg)
        return cls(partner_id=int(raw_id), partner_key=partner_key.encode("utf-8"))


@dataclass(frozen=True, slots=True)
class ShopCredentials:
    """
    The per-shop values every authenticated call is signed with.

    Attributes:
        access_token: Shopee access token.
        shop_id: Shopee shop ID.
    """

    access_token: str = field(repr=False)
    shop_id: int

    def __post_init__(self) -> None:
        if not self.access_token:
            msg = "ShopCredentials requires a non-empty access token"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Tokens returned by the OAuth code or refresh exchange.

    Attributes:
        access_token: Short-lived access token.
        refresh_token: Refresh token.
        expire_in: Access token lifetime in seconds.
        shop_id: Shop the tokens were issued for.
        expires_at: Absolute expiry of the access token.
        shop_id_list: Shops covered by the authorization (main-account flow).
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expire_in: int
    shop_id: int
    expires_at: datetime
    shop_id_list: tuple[int, ...] = ()

    @classmethod
    def from_response(
        cls,
        data: dict[str, Any],
        shop_id: int,
        now: datetime | None = None,
    ) -> TokenPair:
        """
        Build a TokenPair from a token endpoint response body.

        Raises:
            KeyError: If ``access_token`` or ``refresh_token`` is missing.
            ValueError: If a token is empty or ``expire_in`` is not a number.
        """
        access_token = data["access_token"]
        refresh_token = data["refresh_token"]
        if not access_token or not refresh_token:
            msg = "empty token in response"
            raise ValueError(msg)

        expire_in = int(data.get("expire_in", 0))
        issued_at = now or datetime.now(UTC)
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expire_in=expire_in,
            shop_id=int(data.get("shop_id") or shop_id),
            expires_at=issued_at + timedelta(seconds=expire_in),
            shop_id_list=tuple(int(s) for s in data.get("shop_id_list") or ()),
        )

    @property
    def credentials(self) -> ShopCredentials:
        """Return the credentials signed calls need."""
        return ShopCredentials(access_token=self.access_token, shop_id=self.shop_id)

    def is_expired(self, now: datetime | None = None, leeway: int = 60) -> bool:
        """Check if the access token is expired or within ``leeway`` seconds of it."""
        current = now or datetime.now(UTC)
        return current >= self.expires_at - timedelta(seconds=leeway)


@dataclass(frozen=True, slots=True)
class Dimension:
    """Package dimensions in centimetres."""

    package_length: int = 10
    package_width: int = 10
    package_height: int = 10


@dataclass(frozen=True, slots=True)
class Brand:
    """Listing brand; ``brand_id`` 0 means "no brand / free text"."""

    original_brand_name: str
    brand_id: int = 0


@dataclass(frozen=True, slots=True)
class PreOrder:
    """Pre-order settings."""

    days_to_ship: int
    is_pre_order: bool = True


@dataclass(frozen=True, slots=True)
class ProductListing:
    """
    Outbound payload for ``/api/v2/product/add_item``.

    Shopee is the source of truth for field legality (category existence,
    attribute requirements); nothing here is validated client-side.

    Attributes:
        item_name: Listing title.
        description: Listing description.
        category_id: Shopee category.
        original_price: Price.
        normal_stock: Stock.
        weight: Package weight.
        image_id_list: Shopee image IDs, from ``upload_image``.
        dimension: Package dimensions.
        item_status: NORMAL (published) or UNLIST.
        attribute_list: Category attributes, passed through as-is.
        brand: Optional brand.
        pre_order: Optional pre-order settings.
    """

    item_name: str
    description: str
    category_id: int
    original_price: float
    normal_stock: int
    weight: float
    image_id_list: tuple[str, ...]
    dimension: Dimension = field(default_factory=Dimension)
    item_status: ItemStatus = ItemStatus.NORMAL
    attribute_list: tuple[dict[str, Any], ...] = ()
    brand: Brand | None = None
    pre_order: PreOrder | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the add_item JSON body."""
        payload: dict[str, Any] = {
            "item_name": self.item_name,
            "description": self.description,
            "category_id": self.category_id,
            "original_price": self.original_price,
            "normal_stock": self.normal_stock,
            "weight": self.weight,
            "dimension": {
                "package_length": self.dimension.package_length,
                "package_width": self.dimension.package_width,
                "package_height": self.dimension.package_height,
            },
            "item_status": self.item_status.value,
            "image": {"image_id_list": list(self.image_id_list)},
        }
        if self.attribute_list:
            payload["attribute_list"] = list(self.attribute_list)
        if self.brand is not None:
            payload["brand"] = {
                "brand_id": self.brand.brand_id,
                "original_brand_name": self.brand.original_brand_name,
            }
        if self.pre_order is not None:
            payload["pre_order"] = {
                "is_pre_order": self.pre_order.is_pre_order,
                "days_to_ship": self.pre_order.days_to_ship,
            }
        return payload


@dataclass(frozen=True, slots=True)
class UploadedImage:
    """An image stored in Shopee's media space."""

    image_id: str
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class CreatedItem:
    """Identity of a newly created listing."""

    item_id: int
    item_status: str
    create_time: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "item_id": self.item_id,
            "item_status": self.item_status,
            "create_time": self.create_time,
        }


@dataclass(frozen=True, slots=True)
class Category:
    """A node of Shopee's category tree."""

    category_id: int
    parent_category_id: int
    original_category_name: str
    display_category_name: str
    has_children: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Category:
        """Build a Category from an API dict."""
        return cls(
            category_id=int(data["category_id"]),
            parent_category_id=int(data.get("parent_category_id") or 0),
            original_category_name=data.get("original_category_name", ""),
            display_category_name=data.get("display_category_name", ""),
            has_children=bool(data.get("has_children", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "category_id": self.category_id,
            "parent_category_id": self.parent_category_id,
            "original_category_name": self.original_category_name,
            "display_category_name": self.display_category_name,
            "has_children": self.has_children,
        }
