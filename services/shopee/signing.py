"""
Request signing for the Shopee Open Platform (API v2).

Every call carries ``partner_id``, ``timestamp`` and ``sign`` in the query
string. ``sign`` is an HMAC-SHA256, keyed by the partner key, over the
concatenation (no separators) of:

    partner_id + path + timestamp [+ access_token + shop_id]

Shop-level calls include the access token and shop ID; the authorization
URL and the two token endpoints are signed before those exist and leave
them out. Shopee rejects the request with ``error_sign`` if the base string
differs by a single character, so the order here must not change.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass, field

from services.shopee.types import PartnerIdentity, ShopCredentials


def current_timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


def sign(
    path: str,
    timestamp: int,
    partner_id: int,
    partner_key: bytes | str,
    access_token: str | None = None,
    shop_id: int | None = None,
) -> str:
    """
    Compute the Shopee request signature.

    Args:
        path: API path, e.g. ``/api/v2/product/add_item``.
        timestamp: Unix timestamp sent alongside the signature.
        partner_id: Partner ID.
        partner_key: Partner key (HMAC key).
        access_token: Access token, for shop-level calls.
        shop_id: Shop ID, for shop-level calls.

    Returns:
        Lowercase hex digest.
    """
    base_string = f"{partner_id}{path}{timestamp}"
    if access_token is not None:
        base_string += access_token
    if shop_id is not None:
        base_string += str(shop_id)

    key = partner_key.encode("utf-8") if isinstance(partner_key, str) else partner_key
    return hmac.new(key, base_string.encode("utf-8"), hashlib.sha256).hexdigest()


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """
    The authentication part of one API call.

    Computed fresh per call and never stored. ``timestamp`` is the value
    baked into ``signature``; Shopee enforces the allowed clock skew.
    """

    path: str
    partner_id: int
    timestamp: int
    signature: str
    access_token: str | None = field(default=None, repr=False)
    shop_id: int | None = None

    @classmethod
    def public(
        cls,
        identity: PartnerIdentity,
        path: str,
        timestamp: int | None = None,
    ) -> SignedRequest:
        """Sign a call made without shop credentials (auth URL, token endpoints)."""
        ts = current_timestamp() if timestamp is None else timestamp
        return cls(
            path=path,
            partner_id=identity.partner_id,
            timestamp=ts,
            signature=sign(path, ts, identity.partner_id, identity.partner_key),
        )

    @classmethod
    def for_shop(
        cls,
        identity: PartnerIdentity,
        path: str,
        credentials: ShopCredentials,
        timestamp: int | None = None,
    ) -> SignedRequest:
        """Sign a shop-level call."""
        ts = current_timestamp() if timestamp is None else timestamp
        return cls(
            path=path,
            partner_id=identity.partner_id,
            timestamp=ts,
            signature=sign(
                path,
                ts,
                identity.partner_id,
                identity.partner_key,
                access_token=credentials.access_token,
                shop_id=credentials.shop_id,
            ),
            access_token=credentials.access_token,
            shop_id=credentials.shop_id,
        )

    @property
    def query_params(self) -> dict[str, str]:
        """
        Return the common query parameters.

        Shop-level: ``partner_id, timestamp, access_token, shop_id, sign``.
        Public: ``partner_id, timestamp, sign``.
        """
        params = {
            "partner_id": str(self.partner_id),
            "timestamp": str(self.timestamp),
        }
        if self.access_token is not None and self.shop_id is not None:
            params["access_token"] = self.access_token
            params["shop_id"] = str(self.shop_id)
        params["sign"] = self.signature
        return params
