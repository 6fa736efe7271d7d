"""Shop session storage in cookies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from services.shopee.types import ShopCredentials

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse

    from services.shopee.types import TokenPair

ACCESS_TOKEN_KEY = "shopee_access_token"
REFRESH_TOKEN_KEY = "shopee_refresh_token"
SHOP_ID_KEY = "shopee_shop_id"

# Shopee refresh tokens are valid for 30 days
REFRESH_TOKEN_TTL = 30 * 24 * 60 * 60


@runtime_checkable
class SessionStore(Protocol):
    """Key-value store associating a Shopee session with the caller."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None."""
        ...

    def set(self, key: str, value: str, ttl: int) -> None:
        """Store a value for ``ttl`` seconds."""
        ...


class CookieSessionStore:
    """
    SessionStore backed by HTTP cookies.

    Reads come from the request; writes go to the response as httponly,
    SameSite=Lax cookies. Values written during the request are visible to
    later reads.
    """

    def __init__(
        self,
        request: HttpRequest,
        response: HttpResponse | None = None,
        *,
        secure: bool = False,
    ) -> None:
        """
        Initialize the store.

        Args:
            request: Incoming request.
            response: Outgoing response; required for writes.
            secure: Mark cookies Secure (production).
        """
        self._request = request
        self._response = response
        self._secure = secure
        self._written: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        """Return the cookie value, or None."""
        if key in self._written:
            return self._written[key]
        return self._request.COOKIES.get(key) or None

    def set(self, key: str, value: str, ttl: int) -> None:
        """
        Set a cookie on the response.

        Raises:
            RuntimeError: If the store was created without a response.
        """
        if self._response is None:
            msg = "CookieSessionStore is read-only without a response"
            raise RuntimeError(msg)
        self._response.set_cookie(
            key,
            value,
            max_age=ttl,
            httponly=True,
            secure=self._secure,
            samesite="Lax",
        )
        self._written[key] = value


class ShopSessionCookies:
    """The Shopee session of the current caller, on top of a SessionStore."""

    def __init__(self, store: SessionStore) -> None:
        """Initialize with the backing store."""
        self._store = store

    def _shop_id(self) -> int | None:
        raw = self._store.get(SHOP_ID_KEY)
        if raw is None or not raw.isdigit():
            return None
        return int(raw)

    def load(self) -> ShopCredentials | None:
        """Return the credentials for signed calls, or None when not authorized."""
        access_token = self._store.get(ACCESS_TOKEN_KEY)
        shop_id = self._shop_id()
        if not access_token or shop_id is None:
            return None
        return ShopCredentials(access_token=access_token, shop_id=shop_id)

    def refresh_token(self) -> tuple[str, int] | None:
        """Return (refresh_token, shop_id), or None when there is nothing to refresh."""
        refresh_token = self._store.get(REFRESH_TOKEN_KEY)
        shop_id = self._shop_id()
        if not refresh_token or shop_id is None:
            return None
        return refresh_token, shop_id

    def save(self, tokens: TokenPair) -> None:
        """Store a token pair; the access token lives as long as Shopee says."""
        self._store.set(ACCESS_TOKEN_KEY, tokens.access_token, tokens.expire_in)
        self._store.set(REFRESH_TOKEN_KEY, tokens.refresh_token, REFRESH_TOKEN_TTL)
        self._store.set(SHOP_ID_KEY, str(tokens.shop_id), REFRESH_TOKEN_TTL)

    @property
    def is_authorized(self) -> bool:
        """Check if an access token and shop ID are present."""
        return self.load() is not None
