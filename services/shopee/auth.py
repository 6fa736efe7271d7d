"""
Shopee shop authorization (OAuth) and token exchange.

The flow has three states from the caller's point of view:

    Unauthorized --get_auth_url--> (merchant approves on Shopee)
    PendingCode  --get_access_token(code, shop_id)--> Authorized
    Authorized   --refresh_access_token--> Authorized (new tokens)

When should tokens be refreshed? That's up to the caller. Nothing here
tracks expiry or schedules refreshes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import httpx

from core.logging import get_logger
from core.result import Failure, Result, failure, success
from services.shopee.client import API_BASE_URL, DEFAULT_TIMEOUT, parse_api_response
from services.shopee.errors import AuthExchangeError, ShopeeError
from services.shopee.signing import SignedRequest
from services.shopee.types import TokenPair

if TYPE_CHECKING:
    from services.shopee.types import PartnerIdentity

logger = get_logger(__name__)

AUTH_PARTNER_PATH = "/api/v2/shop/auth_partner"
TOKEN_GET_PATH = "/api/v2/auth/token/get"
TOKEN_REFRESH_PATH = "/api/v2/auth/access_token/get"


class ShopeeAuth:
    """
    Builds the authorization URL and exchanges codes/refresh tokens.

    Uses the same signature as ShopeeClient, signed without access token or
    shop ID. Every failure is reported as an AuthExchangeError.
    """

    def __init__(
        self,
        identity: PartnerIdentity,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the token exchanger.

        Args:
            identity: Partner ID and key.
            base_url: API host.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.identity = identity
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        """Create an HTTP client bound to the Shopee host."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    def get_auth_url(self, redirect_url: str, timestamp: int | None = None) -> str:
        """
        Build the URL the merchant is sent to for approving this app.

        No network call. Shopee redirects back to ``redirect_url`` with
        ``code`` and ``shop_id`` query parameters.

        Args:
            redirect_url: Callback URL.
            timestamp: Signing time; defaults to now.

        Returns:
            Absolute authorization URL.
        """
        signed = SignedRequest.public(self.identity, AUTH_PARTNER_PATH, timestamp)
        query = urlencode({**signed.query_params, "redirect": redirect_url})
        return f"{self.base_url}{AUTH_PARTNER_PATH}?{query}"

    async def get_access_token(self, code: str, shop_id: int) -> Result[TokenPair, ShopeeError]:
        """
        Exchange an authorization code for tokens.

        Args:
            code: The ``code`` Shopee passed to the callback.
            shop_id: The ``shop_id`` Shopee passed to the callback.

        Returns:
            Result containing the TokenPair or an AuthExchangeError.
        """
        if not code or not code.strip():
            return failure(
                AuthExchangeError(path=TOKEN_GET_PATH, message="Authorization code is empty")
            )

        return await self._exchange(
            TOKEN_GET_PATH,
            {"code": code.strip(), "shop_id": shop_id, "partner_id": self.identity.partner_id},
            shop_id,
        )

    async def refresh_access_token(
        self,
        refresh_token: str,
        shop_id: int,
    ) -> Result[TokenPair, ShopeeError]:
        """
        Obtain a new access token with a refresh token.

        Args:
            refresh_token: Refresh token from a previous exchange.
            shop_id: Shop the token belongs to.

        Returns:
            Result containing the new TokenPair or an AuthExchangeError.
        """
        if not refresh_token or not refresh_token.strip():
            return failure(
                AuthExchangeError(path=TOKEN_REFRESH_PATH, message="Refresh token is empty")
            )

        return await self._exchange(
            TOKEN_REFRESH_PATH,
            {
                "refresh_token": refresh_token.strip(),
                "shop_id": shop_id,
                "partner_id": self.identity.partner_id,
            },
            shop_id,
        )

    async def _exchange(
        self,
        path: str,
        body: dict[str, Any],
        shop_id: int,
    ) -> Result[TokenPair, ShopeeError]:
        """POST to a token endpoint and build the TokenPair."""
        signed = SignedRequest.public(self.identity, path)
        logger.info("Exchanging Shopee token", path=path, shop_id=shop_id)

        try:
            async with self._get_client() as client:
                response = await client.post(
                    path,
                    params=signed.query_params,
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            logger.error("Shopee token request error", path=path, error=str(e))
            return failure(
                AuthExchangeError(path=path, message="Token request failed", details=str(e))
            )

        result = parse_api_response(path, response)
        if isinstance(result, Failure):
            error = result.error
            return failure(
                AuthExchangeError(
                    path=path,
                    message=error.message,
                    details=error.details,
                    status_code=error.status_code,
                    remote_code=error.remote_code,
                    request_id=error.request_id,
                )
            )

        try:
            tokens = TokenPair.from_response(result.value, shop_id)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Invalid Shopee token response", path=path, error=str(e))
            return failure(
                AuthExchangeError(path=path, message="Invalid token response", details=str(e))
            )

        logger.info("Shopee token obtained", shop_id=tokens.shop_id, expire_in=tokens.expire_in)
        return success(tokens)
