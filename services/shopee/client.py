"""HTTP client for the Shopee Open Platform partner API (v2)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

import httpx

from core.logging import get_logger
from core.result import Failure, Result, failure, success
from services.shopee.errors import (
    ErrorPhase,
    ParseError,
    RemoteApiError,
    ShopeeError,
)
from services.shopee.signing import SignedRequest
from services.shopee.types import Category, CreatedItem, UploadedImage

if TYPE_CHECKING:
    from services.shopee.types import PartnerIdentity, ProductListing, ShopCredentials

logger = get_logger(__name__)

# Shopee API host (live environment)
API_BASE_URL = "https://partner.shopeemobile.com"

# Default timeout for API requests
DEFAULT_TIMEOUT = 30.0

UPLOAD_IMAGE_PATH = "/api/v2/media_space/upload_image"
ADD_ITEM_PATH = "/api/v2/product/add_item"
GET_CATEGORY_PATH = "/api/v2/product/get_category"
GET_ATTRIBUTES_PATH = "/api/v2/product/get_attributes"

HttpMethod = Literal["GET", "POST"]


def parse_api_response(path: str, response: httpx.Response) -> Result[dict[str, Any], ShopeeError]:
    """
    Convert a Shopee HTTP response to a Result.

    Shopee reports business errors inside 2xx responses, so a successful
    status is not enough: a non-empty ``error`` field also fails the call.
    """
    if not response.is_success:
        logger.error(
            "Shopee API error",
            path=path,
            status_code=response.status_code,
            response_text=response.text[:500],
        )
        return failure(
            RemoteApiError(
                path=path,
                phase=ErrorPhase.TRANSPORT,
                message=f"API returned status {response.status_code}",
                details=response.text,
                status_code=response.status_code,
            )
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Failed to parse Shopee response", path=path, error=str(e))
        return failure(ParseError(path=path, details=str(e)))

    if not isinstance(data, dict):
        return failure(ParseError(path=path, details="Response body is not a JSON object"))

    if data.get("error"):
        logger.warning(
            "Shopee rejected request",
            path=path,
            remote_code=data["error"],
            remote_message=data.get("message"),
            request_id=data.get("request_id"),
        )
        return failure(
            RemoteApiError(
                path=path,
                phase=ErrorPhase.APPLICATION,
                message=data.get("message") or str(data["error"]),
                status_code=response.status_code,
                remote_code=str(data["error"]),
                request_id=data.get("request_id"),
            )
        )

    return success(data)


def response_object(path: str, data: dict[str, Any]) -> Result[dict[str, Any], ShopeeError]:
    """Return the ``response`` object of a successful call; absent counts as empty."""
    response = data.get("response") or {}
    if not isinstance(response, dict):
        return failure(ParseError(path=path, details="response is not a JSON object"))
    return success(response)


class ShopeeClient:
    """
    Signed HTTP client for shop-level Shopee API calls.

    One instance per partner identity, shared by every request. It holds no
    shop state: the access token and shop ID are passed to each call, and
    every call computes its own timestamp and signature, so concurrent calls
    never interfere.

    Attributes:
        identity: Partner ID and key.
        base_url: API host.
        timeout: Default request timeout in seconds.
    """

    def __init__(
        self,
        identity: PartnerIdentity,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Shopee client.

        Args:
            identity: Partner ID and key.
            base_url: API host.
            timeout: Default request timeout in seconds.
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

    async def _send(
        self,
        signed: SignedRequest,
        method: HttpMethod,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        timeout: float | None = None,
    ) -> Result[dict[str, Any], ShopeeError]:
        """Send one signed request. Never retried: add_item is not idempotent."""
        query: dict[str, Any] = {**signed.query_params, **(params or {})}
        headers = {"Content-Type": "application/json"} if json is not None else None

        try:
            async with self._get_client() as client:
                response = await client.request(
                    method,
                    signed.path,
                    params=query,
                    json=json,
                    files=files,
                    headers=headers,
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
                )
        except httpx.TimeoutException:
            logger.error("Shopee request timeout", path=signed.path)
            return failure(
                RemoteApiError(
                    path=signed.path,
                    phase=ErrorPhase.TRANSPORT,
                    message="Request timeout",
                )
            )
        except httpx.RequestError as e:
            logger.error("Shopee request error", path=signed.path, error=str(e))
            return failure(
                RemoteApiError(
                    path=signed.path,
                    phase=ErrorPhase.TRANSPORT,
                    message="Request failed",
                    details=str(e),
                )
            )

        return parse_api_response(signed.path, response)

    async def call(
        self,
        path: str,
        method: HttpMethod,
        credentials: ShopCredentials,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Result[dict[str, Any], ShopeeError]:
        """
        Make an authenticated shop-level API call.

        Args:
            path: API path.
            method: HTTP method.
            credentials: Access token and shop ID.
            body: JSON body (sent with ``Content-Type: application/json``).
            params: Operation-specific query parameters, added after the
                common ``partner_id, timestamp, access_token, shop_id, sign``.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Result containing the parsed JSON body or ShopeeError.
        """
        signed = SignedRequest.for_shop(self.identity, path, credentials)
        logger.info("Calling Shopee API", path=path, method=method, shop_id=credentials.shop_id)
        return await self._send(signed, method, params=params, json=body, timeout=timeout)

    async def upload_image(
        self,
        credentials: ShopCredentials,
        image: bytes,
        content_type: str = "image/jpeg",
        filename: str = "image.jpg",
        timeout: float | None = None,
    ) -> Result[UploadedImage, ShopeeError]:
        """
        Upload an image to Shopee's media space.

        The image is sent as a single multipart part named ``image``. The
        content type defaults to ``image/jpeg`` whatever the real format is;
        pass the actual type when it is known.

        Args:
            credentials: Access token and shop ID.
            image: Raw image bytes.
            content_type: MIME type declared for the part.
            filename: File name declared for the part.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Result containing the UploadedImage or ShopeeError.
        """
        signed = SignedRequest.for_shop(self.identity, UPLOAD_IMAGE_PATH, credentials)
        logger.info(
            "Uploading image to Shopee",
            shop_id=credentials.shop_id,
            size=len(image),
            content_type=content_type,
        )

        result = await self._send(
            signed,
            "POST",
            files={"image": (filename, image, content_type)},
            timeout=timeout,
        )
        if isinstance(result, Failure):
            return result

        return self._build_uploaded_image(result.value)

    def _build_uploaded_image(self, data: dict[str, Any]) -> Result[UploadedImage, ShopeeError]:
        """Extract the image ID from an upload_image response."""
        response = response_object(UPLOAD_IMAGE_PATH, data)
        if isinstance(response, Failure):
            return response

        info = response.value.get("image_info") or response.value
        if not isinstance(info, dict):
            return failure(
                ParseError(path=UPLOAD_IMAGE_PATH, message="Upload response has no image_info")
            )

        image_id = info.get("image_id")
        if not image_id:
            return failure(
                ParseError(path=UPLOAD_IMAGE_PATH, message="Upload response has no image_id")
            )

        image_url = info.get("image_url")
        if image_url is None:
            url_list = info.get("image_url_list")
            first = url_list[0] if isinstance(url_list, list) and url_list else None
            image_url = first.get("image_url") if isinstance(first, dict) else None

        return success(UploadedImage(image_id=str(image_id), image_url=image_url))

    async def create_product(
        self,
        credentials: ShopCredentials,
        listing: ProductListing,
        timeout: float | None = None,
    ) -> Result[CreatedItem, ShopeeError]:
        """
        Create a listing.

        Args:
            credentials: Access token and shop ID.
            listing: The product payload.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Result containing the CreatedItem or ShopeeError.
        """
        result = await self.call(
            ADD_ITEM_PATH,
            "POST",
            credentials,
            body=listing.to_payload(),
            timeout=timeout,
        )
        if isinstance(result, Failure):
            return result

        response = response_object(ADD_ITEM_PATH, result.value)
        if isinstance(response, Failure):
            return response

        try:
            item = CreatedItem(
                item_id=int(response.value["item_id"]),
                item_status=str(response.value.get("item_status", "")),
                create_time=response.value.get("create_time"),
            )
        except (KeyError, TypeError, ValueError) as e:
            return failure(
                ParseError(path=ADD_ITEM_PATH, message="Invalid add_item response", details=str(e))
            )

        logger.info("Shopee item created", item_id=item.item_id, shop_id=credentials.shop_id)
        return success(item)

    async def get_categories(
        self,
        credentials: ShopCredentials,
        language: str = "zh-hant",
        timeout: float | None = None,
    ) -> Result[tuple[Category, ...], ShopeeError]:
        """
        Get the shop's category tree as a flat list, in Shopee's order.

        Args:
            credentials: Access token and shop ID.
            language: Display language of category names.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Result containing the categories or ShopeeError.
        """
        result = await self.call(
            GET_CATEGORY_PATH,
            "GET",
            credentials,
            params={"language": language},
            timeout=timeout,
        )
        if isinstance(result, Failure):
            return result

        response = response_object(GET_CATEGORY_PATH, result.value)
        if isinstance(response, Failure):
            return response

        try:
            raw = response.value.get("category_list") or []
            categories = tuple(Category.from_dict(item) for item in raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            return failure(
                ParseError(path=GET_CATEGORY_PATH, message="Invalid category list", details=str(e))
            )
        return success(categories)

    async def get_category_attributes(
        self,
        credentials: ShopCredentials,
        category_id: int,
        language: str | None = None,
        timeout: float | None = None,
    ) -> Result[dict[str, Any], ShopeeError]:
        """
        Get the attribute schema of a category.

        Args:
            credentials: Access token and shop ID.
            category_id: Shopee category ID.
            language: Optional display language.
            timeout: Per-call timeout overriding the client default.

        Returns:
            Result containing the ``response`` object or ShopeeError.
        """
        params: dict[str, Any] = {"category_id": category_id}
        if language:
            params["language"] = language

        result = await self.call(
            GET_ATTRIBUTES_PATH,
            "GET",
            credentials,
            params=params,
            timeout=timeout,
        )
        if isinstance(result, Failure):
            return result
        return response_object(GET_ATTRIBUTES_PATH, result.value)
