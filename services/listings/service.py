"""Listing service: photos to AI copy to a published Shopee listing."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from core.logging import get_logger
from core.result import Failure, Result, failure, success
from services.listings.types import (
    DEFAULT_PACKAGE_SIZE,
    DEFAULT_WEIGHT,
    ListingError,
    ListingErrorKind,
    ListingRequest,
)
from services.shopee.types import Brand, Dimension, PreOrder, ProductListing

if TYPE_CHECKING:
    from collections.abc import Sequence

    from services.gemini.service import GeminiService
    from services.gemini.types import DescriptionHints, GeneratedContent, ImagePart
    from services.shopee.client import ShopeeClient
    from services.shopee.errors import ShopeeError
    from services.shopee.types import Category, CreatedItem, ShopCredentials
    from services.storage import ImageStorage

logger = get_logger(__name__)


def _shopee_failure(message: str, error: ShopeeError) -> Failure[ListingError]:
    return failure(
        ListingError(
            kind=ListingErrorKind.SHOPEE,
            message=message,
            details=error.message,
            cause=error,
        )
    )


class ListingService:
    """
    Sequences image reads, AI copywriting and Shopee calls.

    Holds no per-shop state; shop credentials are passed to each call.
    """

    def __init__(
        self,
        client: ShopeeClient,
        storage: ImageStorage,
        describer: GeminiService | None = None,
    ) -> None:
        """
        Initialize the listing service.

        Args:
            client: Shopee API client.
            storage: Local image storage.
            describer: Gemini service; AI copy is unavailable without it.
        """
        self._client = client
        self._storage = storage
        self._describer = describer

    def _read_images(self, image_ids: Sequence[str]) -> Result[list[ImagePart], ListingError]:
        """Read every image, failing on the first one that cannot be read."""
        images: list[ImagePart] = []
        for image_id in image_ids:
            result = self._storage.open_image(image_id)
            if isinstance(result, Failure):
                return failure(
                    ListingError(
                        kind=ListingErrorKind.IMAGE,
                        message=result.error.message,
                        details=image_id,
                        cause=result.error,
                    )
                )
            images.append(result.value)
        return success(images)

    async def describe(
        self,
        image_ids: Sequence[str],
        hints: DescriptionHints | None = None,
    ) -> Result[GeneratedContent, ListingError]:
        """
        Generate listing copy for uploaded images.

        Args:
            image_ids: Local image IDs.
            hints: Optional category and keywords.

        Returns:
            Result containing GeneratedContent or ListingError.
        """
        if not image_ids:
            return failure(ListingError(ListingErrorKind.VALIDATION, "No images provided"))
        if self._describer is None:
            return failure(
                ListingError(ListingErrorKind.NOT_CONFIGURED, "AI description is not configured")
            )

        images = self._read_images(image_ids)
        if isinstance(images, Failure):
            return images

        result = await self._describer.generate_product_description(images.value, hints)
        return result.map_error(
            lambda e: ListingError(
                kind=ListingErrorKind.AI,
                message=e.message,
                details=e.details,
                cause=e,
            )
        )

    async def _upload_one(
        self,
        credentials: ShopCredentials,
        image_id: str,
        image: ImagePart,
    ) -> Result[str, ListingError]:
        result = await self._client.upload_image(
            credentials,
            image.data,
            content_type=image.mime_type,
            filename=image_id,
        )
        if isinstance(result, Failure):
            logger.warning("Image upload failed", image_id=image_id, error=str(result.error))
            return failure(
                ListingError(
                    kind=ListingErrorKind.UPLOAD,
                    message=f"Failed to upload image {image_id}",
                    details=result.error.message,
                    cause=result.error,
                )
            )
        return success(result.value.image_id)

    async def upload_images(
        self,
        credentials: ShopCredentials,
        image_ids: Sequence[str],
    ) -> Result[tuple[str, ...], ListingError]:
        """
        Upload images to Shopee concurrently, one request per image.

        All or nothing: if any upload fails the whole operation fails and
        no partial list of Shopee image IDs is returned. Images are not
        cached, so publishing again uploads them again.

        Args:
            credentials: Access token and shop ID.
            image_ids: Local image IDs, in display order.

        Returns:
            Result containing Shopee image IDs in the same order, or ListingError.
        """
        images = self._read_images(image_ids)
        if isinstance(images, Failure):
            return images

        results = await asyncio.gather(
            *(
                self._upload_one(credentials, image_id, image)
                for image_id, image in zip(image_ids, images.value, strict=True)
            )
        )

        shopee_ids: list[str] = []
        for result in results:
            if isinstance(result, Failure):
                return result
            shopee_ids.append(result.value)
        return success(tuple(shopee_ids))

    def build_listing(
        self,
        request: ListingRequest,
        image_id_list: Sequence[str],
    ) -> ProductListing:
        """Build the add_item payload, filling in shipping defaults."""
        brand = Brand(original_brand_name=request.brand_name) if request.brand_name else None
        pre_order = (
            PreOrder(days_to_ship=request.days_to_ship)
            if request.pre_order and request.days_to_ship
            else None
        )
        return ProductListing(
            item_name=request.title,
            description=request.description,
            category_id=request.category_id,
            original_price=request.original_price or request.price,
            normal_stock=request.stock,
            weight=request.weight or DEFAULT_WEIGHT,
            image_id_list=tuple(image_id_list),
            dimension=Dimension(
                package_length=request.package_length or DEFAULT_PACKAGE_SIZE,
                package_width=request.package_width or DEFAULT_PACKAGE_SIZE,
                package_height=request.package_height or DEFAULT_PACKAGE_SIZE,
            ),
            attribute_list=request.attribute_list,
            brand=brand,
            pre_order=pre_order,
        )

    async def publish(
        self,
        credentials: ShopCredentials,
        request: ListingRequest,
    ) -> Result[CreatedItem, ListingError]:
        """
        Publish a listing: upload its images, then create the item.

        Args:
            credentials: Access token and shop ID.
            request: The merchant's listing.

        Returns:
            Result containing the CreatedItem or ListingError.
        """
        missing = request.missing_fields()
        if missing:
            return failure(
                ListingError(
                    kind=ListingErrorKind.VALIDATION,
                    message="Missing required fields",
                    details=", ".join(missing),
                )
            )

        uploaded = await self.upload_images(credentials, request.image_ids)
        if isinstance(uploaded, Failure):
            return uploaded

        listing = self.build_listing(request, uploaded.value)
        created = await self._client.create_product(credentials, listing)
        if isinstance(created, Failure):
            return _shopee_failure("Failed to create product", created.error)

        logger.info(
            "Listing published",
            item_id=created.value.item_id,
            image_count=len(uploaded.value),
        )
        return success(created.value)

    async def categories(
        self,
        credentials: ShopCredentials,
        language: str = "zh-hant",
    ) -> Result[tuple[Category, ...], ListingError]:
        """Get the category list for the category picker."""
        result = await self._client.get_categories(credentials, language=language)
        if isinstance(result, Failure):
            return _shopee_failure("Failed to get categories", result.error)
        return success(result.value)

    async def category_attributes(
        self,
        credentials: ShopCredentials,
        category_id: int,
    ) -> Result[dict[str, Any], ListingError]:
        """Get the attribute schema of a category."""
        result = await self._client.get_category_attributes(credentials, category_id)
        if isinstance(result, Failure):
            return _shopee_failure("Failed to get category attributes", result.error)
        return success(result.value)
