"""API serializers for uploads, AI copy and listing creation."""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from services.gemini.types import DescriptionHints
from services.listings.types import ListingRequest


class GenerateDescriptionSerializer(serializers.Serializer):
    """Input for AI copy generation."""

    imageIds = serializers.ListField(  # noqa: N815
        child=serializers.CharField(max_length=255),
        source="image_ids",
        allow_empty=False,
        help_text="IDs returned by the upload endpoint",
    )
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    keywords = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        default=list,
    )

    def to_hints(self) -> DescriptionHints:
        """Build DescriptionHints from validated data."""
        data = self.validated_data
        return DescriptionHints(
            category=data.get("category") or None,
            keywords=tuple(data.get("keywords", [])),
        )


class CreateProductSerializer(serializers.Serializer):
    """Input for listing creation."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    category_id = serializers.IntegerField(min_value=1)
    price = serializers.FloatField(min_value=0)
    original_price = serializers.FloatField(min_value=0, required=False, allow_null=True)
    stock = serializers.IntegerField(min_value=0)
    weight = serializers.FloatField(min_value=0, required=False, allow_null=True)
    package_length = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    package_width = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    package_height = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    imageIds = serializers.ListField(  # noqa: N815
        child=serializers.CharField(max_length=255),
        source="image_ids",
        allow_empty=False,
    )
    brand_name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    pre_order = serializers.BooleanField(required=False, default=False)
    days_to_ship = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    attribute_list = serializers.ListField(
        child=serializers.DictField(),
        required=False,
        default=list,
    )

    def to_request(self) -> ListingRequest:
        """Build a ListingRequest from validated data."""
        data: dict[str, Any] = self.validated_data
        return ListingRequest(
            title=data["title"],
            description=data["description"],
            category_id=data["category_id"],
            price=data["price"],
            stock=data["stock"],
            image_ids=tuple(data["image_ids"]),
            original_price=data.get("original_price"),
            weight=data.get("weight"),
            package_length=data.get("package_length"),
            package_width=data.get("package_width"),
            package_height=data.get("package_height"),
            brand_name=data.get("brand_name") or None,
            pre_order=data.get("pre_order", False),
            days_to_ship=data.get("days_to_ship"),
            attribute_list=tuple(data.get("attribute_list", [])),
        )


class UploadedFileSerializer(serializers.Serializer):
    """A stored upload, as returned to the browser."""

    id = serializers.CharField()
    url = serializers.CharField()
    name = serializers.CharField()
    size = serializers.IntegerField()
    type = serializers.CharField()


class CategorySerializer(serializers.Serializer):
    """A Shopee category."""

    category_id = serializers.IntegerField()
    parent_category_id = serializers.IntegerField()
    original_category_name = serializers.CharField()
    display_category_name = serializers.CharField()
    has_children = serializers.BooleanField()
