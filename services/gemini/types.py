"""Types for Gemini AI service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Shown in the title field when the model's answer could not be parsed
PLACEHOLDER_TITLE = "請編輯商品標題"


@dataclass(frozen=True, slots=True)
class ImagePart:
    """
    One product photo sent to the model.

    Attributes:
        data: Raw image bytes.
        mime_type: Image MIME type.
    """

    data: bytes = field(repr=False)
    mime_type: str


@dataclass(frozen=True, slots=True)
class DescriptionHints:
    """
    Optional merchant input that steers the generated copy.

    Attributes:
        category: Free-text product category.
        keywords: Keywords the copy should mention.
    """

    category: str | None = None
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class GeneratedContent:
    """
    Listing copy produced by the model.

    Attributes:
        title: Listing title.
        description: Listing description.
        tags: Suggested tags.
        suggested_category: Category suggested by the model, if any.
    """

    title: str
    description: str
    tags: tuple[str, ...] = ()
    suggested_category: str | None = None

    @classmethod
    def placeholder(cls, raw_text: str) -> GeneratedContent:
        """Fallback used when the model did not answer with JSON."""
        return cls(title=PLACEHOLDER_TITLE, description=raw_text, tags=())

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        data: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "tags": list(self.tags),
        }
        if self.suggested_category:
            data["suggested_category"] = self.suggested_category
        return data
