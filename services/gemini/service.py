"""Gemini AI service for generating listing copy from product photos."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from core.config import ConfigurationError
from core.logging import get_logger
from core.result import Result, failure, success
from services.gemini.parsing import parse_generated_content
from services.gemini.prompts import (
    CATEGORY_LINE,
    KEYWORDS_LINE,
    PRODUCT_COPY_PROMPT,
    RESPONSE_FORMAT,
)
from services.gemini.types import DescriptionHints, GeneratedContent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from google.genai import Client

    from services.gemini.types import ImagePart

logger = get_logger(__name__)


class GeminiError(Exception):
    """Base exception for Gemini service errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize GeminiError."""
        super().__init__(message)
        self.message = message
        self.details = details


class GeminiService:
    """
    Service for writing listing copy with Google Gemini.

    Sends the merchant's photos with a copywriting prompt and turns the
    model's answer into a title, description and tags.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
    ) -> None:
        """
        Initialize Gemini service.

        Args:
            api_key: Google AI API key.
            model: Gemini model to use.

        Raises:
            ConfigurationError: If api_key is empty.
        """
        if not api_key:
            msg = "API key is required"
            raise ConfigurationError(msg)

        self._api_key = api_key
        self._model = model
        self._client: Client | None = None

    def _get_client(self) -> Client:
        """Get or create the Gemini client."""
        if self._client is None:
            from google import genai  # Lazy import to avoid import errors

            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def build_prompt(self, hints: DescriptionHints | None = None) -> str:
        """Build the copywriting prompt, including optional category and keywords."""
        prompt = PRODUCT_COPY_PROMPT
        if hints and hints.category:
            prompt += CATEGORY_LINE.format(category=hints.category)
        if hints and hints.keywords:
            prompt += KEYWORDS_LINE.format(keywords=", ".join(hints.keywords))
        return prompt + RESPONSE_FORMAT

    def _build_contents(self, prompt: str, images: Sequence[ImagePart]) -> list[Any]:
        """Build the request: prompt first, then one inline part per image."""
        from google.genai import types

        parts = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type) for image in images
        ]
        return [prompt, *parts]

    async def generate_product_description(
        self,
        images: Sequence[ImagePart],
        hints: DescriptionHints | None = None,
    ) -> Result[GeneratedContent, GeminiError]:
        """
        Generate listing copy from product photos.

        An answer that is not JSON is not a failure: the raw text becomes the
        description and the title is a placeholder for the merchant to edit.

        Args:
            images: Product photos.
            hints: Optional category and keywords.

        Returns:
            Result containing GeneratedContent or GeminiError.
        """
        if not images:
            return failure(GeminiError("At least one image is required"))

        prompt = self.build_prompt(hints)

        try:
            client = self._get_client()
            response = client.models.generate_content(
                model=self._model,
                contents=self._build_contents(prompt, images),
            )
        except Exception as e:
            logger.error("Gemini API error", error=str(e), image_count=len(images))
            return failure(GeminiError("Failed to generate description", details=str(e)))

        text = response.text
        if not text:
            logger.error("Empty response from Gemini")
            return failure(GeminiError("Empty response from AI"))

        parsed = parse_generated_content(text)
        if parsed.is_failure():
            logger.warning("Failed to parse AI response, using raw text", response=text[:500])

        content = parsed.unwrap_or_else(lambda _error: GeneratedContent.placeholder(text))
        logger.info(
            "Listing copy generated",
            image_count=len(images),
            tag_count=len(content.tags),
        )
        return success(content)
