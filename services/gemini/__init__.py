"""Gemini AI service package."""

from services.gemini.parsing import ContentParseError, parse_generated_content
from services.gemini.service import GeminiError, GeminiService
from services.gemini.types import (
    DescriptionHints,
    GeneratedContent,
    ImagePart,
)

__all__ = [
    "ContentParseError",
    "DescriptionHints",
    "GeminiError",
    "GeminiService",
    "GeneratedContent",
    "ImagePart",
    "parse_generated_content",
]
