"""Extraction of the JSON object embedded in the model's answer."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from core.result import Result, failure, success
from services.gemini.types import GeneratedContent

# First fenced block, preferring one tagged as json
_JSON_FENCE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL)
_ANY_FENCE = re.compile(r"```[\w-]*\s*(.*?)\s*```", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ContentParseError:
    """The model's answer did not contain a usable JSON object."""

    message: str
    raw_text: str

    def __str__(self) -> str:
        """Return the message."""
        return self.message


def _load_object(text: str) -> dict[str, Any] | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _extract_object(text: str) -> dict[str, Any] | None:
    """Try the whole text, then the first fenced block."""
    stripped = text.strip()
    data = _load_object(stripped)
    if data is not None:
        return data

    match = _JSON_FENCE.search(stripped) or _ANY_FENCE.search(stripped)
    if match:
        return _load_object(match.group(1))
    return None


def _as_tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(tag.strip() for tag in value.split(",") if tag.strip())
    if isinstance(value, list | tuple):
        return tuple(str(tag) for tag in value if tag is not None and str(tag).strip())
    return ()


def parse_generated_content(text: str) -> Result[GeneratedContent, ContentParseError]:
    """
    Parse listing copy from the model's free-form answer.

    Accepts bare JSON and JSON inside a Markdown code fence. Missing fields
    become empty values.

    Args:
        text: The model's answer.

    Returns:
        Result containing GeneratedContent, or ContentParseError when no
        JSON object could be found.
    """
    data = _extract_object(text or "")
    if data is None:
        return failure(ContentParseError("No JSON object in model response", raw_text=text))

    suggested = data.get("suggested_category")
    return success(
        GeneratedContent(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            tags=_as_tags(data.get("tags")),
            suggested_category=str(suggested) if suggested else None,
        )
    )
