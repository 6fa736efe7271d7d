"""Tests for Gemini AI service."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from core.config import ConfigurationError
from core.result import Failure, Success
from services.gemini.service import GeminiError, GeminiService
from services.gemini.types import PLACEHOLDER_TITLE, DescriptionHints, ImagePart

IMAGES = (ImagePart(data=b"jpeg-bytes", mime_type="image/jpeg"),)


def _response(text: str | None) -> MagicMock:
    response = MagicMock()
    response.text = text
    return response


class TestGeminiError:
    """Tests for GeminiError exception."""

    def test_create_with_details(self) -> None:
        """GeminiError can be created with message and details."""
        error = GeminiError("Test error", details="More info")

        assert error.message == "Test error"
        assert error.details == "More info"
        assert str(error) == "Test error"


class TestGeminiServiceInit:
    """Tests for GeminiService initialization."""

    def test_init_with_valid_key(self) -> None:
        """GeminiService can be initialized with a key and default model."""
        service = GeminiService(api_key="test-key")

        assert service._model == "gemini-2.0-flash"
        assert service._client is None

    def test_init_with_empty_key_raises(self) -> None:
        """An empty key should raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="API key is required"):
            GeminiService(api_key="")


class TestBuildPrompt:
    """Tests for prompt construction."""

    def test_without_hints(self) -> None:
        """The prompt should ask for the JSON response format."""
        prompt = GeminiService(api_key="k").build_prompt()

        assert "電商商品文案" in prompt
        assert '"title"' in prompt
        assert "商品類別" not in prompt

    def test_with_hints(self) -> None:
        """Category and keywords should be included when given."""
        prompt = GeminiService(api_key="k").build_prompt(
            DescriptionHints(category="耳機", keywords=("藍牙", "降噪"))
        )

        assert "商品類別：耳機" in prompt
        assert "關鍵字：藍牙, 降噪" in prompt
        assert prompt.index("商品類別") < prompt.index('"title"')


class TestGenerateProductDescription:
    """Tests for generate_product_description."""

    @pytest.fixture()
    def service(self) -> GeminiService:
        """Create a service for testing."""
        return GeminiService(api_key="test-key")

    @pytest.mark.asyncio
    async def test_fenced_json(self, service: GeminiService) -> None:
        """A fenced JSON answer should be parsed."""
        mock_client = MagicMock()
        mock_client.models.generate_content.return_value = _response(
            '```json\n{"title": "無線耳機", "description": "音質好", "tags": ["耳機"]}\n```'
        )

        with patch.object(service, "_get_client", return_value=mock_client):
            result = await service.generate_product_description(IMAGES)

        assert isinstance(result, Success)
        assert result.value.title == "無線耳機"
        assert result.value.tags == ("耳機",)
        call = mock_client.models.generate_content.call_args
        assert call.kwargs["model"] == "gemini-2.0-flash"
        contents = call.kwargs["contents"]
        assert isinstance(contents[0], str)
        assert len(contents) == 2

    @pytest.mark.asyncio
    async def test_unparsable_answer_uses_placeholder(self, service: GeminiService) -> None:
        """Free text should become the description with a placeholder title."""
        mock_client = MagicMock()
        mock_client.models.generate_content.return_value = _response("這是一副很棒的耳機")

        with patch.object(service, "_get_client", return_value=mock_client):
            result = await service.generate_product_description(IMAGES)

        assert isinstance(result, Success)
        assert result.value.title == PLACEHOLDER_TITLE
        assert result.value.description == "這是一副很棒的耳機"
        assert result.value.tags == ()

    @pytest.mark.asyncio
    async def test_no_images(self, service: GeminiService) -> None:
        """At least one image is required."""
        result = await service.generate_product_description([])

        assert isinstance(result, Failure)
        assert "image" in result.error.message

    @pytest.mark.asyncio
    async def test_api_error(self, service: GeminiService) -> None:
        """An exception from the SDK should become a GeminiError."""
        mock_client = MagicMock()
        mock_client.models.generate_content.side_effect = RuntimeError("quota exceeded")

        with patch.object(service, "_get_client", return_value=mock_client):
            result = await service.generate_product_description(IMAGES)

        assert isinstance(result, Failure)
        assert result.error.message == "Failed to generate description"
        assert result.error.details == "quota exceeded"

    @pytest.mark.asyncio
    async def test_empty_answer(self, service: GeminiService) -> None:
        """An empty answer should fail."""
        mock_client = MagicMock()
        mock_client.models.generate_content.return_value = _response("")

        with patch.object(service, "_get_client", return_value=mock_client):
            result = await service.generate_product_description(IMAGES)

        assert isinstance(result, Failure)
        assert result.error.message == "Empty response from AI"
