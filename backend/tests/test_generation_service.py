"""
Unit tests for request validation and the generate flow.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from core.errors import ConfigurationError, ExtractionError, ValidationError
from models.generate import ImageSource
from services.generation_service import GenerationService
from services.openrouter_service import OpenRouterService


@pytest.mark.unit
class TestParseRequest:
    """Tests for body validation"""

    def test_valid_body(self, valid_body):
        request = GenerationService.parse_request(valid_body)

        assert request.image == valid_body["image"]
        assert request.prompt == valid_body["prompt"]

    @pytest.mark.parametrize("body", [
        {},
        {"image": "data:image/png;base64,AAAA"},
        {"prompt": "make it snow"},
        {"image": "", "prompt": "make it snow"},
        {"image": "data:image/png;base64,AAAA", "prompt": ""},
        {"image": "data:image/png;base64,AAAA", "prompt": "   "},
        {"image": 123, "prompt": "make it snow"},
        None,
        ["image", "prompt"],
    ])
    def test_missing_fields(self, body):
        """Test every incomplete body raises the same validation error"""
        with pytest.raises(ValidationError) as exc_info:
            GenerationService.parse_request(body)

        assert exc_info.value.message == "Missing image or prompt"
        assert exc_info.value.status_code == 400


@pytest.mark.unit
@pytest.mark.asyncio
class TestGenerate:
    """Tests for GenerationService.generate"""

    async def test_returns_extracted_image(self, settings, valid_body, content_image_message):
        provider = MagicMock(spec=OpenRouterService)
        provider.complete = AsyncMock(return_value=content_image_message)

        extracted = await GenerationService(settings, provider).generate(valid_body)

        assert extracted.url == "https://x/b.png"
        assert extracted.source == ImageSource.CONTENT_IMAGE_PART
        provider.complete.assert_awaited_once_with(valid_body["image"], valid_body["prompt"])

    async def test_no_image_raises_extraction_error(self, settings, valid_body, empty_message):
        provider = MagicMock(spec=OpenRouterService)
        provider.complete = AsyncMock(return_value=empty_message)

        with pytest.raises(ExtractionError) as exc_info:
            await GenerationService(settings, provider).generate(valid_body)

        assert exc_info.value.to_payload() == {
            "error": "No image returned from model",
            "rawMessage": empty_message
        }

    async def test_missing_message_omits_raw_message(self, settings, valid_body):
        """Test rawMessage is left out when the provider sent no message"""
        provider = MagicMock(spec=OpenRouterService)
        provider.complete = AsyncMock(return_value=None)

        with pytest.raises(ExtractionError) as exc_info:
            await GenerationService(settings, provider).generate(valid_body)

        assert exc_info.value.to_payload() == {"error": "No image returned from model"}

    async def test_validation_runs_before_provider(self, settings):
        provider = MagicMock(spec=OpenRouterService)
        provider.complete = AsyncMock()

        with pytest.raises(ValidationError):
            await GenerationService(settings, provider).generate({"prompt": "only a prompt"})

        provider.complete.assert_not_awaited()

    async def test_missing_key(self, unconfigured_settings, valid_body):
        with pytest.raises(ConfigurationError):
            await GenerationService(unconfigured_settings).generate(valid_body)
