import json
from typing import Any, Optional

import pydantic

from config.settings import Settings
from core.data_url import shorten_data_urls
from core.errors import ExtractionError, ValidationError
from models.generate import ExtractedImage, GenerateRequest
from services.image_extraction import extract_image
from services.openrouter_service import OpenRouterService

MISSING_INPUT_ERROR = "Missing image or prompt"
NO_IMAGE_ERROR = "No image returned from model"
MAX_LOGGED_MESSAGE = 2000

class GenerationService:
    def __init__(self, settings: Settings, openrouter_service: Optional[OpenRouterService] = None):
        self.settings = settings
        self.openrouter_service = openrouter_service or OpenRouterService(settings)

    @staticmethod
    def parse_request(body: Any) -> GenerateRequest:
        """Validate the request body, treating anything unusable as missing input"""
        if not isinstance(body, dict):
            raise ValidationError(MISSING_INPUT_ERROR)
        try:
            return GenerateRequest.model_validate(body)
        except pydantic.ValidationError as error:
            raise ValidationError(MISSING_INPUT_ERROR) from error

    async def generate(self, body: Any) -> ExtractedImage:
        """Validate, call the model, then pull the edited image out of its reply"""
        request = self.parse_request(body)

        message = await self.openrouter_service.complete(request.image, request.prompt)

        extracted = extract_image(message)
        if extracted is None:
            dump = shorten_data_urls(json.dumps(message, indent=2, default=str))
            print(f"❌ No image URL found in model response: {dump[:MAX_LOGGED_MESSAGE]}")
            raise ExtractionError(NO_IMAGE_ERROR, raw_message=message)

        print(f"✅ Image extracted from {extracted.source.value}: {shorten_data_urls(extracted.url)[:200]}")
        return extracted
