from pydantic import BaseModel, field_validator
from typing import Optional, Any
from enum import Enum

class GenerateRequest(BaseModel):
    image: str  # data URL, e.g. data:image/png;base64,...
    prompt: str

    @field_validator("image", "prompt")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

class GenerateResponse(BaseModel):
    image: str

class GenerateErrorResponse(BaseModel):
    error: str
    rawMessage: Optional[Any] = None

class ImageSource(str, Enum):
    MESSAGE_IMAGES = "message_images"
    CONTENT_IMAGE_PART = "content_image_part"
    CONTENT_TEXT = "content_text"

class ExtractedImage(BaseModel):
    url: str
    source: ImageSource

class ProviderConfigStatus(BaseModel):
    configured: bool
    model: str
    message: str
