"""
Errors raised while serving an image generation request.

Each error knows the HTTP status it maps to and the JSON body the client gets back.
"""
from typing import Any, Dict, Optional


class GenerationError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(GenerationError):
    """The request body is missing the image or the prompt."""
    status_code = 400


class ConfigurationError(GenerationError):
    """A deployment credential is missing. Fixable by the operator only."""
    status_code = 500


class ExtractionError(GenerationError):
    """The provider replied, but no image reference could be found in the reply."""
    status_code = 500

    def __init__(self, message: str, raw_message: Optional[Any] = None):
        super().__init__(message)
        self.raw_message = raw_message

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.raw_message is not None:
            payload["rawMessage"] = self.raw_message
        return payload


class UpstreamError(GenerationError):
    """Network failure, provider error or malformed provider reply."""
    status_code = 500
