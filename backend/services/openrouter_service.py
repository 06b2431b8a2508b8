import httpx
from typing import Any, Dict, Optional

from config.settings import Settings
from core.errors import ConfigurationError, UpstreamError

API_KEY_NAME = "OPENROUTER_API_KEY"
REQUEST_TIMEOUT = 120.0

class OpenRouterService:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.api_key = settings.OPENROUTER_API_KEY
        self.base_url = settings.OPENROUTER_BASE_URL.rstrip('/')
        self.model = settings.OPENROUTER_MODEL
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, image_data: str, prompt: str) -> Dict[str, Any]:
        """Single user message: the instruction first, then the source image"""
        return {
            "model": self.model,
            "messages": [{
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": prompt
                    },
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": image_data
                        }
                    }
                ]
            }]
        }

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.settings.SITE_URL,
            "X-Title": self.settings.PROJECT_NAME,
            "Content-Type": "application/json"
        }

    async def complete(self, image_data: str, prompt: str) -> Any:
        """Send the edit request and return the first choice's message as raw JSON"""
        if not self.is_configured:
            raise ConfigurationError(f"{API_KEY_NAME} is not set")

        try:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=self.build_payload(image_data, prompt),
                    headers=self.build_headers()
                )
        except httpx.TimeoutException as error:
            raise UpstreamError("Request timeout - OpenRouter API may be slow") from error
        except httpx.HTTPError as error:
            raise UpstreamError(f"Error calling OpenRouter API: {error}") from error

        if response.status_code != 200:
            raise UpstreamError(self._error_message(response))

        try:
            data = response.json()
        except ValueError as error:
            raise UpstreamError("OpenRouter returned a response that is not valid JSON") from error

        choices = data.get('choices') if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise UpstreamError("OpenRouter response did not contain any choices")

        return choices[0].get('message')

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        fallback = f"API request failed: {response.status_code}"
        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            return fallback

        error_obj = error_data.get('error') if isinstance(error_data, dict) else None
        if isinstance(error_obj, dict) and error_obj.get('message'):
            return str(error_obj['message'])
        return fallback
