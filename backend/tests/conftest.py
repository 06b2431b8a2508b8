"""
Shared pytest fixtures and configuration for all tests
"""
import pytest
import sys
from pathlib import Path

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from config.settings import Settings, get_settings

SAMPLE_IMAGE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="

@pytest.fixture
def settings():
    """Settings with a fake provider credential"""
    return Settings(_env_file=None, OPENROUTER_API_KEY="test-key", SITE_URL="https://nano.test")

@pytest.fixture
def unconfigured_settings():
    """Settings without a provider credential"""
    return Settings(_env_file=None, OPENROUTER_API_KEY=None)

@pytest.fixture
def sample_image():
    return SAMPLE_IMAGE

@pytest.fixture
def valid_body(sample_image):
    return {"image": sample_image, "prompt": "place the creature in a snowy mountain"}

@pytest.fixture
def images_message():
    """Message with a message-level images array (Gemini image output shape)"""
    return {
        "role": "assistant",
        "content": "Here is your edited image.",
        "images": [
            {"type": "image_url", "image_url": {"url": "https://x/a.png"}}
        ]
    }

@pytest.fixture
def content_image_message():
    """Message with no images array but an image part in content"""
    return {
        "role": "assistant",
        "content": [
            {"type": "text", "text": "Done."},
            {"type": "image_url", "image_url": {"url": "https://x/b.png"}}
        ]
    }

@pytest.fixture
def text_url_message():
    """Message whose only content is text carrying a URL"""
    return {
        "role": "assistant",
        "content": [
            {"type": "text", "text": "see result at https://cdn.example/out.png thanks"}
        ]
    }

@pytest.fixture
def empty_message():
    """Message with nothing that looks like an image"""
    return {
        "role": "assistant",
        "content": [
            {"type": "text", "text": "Sorry, I cannot edit this image."}
        ]
    }

@pytest.fixture
def make_client():
    """Build a TestClient whose settings dependency returns the given settings"""
    from fastapi.testclient import TestClient
    from main import app

    def _make(app_settings):
        app.dependency_overrides[get_settings] = lambda: app_settings
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()

@pytest.fixture
def client(make_client, settings):
    return make_client(settings)

@pytest.fixture
def unconfigured_client(make_client, unconfigured_settings):
    return make_client(unconfigured_settings)
