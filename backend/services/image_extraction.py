"""
Locate the generated image in a chat-completions message.

Providers behind the OpenAI-compatible API do not agree on where an output image goes.
Three places are checked in a fixed order and the first hit wins:

1. a message-level ``images`` list (first element, ``image_url`` as object or string)
2. an ``image_url`` part inside the ``content`` list
3. the first ``text`` part of the content, scanned for an http(s) URL
"""
import re
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import urlparse

from models.generate import ExtractedImage, ImageSource

_URL_PATTERN = re.compile(r"https?://\S+")
_TRAILING_PUNCTUATION = ".,;:!?'\"*`_~。，；：！？、」』"
_CLOSING_BRACKETS = {")": "(", "]": "[", "}": "{", ">": "<", "）": "（", "】": "【"}


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _content_parts(message: dict) -> List[dict]:
    content = message.get("content")
    if not isinstance(content, list):
        return []
    return [part for part in content if isinstance(part, dict)]


def _trim_url(candidate: str) -> str:
    """Drop sentence punctuation and unbalanced closing brackets from the end of a match"""
    while candidate:
        last = candidate[-1]
        if last in _TRAILING_PUNCTUATION:
            candidate = candidate[:-1]
        elif last in _CLOSING_BRACKETS and candidate.count(last) > candidate.count(_CLOSING_BRACKETS[last]):
            candidate = candidate[:-1]
        else:
            break
    return candidate


def _is_http_url(candidate: str) -> bool:
    try:
        parsed = urlparse(candidate)
        return parsed.scheme in ("http", "https") and bool(parsed.hostname)
    except ValueError:
        return False


def find_url_in_text(text: str) -> Optional[str]:
    """Return the first well-formed http(s) URL embedded in free text"""
    for match in _URL_PATTERN.finditer(text):
        candidate = _trim_url(match.group(0))
        if _is_http_url(candidate):
            return candidate
    return None


def _from_message_images(message: dict) -> Optional[str]:
    images = message.get("images")
    if not isinstance(images, list) or not images:
        return None

    first = images[0]
    if not isinstance(first, dict):
        return None

    image_url = first.get("image_url")
    if isinstance(image_url, dict):
        return _non_empty_str(image_url.get("url"))
    return _non_empty_str(image_url)


def _from_content_image_part(message: dict) -> Optional[str]:
    for part in _content_parts(message):
        if part.get("type") != "image_url":
            continue
        image_url = part.get("image_url")
        if isinstance(image_url, dict):
            url = _non_empty_str(image_url.get("url"))
            if url:
                return url
    return None


def _from_content_text(message: dict) -> Optional[str]:
    content = message.get("content")
    # Plain string content is a single text part
    if isinstance(content, str):
        return find_url_in_text(content)

    for part in _content_parts(message):
        if part.get("type") == "text" and isinstance(part.get("text"), str):
            # Only the first text part is scanned
            return find_url_in_text(part["text"])
    return None


_TIERS: Tuple[Tuple[ImageSource, Callable[[dict], Optional[str]]], ...] = (
    (ImageSource.MESSAGE_IMAGES, _from_message_images),
    (ImageSource.CONTENT_IMAGE_PART, _from_content_image_part),
    (ImageSource.CONTENT_TEXT, _from_content_text),
)


def extract_image(message: Any) -> Optional[ExtractedImage]:
    """Find the image reference in a provider message, or None if there is none"""
    if not isinstance(message, dict):
        return None

    for source, locate in _TIERS:
        url = locate(message)
        if url:
            return ExtractedImage(url=url, source=source)
    return None
