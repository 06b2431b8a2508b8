"""
Helpers for base64 image data URLs (e.g. "data:image/png;base64,iVBORw0KGg...").
"""
import base64
import binascii
import mimetypes
import re
from pathlib import Path
from typing import Tuple, Union

EXTENSION_MAP = {
    'image/png': 'png',
    'image/jpeg': 'jpg',
    'image/jpg': 'jpg',
    'image/gif': 'gif',
    'image/webp': 'webp'
}

_BASE64_BLOB = re.compile(r"(data:[\w/+.-]+;base64,)([A-Za-z0-9+/=]{64,})")


def encode_data_url(content: bytes, mime_type: str = "image/png") -> str:
    b64 = base64.b64encode(content).decode("utf-8")
    return f"data:{mime_type};base64,{b64}"


def file_to_data_url(path: Union[str, Path]) -> str:
    """Read an image file into a data URL, guessing the MIME type from its extension"""
    file_path = Path(path)
    mime_type, _ = mimetypes.guess_type(file_path.name)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = "image/png"
    return encode_data_url(file_path.read_bytes(), mime_type)


def parse_data_url(data_url: str) -> Tuple[str, bytes]:
    """Split an image data URL into its MIME type and decoded bytes.

    Raises ValueError if the string is not a base64 image data URL.
    """
    if not data_url.startswith('data:image/'):
        raise ValueError("Invalid data URL format - must be a data:image/ URL")

    header, sep, base64_data = data_url.partition(',')
    if not sep or not header.endswith(';base64'):
        raise ValueError("Invalid data URL format - expected base64 encoded data")

    mime_type = header.split(':')[1].split(';')[0]
    try:
        image_bytes = base64.b64decode(base64_data, validate=True)
    except binascii.Error as error:
        raise ValueError(f"Invalid base64 data in data URL: {error}") from error

    return mime_type, image_bytes


def extension_for_mime(mime_type: str) -> str:
    return EXTENSION_MAP.get(mime_type, 'png')


def shorten_data_urls(text: str, keep: int = 32) -> str:
    """Abbreviate base64 payloads so log lines stay readable"""
    return _BASE64_BLOB.sub(
        lambda m: f"{m.group(1)}{m.group(2)[:keep]}...<{len(m.group(2))} chars>",
        text
    )
