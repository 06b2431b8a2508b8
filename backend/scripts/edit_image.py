#!/usr/bin/env python3
"""
Command-line client for the image editor.

Sends a local image and an edit instruction to a running API server
and saves the edited image it returns.

Usage:
    python scripts/edit_image.py --image photo.png --prompt "make it snow" [--output out.png] [--base-url URL]

Arguments:
    --image PATH     Source image to edit
    --prompt TEXT    Edit instruction
    --output PATH    Where to write the result (default: edited.<ext> next to the source)
    --base-url URL   API server (default: http://localhost:8000)
"""

import os
import sys
import argparse
from pathlib import Path
from typing import List, Optional

import httpx

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.data_url import extension_for_mime, file_to_data_url, parse_data_url

DEFAULT_BASE_URL = "http://localhost:8000"
REQUEST_TIMEOUT = 180.0


def request_edit(client: httpx.Client, base_url: str, image: str, prompt: str) -> str:
    """POST the image and prompt, returning the image URL or raising RuntimeError with the API error"""
    response = client.post(
        f"{base_url.rstrip('/')}/api/generate",
        json={"image": image, "prompt": prompt}
    )

    try:
        data = response.json()
    except ValueError:
        data = None

    if not isinstance(data, dict):
        raise RuntimeError(response.text or f"Request failed with status {response.status_code}")

    if response.status_code != 200 or data.get("error") or not data.get("image"):
        raise RuntimeError(data.get("error") or f"Request failed with status {response.status_code}")

    return data["image"]


def save_image(client: httpx.Client, image: str, output: Optional[Path], source: Path) -> Path:
    """Write a data URL or download a remote image to disk"""
    if image.startswith("data:"):
        mime_type, content = parse_data_url(image)
    else:
        response = client.get(image)
        response.raise_for_status()
        mime_type = response.headers.get("content-type", "image/png").split(";")[0]
        content = response.content

    if output is None:
        output = source.with_name(f"edited.{extension_for_mime(mime_type)}")

    output.write_bytes(content)
    return output


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Edit an image with a natural language instruction"
    )
    parser.add_argument(
        "--image",
        required=True,
        type=Path,
        help="Source image to edit"
    )
    parser.add_argument(
        "--prompt",
        required=True,
        help="Edit instruction"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the result (default: edited.<ext> next to the source)"
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"API server (default: {DEFAULT_BASE_URL})"
    )

    args = parser.parse_args(argv)

    if not args.image.is_file():
        print(f"❌ Image not found: {args.image}")
        return 1
    if not args.prompt.strip():
        print("❌ Prompt must not be empty")
        return 1

    image = file_to_data_url(args.image)
    print(f"🍌 Sending {args.image.name} to {args.base_url}...")

    try:
        with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
            result = request_edit(client, args.base_url, image, args.prompt)
            saved = save_image(client, result, args.output, args.image)
    except (RuntimeError, ValueError, httpx.HTTPError) as error:
        print(f"❌ Failed to generate image: {error}")
        return 1

    print(f"✅ Saved edited image to {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
