# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import base64
import binascii
import io

from absl import logging
from PIL import Image, UnidentifiedImageError


def is_image_content_type(content_type: str | None) -> bool:
    """True when a declared content type is an image/* type."""
    return bool(content_type) and content_type.lower().startswith("image/")


def encode_base64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def decode_base64(data: str) -> bytes:
    return base64.b64decode(data)


def create_data_url(data: str, mime_type: str) -> str:
    """Creates an inline data URL from a base64 payload and MIME type."""
    if not data:
        return ""
    return f"data:{mime_type};base64,{data}"


def split_data_url(data_url: str) -> tuple[str, str]:
    """Splits a data URL into (mime_type, base64 payload).

    The data URL is in the format: data:image/png;base64,iVBORw0KGgo...
    """
    header, encoded = data_url.split(",", 1)
    mime_type = header.removeprefix("data:").split(";", 1)[0]
    return mime_type, encoded


def get_image_dimensions_from_base64(base64_string: str) -> tuple[int, int] | None:
    """Retrieves the width and height of an image from a base64 encoded string.

    Args:
        base64_string: The base64 encoded image data, optionally a data URL.

    Returns:
        A tuple (width, height) if successful, or None if the payload cannot be
        decoded as an image.
    """
    if base64_string.startswith("data:image"):
        _, base64_string = split_data_url(base64_string)

    try:
        image_data = base64.b64decode(base64_string)
        with Image.open(io.BytesIO(image_data)) as img:
            return img.size
    except (binascii.Error, UnidentifiedImageError, OSError) as e:
        logging.info(f"App: Error getting image dimensions: {e}")
        return None


def get_image_resolution(base64_string: str) -> str:
    """Formats the resolution of a base64 image as WIDTHxHEIGHT."""
    dimensions = get_image_dimensions_from_base64(base64_string)
    if not dimensions:
        return "Unknown"
    width, height = dimensions
    return f"{width}x{height}"
