# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import io
import os
import sys

import pytest
from PIL import Image

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.default import Default
from models.requests import GenerationOutcome, InlineImage, OutputPart
from workflows.photo_editor.backend import UploadedFile
from workflows.photo_editor.photo_editor_config import PhotoEditorConfig


def make_image_bytes(fmt: str = "JPEG", size: tuple[int, int] = (8, 6)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def catalog():
    return PhotoEditorConfig()


@pytest.fixture
def test_config():
    return Default(
        GEMINI_API_KEY="test-api-key",
        GEMINI_IMAGE_EDIT_MODEL="gemini-2.5-flash-image-preview",
        GEMINI_HTTP_TIMEOUT_MS=None,
        EXPORT_FILE_NAME="ozgurs-photoshop-duzenlendi.png",
    )


@pytest.fixture
def photo_jpg():
    return UploadedFile(name="photo.jpg", content_type="image/jpeg", data=make_image_bytes())


@pytest.fixture
def notes_txt():
    return UploadedFile(name="notes.txt", content_type="text/plain", data=b"not a picture")


@pytest.fixture
def image_outcome():
    return GenerationOutcome(
        parts=[
            OutputPart(text="İşte düzenlenmiş fotoğrafınız."),
            OutputPart(image=InlineImage(data="AAAA", mime_type="image/png")),
        ]
    )


@pytest.fixture
def text_only_outcome():
    return GenerationOutcome(parts=[OutputPart(text="Bu isteği gerçekleştiremiyorum.")])
