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

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from conftest import make_image_bytes
from common.utils import encode_base64
from config.default import Default
from models.gemini import GeminiImageEditor
from models.requests import ImageEditRequest, InlineImage

API_KEY = os.environ.get("GEMINI_API_KEY")

if not API_KEY:
    print("Skipping test: GEMINI_API_KEY not set.")
    pytest.skip("GEMINI_API_KEY not set", allow_module_level=True)


@pytest.mark.integration
def test_live_background_edit_returns_an_image():
    """Sends a small image to the live model and expects an image part back."""
    editor = GeminiImageEditor(Default(GEMINI_API_KEY=API_KEY))
    request = ImageEditRequest(
        image=InlineImage(
            data=encode_base64(make_image_bytes("PNG", (256, 256))),
            mime_type="image/png",
        ),
        instruction="Arka planı karlı bir dağ manzarası yap",
        service_id="background",
    )

    outcome = editor.submit(request)

    print(f"Received {len(outcome.parts)} parts; text: {outcome.text!r}")
    image = outcome.first_image()
    assert image is not None
    assert image.mime_type.startswith("image/")
