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

from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_INPUT_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")


@dataclass(frozen=True)
class GeminiImageEditModelConfig:
    """Configuration for a Gemini model that can edit an input image."""

    version_id: str  # Short ID for UI/Logic (e.g., "2.5-flash-preview")
    model_name: str  # Full API Model ID (e.g., "gemini-2.5-flash-image-preview")

    # Modalities requested from generate_content, in request order.
    response_modalities: List[str] = field(
        default_factory=lambda: ["IMAGE", "TEXT"]
    )
    supported_input_mime_types: List[str] = field(
        default_factory=lambda: ["image/jpeg", "image/png", "image/webp", "image/heic", "image/heif"]
    )


# Single source of truth
GEMINI_IMAGE_EDIT_MODELS: List[GeminiImageEditModelConfig] = [
    GeminiImageEditModelConfig(
        version_id="2.5-flash-preview",
        model_name="gemini-2.5-flash-image-preview",
    ),
    GeminiImageEditModelConfig(
        version_id="2.5-flash",
        model_name="gemini-2.5-flash-image",
    ),
    GeminiImageEditModelConfig(
        version_id="3.0-pro-preview",
        model_name="gemini-3-pro-image-preview",
    ),
]


def get_gemini_image_edit_model_config(
    model_name_or_version: str,
) -> Optional[GeminiImageEditModelConfig]:
    """Finds config by either full model name or short version ID."""
    for model in GEMINI_IMAGE_EDIT_MODELS:
        if (
            model.model_name == model_name_or_version
            or model.version_id == model_name_or_version
        ):
            return model
    return None


def get_supported_input_mime_types(model_name_or_version: str) -> List[str]:
    """Image MIME types the model accepts, or the common web formats if unregistered."""
    model_config = get_gemini_image_edit_model_config(model_name_or_version)
    if model_config is None:
        return list(DEFAULT_INPUT_MIME_TYPES)
    return list(model_config.supported_input_mime_types)
