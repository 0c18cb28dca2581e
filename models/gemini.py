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

"""Gemini image edit integration."""

import logging

from google import genai
from google.genai import errors, types

from common.analytics import track_model_call
from common.error_handling import GenerationFailed, MissingCredential
from common.utils import encode_base64
from config.default import Default
from config.gemini_image_models import get_gemini_image_edit_model_config
from models.requests import (
    GenerationOutcome,
    ImageEditRequest,
    InlineImage,
    OutputPart,
)

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_MODALITIES = ["IMAGE", "TEXT"]


def init_client(config: Default) -> genai.Client:
    """Initializes the GenAI client with the configured API key."""
    if not config.has_credential:
        raise MissingCredential("GEMINI_API_KEY is not set.")

    http_options = None
    if config.GEMINI_HTTP_TIMEOUT_MS:
        http_options = types.HttpOptions(timeout=config.GEMINI_HTTP_TIMEOUT_MS)
    return genai.Client(api_key=config.GEMINI_API_KEY, http_options=http_options)


class GeminiImageEditor:
    """Submits one image plus one instruction and returns the output parts.

    No retries are attempted; every failure surfaces as GenerationFailed.
    """

    def __init__(self, config: Default | None = None, client: genai.Client | None = None):
        self.config = config or Default()
        self.client = client or init_client(self.config)
        self.model_name = self.config.GEMINI_IMAGE_EDIT_MODEL

    def _response_modalities(self, model_name: str) -> list[str]:
        model_config = get_gemini_image_edit_model_config(model_name)
        if model_config:
            return list(model_config.response_modalities)
        return list(DEFAULT_RESPONSE_MODALITIES)

    def submit(self, request: ImageEditRequest) -> GenerationOutcome:
        contents = types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(
                    data=request.image.to_bytes(),
                    mime_type=request.image.mime_type,
                ),
                types.Part.from_text(text=request.instruction),
            ],
        )
        config = types.GenerateContentConfig(
            response_modalities=self._response_modalities(self.model_name),
        )

        logger.info(
            f"Calling {self.model_name} for service '{request.service_id}' "
            f"({request.image.mime_type}, {len(request.instruction)} chars)"
        )
        try:
            with track_model_call(self.model_name, service_id=request.service_id):
                response = self.client.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config,
                )
        except errors.APIError as e:
            logger.error(f"Gemini rejected the edit request: {e}")
            raise GenerationFailed(f"API error {e.code}: {e.message}") from e
        except Exception as e:
            logger.error(f"Error calling Gemini for image edit: {e}")
            raise GenerationFailed(str(e)) from e

        return to_generation_outcome(response, self.model_name)


def to_generation_outcome(
    response: types.GenerateContentResponse, model_name: str | None = None
) -> GenerationOutcome:
    """Converts the first candidate of a response into ordered output parts."""
    if not response.candidates:
        block_reason = None
        if response.prompt_feedback is not None:
            block_reason = response.prompt_feedback.block_reason
        raise GenerationFailed(f"Model returned no candidates (block reason: {block_reason}).")

    content = response.candidates[0].content
    parts = []
    for part in (content.parts if content and content.parts else []):
        image = None
        if part.inline_data is not None and part.inline_data.data:
            image = InlineImage(
                data=encode_base64(part.inline_data.data),
                mime_type=part.inline_data.mime_type or "image/png",
            )
        parts.append(OutputPart(text=part.text, image=image))

    return GenerationOutcome(parts=parts, model_name=model_name)
