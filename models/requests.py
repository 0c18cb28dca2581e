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

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from common.utils import create_data_url, decode_base64


class InlineImage(BaseModel):
    """An image carried inline as a base64 payload with its MIME type."""

    model_config = ConfigDict(frozen=True)

    data: str = Field(..., min_length=1)
    mime_type: str

    @property
    def data_url(self) -> str:
        return create_data_url(self.data, self.mime_type)

    def to_bytes(self) -> bytes:
        return decode_base64(self.data)


class ImageEditRequest(BaseModel):
    """
    Defines the contract for a single image edit call: one image part and
    one text part, sent to one model.
    """

    model_config = ConfigDict(frozen=True)

    image: InlineImage
    instruction: str = Field(..., min_length=1)
    service_id: str


class OutputPart(BaseModel):
    """One part of a generation response: text, inline image data, or neither."""

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    image: Optional[InlineImage] = None


class GenerationOutcome(BaseModel):
    """The ordered output parts returned by the model."""

    model_config = ConfigDict(frozen=True)

    parts: List[OutputPart] = Field(default_factory=list)
    model_name: Optional[str] = None

    def first_image(self) -> Optional[InlineImage]:
        """Returns the first part carrying image data, skipping text-only parts."""
        for part in self.parts:
            if part.image is not None:
                return part.image
        return None

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.parts if part.text)
