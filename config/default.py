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
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=True)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def get_config_path(relative_path: str) -> str:
    """Resolves a config file path relative to the project root."""
    if os.path.isabs(relative_path):
        return relative_path
    return os.path.join(PROJECT_ROOT, relative_path)


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass
class Default:
    """Defaults class"""

    # Gemini
    GEMINI_API_KEY: str | None = os.environ.get("GEMINI_API_KEY")
    GEMINI_IMAGE_EDIT_MODEL: str = os.environ.get(
        "GEMINI_IMAGE_EDIT_MODEL", "gemini-2.5-flash-image-preview"
    )
    # No timeout unless one is configured; a hung call keeps the editor busy.
    GEMINI_HTTP_TIMEOUT_MS: int | None = _optional_int(
        os.environ.get("GEMINI_HTTP_TIMEOUT_MS")
    )

    # Export
    EXPORT_FILE_NAME: str = os.environ.get(
        "EXPORT_FILE_NAME", "ozgurs-photoshop-duzenlendi.png"
    )
    MAX_PENDING_EXPORTS: int = int(os.environ.get("MAX_PENDING_EXPORTS", "32"))

    # Sessions
    MAX_SESSIONS: int = int(os.environ.get("MAX_SESSIONS", "64"))

    # App
    APP_ENV: str = os.environ.get("APP_ENV", "local")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def has_credential(self) -> bool:
        return bool(self.GEMINI_API_KEY and self.GEMINI_API_KEY.strip())
