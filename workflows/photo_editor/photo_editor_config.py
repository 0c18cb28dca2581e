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

import json
import logging
from dataclasses import dataclass
from typing import Optional

from config.default import get_config_path

logger = logging.getLogger(__name__)

APPAREL_SERVICE_ID = "apparel"


@dataclass(frozen=True)
class EditService:
    """An editing service offered on the landing page."""

    id: str
    title: str
    description: str
    icon: str
    placeholder: Optional[str] = None

    @property
    def is_apparel(self) -> bool:
        return self.id == APPAREL_SERVICE_ID


class PhotoEditorConfig:
    _instance = None
    _config_data = None
    _prompts_data = None
    _services = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(PhotoEditorConfig, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Loads the service catalog and prompt templates from JSON."""
        config_path = get_config_path("workflows/photo_editor/config.json")
        with open(config_path, "r", encoding="utf-8") as f:
            self._config_data = json.load(f)

        prompts_path = get_config_path("workflows/photo_editor/prompts.json")
        with open(prompts_path, "r", encoding="utf-8") as f:
            self._prompts_data = json.load(f)

        self._services = tuple(
            EditService(**service) for service in self._config_data.get("services", [])
        )
        logger.info(f"Loaded {len(self._services)} photo editor services.")

    def get_services(self) -> tuple[EditService, ...]:
        """Returns the services in display order."""
        return self._services

    def get_service(self, service_id: str) -> Optional[EditService]:
        return next((s for s in self._services if s.id == service_id), None)

    def get_apparel_tasks(self) -> list[str]:
        return list(self._config_data.get("apparel_tasks", []))

    @property
    def default_apparel_task(self) -> str:
        return self._config_data.get("default_apparel_task", "T-shirt")

    def get_prompt(self, key: str) -> str:
        """Returns a prompt template by key."""
        return self._prompts_data.get(key, "")

    def get_placeholder(self, service: Optional[EditService]) -> str:
        if service and service.placeholder:
            return service.placeholder
        return self.get_prompt("default_placeholder")

    def get_notice(self, notice_key: str) -> str:
        """Returns the user-facing message for an error's notice key."""
        notices = self._prompts_data.get("notices", {})
        return notices.get(notice_key) or notices.get("generic_error", "")
