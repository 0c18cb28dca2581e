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

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from config.default import Default
from workflows.photo_editor.backend import ExportFile
from workflows.photo_editor.controller import EditorController, create_editor_controller

logger = logging.getLogger(__name__)


class EditorSessionStore:
    """In-memory registry of editor controllers and pending exports.

    Controllers are keyed by the Mesop session id and evicted least recently
    used first once `max_sessions` is exceeded. Exports are keyed by a random
    id and evicted oldest-first once `max_exports` is exceeded.
    """

    def __init__(
        self,
        controller_factory: Callable[[str], EditorController] | None = None,
        max_exports: int | None = None,
        max_sessions: int | None = None,
    ) -> None:
        config = Default()
        self._controller_factory = controller_factory or (
            lambda session_id: create_editor_controller(config, session_id=session_id)
        )
        self._max_exports = max_exports or config.MAX_PENDING_EXPORTS
        self._max_sessions = max_sessions or config.MAX_SESSIONS
        self._controllers: OrderedDict[str, EditorController] = OrderedDict()
        self._exports: OrderedDict[str, ExportFile] = OrderedDict()
        self._lock = threading.Lock()

    def get_controller(self, session_id: str) -> EditorController:
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is not None:
                self._controllers.move_to_end(session_id)
                return controller

            controller = self._controller_factory(session_id)
            self._controllers[session_id] = controller
            logger.info(f"Created editor controller for session {session_id}")
            while len(self._controllers) > self._max_sessions:
                evicted_id, _ = self._controllers.popitem(last=False)
                logger.info(f"Evicted editor controller for session {evicted_id}")
            return controller

    def drop_controller(self, session_id: str) -> None:
        with self._lock:
            self._controllers.pop(session_id, None)

    def put_export(self, export: ExportFile) -> str:
        export_id = uuid.uuid4().hex
        with self._lock:
            self._exports[export_id] = export
            while len(self._exports) > self._max_exports:
                evicted_id, _ = self._exports.popitem(last=False)
                logger.info(f"Evicted export {evicted_id}")
        return export_id

    def get_export(self, export_id: str) -> Optional[ExportFile]:
        with self._lock:
            return self._exports.get(export_id)


_store: EditorSessionStore | None = None


def get_session_store() -> EditorSessionStore:
    global _store
    if _store is None:
        _store = EditorSessionStore()
    return _store
