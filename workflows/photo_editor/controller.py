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

import concurrent.futures
import logging
import threading
import uuid
from typing import Optional, Protocol

from common.analytics import log_phase_transition
from common.error_handling import GenerationFailed, MissingCredential
from config.default import Default
from models.gemini import GeminiImageEditor
from models.requests import GenerationOutcome, ImageEditRequest
from workflows.photo_editor.backend import (
    Action,
    Effect,
    GenerationCompleted,
    GenerationErrored,
    Notify,
    Session,
    SubmitGeneration,
    SurfaceView,
    new_session,
    reduce,
    render,
)
from workflows.photo_editor.photo_editor_config import PhotoEditorConfig

logger = logging.getLogger(__name__)


class ImageEditClient(Protocol):
    def submit(self, request: ImageEditRequest) -> GenerationOutcome: ...


class EditorController:
    """Owns the single Session of one browser session.

    Every write goes through `dispatch`, under one lock. The model call runs
    outside the lock so a reset can land while a request is in flight; its
    response is then dropped by the reducer's generation check.
    """

    def __init__(
        self,
        client: ImageEditClient,
        catalog: Optional[PhotoEditorConfig] = None,
        config: Optional[Default] = None,
        session_id: Optional[str] = None,
    ):
        self.client = client
        self.catalog = catalog or PhotoEditorConfig()
        self.config = config or Default()
        self.session_id = session_id or str(uuid.uuid4())
        self._lock = threading.Lock()
        self._session = new_session(self.catalog)

    @property
    def session(self) -> Session:
        return self._session

    def view(self) -> SurfaceView:
        return render(self._session, self.catalog)

    def dispatch(self, action: Action) -> list[Effect]:
        with self._lock:
            before = self._session
            self._session, effects = reduce(
                before,
                action,
                catalog=self.catalog,
                export_file_name=self.config.EXPORT_FILE_NAME,
            )
            after = self._session

        if before.phase != after.phase:
            log_phase_transition(
                type(action).__name__,
                before.phase.value,
                after.phase.value,
                session_id=self.session_id,
            )
        for effect in effects:
            if isinstance(effect, Notify):
                logger.warning(
                    f"Session {self.session_id}: {type(effect.error).__name__}: {effect.error.message}"
                )
        return effects

    def execute(self, effect: SubmitGeneration) -> list[Effect]:
        """Runs the model call for a SubmitGeneration effect and applies the result."""
        try:
            outcome = self.client.submit(effect.request)
        except GenerationFailed as e:
            return self.dispatch(GenerationErrored(generation=effect.generation, error=e))
        except Exception as e:
            # The phase must leave Generating whatever the client raised.
            logger.exception(f"Session {self.session_id}: image edit client raised {e!r}")
            error = GenerationFailed(str(e))
            return self.dispatch(GenerationErrored(generation=effect.generation, error=error))
        return self.dispatch(GenerationCompleted(generation=effect.generation, outcome=outcome))

    def start(
        self, effect: SubmitGeneration, executor: concurrent.futures.Executor
    ) -> concurrent.futures.Future:
        """Runs `execute` on an executor; the future resolves to its effects."""
        return executor.submit(self.execute, effect)


def create_editor_controller(
    config: Optional[Default] = None,
    client: Optional[ImageEditClient] = None,
    session_id: Optional[str] = None,
) -> EditorController:
    """Builds a controller backed by Gemini; refuses to start without a credential."""
    config = config or Default()
    if not config.has_credential:
        raise MissingCredential("GEMINI_API_KEY is not set.")
    client = client or GeminiImageEditor(config)
    return EditorController(client, config=config, session_id=session_id)
