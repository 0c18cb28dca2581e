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

"""Photo editor session state machine.

The editor is a pure reducer: `reduce(session, action)` returns the next
session and a list of effects for the host surface to carry out. It never
calls the model itself; a `SubmitGeneration` effect asks the caller to do so
and to feed the outcome back as `GenerationCompleted` or `GenerationErrored`
with the same generation tag.
"""

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from common.error_handling import (
    EditorError,
    EmptyInstruction,
    EmptyResult,
    GenerationFailed,
    GenerationInProgress,
    InvalidInputKind,
    NoSourceImage,
    NothingToExport,
    UnknownService,
)
from common.utils import encode_base64, is_image_content_type
from config.default import Default
from models.requests import GenerationOutcome, ImageEditRequest, InlineImage
from workflows.photo_editor.photo_editor_config import EditService, PhotoEditorConfig

logger = logging.getLogger(__name__)

DEFAULT_APPAREL_TASK = "T-shirt"
DEFAULT_SLIDER_FRACTION = 0.5


class Phase(str, enum.Enum):
    LANDING = "landing"
    AWAITING_UPLOAD = "awaiting_upload"
    EDITING = "editing"
    GENERATING = "generating"


@dataclass(frozen=True)
class Session:
    phase: Phase = Phase.LANDING
    active_service: Optional[EditService] = None
    source_image: Optional[InlineImage] = None
    instruction_text: str = ""
    auxiliary_task_tag: str = DEFAULT_APPAREL_TASK
    result_image: Optional[InlineImage] = None
    slider_fraction: float = DEFAULT_SLIDER_FRACTION
    # Bumped on every reset, selection, upload and generate; responses
    # carrying an older value are stale.
    generation: int = field(default=0, compare=False)

    @property
    def before_image(self) -> Optional[InlineImage]:
        return self.source_image

    @property
    def after_image(self) -> Optional[InlineImage]:
        """The result once one exists; the source image until then."""
        return self.result_image or self.source_image

    @property
    def is_generating(self) -> bool:
        return self.phase == Phase.GENERATING


# --- Actions ---


@dataclass(frozen=True)
class UploadedFile:
    name: str
    content_type: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class SelectService:
    service_id: str


@dataclass(frozen=True)
class UploadImage:
    file: UploadedFile


@dataclass(frozen=True)
class SetInstruction:
    text: str


@dataclass(frozen=True)
class SetAuxiliaryTask:
    tag: str


@dataclass(frozen=True)
class Generate:
    pass


@dataclass(frozen=True)
class GenerationCompleted:
    generation: int
    outcome: GenerationOutcome


@dataclass(frozen=True)
class GenerationErrored:
    generation: int
    error: GenerationFailed


@dataclass(frozen=True)
class Download:
    pass


@dataclass(frozen=True)
class GoHome:
    pass


@dataclass(frozen=True)
class DragSlider:
    fraction: float


Action = Union[
    SelectService,
    UploadImage,
    SetInstruction,
    SetAuxiliaryTask,
    Generate,
    GenerationCompleted,
    GenerationErrored,
    Download,
    GoHome,
    DragSlider,
]


# --- Effects ---


@dataclass(frozen=True)
class Notify:
    error: EditorError


@dataclass(frozen=True)
class SubmitGeneration:
    generation: int
    request: ImageEditRequest


@dataclass(frozen=True)
class ExportFile:
    file_name: str
    image: InlineImage

    @property
    def mime_type(self) -> str:
        return self.image.mime_type

    def to_bytes(self) -> bytes:
        return self.image.to_bytes()


Effect = Union[Notify, SubmitGeneration, ExportFile]


def new_session(catalog: Optional[PhotoEditorConfig] = None, generation: int = 0) -> Session:
    """Creates a landing-phase session."""
    catalog = catalog or PhotoEditorConfig()
    return Session(auxiliary_task_tag=catalog.default_apparel_task, generation=generation)


def compose_instruction(
    session: Session, catalog: Optional[PhotoEditorConfig] = None
) -> str:
    """Builds the outbound instruction text.

    Apparel edits prefix the selected garment type; every other service sends
    the user's text unmodified.
    """
    if session.active_service and session.active_service.is_apparel:
        catalog = catalog or PhotoEditorConfig()
        return catalog.get_prompt("apparel_instruction").format(
            task=session.auxiliary_task_tag,
            instruction=session.instruction_text,
        )
    return session.instruction_text


def reset(session: Session, catalog: Optional[PhotoEditorConfig] = None) -> Session:
    return new_session(catalog, generation=session.generation + 1)


def reduce(
    session: Session,
    action: Action,
    catalog: Optional[PhotoEditorConfig] = None,
    export_file_name: Optional[str] = None,
) -> tuple[Session, list[Effect]]:
    """Applies one action to the session.

    `export_file_name` defaults to the configured `EXPORT_FILE_NAME`.
    """
    catalog = catalog or PhotoEditorConfig()

    if isinstance(action, GoHome):
        return reset(session, catalog), []
    if isinstance(action, SelectService):
        return _select_service(session, action, catalog)
    if isinstance(action, UploadImage):
        return _upload_image(session, action)
    if isinstance(action, SetInstruction):
        if session.phase != Phase.EDITING:
            return _ignored(session, action)
        return replace(session, instruction_text=action.text), []
    if isinstance(action, SetAuxiliaryTask):
        return _set_auxiliary_task(session, action, catalog)
    if isinstance(action, Generate):
        return _generate(session, catalog)
    if isinstance(action, (GenerationCompleted, GenerationErrored)):
        return _apply_generation_result(session, action)
    if isinstance(action, Download):
        return _download(session, export_file_name or Default().EXPORT_FILE_NAME)
    if isinstance(action, DragSlider):
        if session.phase not in (Phase.EDITING, Phase.GENERATING):
            return _ignored(session, action)
        fraction = min(max(action.fraction, 0.0), 1.0)
        return replace(session, slider_fraction=fraction), []

    raise TypeError(f"Unsupported editor action: {action!r}")


def _ignored(session: Session, action: Action) -> tuple[Session, list[Effect]]:
    logger.debug(f"Ignoring {type(action).__name__} in phase {session.phase.value}")
    return session, []


def _select_service(
    session: Session, action: SelectService, catalog: PhotoEditorConfig
) -> tuple[Session, list[Effect]]:
    if session.phase != Phase.LANDING:
        return _ignored(session, action)

    service = catalog.get_service(action.service_id)
    if service is None:
        return session, [Notify(UnknownService(f"Unknown service '{action.service_id}'."))]

    selected = replace(
        new_session(catalog, generation=session.generation + 1),
        phase=Phase.AWAITING_UPLOAD,
        active_service=service,
    )
    return selected, []


def _upload_image(session: Session, action: UploadImage) -> tuple[Session, list[Effect]]:
    if session.phase != Phase.AWAITING_UPLOAD:
        return _ignored(session, action)

    uploaded = action.file
    if not is_image_content_type(uploaded.content_type) or not uploaded.data:
        error = InvalidInputKind(
            f"'{uploaded.name}' has content type '{uploaded.content_type}', not an image."
        )
        return session, [Notify(error)]

    image = InlineImage(data=encode_base64(uploaded.data), mime_type=uploaded.content_type)
    return (
        replace(
            session,
            phase=Phase.EDITING,
            source_image=image,
            result_image=None,
            slider_fraction=DEFAULT_SLIDER_FRACTION,
            generation=session.generation + 1,
        ),
        [],
    )


def _set_auxiliary_task(
    session: Session, action: SetAuxiliaryTask, catalog: PhotoEditorConfig
) -> tuple[Session, list[Effect]]:
    if session.phase not in (Phase.AWAITING_UPLOAD, Phase.EDITING) or not (
        session.active_service and session.active_service.is_apparel
    ):
        return _ignored(session, action)
    if action.tag not in catalog.get_apparel_tasks():
        logger.warning(f"Ignoring unknown apparel task '{action.tag}'")
        return session, []
    return replace(session, auxiliary_task_tag=action.tag), []


def _generate(
    session: Session, catalog: PhotoEditorConfig
) -> tuple[Session, list[Effect]]:
    if session.phase == Phase.GENERATING:
        return session, [Notify(GenerationInProgress("A generation is already running."))]
    if session.source_image is None or session.phase != Phase.EDITING:
        return session, [Notify(NoSourceImage("Upload an image before generating."))]
    if not session.instruction_text.strip():
        return session, [Notify(EmptyInstruction("Enter an instruction before generating."))]

    request = ImageEditRequest(
        image=session.source_image,
        instruction=compose_instruction(session, catalog),
        service_id=session.active_service.id,
    )
    generating = replace(
        session, phase=Phase.GENERATING, generation=session.generation + 1
    )
    return generating, [SubmitGeneration(generation=generating.generation, request=request)]


def _apply_generation_result(
    session: Session, action: Union[GenerationCompleted, GenerationErrored]
) -> tuple[Session, list[Effect]]:
    if session.phase != Phase.GENERATING or action.generation != session.generation:
        logger.info(
            f"Discarding stale generation result {action.generation} "
            f"(session at {session.generation}, phase {session.phase.value})"
        )
        return session, []

    editing = replace(session, phase=Phase.EDITING)
    if isinstance(action, GenerationErrored):
        return editing, [Notify(action.error)]

    image = action.outcome.first_image()
    if image is None:
        if action.outcome.text:
            logger.info(f"Model returned text without an image: {action.outcome.text}")
        return editing, [Notify(EmptyResult("The model response contained no image."))]

    if action.outcome.text:
        logger.debug(f"Ignoring text returned with the image: {action.outcome.text}")
    return replace(editing, result_image=image), []


def _download(session: Session, export_file_name: str) -> tuple[Session, list[Effect]]:
    if (
        session.phase != Phase.EDITING
        or session.result_image is None
        or session.result_image == session.source_image
    ):
        return session, [Notify(NothingToExport("No edited image to download."))]
    return session, [ExportFile(file_name=export_file_name, image=session.result_image)]


# --- Surface projection ---


@dataclass(frozen=True)
class SurfaceView:
    """What the host surface should show for a session."""

    panel: str  # "landing", "upload" or "editor"
    header_title: str = ""
    upload_title: str = ""
    upload_icon: str = ""
    placeholder: str = ""
    instruction_text: str = ""
    show_auxiliary_tasks: bool = False
    auxiliary_task_tag: str = DEFAULT_APPAREL_TASK
    busy: bool = False
    controls_enabled: bool = False
    auxiliary_tasks_enabled: bool = False
    before_src: str = ""
    after_src: str = ""
    slider_percentage: float = DEFAULT_SLIDER_FRACTION * 100
    show_download: bool = False

    @property
    def before_clip_right(self) -> float:
        """Percentage of the before image hidden on the right of the split."""
        return 100 - self.slider_percentage


def render(session: Session, catalog: Optional[PhotoEditorConfig] = None) -> SurfaceView:
    catalog = catalog or PhotoEditorConfig()
    service = session.active_service
    if session.phase == Phase.LANDING or service is None:
        return SurfaceView(panel="landing", auxiliary_task_tag=session.auxiliary_task_tag)

    header_title = (
        catalog.get_prompt("apparel_header") if service.is_apparel else service.title.upper()
    )
    editing = session.phase == Phase.EDITING
    return SurfaceView(
        panel="upload" if session.phase == Phase.AWAITING_UPLOAD else "editor",
        header_title=header_title,
        upload_title=catalog.get_prompt("upload_title").format(title=service.title),
        upload_icon=service.icon,
        placeholder=catalog.get_placeholder(service),
        instruction_text=session.instruction_text,
        show_auxiliary_tasks=service.is_apparel,
        auxiliary_task_tag=session.auxiliary_task_tag,
        busy=session.is_generating,
        controls_enabled=editing,
        auxiliary_tasks_enabled=service.is_apparel and not session.is_generating,
        before_src=session.before_image.data_url if session.before_image else "",
        after_src=session.after_image.data_url if session.after_image else "",
        slider_percentage=round(session.slider_fraction * 100, 2),
        show_download=(
            editing
            and session.result_image is not None
            and session.result_image != session.source_image
        ),
    )
