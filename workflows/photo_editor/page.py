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
"""Photo editor page: binds Mesop events to editor actions."""

import uuid

import mesop as me

from common.analytics import log_page_view, track_click
from common.utils import get_image_resolution
from components.before_after.before_after import before_after
from components.credential_notice.credential_notice import credential_notice
from components.service_card.service_card import service_card
from components.snackbar.snackbar import snackbar
from config.default import Default
from config.gemini_image_models import get_supported_input_mime_types
from routers.export_router import export_url
from services.editor_session_store import get_session_store
from state.photo_editor_state import PageState
from state.state import AppState
from workflows.photo_editor.backend import (
    Download,
    DragSlider,
    Effect,
    ExportFile,
    Generate,
    GoHome,
    Notify,
    SelectService,
    SetAuxiliaryTask,
    SetInstruction,
    SubmitGeneration,
    UploadImage,
    UploadedFile,
)
from workflows.photo_editor.controller import EditorController
from workflows.photo_editor.photo_editor_config import PhotoEditorConfig

PAGE_NAME = "photo_editor"


def _controller() -> EditorController:
    app_state = me.state(AppState)
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    return get_session_store().get_controller(app_state.session_id)


def _sync(controller: EditorController, effects: list[Effect]):
    """Copies the controller's surface view and effects into page state."""
    state = me.state(PageState)
    view = controller.view()

    if view.panel == "landing" and state.panel != "landing":
        state.instruction_textarea_key += 1
        state.export_url = ""

    if view.before_src != state.before_image_url:
        state.before_resolution = get_image_resolution(view.before_src) if view.before_src else ""
    if view.after_src != state.after_image_url:
        state.after_resolution = get_image_resolution(view.after_src) if view.after_src else ""
        state.export_url = ""

    state.panel = view.panel
    state.header_title = view.header_title
    state.upload_title = view.upload_title
    state.upload_icon = view.upload_icon
    state.placeholder = view.placeholder
    state.instruction_text = view.instruction_text
    state.show_auxiliary_tasks = view.show_auxiliary_tasks
    state.auxiliary_task_tag = view.auxiliary_task_tag
    state.is_generating = view.busy
    state.controls_enabled = view.controls_enabled
    state.auxiliary_tasks_enabled = view.auxiliary_tasks_enabled
    state.before_image_url = view.before_src
    state.after_image_url = view.after_src
    state.slider_percentage = view.slider_percentage
    state.show_download = view.show_download

    state.show_snackbar = False
    for effect in effects:
        if isinstance(effect, Notify):
            state.snackbar_message = PhotoEditorConfig().get_notice(effect.error.notice_key)
            state.show_snackbar = True
        elif isinstance(effect, ExportFile):
            export_id = get_session_store().put_export(effect)
            state.export_url = export_url(export_id)


def _dispatch(action) -> list[Effect]:
    controller = _controller()
    effects = controller.dispatch(action)
    _sync(controller, effects)
    return effects


# --- Event Handlers ---


def on_load(e: me.LoadEvent):
    app_state = me.state(AppState)
    app_state.current_page = PAGE_NAME
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    log_page_view(PAGE_NAME, session_id=app_state.session_id)
    if Default().has_credential:
        controller = _controller()
        _sync(controller, [])
    yield


@track_click(element_id="photo_editor_service_card", event_field="key")
def on_service_click(e: me.ClickEvent):
    _dispatch(SelectService(service_id=e.key))
    yield


@track_click(element_id="photo_editor_image_uploader")
def on_upload(e: me.UploadEvent):
    uploaded = UploadedFile(
        name=e.file.name,
        content_type=e.file.mime_type,
        data=e.file.getvalue(),
    )
    _dispatch(UploadImage(file=uploaded))
    yield


def on_instruction_blur(e: me.InputBlurEvent):
    _dispatch(SetInstruction(text=e.value))


@track_click(element_id="photo_editor_apparel_task", event_field="value")
def on_task_change(e: me.ButtonToggleChangeEvent):
    _dispatch(SetAuxiliaryTask(tag=e.value))
    yield


def on_slider_change(e: me.SliderValueChangeEvent):
    _dispatch(DragSlider(fraction=e.value / 100))


@track_click(element_id="photo_editor_generate_button")
def on_generate_click(e: me.ClickEvent):
    controller = _controller()
    effects = controller.dispatch(Generate())
    _sync(controller, effects)
    yield

    for effect in effects:
        if isinstance(effect, SubmitGeneration):
            _sync(controller, controller.execute(effect))
            yield


@track_click(element_id="photo_editor_download_button")
def on_download_click(e: me.ClickEvent):
    _dispatch(Download())
    yield


@track_click(element_id="photo_editor_back_button")
def on_home_click(e: me.ClickEvent):
    _dispatch(GoHome())
    yield


# --- Page ---


@me.page(
    path="/",
    title="Photo Edit Studio",
    on_load=on_load,
)
def page():
    config = Default()
    if not config.has_credential:
        credential_notice(PhotoEditorConfig().get_notice("missing_credential"))
        return

    state = me.state(PageState)
    snackbar(is_visible=state.show_snackbar, label=state.snackbar_message)

    with me.box(style=me.Style(padding=me.Padding.all(24), display="flex", flex_direction="column", gap=24)):
        if state.panel == "landing":
            landing_content()
        else:
            editor_content()


def landing_content():
    with me.box(style=me.Style(display="flex", flex_direction="column", align_items="center", gap=16)):
        me.text("Photo Edit Studio", type="headline-4")
        with me.box(style=me.Style(display="flex", flex_wrap="wrap", gap=16, justify_content="center")):
            for service in PhotoEditorConfig().get_services():
                service_card(service, on_click=on_service_click)


def editor_content():
    state = me.state(PageState)

    with me.box(style=me.Style(display="flex", flex_direction="row", align_items="center", gap=12)):
        with me.content_button(type="icon", on_click=on_home_click, disabled=state.is_generating):
            me.icon("arrow_back")
        me.text(state.header_title, type="headline-5")

    if state.show_auxiliary_tasks:
        me.button_toggle(
            value=state.auxiliary_task_tag,
            buttons=[
                me.ButtonToggleButton(label=task, value=task)
                for task in PhotoEditorConfig().get_apparel_tasks()
            ],
            multiple=False,
            hide_selection_indicator=True,
            disabled=not state.auxiliary_tasks_enabled,
            on_change=on_task_change,
        )

    if state.panel == "upload":
        upload_content()
        return

    with me.box(style=me.Style(display="flex", flex_direction="row", gap=24, flex_wrap="wrap")):
        with me.box(style=me.Style(display="flex", flex_direction="column", gap=8)):
            before_after(
                before_src=state.before_image_url,
                after_src=state.after_image_url,
                percentage=state.slider_percentage,
                on_slider_change=on_slider_change,
            )
            me.text(
                f"Önce: {state.before_resolution}  ·  Sonra: {state.after_resolution}",
                style=me.Style(font_size=12, color=me.theme_var("on-surface-variant")),
            )

        with me.box(style=me.Style(display="flex", flex_direction="column", gap=12, flex_basis="320px", flex_grow=1)):
            me.textarea(
                label="İstem",
                placeholder=state.placeholder,
                value=state.instruction_text,
                on_blur=on_instruction_blur,
                rows=4,
                disabled=not state.controls_enabled,
                key=f"instruction_{state.instruction_textarea_key}",
                style=me.Style(width="100%"),
            )
            if state.is_generating:
                with me.box(style=me.Style(display="flex", align_items="center", gap=8)):
                    me.progress_spinner(diameter=20, stroke_width=3)
                    me.text("Oluşturuluyor...")
            else:
                me.button(
                    "Oluştur",
                    on_click=on_generate_click,
                    type="raised",
                    disabled=not state.controls_enabled,
                )
            if state.show_download:
                me.button("İndir", on_click=on_download_click, type="stroked")
            if state.export_url:
                me.link(text="Dosyayı kaydet", url=state.export_url)


def upload_content():
    state = me.state(PageState)
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            align_items="center",
            gap=12,
            padding=me.Padding.all(48),
            border=me.Border.all(
                me.BorderSide(width=1, style="dashed", color=me.theme_var("outline"))
            ),
            border_radius=12,
        )
    ):
        me.icon(state.upload_icon, style=me.Style(font_size=48, width=48, height=48))
        me.text(state.upload_title, type="headline-6")
        me.uploader(
            label="Resim Yükle",
            on_upload=on_upload,
            accepted_file_types=get_supported_input_mime_types(Default().GEMINI_IMAGE_EDIT_MODEL),
            type="flat",
        )
