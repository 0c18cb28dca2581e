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
import os
import sys
import threading
from unittest import mock

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.error_handling import GenerationFailed, MissingCredential
from config.default import Default
from workflows.photo_editor.backend import (
    Download,
    ExportFile,
    Generate,
    GoHome,
    Notify,
    Phase,
    SelectService,
    SetAuxiliaryTask,
    SetInstruction,
    SubmitGeneration,
    UploadImage,
)
from workflows.photo_editor.controller import EditorController, create_editor_controller


def prepared_controller(client, photo, test_config, service_id="photo-restoration", instruction="Çizikleri kaldır"):
    controller = EditorController(client, config=test_config, session_id="test-session")
    controller.dispatch(SelectService(service_id))
    controller.dispatch(UploadImage(photo))
    controller.dispatch(SetInstruction(instruction))
    return controller


def test_execute_applies_image_result(photo_jpg, image_outcome, test_config):
    client = mock.Mock()
    client.submit.return_value = image_outcome
    controller = prepared_controller(client, photo_jpg, test_config)

    [submit] = controller.dispatch(Generate())
    assert controller.session.phase == Phase.GENERATING
    assert controller.view().busy is True

    effects = controller.execute(submit)

    client.submit.assert_called_once_with(submit.request)
    assert effects == []
    assert controller.session.phase == Phase.EDITING
    assert controller.session.result_image == image_outcome.first_image()
    assert controller.view().show_download is True

    [export] = controller.dispatch(Download())
    assert isinstance(export, ExportFile)
    assert export.file_name == test_config.EXPORT_FILE_NAME


def test_apparel_request_reaches_client_with_task_prefix(photo_jpg, image_outcome, test_config):
    client = mock.Mock()
    client.submit.return_value = image_outcome
    controller = prepared_controller(client, photo_jpg, test_config, "apparel", "mavi yap")
    controller.dispatch(SetAuxiliaryTask("Dress"))

    [submit] = controller.dispatch(Generate())
    controller.execute(submit)

    sent = client.submit.call_args.args[0]
    assert sent.instruction.index("Dress") < sent.instruction.index("mavi yap")


def test_client_failure_is_reported(photo_jpg, test_config):
    client = mock.Mock()
    client.submit.side_effect = GenerationFailed("API error 500")
    controller = prepared_controller(client, photo_jpg, test_config)

    [submit] = controller.dispatch(Generate())
    [notice] = controller.execute(submit)

    assert isinstance(notice, Notify)
    assert isinstance(notice.error, GenerationFailed)
    assert controller.session.phase == Phase.EDITING
    assert controller.session.result_image is None


def test_unexpected_client_exception_still_leaves_generating(photo_jpg, test_config):
    client = mock.Mock()
    client.submit.side_effect = RuntimeError("socket closed")
    controller = prepared_controller(client, photo_jpg, test_config)

    [submit] = controller.dispatch(Generate())
    [notice] = controller.execute(submit)

    assert isinstance(notice.error, GenerationFailed)
    assert "socket closed" in notice.error.message
    assert controller.session.phase == Phase.EDITING


def test_text_only_response_reports_empty_result(photo_jpg, text_only_outcome, test_config):
    client = mock.Mock()
    client.submit.return_value = text_only_outcome
    controller = prepared_controller(client, photo_jpg, test_config)

    [submit] = controller.dispatch(Generate())
    [notice] = controller.execute(submit)

    assert notice.error.notice_key == "generation_failed"
    assert controller.session.result_image is None


def test_reset_while_in_flight_discards_late_response(photo_jpg, image_outcome, test_config):
    started = threading.Event()
    release = threading.Event()

    def slow_submit(request):
        started.set()
        release.wait(timeout=5)
        return image_outcome

    client = mock.Mock()
    client.submit.side_effect = slow_submit
    controller = prepared_controller(client, photo_jpg, test_config)

    [submit] = controller.dispatch(Generate())
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = controller.start(submit, executor)
        assert started.wait(timeout=5)

        controller.dispatch(GoHome())
        release.set()
        effects = future.result(timeout=5)

    assert effects == []
    assert controller.session.phase == Phase.LANDING
    assert controller.session.result_image is None
    assert controller.session.source_image is None


def test_second_generate_while_in_flight_is_rejected(photo_jpg, test_config):
    controller = prepared_controller(mock.Mock(), photo_jpg, test_config)

    [first] = controller.dispatch(Generate())
    second = controller.dispatch(Generate())

    assert isinstance(first, SubmitGeneration)
    assert not any(isinstance(effect, SubmitGeneration) for effect in second)


def test_create_editor_controller_requires_credential():
    with pytest.raises(MissingCredential):
        create_editor_controller(Default(GEMINI_API_KEY=None))
    with pytest.raises(MissingCredential):
        create_editor_controller(Default(GEMINI_API_KEY="  "))


def test_create_editor_controller_uses_given_client(test_config):
    client = mock.Mock()
    controller = create_editor_controller(test_config, client=client, session_id="abc")

    assert controller.client is client
    assert controller.session_id == "abc"
    assert controller.session.phase == Phase.LANDING
