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
import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.analytics import JsonFormatter, log_phase_transition, track_click, track_model_call
from common.error_handling import UnknownHandlerIdFilter

ANALYTICS_LOGGER = "photo_edit_studio.analytics"


def test_json_formatter_merges_extra_data():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "Phase: a -> b", None, None)
    record.extra_data = {"event_type": "phase_transition", "to_phase": "editing"}

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Phase: a -> b"
    assert payload["level"] == "INFO"
    assert payload["event_type"] == "phase_transition"
    assert payload["to_phase"] == "editing"


def test_track_model_call_logs_failure_and_reraises(caplog):
    with caplog.at_level(logging.INFO, logger=ANALYTICS_LOGGER):
        with pytest.raises(ValueError):
            with track_model_call("gemini-2.5-flash-image-preview", service_id="apparel"):
                raise ValueError("boom")

    record = caplog.records[-1]
    assert record.extra_data["status"] == "failure"
    assert record.extra_data["details"] == {"error": "boom", "service_id": "apparel"}


def test_track_model_call_logs_success(caplog):
    with caplog.at_level(logging.INFO, logger=ANALYTICS_LOGGER):
        with track_model_call("gemini-2.5-flash-image-preview"):
            pass

    assert caplog.records[-1].extra_data["status"] == "success"


def test_phase_transition_event(caplog):
    with caplog.at_level(logging.INFO, logger=ANALYTICS_LOGGER):
        log_phase_transition("Generate", "editing", "generating", session_id="s1")

    data = caplog.records[-1].extra_data
    assert (data["from_phase"], data["to_phase"], data["action"]) == ("editing", "generating", "Generate")


def test_track_click_logs_event_field_and_runs_handler(caplog):
    @track_click(element_id="photo_editor_service_card", event_field="key")
    def on_click(e):
        yield e.key

    with caplog.at_level(logging.INFO, logger=ANALYTICS_LOGGER):
        results = list(on_click(SimpleNamespace(key="apparel")))

    assert results == ["apparel"]
    data = caplog.records[-1].extra_data
    assert data["event_type"] == "ui_click"
    assert data["element_id"] == "photo_editor_service_card"
    assert data["key"] == "apparel"


def test_unknown_handler_id_filter():
    log_filter = UnknownHandlerIdFilter()
    noisy = logging.LogRecord("mesop", logging.ERROR, __file__, 1, "Unknown handler id: 42", None, None)
    other = logging.LogRecord("mesop", logging.ERROR, __file__, 1, "Something else", None, None)

    assert log_filter.filter(noisy) is False
    assert log_filter.filter(other) is True
