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
import sys
from unittest import mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from models.requests import InlineImage
from routers import export_router
from services.editor_session_store import EditorSessionStore, get_session_store
from workflows.photo_editor.backend import ExportFile, GoHome, SelectService
from workflows.photo_editor.controller import EditorController


@pytest.fixture
def store(test_config):
    return EditorSessionStore(
        controller_factory=lambda session_id: EditorController(
            mock.Mock(), config=test_config, session_id=session_id
        ),
        max_exports=2,
        max_sessions=3,
    )


@pytest.fixture
def api_client(store):
    app = FastAPI()
    app.include_router(export_router.router)
    app.dependency_overrides[get_session_store] = lambda: store
    return TestClient(app)


def make_export(data="AAAA"):
    return ExportFile(
        file_name="ozgurs-photoshop-duzenlendi.png",
        image=InlineImage(data=data, mime_type="image/png"),
    )


def test_store_keeps_one_controller_per_session(store):
    first = store.get_controller("session-a")
    assert store.get_controller("session-a") is first
    assert store.get_controller("session-b") is not first

    store.drop_controller("session-a")
    assert store.get_controller("session-a") is not first


def test_store_evicts_oldest_export(store):
    first = store.put_export(make_export("AAAA"))
    second = store.put_export(make_export("AQID"))
    third = store.put_export(make_export("BAUG"))

    assert store.get_export(first) is None
    assert store.get_export(second) is not None
    assert store.get_export(third) is not None


def test_store_evicts_least_recently_used_controller(store):
    controllers = {session_id: store.get_controller(session_id) for session_id in "abc"}

    # Touching "a" makes "b" the least recently used session.
    assert store.get_controller("a") is controllers["a"]
    store.get_controller("d")

    assert store.get_controller("a") is controllers["a"]
    assert store.get_controller("c") is controllers["c"]
    assert store.get_controller("b") is not controllers["b"]


def test_store_controller_count_stays_bounded(store):
    for index in range(500):
        controller = store.get_controller(f"session-{index}")
        controller.dispatch(SelectService("background"))
        controller.dispatch(GoHome())

    assert len(store._controllers) == 3


def test_export_route_serves_attachment(store, api_client):
    export_id = store.put_export(make_export())

    response = api_client.get(export_router.export_url(export_id))

    assert response.status_code == 200
    assert response.content == b"\x00\x00\x00"
    assert response.headers["content-type"] == "image/png"
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="ozgurs-photoshop-duzenlendi.png"'
    )


def test_export_route_unknown_id(api_client):
    response = api_client.get("/api/exports/missing")
    assert response.status_code == 404
