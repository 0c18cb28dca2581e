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

"""Structured analytics events for the photo editor.

Every event is one INFO record on the `photo_edit_studio.analytics` logger
with an `extra_data` dict. Locally the dict is merged into a JSON line; on
Cloud Run the Cloud Logging handler turns it into a structured payload.
"""

import functools
import json
import logging
import os
import time
from contextlib import contextmanager

import mesop as me
from google.cloud import logging as cloud_logging

from state.state import AppState


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON."""

    def format(self, record):
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        if hasattr(record, "extra_data"):
            log_object.update(record.extra_data)
        return json.dumps(log_object, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Returns `name` with a single handler attached.

    Cloud Run sets K_SERVICE, in which case records go to Cloud Logging.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    if os.environ.get("K_SERVICE"):
        handler = cloud_logging.Client().get_default_handler()
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


analytics_logger = get_logger("photo_edit_studio.analytics")


def _current_page_and_session() -> tuple[str, str]:
    try:
        state = me.state(AppState)
        return state.current_page, state.session_id
    except Exception:
        # me.state is unavailable outside a Mesop request (threads, tests)
        return "unknown", "unknown"


def _log_event(event_type: str, message: str, **fields):
    extra_data = {"event_type": event_type, **fields}
    analytics_logger.info(message, extra={"extra_data": extra_data})


def log_page_view(page_name: str, session_id: str = None):
    _log_event("page_view", f"Page view: {page_name}", page_name=page_name, session_id=session_id)


def log_ui_click(element_id: str, page_name: str, session_id: str = None, extras: dict = None):
    _log_event(
        "ui_click",
        f"UI Click: {element_id} on {page_name}",
        element_id=element_id,
        page_name=page_name,
        session_id=session_id,
        **(extras or {}),
    )


def log_phase_transition(action: str, from_phase: str, to_phase: str, session_id: str = None):
    """Logs an editor session moving from one phase to another."""
    _log_event(
        "phase_transition",
        f"Phase: {from_phase} -> {to_phase} ({action})",
        action=action,
        from_phase=from_phase,
        to_phase=to_phase,
        session_id=session_id,
    )


def log_model_call(model_name: str, status: str, duration_ms: float = 0, details: dict = None):
    page_name, session_id = _current_page_and_session()
    _log_event(
        "model_call",
        f"Model Call: {model_name} ({status})",
        model_name=model_name,
        status=status,
        duration_ms=round(duration_ms, 2),
        page_name=page_name,
        session_id=session_id,
        details=details or {},
    )


def track_click(element_id: str, event_field: str | None = None):
    """Decorator that logs a UI click before running a Mesop event handler.

    `event_field` names an attribute of the event (for example `key` or
    `value`) to record alongside the click.
    """

    def decorator(handler_function):
        @functools.wraps(handler_function)
        def wrapper(event, *args, **kwargs):
            page_name, session_id = _current_page_and_session()
            extras = None
            if event_field:
                extras = {event_field: getattr(event, event_field, None)}
            log_ui_click(
                element_id=element_id,
                page_name=page_name,
                session_id=session_id,
                extras=extras,
            )
            return handler_function(event, *args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def track_model_call(model_name: str, **details):
    """Logs the duration and outcome of the model call in the `with` body."""
    start_time = time.time()
    try:
        yield
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        log_model_call(model_name, status="failure", duration_ms=duration_ms, details={"error": str(e), **details})
        raise
    duration_ms = (time.time() - start_time) * 1000
    log_model_call(model_name, status="success", duration_ms=duration_ms, details=details)
