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

# Dedicated logger for tracking the suppressed error
race_condition_logger = logging.getLogger("photo_edit_studio.race_condition_tracker")


class EditorError(Exception):
    """Base exception for photo editor errors.

    `notice_key` names the user-facing message in the editor's prompts file.
    """

    notice_key = "generic_error"

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class InvalidInputKind(EditorError):
    """The uploaded file does not declare an image content type."""

    notice_key = "invalid_input_kind"


class EmptyInstruction(EditorError):
    """Generate was requested with an empty instruction."""

    notice_key = "missing_inputs"


class NoSourceImage(EditorError):
    """Generate was requested before an image was uploaded."""

    notice_key = "missing_inputs"


class GenerationInProgress(EditorError):
    """A generation request is already in flight for this session."""

    notice_key = "generation_in_progress"


class UnknownService(EditorError):
    notice_key = "unknown_service"


class GenerationFailed(EditorError):
    """The generation call failed: transport, API rejection or empty result."""

    notice_key = "generation_failed"


class EmptyResult(GenerationFailed):
    """The generation call succeeded but returned no image part."""


class NothingToExport(EditorError):
    """Download was requested before an edited image exists."""

    notice_key = "nothing_to_export"


class MissingCredential(EditorError):
    """The Gemini API key is not configured. Fatal at startup."""

    notice_key = "missing_credential"


class UnknownHandlerIdFilter(logging.Filter):
    """A logging filter to suppress 'Unknown handler id' errors."""
    def filter(self, record):
        # Suppress the specific benign error message from Mesop
        if "Unknown handler id" in record.getMessage():
            # Log to a separate, non-disruptive logger for tracking purposes
            race_condition_logger.info("Suppressed 'Unknown handler id' error", extra={"original_record": record.getMessage()})
            return False # Prevent the original logger from processing it
        return True
