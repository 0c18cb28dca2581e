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

import mesop as me


@me.stateclass
class PageState:
    """Photo Editor Page State

    A projection of the server-side editor session; the controller in the
    session store is the source of truth.
    """

    panel: str = "landing"
    header_title: str = ""
    upload_title: str = ""
    upload_icon: str = ""
    placeholder: str = ""
    instruction_text: str = ""
    # Bumped to re-key the textarea when the session resets.
    instruction_textarea_key: int = 0

    show_auxiliary_tasks: bool = False
    auxiliary_task_tag: str = ""

    is_generating: bool = False
    controls_enabled: bool = False
    auxiliary_tasks_enabled: bool = False

    before_image_url: str = ""
    after_image_url: str = ""
    before_resolution: str = ""
    after_resolution: str = ""
    slider_percentage: float = 50.0

    show_download: bool = False
    export_url: str = ""

    show_snackbar: bool = False
    snackbar_message: str = ""
