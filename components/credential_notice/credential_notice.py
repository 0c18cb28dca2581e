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


@me.component
def credential_notice(message: str):
    """Static page shown instead of the editor when the API key is missing."""
    with me.box(style=me.Style(padding=me.Padding.all(32), text_align="center")):
        me.text("API Anahtarı Eksik", type="headline-4")
        me.text(message)
