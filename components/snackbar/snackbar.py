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
def snackbar(is_visible: bool, label: str):
    """Bottom-centered notice shown after a failed editor action."""
    if not is_visible:
        return
    with me.box(
        style=me.Style(
            position="fixed",
            bottom=24,
            left=0,
            right=0,
            display="flex",
            justify_content="center",
            z_index=1000,
        )
    ):
        with me.box(
            style=me.Style(
                background=me.theme_var("inverse-surface"),
                color=me.theme_var("inverse-on-surface"),
                border_radius=8,
                padding=me.Padding.symmetric(vertical=12, horizontal=16),
                box_shadow="0 3px 5px -1px #0003, 0 6px 10px #00000024",
            )
        ):
            me.text(label)
