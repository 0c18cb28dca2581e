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

"""Landing page card for one editing service."""

import typing

import mesop as me

from workflows.photo_editor.photo_editor_config import EditService


@me.component
def service_card(
    service: EditService,
    on_click: typing.Callable[[me.ClickEvent], typing.Any],
    disabled: bool = False,
):
    """A clickable card; the click event's key is the service id."""
    with me.content_button(
        on_click=on_click,
        key=service.id,
        disabled=disabled,
        style=me.Style(
            width=240,
            height=200,
            border_radius=12,
            background=me.theme_var("surface-container"),
            padding=me.Padding.all(16),
        ),
    ):
        with me.box(
            style=me.Style(
                display="flex",
                flex_direction="column",
                align_items="center",
                gap=8,
                text_align="center",
            )
        ):
            me.icon(service.icon, style=me.Style(font_size=36, width=36, height=36))
            me.text(service.title, type="headline-6")
            me.text(
                service.description,
                style=me.Style(
                    font_size=13,
                    color=me.theme_var("on-surface-variant"),
                    white_space="normal",
                ),
            )
