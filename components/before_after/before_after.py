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

"""Before/after image comparison with a split slider."""

import typing

import mesop as me

COMPARISON_WIDTH = 640
COMPARISON_HEIGHT = 480


def split_width(percentage: float, total_width: int = COMPARISON_WIDTH) -> float:
    """Width in px of the visible part of the before image."""
    percentage = min(max(percentage, 0.0), 100.0)
    return round(total_width * percentage / 100, 2)


@me.component
def before_after(
    before_src: str,
    after_src: str,
    percentage: float,
    on_slider_change: typing.Callable[[me.SliderValueChangeEvent], typing.Any],
):
    """The after image fills the frame; the before image covers it up to the split."""
    image_style = me.Style(
        width=COMPARISON_WIDTH,
        height=COMPARISON_HEIGHT,
        object_fit="contain",
        position="absolute",
        top=0,
        left=0,
    )
    with me.box(
        style=me.Style(display="flex", flex_direction="column", align_items="center", gap=8)
    ):
        with me.box(
            style=me.Style(
                position="relative",
                width=COMPARISON_WIDTH,
                height=COMPARISON_HEIGHT,
                overflow_x="hidden",
                overflow_y="hidden",
                border_radius=12,
                background=me.theme_var("surface-variant"),
            )
        ):
            me.image(src=after_src, style=image_style)
            with me.box(
                style=me.Style(
                    position="absolute",
                    top=0,
                    left=0,
                    height=COMPARISON_HEIGHT,
                    width=split_width(percentage),
                    overflow_x="hidden",
                    overflow_y="hidden",
                    border=me.Border(right=me.BorderSide(width=2, style="solid", color="white")),
                )
            ):
                me.image(src=before_src, style=image_style)
        me.slider(
            min=0,
            max=100,
            step=0.5,
            value=percentage,
            on_value_change=on_slider_change,
            style=me.Style(width=COMPARISON_WIDTH),
        )
