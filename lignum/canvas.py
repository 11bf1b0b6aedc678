# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum Drawing Context

DrawingContext is the public operation surface of the engine. It owns one
live GraphicsState, the stack of saved states, the PathBuilder for the
current path, and a DisplayListBuilder that forwards finished draw operations
to the attached renderer. The operations themselves live in the operators
package and take the context as their first argument.

A DrawingContext is not thread safe; use one instance per thread or
document.
"""

from __future__ import annotations

import logging
from typing import Optional

from .core import types as lt
from .core.display_list_builder import DisplayListBuilder
from .core.paint_resolver import PaintResolver
from .core.path_builder import PathBuilder
from .core.text_layout import MonospaceTextShaper, TextMetrics, TextShaper
from .devices.recording.recording import RecordingRenderer
from .operators import clipping as lg_clipping
from .operators import graphics_state as lg_gstate
from .operators import image as lg_image
from .operators import matrix as lg_matrix
from .operators import paint as lg_paint
from .operators import painting as lg_painting
from .operators import path_query as lg_path_query
from .operators import text_show as lg_text

logger = logging.getLogger(__name__)


def _gstate_property(name: str, setter):
    def fget(self):
        return getattr(self.gstate, name)

    def fset(self, value):
        setter(self, value)

    return property(fget, fset, doc=f"Live graphics state attribute ``{name}``.")


class DrawingContext:
    def __init__(self, width: int = lt.DEFAULT_WIDTH, height: int = lt.DEFAULT_HEIGHT,
                 renderer=None, text_shaper: Optional[TextShaper] = None,
                 max_stack_depth: int = lt.G_STACK_MAX, record: bool = True) -> None:
        """
        Create a drawing context.

        Args:
            width: Canvas width in device units.
            height: Canvas height in device units.
            renderer: Renderer receiving draw operations. Defaults to a
                RecordingRenderer; pass ``record=False`` with no renderer to
                discard everything.
            text_shaper: Metrics provider for text operations. Defaults to
                the renderer's own shaper, else MonospaceTextShaper.
            max_stack_depth: Maximum number of nested save() calls.
        """
        self.width = int(width)
        self.height = int(height)
        self.max_stack_depth = max_stack_depth

        self.gstate = lt.GraphicsState()
        self.gstate_stack: list[lt.GraphicsState] = []
        self.path = PathBuilder()
        self.paint_resolver = PaintResolver()
        self.clip_counter = 0

        if renderer is None and record:
            renderer = RecordingRenderer(self.width, self.height)
        if renderer is not None:
            renderer.bind(self)
            if text_shaper is None:
                text_shaper = renderer.text_shaper()
        self.text_shaper = text_shaper if text_shaper is not None else MonospaceTextShaper()
        self.display_list_builder = DisplayListBuilder(renderer)

        logger.debug("created %dx%d context with %s", self.width, self.height,
                     type(renderer).__name__ if renderer is not None else "no renderer")

    @property
    def renderer(self):
        return self.display_list_builder.renderer

    # state
    def save(self) -> None:
        lg_gstate.save(self)

    def restore(self) -> None:
        lg_gstate.restore(self)

    def reset(self) -> None:
        lg_gstate.reset(self)

    @property
    def stack_depth(self) -> int:
        return len(self.gstate_stack)

    global_alpha = _gstate_property("global_alpha", lg_gstate.set_global_alpha)
    global_composite_operation = _gstate_property(
        "global_composite_operation", lg_gstate.set_global_composite_operation)
    image_smoothing_enabled = _gstate_property(
        "image_smoothing_enabled", lg_gstate.set_image_smoothing_enabled)
    image_smoothing_quality = _gstate_property(
        "image_smoothing_quality", lg_gstate.set_image_smoothing_quality)
    shadow_offset_x = _gstate_property("shadow_offset_x", lg_gstate.set_shadow_offset_x)
    shadow_offset_y = _gstate_property("shadow_offset_y", lg_gstate.set_shadow_offset_y)
    shadow_blur = _gstate_property("shadow_blur", lg_gstate.set_shadow_blur)
    shadow_color = _gstate_property("shadow_color", lg_gstate.set_shadow_color)

    # line styles
    line_width = _gstate_property("line_width", lg_gstate.set_line_width)
    line_cap = _gstate_property("line_cap", lg_gstate.set_line_cap)
    line_join = _gstate_property("line_join", lg_gstate.set_line_join)
    miter_limit = _gstate_property("miter_limit", lg_gstate.set_miter_limit)
    line_dash_offset = _gstate_property("line_dash_offset", lg_gstate.set_line_dash_offset)

    def set_line_dash(self, segments) -> None:
        lg_gstate.set_line_dash(self, segments)

    def get_line_dash(self) -> list:
        return lg_gstate.get_line_dash(self)

    # text styles
    font = _gstate_property("font", lg_gstate.set_font)
    text_align = _gstate_property("text_align", lg_gstate.set_text_align)
    text_baseline = _gstate_property("text_baseline", lg_gstate.set_text_baseline)
    direction = _gstate_property("direction", lg_gstate.set_direction)

    # paint
    fill_style = _gstate_property("fill_style", lg_paint.set_fill_style)
    stroke_style = _gstate_property("stroke_style", lg_paint.set_stroke_style)

    def create_linear_gradient(self, x0, y0, x1, y1) -> lt.Gradient:
        return lg_paint.create_linear_gradient(self, x0, y0, x1, y1)

    def create_radial_gradient(self, x0, y0, r0, x1, y1, r1) -> lt.Gradient:
        return lg_paint.create_radial_gradient(self, x0, y0, r0, x1, y1, r1)

    def create_pattern(self, image, repetition: str = lt.REPEAT) -> lt.Pattern:
        return lg_paint.create_pattern(self, image, repetition)

    # transforms
    def scale(self, sx, sy) -> None:
        lg_matrix.scale(self, sx, sy)

    def rotate(self, angle) -> None:
        lg_matrix.rotate(self, angle)

    def translate(self, tx, ty) -> None:
        lg_matrix.translate(self, tx, ty)

    def transform(self, a, b, c, d, e, f) -> None:
        lg_matrix.transform(self, a, b, c, d, e, f)

    def set_transform(self, a, b, c, d, e, f) -> None:
        lg_matrix.set_transform(self, a, b, c, d, e, f)

    def reset_transform(self) -> None:
        lg_matrix.reset_transform(self)

    def get_transform(self) -> tuple:
        return lg_matrix.get_transform(self)

    # path construction
    def begin_path(self) -> None:
        self.path.begin_path()

    def close_path(self) -> None:
        self.path.close_path()

    def move_to(self, x, y) -> None:
        self.path.move_to(x, y)

    def line_to(self, x, y) -> None:
        self.path.line_to(x, y)

    def bezier_curve_to(self, cp1x, cp1y, cp2x, cp2y, x, y) -> None:
        self.path.bezier_curve_to(cp1x, cp1y, cp2x, cp2y, x, y)

    def quadratic_curve_to(self, cpx, cpy, x, y) -> None:
        self.path.quadratic_curve_to(cpx, cpy, x, y)

    def arc(self, x, y, radius, start_angle, end_angle, counterclockwise: bool = False) -> None:
        self.path.arc(x, y, radius, start_angle, end_angle, counterclockwise)

    def arc_to(self, x1, y1, x2, y2, radius) -> None:
        self.path.arc_to(x1, y1, x2, y2, radius)

    def ellipse(self, x, y, radius_x, radius_y, rotation, start_angle, end_angle,
                counterclockwise: bool = False) -> None:
        self.path.ellipse(x, y, radius_x, radius_y, rotation, start_angle, end_angle,
                          counterclockwise)

    def rect(self, x, y, width, height) -> None:
        self.path.rect(x, y, width, height)

    def round_rect(self, x, y, width, height, radii=None) -> None:
        self.path.round_rect(x, y, width, height, radii)

    @property
    def current_point(self):
        return self.path.current_point

    # terminal path operations
    def fill(self, fill_rule: str = lt.FILL_RULE_NON_ZERO) -> None:
        lg_painting.fill(self, fill_rule)

    def stroke(self) -> None:
        lg_painting.stroke(self)

    def clip(self, fill_rule: str = lt.FILL_RULE_NON_ZERO) -> None:
        lg_clipping.clip(self, fill_rule)

    def is_point_in_path(self, x, y, fill_rule: str = lt.FILL_RULE_NON_ZERO) -> bool:
        return lg_path_query.is_point_in_path(self, x, y, fill_rule)

    def is_point_in_stroke(self, x, y) -> bool:
        return lg_path_query.is_point_in_stroke(self, x, y)

    # rectangles
    def fill_rect(self, x, y, width, height) -> None:
        lg_painting.fill_rect(self, x, y, width, height)

    def stroke_rect(self, x, y, width, height) -> None:
        lg_painting.stroke_rect(self, x, y, width, height)

    def clear_rect(self, x, y, width, height) -> None:
        lg_painting.clear_rect(self, x, y, width, height)

    # text
    def fill_text(self, text: str, x, y, max_width=None) -> None:
        lg_text.fill_text(self, text, x, y, max_width)

    def stroke_text(self, text: str, x, y, max_width=None) -> None:
        lg_text.stroke_text(self, text, x, y, max_width)

    def measure_text(self, text: str) -> TextMetrics:
        return lg_text.measure_text(self, text)

    # images
    def draw_image(self, image, dx, dy) -> None:
        lg_image.draw_image(self, image, dx, dy)

    def draw_image_scaled(self, image, dx, dy, dw, dh) -> None:
        lg_image.draw_image_scaled(self, image, dx, dy, dw, dh)

    def draw_image_subrect(self, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
        lg_image.draw_image_subrect(self, image, sx, sy, sw, sh, dx, dy, dw, dh)

    def create_image_data(self, width: int, height: int) -> lt.ImageData:
        return lg_image.create_image_data(self, width, height)

    def get_image_data(self, sx: int, sy: int, sw: int, sh: int) -> lt.ImageData:
        return lg_image.get_image_data(self, sx, sy, sw, sh)

    def put_image_data(self, image_data, dx: int, dy: int) -> None:
        lg_image.put_image_data(self, image_data, dx, dy)

    def put_image_data_dirty(self, image_data, dx: int, dy: int, dirty_x: int, dirty_y: int,
                             dirty_width: int, dirty_height: int) -> None:
        lg_image.put_image_data_dirty(self, image_data, dx, dy, dirty_x, dirty_y,
                                      dirty_width, dirty_height)

    def finish(self):
        """Finish the renderer and return its product (document, surface, ops)."""
        if self.renderer is None:
            return None
        return self.renderer.finish()
