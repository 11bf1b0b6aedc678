# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared Cairo Rendering Module

CairoRenderer draws the operations emitted by a DrawingContext onto any
Cairo context. Every operation is self-contained: the Cairo state is saved,
the snapshot's clip chain, composite operator and transform are installed,
the operation is drawn and the Cairo state is restored again.

Submodules:
- cairo_images: pixel format conversion and image filters
- cairo_shading: linear and radial gradient sources
- cairo_patterns: image pattern sources
- cairo_text: toy font selection and the Cairo text shaper
"""

import logging
import math

import cairo

from .. import (
    Renderer, dash_pattern, effective_alpha, normalized_rect, usable_matrix,
    validate_image_buffer,
)
from ...core import error as lg_error
from ...core import types as lt
from ...core.arc_geometry import (
    ellipse_to_beziers, normalize_sweep, quadratic_to_cubic,
    round_rect_to_segments, tangent_arc,
)
from .cairo_images import argb32_to_rgba, image_filter, surface_from_image
from .cairo_patterns import pattern_source
from .cairo_shading import gradient_source
from .cairo_text import CairoTextShaper, select_font
from .css_color import color_or_black

logger = logging.getLogger(__name__)

OPERATOR_MAP = {
    "source-over": cairo.OPERATOR_OVER,
    "source-in": cairo.OPERATOR_IN,
    "source-out": cairo.OPERATOR_OUT,
    "source-atop": cairo.OPERATOR_ATOP,
    "destination-over": cairo.OPERATOR_DEST_OVER,
    "destination-in": cairo.OPERATOR_DEST_IN,
    "destination-out": cairo.OPERATOR_DEST_OUT,
    "destination-atop": cairo.OPERATOR_DEST_ATOP,
    "lighter": cairo.OPERATOR_ADD,
    "copy": cairo.OPERATOR_SOURCE,
    "xor": cairo.OPERATOR_XOR,
    "multiply": cairo.OPERATOR_MULTIPLY,
    "screen": cairo.OPERATOR_SCREEN,
    "overlay": cairo.OPERATOR_OVERLAY,
    "darken": cairo.OPERATOR_DARKEN,
    "lighten": cairo.OPERATOR_LIGHTEN,
    "color-dodge": cairo.OPERATOR_COLOR_DODGE,
    "color-burn": cairo.OPERATOR_COLOR_BURN,
    "hard-light": cairo.OPERATOR_HARD_LIGHT,
    "soft-light": cairo.OPERATOR_SOFT_LIGHT,
    "difference": cairo.OPERATOR_DIFFERENCE,
    "exclusion": cairo.OPERATOR_EXCLUSION,
    "hue": cairo.OPERATOR_HSL_HUE,
    "saturation": cairo.OPERATOR_HSL_SATURATION,
    "color": cairo.OPERATOR_HSL_COLOR,
    "luminosity": cairo.OPERATOR_HSL_LUMINOSITY,
}

FILL_RULE_MAP = {
    lt.FILL_RULE_NON_ZERO: cairo.FILL_RULE_WINDING,
    lt.FILL_RULE_EVEN_ODD: cairo.FILL_RULE_EVEN_ODD,
}

LINE_CAP_MAP = {
    lt.LINE_CAP_BUTT: cairo.LINE_CAP_BUTT,
    lt.LINE_CAP_ROUND: cairo.LINE_CAP_ROUND,
    lt.LINE_CAP_SQUARE: cairo.LINE_CAP_SQUARE,
}

LINE_JOIN_MAP = {
    lt.LINE_JOIN_MITER: cairo.LINE_JOIN_MITER,
    lt.LINE_JOIN_ROUND: cairo.LINE_JOIN_ROUND,
    lt.LINE_JOIN_BEVEL: cairo.LINE_JOIN_BEVEL,
}


def _finite_element(elem) -> bool:
    return all(math.isfinite(v) for v in vars(elem).values() if isinstance(v, float))


class CairoRenderer(Renderer):
    name = "cairo"
    antialias = cairo.ANTIALIAS_DEFAULT

    def __init__(self, cairo_ctx, width: int = lt.DEFAULT_WIDTH,
                 height: int = lt.DEFAULT_HEIGHT) -> None:
        super().__init__(width, height)
        self.cairo_ctx = cairo_ctx

    def text_shaper(self):
        return CairoTextShaper()

    def emit(self, op) -> None:
        try:
            super().emit(op)
        except cairo.Error as e:
            raise lg_error.RendererError(f"cairo failed on {type(op).__name__}: {e}") from e

    # state

    def _apply_clip(self, clip) -> bool:
        """Install the clip chain; False when the clip region is empty."""
        cr = self.cairo_ctx
        cr.reset_clip()
        if clip is None:
            return True

        for entry in clip.chain():
            if not usable_matrix(entry.transform):
                return False
            cr.set_matrix(cairo.Matrix(*entry.transform))
            self._build_path(entry.path)
            cr.set_fill_rule(FILL_RULE_MAP.get(entry.fill_rule, cairo.FILL_RULE_WINDING))
            cr.clip()
        return True

    def _apply_state(self, state) -> bool:
        """
        Set up Cairo for one operation. Returns False when the operation
        cannot paint anything (empty clip, singular or non-finite transform).
        """
        cr = self.cairo_ctx
        if not self._apply_clip(state.clip):
            return False
        if not usable_matrix(state.transform):
            logger.debug("singular transform %r, operation skipped", state.transform)
            return False

        cr.set_matrix(cairo.Matrix(*state.transform))
        cr.set_operator(OPERATOR_MAP.get(state.global_composite_operation, cairo.OPERATOR_OVER))
        cr.set_antialias(self.antialias)
        return True

    def _apply_line_style(self, state) -> bool:
        width = state.line_width
        if not (math.isfinite(width) and width > 0):
            return False

        cr = self.cairo_ctx
        cr.set_line_width(width)
        cr.set_line_cap(LINE_CAP_MAP.get(state.line_cap, cairo.LINE_CAP_BUTT))
        cr.set_line_join(LINE_JOIN_MAP.get(state.line_join, cairo.LINE_JOIN_MITER))
        if math.isfinite(state.miter_limit) and state.miter_limit > 0:
            cr.set_miter_limit(state.miter_limit)

        offset = state.line_dash_offset if math.isfinite(state.line_dash_offset) else 0.0
        cr.set_dash(dash_pattern(state.line_dash), offset)
        return True

    def _paint(self, paint, state, draw) -> None:
        """Install ``paint`` as the source and call ``draw`` (fill, stroke...)."""
        cr = self.cairo_ctx
        alpha = effective_alpha(state.global_alpha)
        if alpha <= 0.0:
            return

        paint = lt.as_paint(paint)
        if isinstance(paint, lt.Color):
            r, g, b, a = color_or_black(paint.value)
            cr.set_source_rgba(r, g, b, a * alpha)
            draw()
        elif isinstance(paint, lt.Gradient):
            source = gradient_source(paint, alpha)
            if source is None:
                return
            cr.set_source(source)
            draw()
        elif isinstance(paint, lt.Pattern):
            source = pattern_source(paint, state, self.name)
            if source is None:
                return
            if alpha < 1.0:
                # surface sources carry no alpha of their own
                cr.push_group()
                cr.set_source(source)
                draw()
                cr.pop_group_to_source()
                cr.paint_with_alpha(alpha)
            else:
                cr.set_source(source)
                draw()

    # paths

    def _ensure_point(self, x, y) -> None:
        if not self.cairo_ctx.has_current_point():
            self.cairo_ctx.move_to(x, y)

    def _add_arc(self, cx, cy, rx, ry, rotation, start, end, ccw) -> None:
        cr = self.cairo_ctx
        if not all(math.isfinite(v) for v in (cx, cy, rx, ry, rotation, start, end)):
            return
        if rx < 0 or ry < 0:
            logger.debug("arc with radius (%s, %s) skipped", rx, ry)
            cr.line_to(cx, cy)
            return

        sweep = normalize_sweep(start, end, ccw)

        if rx == 0 or ry == 0:
            # collapsed ellipse, scale(0) would make the matrix singular
            (sx, sy), curves = ellipse_to_beziers(cx, cy, rx, ry, rotation, start, end, ccw)
            cr.line_to(sx, sy)
            for c in curves:
                cr.curve_to(c.cp1x, c.cp1y, c.cp2x, c.cp2y, c.x, c.y)
            return

        add = cr.arc if sweep >= 0 else cr.arc_negative
        if rx == ry and rotation == 0:
            add(cx, cy, rx, start, start + sweep)
            return

        matrix = cr.get_matrix()
        cr.translate(cx, cy)
        cr.rotate(rotation)
        cr.scale(rx, ry)
        add(0.0, 0.0, 1.0, start, start + sweep)
        cr.set_matrix(matrix)

    def _build_path(self, path) -> None:
        cr = self.cairo_ctx
        cr.new_path()

        for elem in path:
            if not isinstance(elem, (lt.Arc, lt.Ellipse)) and not _finite_element(elem):
                logger.debug("non-finite %s skipped", type(elem).__name__)
                continue

            if isinstance(elem, lt.MoveTo):
                cr.move_to(elem.x, elem.y)
                continue
            elif isinstance(elem, lt.LineTo):
                cr.line_to(elem.x, elem.y)
                continue
            elif isinstance(elem, lt.CubicTo):
                self._ensure_point(elem.cp1x, elem.cp1y)
                cr.curve_to(elem.cp1x, elem.cp1y, elem.cp2x, elem.cp2y, elem.x, elem.y)
                continue
            elif isinstance(elem, lt.QuadraticTo):
                self._ensure_point(elem.cpx, elem.cpy)
                x0, y0 = cr.get_current_point()
                c = quadratic_to_cubic(x0, y0, elem.cpx, elem.cpy, elem.x, elem.y)
                cr.curve_to(c.cp1x, c.cp1y, c.cp2x, c.cp2y, c.x, c.y)
                continue
            elif isinstance(elem, lt.Arc):
                self._add_arc(elem.x, elem.y, elem.radius, elem.radius, 0.0,
                              elem.start_angle, elem.end_angle, elem.ccw)
                continue
            elif isinstance(elem, lt.Ellipse):
                self._add_arc(elem.x, elem.y, elem.radius_x, elem.radius_y, elem.rotation,
                              elem.start_angle, elem.end_angle, elem.ccw)
                continue
            elif isinstance(elem, lt.ArcTo):
                self._ensure_point(elem.x1, elem.y1)
                x0, y0 = cr.get_current_point()
                tangent = tangent_arc(x0, y0, elem.x1, elem.y1, elem.x2, elem.y2, elem.radius)
                if tangent is None:
                    cr.line_to(elem.x1, elem.y1)
                else:
                    self._add_arc(tangent.cx, tangent.cy, tangent.radius, tangent.radius, 0.0,
                                  tangent.start_angle, tangent.end_angle, tangent.ccw)
                continue
            elif isinstance(elem, lt.Rect):
                cr.rectangle(elem.x, elem.y, elem.width, elem.height)
                continue
            elif isinstance(elem, lt.RoundRect):
                for seg in round_rect_to_segments(elem.x, elem.y, elem.width,
                                                  elem.height, elem.radii):
                    if isinstance(seg, lt.MoveTo):
                        cr.move_to(seg.x, seg.y)
                    elif isinstance(seg, lt.LineTo):
                        cr.line_to(seg.x, seg.y)
                    elif isinstance(seg, lt.CubicTo):
                        cr.curve_to(seg.cp1x, seg.cp1y, seg.cp2x, seg.cp2y, seg.x, seg.y)
                    else:
                        cr.close_path()
                # the next subpath starts at the rectangle origin
                cr.move_to(elem.x, elem.y)
                continue
            elif isinstance(elem, lt.ClosePath):
                cr.close_path()

    # operations

    def render_fill_path(self, op) -> None:
        cr = self.cairo_ctx
        cr.save()
        try:
            if not self._apply_state(op.state):
                return
            self._build_path(op.path)
            cr.set_fill_rule(FILL_RULE_MAP.get(op.fill_rule, cairo.FILL_RULE_WINDING))
            self._paint(op.state.fill_style, op.state, cr.fill)
        finally:
            cr.restore()

    def render_stroke_path(self, op) -> None:
        cr = self.cairo_ctx
        cr.save()
        try:
            if not self._apply_state(op.state) or not self._apply_line_style(op.state):
                return
            self._build_path(op.path)
            self._paint(op.state.stroke_style, op.state, cr.stroke)
        finally:
            cr.restore()

    def render_clip(self, op) -> None:
        # later snapshots carry the clip chain, nothing is drawn here
        logger.debug("clip %d installed", op.state.clip.serial if op.state.clip else -1)

    def render_fill_rect(self, op) -> None:
        cr = self.cairo_ctx
        cr.save()
        try:
            if not self._apply_state(op.state):
                return
            cr.new_path()
            cr.rectangle(op.x, op.y, op.width, op.height)
            cr.set_fill_rule(cairo.FILL_RULE_WINDING)
            self._paint(op.state.fill_style, op.state, cr.fill)
        finally:
            cr.restore()

    def render_stroke_rect(self, op) -> None:
        cr = self.cairo_ctx
        cr.save()
        try:
            if not self._apply_state(op.state) or not self._apply_line_style(op.state):
                return
            cr.new_path()
            if op.width == 0 or op.height == 0:
                # a zero-area rectangle strokes as a single line
                cr.move_to(op.x, op.y)
                cr.line_to(op.x + op.width, op.y + op.height)
            else:
                cr.rectangle(op.x, op.y, op.width, op.height)
            self._paint(op.state.stroke_style, op.state, cr.stroke)
        finally:
            cr.restore()

    def render_clear_rect(self, op) -> None:
        cr = self.cairo_ctx
        cr.save()
        try:
            if not self._apply_state(op.state):
                return
            cr.set_operator(cairo.OPERATOR_CLEAR)
            cr.new_path()
            cr.rectangle(op.x, op.y, op.width, op.height)
            cr.fill()
        finally:
            cr.restore()

    def _render_text(self, op, stroke: bool) -> None:
        cr = self.cairo_ctx
        state = op.state
        cr.save()
        try:
            if not self._apply_state(state):
                return
            if stroke and not self._apply_line_style(state):
                return
            select_font(cr, state.font)
            cr.translate(op.anchor_x, op.anchor_y)
            if op.scale_x != 1.0:
                cr.scale(op.scale_x, 1.0)
            cr.new_path()
            cr.move_to(0, 0)
            cr.text_path(op.text)
            if stroke:
                self._paint(state.stroke_style, state, cr.stroke)
            else:
                cr.set_fill_rule(cairo.FILL_RULE_WINDING)
                self._paint(state.fill_style, state, cr.fill)
        finally:
            cr.restore()

    def render_fill_text(self, op) -> None:
        self._render_text(op, stroke=False)

    def render_stroke_text(self, op) -> None:
        self._render_text(op, stroke=True)

    def render_draw_image(self, op) -> None:
        surface = surface_from_image(op.image)
        if surface is None:
            return

        sx, sy, sw, sh = normalized_rect(op.sx, op.sy, op.sw, op.sh)
        dx, dy, dw, dh = normalized_rect(op.dx, op.dy, op.dw, op.dh)

        cr = self.cairo_ctx
        cr.save()
        try:
            if not self._apply_state(op.state):
                return
            alpha = effective_alpha(op.state.global_alpha)
            cr.translate(dx, dy)
            cr.scale(dw / sw, dh / sh)
            cr.set_source_surface(surface, -sx, -sy)
            cr.get_source().set_filter(image_filter(op.state))
            cr.new_path()
            cr.rectangle(0, 0, sw, sh)
            cr.clip()
            cr.paint_with_alpha(alpha)
        finally:
            cr.restore()

    def render_put_image_data(self, op) -> None:
        image = op.image_data
        validate_image_buffer(image)

        if op.dirty is None:
            x, y, w, h = 0, 0, image.width, image.height
        else:
            x, y, w, h = normalized_rect(*op.dirty)
        # only the part of the dirty rectangle inside the image is written
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, image.width), min(y + h, image.height)
        if x1 <= x0 or y1 <= y0:
            return

        surface = surface_from_image(image)
        cr = self.cairo_ctx
        cr.save()
        try:
            cr.reset_clip()
            cr.identity_matrix()
            cr.set_operator(cairo.OPERATOR_SOURCE)
            cr.set_source_surface(surface, op.dx, op.dy)
            cr.get_source().set_filter(cairo.FILTER_NEAREST)
            cr.new_path()
            cr.rectangle(op.dx + x0, op.dy + y0, x1 - x0, y1 - y0)
            cr.fill()
        finally:
            cr.restore()

    def get_image_data(self, sx: int, sy: int, sw: int, sh: int) -> lt.ImageData:
        """
        Read back device pixels from an image surface target.

        Negative sizes read the rectangle to the left of or above the origin.
        A zero size raises InvalidValueError.
        """
        target = self.cairo_ctx.get_target()
        if not isinstance(target, cairo.ImageSurface):
            self._unsupported("get_image_data")
        if sw == 0 or sh == 0:
            raise lg_error.InvalidValueError("get_image_data size", (sw, sh))

        sx, sy, sw, sh = normalized_rect(sx, sy, sw, sh)
        return lt.ImageData(sw, sh, argb32_to_rgba(target, sx, sy, sw, sh))
