# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Renderer collaborators.

A renderer consumes the draw operations a DrawingContext emits, each one
carrying the primitives it needs and a snapshot of the graphics state.
Subclasses override the render_* methods for the operations they can
represent; everything else raises UnsupportedOperationError.

Devices:
- recording: keeps the operations in a DisplayList
- png: rasterizes with Cairo onto an ImageSurface
- svg: writes an SVG document with xml.etree.ElementTree
"""

from __future__ import annotations

import math

from ..core import error as lg_error
from ..core import types as lt
from ..core.paint_resolver import PaintResolver
from ..operators.matrix import matrix_inverse


class Renderer:
    name = "renderer"

    def __init__(self, width: int = lt.DEFAULT_WIDTH, height: int = lt.DEFAULT_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.paint_resolver = PaintResolver()

    def bind(self, ctxt) -> None:
        """Called by the DrawingContext the renderer is attached to."""
        self.paint_resolver = ctxt.paint_resolver

    def text_shaper(self):
        """Text shaper matching this renderer, or None for the default."""
        return None

    def emit(self, op) -> None:
        if isinstance(op, lt.FillPath):
            self.render_fill_path(op)
        elif isinstance(op, lt.StrokePath):
            self.render_stroke_path(op)
        elif isinstance(op, lt.Clip):
            self.render_clip(op)
        elif isinstance(op, lt.FillRect):
            self.render_fill_rect(op)
        elif isinstance(op, lt.StrokeRect):
            self.render_stroke_rect(op)
        elif isinstance(op, lt.ClearRect):
            self.render_clear_rect(op)
        elif isinstance(op, lt.FillText):
            self.render_fill_text(op)
        elif isinstance(op, lt.StrokeText):
            self.render_stroke_text(op)
        elif isinstance(op, lt.DrawImage):
            self.render_draw_image(op)
        elif isinstance(op, lt.PutImageData):
            self.render_put_image_data(op)
        else:
            self._unsupported(type(op).__name__)

    def _unsupported(self, operation: str):
        raise lg_error.UnsupportedOperationError(operation, self.name)

    def render_fill_path(self, op) -> None:
        self._unsupported("fill")

    def render_stroke_path(self, op) -> None:
        self._unsupported("stroke")

    def render_clip(self, op) -> None:
        self._unsupported("clip")

    def render_fill_rect(self, op) -> None:
        self._unsupported("fill_rect")

    def render_stroke_rect(self, op) -> None:
        self._unsupported("stroke_rect")

    def render_clear_rect(self, op) -> None:
        self._unsupported("clear_rect")

    def render_fill_text(self, op) -> None:
        self._unsupported("fill_text")

    def render_stroke_text(self, op) -> None:
        self._unsupported("stroke_text")

    def render_draw_image(self, op) -> None:
        self._unsupported("draw_image")

    def render_put_image_data(self, op) -> None:
        self._unsupported("put_image_data")

    def get_image_data(self, sx: int, sy: int, sw: int, sh: int) -> lt.ImageData:
        self._unsupported("get_image_data")

    def finish(self):
        return None


def validate_image_buffer(image) -> bytes:
    """Return the RGBA bytes of an image source, checking their length."""
    data = image.data_rgba
    if data is None:
        raise lg_error.UnsupportedOperationError("image source without pixel data")
    if len(data) != image.width * image.height * 4:
        raise lg_error.InvalidImageDataError(image.width, image.height, len(data))
    return bytes(data)


def usable_matrix(m) -> bool:
    """True when ``m`` is finite and invertible; other transforms draw nothing."""
    return all(math.isfinite(v) for v in m) and matrix_inverse(m) is not None


def effective_alpha(global_alpha: float) -> float:
    if not math.isfinite(global_alpha):
        return 1.0
    return max(0.0, min(1.0, global_alpha))


def dash_pattern(segments) -> list:
    """
    Dash list a renderer should use for a canvas dash array.

    Lists with negative or non-finite entries, or only zeros, stroke solid.
    Odd-length lists are repeated once to make them even.
    """
    if not segments:
        return []
    if any(not math.isfinite(s) or s < 0 for s in segments):
        return []
    if not any(segments):
        return []
    if len(segments) % 2:
        return list(segments) * 2
    return list(segments)


def normalized_rect(x, y, w, h):
    """Rectangle with negative sizes flipped so width and height are >= 0."""
    if w < 0:
        x, w = x + w, -w
    if h < 0:
        y, h = y + h, -h
    return x, y, w, h
