# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum - a backend-agnostic 2D vector drawing engine.

A DrawingContext offers the HTML canvas drawing model (paths, transforms,
a save/restore state stack, clipping, paints, text and images) and hands
every finished primitive, with a snapshot of the graphics state, to a
renderer: RecordingRenderer keeps them, PngRenderer rasterizes them with
Cairo, SvgRenderer writes an SVG document.

    from lignum import DrawingContext
    from lignum.devices.svg import SvgRenderer

    ctxt = DrawingContext(200, 100, renderer=SvgRenderer(200, 100))
    ctxt.fill_style = "#36c"
    ctxt.round_rect(10, 10, 180, 80, 12)
    ctxt.fill()
    print(ctxt.finish())
"""

__version__ = "0.1.0"

from .canvas import DrawingContext
from .core.error import (
    InvalidImageDataError, InvalidValueError, LignumError, RendererError,
    ScriptError, StackOverflowError, UnsupportedOperationError,
)
from .core.text_layout import MonospaceTextShaper, TextMetrics, TextShaper
from .core.types import Color, Gradient, ImageData, Pattern
from .devices import Renderer
from .devices.recording import RecordingRenderer
