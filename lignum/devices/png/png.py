# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PNG Output Device

This device rasterizes draw operations onto a Cairo ARGB32 ImageSurface and
writes PNG files. It uses the shared CairoRenderer for all drawing; the
surface starts fully transparent like a fresh canvas unless a background
color is given.
"""

from __future__ import annotations

import logging
import os

import cairo

from ..common.cairo_renderer import CairoRenderer
from ..common.css_color import color_or_black
from ...core import types as lt

logger = logging.getLogger(__name__)

# Anti-aliasing mode for Cairo rendering.
# Options: cairo.ANTIALIAS_NONE, ANTIALIAS_FAST, ANTIALIAS_GOOD,
#          ANTIALIAS_BEST, ANTIALIAS_GRAY, ANTIALIAS_SUBPIXEL
ANTIALIAS_MODE = cairo.ANTIALIAS_GRAY

ANTIALIAS_MAP = {
    "none": cairo.ANTIALIAS_NONE,
    "fast": cairo.ANTIALIAS_FAST,
    "good": cairo.ANTIALIAS_GOOD,
    "best": cairo.ANTIALIAS_BEST,
    "gray": cairo.ANTIALIAS_GRAY,
    "subpixel": cairo.ANTIALIAS_SUBPIXEL,
}


class PngRenderer(CairoRenderer):
    name = "png"

    def __init__(self, width: int = lt.DEFAULT_WIDTH, height: int = lt.DEFAULT_HEIGHT,
                 background: str | None = None, antialias: str = "gray") -> None:
        """
        Args:
            width: Surface width in pixels.
            height: Surface height in pixels.
            background: Optional CSS color painted before any drawing.
            antialias: One of the ANTIALIAS_MAP keys.
        """
        self.surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, int(width), int(height))
        super().__init__(cairo.Context(self.surface), width, height)
        self.antialias = ANTIALIAS_MAP.get(antialias, ANTIALIAS_MODE)

        if background is not None:
            cc = self.cairo_ctx
            cc.set_source_rgba(*color_or_black(background))
            cc.rectangle(0, 0, self.width, self.height)
            cc.fill()

    def write_png(self, path: str) -> str:
        """Write the surface to ``path`` and return the absolute file name."""
        output_file = os.path.abspath(path)
        self.surface.flush()
        self.surface.write_to_png(output_file)
        logger.debug("wrote %dx%d PNG to %s", self.width, self.height, output_file)
        return output_file

    def finish(self) -> cairo.ImageSurface:
        self.surface.flush()
        return self.surface
