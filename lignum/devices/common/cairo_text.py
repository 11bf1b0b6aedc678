# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cairo text support using the toy font API.

Font strings are parsed with parse_font() and mapped onto a toy font face;
fontconfig resolves the family name (including the generic sans-serif,
serif and monospace families) to a system font.
"""

import cairo

from ...core.text_layout import TextMetrics, TextShaper, parse_font


def select_font(cairo_ctx, font: str) -> None:
    spec = parse_font(font)
    slant = cairo.FONT_SLANT_ITALIC if spec.is_italic else cairo.FONT_SLANT_NORMAL
    weight = cairo.FONT_WEIGHT_BOLD if spec.is_bold else cairo.FONT_WEIGHT_NORMAL
    cairo_ctx.select_font_face(spec.primary_family, slant, weight)
    cairo_ctx.set_font_size(spec.size)


class CairoTextShaper(TextShaper):
    """Measures text with the same faces the Cairo renderer draws with."""

    def __init__(self) -> None:
        self._surface = cairo.ImageSurface(cairo.FORMAT_A8, 1, 1)
        self._ctx = cairo.Context(self._surface)

    def measure(self, text: str, font: str) -> TextMetrics:
        select_font(self._ctx, font)
        extents = self._ctx.text_extents(text)
        ascent, descent = self._ctx.font_extents()[:2]
        return TextMetrics(extents.x_advance, ascent, descent)
