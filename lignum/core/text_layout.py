# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Text layout support for fill_text, stroke_text and measure_text.

The engine does not shape glyphs itself. A TextShaper collaborator supplies
advance width and ascent/descent for a string in a CSS font; this module turns
those metrics into the anchor point (left end of the alphabetic baseline)
that renderers draw from.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from .types.constants import (
    DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, DIRECTION_RTL,
    TEXT_ALIGN_CENTER, TEXT_ALIGN_END, TEXT_ALIGN_LEFT, TEXT_ALIGN_RIGHT,
    TEXT_ALIGN_START, TEXT_BASELINE_BOTTOM, TEXT_BASELINE_HANGING,
    TEXT_BASELINE_IDEOGRAPHIC, TEXT_BASELINE_MIDDLE, TEXT_BASELINE_TOP,
)

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)(px|pt|em|rem|%)(?:/\S+)?$")
_STYLES = frozenset({"normal", "italic", "oblique"})
_WEIGHTS = frozenset({"normal", "bold", "bolder", "lighter",
                      "100", "200", "300", "400", "500", "600", "700", "800", "900"})
_UNIT_SCALE = {"px": 1.0, "pt": 4.0 / 3.0, "em": DEFAULT_FONT_SIZE,
               "rem": DEFAULT_FONT_SIZE, "%": DEFAULT_FONT_SIZE / 100.0}


@dataclass(frozen=True)
class FontSpec:
    size: float = DEFAULT_FONT_SIZE
    family: str = DEFAULT_FONT_FAMILY
    weight: str = "normal"
    style: str = "normal"

    @property
    def is_bold(self) -> bool:
        return self.weight in ("bold", "bolder") or (self.weight.isdigit() and int(self.weight) >= 600)

    @property
    def is_italic(self) -> bool:
        return self.style in ("italic", "oblique")

    @property
    def primary_family(self) -> str:
        return self.family.split(",")[0].strip().strip("'\"")


def parse_font(font: str) -> FontSpec:
    """Parse a CSS font shorthand such as ``"bold 16px 'DejaVu Sans'"``.

    Args:
        font: CSS font string as stored in the graphics state.

    Returns:
        FontSpec with the size in pixels. Strings without a recognizable size
        fall back to the 10px sans-serif default.
    """
    tokens = font.split()
    style = "normal"
    weight = "normal"
    for index, token in enumerate(tokens):
        match = _SIZE_RE.match(token)
        if match:
            size = float(match.group(1)) * _UNIT_SCALE[match.group(2)]
            family = " ".join(tokens[index + 1:]) or DEFAULT_FONT_FAMILY
            return FontSpec(size, family, weight, style)
        lowered = token.lower()
        if lowered in _STYLES and lowered != "normal":
            style = lowered
        elif lowered in _WEIGHTS and lowered != "normal":
            weight = lowered

    logger.debug("font %r has no size, using the default font", font)
    return FontSpec()


@dataclass(frozen=True)
class TextMetrics:
    width: float
    ascent: float = 0.0
    descent: float = 0.0


class TextShaper:
    """Supplies metrics for a string rendered in a CSS font."""

    def measure(self, text: str, font: str) -> TextMetrics:
        raise NotImplementedError


class MonospaceTextShaper(TextShaper):
    """
    Approximate metrics without font files: every character advances
    ``advance`` times the font size.
    """

    def __init__(self, advance: float = 0.6, ascent: float = 0.8, descent: float = 0.2):
        self.advance = advance
        self.ascent = ascent
        self.descent = descent

    def measure(self, text: str, font: str) -> TextMetrics:
        size = parse_font(font).size
        return TextMetrics(len(text) * self.advance * size,
                           self.ascent * size, self.descent * size)


def resolve_alignment(align: str, direction: str) -> str:
    """Map start/end onto left/right for the given text direction."""
    rtl = direction == DIRECTION_RTL
    if align == TEXT_ALIGN_START:
        return TEXT_ALIGN_RIGHT if rtl else TEXT_ALIGN_LEFT
    if align == TEXT_ALIGN_END:
        return TEXT_ALIGN_LEFT if rtl else TEXT_ALIGN_RIGHT
    return align


def compute_text_anchor(x, y, metrics: TextMetrics, align: str, baseline: str,
                        direction: str, scale_x: float = 1.0):
    """
    Left end of the alphabetic baseline for text requested at (x, y).

    The y axis points down, so baselines above the alphabetic one move the
    anchor down by the ascent.
    """
    width = metrics.width * scale_x
    align = resolve_alignment(align, direction)
    if align == TEXT_ALIGN_CENTER:
        anchor_x = x - width / 2.0
    elif align == TEXT_ALIGN_RIGHT:
        anchor_x = x - width
    else:
        anchor_x = x

    if baseline == TEXT_BASELINE_TOP:
        anchor_y = y + metrics.ascent
    elif baseline == TEXT_BASELINE_HANGING:
        anchor_y = y + 0.8 * metrics.ascent
    elif baseline == TEXT_BASELINE_MIDDLE:
        anchor_y = y + (metrics.ascent - metrics.descent) / 2.0
    elif baseline in (TEXT_BASELINE_IDEOGRAPHIC, TEXT_BASELINE_BOTTOM):
        anchor_y = y - metrics.descent
    else:
        anchor_y = y

    return anchor_x, anchor_y


def squeeze_factor(width: float, max_width) -> float:
    """
    Horizontal scale needed to fit ``width`` into ``max_width``.

    Returns 1.0 when no squeezing is needed and 0.0 when nothing may be
    drawn (max_width zero, negative or NaN).
    """
    if max_width is None:
        return 1.0
    if math.isnan(max_width) or max_width <= 0:
        return 0.0
    if width > max_width:
        return max_width / width
    return 1.0
