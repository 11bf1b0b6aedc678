# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cairo Gradient Module

Builds cairo.LinearGradient and cairo.RadialGradient sources from Gradient
paints. Stops are sorted stably by offset so equal offsets keep insertion
order (a hard color edge), and offsets are clamped to 0.0-1.0.
"""

import logging

import cairo

from ...core import types as lt
from ...core.paint_resolver import degenerate_gradient, sorted_stops
from .css_color import color_or_black

logger = logging.getLogger(__name__)


def gradient_source(gradient, alpha: float = 1.0):
    """
    Create the Cairo source for a gradient paint.

    Returns None when the gradient paints nothing: no stops, coincident end
    points, negative radii or non-finite geometry.
    """
    stops = sorted_stops(gradient.stops)
    if not stops:
        return None

    kind = gradient.kind
    if degenerate_gradient(kind):
        logger.debug("degenerate gradient %r paints nothing", kind)
        return None

    if isinstance(kind, lt.RadialGradientKind):
        pat = cairo.RadialGradient(kind.x0, kind.y0, kind.r0, kind.x1, kind.y1, kind.r1)
    else:
        pat = cairo.LinearGradient(kind.x0, kind.y0, kind.x1, kind.y1)

    # canvas gradients pad with the end colors
    pat.set_extend(cairo.EXTEND_PAD)
    for stop in stops:
        r, g, b, a = color_or_black(stop.color)
        pat.add_color_stop_rgba(stop.offset, r, g, b, a * alpha)

    return pat
