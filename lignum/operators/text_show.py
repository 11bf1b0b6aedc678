# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import math
from typing import Optional

from ..core import types as lt
from ..core.text_layout import TextMetrics, compute_text_anchor, squeeze_factor

logger = logging.getLogger(__name__)


def measure_text(ctxt, text: str) -> TextMetrics:
    """
    **measure_text**(text)


    returns the metrics of ``text`` in the current font, as reported by the
    context's text shaper.
    """
    return ctxt.text_shaper.measure(str(text), ctxt.gstate.font)


def _layout(ctxt, text, x, y, max_width):
    metrics = measure_text(ctxt, text)
    scale_x = squeeze_factor(metrics.width, max_width)
    gs = ctxt.gstate
    anchor_x, anchor_y = compute_text_anchor(
        x, y, metrics, gs.text_align, gs.text_baseline, gs.direction, scale_x)
    return metrics, scale_x, anchor_x, anchor_y


def _show(ctxt, element_type, text, x, y, max_width: Optional[float]) -> None:
    text = str(text)
    if not (math.isfinite(x) and math.isfinite(y)):
        return

    metrics, scale_x, anchor_x, anchor_y = _layout(ctxt, text, x, y, max_width)
    if scale_x == 0.0:
        logger.debug("max_width %r leaves no room for %r", max_width, text)
        return

    ctxt.display_list_builder.add_graphics_operation(element_type(
        text, float(x), float(y), anchor_x, anchor_y, metrics.width * scale_x,
        max_width, scale_x, ctxt.gstate.copy()))


def fill_text(ctxt, text: str, x, y, max_width: Optional[float] = None) -> None:
    """
    **fill_text**(text, x, y, max_width=None)


    paints ``text`` with the fill style. (x, y) is interpreted according to
    text_align, text_baseline and direction; the draw operation carries the
    resulting anchor, the left end of the alphabetic baseline. When
    ``max_width`` is given and the text is wider, it is squeezed
    horizontally to fit. A zero, negative or NaN ``max_width`` draws nothing.

    **See Also**:   **stroke_text**, **measure_text**
    """
    _show(ctxt, lt.FillText, text, x, y, max_width)


def stroke_text(ctxt, text: str, x, y, max_width: Optional[float] = None) -> None:
    _show(ctxt, lt.StrokeText, text, x, y, max_width)
