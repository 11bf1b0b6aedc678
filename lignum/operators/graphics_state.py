# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from ..core import error as lg_error
from ..core import types as lt

logger = logging.getLogger(__name__)


def save(ctxt) -> None:
    """
    **save**()


    pushes a copy of the current graphics state on the graphics state stack.
    All elements of the graphics state are saved, including the current
    transform, the clip region and the paint and line styles, but not the
    current path. The saved state can later be restored by a matching
    **restore**.

    **Errors**:     **stackoverflow** when the stack already holds
                    ``ctxt.max_stack_depth`` entries
    **See Also**:   **restore**, **reset**
    """
    if len(ctxt.gstate_stack) >= ctxt.max_stack_depth:
        raise lg_error.StackOverflowError(ctxt.max_stack_depth)

    ctxt.gstate_stack.append(ctxt.gstate.copy())


def restore(ctxt) -> None:
    """
    **restore**()


    resets the current graphics state from the one on the top of the graphics
    state stack and pops the stack, restoring the state in effect at the time
    of the matching **save**. If the stack is empty, **restore** has no effect.

    **Errors**:     none
    **See Also**:   **save**, **reset**
    """
    if len(ctxt.gstate_stack):
        ctxt.gstate = ctxt.gstate_stack.pop()
    else:
        logger.debug("restore with an empty state stack ignored")


def reset(ctxt) -> None:
    """
    **reset**()


    replaces the current graphics state with the default state and discards
    the current path together with the current point. The graphics state
    stack is left unchanged; only **restore** unwinds saved states.

    **See Also**:   **save**, **restore**, **begin_path**
    """
    ctxt.gstate = lt.GraphicsState()
    ctxt.path.begin_path()


# Attribute setters. Values are stored verbatim; enumerated attributes only
# check that the tag is one the renderers know.

def set_global_alpha(ctxt, value) -> None:
    ctxt.gstate.global_alpha = float(value)


def set_global_composite_operation(ctxt, value) -> None:
    ctxt.gstate.global_composite_operation = lg_error.check_tag(
        "global_composite_operation", value, lt.COMPOSITE_OPERATIONS)


def set_image_smoothing_enabled(ctxt, value) -> None:
    ctxt.gstate.image_smoothing_enabled = bool(value)


def set_image_smoothing_quality(ctxt, value) -> None:
    ctxt.gstate.image_smoothing_quality = lg_error.check_tag(
        "image_smoothing_quality", value, lt.SMOOTHING_QUALITIES)


def set_shadow_offset_x(ctxt, value) -> None:
    ctxt.gstate.shadow_offset_x = float(value)


def set_shadow_offset_y(ctxt, value) -> None:
    ctxt.gstate.shadow_offset_y = float(value)


def set_shadow_blur(ctxt, value) -> None:
    ctxt.gstate.shadow_blur = float(value)


def set_shadow_color(ctxt, value) -> None:
    ctxt.gstate.shadow_color = str(value)


def set_line_width(ctxt, value) -> None:
    """
    **line_width** = width


    sets the line width used by **stroke**. Zero, negative and NaN widths are
    stored as given; renderers clamp or ignore them.
    """
    ctxt.gstate.line_width = float(value)


def set_line_cap(ctxt, value) -> None:
    ctxt.gstate.line_cap = lg_error.check_tag("line_cap", value, lt.LINE_CAPS)


def set_line_join(ctxt, value) -> None:
    ctxt.gstate.line_join = lg_error.check_tag("line_join", value, lt.LINE_JOINS)


def set_miter_limit(ctxt, value) -> None:
    ctxt.gstate.miter_limit = float(value)


def set_line_dash(ctxt, segments) -> None:
    """
    **set_line_dash**(segments)


    sets the dash pattern used by **stroke**: alternating dash and gap lengths
    in user space. An empty list strokes solid lines. The list is stored as
    given, renderers repeat odd-length patterns.

    **See Also**:   **line_dash_offset**, **get_line_dash**
    """
    ctxt.gstate.line_dash = [float(s) for s in segments]


def get_line_dash(ctxt) -> list:
    return list(ctxt.gstate.line_dash)


def set_line_dash_offset(ctxt, value) -> None:
    ctxt.gstate.line_dash_offset = float(value)


def set_font(ctxt, value) -> None:
    ctxt.gstate.font = str(value)


def set_text_align(ctxt, value) -> None:
    ctxt.gstate.text_align = lg_error.check_tag("text_align", value, lt.TEXT_ALIGNS)


def set_text_baseline(ctxt, value) -> None:
    ctxt.gstate.text_baseline = lg_error.check_tag("text_baseline", value, lt.TEXT_BASELINES)


def set_direction(ctxt, value) -> None:
    ctxt.gstate.direction = lg_error.check_tag("direction", value, lt.DIRECTIONS)
