# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum Types Constants Module

This module contains the enumerated attribute tags, default graphics state
values and numeric tolerances used throughout the Lignum drawing engine.
Tags use the same spelling as the HTML canvas API so that values read from
scripts can be stored verbatim.
"""

# Graphics state stack limits
G_STACK_MAX = 512                           # Default maximum save() depth

# line caps
LINE_CAP_BUTT = "butt"
LINE_CAP_ROUND = "round"
LINE_CAP_SQUARE = "square"
LINE_CAPS = frozenset({LINE_CAP_BUTT, LINE_CAP_ROUND, LINE_CAP_SQUARE})

# line joins
LINE_JOIN_ROUND = "round"
LINE_JOIN_BEVEL = "bevel"
LINE_JOIN_MITER = "miter"
LINE_JOINS = frozenset({LINE_JOIN_ROUND, LINE_JOIN_BEVEL, LINE_JOIN_MITER})

# fill rules
FILL_RULE_NON_ZERO = "nonzero"
FILL_RULE_EVEN_ODD = "evenodd"
FILL_RULES = frozenset({FILL_RULE_NON_ZERO, FILL_RULE_EVEN_ODD})

# text alignment
TEXT_ALIGN_LEFT = "left"
TEXT_ALIGN_RIGHT = "right"
TEXT_ALIGN_CENTER = "center"
TEXT_ALIGN_START = "start"
TEXT_ALIGN_END = "end"
TEXT_ALIGNS = frozenset({
    TEXT_ALIGN_LEFT, TEXT_ALIGN_RIGHT, TEXT_ALIGN_CENTER,
    TEXT_ALIGN_START, TEXT_ALIGN_END,
})

# text baselines
TEXT_BASELINE_TOP = "top"
TEXT_BASELINE_HANGING = "hanging"
TEXT_BASELINE_MIDDLE = "middle"
TEXT_BASELINE_ALPHABETIC = "alphabetic"
TEXT_BASELINE_IDEOGRAPHIC = "ideographic"
TEXT_BASELINE_BOTTOM = "bottom"
TEXT_BASELINES = frozenset({
    TEXT_BASELINE_TOP, TEXT_BASELINE_HANGING, TEXT_BASELINE_MIDDLE,
    TEXT_BASELINE_ALPHABETIC, TEXT_BASELINE_IDEOGRAPHIC, TEXT_BASELINE_BOTTOM,
})

# text direction
DIRECTION_LTR = "ltr"
DIRECTION_RTL = "rtl"
DIRECTION_INHERIT = "inherit"
DIRECTIONS = frozenset({DIRECTION_LTR, DIRECTION_RTL, DIRECTION_INHERIT})

# image smoothing quality
SMOOTHING_LOW = "low"
SMOOTHING_MEDIUM = "medium"
SMOOTHING_HIGH = "high"
SMOOTHING_QUALITIES = frozenset({SMOOTHING_LOW, SMOOTHING_MEDIUM, SMOOTHING_HIGH})

# pattern repetition
REPEAT = "repeat"
REPEAT_X = "repeat-x"
REPEAT_Y = "repeat-y"
NO_REPEAT = "no-repeat"
REPETITIONS = frozenset({REPEAT, REPEAT_X, REPEAT_Y, NO_REPEAT})

# compositing operations
COMPOSITE_SOURCE_OVER = "source-over"
COMPOSITE_OPERATIONS = frozenset({
    "source-over", "source-in", "source-out", "source-atop",
    "destination-over", "destination-in", "destination-out", "destination-atop",
    "lighter", "copy", "xor",
    "multiply", "screen", "overlay", "darken", "lighten",
    "color-dodge", "color-burn", "hard-light", "soft-light",
    "difference", "exclusion", "hue", "saturation", "color", "luminosity",
})

# Default graphics state values
DEFAULT_FILL_STYLE = "#000"
DEFAULT_STROKE_STYLE = "#000"
DEFAULT_SHADOW_COLOR = "rgba(0,0,0,0)"
DEFAULT_FONT = "10px sans-serif"
DEFAULT_FONT_SIZE = 10.0
DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_LINE_WIDTH = 1.0
DEFAULT_MITER_LIMIT = 10.0
IDENTITY_MATRIX = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

# Default canvas size (matches the HTML canvas element)
DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 150

# Geometry tolerances
POINT_EPSILON = 1e-9                        # Coincident points for arc_to
COLLINEAR_EPSILON = 1e-6                    # |1 -/+ dot| for collinear edges
ARC_SWEEP_EPSILON = 1e-12                   # Arcs shorter than this emit nothing
FLATNESS = 0.1                              # Curve flattening tolerance (device units)
