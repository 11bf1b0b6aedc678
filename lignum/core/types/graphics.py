# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum Types Graphics Classes Module

This module contains the path primitives, the graphics state and the draw
operations (display list elements) of the drawing engine. Path primitives
form a closed set that every renderer matches exhaustively. Draw operations
are handed to renderers together with a snapshot of the graphics state taken
at the moment the terminal operation was issued.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional, Union

from .constants import (
    COMPOSITE_SOURCE_OVER, DEFAULT_FILL_STYLE, DEFAULT_FONT, DEFAULT_LINE_WIDTH,
    DEFAULT_MITER_LIMIT, DEFAULT_SHADOW_COLOR, DEFAULT_STROKE_STYLE,
    DIRECTION_INHERIT, FILL_RULE_NON_ZERO, IDENTITY_MATRIX, LINE_CAP_BUTT,
    LINE_JOIN_MITER, SMOOTHING_LOW, TEXT_ALIGN_START, TEXT_BASELINE_ALPHABETIC,
)
from .paint import Color, Gradient, Pattern


# Path Elements
@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    cp1x: float
    cp1y: float
    cp2x: float
    cp2y: float
    x: float
    y: float


@dataclass(frozen=True)
class QuadraticTo:
    cpx: float
    cpy: float
    x: float
    y: float


@dataclass(frozen=True)
class Arc:
    x: float
    y: float
    radius: float
    start_angle: float
    end_angle: float
    ccw: bool = False


@dataclass(frozen=True)
class ArcTo:
    x1: float
    y1: float
    x2: float
    y2: float
    radius: float


@dataclass(frozen=True)
class Ellipse:
    x: float
    y: float
    radius_x: float
    radius_y: float
    rotation: float
    start_angle: float
    end_angle: float
    ccw: bool = False


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class RoundRect:
    x: float
    y: float
    width: float
    height: float
    radii: tuple = (0.0, 0.0, 0.0, 0.0)  # top-left, top-right, bottom-right, bottom-left


@dataclass(frozen=True)
class ClosePath:
    pass


PathElement = Union[MoveTo, LineTo, CubicTo, QuadraticTo, Arc, ArcTo,
                    Ellipse, Rect, RoundRect, ClosePath]


class Path(list):
    """An ordered list of path primitives. Order is never changed."""

    def __repr__(self) -> str:
        return f"Path({list.__repr__(self)})"


@dataclass(frozen=True)
class ClipState:
    """An installed clip region.

    Never modified once installed, so saved states and draw operation
    snapshots share the whole chain.

    ``transform`` is the matrix in effect when the clip was established;
    later transform changes do not move an existing clip.
    """
    path: Path
    fill_rule: str = FILL_RULE_NON_ZERO
    transform: tuple = IDENTITY_MATRIX
    previous: Optional[ClipState] = None  # the clip this one intersects
    serial: int = 0

    def chain(self) -> list:
        """Every clip in effect, oldest first."""
        clips = []
        clip = self
        while clip is not None:
            clips.append(clip)
            clip = clip.previous
        clips.reverse()
        return clips


def _copy_paint(paint):
    if isinstance(paint, Gradient):
        return Gradient(paint.kind, list(paint.stops))
    if isinstance(paint, Pattern):
        return copy.copy(paint)
    return paint


# GSTATE
class GraphicsState:
    def __init__(self) -> None:
        # compositing
        self.global_alpha = 1.0
        self.global_composite_operation = COMPOSITE_SOURCE_OVER
        self.image_smoothing_enabled = True
        self.image_smoothing_quality = SMOOTHING_LOW

        # shadows
        self.shadow_offset_x = 0.0
        self.shadow_offset_y = 0.0
        self.shadow_blur = 0.0
        self.shadow_color = DEFAULT_SHADOW_COLOR

        # line style
        self.line_width = DEFAULT_LINE_WIDTH
        self.line_cap = LINE_CAP_BUTT
        self.line_join = LINE_JOIN_MITER
        self.miter_limit = DEFAULT_MITER_LIMIT
        self.line_dash = []
        self.line_dash_offset = 0.0

        # paint
        self.fill_style = Color(DEFAULT_FILL_STYLE)
        self.stroke_style = Color(DEFAULT_STROKE_STYLE)

        # text
        self.font = DEFAULT_FONT
        self.text_align = TEXT_ALIGN_START
        self.text_baseline = TEXT_BASELINE_ALPHABETIC
        self.direction = DIRECTION_INHERIT

        self.transform = IDENTITY_MATRIX  # the current transformation matrix
        self.clip: Optional[ClipState] = None

    # Attributes that need deep copy (mutable containers that could be modified)
    _DEEPCOPY_ATTRS = frozenset({
        'line_dash',
    })

    # Paints the caller can still change after assigning them
    _PAINT_ATTRS = frozenset({
        'fill_style', 'stroke_style',
    })

    _ALL_ATTRS = (
        'global_alpha', 'global_composite_operation',
        'image_smoothing_enabled', 'image_smoothing_quality',
        'shadow_offset_x', 'shadow_offset_y', 'shadow_blur', 'shadow_color',
        'line_width', 'line_cap', 'line_join', 'miter_limit',
        'line_dash', 'line_dash_offset',
        'fill_style', 'stroke_style',
        'font', 'text_align', 'text_baseline', 'direction',
        'transform', 'clip',
    )

    def copy(self) -> GraphicsState:
        """
        Copy for save() and for draw operation snapshots.

        Attributes in _DEEPCOPY_ATTRS are deep copied. Paints get a shallow
        copy: a gradient takes its own stop list and a pattern its own
        transform, while pattern pixels are shared. All other attributes,
        the clip chain included, are immutable and shared. When adding new
        attributes to GraphicsState, add them to _ALL_ATTRS, and to
        _DEEPCOPY_ATTRS if mutable.
        """
        new_gs = object.__new__(GraphicsState)
        for attr in GraphicsState._ALL_ATTRS:
            value = getattr(self, attr)
            if attr in GraphicsState._DEEPCOPY_ATTRS:
                setattr(new_gs, attr, copy.deepcopy(value))
            elif attr in GraphicsState._PAINT_ATTRS:
                setattr(new_gs, attr, _copy_paint(value))
            else:
                setattr(new_gs, attr, value)
        return new_gs

    def __eq__(self, other) -> bool:
        if not isinstance(other, GraphicsState):
            return NotImplemented
        return all(getattr(self, a) == getattr(other, a) for a in self._ALL_ATTRS)

    __hash__ = None

    def __repr__(self) -> str:
        return f"GraphicsState(transform={self.transform}, clip={self.clip is not None})"


class DisplayList(list):
    """
    This is a list of draw operations like FillPath, StrokePath, Clip...
    Each carries the primitives it needs and a GraphicsState snapshot.
    """

    def __init__(self, width: int = 0, height: int = 0) -> None:
        super().__init__()

        self.width = width
        self.height = height


# Draw operations
@dataclass(frozen=True)
class FillPath:
    path: Path
    fill_rule: str
    state: GraphicsState


@dataclass(frozen=True)
class StrokePath:
    path: Path
    state: GraphicsState


@dataclass(frozen=True)
class Clip:
    path: Path
    fill_rule: str
    state: GraphicsState


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    state: GraphicsState


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    state: GraphicsState


@dataclass(frozen=True)
class ClearRect:
    x: float
    y: float
    width: float
    height: float
    state: GraphicsState


@dataclass(frozen=True)
class FillText:
    """Text painted with the fill style.

    (x, y) is the point the caller asked for; (anchor_x, anchor_y) is the
    left end of the alphabetic baseline after alignment. ``scale_x`` is the
    horizontal squeeze applied to honor max_width.
    """
    text: str
    x: float
    y: float
    anchor_x: float
    anchor_y: float
    width: float
    max_width: Optional[float]
    scale_x: float
    state: GraphicsState


@dataclass(frozen=True)
class StrokeText:
    text: str
    x: float
    y: float
    anchor_x: float
    anchor_y: float
    width: float
    max_width: Optional[float]
    scale_x: float
    state: GraphicsState


@dataclass(frozen=True)
class DrawImage:
    """Places the source rectangle of ``image`` into the destination rectangle."""
    image: object
    sx: float
    sy: float
    sw: float
    sh: float
    dx: float
    dy: float
    dw: float
    dh: float
    state: GraphicsState


@dataclass(frozen=True)
class PutImageData:
    """Writes raw pixels, ignoring transform, clip and compositing.

    ``dirty`` is (x, y, w, h) within the image data or None for all of it.
    """
    image_data: object
    dx: int
    dy: int
    dirty: Optional[tuple]
    state: GraphicsState


DrawOp = Union[FillPath, StrokePath, Clip, FillRect, StrokeRect, ClearRect,
               FillText, StrokeText, DrawImage, PutImageData]
