# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PaintResolver - renderer-ready paint descriptors

Renderers that declare gradients and patterns as named resources (the SVG
writer) need identifiers that never collide inside one document. The resolver
hands out ``grad{n}`` and ``pat{n}`` from its own counters, so two resolvers
(one per context or document) never share state.

Colors pass through untouched: parsing a color string is a renderer concern.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from .types.paint import (
    Color, Gradient, GradientStop, Pattern, RadialGradientKind, as_paint,
)

PAINT_COLOR = "color"
PAINT_LINEAR_GRADIENT = "linear-gradient"
PAINT_RADIAL_GRADIENT = "radial-gradient"
PAINT_PATTERN = "pattern"


@dataclass(frozen=True)
class ResolvedPaint:
    kind: str
    value: str = ""                      # color token for PAINT_COLOR
    resource_id: Optional[str] = None    # grad{n} / pat{n}
    geometry: Optional[object] = None    # gradient kind for gradients
    stops: tuple = field(default_factory=tuple)
    repetition: Optional[str] = None
    transform: Optional[tuple] = None
    image: Optional[object] = None

    @property
    def reference(self) -> str:
        """The value a document writer puts in a fill or stroke attribute."""
        if self.resource_id is not None:
            return f"url(#{self.resource_id})"
        return self.value

    @property
    def is_resource(self) -> bool:
        return self.resource_id is not None


class PaintResolver:
    def __init__(self) -> None:
        self.gradient_counter = 0
        self.pattern_counter = 0

    def next_gradient_id(self) -> str:
        resource_id = f"grad{self.gradient_counter}"
        self.gradient_counter += 1
        return resource_id

    def next_pattern_id(self) -> str:
        resource_id = f"pat{self.pattern_counter}"
        self.pattern_counter += 1
        return resource_id

    def resolve(self, paint) -> ResolvedPaint:
        """
        Resolve a Color, Gradient, Pattern or color string.

        Every gradient or pattern resolution takes a fresh identifier.
        Gradient stops are copied in insertion order.
        """
        paint = as_paint(paint)

        if isinstance(paint, Color):
            return ResolvedPaint(PAINT_COLOR, value=paint.value)

        if isinstance(paint, Gradient):
            kind = (PAINT_RADIAL_GRADIENT if isinstance(paint.kind, RadialGradientKind)
                    else PAINT_LINEAR_GRADIENT)
            stops = tuple(GradientStop(s.offset, s.color) for s in paint.stops)
            return ResolvedPaint(kind, resource_id=self.next_gradient_id(),
                                 geometry=paint.kind, stops=stops)

        if isinstance(paint, Pattern):
            return ResolvedPaint(PAINT_PATTERN, resource_id=self.next_pattern_id(),
                                 repetition=paint.repetition, transform=paint.transform,
                                 image=paint.image)

        raise TypeError(f"cannot resolve paint {paint!r}")


def sorted_stops(stops) -> list:
    """Finite stops in offset order with offsets clamped to [0, 1].

    The sort is stable, so stops sharing an offset keep insertion order and
    produce a hard color edge.
    """
    usable = [s for s in stops if math.isfinite(s.offset)]
    ordered = sorted(usable, key=lambda s: s.offset)
    return [GradientStop(max(0.0, min(1.0, s.offset)), s.color) for s in ordered]


def degenerate_gradient(kind) -> bool:
    """True when a gradient geometry paints nothing."""
    values = [getattr(kind, name) for name in kind.__dataclass_fields__]
    if not all(math.isfinite(v) for v in values):
        return True
    if isinstance(kind, RadialGradientKind):
        if kind.r0 < 0 or kind.r1 < 0:
            return True
        return kind.x0 == kind.x1 and kind.y0 == kind.y1 and kind.r0 == kind.r1
    return kind.x0 == kind.x1 and kind.y0 == kind.y1
