# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum Types Paint Module

Paint descriptors accepted by fill_style and stroke_style: solid colors,
linear and radial gradients with ordered color stops, and image patterns.
Also holds ImageData, the RGBA pixel buffer used by the image operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .constants import REPEAT, REPETITIONS
from ..error import check_tag


@dataclass(frozen=True)
class Color:
    """An opaque CSS-style color token. Parsing is left to renderers."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


@dataclass(frozen=True)
class LinearGradientKind:
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class RadialGradientKind:
    x0: float
    y0: float
    r0: float
    x1: float
    y1: float
    r1: float


@dataclass
class Gradient:
    """Linear or radial gradient.

    Stops keep their insertion order. Offsets are neither sorted, clamped
    nor deduplicated here; renderers decide what to do with them.
    """
    kind: Union[LinearGradientKind, RadialGradientKind]
    stops: list[GradientStop] = field(default_factory=list)

    def add_color_stop(self, offset: float, color) -> None:
        self.stops.append(GradientStop(float(offset), str(color)))

    @property
    def is_radial(self) -> bool:
        return isinstance(self.kind, RadialGradientKind)


@dataclass
class ImageData:
    """A width x height RGBA8 pixel buffer (row-major, unpremultiplied)."""
    width: int
    height: int
    data: bytearray = None

    def __post_init__(self) -> None:
        if self.data is None:
            self.data = bytearray(self.width * self.height * 4)
        elif not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)

    @property
    def data_rgba(self) -> bytearray:
        return self.data


@dataclass
class Pattern:
    """Repeating image paint.

    ``image`` is any image source (an object with ``width``, ``height`` and
    ``data_rgba``). ``transform`` is an optional 6-coefficient matrix.
    """
    image: object
    repetition: str = REPEAT
    transform: Optional[tuple] = None

    def __post_init__(self) -> None:
        # an empty repetition string means "repeat" on the canvas API
        if self.repetition in (None, ""):
            self.repetition = REPEAT
        check_tag("repetition", self.repetition, REPETITIONS)

    def set_transform(self, a, b=None, c=None, d=None, e=None, f=None) -> None:
        if b is None:
            a, b, c, d, e, f = a
        self.transform = (float(a), float(b), float(c), float(d), float(e), float(f))


Paint = Union[Color, Gradient, Pattern]


def as_paint(value) -> Paint:
    """Normalize a fill/stroke style value; bare strings become Color."""
    if isinstance(value, (Color, Gradient, Pattern)):
        return value
    if isinstance(value, str):
        return Color(value)
    raise TypeError(f"unsupported paint type: {type(value).__name__}")
