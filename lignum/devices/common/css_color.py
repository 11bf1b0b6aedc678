# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CSS color parsing for the raster devices.

Understands hex notation (#rgb, #rgba, #rrggbb, #rrggbbaa), rgb()/rgba()
with numbers or percentages, 'transparent' and the basic named colors.
Returns RGBA floats in 0.0-1.0.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

RGBA = Tuple[float, float, float, float]

BLACK = (0.0, 0.0, 0.0, 1.0)

_NAMED_COLORS = {
    'black': (0, 0, 0), 'white': (255, 255, 255),
    'red': (255, 0, 0), 'lime': (0, 255, 0), 'green': (0, 128, 0),
    'blue': (0, 0, 255), 'yellow': (255, 255, 0),
    'cyan': (0, 255, 255), 'aqua': (0, 255, 255),
    'magenta': (255, 0, 255), 'fuchsia': (255, 0, 255),
    'gray': (128, 128, 128), 'grey': (128, 128, 128),
    'silver': (192, 192, 192), 'maroon': (128, 0, 0), 'olive': (128, 128, 0),
    'navy': (0, 0, 128), 'purple': (128, 0, 128), 'teal': (0, 128, 128),
    'orange': (255, 165, 0), 'pink': (255, 192, 203), 'brown': (165, 42, 42),
}

_FUNC_RE = re.compile(r'^(rgba?)\(\s*([^)]*)\)$')


def _channel(token: str) -> float:
    token = token.strip()
    if token.endswith('%'):
        return max(0.0, min(1.0, float(token[:-1]) / 100.0))
    return max(0.0, min(1.0, float(token) / 255.0))


def _alpha(token: str) -> float:
    token = token.strip()
    if token.endswith('%'):
        return max(0.0, min(1.0, float(token[:-1]) / 100.0))
    return max(0.0, min(1.0, float(token)))


def _parse_hex(digits: str) -> Optional[RGBA]:
    if len(digits) in (3, 4):
        digits = ''.join(ch * 2 for ch in digits)
    if len(digits) not in (6, 8):
        return None
    try:
        values = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
    except ValueError:
        return None
    if len(values) == 3:
        values.append(1.0)
    return tuple(values)


def parse_color(value: str) -> Optional[RGBA]:
    """Parse a CSS color string; returns None when it is not understood."""
    text = value.strip().lower()

    if text.startswith('#'):
        return _parse_hex(text[1:])

    if text == 'transparent':
        return (0.0, 0.0, 0.0, 0.0)

    if text in _NAMED_COLORS:
        r, g, b = _NAMED_COLORS[text]
        return (r / 255.0, g / 255.0, b / 255.0, 1.0)

    match = _FUNC_RE.match(text)
    if match:
        parts = re.split(r'[\s,/]+', match.group(2).strip())
        parts = [p for p in parts if p]
        try:
            if len(parts) == 3:
                return (_channel(parts[0]), _channel(parts[1]), _channel(parts[2]), 1.0)
            if len(parts) == 4:
                return (_channel(parts[0]), _channel(parts[1]), _channel(parts[2]),
                        _alpha(parts[3]))
        except ValueError:
            return None

    return None


def color_or_black(value: str) -> RGBA:
    """parse_color() with the canvas fallback to opaque black."""
    rgba = parse_color(value)
    if rgba is None:
        logger.warning("Unrecognized color %r, using black", value)
        return BLACK
    return rgba
