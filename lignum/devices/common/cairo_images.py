# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cairo Image Conversion Module

Converts between the engine's unpremultiplied RGBA8 buffers and Cairo's
premultiplied ARGB32 surfaces. Cairo stores ARGB32 as native-endian 32-bit
words, which is BGRA byte order on little-endian machines.
"""

from __future__ import annotations

import sys

import cairo
import numpy as np

from .. import validate_image_buffer

# byte index of each channel inside a native-endian ARGB32 pixel
if sys.byteorder == 'little':
    _B, _G, _R, _A = 0, 1, 2, 3
else:
    _A, _R, _G, _B = 0, 1, 2, 3

FILTER_MAP = {
    "low": cairo.FILTER_FAST,
    "medium": cairo.FILTER_GOOD,
    "high": cairo.FILTER_BEST,
}


def image_filter(state) -> int:
    """Cairo filter for the image smoothing settings of a state snapshot."""
    if not state.image_smoothing_enabled:
        return cairo.FILTER_NEAREST
    return FILTER_MAP.get(state.image_smoothing_quality, cairo.FILTER_GOOD)


def rgba_to_argb32(data: bytes, width: int, height: int):
    """
    Premultiply RGBA8 pixels and lay them out as ARGB32 rows.

    Returns (buffer, stride) ready for cairo.ImageSurface.create_for_data.
    """
    stride = cairo.ImageSurface.format_stride_for_width(cairo.FORMAT_ARGB32, width)
    pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4).astype(np.uint16)

    alpha = pixels[..., 3]
    out = np.zeros((height, stride), dtype=np.uint8)
    view = out[:, :width * 4].reshape(height, width, 4)
    # Round-to-nearest premultiplication, matching Cairo's own conversion
    view[..., _R] = (pixels[..., 0] * alpha + 127) // 255
    view[..., _G] = (pixels[..., 1] * alpha + 127) // 255
    view[..., _B] = (pixels[..., 2] * alpha + 127) // 255
    view[..., _A] = alpha

    return bytearray(out.tobytes()), stride


def surface_from_image(image):
    """
    Build an ARGB32 ImageSurface from an image source.

    Returns None for images with no pixels. Raises InvalidImageDataError
    when the buffer length does not match width x height x 4.
    """
    data = validate_image_buffer(image)
    if image.width <= 0 or image.height <= 0:
        return None
    buf, stride = rgba_to_argb32(data, image.width, image.height)
    return cairo.ImageSurface.create_for_data(buf, cairo.FORMAT_ARGB32,
                                              image.width, image.height, stride)


def argb32_to_rgba(surface, sx: int, sy: int, sw: int, sh: int) -> bytes:
    """
    Read a rectangle of an ARGB32 surface back as unpremultiplied RGBA8.

    Pixels outside the surface read as transparent black.
    """
    surface.flush()
    width = surface.get_width()
    height = surface.get_height()
    stride = surface.get_stride()

    out = np.zeros((sh, sw, 4), dtype=np.uint8)

    x0, y0 = max(sx, 0), max(sy, 0)
    x1, y1 = min(sx + sw, width), min(sy + sh, height)
    if x1 > x0 and y1 > y0:
        data = np.frombuffer(surface.get_data(), dtype=np.uint8).reshape(height, stride)
        region = data[y0:y1, x0 * 4:x1 * 4].reshape(y1 - y0, x1 - x0, 4).astype(np.uint32)

        alpha = region[..., _A]
        safe_alpha = np.where(alpha == 0, 1, alpha)
        target = out[y0 - sy:y1 - sy, x0 - sx:x1 - sx]
        for dst, src in ((0, _R), (1, _G), (2, _B)):
            channel = (region[..., src] * 255 + safe_alpha // 2) // safe_alpha
            target[..., dst] = np.where(alpha == 0, 0, np.minimum(channel, 255))
        target[..., 3] = alpha

    return out.tobytes()
