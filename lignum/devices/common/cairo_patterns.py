# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cairo Pattern Fill Module

Turns image-backed Pattern paints into cairo.SurfacePattern sources. The
pattern transform maps pattern space to user space, so the Cairo pattern
matrix (user space to pattern space) is its inverse.
"""

import cairo

from ...core import error as lg_error
from ...core import types as lt
from ...operators.matrix import matrix_inverse
from .cairo_images import image_filter, surface_from_image

EXTEND_MAP = {
    lt.REPEAT: cairo.EXTEND_REPEAT,
    lt.NO_REPEAT: cairo.EXTEND_NONE,
}


def pattern_source(pattern, state, renderer_name: str = ""):
    """
    Create the Cairo source for an image pattern.

    Returns None when the pattern paints nothing (empty image or singular
    pattern transform). repeat-x and repeat-y have no Cairo extend mode and
    raise UnsupportedOperationError.
    """
    extend = EXTEND_MAP.get(pattern.repetition)
    if extend is None:
        raise lg_error.UnsupportedOperationError(
            f"pattern repetition {pattern.repetition!r}", renderer_name)

    surface = surface_from_image(pattern.image)
    if surface is None:
        return None

    pat = cairo.SurfacePattern(surface)
    pat.set_extend(extend)
    pat.set_filter(image_filter(state))

    if pattern.transform is not None:
        inverse = matrix_inverse(pattern.transform)
        if inverse is None:
            return None
        pat.set_matrix(cairo.Matrix(*inverse))

    return pat
