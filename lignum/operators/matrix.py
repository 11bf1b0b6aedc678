# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math
from typing import Optional, Tuple, Union

from ..core import types as lt

Matrix = Tuple[float, float, float, float, float, float]


def _as_matrix(m) -> Matrix:
    # the transform is always cast to a tuple of floats
    return tuple(float(v) for v in m)


def _matmult(mat1, mat2) -> Matrix:
    """
    Multiplies mat1 by mat2 in row-vector order: the result maps a point
    through mat1 first and then through mat2.
    """
    a1, b1, c1, d1, e1, f1 = mat1
    a2, b2, c2, d2, e2, f2 = mat2

    return (
        a1 * a2 + b1 * c2,  # a
        a1 * b2 + b1 * d2,  # b
        c1 * a2 + d1 * c2,  # c
        c1 * b2 + d1 * d2,  # d
        e1 * a2 + f1 * c2 + e2,  # e
        e1 * b2 + f1 * d2 + f2,  # f
    )


def compose(m, n) -> Matrix:
    """Return M ∘ N: apply ``n`` first, then ``m``."""
    return _matmult(n, m)


def transform_point(
    m, x: Union[int, float], y: Union[int, float]
) -> Tuple[float, float]:
    a, b, c, d, e, f = m
    return a * x + c * y + e, b * x + d * y + f


def transform_delta(
    m, x: Union[int, float], y: Union[int, float]
) -> Tuple[float, float]:
    a, b, c, d, _, _ = m
    return a * x + c * y, b * x + d * y


def matrix_determinant(m) -> float:
    return m[0] * m[3] - m[1] * m[2]


def matrix_inverse(m) -> Optional[Matrix]:
    """
    Inverse of a 2D affine matrix using the direct formula.

    Returns None when the matrix is singular.
    """
    a, b, c, d, tx, ty = m
    det = a * d - b * c

    # Handle singular matrix case
    if abs(det) < 1e-15 or math.isnan(det):
        return None

    return (
        d / det,
        -b / det,
        -c / det,
        a / det,
        (c * ty - d * tx) / det,
        (b * tx - a * ty) / det,
    )


def scale_matrix(sx, sy) -> Matrix:
    return (float(sx), 0.0, 0.0, float(sy), 0.0, 0.0)


def rotate_matrix(theta) -> Matrix:
    # a non-finite angle yields a NaN matrix, which renderers skip
    if not math.isfinite(theta):
        return (math.nan, math.nan, math.nan, math.nan, 0.0, 0.0)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return (cos_t, sin_t, -sin_t, cos_t, 0.0, 0.0)


def translate_matrix(tx, ty) -> Matrix:
    return (1.0, 0.0, 0.0, 1.0, float(tx), float(ty))


def _concat(ctxt, m) -> None:
    ctxt.gstate.transform = compose(ctxt.gstate.transform, m)


def scale(ctxt, sx, sy) -> None:
    """
    **scale**(sx, sy)


    modifies the unit lengths independently along the current x and y axes,
    leaving the origin location and the orientation of the axes unaltered.
    The scale matrix is concatenated on the right of the current transform,
    so it applies to coordinates before any transform already in effect.

    **See Also**:   **translate**, **rotate**, **transform**, **set_transform**
    """
    _concat(ctxt, scale_matrix(sx, sy))


def rotate(ctxt, theta) -> None:
    """
    **rotate**(theta)


    rotates the axes of the user coordinate space by theta radians about the
    origin. The transformation is represented by the matrix

          cos  sin  0
    R =  -sin  cos  0
            0    0  1

    In the y-down device convention a positive angle turns clockwise on screen.

    **See Also**:   **scale**, **translate**, **transform**
    """
    _concat(ctxt, rotate_matrix(theta))


def translate(ctxt, tx, ty) -> None:
    """
    **translate**(tx, ty)


    moves the origin of the user coordinate space by tx units horizontally
    and ty units vertically, measured in the current user space.

    **See Also**:   **scale**, **rotate**, **transform**
    """
    _concat(ctxt, translate_matrix(tx, ty))


def transform(ctxt, a, b, c, d, e, f) -> None:
    """
    **transform**(a, b, c, d, e, f)


    concatenates an arbitrary affine matrix with the current transform.

    **See Also**:   **set_transform**, **reset_transform**
    """
    _concat(ctxt, _as_matrix((a, b, c, d, e, f)))


def set_transform(ctxt, a, b, c, d, e, f) -> None:
    """
    **set_transform**(a, b, c, d, e, f)


    replaces the current transform outright; no concatenation takes place.
    """
    ctxt.gstate.transform = _as_matrix((a, b, c, d, e, f))


def reset_transform(ctxt) -> None:
    ctxt.gstate.transform = lt.IDENTITY_MATRIX


def get_transform(ctxt) -> Matrix:
    return ctxt.gstate.transform
