# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import math

from ..core import error as lg_error
from ..core import types as lt

logger = logging.getLogger(__name__)


def _finite(*values) -> bool:
    return all(math.isfinite(v) for v in values)


def _emit_draw_image(ctxt, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
    values = (sx, sy, sw, sh, dx, dy, dw, dh)
    if not _finite(*values):
        return
    if sw == 0 or sh == 0 or dw == 0 or dh == 0:
        logger.debug("draw_image with an empty rectangle ignored")
        return
    ctxt.display_list_builder.add_graphics_operation(lt.DrawImage(
        image, *(float(v) for v in values), ctxt.gstate.copy()))


def draw_image(ctxt, image, dx, dy) -> None:
    """
    **draw_image**(image, dx, dy)


    draws the whole image with its top left corner at (dx, dy), at its
    natural size. The image is any object exposing ``width``, ``height`` and
    ``data_rgba``; the pixels are only read when a renderer needs them.

    **See Also**:   **draw_image_scaled**, **draw_image_subrect**, **put_image_data**
    """
    _emit_draw_image(ctxt, image, 0, 0, image.width, image.height,
                     dx, dy, image.width, image.height)


def draw_image_scaled(ctxt, image, dx, dy, dw, dh) -> None:
    _emit_draw_image(ctxt, image, 0, 0, image.width, image.height, dx, dy, dw, dh)


def draw_image_subrect(ctxt, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
    """
    **draw_image_subrect**(image, sx, sy, sw, sh, dx, dy, dw, dh)


    draws the source rectangle (sx, sy, sw, sh) of the image into the
    destination rectangle (dx, dy, dw, dh).
    """
    _emit_draw_image(ctxt, image, sx, sy, sw, sh, dx, dy, dw, dh)


def create_image_data(ctxt, width: int, height: int) -> lt.ImageData:
    """Return a transparent black ImageData of the given size."""
    if not _finite(width, height):
        raise lg_error.InvalidValueError("create_image_data size", (width, height))
    return lt.ImageData(abs(int(width)), abs(int(height)))


def get_image_data(ctxt, sx: int, sy: int, sw: int, sh: int) -> lt.ImageData:
    """
    **get_image_data**(sx, sy, sw, sh)


    reads back device pixels. Only renderers that own a pixel surface can
    answer; others raise UnsupportedOperationError.
    """
    renderer = ctxt.display_list_builder.renderer
    if renderer is None:
        raise lg_error.UnsupportedOperationError("get_image_data")
    if not _finite(sx, sy, sw, sh):
        raise lg_error.InvalidValueError("get_image_data rectangle", (sx, sy, sw, sh))
    return renderer.get_image_data(int(sx), int(sy), int(sw), int(sh))


def put_image_data(ctxt, image_data, dx: int, dy: int) -> None:
    """
    **put_image_data**(image_data, dx, dy)


    writes the pixels of ``image_data`` to the device with the top left
    corner at (dx, dy). Transform, clip, alpha and compositing are ignored.
    The buffer length is checked by the renderer.
    """
    if not _finite(dx, dy):
        logger.debug("put_image_data at a non-finite position ignored")
        return
    ctxt.display_list_builder.add_graphics_operation(lt.PutImageData(
        image_data, int(dx), int(dy), None, ctxt.gstate.copy()))


def put_image_data_dirty(ctxt, image_data, dx: int, dy: int,
                         dirty_x: int, dirty_y: int, dirty_width: int, dirty_height: int) -> None:
    if not _finite(dx, dy, dirty_x, dirty_y, dirty_width, dirty_height):
        logger.debug("put_image_data with a non-finite rectangle ignored")
        return
    ctxt.display_list_builder.add_graphics_operation(lt.PutImageData(
        image_data, int(dx), int(dy),
        (int(dirty_x), int(dirty_y), int(dirty_width), int(dirty_height)),
        ctxt.gstate.copy()))
