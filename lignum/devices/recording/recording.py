# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Recording Device

Keeps every draw operation, with its state snapshot, in a DisplayList. Used
as the default renderer of a DrawingContext, for tests, and as the input of
replay into another renderer.
"""

from __future__ import annotations

import logging

from .. import Renderer
from ...core import error as lg_error
from ...core import types as lt

logger = logging.getLogger(__name__)


class RecordingRenderer(Renderer):
    name = "recording"

    def __init__(self, width: int = lt.DEFAULT_WIDTH, height: int = lt.DEFAULT_HEIGHT) -> None:
        super().__init__(width, height)
        self.ops = lt.DisplayList(self.width, self.height)

    def emit(self, op) -> None:
        self.ops.append(op)

    def clear(self) -> None:
        self.ops = lt.DisplayList(self.width, self.height)

    def op_names(self) -> list[str]:
        return [type(op).__name__ for op in self.ops]

    def replay(self, renderer: Renderer) -> None:
        """Send every recorded operation to ``renderer`` in order."""
        logger.debug("replaying %d operations into %s", len(self.ops), renderer.name)
        for op in self.ops:
            renderer.emit(op)

    def get_image_data(self, sx: int, sy: int, sw: int, sh: int) -> lt.ImageData:
        if sw == 0 or sh == 0:
            raise lg_error.InvalidValueError("get_image_data size", (sw, sh))
        # nothing is rasterized, so every pixel reads back transparent black
        return lt.ImageData(abs(sw), abs(sh))

    def finish(self) -> lt.DisplayList:
        return self.ops
