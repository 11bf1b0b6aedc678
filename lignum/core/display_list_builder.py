# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DisplayListBuilder - hands draw operations to the attached renderer

Every terminal operation of the drawing context funnels through
add_graphics_operation(), which forwards the finished draw operation to the
context's renderer. A context without a renderer behaves like a null device:
operations are counted and discarded.

Renderer failures (unsupported operations, bad image buffers) propagate to the
caller of the terminal operation unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class DisplayListBuilder:
    """
    Forwards draw operations to a renderer and keeps simple statistics.
    """

    def __init__(self, renderer: Any = None):
        """
        Initialize DisplayListBuilder with target renderer.

        Args:
            renderer: Renderer instance, or None to discard all operations
        """
        self.renderer = renderer
        self.emitted = 0
        self.discarded = 0

    def add_graphics_operation(self, graphics_element: Any) -> None:
        """
        Hand a draw operation (FillPath, StrokePath, Clip, ...) to the renderer.

        Args:
            graphics_element: Draw operation carrying its state snapshot
        """
        # Null device: discard all painting marks
        if self.renderer is None:
            self.discarded += 1
            logger.debug("no renderer attached, discarding %s",
                         type(graphics_element).__name__)
            return

        self.renderer.emit(graphics_element)
        self.emitted += 1
