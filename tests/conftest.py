# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared fixtures for the Lignum tests.

Provides a recording context, a small RGBA image and a helper that reads a
single pixel back from a raster renderer.
"""

import pytest

from lignum import DrawingContext, ImageData


@pytest.fixture
def ctxt():
    """A 100x100 context with the default RecordingRenderer."""
    return DrawingContext(100, 100)


@pytest.fixture
def ops(ctxt):
    """The live list of operations recorded by ``ctxt``."""
    return ctxt.renderer.ops


@pytest.fixture
def red_green_image():
    """A 2x1 image: one opaque red pixel, one opaque green pixel."""
    return ImageData(2, 1, bytes([255, 0, 0, 255, 0, 255, 0, 255]))


def pixel(renderer, x, y):
    """RGBA tuple of the device pixel at (x, y)."""
    return tuple(renderer.get_image_data(x, y, 1, 1).data)
