# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum Types Package - Public API

Re-exports constants, paint descriptors and graphics types so the rest of the
engine can use the `from ..core import types as lt` access pattern.

**Internal Module Organization:**
- constants.py: attribute tags, defaults and tolerances
- paint.py: Color, Gradient, Pattern and ImageData
- graphics.py: path primitives, GraphicsState and draw operations
"""

from .constants import *
from .paint import *
from .graphics import *
