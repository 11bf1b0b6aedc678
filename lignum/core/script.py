# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Drawing scripts.

A drawing script is a JSON array of commands replayed, in order, against a
DrawingContext::

    [
        {"op": "move_to", "args": [10, 10]},
        {"op": "line_to", "args": [90, 10]},
        {"set": "stroke_style", "value": "#c00"},
        {"op": "stroke"}
    ]

``op`` commands call a context method with optional ``args`` and ``kwargs``;
``set`` commands assign a graphics state attribute. Values may be objects
describing paints and images:

- ``{"linear_gradient": [x0, y0, x1, y1], "stops": [[0, "red"], [1, "blue"]]}``
- ``{"radial_gradient": [x0, y0, r0, x1, y1, r1], "stops": [...]}``
- ``{"image": {"width": w, "height": h, "data": "<base64 RGBA>"}}`` or
  ``{"image": {"file": "picture.png"}}`` (decoded with Pillow)
- ``{"pattern": <image>, "repetition": "repeat"}``
"""

from __future__ import annotations

import base64
import json
import logging
import os
import sys

from PIL import Image

from . import error as lg_error
from . import types as lt

logger = logging.getLogger(__name__)

# DrawingContext methods a script may call
SCRIPT_OPERATIONS = frozenset({
    "save", "restore", "reset",
    "set_line_dash",
    "scale", "rotate", "translate", "transform", "set_transform", "reset_transform",
    "begin_path", "close_path", "move_to", "line_to", "bezier_curve_to",
    "quadratic_curve_to", "arc", "arc_to", "ellipse", "rect", "round_rect",
    "fill", "stroke", "clip",
    "fill_rect", "stroke_rect", "clear_rect",
    "fill_text", "stroke_text",
    "draw_image", "draw_image_scaled", "draw_image_subrect",
    "put_image_data", "put_image_data_dirty",
})

# DrawingContext attributes a script may assign
SCRIPT_ATTRIBUTES = frozenset({
    "global_alpha", "global_composite_operation",
    "image_smoothing_enabled", "image_smoothing_quality",
    "shadow_offset_x", "shadow_offset_y", "shadow_blur", "shadow_color",
    "line_width", "line_cap", "line_join", "miter_limit", "line_dash_offset",
    "font", "text_align", "text_baseline", "direction",
    "fill_style", "stroke_style",
})


def load_script(path: str) -> list:
    """Read a script file (``-`` for stdin) and return its command list."""
    try:
        if path == "-":
            commands = json.load(sys.stdin)
        else:
            with open(path, "r", encoding="utf-8") as f:
                commands = json.load(f)
    except json.JSONDecodeError as e:
        raise lg_error.ScriptError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(commands, list):
        raise lg_error.ScriptError(f"{path} must hold a JSON array of commands")
    return commands


def _load_image(spec: dict, base_dir: str) -> lt.ImageData:
    if "file" in spec:
        file_name = os.path.join(base_dir, spec["file"])
        with Image.open(file_name) as img:
            rgba = img.convert("RGBA")
            return lt.ImageData(rgba.width, rgba.height, rgba.tobytes())

    width = int(spec["width"])
    height = int(spec["height"])
    data = spec.get("data")
    if data is None:
        return lt.ImageData(width, height)
    if isinstance(data, str):
        return lt.ImageData(width, height, base64.b64decode(data))
    return lt.ImageData(width, height, bytes(data))


def decode_value(ctxt, value, base_dir: str = "."):
    """Turn the JSON form of a paint or image into the engine's objects."""
    if not isinstance(value, dict):
        return value

    if "linear_gradient" in value or "radial_gradient" in value:
        if "linear_gradient" in value:
            gradient = ctxt.create_linear_gradient(*value["linear_gradient"])
        else:
            gradient = ctxt.create_radial_gradient(*value["radial_gradient"])
        for offset, color in value.get("stops", []):
            gradient.add_color_stop(offset, color)
        return gradient

    if "image" in value:
        return _load_image(value["image"], base_dir)

    if "pattern" in value:
        image = decode_value(ctxt, value["pattern"], base_dir)
        pattern = ctxt.create_pattern(image, value.get("repetition", lt.REPEAT))
        if "transform" in value:
            pattern.set_transform(value["transform"])
        return pattern

    raise ValueError(f"unrecognized value object {sorted(value)}")


def run_script(ctxt, commands: list, base_dir: str = ".") -> int:
    """
    Replay ``commands`` against ``ctxt``.

    Returns the number of commands executed. Malformed commands raise
    ScriptError naming the command index; errors raised by the engine itself
    (InvalidValueError, UnsupportedOperationError...) propagate unchanged.
    """
    for index, command in enumerate(commands):
        if not isinstance(command, dict):
            raise lg_error.ScriptError("command must be an object", index)

        try:
            if "set" in command:
                name = command["set"]
                if name not in SCRIPT_ATTRIBUTES:
                    raise lg_error.ScriptError(f"unknown attribute {name!r}", index)
                setattr(ctxt, name, decode_value(ctxt, command.get("value"), base_dir))
                continue

            name = command.get("op")
            if name not in SCRIPT_OPERATIONS:
                raise lg_error.ScriptError(f"unknown operation {name!r}", index)
            args = [decode_value(ctxt, a, base_dir) for a in command.get("args", [])]
            kwargs = {k: decode_value(ctxt, v, base_dir)
                      for k, v in command.get("kwargs", {}).items()}
            getattr(ctxt, name)(*args, **kwargs)
        except lg_error.LignumError:
            raise
        except (TypeError, ValueError, KeyError) as e:
            raise lg_error.ScriptError(f"{command.get('op', command.get('set'))}: {e}",
                                       index) from e

    logger.debug("replayed %d script commands", len(commands))
    return len(commands)
