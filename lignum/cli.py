# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Lignum command line.

    lignum render drawing.json -o drawing.svg
    lignum render drawing.json -d png --width 640 --height 480
    lignum render drawing.json -d recording

The recording device prints the name of every emitted draw operation instead
of writing a file.
"""

from __future__ import annotations

import logging
import os
import sys

from .canvas import DrawingContext
from .cli_args import build_argument_parser, get_output_name, infer_device
from .core import error as lg_error
from .core import types as lt
from .core.script import load_script, run_script
from .devices.recording import RecordingRenderer

logger = logging.getLogger(__name__)


def create_renderer(device: str, width: int, height: int, args):
    """Instantiate the renderer for ``device``."""
    if device == "png":
        from .devices.png import PngRenderer
        return PngRenderer(width, height, background=args.background, antialias=args.antialias)
    if device == "svg":
        from .devices.svg import SvgRenderer
        return SvgRenderer(width, height)
    return RecordingRenderer(width, height)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Lignum command line.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return _run_render(args)


def _run_render(args) -> int:
    device = infer_device(args.outputfile, args.device)
    if device is None:
        print("Lignum Error: cannot tell the output device from "
              f"{args.outputfile or 'the arguments'}; use -d {{png,svg,recording}}",
              file=sys.stderr)
        return 1

    width = args.width or lt.DEFAULT_WIDTH
    height = args.height or lt.DEFAULT_HEIGHT
    renderer = create_renderer(device, width, height, args)
    ctxt = DrawingContext(width, height, renderer=renderer)

    base_dir = "." if args.script == "-" else os.path.dirname(os.path.abspath(args.script))
    try:
        commands = load_script(args.script)
        run_script(ctxt, commands, base_dir)
    except lg_error.LignumError as e:
        print(f"Lignum Error ({e.error_name}): {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Lignum Error: {e}", file=sys.stderr)
        return 1

    if device == "recording":
        for name in renderer.op_names():
            print(name)
        return 0

    output_file = get_output_name(args.outputfile, args.script, device)
    try:
        if device == "png":
            renderer.write_png(output_file)
        else:
            renderer.write(output_file)
    except OSError as e:
        print(f"Lignum Error: cannot write {output_file}: {e}", file=sys.stderr)
        return 1

    logger.info("rendered %d operations to %s", ctxt.display_list_builder.emitted, output_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
