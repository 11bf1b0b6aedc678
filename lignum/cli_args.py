# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for Lignum.

Handles command-line argument definition, output device inference and output
file naming.
"""

from __future__ import annotations

import argparse
import os

from . import __version__

AVAILABLE_DEVICES = ["png", "svg", "recording"]

# output file extension -> device
_EXTENSION_DEVICES = {
    ".png": "png",
    ".svg": "svg",
}


def infer_device(outputfile: str | None, device: str | None) -> str | None:
    """
    Pick the output device.

    An explicit ``-d`` wins; otherwise the extension of the output file
    decides. Returns None when neither names a device.
    """
    if device:
        return device
    if outputfile:
        ext = os.path.splitext(outputfile)[1].lower()
        return _EXTENSION_DEVICES.get(ext)
    return None


def get_output_name(outputfile: str | None, scriptfile: str, device: str) -> str:
    """
    Derive the output file name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        scriptfile: The script path ("-" for stdin)
        device: The resolved output device

    Returns:
        Output file name, the script's base name with the device extension
        when -o was not given.
    """
    if outputfile:
        return outputfile
    if scriptfile == "-":
        base = "stdin"
    else:
        base = os.path.splitext(os.path.basename(scriptfile))[0]
    return f"{base}.{device}"


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_argument_parser(available_devices: list[str] = AVAILABLE_DEVICES) -> argparse.ArgumentParser:
    """
    Create and configure the Lignum argument parser.

    Args:
        available_devices: List of available output device names.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="lignum",
        description="Lignum - 2D Vector Drawing Engine",
    )
    parser.add_argument(
        "-V", "--version", action="version",
        version=f"Lignum {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    render = commands.add_parser(
        "render",
        help="Replay a JSON drawing script into an output device",
        epilog="The device is inferred from the output file extension when -d is omitted.",
    )
    render.add_argument("script", help="JSON drawing script ('-' reads stdin)")
    render.add_argument(
        "-o", "--output", dest="outputfile", help="Specify output filename"
    )
    render.add_argument(
        "-d",
        "--device",
        choices=available_devices,
        help=f'Specify output device ({", ".join(available_devices)})',
    )
    render.add_argument(
        "--width", type=_positive_int, default=None,
        help="Canvas width in pixels (default: 300)"
    )
    render.add_argument(
        "--height", type=_positive_int, default=None,
        help="Canvas height in pixels (default: 150)"
    )
    render.add_argument(
        "--background",
        help="CSS color painted under the drawing (png device only)"
    )
    render.add_argument(
        "--antialias",
        choices=["none", "fast", "good", "best", "gray", "subpixel"],
        default="gray",
        help="Set anti-aliasing mode for Cairo rendering (default: gray)"
    )
    render.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    return parser
