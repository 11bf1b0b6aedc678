# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

# error types
BACKEND = 0
UNSUPPORTED = 1
INVALIDIMAGEDATA = 2
INVALIDVALUE = 3
STACKOVERFLOW = 4
SCRIPTERROR = 5
OTHER = 6

ERROR_NAMES = (
    "backend",
    "unsupported",
    "invalidimagedata",
    "invalidvalue",
    "stackoverflow",
    "scripterror",
    "other",
)


class LignumError(Exception):
    """Base class for every error raised by the drawing engine."""

    code = OTHER

    @property
    def error_name(self) -> str:
        return ERROR_NAMES[self.code]


class RendererError(LignumError):
    """A renderer backend failed while consuming a draw operation."""

    code = BACKEND


class UnsupportedOperationError(LignumError):
    code = UNSUPPORTED

    def __init__(self, operation: str, renderer: str = "") -> None:
        self.operation = operation
        self.renderer = renderer
        where = f" by {renderer}" if renderer else ""
        super().__init__(f"{operation} is not supported{where}")


class InvalidImageDataError(LignumError):
    code = INVALIDIMAGEDATA

    def __init__(self, width: int, height: int, length: int) -> None:
        self.width = width
        self.height = height
        self.length = length
        super().__init__(
            f"image buffer holds {length} bytes, expected {width * height * 4} "
            f"for {width}x{height} RGBA"
        )


class InvalidValueError(LignumError, ValueError):
    code = INVALIDVALUE

    def __init__(self, attribute: str, value, allowed=None) -> None:
        self.attribute = attribute
        self.value = value
        msg = f"invalid value {value!r} for {attribute}"
        if allowed:
            msg += f" (expected one of: {', '.join(sorted(allowed))})"
        super().__init__(msg)


class StackOverflowError(LignumError):
    code = STACKOVERFLOW

    def __init__(self, depth: int) -> None:
        self.depth = depth
        super().__init__(f"graphics state stack exceeds {depth} entries")


class ScriptError(LignumError):
    """A drawing script could not be replayed."""

    code = SCRIPTERROR

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"command {index}: {message}"
        super().__init__(message)


def check_tag(attribute: str, value, allowed) -> str:
    """Return ``value`` if it is one of ``allowed``, else raise InvalidValueError."""
    if value not in allowed:
        raise InvalidValueError(attribute, value, allowed)
    return value
