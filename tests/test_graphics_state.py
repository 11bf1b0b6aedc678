# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import dataclasses

import pytest

from lignum import Color, DrawingContext, InvalidValueError, StackOverflowError
from lignum.core import types as lt


def test_default_state(ctxt):
    assert ctxt.global_alpha == 1.0
    assert ctxt.global_composite_operation == "source-over"
    assert ctxt.line_width == 1.0
    assert ctxt.line_cap == "butt"
    assert ctxt.line_join == "miter"
    assert ctxt.miter_limit == 10.0
    assert ctxt.get_line_dash() == []
    assert ctxt.font == "10px sans-serif"
    assert ctxt.text_align == "start"
    assert ctxt.text_baseline == "alphabetic"
    assert ctxt.fill_style == Color("#000")
    assert ctxt.image_smoothing_enabled is True
    assert ctxt.gstate.clip is None


def test_save_restore_round_trip(ctxt):
    ctxt.line_width = 4
    ctxt.fill_style = "red"
    ctxt.translate(10, 10)
    ctxt.save()

    ctxt.line_width = 9
    ctxt.fill_style = "blue"
    ctxt.rotate(1.0)
    ctxt.restore()

    assert ctxt.line_width == 4.0
    assert ctxt.fill_style == Color("red")
    assert ctxt.get_transform() == (1.0, 0.0, 0.0, 1.0, 10.0, 10.0)
    assert ctxt.stack_depth == 0


def test_saved_state_is_independent_of_live_state(ctxt):
    ctxt.set_line_dash([1, 2])
    ctxt.save()
    ctxt.gstate.line_dash.append(3.0)
    ctxt.restore()
    assert ctxt.get_line_dash() == [1.0, 2.0]


def test_restore_on_empty_stack_is_a_no_op(ctxt):
    ctxt.line_width = 3
    ctxt.restore()
    assert ctxt.line_width == 3.0


def test_reset_keeps_the_stack_and_clears_the_path(ctxt):
    ctxt.save()
    ctxt.line_width = 7
    ctxt.move_to(1, 1)
    ctxt.line_to(2, 2)

    ctxt.reset()
    assert ctxt.line_width == 1.0
    assert ctxt.path.is_empty
    assert ctxt.current_point is None
    assert ctxt.stack_depth == 1


def test_save_does_not_touch_the_path(ctxt):
    ctxt.move_to(1, 1)
    ctxt.save()
    ctxt.line_to(2, 2)
    ctxt.restore()
    assert len(ctxt.path) == 2


def test_stack_overflow():
    ctxt = DrawingContext(max_stack_depth=3)
    for _ in range(3):
        ctxt.save()
    with pytest.raises(StackOverflowError) as excinfo:
        ctxt.save()
    assert excinfo.value.error_name == "stackoverflow"
    assert ctxt.stack_depth == 3


def test_numeric_attributes_are_stored_unvalidated(ctxt):
    ctxt.line_width = -2
    ctxt.miter_limit = 0
    ctxt.global_alpha = 5
    assert ctxt.line_width == -2.0
    assert ctxt.miter_limit == 0.0
    assert ctxt.global_alpha == 5.0


@pytest.mark.parametrize("attribute, value", [
    ("line_cap", "rounded"),
    ("line_join", "mitre"),
    ("text_align", "justify"),
    ("text_baseline", "baseline"),
    ("direction", "up"),
    ("global_composite_operation", "plus"),
    ("image_smoothing_quality", "ultra"),
])
def test_unknown_tags_are_rejected(ctxt, attribute, value):
    before = getattr(ctxt, attribute)
    with pytest.raises(InvalidValueError):
        setattr(ctxt, attribute, value)
    assert getattr(ctxt, attribute) == before


def test_unknown_fill_rule_is_rejected(ctxt):
    ctxt.rect(0, 0, 1, 1)
    with pytest.raises(InvalidValueError):
        ctxt.fill("winding")


@pytest.mark.parametrize("value", sorted(lt.COMPOSITE_OPERATIONS))
def test_every_composite_operation_is_accepted(ctxt, value):
    ctxt.global_composite_operation = value
    assert ctxt.global_composite_operation == value


def test_state_copy_equality():
    gs = lt.GraphicsState()
    copied = gs.copy()
    assert copied == gs
    copied.line_width = 3.0
    assert copied != gs


def test_copy_shares_clip_chain_and_pattern_pixels(ctxt, red_green_image):
    ctxt.rect(0, 0, 5, 5)
    ctxt.clip()
    pattern = ctxt.create_pattern(red_green_image)
    ctxt.fill_style = pattern

    copied = ctxt.gstate.copy()
    assert copied.clip is ctxt.gstate.clip
    assert copied.fill_style is not pattern
    assert copied.fill_style == pattern
    assert copied.fill_style.image is red_green_image


def test_installed_clip_cannot_be_modified(ctxt):
    ctxt.rect(0, 0, 5, 5)
    ctxt.clip()
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctxt.gstate.clip.fill_rule = "evenodd"
