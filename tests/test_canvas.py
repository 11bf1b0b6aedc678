# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math

import pytest

from lignum import (
    Color, DrawingContext, ImageData, InvalidValueError, UnsupportedOperationError,
)
from lignum.core import types as lt


def test_clip_then_fill_emits_two_operations(ctxt, ops):
    ctxt.move_to(0, 0)
    ctxt.line_to(10, 0)
    ctxt.line_to(10, 10)
    ctxt.clip("evenodd")
    ctxt.begin_path()
    ctxt.rect(1, 1, 2, 2)
    ctxt.fill("nonzero")

    assert [type(op) for op in ops] == [lt.Clip, lt.FillPath]
    clip, fill = ops
    assert len(clip.path) == 3
    assert clip.fill_rule == "evenodd"
    assert len(fill.path) == 1
    assert fill.fill_rule == "nonzero"
    assert fill.state.clip is not None
    assert fill.state.clip.fill_rule == "evenodd"


def test_terminal_operations_consume_the_path(ctxt, ops):
    ctxt.rect(0, 0, 5, 5)
    ctxt.fill()
    assert ctxt.path.is_empty
    assert ctxt.current_point is None

    ctxt.stroke()
    assert len(ops) == 1


@pytest.mark.parametrize("terminal", ["fill", "stroke", "clip"])
def test_empty_path_emits_nothing(ctxt, ops, terminal):
    getattr(ctxt, terminal)()
    assert len(ops) == 0
    assert ctxt.gstate.clip is None


def test_snapshot_is_isolated_from_later_changes(ctxt, ops):
    ctxt.fill_style = "red"
    ctxt.rect(0, 0, 5, 5)
    ctxt.fill()
    ctxt.fill_style = "blue"
    ctxt.translate(3, 3)

    assert ops[0].state.fill_style == Color("red")
    assert ops[0].state.transform == lt.IDENTITY_MATRIX


def test_gradient_stops_added_later_do_not_change_the_snapshot(ctxt, ops):
    gradient = ctxt.create_linear_gradient(0, 0, 10, 0)
    gradient.add_color_stop(0, "red")
    ctxt.fill_style = gradient
    ctxt.fill_rect(0, 0, 10, 10)
    gradient.add_color_stop(1, "blue")
    assert len(ops[0].state.fill_style.stops) == 1


def test_pattern_transform_set_later_does_not_change_the_snapshot(ctxt, ops, red_green_image):
    pattern = ctxt.create_pattern(red_green_image)
    ctxt.fill_style = pattern
    ctxt.fill_rect(0, 0, 10, 10)
    pattern.set_transform((2, 0, 0, 2, 0, 0))
    assert ops[0].state.fill_style.transform is None
    assert ops[0].state.fill_style.image is red_green_image


def test_clip_keeps_transform_of_its_creation(ctxt, ops):
    ctxt.scale(2, 2)
    ctxt.rect(0, 0, 10, 10)
    ctxt.clip()
    ctxt.reset_transform()
    ctxt.fill_rect(0, 0, 5, 5)

    clip = ops[-1].state.clip
    assert clip.transform == (2.0, 0.0, 0.0, 2.0, 0.0, 0.0)
    assert ops[-1].state.transform == lt.IDENTITY_MATRIX


def test_nested_clips_chain_oldest_first(ctxt):
    ctxt.rect(0, 0, 50, 50)
    ctxt.clip()
    ctxt.rect(10, 10, 50, 50)
    ctxt.clip("evenodd")

    chain = ctxt.gstate.clip.chain()
    assert [c.fill_rule for c in chain] == ["nonzero", "evenodd"]
    assert [c.serial for c in chain] == [0, 1]


def test_restore_brings_back_the_earlier_clip(ctxt):
    ctxt.save()
    ctxt.rect(0, 0, 5, 5)
    ctxt.clip()
    assert ctxt.gstate.clip is not None
    ctxt.restore()
    assert ctxt.gstate.clip is None


def test_rect_operations_leave_the_path_alone(ctxt, ops):
    ctxt.move_to(1, 1)
    ctxt.line_to(2, 2)
    ctxt.fill_rect(0, 0, 10, 10)
    ctxt.stroke_rect(0, 0, 10, 10)
    ctxt.clear_rect(0, 0, 10, 10)

    assert [type(op) for op in ops] == [lt.FillRect, lt.StrokeRect, lt.ClearRect]
    assert len(ctxt.path) == 2


def test_degenerate_rects_are_skipped(ctxt, ops):
    ctxt.fill_rect(0, 0, 0, 10)
    ctxt.fill_rect(0, 0, math.nan, 10)
    ctxt.stroke_rect(5, 5, 0, 0)
    ctxt.clear_rect(0, math.inf, 1, 1)
    assert len(ops) == 0

    # a zero-height stroke_rect still draws a line
    ctxt.stroke_rect(0, 5, 10, 0)
    assert len(ops) == 1


def test_fill_text_carries_anchor(ctxt, ops):
    ctxt.font = "20px sans-serif"
    ctxt.text_align = "center"
    ctxt.text_baseline = "top"
    ctxt.fill_text("abcd", 50, 10)

    op = ops[0]
    assert isinstance(op, lt.FillText)
    # monospace metrics: 0.6 em advance, 0.8 em ascent
    assert op.width == pytest.approx(48)
    assert op.anchor_x == pytest.approx(26)
    assert op.anchor_y == pytest.approx(26)
    assert op.scale_x == 1.0


def test_fill_text_squeezes_to_max_width(ctxt, ops):
    ctxt.fill_text("abcdefghij", 0, 0, 30)
    op = ops[0]
    assert op.scale_x == pytest.approx(0.5)
    assert op.width == pytest.approx(30)


@pytest.mark.parametrize("max_width", [0, -5, math.nan])
def test_fill_text_with_no_room_draws_nothing(ctxt, ops, max_width):
    ctxt.stroke_text("abc", 0, 0, max_width)
    assert len(ops) == 0


def test_measure_text(ctxt):
    metrics = ctxt.measure_text("hello")
    assert metrics.width == pytest.approx(30)
    assert metrics.ascent == pytest.approx(8)


def test_draw_image_variants(ctxt, ops, red_green_image):
    ctxt.draw_image(red_green_image, 5, 6)
    ctxt.draw_image_scaled(red_green_image, 0, 0, 20, 10)
    ctxt.draw_image_subrect(red_green_image, 1, 0, 1, 1, 0, 0, 4, 4)
    ctxt.draw_image_scaled(red_green_image, 0, 0, 0, 10)

    assert len(ops) == 3
    first = ops[0]
    assert (first.sx, first.sy, first.sw, first.sh) == (0, 0, 2, 1)
    assert (first.dx, first.dy, first.dw, first.dh) == (5, 6, 2, 1)
    assert (ops[2].sx, ops[2].sw) == (1, 1)


def test_put_image_data_records_dirty_rect(ctxt, ops, red_green_image):
    ctxt.put_image_data(red_green_image, 1, 2)
    ctxt.put_image_data_dirty(red_green_image, 0, 0, 1, 0, 1, 1)
    assert ops[0].dirty is None
    assert ops[1].dirty == (1, 0, 1, 1)


def test_create_image_data_is_transparent(ctxt):
    image = ctxt.create_image_data(3, -2)
    assert (image.width, image.height) == (3, 2)
    assert image.data == bytearray(24)


def test_get_image_data_from_recording_is_blank(ctxt):
    image = ctxt.get_image_data(0, 0, 2, 2)
    assert isinstance(image, ImageData)
    assert bytes(image.data) == bytes(16)


@pytest.mark.parametrize("position", [(math.nan, 0), (0, math.inf), (-math.inf, math.nan)])
def test_put_image_data_at_non_finite_position_is_ignored(ctxt, ops, red_green_image, position):
    ctxt.put_image_data(red_green_image, *position)
    assert ops == []


@pytest.mark.parametrize("dirty", [
    (math.inf, 0, 0, 1, 1, 1),
    (0, 0, math.nan, 0, 1, 1),
    (0, 0, 0, 0, math.inf, 1),
    (0, 0, 0, 0, 1, -math.inf),
])
def test_put_image_data_dirty_with_non_finite_rect_is_ignored(ctxt, ops, red_green_image, dirty):
    ctxt.put_image_data_dirty(red_green_image, *dirty)
    assert ops == []


@pytest.mark.parametrize("rect", [(math.nan, 0, 1, 1), (0, 0, math.inf, 1)])
def test_get_image_data_with_non_finite_rect_is_rejected(ctxt, rect):
    with pytest.raises(InvalidValueError):
        ctxt.get_image_data(*rect)


def test_create_image_data_with_non_finite_size_is_rejected(ctxt):
    with pytest.raises(InvalidValueError):
        ctxt.create_image_data(math.nan, 2)


def test_get_image_data_of_zero_size_is_rejected(ctxt):
    with pytest.raises(InvalidValueError):
        ctxt.get_image_data(0, 0, 0, 2)


def test_context_without_renderer_discards():
    ctxt = DrawingContext(10, 10, record=False)
    assert ctxt.renderer is None
    ctxt.fill_rect(0, 0, 5, 5)
    assert ctxt.display_list_builder.discarded == 1
    assert ctxt.finish() is None
    with pytest.raises(UnsupportedOperationError):
        ctxt.get_image_data(0, 0, 1, 1)


def test_fill_style_accepts_paint_objects(ctxt):
    gradient = ctxt.create_radial_gradient(0, 0, 1, 0, 0, 10)
    ctxt.fill_style = gradient
    assert ctxt.fill_style is gradient
    assert ctxt.fill_style.is_radial

    pattern = ctxt.create_pattern(ImageData(1, 1), "")
    ctxt.stroke_style = pattern
    assert ctxt.stroke_style.repetition == "repeat"

    with pytest.raises(TypeError):
        ctxt.fill_style = 42


def test_finish_returns_the_display_list(ctxt):
    ctxt.fill_rect(0, 0, 1, 1)
    display_list = ctxt.finish()
    assert isinstance(display_list, lt.DisplayList)
    assert (display_list.width, display_list.height) == (100, 100)
    assert len(display_list) == 1
