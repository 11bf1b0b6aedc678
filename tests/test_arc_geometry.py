# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math
from dataclasses import astuple

import pytest

from lignum.core.arc_geometry import (
    arc_to_beziers, arc_to_svg_segments, clamp_round_rect_radii, ellipse_point,
    ellipse_to_beziers, expand_round_rect_radii, flatten_cubic, lower_path, normalize_sweep,
    quadratic_to_cubic, round_rect_to_segments, tangent_arc,
)
from lignum.core.types import (
    Arc, ClosePath, CubicTo, Ellipse, LineTo, MoveTo, Path, QuadraticTo, Rect,
)

PI = math.pi


@pytest.mark.parametrize("start, end, ccw, expected", [
    (0.0, PI / 2, False, PI / 2),
    (0.0, PI / 2, True, -3 * PI / 2),
    (0.0, -PI / 2, False, 3 * PI / 2),
    (PI / 2, 0.0, True, -PI / 2),
    (0.0, 3 * PI, False, 2 * PI),
    (0.0, -3 * PI, True, -2 * PI),
    (0.0, 0.0, False, 0.0),
    (float("nan"), 1.0, False, 0.0),
])
def test_normalize_sweep(start, end, ccw, expected):
    assert normalize_sweep(start, end, ccw) == pytest.approx(expected)


def test_quarter_arc_is_one_curve():
    (x0, y0), curves = arc_to_beziers(0, 0, 1, 0, PI / 2)
    assert (x0, y0) == pytest.approx((1, 0))
    assert len(curves) == 1
    assert (curves[0].x, curves[0].y) == pytest.approx((0, 1), abs=1e-12)


def test_full_circle_is_four_curves_ending_at_start():
    (x0, y0), curves = arc_to_beziers(10, 10, 5, 0, 2 * PI)
    assert len(curves) == 4
    assert (curves[-1].x, curves[-1].y) == pytest.approx((x0, y0))


def test_bezier_midpoint_stays_on_circle():
    _, curves = arc_to_beziers(0, 0, 100, 0, PI / 2)
    c = curves[0]
    # point at t = 0.5 of a cubic starting at (100, 0)
    mx = 0.125 * 100 + 0.375 * c.cp1x + 0.375 * c.cp2x + 0.125 * c.x
    my = 0.125 * 0 + 0.375 * c.cp1y + 0.375 * c.cp2y + 0.125 * c.y
    assert math.hypot(mx, my) == pytest.approx(100, abs=0.05)


def test_svg_segments_split_at_quarter_turns():
    _, segments = arc_to_svg_segments(0, 0, 1, 1, 0.0, 0, 2 * PI)
    assert len(segments) == 4
    assert all(s.large_arc == 0 and s.sweep == 1 for s in segments)

    _, segments = arc_to_svg_segments(0, 0, 1, 1, 0.0, 0, PI / 2, ccw=True)
    assert len(segments) == 3
    assert all(s.sweep == 0 for s in segments)
    assert (segments[-1].x, segments[-1].y) == pytest.approx((0, 1), abs=1e-12)


def test_tangent_arc_rounds_a_right_angle():
    t = tangent_arc(0, 0, 10, 0, 10, 10, 5)
    assert (t.t1x, t.t1y) == pytest.approx((5, 0))
    assert (t.t2x, t.t2y) == pytest.approx((10, 5))
    assert (t.cx, t.cy) == pytest.approx((5, 5))
    assert t.ccw is False
    assert normalize_sweep(t.start_angle, t.end_angle, t.ccw) == pytest.approx(PI / 2)


def test_tangent_arc_turning_the_other_way_is_counterclockwise():
    t = tangent_arc(0, 0, 10, 0, 10, -10, 5)
    assert (t.cx, t.cy) == pytest.approx((5, -5))
    assert t.ccw is True
    assert normalize_sweep(t.start_angle, t.end_angle, t.ccw) == pytest.approx(-PI / 2)


@pytest.mark.parametrize("points, radius", [
    ((0, 0, 10, 0, 10, 10), 0),
    ((0, 0, 5, 0, 10, 0), 5),
    ((0, 0, 0, 0, 10, 10), 5),
    ((0, 0, 10, 0, 10, 0), 5),
])
def test_tangent_arc_degenerate_cases(points, radius):
    assert tangent_arc(*points, radius) is None


@pytest.mark.parametrize("radii, expected", [
    (None, (0, 0, 0, 0)),
    (5, (5, 5, 5, 5)),
    ([1, 2], (1, 2, 1, 2)),
    ([1, 2, 3], (1, 2, 3, 2)),
    ([1, 2, 3, 4], (1, 2, 3, 4)),
])
def test_expand_round_rect_radii(radii, expected):
    assert expand_round_rect_radii(radii) == expected


def test_clamp_round_rect_radii():
    assert clamp_round_rect_radii(10, 4, (5, 1, -3, float("nan"))) == (2, 1, 0, 0)


def test_square_round_rect_has_no_curves():
    segments = round_rect_to_segments(0, 0, 10, 10, 0)
    assert segments == [MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10),
                        LineTo(0, 10), LineTo(0, 0), ClosePath()]


def test_round_rect_has_a_curve_per_corner():
    segments = round_rect_to_segments(0, 0, 20, 10, 4)
    curves = [s for s in segments if isinstance(s, CubicTo)]
    assert len(curves) == 4
    assert segments[0] == MoveTo(4, 0)


def test_quadratic_to_cubic():
    assert astuple(quadratic_to_cubic(0, 0, 3, 3, 6, 0)) == pytest.approx((2, 2, 4, 2, 6, 0))


def test_flatten_straight_cubic_is_one_segment():
    points = flatten_cubic(0, 0, CubicTo(3, 0, 6, 0, 10, 0), 0.25)
    assert points == [(10, 0)]


def test_flatten_curved_cubic_stays_within_tolerance():
    _, curves = arc_to_beziers(0, 0, 50, 0, PI / 2)
    points = flatten_cubic(50, 0, curves[0], 0.1)
    assert len(points) > 4
    assert all(math.hypot(x, y) == pytest.approx(50, abs=0.2) for x, y in points)


def test_lower_path_reopens_subpath_after_rect():
    segments = lower_path(Path([Rect(0, 0, 10, 10), LineTo(20, 20)]))
    assert segments == [MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10), LineTo(0, 10),
                        ClosePath(), MoveTo(0, 0), LineTo(20, 20)]


def test_lower_path_negative_radius_draws_line_to_center():
    segments = lower_path(Path([MoveTo(0, 0), Arc(5, 5, -1, 0, 1)]))
    assert segments == [MoveTo(0, 0), LineTo(5, 5)]


def test_lower_path_quadratic_uses_current_point():
    segments = lower_path(Path([MoveTo(0, 0), QuadraticTo(3, 3, 6, 0)]))
    assert isinstance(segments[1], CubicTo)
    assert astuple(segments[1]) == pytest.approx((2, 2, 4, 2, 6, 0))


def test_lower_path_arc_connects_from_current_point():
    segments = lower_path(Path([MoveTo(0, 0), Arc(10, 0, 5, PI, 2 * PI)]))
    assert segments[0] == MoveTo(0, 0)
    assert isinstance(segments[1], LineTo)
    assert astuple(segments[1]) == pytest.approx((5, 0), abs=1e-9)
    assert len([s for s in segments if isinstance(s, CubicTo)]) == 2


def test_lower_path_native_arcs():
    segments = lower_path(Path([Arc(0, 0, 10, 0, PI)]), native_arcs=True)
    assert segments[0] == MoveTo(10, 0)
    assert [type(s).__name__ for s in segments[1:]] == ["ArcSegment", "ArcSegment"]


@pytest.mark.parametrize("rotation, angle", [
    (math.inf, 0.0),
    (0.0, -math.inf),
    (math.nan, 1.0),
])
def test_ellipse_point_with_non_finite_angles_is_nan(rotation, angle):
    x, y = ellipse_point(5, 5, 10, 5, rotation, angle)
    assert math.isnan(x) and math.isnan(y)


def test_non_finite_rotation_gives_no_curves():
    assert ellipse_to_beziers(5, 5, 10, 5, math.inf, 0, PI) == ((5, 5), [])
    assert arc_to_svg_segments(5, 5, 10, 5, -math.inf, 0, PI) == ((5, 5), [])


@pytest.mark.parametrize("native_arcs", [False, True])
def test_lower_path_with_non_finite_rotation_connects_to_center(native_arcs):
    path = Path([MoveTo(0, 0), Ellipse(5, 5, 10, 5, math.inf, 0, 1)])
    assert lower_path(path, native_arcs=native_arcs) == [MoveTo(0, 0), LineTo(5, 5)]
