# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math

import pytest

from lignum.core.text_layout import (
    FontSpec, MonospaceTextShaper, TextMetrics, compute_text_anchor, parse_font,
    resolve_alignment, squeeze_factor,
)

METRICS = TextMetrics(width=40.0, ascent=8.0, descent=2.0)


@pytest.mark.parametrize("font, size, family", [
    ("10px sans-serif", 10.0, "sans-serif"),
    ("bold 16px 'DejaVu Sans', serif", 16.0, "'DejaVu Sans', serif"),
    ("italic 12pt Georgia", 16.0, "Georgia"),
    ("2em monospace", 20.0, "monospace"),
    ("14px/1.5 Arial", 14.0, "Arial"),
    ("24px", 24.0, "sans-serif"),
])
def test_parse_font_size_and_family(font, size, family):
    spec = parse_font(font)
    assert spec.size == pytest.approx(size)
    assert spec.family == family


def test_parse_font_style_and_weight():
    spec = parse_font("italic 700 16px serif")
    assert spec.is_italic
    assert spec.is_bold
    assert not parse_font("16px serif").is_bold


def test_parse_font_without_size_uses_default():
    assert parse_font("bold serif") == FontSpec()


def test_primary_family():
    assert parse_font("16px 'DejaVu Sans', serif").primary_family == "DejaVu Sans"


def test_monospace_shaper():
    metrics = MonospaceTextShaper().measure("abc", "20px serif")
    assert metrics.width == pytest.approx(36)
    assert metrics.ascent == pytest.approx(16)
    assert metrics.descent == pytest.approx(4)


@pytest.mark.parametrize("align, direction, expected", [
    ("start", "ltr", "left"),
    ("start", "rtl", "right"),
    ("end", "ltr", "right"),
    ("end", "rtl", "left"),
    ("end", "inherit", "right"),
    ("center", "rtl", "center"),
])
def test_resolve_alignment(align, direction, expected):
    assert resolve_alignment(align, direction) == expected


@pytest.mark.parametrize("align, expected_x", [
    ("left", 100.0),
    ("start", 100.0),
    ("center", 80.0),
    ("right", 60.0),
    ("end", 60.0),
])
def test_anchor_x(align, expected_x):
    x, _ = compute_text_anchor(100, 50, METRICS, align, "alphabetic", "ltr")
    assert x == pytest.approx(expected_x)


@pytest.mark.parametrize("baseline, expected_y", [
    ("alphabetic", 50.0),
    ("top", 58.0),
    ("hanging", 56.4),
    ("middle", 53.0),
    ("ideographic", 48.0),
    ("bottom", 48.0),
])
def test_anchor_y(baseline, expected_y):
    _, y = compute_text_anchor(100, 50, METRICS, "left", baseline, "ltr")
    assert y == pytest.approx(expected_y)


def test_anchor_uses_squeezed_width():
    x, _ = compute_text_anchor(100, 0, METRICS, "right", "alphabetic", "ltr", 0.5)
    assert x == pytest.approx(80)


@pytest.mark.parametrize("max_width, expected", [
    (None, 1.0),
    (80, 1.0),
    (20, 0.5),
    (0, 0.0),
    (-1, 0.0),
    (math.nan, 0.0),
])
def test_squeeze_factor(max_width, expected):
    assert squeeze_factor(40.0, max_width) == pytest.approx(expected)
