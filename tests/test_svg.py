# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import base64
import io
import logging
import math

import pytest
from PIL import Image

from lignum import DrawingContext, InvalidImageDataError, UnsupportedOperationError
from lignum.core.types import Arc, ClosePath, ImageData, LineTo, MoveTo, Path
from lignum.devices.svg import SvgRenderer, path_data

NS = {"svg": "http://www.w3.org/2000/svg"}


@pytest.fixture
def svg():
    return SvgRenderer(100, 50)


@pytest.fixture
def sctxt(svg):
    return DrawingContext(100, 50, renderer=svg)


def drawn(svg, tag):
    return svg.root.findall(f".//svg:{tag}", NS)


def test_empty_document(svg):
    assert svg.root.get("width") == "100"
    assert svg.root.get("viewBox") == "0 0 100 50"
    text = svg.finish()
    assert text.startswith("<?xml")
    assert "<svg" in text


def test_path_data():
    assert path_data(Path([MoveTo(0, 0), LineTo(10, 0.5), ClosePath()])) == "M0 0 L10 0.5 Z"


def test_path_data_keeps_arcs_native():
    d = path_data(Path([Arc(0, 0, 10, 0, math.pi)]))
    assert d == "M10 0 A10 10 0 0 1 0 10 A10 10 0 0 1 -10 0"


def test_path_data_skips_non_finite_segments():
    assert path_data(Path([MoveTo(0, 0), LineTo(math.nan, 1), LineTo(2, 2)])) == "M0 0 L2 2"


def test_fill_path(sctxt, svg):
    sctxt.fill_style = "rgba(255, 0, 0, 0.5)"
    sctxt.rect(1, 2, 3, 4)
    sctxt.fill("evenodd")

    (path,) = drawn(svg, "path")
    assert path.get("d") == "M1 2 L4 2 L4 6 L1 6 Z"
    assert path.get("fill") == "#ff0000"
    assert path.get("fill-opacity") == "0.5"
    assert path.get("fill-rule") == "evenodd"


def test_stroke_path_style(sctxt, svg):
    sctxt.line_width = 3
    sctxt.line_cap = "round"
    sctxt.set_line_dash([4])
    sctxt.line_dash_offset = 1
    sctxt.stroke_style = "#00f"
    sctxt.move_to(0, 0)
    sctxt.line_to(10, 10)
    sctxt.stroke()

    (path,) = drawn(svg, "path")
    assert path.get("fill") == "none"
    assert path.get("stroke") == "#0000ff"
    assert path.get("stroke-width") == "3"
    assert path.get("stroke-linecap") == "round"
    assert path.get("stroke-dasharray") == "4 4"
    assert path.get("stroke-dashoffset") == "1"


def test_zero_line_width_draws_nothing(sctxt, svg):
    sctxt.line_width = 0
    sctxt.stroke_rect(0, 0, 10, 10)
    assert drawn(svg, "rect") == []


def test_transform_and_alpha(sctxt, svg):
    sctxt.translate(10, 20)
    sctxt.global_alpha = 0.25
    sctxt.fill_rect(0, 0, 5, 5)

    (rect,) = drawn(svg, "rect")
    assert rect.get("transform") == "matrix(1 0 0 1 10 20)"
    assert rect.get("opacity") == "0.25"


def test_singular_transform_skips_the_operation(sctxt, svg):
    sctxt.scale(0, 1)
    sctxt.fill_rect(0, 0, 5, 5)
    assert drawn(svg, "rect") == []


def test_negative_rect_is_normalized(sctxt, svg):
    sctxt.fill_rect(10, 10, -4, -6)
    (rect,) = drawn(svg, "rect")
    assert [rect.get(a) for a in ("x", "y", "width", "height")] == ["6", "4", "4", "6"]


def test_blend_mode(sctxt, svg):
    sctxt.global_composite_operation = "multiply"
    sctxt.fill_rect(0, 0, 5, 5)
    (rect,) = drawn(svg, "rect")
    assert rect.get("style") == "mix-blend-mode:multiply"


def test_porter_duff_operation_warns_once(sctxt, svg, caplog):
    sctxt.global_composite_operation = "xor"
    with caplog.at_level(logging.WARNING, logger="lignum.devices.svg.svg"):
        sctxt.fill_rect(0, 0, 5, 5)
        sctxt.fill_rect(0, 0, 5, 5)
    assert len([r for r in caplog.records if "xor" in r.getMessage()]) == 1
    assert len(drawn(svg, "rect")) == 2


def test_linear_gradient_resource(sctxt, svg):
    gradient = sctxt.create_linear_gradient(0, 0, 100, 0)
    gradient.add_color_stop(1, "blue")
    gradient.add_color_stop(0, "rgba(255,0,0,0.5)")
    sctxt.fill_style = gradient
    sctxt.fill_rect(0, 0, 100, 50)

    (grad,) = drawn(svg, "linearGradient")
    assert grad.get("id") == "grad0"
    assert grad.get("x2") == "100"
    stops = grad.findall("svg:stop", NS)
    assert [s.get("offset") for s in stops] == ["0", "1"]
    assert stops[0].get("stop-opacity") == "0.5"
    (rect,) = drawn(svg, "rect")
    assert rect.get("fill") == "url(#grad0)"


def test_radial_gradient_resource(sctxt, svg):
    gradient = sctxt.create_radial_gradient(10, 10, 0, 20, 20, 30)
    gradient.add_color_stop(0, "white")
    gradient.add_color_stop(1, "black")
    sctxt.fill_style = gradient
    sctxt.fill_rect(0, 0, 10, 10)

    (grad,) = drawn(svg, "radialGradient")
    assert (grad.get("cx"), grad.get("r"), grad.get("fx"), grad.get("fr")) == ("20", "30", "10", "0")


def test_gradient_without_stops_paints_nothing(sctxt, svg):
    sctxt.fill_style = sctxt.create_linear_gradient(0, 0, 10, 0)
    sctxt.fill_rect(0, 0, 10, 10)
    assert drawn(svg, "rect") == []
    assert drawn(svg, "linearGradient") == []


def test_pattern_resource(sctxt, svg, red_green_image):
    pattern = sctxt.create_pattern(red_green_image, "repeat-x")
    sctxt.fill_style = pattern
    sctxt.fill_rect(0, 0, 50, 50)

    (pat,) = drawn(svg, "pattern")
    assert pat.get("id") == "pat0"
    assert pat.get("width") == "2"
    assert pat.get("height") == "1000000"
    assert pat.find("svg:image", NS).get("href").startswith("data:image/png;base64,")


def test_nested_clips_reference_each_other(sctxt, svg):
    sctxt.rect(0, 0, 50, 50)
    sctxt.clip()
    sctxt.scale(2, 2)
    sctxt.rect(5, 5, 10, 10)
    sctxt.clip("evenodd")
    sctxt.fill_rect(0, 0, 100, 100)

    clip0, clip1 = drawn(svg, "clipPath")
    assert clip0.get("id") == "clip0"
    assert clip0.get("clip-path") is None
    assert clip1.get("clip-path") == "url(#clip0)"
    clip1_path = clip1.find("svg:path", NS)
    assert clip1_path.get("clip-rule") == "evenodd"
    assert clip1_path.get("transform") == "matrix(2 0 0 2 0 0)"

    group = svg.root.find("svg:g", NS)
    assert group.get("clip-path") == "url(#clip1)"
    assert group.find("svg:rect", NS).get("transform") == "matrix(2 0 0 2 0 0)"


def test_clip_is_declared_once(sctxt, svg):
    sctxt.rect(0, 0, 50, 50)
    sctxt.clip()
    sctxt.fill_rect(0, 0, 5, 5)
    sctxt.fill_rect(5, 5, 5, 5)
    assert len(drawn(svg, "clipPath")) == 1
    assert len(drawn(svg, "g")) == 2


def test_text(sctxt, svg):
    sctxt.font = "bold 20px serif"
    sctxt.fill_text("hi  there", 10, 30)

    (text,) = drawn(svg, "text")
    assert text.text == "hi  there"
    assert text.get("font-family") == "serif"
    assert text.get("font-size") == "20"
    assert text.get("font-weight") == "bold"
    assert text.get("{http://www.w3.org/XML/1998/namespace}space") == "preserve"
    assert text.get("transform") == "matrix(1 0 0 1 10 30)"


def test_squeezed_stroke_text(sctxt, svg):
    sctxt.stroke_text("abcdefghij", 0, 10, 30)
    (text,) = drawn(svg, "text")
    assert text.get("transform") == "matrix(0.5 0 0 1 0 10)"
    assert text.get("stroke") == "#000000"


def test_draw_image_subrect(sctxt, svg, red_green_image):
    sctxt.image_smoothing_enabled = False
    sctxt.draw_image_subrect(red_green_image, 1, 0, 1, 1, 0, 0, 10, 10)

    (image,) = drawn(svg, "image")
    assert image.get("width") == "10"
    assert image.get("image-rendering") == "optimizeSpeed"
    encoded = image.get("href").split(",", 1)[1]
    with Image.open(io.BytesIO(base64.b64decode(encoded))) as img:
        assert img.size == (1, 1)
        assert img.convert("RGBA").getpixel((0, 0)) == (0, 255, 0, 255)


def test_draw_image_with_bad_buffer(sctxt):
    with pytest.raises(InvalidImageDataError):
        sctxt.draw_image(ImageData(2, 2, b"\x00" * 8), 0, 0)


def test_full_clear_drops_drawn_elements(sctxt, svg):
    sctxt.fill_rect(0, 0, 10, 10)
    sctxt.clear_rect(0, 0, 100, 50)
    assert drawn(svg, "rect") == []


def test_partial_clear_is_unsupported(sctxt):
    with pytest.raises(UnsupportedOperationError):
        sctxt.clear_rect(0, 0, 10, 10)


def test_pixel_operations_are_unsupported(sctxt, red_green_image):
    with pytest.raises(UnsupportedOperationError):
        sctxt.get_image_data(0, 0, 1, 1)
    with pytest.raises(UnsupportedOperationError):
        sctxt.put_image_data(red_green_image, 0, 0)


def test_write(sctxt, svg, tmp_path):
    sctxt.fill_rect(0, 0, 10, 10)
    out = tmp_path / "drawing.svg"
    svg.write(str(out))
    assert "<rect" in out.read_text(encoding="utf-8")


def test_ellipse_with_non_finite_rotation_connects_to_its_center(sctxt, svg):
    sctxt.ellipse(5, 5, 10, 5, math.inf, 0, 1)
    sctxt.fill()
    (path,) = drawn(svg, "path")
    assert path.get("d") == "M0 0 L5 5"
