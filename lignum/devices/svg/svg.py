# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SVG Output Device

This device writes draw operations as an SVG document built with
xml.etree.ElementTree. Paths keep their arcs as native elliptical arc
commands, gradients and patterns become <defs> resources named by the paint
resolver, clips become nested <clipPath> elements, text stays selectable
<text>, and images are embedded as base64 PNG data encoded with Pillow.

Operations that need a pixel surface (get_image_data, put_image_data) are
not available.
"""

import base64
import io
import logging
import math
import xml.etree.ElementTree as ET

from PIL import Image

from .. import (
    Renderer, dash_pattern, effective_alpha, normalized_rect, usable_matrix,
    validate_image_buffer,
)
from ..common.css_color import color_or_black
from ...core import types as lt
from ...core.arc_geometry import ArcSegment, lower_path
from ...core.paint_resolver import (
    PAINT_LINEAR_GRADIENT, PAINT_PATTERN, PAINT_RADIAL_GRADIENT,
    degenerate_gradient, sorted_stops,
)
from ...core.text_layout import parse_font
from ...operators.matrix import compose, scale_matrix, translate_matrix

logger = logging.getLogger(__name__)

# SVG namespace
_SVG_NS = 'http://www.w3.org/2000/svg'
_XML_SPACE = '{http://www.w3.org/XML/1998/namespace}space'

# Tile size used for the axes a pattern must not repeat along
_NO_REPEAT_EXTENT = 1000000

# Canvas composite operations CSS can express as mix-blend-mode
_BLEND_MODES = {
    "lighter": "plus-lighter",
    "multiply": "multiply", "screen": "screen", "overlay": "overlay",
    "darken": "darken", "lighten": "lighten",
    "color-dodge": "color-dodge", "color-burn": "color-burn",
    "hard-light": "hard-light", "soft-light": "soft-light",
    "difference": "difference", "exclusion": "exclusion",
    "hue": "hue", "saturation": "saturation", "color": "color",
    "luminosity": "luminosity",
}


def _tag(name):
    return f'{{{_SVG_NS}}}{name}'


def _fmt(value):
    """Format a float for SVG attribute output, stripping trailing zeros."""
    if value == int(value):
        return str(int(value))
    # Use enough precision for clean coordinates
    formatted = f'{value:.4f}'.rstrip('0').rstrip('.')
    return formatted if formatted != '-0' else '0'


def _rgb_to_hex(r, g, b):
    """Convert RGB floats (0.0-1.0) to hex color string."""
    ri = max(0, min(255, int(round(r * 255))))
    gi = max(0, min(255, int(round(g * 255))))
    bi = max(0, min(255, int(round(b * 255))))
    return f'#{ri:02x}{gi:02x}{bi:02x}'


def _matrix_attr(m):
    return 'matrix(' + ' '.join(_fmt(v) for v in m) + ')'


def path_data(path) -> str:
    """SVG path data for a Path, arcs kept as minor elliptical arc commands."""
    parts = []
    for seg in lower_path(path, native_arcs=True):
        values = [v for v in vars(seg).values() if isinstance(v, float)]
        if not all(math.isfinite(v) for v in values):
            logger.debug("non-finite %s skipped", type(seg).__name__)
            continue

        if isinstance(seg, lt.MoveTo):
            parts.append(f'M{_fmt(seg.x)} {_fmt(seg.y)}')
        elif isinstance(seg, lt.LineTo):
            parts.append(f'L{_fmt(seg.x)} {_fmt(seg.y)}')
        elif isinstance(seg, lt.CubicTo):
            parts.append(f'C{_fmt(seg.cp1x)} {_fmt(seg.cp1y)} {_fmt(seg.cp2x)} '
                         f'{_fmt(seg.cp2y)} {_fmt(seg.x)} {_fmt(seg.y)}')
        elif isinstance(seg, ArcSegment):
            parts.append(f'A{_fmt(seg.rx)} {_fmt(seg.ry)} {_fmt(seg.rotation)} '
                         f'{seg.large_arc} {seg.sweep} {_fmt(seg.x)} {_fmt(seg.y)}')
        elif isinstance(seg, lt.ClosePath):
            parts.append('Z')
    return ' '.join(parts)


def png_data_uri(image, box=None) -> str:
    """
    Encode an image source as a data:image/png URI.

    ``box`` is an optional (left, top, right, bottom) crop in image pixels;
    the area outside the image is transparent.
    """
    data = validate_image_buffer(image)
    img = Image.frombytes('RGBA', (image.width, image.height), data)
    if box is not None:
        img = img.crop(box)
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return 'data:image/png;base64,' + base64.b64encode(buf.getvalue()).decode('ascii')


class SvgRenderer(Renderer):
    name = "svg"

    def __init__(self, width: int = lt.DEFAULT_WIDTH, height: int = lt.DEFAULT_HEIGHT) -> None:
        super().__init__(width, height)
        ET.register_namespace('', _SVG_NS)

        self.root = ET.Element(_tag('svg'), {
            'version': '1.1',
            'width': str(self.width),
            'height': str(self.height),
            'viewBox': f'0 0 {self.width} {self.height}',
        })
        self.defs = ET.SubElement(self.root, _tag('defs'))
        self._clip_ids = {}
        self._warned_operations = set()

    # resources

    def _clip_ref(self, clip) -> str:
        """Declare every clip of the chain not yet in <defs>; return a reference."""
        for entry in clip.chain():
            if entry.serial in self._clip_ids:
                continue
            clip_id = f'clip{entry.serial}'
            clip_elem = ET.SubElement(self.defs, _tag('clipPath'), {
                'id': clip_id, 'clipPathUnits': 'userSpaceOnUse',
            })
            # a clipPath referencing its predecessor intersects with it
            if entry.previous is not None:
                clip_elem.set('clip-path', f'url(#{self._clip_ids[entry.previous.serial]})')

            path_elem = ET.SubElement(clip_elem, _tag('path'), {'clip-rule': entry.fill_rule})
            if usable_matrix(entry.transform):
                path_elem.set('d', path_data(entry.path))
                if entry.transform != lt.IDENTITY_MATRIX:
                    path_elem.set('transform', _matrix_attr(entry.transform))
            else:
                # a singular clip transform leaves nothing visible
                path_elem.set('d', '')
            self._clip_ids[entry.serial] = clip_id

        return f'url(#{self._clip_ids[clip.serial]})'

    def _gradient_def(self, resolved) -> bool:
        stops = sorted_stops(resolved.stops)
        kind = resolved.geometry
        if not stops or degenerate_gradient(kind):
            return False

        if resolved.kind == PAINT_RADIAL_GRADIENT:
            grad = ET.SubElement(self.defs, _tag('radialGradient'), {
                'id': resolved.resource_id,
                'gradientUnits': 'userSpaceOnUse',
                'cx': _fmt(kind.x1), 'cy': _fmt(kind.y1), 'r': _fmt(kind.r1),
                'fx': _fmt(kind.x0), 'fy': _fmt(kind.y0), 'fr': _fmt(kind.r0),
            })
        else:
            grad = ET.SubElement(self.defs, _tag('linearGradient'), {
                'id': resolved.resource_id,
                'gradientUnits': 'userSpaceOnUse',
                'x1': _fmt(kind.x0), 'y1': _fmt(kind.y0),
                'x2': _fmt(kind.x1), 'y2': _fmt(kind.y1),
            })

        for stop in stops:
            r, g, b, a = color_or_black(stop.color)
            stop_elem = ET.SubElement(grad, _tag('stop'), {
                'offset': _fmt(stop.offset), 'stop-color': _rgb_to_hex(r, g, b),
            })
            if a < 1.0:
                stop_elem.set('stop-opacity', _fmt(a))
        return True

    def _pattern_def(self, resolved, state) -> bool:
        image = resolved.image
        if image.width <= 0 or image.height <= 0:
            return False
        if resolved.transform is not None and not usable_matrix(resolved.transform):
            return False

        repeat_x = resolved.repetition in (lt.REPEAT, lt.REPEAT_X)
        repeat_y = resolved.repetition in (lt.REPEAT, lt.REPEAT_Y)
        pattern = ET.SubElement(self.defs, _tag('pattern'), {
            'id': resolved.resource_id,
            'patternUnits': 'userSpaceOnUse',
            'x': '0', 'y': '0',
            'width': str(image.width if repeat_x else _NO_REPEAT_EXTENT),
            'height': str(image.height if repeat_y else _NO_REPEAT_EXTENT),
        })
        if resolved.transform is not None:
            pattern.set('patternTransform', _matrix_attr(resolved.transform))

        image_elem = ET.SubElement(pattern, _tag('image'), {
            'x': '0', 'y': '0',
            'width': str(image.width), 'height': str(image.height),
            'href': png_data_uri(image),
        })
        if not state.image_smoothing_enabled:
            image_elem.set('image-rendering', 'optimizeSpeed')
        return True

    def _set_paint(self, elem, attr, paint, state) -> bool:
        """Set the fill or stroke of ``elem``; False when the paint shows nothing."""
        paint = lt.as_paint(paint)
        if isinstance(paint, lt.Color):
            r, g, b, a = color_or_black(paint.value)
            elem.set(attr, _rgb_to_hex(r, g, b))
            if a < 1.0:
                elem.set(f'{attr}-opacity', _fmt(a))
            return True

        resolved = self.paint_resolver.resolve(paint)
        if resolved.kind in (PAINT_LINEAR_GRADIENT, PAINT_RADIAL_GRADIENT):
            if not self._gradient_def(resolved):
                return False
        elif resolved.kind == PAINT_PATTERN:
            if not self._pattern_def(resolved, state):
                return False
        elem.set(attr, resolved.reference)
        return True

    def _set_stroke_style(self, elem, state) -> bool:
        width = state.line_width
        if not (math.isfinite(width) and width > 0):
            return False

        elem.set('fill', 'none')
        elem.set('stroke-width', _fmt(width))
        if state.line_cap != lt.LINE_CAP_BUTT:
            elem.set('stroke-linecap', state.line_cap)
        if state.line_join != lt.LINE_JOIN_MITER:
            elem.set('stroke-linejoin', state.line_join)
        if math.isfinite(state.miter_limit) and state.miter_limit > 0:
            elem.set('stroke-miterlimit', _fmt(state.miter_limit))

        dashes = dash_pattern(state.line_dash)
        if dashes:
            elem.set('stroke-dasharray', ' '.join(_fmt(d) for d in dashes))
            if math.isfinite(state.line_dash_offset) and state.line_dash_offset:
                elem.set('stroke-dashoffset', _fmt(state.line_dash_offset))
        return True

    def _place(self, elem, state, transform=None) -> None:
        """Append ``elem`` to the document with the state's alpha, blend and clip."""
        alpha = effective_alpha(state.global_alpha)
        if alpha <= 0.0:
            return
        if alpha < 1.0:
            elem.set('opacity', _fmt(alpha))

        transform = state.transform if transform is None else transform
        if transform != lt.IDENTITY_MATRIX:
            elem.set('transform', _matrix_attr(transform))

        operation = state.global_composite_operation
        if operation in _BLEND_MODES:
            elem.set('style', f'mix-blend-mode:{_BLEND_MODES[operation]}')
        elif operation != lt.COMPOSITE_SOURCE_OVER and operation not in self._warned_operations:
            self._warned_operations.add(operation)
            logger.warning("composite operation %r has no SVG form, using source-over",
                           operation)

        parent = self.root
        if state.clip is not None:
            # the clip lives outside the element's own transform
            parent = ET.SubElement(self.root, _tag('g'), {'clip-path': self._clip_ref(state.clip)})
        parent.append(elem)

    # operations

    def render_fill_path(self, op) -> None:
        if not usable_matrix(op.state.transform):
            return
        d = path_data(op.path)
        if not d:
            return
        elem = ET.Element(_tag('path'), {'d': d, 'fill-rule': op.fill_rule})
        if self._set_paint(elem, 'fill', op.state.fill_style, op.state):
            self._place(elem, op.state)

    def render_stroke_path(self, op) -> None:
        if not usable_matrix(op.state.transform):
            return
        d = path_data(op.path)
        if not d:
            return
        elem = ET.Element(_tag('path'), {'d': d})
        if (self._set_stroke_style(elem, op.state)
                and self._set_paint(elem, 'stroke', op.state.stroke_style, op.state)):
            self._place(elem, op.state)

    def render_clip(self, op) -> None:
        if op.state.clip is not None:
            self._clip_ref(op.state.clip)

    def _rect_elem(self, op):
        x, y, w, h = normalized_rect(op.x, op.y, op.width, op.height)
        return ET.Element(_tag('rect'), {
            'x': _fmt(x), 'y': _fmt(y), 'width': _fmt(w), 'height': _fmt(h),
        })

    def render_fill_rect(self, op) -> None:
        if not usable_matrix(op.state.transform):
            return
        elem = self._rect_elem(op)
        if self._set_paint(elem, 'fill', op.state.fill_style, op.state):
            self._place(elem, op.state)

    def render_stroke_rect(self, op) -> None:
        if not usable_matrix(op.state.transform):
            return
        if op.width == 0 or op.height == 0:
            # a zero-area rectangle strokes as a single line
            elem = ET.Element(_tag('path'), {
                'd': f'M{_fmt(op.x)} {_fmt(op.y)} '
                     f'L{_fmt(op.x + op.width)} {_fmt(op.y + op.height)}',
            })
        else:
            elem = self._rect_elem(op)
        if (self._set_stroke_style(elem, op.state)
                and self._set_paint(elem, 'stroke', op.state.stroke_style, op.state)):
            self._place(elem, op.state)

    def render_clear_rect(self, op) -> None:
        """
        A document cannot erase, so only a clear of the whole unclipped
        canvas is representable: it drops everything drawn so far.
        """
        state = op.state
        covers = (state.clip is None and state.transform == lt.IDENTITY_MATRIX
                  and min(op.x, op.x + op.width) <= 0 and min(op.y, op.y + op.height) <= 0
                  and max(op.x, op.x + op.width) >= self.width
                  and max(op.y, op.y + op.height) >= self.height)
        if not covers:
            self._unsupported("clear_rect of part of the canvas")

        for child in list(self.root):
            if child is not self.defs:
                self.root.remove(child)

    def _render_text(self, op, stroke: bool) -> None:
        state = op.state
        if not usable_matrix(state.transform):
            return

        spec = parse_font(state.font)
        elem = ET.Element(_tag('text'), {
            'x': '0', 'y': '0',
            'font-family': spec.family,
            'font-size': _fmt(spec.size),
        })
        if spec.is_bold:
            elem.set('font-weight', 'bold')
        if spec.is_italic:
            elem.set('font-style', spec.style)
        elem.set(_XML_SPACE, 'preserve')
        elem.text = op.text

        if stroke:
            if not (self._set_stroke_style(elem, state)
                    and self._set_paint(elem, 'stroke', state.stroke_style, state)):
                return
        elif not self._set_paint(elem, 'fill', state.fill_style, state):
            return

        local = compose(translate_matrix(op.anchor_x, op.anchor_y), scale_matrix(op.scale_x, 1.0))
        self._place(elem, state, compose(state.transform, local))

    def render_fill_text(self, op) -> None:
        self._render_text(op, stroke=False)

    def render_stroke_text(self, op) -> None:
        self._render_text(op, stroke=True)

    def render_draw_image(self, op) -> None:
        image = op.image
        if image.width <= 0 or image.height <= 0 or not usable_matrix(op.state.transform):
            return

        sx, sy, sw, sh = normalized_rect(op.sx, op.sy, op.sw, op.sh)
        dx, dy, dw, dh = normalized_rect(op.dx, op.dy, op.dw, op.dh)
        box = (round(sx), round(sy), round(sx + sw), round(sy + sh))
        if box[2] <= box[0] or box[3] <= box[1]:
            return
        if box == (0, 0, image.width, image.height):
            box = None

        elem = ET.Element(_tag('image'), {
            'x': _fmt(dx), 'y': _fmt(dy), 'width': _fmt(dw), 'height': _fmt(dh),
            'preserveAspectRatio': 'none',
            'href': png_data_uri(image, box),
        })
        if not op.state.image_smoothing_enabled:
            elem.set('image-rendering', 'optimizeSpeed')
        self._place(elem, op.state)

    def to_string(self) -> str:
        ET.indent(self.root)
        return ET.tostring(self.root, encoding='unicode', xml_declaration=True)

    def write(self, path: str) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_string())
        logger.debug("wrote SVG document to %s", path)

    def finish(self) -> str:
        return self.to_string()
