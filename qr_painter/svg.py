# -*- coding: utf-8 -*-
"""
SVG Exporter Module

Serializes a RenderPlan as SVG markup and optionally embeds an external SVG
fragment (e.g. a logo) scaled into the center.

Every shape center is turned a quarter turn about the surface center and the
result is written with its top as `x` and its left as `y`. On a square
surface the two swaps cancel out and shapes land where the raster backend
draws them.

Functions:
    rotate_rect: Quarter-turn a rectangle's center about the surface center
    render_record: Markup of one shape record (or '' when it is not emitted)
    fragment_dimensions: Width/height declared by an SVG fragment
    convert_fragment: Scaled and centered <g> wrapping a fragment's content
    export_svg: Full SVG document for a plan
"""

import re
from typing import Optional, Tuple

from . import config
from .errors import QrFragmentError
from .shapes import Rect, RenderPlan, RoundedRect, ShapeRecord
from .styles import Size

# Stroke width written for stroked eye rings, independent of the module size
FINDER_STROKE_WIDTH = 10

_SVG_OPEN = re.compile(r'<svg\b[^>]*>', re.IGNORECASE)
_SVG_CLOSE = re.compile(r'</svg\s*>', re.IGNORECASE)
_NUMBER = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(%|px)?\s*$')


def _num(value: float) -> str:
    return repr(float(value))


def rotate_rect(rect: Rect, size: Size) -> Rect:
    """
    Rotate the center of rect by 90 degrees about the surface center.

    Width and height are kept; only the position moves.
    """
    cx = size.width / 2
    cy = size.height / 2
    center_x, center_y = rect.center
    px = center_x - cx
    py = center_y - cy
    # quarter turn: (x, y) -> (-y, x)
    x_new = -py
    y_new = px
    return Rect.from_center(size.width - (x_new + cx), y_new + cy, rect.width, rect.height)


def render_record(record: ShapeRecord, size: Size) -> str:
    """
    Markup for one shape, following the emission rules:

    - plain rect, no stroke: filled rect
    - plain rect, finder, stroked: stroked rect with white fill
    - rounded, not finder: circle of radius width/2
    - rounded, finder, no stroke: filled rounded rect
    - rounded, finder, stroked: stroked rounded rect with white fill

    White and fully transparent shapes are never emitted.
    """
    color = record.paint.color
    if color.is_white or color.is_transparent:
        return ''
    hex_color = color.hex_rgb
    stroked = record.paint.is_stroke
    geometry = record.geometry
    finder = record.is_finder_pattern

    if isinstance(geometry, RoundedRect):
        r = rotate_rect(geometry.rect, size)
        if not finder:
            radius = r.width / 2
            return (f'\t<circle cx="{_num(r.top + radius)}" cy="{_num(r.left + radius)}" '
                    f'r="{_num(radius)}" style="fill: #{hex_color};"></circle>\n')
        corner = _num(geometry.radius)
        if not stroked:
            return (f'\t<rect x="{_num(r.top)}" y="{_num(r.left)}" rx="{corner}" ry="{corner}" '
                    f'width="{_num(r.width)}" height="{_num(r.height)}" '
                    f'style="fill: #{hex_color};"></rect>\n')
        return (f'\t<rect x="{_num(r.top)}" y="{_num(r.left)}" rx="{corner}" ry="{corner}" '
                f'width="{_num(r.width)}" height="{_num(r.height)}" '
                f'style="stroke-width:{FINDER_STROKE_WIDTH}; stroke:#{hex_color}; fill: #ffffff;"></rect>\n')

    r = rotate_rect(geometry, size)
    if not stroked:
        return (f'\t<rect x="{_num(r.top)}" y="{_num(r.left)}" width="{_num(r.width)}" '
                f'height="{_num(r.height)}" style="fill: #{hex_color};"></rect>\n')
    if finder:
        return (f'\t<rect x="{_num(r.top)}" y="{_num(r.left)}" width="{_num(r.width)}" '
                f'height="{_num(r.height)}" '
                f'style="stroke-width:{FINDER_STROKE_WIDTH}; stroke:#{hex_color}; fill: #ffffff;"></rect>\n')
    return ''


def _attribute(tag: str, name: str) -> Optional[str]:
    match = re.search(r'(?<![\w:-])' + name + r'\s*=\s*"([^"]*)"', tag)
    return match.group(1) if match else None


def _parse_length(value: Optional[str], reference: float) -> Optional[float]:
    if value is None:
        return None
    match = _NUMBER.match(value)
    if not match:
        return None
    number = float(match.group(1))
    if match.group(2) == '%':
        return reference * (number / 100)
    return number


def fragment_dimensions(fragment: str, reference_box: float = None) -> Tuple[float, float]:
    """
    Read the width and height declared on the fragment's root <svg> tag.

    Percentages are taken of reference_box (config.FRAGMENT_REFERENCE_BOX).
    A missing width or height falls back to the viewBox.

    Raises:
        QrFragmentError: If no <svg> tag or no usable size is found
    """
    if reference_box is None:
        reference_box = config.FRAGMENT_REFERENCE_BOX
    open_tag = _SVG_OPEN.search(fragment)
    if open_tag is None:
        raise QrFragmentError("SVG fragment has no <svg> element")
    tag = open_tag.group(0)

    width = _parse_length(_attribute(tag, 'width'), reference_box)
    height = _parse_length(_attribute(tag, 'height'), reference_box)

    if width is None or height is None:
        view_box = _attribute(tag, 'viewBox')
        parts = re.split(r'[\s,]+', view_box.strip()) if view_box else []
        if len(parts) == 4:
            try:
                vb_width, vb_height = float(parts[2]), float(parts[3])
            except ValueError:
                vb_width = vb_height = None
            width = vb_width if width is None else width
            height = vb_height if height is None else height

    if width is None or height is None or max(width, height) <= 0:
        raise QrFragmentError("SVG fragment declares no usable width/height")
    return width, height


def _inner_markup(fragment: str) -> str:
    open_tag = _SVG_OPEN.search(fragment)
    closes = list(_SVG_CLOSE.finditer(fragment, open_tag.end()))
    end = closes[-1].start() if closes else len(fragment)
    return fragment[open_tag.end():end].strip()


def convert_fragment(fragment: str, size: Size) -> str:
    """
    Wrap the fragment's inner markup in a group centered on the surface.

    The fragment is scaled so its longest side is config.FRAGMENT_SCALE of the
    surface's longest side.
    """
    width, height = fragment_dimensions(fragment)
    scale = max(size.width, size.height) / max(width, height) * config.FRAGMENT_SCALE
    tx = size.width / 2 - (width * scale) / 2
    ty = size.height / 2 - (height * scale) / 2
    return (f'<g transform="translate({_num(tx)},{_num(ty)}) scale({_num(scale)})">\n'
            f'{_inner_markup(fragment)}\n</g>')


def export_svg(plan: Optional[RenderPlan], size: Size, fragment: Optional[str] = None) -> str:
    """
    Build the SVG document for a plan.

    Args:
        plan (Optional[RenderPlan]): Shapes to emit; None emits no shapes
        size (Size): Surface size, used for the viewBox and the rotation
        fragment (Optional[str]): SVG markup to embed in the center

    Returns:
        str: The SVG document

    Example:
        >>> svg = export_svg(plan, Size(300, 300))
        >>> svg.startswith('<svg id="Layer_1"')
        True
    """
    size = Size(*size)
    out = [
        f'<svg id="Layer_1" data-name="Layer 1" xmlns="http://www.w3.org/2000/svg" '
        f'width="100%" height="100%" viewBox="0 0 {_num(size.width)} {_num(size.height)}" '
        f'class="qrCode">\n'
    ]
    if plan is not None:
        for record in plan:
            out.append(render_record(record, size))

    fragment_markup = convert_fragment(fragment, size) if fragment else ''
    out.append(f'{fragment_markup}\n</svg>')
    return ''.join(out)
