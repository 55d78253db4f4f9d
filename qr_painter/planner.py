# -*- coding: utf-8 -*-
"""
Render Planner Module

Turns a ModuleMatrix and a StyleConfig into a RenderPlan: the ordered shapes
that both the raster backend and the SVG exporter draw. Finder patterns
("eyes") are planned as three nested shapes each; every other module becomes
one rectangle or dot.

Functions:
    is_finder_pattern_position: Whether a module belongs to a 7x7 eye zone
    plan_finder_pattern: Outer ring, inner ring and center dot of one eye
    plan_data_modules: One shape per non-eye module
    build_render_plan: Full plan for a surface size
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from .encoder import ModuleMatrix
from .metrics import LayoutMetrics
from .shapes import Paint, Rect, RenderPlan, RoundedRect, ShapeRecord
from .styles import DataModuleShape, EyeForm, Size, StyleConfig, TRANSPARENT

logger = logging.getLogger(__name__)

FINDER_PATTERN_LIMIT = 7

# Width/height extension that hides the seam between adjacent gapless modules
GAPLESS_TWEAK = 0.5


class FinderPatternPosition(Enum):
    TOP_LEFT = "top_left"
    BOTTOM_LEFT = "bottom_left"
    TOP_RIGHT = "top_right"


def is_finder_pattern_position(x: int, y: int, module_count: int) -> bool:
    """
    Check whether module (x=column, y=row) lies in one of the three eye zones.

    Args:
        x (int): Column index
        y (int): Row index
        module_count (int): Modules per side

    Returns:
        bool: True for the top-left, top-right and bottom-left 7x7 corners
    """
    limit = FINDER_PATTERN_LIMIT
    far = module_count - limit
    top_left = y < limit and x < limit
    top_right = y < limit and x >= far
    bottom_left = y >= far and x < limit
    return top_left or top_right or bottom_left


def _finder_offset(position: FinderPatternPosition, metrics: LayoutMetrics,
                   radius: float, stroke_adjust: float) -> Tuple[float, float]:
    near = metrics.inset + stroke_adjust
    edge_pos = (metrics.inset + metrics.inner_content_size) - (radius + stroke_adjust)
    if position is FinderPatternPosition.TOP_LEFT:
        return near, near
    if position is FinderPatternPosition.BOTTOM_LEFT:
        return near, edge_pos
    return edge_pos, near


def plan_finder_pattern(
    position: FinderPatternPosition,
    metrics: LayoutMetrics,
    style: StyleConfig
) -> Tuple[ShapeRecord, ShapeRecord, ShapeRecord]:
    """
    Plan the three nested shapes of one eye.

    The outer ring is a stroked square whose stroke is one module wide and
    centered on its edge, so its geometry is the 7x7 zone shrunk by half a
    module. The inner ring is the same square one module further in, painted
    with the empty color (transparent by default). The center dot is a filled
    3x3 module square.

    Args:
        position (FinderPatternPosition): Which corner
        metrics (LayoutMetrics): Layout of the current render
        style (StyleConfig): Eye style and empty color

    Returns:
        Tuple[ShapeRecord, ShapeRecord, ShapeRecord]: (outer, inner, dot),
            all flagged as finder pattern shapes
    """
    pixel = metrics.pixel_size
    total_gap = (FINDER_PATTERN_LIMIT - 1) * metrics.gap_size
    radius = (FINDER_PATTERN_LIMIT * pixel + total_gap) - pixel
    stroke_adjust = pixel / 2.0
    left, top = _finder_offset(position, metrics, radius, stroke_adjust)

    eye = style.eye_style
    outer_paint = Paint(eye.color, stroke_width=pixel)
    inner_paint = Paint(style.empty_color or TRANSPARENT, stroke_width=pixel)
    dot_paint = Paint(eye.color)

    outer = Rect(left, top, radius, radius)
    inner_radius = radius - 2 * pixel
    inner = Rect(left + pixel, top + pixel, inner_radius, inner_radius)
    dot_size = radius - 2 * pixel - 2 * stroke_adjust
    dot = Rect(left + pixel + stroke_adjust, top + pixel + stroke_adjust, dot_size, dot_size)

    if eye.form is EyeForm.SQUARE:
        shapes = (outer, inner, dot)
    else:
        corner = eye.corner_radius
        shapes = (
            RoundedRect(*outer, radius=radius if corner is None else corner),
            RoundedRect(*inner, radius=inner_radius),
            RoundedRect(*dot, radius=dot_size if corner is None else corner / 2),
        )

    return (
        ShapeRecord(shapes[0], outer_paint, is_finder_pattern=True),
        ShapeRecord(shapes[1], inner_paint, is_finder_pattern=True),
        ShapeRecord(shapes[2], dot_paint, is_finder_pattern=True),
    )


def plan_data_modules(
    matrix: ModuleMatrix,
    metrics: LayoutMetrics,
    style: StyleConfig
) -> List[ShapeRecord]:
    """
    Plan one shape per module outside the eye zones.

    Dark modules use the data module color. Light modules are only planned
    when an empty color is configured. In gapless mode a module whose right
    (or lower) neighbour is dark grows by half a unit in that direction so no
    hairline shows between them.

    Args:
        matrix (ModuleMatrix): The encoded modules
        metrics (LayoutMetrics): Layout of the current render
        style (StyleConfig): Data module style, gapless flag, empty color

    Returns:
        List[ShapeRecord]: Shapes in column-major order
    """
    count = matrix.module_count
    gap = 0.0 if style.gapless else metrics.gap_size
    step = metrics.pixel_size + gap

    pixel_paint = Paint(style.data_module_style.color)
    empty_paint = Paint(style.empty_color) if style.empty_color is not None else None
    circles = style.data_module_style.shape is not DataModuleShape.SQUARE

    records = []
    for x in range(count):
        for y in range(count):
            if is_finder_pattern_position(x, y, count):
                continue
            paint = pixel_paint if matrix.is_dark(y, x) else empty_paint
            if paint is None:
                continue

            h_tweak = 0.0
            v_tweak = 0.0
            if style.gapless and x + 1 < count and matrix.is_dark(y, x + 1):
                h_tweak = GAPLESS_TWEAK
            if style.gapless and y + 1 < count and matrix.is_dark(y + 1, x):
                v_tweak = GAPLESS_TWEAK

            rect = Rect(
                metrics.inset + x * step,
                metrics.inset + y * step,
                metrics.pixel_size + h_tweak,
                metrics.pixel_size + v_tweak,
            )
            if circles:
                geometry = RoundedRect(*rect, radius=metrics.pixel_size + h_tweak)
            else:
                geometry = rect
            records.append(ShapeRecord(geometry, paint))

    return records


def build_render_plan(
    matrix: ModuleMatrix,
    style: StyleConfig,
    size: Size,
    gap_size: float
) -> Optional[RenderPlan]:
    """
    Build the full plan for one render: the three eyes, then the modules.

    Args:
        matrix (ModuleMatrix): The encoded modules
        style (StyleConfig): Styling inputs
        size (Size): Target surface size
        gap_size (float): Gap between modules when not gapless

    Returns:
        Optional[RenderPlan]: The plan, or None when the surface is too small
            to draw anything
    """
    size = Size(*size)
    if size.shortest_side <= 0:
        return None

    metrics = LayoutMetrics.compute(
        container_size=size.shortest_side,
        module_count=matrix.module_count,
        gap_size=0.0 if style.gapless else gap_size,
    )
    if not metrics.is_drawable:
        return None

    records = []
    for position in FinderPatternPosition:
        records.extend(plan_finder_pattern(position, metrics, style))
    records.extend(plan_data_modules(matrix, metrics, style))

    logger.debug("Planned %d shapes (pixel_size=%s, inset=%s)",
                 len(records), metrics.pixel_size, metrics.inset)
    return RenderPlan(size=size, metrics=metrics, records=tuple(records))
