"""Unit tests for the render planner."""

import pytest

from qr_painter.metrics import LayoutMetrics
from qr_painter.planner import (
    FinderPatternPosition,
    build_render_plan,
    is_finder_pattern_position,
    plan_data_modules,
    plan_finder_pattern,
)
from qr_painter.shapes import Rect, RoundedRect
from qr_painter.styles import (
    Color,
    DataModuleShape,
    DataModuleStyle,
    EyeShape,
    EyeStyle,
    Size,
    StyleConfig,
    TRANSPARENT,
)


def _by_position(records):
    return {(round(r.geometry.left, 3), round(r.geometry.top, 3)): r for r in records}


def test_gapless_tweak_only_towards_dark_neighbours(sparse_matrix):
    """Modules grow by half a unit only when the right/lower neighbour is dark."""
    metrics = LayoutMetrics.compute(210, 21, 0)
    records = _by_position(plan_data_modules(sparse_matrix, metrics, StyleConfig(gapless=True)))

    # (row 10, col 10) has a dark right neighbour
    assert records[(100, 100)].geometry == Rect(100, 100, 10.5, 10)
    # (row 10, col 11) is the end of the pair
    assert records[(110, 100)].geometry == Rect(110, 100, 10, 10)
    # (row 12, col 10) stands alone
    assert records[(100, 120)].geometry == Rect(100, 120, 10, 10)
    # (row 14, col 14) has a dark neighbour below
    assert records[(140, 140)].geometry == Rect(140, 140, 10, 10.5)
    assert records[(140, 150)].geometry == Rect(140, 150, 10, 10)


def test_gapped_modules_never_tweaked(sparse_matrix):
    metrics = LayoutMetrics.compute(210, 21, 0.25)
    records = plan_data_modules(sparse_matrix, metrics, StyleConfig(gapless=False))

    assert len(records) == 5
    for record in records:
        assert record.geometry.width == metrics.pixel_size
        assert record.geometry.height == metrics.pixel_size
    lefts = sorted({r.geometry.left for r in records})
    assert lefts[0] == pytest.approx(metrics.inset + 10 * (metrics.pixel_size + 0.25))


def test_finder_zones_are_skipped(matrix_factory):
    count = 21
    matrix = matrix_factory(count, {(r, c) for r in range(count) for c in range(count)})
    metrics = LayoutMetrics.compute(210, count, 0)
    records = plan_data_modules(matrix, metrics, StyleConfig(gapless=True))

    assert len(records) == count * count - 3 * 49
    assert all(not r.is_finder_pattern for r in records)


def test_finder_zone_corners():
    assert is_finder_pattern_position(0, 0, 21)
    assert is_finder_pattern_position(6, 6, 21)
    assert is_finder_pattern_position(20, 0, 21)
    assert is_finder_pattern_position(0, 20, 21)
    assert not is_finder_pattern_position(7, 7, 21)
    assert not is_finder_pattern_position(20, 20, 21)
    assert not is_finder_pattern_position(13, 6, 21)


def test_light_modules_need_empty_color(matrix_factory):
    matrix = matrix_factory(21)
    metrics = LayoutMetrics.compute(210, 21, 0)

    assert plan_data_modules(matrix, metrics, StyleConfig()) == []

    records = plan_data_modules(matrix, metrics, StyleConfig(empty_color="#eeeeee"))
    assert len(records) == 21 * 21 - 3 * 49
    assert records[0].paint.color == Color(238, 238, 238)


def test_circle_modules_are_rounded(sparse_matrix):
    metrics = LayoutMetrics.compute(210, 21, 0)
    style = StyleConfig(
        gapless=True,
        data_module_style=DataModuleStyle(shape=DataModuleShape.CIRCLE, color="#112233"),
    )
    records = _by_position(plan_data_modules(sparse_matrix, metrics, style))

    dot = records[(100, 100)]
    assert isinstance(dot.geometry, RoundedRect)
    assert dot.geometry.radius == 10.5
    assert dot.paint.color.hex_rgb == "112233"
    assert records[(110, 100)].geometry.radius == 10


EYE_STYLES = [
    EyeStyle(EyeShape.SQUARE),
    EyeStyle(EyeShape.CIRCLE),
    EyeStyle(EyeShape.SQUARE, radius=5),
    EyeStyle(EyeShape.CIRCLE, radius=5),
]


@pytest.mark.parametrize("eye_style", EYE_STYLES)
@pytest.mark.parametrize("position", list(FinderPatternPosition))
@pytest.mark.parametrize("gap", [0, 0.25])
def test_finder_shapes_concentric_and_nested(eye_style, position, gap):
    metrics = LayoutMetrics.compute(290, 25, gap)
    outer, inner, dot = plan_finder_pattern(position, metrics, StyleConfig(eye_style=eye_style))

    centers = [r.geometry.center for r in (outer, inner, dot)]
    for cx, cy in centers[1:]:
        assert cx == pytest.approx(centers[0][0])
        assert cy == pytest.approx(centers[0][1])
    assert outer.geometry.width > inner.geometry.width > dot.geometry.width
    assert all(r.is_finder_pattern for r in (outer, inner, dot))


def test_finder_positions_and_paints():
    metrics = LayoutMetrics.compute(210, 21, 0)
    style = StyleConfig(eye_style=EyeStyle(color="#ff0000"))

    top_left = plan_finder_pattern(FinderPatternPosition.TOP_LEFT, metrics, style)
    bottom_left = plan_finder_pattern(FinderPatternPosition.BOTTOM_LEFT, metrics, style)
    top_right = plan_finder_pattern(FinderPatternPosition.TOP_RIGHT, metrics, style)

    assert top_left[0].geometry == Rect(5, 5, 60, 60)
    assert bottom_left[0].geometry == Rect(5, 145, 60, 60)
    assert top_right[0].geometry == Rect(145, 5, 60, 60)
    assert top_left[1].geometry == Rect(15, 15, 40, 40)
    assert top_left[2].geometry == Rect(20, 20, 30, 30)

    outer, inner, dot = top_left
    assert outer.paint.stroke_width == 10
    assert outer.paint.color == Color(255, 0, 0)
    assert inner.paint.color == TRANSPARENT
    assert dot.paint.stroke_width == 0


def test_finder_inner_ring_uses_empty_color():
    metrics = LayoutMetrics.compute(210, 21, 0)
    _, inner, _ = plan_finder_pattern(
        FinderPatternPosition.TOP_LEFT, metrics, StyleConfig(empty_color="white")
    )

    assert inner.paint.color == Color(255, 255, 255)


@pytest.mark.parametrize("eye_style, radii", [
    (EyeStyle(EyeShape.CIRCLE), (60, 40, 30)),
    (EyeStyle(EyeShape.CIRCLE, radius=5), (60, 40, 30)),
    (EyeStyle(EyeShape.SQUARE, radius=5), (5, 40, 2.5)),
])
def test_rounded_eye_radii(eye_style, radii):
    metrics = LayoutMetrics.compute(210, 21, 0)
    shapes = plan_finder_pattern(FinderPatternPosition.TOP_LEFT, metrics, StyleConfig(eye_style=eye_style))

    assert all(isinstance(r.geometry, RoundedRect) for r in shapes)
    assert tuple(r.geometry.radius for r in shapes) == radii


def test_square_eye_uses_plain_rects():
    metrics = LayoutMetrics.compute(210, 21, 0)
    shapes = plan_finder_pattern(FinderPatternPosition.TOP_LEFT, metrics, StyleConfig())

    assert all(isinstance(r.geometry, Rect) for r in shapes)


def test_plan_order_eyes_first(sparse_matrix):
    plan = build_render_plan(sparse_matrix, StyleConfig(), Size(210, 210), 0.25)

    assert len(plan) == 9 + 5
    assert all(r.is_finder_pattern for r in plan.records[:9])
    assert not any(r.is_finder_pattern for r in plan.records[9:])
    assert len(plan.finder_records) == 9
    assert len(plan.module_records) == 5


def test_plan_rebuilt_per_call(sparse_matrix):
    style = StyleConfig(gapless=True)
    first = build_render_plan(sparse_matrix, style, Size(210, 210), 0.25)
    second = build_render_plan(sparse_matrix, style, Size(210, 210), 0.25)

    assert first == second
    assert first is not second
    assert len(second) == 14


@pytest.mark.parametrize("size", [(0, 0), (0, 300), (300, 0), (1, 1)])
def test_degenerate_sizes_have_no_plan(sparse_matrix, size):
    assert build_render_plan(sparse_matrix, StyleConfig(), Size(*size), 0.25) is None
