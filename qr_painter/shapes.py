# -*- coding: utf-8 -*-
"""
Shape records shared by the raster and SVG backends.

A RenderPlan is the ordered list of ShapeRecords for one render. It is built
fresh for every paint/export call and never mutated afterwards.
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple, Union

from .metrics import LayoutMetrics
from .styles import Color, Size


class Paint(NamedTuple):
    """Color plus stroke width; a stroke width of 0 means a filled shape."""

    color: Color
    stroke_width: float = 0.0

    @property
    def is_stroke(self) -> bool:
        return self.stroke_width != 0


class Rect(NamedTuple):
    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_center(cls, cx: float, cy: float, width: float, height: float) -> "Rect":
        return cls(cx - width / 2, cy - height / 2, width, height)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)


class RoundedRect(NamedTuple):
    """Rectangle with one corner radius for all four corners (unclamped)."""

    left: float
    top: float
    width: float
    height: float
    radius: float

    @property
    def rect(self) -> Rect:
        return Rect(self.left, self.top, self.width, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return self.rect.center

    @property
    def clamped_radius(self) -> float:
        return max(0.0, min(self.radius, self.width / 2, self.height / 2))


Geometry = Union[Rect, RoundedRect]


class ShapeRecord(NamedTuple):
    geometry: Geometry
    paint: Paint
    is_finder_pattern: bool = False

    @property
    def is_rounded(self) -> bool:
        return isinstance(self.geometry, RoundedRect)


@dataclass(frozen=True)
class RenderPlan:
    """
    Ordered shapes of one render, in draw order.

    Attributes:
        size: Surface size the plan was laid out for
        metrics: Layout metrics, None for a degenerate (empty) plan
        records: Shape records in emission order
    """

    size: Size
    metrics: Optional[LayoutMetrics]
    records: Tuple[ShapeRecord, ...] = ()

    def __iter__(self) -> Iterator[ShapeRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def finder_records(self) -> Tuple[ShapeRecord, ...]:
        return tuple(r for r in self.records if r.is_finder_pattern)

    @property
    def module_records(self) -> Tuple[ShapeRecord, ...]:
        return tuple(r for r in self.records if not r.is_finder_pattern)
