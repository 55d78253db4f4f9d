# -*- coding: utf-8 -*-
"""
Layout Metrics Module

Computes module pixel size, the inset that centers the grid and the size of
the drawn content for a given container.
"""

import math
from typing import NamedTuple


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, not 2)."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


class LayoutMetrics(NamedTuple):
    """
    Derived layout of one render.

    Attributes:
        container_size: Shortest side of the target surface
        module_count: Modules per side
        gap_size: Gap between modules (0 when gapless)
        pixel_size: Module size, quantized to a multiple of 0.5
        inner_content_size: Size of the drawn grid including gaps
        inset: Offset of the grid from the container edge (negative when the
            quantized grid overflows the container)
    """

    container_size: float
    module_count: int
    gap_size: float
    pixel_size: float
    inner_content_size: float
    inset: float

    @classmethod
    def compute(cls, container_size: float, module_count: int, gap_size: float) -> "LayoutMetrics":
        """
        Lay out module_count modules inside container_size.

        Args:
            container_size (float): Shortest side of the surface, > 0
            module_count (int): Number of modules per side, > 0
            gap_size (float): Gap between adjacent modules, >= 0

        Returns:
            LayoutMetrics: The derived metrics

        Raises:
            ValueError: If container_size or module_count is not positive

        Example:
            >>> m = LayoutMetrics.compute(300, 25, 0)
            >>> m.pixel_size, m.inner_content_size, m.inset
            (12.0, 300.0, 0.0)
        """
        if container_size <= 0:
            raise ValueError(f"container_size must be positive, got {container_size}")
        if module_count <= 0:
            raise ValueError(f"module_count must be positive, got {module_count}")

        gap_total = (module_count - 1) * gap_size
        raw_pixel = (container_size - gap_total) / module_count
        # Half-unit steps avoid seams between neighbouring modules
        pixel_size = _round_half_away(raw_pixel * 2) / 2
        inner_content_size = pixel_size * module_count + gap_total
        inset = (container_size - inner_content_size) / 2

        return cls(
            container_size=float(container_size),
            module_count=module_count,
            gap_size=float(gap_size),
            pixel_size=float(pixel_size),
            inner_content_size=float(inner_content_size),
            inset=float(inset),
        )

    @property
    def gap_total(self) -> float:
        return (self.module_count - 1) * self.gap_size

    @property
    def is_drawable(self) -> bool:
        """False when the surface is too small for a single half-pixel module."""
        return self.pixel_size > 0
