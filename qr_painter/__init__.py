# -*- coding: utf-8 -*-
"""
QR Painter

Renders an encoded QR module matrix as a Pillow image or as SVG markup, with
styled finder patterns ("eyes"), square or round data modules, gapless mode
and an optional image composited over the center.

Modules:
    encoder: segno encoding and the ModuleMatrix the painter consumes
    styles: Colors, sizes and style value objects
    metrics: Module size / inset layout
    shapes: Shape records and the RenderPlan
    planner: Finder pattern and data module planning
    embedded_image: Overlay sizing, centering and tint
    raster: Pillow backend
    svg: SVG exporter
    painter: QrPainter, the public entry point
"""

__version__ = "1.0.0"

from .encoder import ModuleMatrix, QrVersions, make_qr
from .errors import (
    QrFragmentError,
    QrInputTooLongError,
    QrPainterError,
    QrUnsupportedVersionError,
)
from .metrics import LayoutMetrics
from .painter import QrPainter
from .raster import RecordedPicture
from .shapes import Paint, Rect, RenderPlan, RoundedRect, ShapeRecord
from .styles import (
    BLACK,
    TRANSPARENT,
    WHITE,
    Color,
    DataModuleShape,
    DataModuleStyle,
    EmbeddedImageStyle,
    EyeShape,
    EyeStyle,
    Size,
    StyleConfig,
)

__all__ = [
    'QrPainter',
    'RecordedPicture',
    'ModuleMatrix',
    'QrVersions',
    'make_qr',
    'LayoutMetrics',
    'RenderPlan',
    'ShapeRecord',
    'Rect',
    'RoundedRect',
    'Paint',
    'Color',
    'BLACK',
    'WHITE',
    'TRANSPARENT',
    'Size',
    'EyeShape',
    'EyeStyle',
    'DataModuleShape',
    'DataModuleStyle',
    'EmbeddedImageStyle',
    'StyleConfig',
    'QrPainterError',
    'QrUnsupportedVersionError',
    'QrInputTooLongError',
    'QrFragmentError',
]
