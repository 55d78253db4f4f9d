# -*- coding: utf-8 -*-
"""
Raster Backend Module

Draws a RenderPlan and the optional image overlay onto a Pillow image.

Functions:
    surface_pixels: Whole-pixel size of a surface
    new_surface: Transparent RGBA surface for a size
    draw_record: Draw one shape record
    draw_plan: Draw every record of a plan, in order
    draw_overlay: Composite a prepared overlay onto a surface
    flatten: Flatten an RGBA surface onto white
    encode_image: Encode a surface as PNG, JPEG or raw RGBA bytes
Classes:
    RecordedPicture: Drawing commands recorded for later rasterization
"""

import math
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from .shapes import RenderPlan, RoundedRect, ShapeRecord
from .styles import Size

IMAGE_FORMATS = ('png', 'jpeg', 'raw_rgba')


def _snap(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pixel_box(left: float, top: float, width: float, height: float) -> Optional[Tuple[int, int, int, int]]:
    """Inclusive Pillow box for a float rectangle, None when it covers no pixel."""
    x0 = _snap(left)
    y0 = _snap(top)
    x1 = _snap(left + width) - 1
    y1 = _snap(top + height) - 1
    if x1 < x0 or y1 < y0:
        return None
    return x0, y0, x1, y1


def surface_pixels(size: Size) -> Tuple[int, int]:
    """Width and height of a surface for size, rounded to whole pixels."""
    size = Size(*size)
    return _snap(size.width), _snap(size.height)


def new_surface(size: Size) -> Image.Image:
    """Transparent RGBA image with the given size rounded to whole pixels."""
    size = Size(*size)
    width, height = surface_pixels(size)
    if width < 1 or height < 1:
        raise ValueError(f"Cannot rasterize at size {size.width}x{size.height}")
    return Image.new('RGBA', (width, height), (0, 0, 0, 0))


def draw_record(draw: ImageDraw.ImageDraw, record: ShapeRecord) -> None:
    """
    Draw one shape record.

    Strokes are centered on the shape outline like a vector stroke: the box
    grows by half the stroke width and Pillow draws the stroke inwards from
    there. Fully transparent paints draw nothing.
    """
    paint = record.paint
    if paint.color.is_transparent:
        return
    fill = tuple(paint.color)
    geometry = record.geometry
    half = paint.stroke_width / 2.0 if paint.is_stroke else 0.0

    box = _pixel_box(geometry.left - half, geometry.top - half,
                     geometry.width + 2 * half, geometry.height + 2 * half)
    if box is None:
        return

    if isinstance(geometry, RoundedRect):
        radius = _snap(geometry.clamped_radius + half)
        radius = min(radius, (box[2] - box[0] + 1) // 2, (box[3] - box[1] + 1) // 2)
        if paint.is_stroke:
            draw.rounded_rectangle(box, radius=radius, outline=fill,
                                   width=max(1, _snap(paint.stroke_width)))
        else:
            draw.rounded_rectangle(box, radius=radius, fill=fill)
    else:
        if paint.is_stroke:
            draw.rectangle(box, outline=fill, width=max(1, _snap(paint.stroke_width)))
        else:
            draw.rectangle(box, fill=fill)


def draw_plan(image: Image.Image, plan: RenderPlan) -> None:
    """Draw all records of the plan onto the image, in order."""
    draw = ImageDraw.Draw(image, 'RGBA')
    for record in plan:
        draw_record(draw, record)


def draw_overlay(image: Image.Image, overlay: Image.Image, position: Tuple[int, int]) -> None:
    """Alpha-composite a prepared RGBA overlay with its top-left at position."""
    if image.mode == 'RGBA':
        layer = Image.new('RGBA', image.size, (0, 0, 0, 0))
        layer.paste(overlay, position)
        image.alpha_composite(layer)
    else:
        image.paste(overlay, position, overlay)


def flatten(image: Image.Image) -> Image.Image:
    """Flatten onto a white RGB background (for formats without alpha)."""
    rgba = image.convert('RGBA')
    flat = Image.new('RGB', rgba.size, (255, 255, 255))
    flat.paste(rgba, mask=rgba.getchannel('A'))
    return flat


def encode_image(image: Image.Image, format: str = 'png') -> bytes:
    """
    Encode a rasterized surface.

    Args:
        image (Image.Image): The surface
        format (str): 'png' (keeps alpha), 'jpeg' (flattened on white) or
            'raw_rgba' (unencoded RGBA bytes)

    Returns:
        bytes: Encoded image data

    Raises:
        ValueError: For an unknown format
    """
    fmt = (format or 'png').lower()
    if fmt == 'jpg':
        fmt = 'jpeg'
    if fmt not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {format!r}")

    if fmt == 'raw_rgba':
        return image.convert('RGBA').tobytes()

    buf = BytesIO()
    if fmt == 'jpeg':
        flatten(image).save(buf, format='JPEG', quality=95, optimize=True)
    else:
        image.save(buf, format='PNG')
    return buf.getvalue()


class RecordedPicture:
    """
    Drawing commands of one render, recorded without rasterizing.

    Holds the immutable plan plus the prepared overlay, so the same picture
    can be replayed onto any number of surfaces.
    """

    def __init__(self, size: Size, plan: Optional[RenderPlan],
                 overlay: Optional[Image.Image] = None,
                 overlay_position: Tuple[int, int] = (0, 0)):
        self.size = Size(*size)
        self.plan = plan
        self.overlay = overlay
        self.overlay_position = overlay_position

    @property
    def is_empty(self) -> bool:
        return self.plan is None and self.overlay is None

    def replay(self, image: Image.Image) -> None:
        if self.plan is not None:
            draw_plan(image, self.plan)
        if self.overlay is not None:
            draw_overlay(image, self.overlay, self.overlay_position)

    def to_image(self, width: int = None, height: int = None) -> Image.Image:
        """Rasterize onto a fresh transparent surface (defaults to the recorded size)."""
        size = self.size
        if width is not None and height is not None:
            size = Size(width, height)
        image = new_surface(size)
        self.replay(image)
        return image
