# -*- coding: utf-8 -*-
"""
Embedded Image Module

Places an overlay image (typically a logo) over the center of the code.

Functions:
    scaled_aspect_size: Size of the overlay for a surface
    compute_placement: Centered destination of the overlay
    tint_image: Source-atop color tint, keeping the image alpha
    prepare_overlay: Scaled and tinted overlay ready to paste
"""

import math
from typing import NamedTuple, Optional, Tuple

from PIL import Image

from . import config
from .styles import Color, EmbeddedImageStyle, Size


class ImagePlacement(NamedTuple):
    """Top-left position and size of the overlay on the surface."""

    x: float
    y: float
    width: float
    height: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def pixel_box(self) -> Tuple[int, int, int, int]:
        """(left, top, width, height) snapped to whole pixels."""
        left = math.floor(self.x + 0.5)
        top = math.floor(self.y + 0.5)
        width = math.floor(self.x + self.width + 0.5) - left
        height = math.floor(self.y + self.height + 0.5) - top
        return left, top, width, height


def scaled_aspect_size(
    surface_size: Size,
    original_size: Size,
    requested_size: Optional[Size] = None,
    ratio: float = None
) -> Size:
    """
    Work out the overlay size.

    1. A requested size with both sides > 0 is used as is.
    2. A requested size with one usable side scales the image so its longest
       side matches the requested longest side.
    3. Otherwise the longest side becomes `ratio` (default 25%) of the
       surface's shortest side.

    Cases 2 and 3 keep the image aspect ratio.

    Args:
        surface_size (Size): Target surface size
        original_size (Size): Pixel size of the image
        requested_size (Optional[Size]): Size from EmbeddedImageStyle
        ratio (float): Default share of the surface, config.EMBEDDED_IMAGE_RATIO

    Returns:
        Size: The overlay size
    """
    if ratio is None:
        ratio = config.EMBEDDED_IMAGE_RATIO
    original_size = Size(*original_size)

    if requested_size is not None:
        requested_size = Size(*requested_size)
        if not requested_size.is_empty:
            return requested_size
        if requested_size.has_one_non_zero_side:
            max_side = requested_size.longest_side
            scale = max_side / original_size.longest_side
            return Size(scale * original_size.width, scale * original_size.height)

    max_side = ratio * Size(*surface_size).shortest_side
    scale = max_side / original_size.longest_side
    return Size(scale * original_size.width, scale * original_size.height)


def compute_placement(
    surface_size: Size,
    original_size: Size,
    requested_size: Optional[Size] = None
) -> ImagePlacement:
    """Center the scaled overlay on the surface."""
    surface_size = Size(*surface_size)
    image_size = scaled_aspect_size(surface_size, original_size, requested_size)
    return ImagePlacement(
        x=(surface_size.width - image_size.width) / 2.0,
        y=(surface_size.height - image_size.height) / 2.0,
        width=image_size.width,
        height=image_size.height,
    )


def tint_image(image: Image.Image, color: Color) -> Image.Image:
    """
    Paint `color` over the image with source-atop blending.

    The color only lands where the image is opaque, and the result keeps the
    image's own alpha channel.
    """
    color = Color.parse(color)
    source = image.convert('RGBA')
    alpha = source.getchannel('A')
    solid = Image.new('RGB', source.size, (color.r, color.g, color.b))
    tinted = Image.blend(source.convert('RGB'), solid, color.a / 255.0)
    tinted.putalpha(alpha)
    return tinted


def prepare_overlay(
    image: Image.Image,
    surface_size: Size,
    style: Optional[EmbeddedImageStyle] = None
) -> Tuple[Optional[Image.Image], Tuple[int, int]]:
    """
    Scale, tint and position an overlay image.

    Args:
        image (Image.Image): The image to embed
        surface_size (Size): Target surface size
        style (Optional[EmbeddedImageStyle]): Requested size and tint

    Returns:
        Tuple[Image.Image, Tuple[int, int]]: RGBA overlay and its top-left
            pixel position. The overlay is None when it has no pixels.
    """
    requested = style.size if style is not None else None
    placement = compute_placement(surface_size, Size(*image.size), requested)
    left, top, width, height = placement.pixel_box()
    if width <= 0 or height <= 0:
        return None, (left, top)

    overlay = image.convert('RGBA')
    if style is not None and style.color is not None:
        overlay = tint_image(overlay, style.color)
    overlay = overlay.resize((width, height), Image.LANCZOS)
    return overlay, (left, top)
