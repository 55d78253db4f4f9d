# -*- coding: utf-8 -*-
"""
QR Painter Module

QrPainter ties the pieces together: it encodes (or accepts) a QR symbol once,
and then for every call builds a fresh RenderPlan and hands it to the raster
backend or the SVG exporter.

Classes:
    QrPainter: Paint a QR code onto Pillow images or export it as SVG
"""

import asyncio
import logging
from typing import Optional, Tuple, Union

import segno
from PIL import Image

from . import config
from .embedded_image import prepare_overlay
from .encoder import ModuleMatrix, QrVersions, make_qr
from .planner import build_render_plan
from .raster import RecordedPicture, encode_image, flatten, surface_pixels
from .shapes import RenderPlan
from .styles import (
    Color,
    DataModuleStyle,
    EmbeddedImageStyle,
    EyeStyle,
    Size,
    StyleConfig,
)
from .svg import export_svg

logger = logging.getLogger(__name__)

SizeLike = Union[Size, Tuple[float, float]]


def _version_for(module_count: int) -> Optional[int]:
    """QR version of a grid (21 modules for version 1, +4 per version), None if it has none."""
    version, rest = divmod(module_count - 17, 4)
    if rest or not QrVersions.is_supported(version):
        return None
    return version


class QrPainter:
    """
    Paint a QR code with configurable eyes, data modules and a center image.

    Args:
        data (str): Text to encode
        version (Union[int, str]): QR version 1-40 or 'auto'
        error_correction_level (str): 'L', 'M', 'Q' or 'H'
        eye_style (EyeStyle): Finder pattern styling
        data_module_style (DataModuleStyle): Data module styling
        gapless (bool): Draw modules without gaps between them
        embedded_image (Optional[Image.Image]): Image drawn over the center
        embedded_image_style (Optional[EmbeddedImageStyle]): Overlay size/tint
        empty_color (Optional[Color]): Color for light modules, None leaves
            them undrawn
        gap_size (Optional[float]): Gap between modules when not gapless,
            defaults to config.GAP_SIZE

    Raises:
        QrUnsupportedVersionError: If version is not supported
        QrInputTooLongError: If data does not fit the version/level

    Example:
        >>> painter = QrPainter("https://example.com", version=QrVersions.AUTO)
        >>> svg = painter.to_svg((300, 300))
    """

    def __init__(
        self,
        data: str,
        version: Union[int, str] = QrVersions.AUTO,
        error_correction_level: str = 'L',
        eye_style: EyeStyle = None,
        data_module_style: DataModuleStyle = None,
        gapless: bool = False,
        embedded_image: Optional[Image.Image] = None,
        embedded_image_style: Optional[EmbeddedImageStyle] = None,
        empty_color: Optional[Color] = None,
        gap_size: Optional[float] = None
    ):
        qr = make_qr(data, ecc=error_correction_level, version=version)
        logger.info("Encoded QR code version %s (requested %s, ecc=%s)",
                    qr.version, version, qr.error)
        self._setup(
            matrix=ModuleMatrix.from_qr(qr),
            version=version,
            calc_version=qr.version,
            error_correction_level=qr.error,
            style=StyleConfig(
                eye_style=eye_style or EyeStyle(),
                data_module_style=data_module_style or DataModuleStyle(),
                gapless=gapless,
                embedded_image_style=embedded_image_style,
                empty_color=empty_color,
            ),
            embedded_image=embedded_image,
            gap_size=gap_size,
        )

    @classmethod
    def with_qr(
        cls,
        qr: Union[segno.QRCode, ModuleMatrix],
        eye_style: EyeStyle = None,
        data_module_style: DataModuleStyle = None,
        gapless: bool = False,
        embedded_image: Optional[Image.Image] = None,
        embedded_image_style: Optional[EmbeddedImageStyle] = None,
        empty_color: Optional[Color] = None,
        gap_size: Optional[float] = None,
        error_correction_level: Optional[str] = None
    ) -> "QrPainter":
        """
        Build a painter from an already encoded symbol, skipping validation.

        Accepts a segno QRCode or a ModuleMatrix from any other encoder.
        """
        if isinstance(qr, ModuleMatrix):
            matrix = qr
            version = _version_for(matrix.module_count)
            ecc = error_correction_level
        else:
            matrix = ModuleMatrix.from_qr(qr)
            version = qr.version
            ecc = error_correction_level or qr.error

        painter = cls.__new__(cls)
        painter._setup(
            matrix=matrix,
            version=version,
            calc_version=version,
            error_correction_level=ecc,
            style=StyleConfig(
                eye_style=eye_style or EyeStyle(),
                data_module_style=data_module_style or DataModuleStyle(),
                gapless=gapless,
                embedded_image_style=embedded_image_style,
                empty_color=empty_color,
            ),
            embedded_image=embedded_image,
            gap_size=gap_size,
        )
        return painter

    def _setup(self, matrix, version, calc_version, error_correction_level,
               style, embedded_image, gap_size):
        self.matrix = matrix
        self.version = version
        self.calc_version = calc_version
        self.error_correction_level = error_correction_level
        self.style = style
        self.embedded_image = embedded_image
        self.gap_size = config.GAP_SIZE if gap_size is None else float(gap_size)

    @property
    def module_count(self) -> int:
        return self.matrix.module_count

    def build_plan(self, size: SizeLike) -> Optional[RenderPlan]:
        """Fresh RenderPlan for a surface size, None when nothing can be drawn."""
        return build_render_plan(self.matrix, self.style, Size(*size), self.gap_size)

    def to_picture(self, size: SizeLike) -> RecordedPicture:
        """Record the drawing commands for a size without rasterizing them."""
        size = Size(*size)
        plan = self.build_plan(size)
        if plan is None:
            logger.warning("surface too small to draw (%sx%s). Set a larger size "
                           "for the QR code surface", size.width, size.height)
            return RecordedPicture(size, None)

        overlay, position = None, (0, 0)
        if self.embedded_image is not None:
            overlay, position = prepare_overlay(
                self.embedded_image, size, self.style.embedded_image_style
            )
        return RecordedPicture(size, plan, overlay, position)

    def paint(self, surface: Image.Image, size: Optional[SizeLike] = None) -> None:
        """
        Draw the code onto a Pillow image.

        Args:
            surface (Image.Image): Image to draw on (RGBA or RGB)
            size (Optional[SizeLike]): Layout size, defaults to the image size

        A zero-sized layout draws nothing and only logs a warning.
        """
        size = Size(*(size if size is not None else surface.size))
        self.to_picture(size).replay(surface)

    def _rasterize(self, size: Size, format: str) -> Optional[Image.Image]:
        width, height = surface_pixels(size)
        if width < 1 or height < 1:
            logger.warning("surface too small to rasterize (%sx%s), no image produced",
                           size.width, size.height)
            return None
        image = self.to_picture(size).to_image()
        if format.lower() in ('jpeg', 'jpg'):
            return flatten(image)
        return image

    async def to_image(self, size: SizeLike, format: str = 'png') -> Optional[Image.Image]:
        """
        Rasterize at the given pixel size without blocking the event loop.

        Returns an RGBA image, or an RGB image flattened on white for 'jpeg'.

        A size that rounds to zero pixels logs a warning and returns None.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._rasterize, Size(*size), format or 'png')

    async def to_image_data(self, size: SizeLike, format: str = 'png') -> Optional[bytes]:
        """Encoded bytes of the rasterized code ('png', 'jpeg' or 'raw_rgba'), None if too small."""
        image = await self.to_image(size, format)
        if image is None:
            return None
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, encode_image, image, format)

    def to_svg(self, size: SizeLike, fragment: Optional[str] = None) -> str:
        """
        Export the code as an SVG document.

        Args:
            size (SizeLike): Size used for the viewBox and layout
            fragment (Optional[str]): SVG markup (e.g. a logo) to embed in the center

        Returns:
            str: SVG markup
        """
        size = Size(*size)
        plan = self.build_plan(size)
        if plan is None:
            logger.warning("surface too small to draw (%sx%s), exporting an empty SVG",
                           size.width, size.height)
        return export_svg(plan, size, fragment)

    def should_repaint(self, other: "QrPainter") -> bool:
        """True when other would paint something different from this painter."""
        if not isinstance(other, QrPainter):
            return True
        return (self.error_correction_level != other.error_correction_level
                or self.calc_version != other.calc_version
                or self.matrix != other.matrix
                or self.style != other.style
                or self.gap_size != other.gap_size
                or self.embedded_image is not other.embedded_image)
