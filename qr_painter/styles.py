# -*- coding: utf-8 -*-
"""
QR Painter Styles Module

Immutable value objects describing how a QR code is drawn: colors, sizes,
eye (finder pattern) styling, data module styling and the embedded image
style. All of them are safe to share between concurrent renders.

Classes:
    Color: RGBA color value
    Size: Width/height pair of a drawing surface
    EyeShape, EyeForm, EyeStyle: Finder pattern styling
    DataModuleShape, DataModuleStyle: Data module styling
    EmbeddedImageStyle: Overlay image size and tint
    StyleConfig: Everything above bundled for a single render
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

from PIL import ImageColor


class Color(NamedTuple):
    """RGBA color with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def parse(cls, value: Union["Color", str, Tuple[int, ...]]) -> "Color":
        """
        Build a Color from a Color, an RGB(A) tuple or a color string.

        Strings are resolved with PIL's ImageColor, so names ("navy"),
        "#rgb", "#rrggbb", "#rrggbbaa" and "rgb(...)" forms all work.

        Example:
            >>> Color.parse("#ff000080")
            Color(r=255, g=0, b=0, a=128)
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            value = ImageColor.getrgb(value)
        channels = tuple(int(c) for c in value)
        if len(channels) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 color channels, got {len(channels)}")
        return cls(*channels)

    @property
    def hex_rgb(self) -> str:
        """Lowercase 'rrggbb' without alpha, as written into SVG styles."""
        return f"{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def is_white(self) -> bool:
        return (self.r, self.g, self.b) == (255, 255, 255)

    @property
    def is_transparent(self) -> bool:
        return self.a == 0


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
TRANSPARENT = Color(255, 255, 255, 0)


class Size(NamedTuple):
    """Width and height of a drawing surface, in logical pixels."""

    width: float
    height: float

    @property
    def shortest_side(self) -> float:
        return min(abs(self.width), abs(self.height))

    @property
    def longest_side(self) -> float:
        return max(abs(self.width), abs(self.height))

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def has_one_non_zero_side(self) -> bool:
        return self.longest_side > 0


class EyeShape(Enum):
    SQUARE = "square"
    CIRCLE = "circle"


class EyeForm(Enum):
    """Resolved eye geometry: sharp squares, full circles or rounded squares."""

    SQUARE = "square"
    CIRCLE = "circle"
    ROUNDED = "rounded"


class DataModuleShape(Enum):
    SQUARE = "square"
    CIRCLE = "circle"


@dataclass(frozen=True)
class EyeStyle:
    """
    Styling of the three finder patterns.

    Args:
        shape (EyeShape): Square or circle eyes
        color (Color): Color of the outer ring and center dot
        radius (Optional[float]): Corner radius for rounded square eyes.
            Ignored for circle eyes.
    """

    shape: EyeShape = EyeShape.SQUARE
    color: Color = BLACK
    radius: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "color", Color.parse(self.color))

    @property
    def corner_radius(self) -> Optional[float]:
        if self.shape is EyeShape.CIRCLE:
            return None
        return self.radius

    @property
    def form(self) -> EyeForm:
        if self.shape is EyeShape.CIRCLE:
            return EyeForm.CIRCLE
        if self.radius is None:
            return EyeForm.SQUARE
        return EyeForm.ROUNDED


@dataclass(frozen=True)
class DataModuleStyle:
    """Styling of the data modules."""

    shape: DataModuleShape = DataModuleShape.SQUARE
    color: Color = BLACK

    def __post_init__(self):
        object.__setattr__(self, "color", Color.parse(self.color))


@dataclass(frozen=True)
class EmbeddedImageStyle:
    """
    Styling of the image drawn over the center of the code.

    Args:
        size (Optional[Size]): Requested size. A size with one zero side keeps
            the aspect ratio of the image and uses the other side.
        color (Optional[Color]): Tint applied over the image (source-atop)
    """

    size: Optional[Size] = None
    color: Optional[Color] = None

    def __post_init__(self):
        if self.size is not None:
            object.__setattr__(self, "size", Size(*self.size))
        if self.color is not None:
            object.__setattr__(self, "color", Color.parse(self.color))


@dataclass(frozen=True)
class StyleConfig:
    """All styling inputs of one render. Never mutated by the painter."""

    eye_style: EyeStyle = field(default_factory=EyeStyle)
    data_module_style: DataModuleStyle = field(default_factory=DataModuleStyle)
    gapless: bool = False
    embedded_image_style: Optional[EmbeddedImageStyle] = None
    empty_color: Optional[Color] = None

    def __post_init__(self):
        if self.empty_color is not None:
            object.__setattr__(self, "empty_color", Color.parse(self.empty_color))
