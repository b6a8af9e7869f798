"""
Utility functions for color representation and RGB distance math
"""

from numbers import Real
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import ImageColor


class Color(NamedTuple):
    """Normalized RGB color, each channel in 0-1"""
    red: float
    green: float
    blue: float

    @property
    def brightness(self) -> float:
        """Brightest channel (HSV value)"""
        return max(self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        r, g, b = self.to_rgb8()
        return f"#{r:02x}{g:02x}{b:02x}"

    def to_rgb8(self) -> Tuple[int, int, int]:
        """Convert to 0-255 integer channels"""
        return tuple(int(round(MathUtils.clamp(c, 0.0, 1.0) * 255)) for c in self)


WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)

ColorLike = Union[Color, Sequence[float], str]


class ColorUtils:
    """Color parsing and comparison utilities"""

    @staticmethod
    def distance(c1: Sequence[float], c2: Sequence[float]) -> float:
        """Euclidean distance between two normalized RGB colors"""
        dr = c1[0] - c2[0]
        dg = c1[1] - c2[1]
        db = c1[2] - c2[2]
        return float(np.sqrt(dr * dr + dg * dg + db * db))

    @staticmethod
    def brightness(r: float, g: float, b: float) -> float:
        """Brightness as the maximum channel (0-1)"""
        return max(r, g, b)

    @staticmethod
    def from_rgb8(r: int, g: int, b: int) -> Color:
        """Create a normalized color from 0-255 channels"""
        return Color(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def parse(cls, value: ColorLike) -> Optional[Color]:
        """
        Turn a user supplied color into a normalized Color.

        Accepts Color instances, sequences of 3 or 4 numbers in 0-1
        (alpha is dropped), and any string Pillow understands
        ('#ff8800', 'white', 'rgb(10, 20, 30)').

        Returns:
            The parsed Color, or None if no RGB components can be extracted
        """
        if isinstance(value, Color):
            return value

        if isinstance(value, str):
            try:
                rgb = ImageColor.getrgb(value)
            except ValueError:
                return None
            return cls.from_rgb8(*rgb[:3])

        try:
            components = list(value)
        except TypeError:
            return None

        if len(components) not in (3, 4):
            return None
        components = components[:3]

        for c in components:
            if isinstance(c, bool) or not isinstance(c, (Real, np.number)):
                return None
            if not 0.0 <= float(c) <= 1.0:
                return None

        return Color(*(float(c) for c in components))

    @staticmethod
    def as_color_list(colors: Union[ColorLike, Iterable[ColorLike], None]) -> List[ColorLike]:
        """
        Normalize a single color or a collection of colors to a list.

        A string, a Color, or a flat sequence of numbers is one color,
        not a collection of channels.
        """
        if colors is None:
            return []
        if isinstance(colors, (str, Color)):
            return [colors]

        items = list(colors)
        if items and all(isinstance(c, (Real, np.number)) for c in items):
            return [tuple(items)]
        return items


class MathUtils:
    """Small numeric helpers"""

    @staticmethod
    def clamp(value: float, min_val: float, max_val: float) -> float:
        """Clamp value between min and max"""
        return max(min_val, min(max_val, value))
