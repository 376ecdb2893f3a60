# refimage/pattern/descriptor.py
from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Literal, Tuple

QuadrantName = Literal["top_left", "top_right", "bottom_left", "bottom_right"]

# Stride / band divisors are applied to the FULL image dimensions, not the quadrant.
CHECKER_DIVISOR = 6
BARS_DIVISOR = 12
BAND_DIVISOR = 6


class InvalidDimensionError(ValueError):
    """Width/height is negative or not an integer."""


@dataclass(frozen=True)
class Quadrant:
    name: QuadrantName
    left: int
    top: int
    right: int   # exclusive
    bottom: int  # exclusive

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Pillow crop box (left, top, right, bottom)."""
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class PatternLayout:
    checker_divisor: int = CHECKER_DIVISOR
    bars_divisor: int = BARS_DIVISOR
    band_divisor: int = BAND_DIVISOR

    def checker_stride(self, image_width: int) -> int:
        return max(1, image_width // self.checker_divisor)

    def bars_stride(self, image_width: int) -> int:
        return max(1, image_width // self.bars_divisor)

    def band_height(self, image_height: int) -> int:
        return math.ceil(image_height / self.band_divisor)


DEFAULT_LAYOUT = PatternLayout()


def _require_dim(name: str, value: int) -> int:
    if isinstance(value, bool):
        raise InvalidDimensionError(f"{name} must be an int, got bool")
    try:
        value = operator.index(value)
    except TypeError:
        raise InvalidDimensionError(f"{name} must be an int, got {type(value).__name__}") from None
    if value < 0:
        raise InvalidDimensionError(f"{name} must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class PatternDescriptor:
    """
    Identifies one generated test pattern.

    Zero width/height is allowed (zero-area image); negatives are rejected here,
    before anything is allocated.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        # numpy integers are accepted and stored as plain ints
        object.__setattr__(self, "width", _require_dim("width", self.width))
        object.__setattr__(self, "height", _require_dim("height", self.height))

    @property
    def key(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def description(self) -> str:
        return f"TestPattern{self.width}x{self.height}"

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def quadrant(self, name: QuadrantName) -> Quadrant:
        """
        Integer halves split the image; odd sizes give the right/bottom
        quadrants the extra column/row.
        """
        w, h = self.width, self.height
        mx, my = w // 2, h // 2
        if name == "top_left":
            return Quadrant(name, 0, 0, mx, my)
        if name == "top_right":
            return Quadrant(name, mx, 0, w, my)
        if name == "bottom_left":
            return Quadrant(name, 0, my, mx, h)
        if name == "bottom_right":
            return Quadrant(name, mx, my, w, h)
        raise ValueError(f"Unknown quadrant: {name}")

    def quadrants(self) -> Tuple[Quadrant, Quadrant, Quadrant, Quadrant]:
        return (
            self.quadrant("top_left"),
            self.quadrant("top_right"),
            self.quadrant("bottom_left"),
            self.quadrant("bottom_right"),
        )
