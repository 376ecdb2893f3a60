# refimage/pattern/provider.py
from __future__ import annotations

from typing import Protocol

from PIL import Image

from refimage.pattern.cache import PatternCache
from refimage.pattern.descriptor import PatternDescriptor
from refimage.pixels.accessor import new_image
from refimage.pixels.encoding import PixelEncoding, get_encoding


class ImageProvider(Protocol):
    """
    Something a test can ask for an image:

    - description: stable, human-readable name (used in test ids)
    - get_image(): a fresh image the caller owns
    """

    @property
    def description(self) -> str:
        ...

    def get_image(self) -> Image.Image:
        ...


class BlankProvider:
    def __init__(
        self,
        width: int = 100,
        height: int = 100,
        encoding: str | PixelEncoding | None = None,
    ) -> None:
        self.descriptor = PatternDescriptor(width, height)
        self.encoding = get_encoding(encoding)

    @property
    def width(self) -> int:
        return self.descriptor.width

    @property
    def height(self) -> int:
        return self.descriptor.height

    @property
    def description(self) -> str:
        return f"Blank{self.width}x{self.height}"

    def get_image(self) -> Image.Image:
        return new_image(self.width, self.height, self.encoding)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description}, {self.encoding.name})"


class TestPatternProvider:
    """Four-quadrant test pattern, served from a shared PatternCache."""

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        width: int = 100,
        height: int = 100,
        encoding: str | PixelEncoding | None = None,
        *,
        cache: PatternCache,
    ) -> None:
        self.descriptor = PatternDescriptor(width, height)
        self.encoding = get_encoding(encoding)
        self.cache = cache

    @property
    def description(self) -> str:
        return self.descriptor.description

    def get_image(self) -> Image.Image:
        d = self.descriptor
        return self.cache.get_or_create(d.width, d.height, self.encoding)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description}, {self.encoding.name})"
