# refimage/pixels/accessor.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import numpy as np
from PIL import Image

from refimage.pixels.encoding import PixelEncoding, get_encoding


class AccessorReleasedError(RuntimeError):
    """Pixel access attempted after the write scope was released."""


class PixelAccessor:
    """
    Bounded read/write view over a Pillow image.

    Only valid inside `lock_pixels(...)`; every access after the scope exits raises.
    """

    def __init__(self, image: Image.Image) -> None:
        self.width, self.height = image.size
        # Pillow's PixelAccess is skipped for zero-area images; there is nothing to touch.
        self._px = image.load() if self.width and self.height else None
        self._released = False

    def _check(self, x: int, y: int) -> None:
        if self._released:
            raise AccessorReleasedError("pixel accessor used outside its lock scope")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) out of bounds for {self.width}×{self.height}")

    def get(self, x: int, y: int):
        self._check(x, y)
        return self._px[x, y]

    def set(self, x: int, y: int, pixel) -> None:
        self._check(x, y)
        self._px[x, y] = pixel

    def __getitem__(self, xy: tuple[int, int]):
        return self.get(*xy)

    def __setitem__(self, xy: tuple[int, int], pixel) -> None:
        self.set(xy[0], xy[1], pixel)

    def release(self) -> None:
        self._released = True
        self._px = None

    @property
    def released(self) -> bool:
        return self._released


@contextmanager
def lock_pixels(image: Image.Image) -> Iterator[PixelAccessor]:
    accessor = PixelAccessor(image)
    try:
        yield accessor
    finally:
        accessor.release()


def new_image(width: int, height: int, encoding: str | PixelEncoding | None = None) -> Image.Image:
    enc = get_encoding(encoding)
    return Image.new(enc.pil_mode, (width, height))


def to_vector_array(image: Image.Image) -> np.ndarray:
    """
    Unpack the whole image to normalized RGBA floats, shape (H, W, 4).

    Goes through Pillow's RGBA conversion, so it agrees with `to_vector4` for
    every registered encoding.
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    w, h = rgba.size
    if w == 0 or h == 0:
        return np.zeros((h, w, 4), dtype=np.float32)
    return np.asarray(rgba, dtype=np.float32) / 255.0


def copy_image(image: Image.Image) -> Image.Image:
    """Independent deep copy; zero-area images get a fresh blank of the same mode/size."""
    w, h = image.size
    if w == 0 or h == 0:
        return Image.new(image.mode, (w, h))
    return image.copy()
