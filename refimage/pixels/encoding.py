# refimage/pixels/encoding.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol, Tuple

Vector4 = Tuple[float, float, float, float]

# Packed values are 32-bit unsigned RGBA: red in the low byte, alpha in the high byte.
MAX_PACKED_VALUE = 0xFFFFFFFF

DEFAULT_ENCODING = "rgba32"
ENCODING_ENV_VAR = "REFIMAGE_ENCODING"


class UnknownEncodingError(ValueError):
    """Requested pixel encoding name is not registered."""


def pack_rgba32(r: int, g: int, b: int, a: int) -> int:
    return (r & 0xFF) | (g & 0xFF) << 8 | (b & 0xFF) << 16 | (a & 0xFF) << 24


def unpack_rgba32(packed: int) -> tuple[int, int, int, int]:
    packed &= MAX_PACKED_VALUE
    return (
        packed & 0xFF,
        (packed >> 8) & 0xFF,
        (packed >> 16) & 0xFF,
        (packed >> 24) & 0xFF,
    )


def packed_to_vector4(packed: int) -> Vector4:
    r, g, b, a = unpack_rgba32(packed)
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def _to_byte(v: float) -> int:
    # clamp then round half-up
    if v <= 0.0:
        return 0
    if v >= 1.0:
        return 255
    return int(v * 255.0 + 0.5)


def _luma(r: float, g: float, b: float) -> float:
    return 0.299 * r + 0.587 * g + 0.114 * b


class PixelEncoding(Protocol):
    """
    Converts between a normalized RGBA vector and one Pillow mode's pixel values.

    pack_from_vector4 -> the value Pillow's PixelAccess accepts for `pil_mode`
    to_vector4        -> back to (r, g, b, a), each in [0, 1]
    """

    name: str
    pil_mode: str

    def pack_from_vector4(self, rgba: Vector4): ...

    def to_vector4(self, pixel) -> Vector4: ...


@dataclass(frozen=True)
class Rgba32:
    name: str = "rgba32"
    pil_mode: str = "RGBA"

    def pack_from_vector4(self, rgba: Vector4) -> tuple[int, int, int, int]:
        r, g, b, a = rgba
        return (_to_byte(r), _to_byte(g), _to_byte(b), _to_byte(a))

    def to_vector4(self, pixel) -> Vector4:
        r, g, b, a = pixel
        return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


@dataclass(frozen=True)
class Rgb24:
    """Alpha is dropped on pack and reads back as fully opaque."""

    name: str = "rgb24"
    pil_mode: str = "RGB"

    def pack_from_vector4(self, rgba: Vector4) -> tuple[int, int, int]:
        r, g, b, _a = rgba
        return (_to_byte(r), _to_byte(g), _to_byte(b))

    def to_vector4(self, pixel) -> Vector4:
        r, g, b = pixel
        return (r / 255.0, g / 255.0, b / 255.0, 1.0)


@dataclass(frozen=True)
class La16:
    name: str = "la16"
    pil_mode: str = "LA"

    def pack_from_vector4(self, rgba: Vector4) -> tuple[int, int]:
        r, g, b, a = rgba
        return (_to_byte(_luma(r, g, b)), _to_byte(a))

    def to_vector4(self, pixel) -> Vector4:
        l, a = pixel
        v = l / 255.0
        return (v, v, v, a / 255.0)


@dataclass(frozen=True)
class Gray8:
    name: str = "gray8"
    pil_mode: str = "L"

    def pack_from_vector4(self, rgba: Vector4) -> int:
        r, g, b, _a = rgba
        return _to_byte(_luma(r, g, b))

    def to_vector4(self, pixel) -> Vector4:
        v = pixel / 255.0
        return (v, v, v, 1.0)


ENCODINGS: dict[str, PixelEncoding] = {
    e.name: e for e in (Rgba32(), Rgb24(), La16(), Gray8())
}


def get_encoding(name: str | PixelEncoding | None = None) -> PixelEncoding:
    """
    Resolve an encoding. None means the REFIMAGE_ENCODING env var, falling back
    to rgba32. Encoding objects pass through unchanged.
    """
    if name is None:
        name = os.environ.get(ENCODING_ENV_VAR) or DEFAULT_ENCODING
    if not isinstance(name, str):
        return name
    try:
        return ENCODINGS[name.lower()]
    except KeyError:
        raise UnknownEncodingError(
            f"Unknown encoding {name!r}; expected one of: {', '.join(sorted(ENCODINGS))}"
        ) from None
