# refimage/pixels/palette.py
from __future__ import annotations

from refimage.pixels.encoding import PixelEncoding, Vector4, get_encoding

# CSS named colors, fully opaque.
_NAMED_RGBA: dict[str, tuple[int, int, int, int]] = {
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "hotpink": (255, 105, 180, 255),
    "blue": (0, 0, 255, 255),
    "red": (255, 0, 0, 255),
    "green": (0, 128, 0, 255),
}


def _normalize(name: str) -> str:
    return name.replace("-", "").replace("_", "").replace(" ", "").lower()


def named_vector4(name: str) -> Vector4:
    try:
        r, g, b, a = _NAMED_RGBA[_normalize(name)]
    except KeyError:
        raise KeyError(f"Unknown named color: {name!r}") from None
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def named_color(name: str, encoding: str | PixelEncoding | None = None):
    """Native pixel value for `name` in the given encoding."""
    return get_encoding(encoding).pack_from_vector4(named_vector4(name))


def palette_names() -> list[str]:
    return list(_NAMED_RGBA)
