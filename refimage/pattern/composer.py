# refimage/pattern/composer.py
from __future__ import annotations

from PIL import Image

from refimage.pattern.descriptor import DEFAULT_LAYOUT, PatternDescriptor, PatternLayout
from refimage.pattern.renderers import (
    render_checkerboard,
    render_gradient_bands,
    render_rainbow,
    render_vertical_bars,
)
from refimage.pixels.accessor import lock_pixels, new_image
from refimage.pixels.encoding import PixelEncoding, get_encoding

RENDERERS = (
    render_checkerboard,     # top left
    render_vertical_bars,    # top right
    render_gradient_bands,   # bottom left
    render_rainbow,          # bottom right
)


def draw_test_pattern(
    image: Image.Image,
    encoding: str | PixelEncoding | None = None,
    layout: PatternLayout = DEFAULT_LAYOUT,
) -> Image.Image:
    """
    Draw the four quadrant patterns into `image` in place.

    The quadrants are disjoint, so renderer order does not matter.
    """
    enc = get_encoding(encoding)
    if image.mode != enc.pil_mode:
        raise ValueError(f"Image mode {image.mode} does not match encoding {enc.name} ({enc.pil_mode})")

    with lock_pixels(image) as pixels:
        for render in RENDERERS:
            render(pixels, enc, layout)
    return image


def compose_test_pattern(
    descriptor: PatternDescriptor,
    encoding: str | PixelEncoding | None = None,
    layout: PatternLayout = DEFAULT_LAYOUT,
) -> Image.Image:
    enc = get_encoding(encoding)
    image = new_image(descriptor.width, descriptor.height, enc)
    return draw_test_pattern(image, enc, layout)
