# refimage/pattern/renderers.py
from __future__ import annotations

from typing import Iterator

from refimage.pattern.descriptor import DEFAULT_LAYOUT, PatternLayout, Quadrant, PatternDescriptor
from refimage.pixels.accessor import PixelAccessor
from refimage.pixels.encoding import MAX_PACKED_VALUE, PixelEncoding, packed_to_vector4
from refimage.pixels.palette import named_color, named_vector4


def _descriptor(pixels: PixelAccessor) -> PatternDescriptor:
    return PatternDescriptor(pixels.width, pixels.height)


def render_checkerboard(
    pixels: PixelAccessor,
    encoding: PixelEncoding,
    layout: PatternLayout = DEFAULT_LAYOUT,
) -> None:
    """
    Top-left quadrant: black/white checker board.

    Color toggles every `stride` pixels along both axes. The index is restored
    at the start of each row, so (x // stride + y // stride) % 2 picks the color
    (0 -> black).
    """
    q = _descriptor(pixels).quadrant("top_left")
    stride = layout.checker_stride(pixels.width)
    colors = (named_color("black", encoding), named_color("white", encoding))

    for y in range(q.top, q.bottom):
        row_parity = (y // stride) % 2
        for x in range(q.left, q.right):
            pixels[x, y] = colors[((x // stride) + row_parity) % 2]


def render_vertical_bars(
    pixels: PixelAccessor,
    encoding: PixelEncoding,
    layout: PatternLayout = DEFAULT_LAYOUT,
) -> None:
    """
    Top-right quadrant: alternating hot-pink / blue vertical bars.

    The index starts on hot pink and advances at every column with
    x % stride == 0, so a quadrant whose left edge sits on a stride boundary
    opens with blue. Every row repeats the same sequence.
    """
    q = _descriptor(pixels).quadrant("top_right")
    stride = layout.bars_stride(pixels.width)
    colors = (named_color("hotpink", encoding), named_color("blue", encoding))

    row = []
    p = 0
    for x in range(q.left, q.right):
        if x % stride == 0:
            p ^= 1
        row.append(colors[p])

    for y in range(q.top, q.bottom):
        for x, c in zip(range(q.left, q.right), row):
            pixels[x, y] = c


def band_ranges(q: Quadrant, band_height: int, image_height: int) -> tuple[range, range, range]:
    """
    Row ranges for the red, green and blue bands of the gradient quadrant.

    Red and green are `band_height` tall (clipped to the image); blue takes
    whatever is left down to the quadrant bottom.
    """
    red_end = min(q.top + band_height, image_height)
    green_start = q.top + band_height
    green_end = min(green_start + band_height, image_height)
    blue_start = green_start + band_height
    return (
        range(q.top, red_end),
        range(green_start, green_end),
        range(blue_start, q.bottom),
    )


def render_gradient_bands(
    pixels: PixelAccessor,
    encoding: PixelEncoding,
    layout: PatternLayout = DEFAULT_LAYOUT,
) -> None:
    """
    Bottom-left quadrant: red, green, blue horizontal bands, each with an alpha
    ramp from transparent at the left edge towards opaque at the right edge.
    """
    q = _descriptor(pixels).quadrant("bottom_left")
    if q.is_empty:
        return

    band_height = layout.band_height(pixels.height)
    bands = band_ranges(q, band_height, pixels.height)
    hues = [named_vector4(n) for n in ("red", "green", "blue")]

    for x in range(q.left, q.right):
        alpha = x / q.right
        for (r, g, b, _a), rows in zip(hues, bands):
            c = encoding.pack_from_vector4((r, g, b, alpha))
            for y in rows:
                pixels[x, y] = c


def rainbow_step(pixel_count: int) -> int:
    if pixel_count <= 0:
        return 0
    return MAX_PACKED_VALUE // pixel_count


def rainbow_packed_values(pixel_count: int) -> Iterator[int]:
    """
    Accumulated packed RGBA32 values for a sweep of `pixel_count` pixels.

    The accumulator starts at 0 and is incremented by the step BEFORE each
    pixel, wrapping as an unsigned 32-bit integer.
    """
    step = rainbow_step(pixel_count)
    acc = 0
    for _ in range(pixel_count):
        acc = (acc + step) & MAX_PACKED_VALUE
        yield acc


def render_rainbow(
    pixels: PixelAccessor,
    encoding: PixelEncoding,
    layout: PatternLayout = DEFAULT_LAYOUT,
) -> int:
    """
    Bottom-right quadrant: sweep the packed RGBA32 space, column-major.

    Returns the final accumulator value (0 for an empty quadrant).
    """
    q = _descriptor(pixels).quadrant("bottom_right")
    if q.is_empty:
        return 0

    values = rainbow_packed_values(q.width * q.height)
    acc = 0
    for x in range(q.left, q.right):
        for y in range(q.top, q.bottom):
            acc = next(values)
            pixels[x, y] = encoding.pack_from_vector4(packed_to_vector4(acc))
    return acc
