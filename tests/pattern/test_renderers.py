from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from refimage.pattern.composer import compose_test_pattern, draw_test_pattern
from refimage.pattern.descriptor import DEFAULT_LAYOUT, PatternDescriptor
from refimage.pattern.renderers import (
    band_ranges,
    rainbow_packed_values,
    rainbow_step,
    render_gradient_bands,
    render_rainbow,
)
from refimage.pixels.accessor import lock_pixels, new_image
from refimage.pixels.encoding import MAX_PACKED_VALUE, get_encoding, unpack_rgba32

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
HOTPINK = (255, 105, 180, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture(scope="module")
def scenario() -> np.ndarray:
    img = compose_test_pattern(PatternDescriptor(120, 60), "rgba32")
    assert img.size == (120, 60)
    return np.asarray(img)  # (H, W, 4)


def _px(arr: np.ndarray, x: int, y: int) -> tuple[int, ...]:
    return tuple(int(v) for v in arr[y, x])


def test_checkerboard_parity(scenario: np.ndarray) -> None:
    stride = 20
    for y in range(0, 30):
        for x in range(0, 60):
            expected = BLACK if ((x // stride) + (y // stride)) % 2 == 0 else WHITE
            assert _px(scenario, x, y) == expected


def test_checkerboard_corners(scenario: np.ndarray) -> None:
    assert _px(scenario, 0, 0) == BLACK
    assert _px(scenario, 20, 0) == WHITE
    assert _px(scenario, 0, 20) == WHITE
    assert _px(scenario, 20, 20) == BLACK


def test_vertical_bars_independent_of_y(scenario: np.ndarray) -> None:
    region = scenario[0:30, 60:120]
    assert (region == region[0:1]).all()


def test_vertical_bars_stride(scenario: np.ndarray) -> None:
    for x in range(60, 120):
        expected = BLUE if ((x - 60) // 10) % 2 == 0 else HOTPINK
        assert _px(scenario, x, 0) == expected


def test_gradient_band_hues(scenario: np.ndarray) -> None:
    region = scenario[30:60, 0:60]
    rgb = region[..., :3]
    assert (rgb[0:10] == [255, 0, 0]).all()
    assert (rgb[10:20] == [0, 128, 0]).all()
    assert (rgb[20:30] == [0, 0, 255]).all()


# odd number of colour toggles per row in the top-right quadrant
@pytest.mark.parametrize("w,h", [(13, 11), (25, 6), (121, 61), (37, 9)])
def test_vertical_bars_independent_of_y_odd_toggles(w: int, h: int) -> None:
    q = PatternDescriptor(w, h).quadrant("top_right")
    stride = DEFAULT_LAYOUT.bars_stride(w)
    toggles = sum(1 for x in range(q.left, q.right) if x % stride == 0)
    assert toggles % 2 == 1

    arr = np.asarray(compose_test_pattern(PatternDescriptor(w, h), "rgba32"))
    region = arr[q.top:q.bottom, q.left:q.right]
    assert q.height >= 2
    assert (region == region[0:1]).all()


@pytest.mark.parametrize(
    "h,red,green,blue",
    [
        (60, range(30, 40), range(40, 50), range(50, 60)),
        (61, range(30, 41), range(41, 52), range(52, 61)),
        (7, range(3, 5), range(5, 7), range(7, 7)),
        (1, range(0, 1), range(1, 1), range(2, 1)),
    ],
)
def test_band_ranges_clip_and_remainder(h: int, red: range, green: range, blue: range) -> None:
    q = PatternDescriptor(20, h).quadrant("bottom_left")
    assert band_ranges(q, DEFAULT_LAYOUT.band_height(h), h) == (red, green, blue)


@pytest.mark.parametrize("w,h", [(20, 61), (10, 7), (4, 1), (120, 60)])
def test_gradient_hue_every_row(w: int, h: int) -> None:
    d = PatternDescriptor(w, h)
    q = d.quadrant("bottom_left")
    rgb = np.asarray(compose_test_pattern(d, "rgba32"))[..., :3]
    red, green, blue = band_ranges(q, DEFAULT_LAYOUT.band_height(h), h)

    expected = {}
    for rows, hue in ((red, (255, 0, 0)), (green, (0, 128, 0)), (blue, (0, 0, 255))):
        for y in rows:
            expected[y] = hue
    # every row of the quadrant belongs to exactly one band
    assert sorted(expected) == list(range(q.top, q.bottom))

    for y, hue in expected.items():
        assert (rgb[y, q.left:q.right] == hue).all(), f"row {y}"


def test_gradient_alpha_ramp(scenario: np.ndarray) -> None:
    alpha = scenario[30:60, 0:60, 3].astype(np.int32)
    # same ramp in every row / band
    assert (alpha == alpha[0:1]).all()
    expected = np.array([x / 60 * 255 for x in range(60)])
    assert np.abs(alpha[0] - expected).max() <= 1
    assert alpha[0, 0] == 0
    assert (np.diff(alpha[0]) >= 0).all()


def test_rainbow_column_major_sweep(scenario: np.ndarray) -> None:
    region = scenario[30:60, 60:120]
    values = list(rainbow_packed_values(60 * 30))
    i = 0
    for x in range(60):
        for y in range(30):
            assert tuple(region[y, x]) == unpack_rgba32(values[i])
            i += 1


def test_rainbow_step_and_total() -> None:
    count = 1800
    step = rainbow_step(count)
    assert step == MAX_PACKED_VALUE // 1800 == 2386092
    values = list(rainbow_packed_values(count))
    assert values[0] == step
    assert values[-1] == (count * step) % (MAX_PACKED_VALUE + 1)


def test_rainbow_final_accumulator() -> None:
    img = new_image(120, 60, "rgba32")
    with lock_pixels(img) as px:
        final = render_rainbow(px, get_encoding("rgba32"))
    assert final == 1800 * 2386092


def test_rainbow_is_deterministic() -> None:
    a = compose_test_pattern(PatternDescriptor(37, 23), "rgba32")
    b = compose_test_pattern(PatternDescriptor(37, 23), "rgba32")
    assert a.tobytes() == b.tobytes()


def test_empty_quadrants_are_noops() -> None:
    enc = get_encoding("rgba32")
    # 1x2: bottom-left is zero columns wide
    img = new_image(1, 2, "rgba32")
    with lock_pixels(img) as px:
        render_gradient_bands(px, enc)
    assert img.getpixel((0, 1)) == (0, 0, 0, 0)

    with lock_pixels(new_image(0, 3, "rgba32")) as px:
        assert render_rainbow(px, enc) == 0


def test_single_pixel_rainbow_uses_full_step() -> None:
    img = new_image(1, 1, "rgba32")
    with lock_pixels(img) as px:
        assert render_rainbow(px, get_encoding("rgba32")) == MAX_PACKED_VALUE
    assert img.getpixel((0, 0)) == (255, 255, 255, 255)


@pytest.mark.parametrize("enc_name", ["rgba32", "rgb24", "la16", "gray8"])
def test_compose_every_encoding(enc_name: str) -> None:
    enc = get_encoding(enc_name)
    img = compose_test_pattern(PatternDescriptor(24, 12), enc)
    assert img.mode == enc.pil_mode
    assert img.size == (24, 12)
    # white checker cell at (4, 0) in every encoding
    assert enc.to_vector4(img.getpixel((4, 0)))[:3] == (1.0, 1.0, 1.0)


@pytest.mark.parametrize("w,h", [(0, 0), (0, 9), (9, 0), (1, 1), (3, 2)])
def test_degenerate_sizes(w: int, h: int) -> None:
    img = compose_test_pattern(PatternDescriptor(w, h))
    assert img.size == (w, h)


def test_draw_rejects_mode_mismatch() -> None:
    with pytest.raises(ValueError):
        draw_test_pattern(Image.new("RGB", (4, 4)), "rgba32")
