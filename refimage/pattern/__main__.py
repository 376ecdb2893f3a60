# refimage/pattern/__main__.py
from __future__ import annotations

import argparse
import hashlib

from refimage.pattern.cache import PatternCache
from refimage.pattern.descriptor import DEFAULT_LAYOUT, InvalidDimensionError, PatternDescriptor
from refimage.pattern.renderers import rainbow_step
from refimage.pixels.encoding import ENCODINGS, UnknownEncodingError, get_encoding


def main() -> None:
    p = argparse.ArgumentParser(
        prog="python -m refimage.pattern",
        description="Build a four-quadrant test pattern in memory and describe it.",
    )
    p.add_argument("width", type=int)
    p.add_argument("height", type=int)
    p.add_argument(
        "--encoding",
        type=str,
        default=None,
        choices=sorted(ENCODINGS),
        help="Pixel encoding (default: $REFIMAGE_ENCODING or rgba32)",
    )
    args = p.parse_args()

    try:
        descriptor = PatternDescriptor(args.width, args.height)
        enc = get_encoding(args.encoding)
    except (InvalidDimensionError, UnknownEncodingError) as e:
        raise SystemExit(f"error: {e}")

    image = PatternCache().get_or_create(descriptor.width, descriptor.height, enc)
    data = image.tobytes() if descriptor.width and descriptor.height else b""

    print(f"{descriptor.description} ({enc.name}, mode {image.mode})")
    for q in descriptor.quadrants():
        print(f"  {q.name:<12} box={q.box} size={q.width}×{q.height}")
    br = descriptor.quadrant("bottom_right")
    print(f"checker stride: {DEFAULT_LAYOUT.checker_stride(descriptor.width)}")
    print(f"bars stride:    {DEFAULT_LAYOUT.bars_stride(descriptor.width)}")
    print(f"band height:    {DEFAULT_LAYOUT.band_height(descriptor.height)}")
    print(f"rainbow step:   {rainbow_step(br.width * br.height)}")
    print(f"sha256:         {hashlib.sha256(data).hexdigest()}")


if __name__ == "__main__":
    main()
