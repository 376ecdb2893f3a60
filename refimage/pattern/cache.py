# refimage/pattern/cache.py
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterator, Tuple

from PIL import Image

from refimage.pattern.composer import compose_test_pattern
from refimage.pattern.descriptor import DEFAULT_LAYOUT, PatternDescriptor, PatternLayout
from refimage.pixels.accessor import copy_image
from refimage.pixels.encoding import PixelEncoding, get_encoding

logger = logging.getLogger(__name__)

# (width, height, encoding name)
CacheKey = Tuple[int, int, str]

Builder = Callable[[PatternDescriptor, PixelEncoding, PatternLayout], Image.Image]


class _Cell:
    """
    One cache slot. `image` is None until a build has fully succeeded.

    A failed build marks the cell discarded and removes it from the map.
    """

    __slots__ = ("lock", "image", "discarded")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.image: Image.Image | None = None
        self.discarded = False


class PatternCache:
    """
    Memoizes composed test patterns by (width, height, encoding).

    - at most one successful build per key; concurrent callers for the same key
      wait on that key's lock only, other sizes build in parallel
    - entries are append-only and never handed out: every caller gets a copy
    - a failed build publishes nothing and leaves no slot behind; the next request retries
    """

    def __init__(
        self,
        *,
        layout: PatternLayout = DEFAULT_LAYOUT,
        builder: Builder = compose_test_pattern,
    ) -> None:
        self._layout = layout
        self._builder = builder
        self._lock = threading.Lock()
        self._cells: dict[CacheKey, _Cell] = {}

    def get_or_create(
        self,
        width: int,
        height: int,
        encoding: str | PixelEncoding | None = None,
    ) -> Image.Image:
        descriptor = PatternDescriptor(width, height)
        enc = get_encoding(encoding)
        return copy_image(self._published(descriptor, enc))

    def _published(self, descriptor: PatternDescriptor, enc: PixelEncoding) -> Image.Image:
        key: CacheKey = (descriptor.width, descriptor.height, enc.name)

        while True:
            # short global lock: only to find/create the key's cell
            with self._lock:
                cell = self._cells.get(key)
                if cell is None:
                    cell = self._cells[key] = _Cell()

            with cell.lock:
                if cell.image is not None:
                    return cell.image
                if cell.discarded:
                    # an earlier build in this cell failed; wait on a fresh one
                    continue

                logger.debug("building %s (%s)", descriptor.description, enc.name)
                t0 = time.perf_counter()
                try:
                    image = self._builder(descriptor, enc, self._layout)
                except BaseException:
                    cell.discarded = True
                    with self._lock:
                        if self._cells.get(key) is cell:
                            del self._cells[key]
                    raise
                cell.image = image
                logger.debug(
                    "built %s (%s) in %.3fs",
                    descriptor.description,
                    enc.name,
                    time.perf_counter() - t0,
                )
                return image

    def keys(self) -> Iterator[CacheKey]:
        with self._lock:
            cells = list(self._cells.items())
        return iter([k for k, c in cells if c.image is not None])

    def __contains__(self, key: object) -> bool:
        with self._lock:
            cell = self._cells.get(key)  # type: ignore[arg-type]
        return cell is not None and cell.image is not None

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())
