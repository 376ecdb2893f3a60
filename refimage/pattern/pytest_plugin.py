# refimage/pattern/pytest_plugin.py
"""
Fixtures for test suites that want reference images.

Needs pytest, which is only installed with the `test` extra
(`pip install refimage[test]`); nothing else in refimage imports this module.

Enable with, in a conftest.py:

    pytest_plugins = ["refimage.pattern.pytest_plugin"]
"""
from __future__ import annotations

from typing import Callable

import pytest
from PIL import Image

from refimage.pattern.cache import PatternCache
from refimage.pixels.encoding import PixelEncoding


@pytest.fixture(scope="session")
def pattern_cache() -> PatternCache:
    return PatternCache()


@pytest.fixture
def make_test_pattern(pattern_cache: PatternCache) -> Callable[..., Image.Image]:
    def _make(width: int, height: int, encoding: str | PixelEncoding | None = None) -> Image.Image:
        return pattern_cache.get_or_create(width, height, encoding)

    return _make
