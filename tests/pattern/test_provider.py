from __future__ import annotations

from refimage.pattern.cache import PatternCache
from refimage.pattern.provider import BlankProvider, ImageProvider, TestPatternProvider


def _describe(provider: ImageProvider) -> str:
    return provider.description


def test_blank_provider() -> None:
    p = BlankProvider(5, 3, "rgb24")
    img = p.get_image()
    assert _describe(p) == "Blank5x3"
    assert img.size == (5, 3)
    assert img.getextrema() == ((0, 0), (0, 0), (0, 0))


def test_test_pattern_provider_uses_cache(fresh_cache: PatternCache) -> None:
    p = TestPatternProvider(120, 60, cache=fresh_cache)
    assert _describe(p) == "TestPattern120x60"
    assert repr(p) == "TestPatternProvider(TestPattern120x60, rgba32)"

    a = p.get_image()
    b = TestPatternProvider(120, 60, "rgba32", cache=fresh_cache).get_image()
    assert len(fresh_cache) == 1
    assert a.tobytes() == b.tobytes()
    assert a is not b
