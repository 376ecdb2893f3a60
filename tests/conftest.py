import pytest

from refimage.pattern.cache import PatternCache
from refimage.pattern.pytest_plugin import make_test_pattern, pattern_cache  # noqa: F401

ENCODING_NAMES = ["rgba32", "rgb24", "la16", "gray8"]


@pytest.fixture
def fresh_cache():
    """A cache nobody else has touched (the plugin's pattern_cache is session-wide)."""
    return PatternCache()


@pytest.fixture(autouse=True)
def _no_encoding_override(monkeypatch):
    monkeypatch.delenv("REFIMAGE_ENCODING", raising=False)
